"""Release types: which files a release PR updates.

A strategy is chosen once from the configured ``release_type`` and handed
to the orchestrator, which only ever calls :meth:`ReleaseStrategy.build_updates`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, ClassVar

from release_pr.exceptions import UnknownReleaseTypeError
from release_pr.updaters import (
    ChangelogUpdate,
    PackageJsonUpdate,
    PyprojectUpdate,
    SamplesPackageJsonUpdate,
    VersionFileUpdate,
)

if TYPE_CHECKING:
    from release_pr.config.models import ReleasePRConfig
    from release_pr.core.candidate import ReleaseCandidate
    from release_pr.updaters import Update


class ReleaseStrategy(ABC):
    """Per-ecosystem release behaviour."""

    name: ClassVar[str]

    def __init__(self, config: ReleasePRConfig) -> None:
        self.config = config

    def build_updates(self, candidate: ReleaseCandidate, changelog_entry: str) -> list[Update]:
        """Updates for the release PR, changelog first then manifests."""
        common = {
            "version": candidate.version,
            "changelog_entry": changelog_entry,
            "package_name": self.config.package_name,
        }
        updates: list[Update] = [ChangelogUpdate(path=self.config.changelog.path.as_posix(), **common)]
        updates.extend(self.manifest_updates(**common))
        return updates

    @abstractmethod
    def manifest_updates(self, **common: str) -> list[Update]:
        """Ecosystem specific manifest updates."""


class NodeStrategy(ReleaseStrategy):
    """A single (non mono-repo) npm package."""

    name = "node"

    def manifest_updates(self, **common: str) -> list[Update]:
        return [
            PackageJsonUpdate(path="package.json", **common),
            SamplesPackageJsonUpdate(path="samples/package.json", **common),
        ]


class PythonStrategy(ReleaseStrategy):
    """A Python project versioned in pyproject.toml."""

    name = "python"

    def manifest_updates(self, **common: str) -> list[Update]:
        updates: list[Update] = [PyprojectUpdate(path="pyproject.toml", **common)]
        updates.extend(
            VersionFileUpdate(path=version_file.as_posix(), **common)
            for version_file in self.config.version_files
        )
        return updates


STRATEGIES: dict[str, type[ReleaseStrategy]] = {
    NodeStrategy.name: NodeStrategy,
    PythonStrategy.name: PythonStrategy,
}


def get_strategy(config: ReleasePRConfig) -> ReleaseStrategy:
    """Instantiate the strategy for ``config.release_type``.

    Raises:
        UnknownReleaseTypeError: If no strategy is registered under that name
    """
    try:
        strategy_cls = STRATEGIES[config.release_type]
    except KeyError:
        raise UnknownReleaseTypeError(config.release_type, sorted(STRATEGIES)) from None
    return strategy_cls(config)
