"""Next-version selection for a release PR."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from release_pr.core.version import BumpType, Version
from release_pr.exceptions import InvalidVersionError, VersionComputationError

if TYPE_CHECKING:
    from release_pr.vcs.models import Tag

SEED_VERSION = "1.0.0"


@dataclass(frozen=True, slots=True)
class ReleaseCandidate:
    """The version proposed for the next release.

    Attributes:
        version: Version string without tag prefix
        previous_tag: Name of the tag the candidate follows, if any
    """

    version: str
    previous_tag: str | None = None


def coerce_release_candidate(
    latest_tag: Tag | None,
    bump: BumpType,
    release_as: str | None = None,
    *,
    seed_version: str = SEED_VERSION,
) -> ReleaseCandidate:
    """Pick the candidate version.

    An explicit ``release_as`` always wins and is used verbatim, even when
    it is lower than the previous release. Without a previous tag the seed
    version is used whatever the bump. Otherwise the previous version is
    incremented by ``bump``.

    Raises:
        VersionComputationError: If the previous version cannot be incremented
    """
    previous_tag = latest_tag.name if latest_tag else None

    if release_as:
        return ReleaseCandidate(version=release_as, previous_tag=previous_tag)

    if latest_tag is None:
        return ReleaseCandidate(version=seed_version, previous_tag=None)

    try:
        previous = Version.parse(latest_tag.version)
    except InvalidVersionError as e:
        raise VersionComputationError(latest_tag.version) from e

    return ReleaseCandidate(version=str(previous.bump(bump)), previous_tag=previous_tag)
