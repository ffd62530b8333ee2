"""Interface to the hosted source-control service."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from release_pr.updaters import Update
    from release_pr.vcs.models import Commit, PullRequest, Tag


class SourceControl(Protocol):
    """Remote operations the release PR orchestrator relies on.

    Implementations raise their transport errors unchanged; release-pr
    does not retry.
    """

    def find_merged_release_pr(self, labels: list[str]) -> PullRequest | None:
        """Most recent merged PR carrying all ``labels``, not yet released."""
        ...

    def latest_tag(self) -> Tag | None:
        """Highest semver release tag, or None if nothing was released yet."""
        ...

    def commits_since_sha(self, sha: str | None) -> list[Commit]:
        """Commits on the default branch after ``sha``, newest first.

        Every commit is returned when ``sha`` is None.
        """
        ...

    def open_pr(
        self,
        *,
        branch: str,
        version: str,
        sha: str,
        updates: list[Update],
        title: str,
        body: str,
        labels: list[str],
    ) -> int:
        """Branch from ``sha``, commit ``updates`` and open a PR; returns its number."""
        ...

    def add_labels(self, pr_number: int, labels: list[str]) -> None: ...

    def find_open_release_prs(self, labels: list[str]) -> list[PullRequest]: ...

    def close_pr(self, pr_number: int) -> None: ...
