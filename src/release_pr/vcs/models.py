"""Value objects exchanged with the source-control collaborator."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class Commit:
    """A commit message together with the sha it came from."""

    sha: str
    message: str

    @property
    def subject(self) -> str:
        """First line of the message."""
        return self.message.split("\n", 1)[0].strip()

    @property
    def short_sha(self) -> str:
        return self.sha[:7]


@dataclass(frozen=True, slots=True)
class Tag:
    """A release tag.

    Attributes:
        name: Tag name, e.g. ``v1.2.3``
        sha: Commit the tag points at
        version: Version text with the tag prefix removed
    """

    name: str
    sha: str
    version: str


@dataclass(frozen=True, slots=True)
class PullRequest:
    """The subset of pull request data release-pr relies on.

    Attributes:
        number: Pull request number
        sha: Merge commit sha for merged PRs, head sha otherwise
        title: PR title
        labels: Label names
        head_branch: Name of the branch the PR was opened from
    """

    number: int
    sha: str = ""
    title: str = ""
    labels: tuple[str, ...] = field(default_factory=tuple)
    head_branch: str = ""

    def has_labels(self, labels: list[str]) -> bool:
        """True if every label in ``labels`` is set on this PR."""
        return set(labels).issubset(self.labels)
