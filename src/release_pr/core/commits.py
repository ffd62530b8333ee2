"""Conventional commit classification and bump calculation.

Commit headers follow https://www.conventionalcommits.org:

    <type>[(<scope>)][!]: <description>

    [body]

    [BREAKING CHANGE: <note>]

Messages that do not follow the format are not an error; they are
classified as :class:`UnparseableCommit` and take no part in version
bumps or the changelog.
"""

from __future__ import annotations

import logging
import re
from collections import defaultdict
from dataclasses import dataclass
from typing import TYPE_CHECKING

from release_pr.core.version import BumpType

if TYPE_CHECKING:
    from collections.abc import Iterable

    from release_pr.config.models import CommitsConfig
    from release_pr.vcs.models import Commit

logger = logging.getLogger(__name__)

CONVENTIONAL_TYPES = (
    "feat",
    "fix",
    "docs",
    "style",
    "refactor",
    "perf",
    "test",
    "build",
    "ci",
    "chore",
    "revert",
)

DEFAULT_BREAKING_PATTERN = r"^BREAKING[ -]CHANGE"

_HEADER_RE = re.compile(
    r"^(?P<type>[A-Za-z]+)"
    r"(?:\((?P<scope>[^()\r\n]*)\))?"
    r"(?P<breaking>!)?"
    r":[ \t]*(?P<description>\S.*)$"
)


@dataclass(frozen=True, slots=True)
class ParsedCommit:
    """A commit whose message follows the conventional format.

    Attributes:
        sha: Source commit sha
        commit_type: One of CONVENTIONAL_TYPES
        scope: Optional scope from the parentheses
        description: Header text after the colon
        is_breaking: ``!`` marker or a BREAKING CHANGE footer is present
        breaking_note: Text of the BREAKING CHANGE footer, if any
    """

    sha: str
    commit_type: str
    scope: str | None
    description: str
    is_breaking: bool = False
    breaking_note: str | None = None

    @property
    def short_sha(self) -> str:
        return self.sha[:7]


@dataclass(frozen=True, slots=True)
class UnparseableCommit:
    """A commit that does not follow the conventional format."""

    sha: str
    message: str


def classify_commit(
    commit: Commit,
    breaking_pattern: str = DEFAULT_BREAKING_PATTERN,
) -> ParsedCommit | UnparseableCommit:
    """Classify a single commit message.

    Args:
        commit: Commit to classify
        breaking_pattern: Regex matched (multiline) against the whole message
            to detect a breaking change footer

    Returns:
        ParsedCommit for conventional messages, UnparseableCommit otherwise
    """
    header = commit.subject
    match = _HEADER_RE.match(header)
    if match is None:
        return UnparseableCommit(sha=commit.sha, message=commit.message)

    commit_type = match.group("type").lower()
    if commit_type not in CONVENTIONAL_TYPES:
        return UnparseableCommit(sha=commit.sha, message=commit.message)

    scope = (match.group("scope") or "").strip() or None

    breaking_note = _find_breaking_note(commit.message, breaking_pattern)
    footer_breaking = re.search(breaking_pattern, commit.message, re.MULTILINE) is not None

    return ParsedCommit(
        sha=commit.sha,
        commit_type=commit_type,
        scope=scope,
        description=match.group("description").strip(),
        is_breaking=bool(match.group("breaking")) or footer_breaking,
        breaking_note=breaking_note,
    )


def _find_breaking_note(message: str, breaking_pattern: str) -> str | None:
    for line in message.splitlines()[1:]:
        match = re.match(breaking_pattern, line)
        if match:
            note = line[match.end() :].lstrip(":").strip()
            return note or None
    return None


def filter_skip_release_commits(commits: list[Commit], patterns: list[str]) -> list[Commit]:
    """Drop commits whose message contains a skip-release marker.

    Markers are plain substrings matched case-insensitively anywhere in the
    message, e.g. ``[skip release]``.
    """
    if not patterns:
        return list(commits)

    lowered = [p.lower() for p in patterns]
    kept = []
    for commit in commits:
        message = commit.message.lower()
        if any(p in message for p in lowered):
            logger.debug("Skipping %s: skip-release marker", commit.sha)
            continue
        kept.append(commit)
    return kept


def parse_commits(commits: Iterable[Commit], config: CommitsConfig) -> list[ParsedCommit]:
    """Classify commits, keeping only conventional ones (order preserved)."""
    parsed = []
    for commit in commits:
        result = classify_commit(commit, config.breaking_pattern)
        if isinstance(result, UnparseableCommit):
            logger.debug("Ignoring non-conventional commit %s", commit.sha)
            continue
        parsed.append(result)
    return parsed


def calculate_bump(
    commits: list[ParsedCommit],
    config: CommitsConfig,
    *,
    pre_major: bool = False,
    bump_minor_pre_major: bool = False,
) -> BumpType:
    """Reduce classified commits to a single bump.

    Precedence is breaking > minor types > patch types > nothing. When the
    package is still pre-1.0 and ``bump_minor_pre_major`` is set, a bump that
    would be minor is downgraded to patch.

    Args:
        commits: Classified commits
        config: Commit type to bump mapping
        pre_major: The current version is 0.x.y
        bump_minor_pre_major: Treat minor bumps as patch bumps before 1.0.0

    Returns:
        The largest bump warranted by any commit
    """
    bump = BumpType.NONE
    for commit in commits:
        current = _bump_for(commit, config)
        if current.severity > bump.severity:
            bump = current
        if bump == BumpType.MAJOR:
            break

    if bump == BumpType.MINOR and pre_major and bump_minor_pre_major:
        return BumpType.PATCH
    return bump


def _bump_for(commit: ParsedCommit, config: CommitsConfig) -> BumpType:
    if commit.is_breaking or commit.commit_type in config.types_major:
        return BumpType.MAJOR
    if commit.commit_type in config.types_minor:
        return BumpType.MINOR
    if commit.commit_type in config.types_patch:
        return BumpType.PATCH
    return BumpType.NONE


def group_commits_by_type(commits: list[ParsedCommit]) -> dict[str, list[ParsedCommit]]:
    """Group commits by type, preserving first-seen order in each group."""
    grouped: dict[str, list[ParsedCommit]] = defaultdict(list)
    for commit in commits:
        grouped[commit.commit_type].append(commit)
    return dict(grouped)


def get_breaking_changes(commits: list[ParsedCommit]) -> list[ParsedCommit]:
    return [c for c in commits if c.is_breaking]
