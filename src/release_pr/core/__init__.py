"""Core business logic for release-pr.

This module contains the fundamental building blocks:
- Semantic version parsing and bumping
- Conventional commit classification and bump calculation
- Release candidate selection
- Changelog entry generation

Release orchestration lives in :mod:`release_pr.core.release_pr`.
"""

from __future__ import annotations

from release_pr.core.candidate import ReleaseCandidate, coerce_release_candidate
from release_pr.core.changelog import (
    format_commit_for_changelog,
    generate_changelog_entry,
    is_trivial_changelog,
)
from release_pr.core.commits import (
    CONVENTIONAL_TYPES,
    ParsedCommit,
    UnparseableCommit,
    calculate_bump,
    classify_commit,
    filter_skip_release_commits,
    get_breaking_changes,
    group_commits_by_type,
    parse_commits,
)
from release_pr.core.version import BumpType, Version, parse_version

__all__ = [
    "CONVENTIONAL_TYPES",
    # Version
    "BumpType",
    # Commits
    "ParsedCommit",
    # Candidate
    "ReleaseCandidate",
    "UnparseableCommit",
    "Version",
    "calculate_bump",
    "classify_commit",
    "coerce_release_candidate",
    "filter_skip_release_commits",
    # Changelog
    "format_commit_for_changelog",
    "generate_changelog_entry",
    "get_breaking_changes",
    "group_commits_by_type",
    "is_trivial_changelog",
    "parse_commits",
    "parse_version",
]
