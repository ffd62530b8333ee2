"""Changelog entry generation from conventional commits.

An entry is a markdown section headed by the release title line:

    ## [1.3.0](https://github.com/o/r/compare/v1.2.3...v1.3.0) (2024-01-01)

    ### Features

    * **api:** add widget ([abc1234](https://github.com/o/r/commit/abc1234...))

An entry made of the title line alone means there were no user facing
changes since the previous release.
"""

from __future__ import annotations

import re
from datetime import UTC, date, datetime
from typing import TYPE_CHECKING

from release_pr.core.commits import get_breaking_changes, group_commits_by_type
from release_pr.vcs.urls import repository_web_url

if TYPE_CHECKING:
    from release_pr.config.models import ChangelogConfig
    from release_pr.core.candidate import ReleaseCandidate
    from release_pr.core.commits import ParsedCommit

_ISSUE_REF_RE = re.compile(r"(?<![\w\[/])#(\d+)\b")


def generate_changelog_entry(
    candidate: ReleaseCandidate,
    commits: list[ParsedCommit],
    config: ChangelogConfig,
    *,
    repo_url: str = "",
    tag_prefix: str = "v",
    today: date | None = None,
) -> str:
    """Render the changelog entry for a release candidate.

    Args:
        candidate: Version being released
        commits: Classified commits, newest first
        config: Visible sections and their headings
        repo_url: Repository URL; links are omitted when empty
        tag_prefix: Prefix used to build the current tag for compare links
        today: Release date (defaults to the current UTC date)

    Returns:
        Markdown text. A single line when nothing user facing changed.
    """
    base_url = repository_web_url(repo_url) if repo_url else ""
    release_date = today or datetime.now(UTC).date()

    lines = [_title_line(candidate, base_url, tag_prefix, release_date)]

    breaking = get_breaking_changes(commits)
    if breaking:
        lines.extend(["", f"### {config.breaking_heading}", ""])
        for pc in breaking:
            lines.append(format_commit_for_changelog(pc, base_url, use_breaking_note=True))

    grouped = group_commits_by_type(commits)
    for commit_type, heading in config.sections.items():
        # Breaking commits are listed once, in the section above.
        entries = [pc for pc in grouped.get(commit_type, []) if not pc.is_breaking]
        if not entries:
            continue
        lines.extend(["", f"### {heading}", ""])
        lines.extend(format_commit_for_changelog(pc, base_url) for pc in entries)

    return "\n".join(lines)


def is_trivial_changelog(entry: str) -> bool:
    """True if the entry has no body beyond the title line."""
    return len(entry.strip().splitlines()) <= 1


def _title_line(
    candidate: ReleaseCandidate,
    base_url: str,
    tag_prefix: str,
    release_date: date,
) -> str:
    version = candidate.version
    if base_url and candidate.previous_tag:
        compare = f"{base_url}/compare/{candidate.previous_tag}...{tag_prefix}{version}"
        version = f"[{version}]({compare})"
    return f"## {version} ({release_date.isoformat()})"


def format_commit_for_changelog(
    pc: ParsedCommit,
    base_url: str = "",
    *,
    use_breaking_note: bool = False,
) -> str:
    """Format a commit as a changelog bullet.

    Args:
        pc: Commit to format
        base_url: Repository web URL used for commit and issue links
        use_breaking_note: Prefer the BREAKING CHANGE footer text over the header

    Returns:
        Markdown bullet line
    """
    text = pc.description
    if use_breaking_note and pc.breaking_note:
        text = pc.breaking_note

    scope = f"**{pc.scope}:** " if pc.scope else ""

    if base_url:
        text = _ISSUE_REF_RE.sub(rf"[#\1]({base_url}/issues/\1)", text)
        sha_ref = f"[{pc.short_sha}]({base_url}/commit/{pc.sha})"
    else:
        sha_ref = pc.short_sha

    return f"* {scope}{text} ({sha_ref})"
