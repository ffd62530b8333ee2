"""Shared fixtures for release-pr tests."""

from __future__ import annotations

import io
from typing import TYPE_CHECKING, Any

import pytest
from rich.console import Console

from release_pr import checkpoint as checkpoint_module
from release_pr.config.models import ReleasePRConfig
from release_pr.vcs.models import Commit, PullRequest, Tag

if TYPE_CHECKING:
    from collections.abc import Iterator

    from release_pr.updaters import Update

LABELS = ["autorelease: pending"]


class FakeSourceControl:
    """In-memory source-control collaborator recording every call."""

    def __init__(
        self,
        *,
        tag: Tag | None = None,
        commits: list[Commit] | None = None,
        merged_pr: PullRequest | None = None,
        open_prs: list[PullRequest] | None = None,
        next_pr_number: int = 1,
    ) -> None:
        self.tag = tag
        self.commits = list(commits or [])
        self.merged_pr = merged_pr
        self.open_prs = {pr.number: pr for pr in open_prs or []}
        self.next_pr_number = next_pr_number
        self.calls: list[str] = []
        self.opened: list[dict[str, Any]] = []
        self.labeled: dict[int, list[str]] = {}
        self.closed: list[int] = []
        self.since: str | None = None

    def find_merged_release_pr(self, labels: list[str]) -> PullRequest | None:
        self.calls.append("find_merged_release_pr")
        if self.merged_pr is not None and self.merged_pr.has_labels(labels):
            return self.merged_pr
        return None

    def latest_tag(self) -> Tag | None:
        self.calls.append("latest_tag")
        return self.tag

    def commits_since_sha(self, sha: str | None) -> list[Commit]:
        self.calls.append("commits_since_sha")
        self.since = sha
        return list(self.commits)

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
        self.calls.append("open_pr")
        self.opened.append(
            {
                "branch": branch,
                "version": version,
                "sha": sha,
                "updates": updates,
                "title": title,
                "body": body,
                "labels": labels,
            }
        )
        # Like GitHub, an open PR from the same branch is refreshed, not duplicated.
        for pr in self.open_prs.values():
            if pr.head_branch == branch:
                return pr.number

        number = self.next_pr_number
        self.next_pr_number += 1
        self.open_prs[number] = PullRequest(number=number, sha=sha, title=title, head_branch=branch)
        return number

    def add_labels(self, pr_number: int, labels: list[str]) -> None:
        self.calls.append("add_labels")
        self.labeled[pr_number] = list(labels)
        pr = self.open_prs[pr_number]
        merged = tuple(dict.fromkeys([*pr.labels, *labels]))
        self.open_prs[pr_number] = PullRequest(
            number=pr.number, sha=pr.sha, title=pr.title, labels=merged, head_branch=pr.head_branch
        )

    def find_open_release_prs(self, labels: list[str]) -> list[PullRequest]:
        self.calls.append("find_open_release_prs")
        return [pr for pr in self.open_prs.values() if pr.has_labels(labels)]

    def close_pr(self, pr_number: int) -> None:
        self.calls.append("close_pr")
        self.closed.append(pr_number)
        del self.open_prs[pr_number]


@pytest.fixture(autouse=True)
def checkpoints() -> Iterator[io.StringIO]:
    """Capture checkpoint output instead of printing it."""
    buffer = io.StringIO()
    previous = checkpoint_module.get_console()
    checkpoint_module.set_console(Console(file=buffer, width=200, no_color=True))
    yield buffer
    checkpoint_module.set_console(previous)


@pytest.fixture
def config() -> ReleasePRConfig:
    return ReleasePRConfig(
        repo_url="https://github.com/acme/widgets",
        package_name="@acme/widgets",
        release_type="node",
        labels=LABELS,
    )


@pytest.fixture
def feat_commit() -> Commit:
    return Commit(sha="feat1234567890", message="feat: add user authentication")


@pytest.fixture
def fix_commit() -> Commit:
    return Commit(sha="fix1234567890", message="fix(core): resolve memory leak")


@pytest.fixture
def breaking_commit() -> Commit:
    return Commit(
        sha="break1234567890",
        message="feat(api)!: change response format\n\nBREAKING CHANGE: responses are now JSON",
    )


@pytest.fixture
def sample_commits(feat_commit: Commit, fix_commit: Commit, breaking_commit: Commit) -> list[Commit]:
    return [
        breaking_commit,
        feat_commit,
        fix_commit,
        Commit(sha="docs1234567890", message="docs: update readme"),
        Commit(sha="chore1234567890", message="chore: bump dependencies"),
        Commit(sha="misc1234567890", message="Merge branch 'main' into feature"),
    ]


@pytest.fixture
def make_scm() -> type[FakeSourceControl]:
    """Factory for in-memory source-control collaborators."""
    return FakeSourceControl
