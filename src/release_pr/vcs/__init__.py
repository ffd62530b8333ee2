"""Source-control collaborator: models, interface and the GitHub client."""

from __future__ import annotations

from release_pr.vcs.base import SourceControl
from release_pr.vcs.github import GitHub
from release_pr.vcs.models import Commit, PullRequest, Tag
from release_pr.vcs.urls import parse_github_repo_url

__all__ = [
    "Commit",
    "GitHub",
    "PullRequest",
    "SourceControl",
    "Tag",
    "parse_github_repo_url",
]
