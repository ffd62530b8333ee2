"""Configuration management for release-pr."""

from __future__ import annotations

from release_pr.config.loader import load_config
from release_pr.config.models import (
    ChangelogConfig,
    CommitsConfig,
    ReleasePRConfig,
)

__all__ = [
    "ChangelogConfig",
    "CommitsConfig",
    "ReleasePRConfig",
    "load_config",
]
