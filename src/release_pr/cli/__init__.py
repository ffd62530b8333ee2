"""Command line interface for release-pr."""

from __future__ import annotations

from release_pr.cli.app import app, main

__all__ = ["app", "main"]
