"""release-pr: keep one up-to-date release pull request per repository."""

from __future__ import annotations

__version__ = "0.1.0"

__all__ = ["__version__"]
