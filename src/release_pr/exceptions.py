"""Exception hierarchy for release-pr.

Every error raised deliberately by release-pr derives from ReleasePRError.
Failures of the remote source-control API (httpx errors) are not wrapped
and propagate to the caller as-is.
"""

from __future__ import annotations


class ReleasePRError(Exception):
    """Base class for all release-pr errors."""


# =============================================================================
# Configuration
# =============================================================================


class ConfigError(ReleasePRError):
    """Invalid or missing configuration."""


class ConfigNotFoundError(ConfigError):
    """No pyproject.toml could be located."""


class ConfigValidationError(ConfigError):
    """Configuration values failed validation."""


class UnknownReleaseTypeError(ConfigError):
    """The requested release type has no registered strategy."""

    def __init__(self, release_type: str, known: list[str] | None = None) -> None:
        self.release_type = release_type
        self.known = known or []
        message = f"unknown release type: {release_type!r}"
        if self.known:
            message += f" (expected one of: {', '.join(self.known)})"
        super().__init__(message)


# =============================================================================
# Versions
# =============================================================================


class VersionError(ReleasePRError):
    """Base class for version handling errors."""


class InvalidVersionError(VersionError):
    """Text could not be parsed as a semantic version."""


class VersionComputationError(VersionError):
    """The next version could not be derived from the previous one."""

    def __init__(self, version: str) -> None:
        self.version = version
        super().__init__(f"failed to increment {version}")


# =============================================================================
# File updaters
# =============================================================================


class UpdaterError(ReleasePRError):
    """A file could not be patched for the release."""


class VersionNotFoundError(UpdaterError):
    """The file does not contain a version field to update."""
