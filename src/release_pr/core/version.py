"""Semantic version parsing and bumping.

Versions follow semver 2.0 (``MAJOR.MINOR.PATCH[-PRERELEASE][+BUILD]``).
Build metadata is accepted when parsing but ignored for ordering and
dropped on output, matching how tags are compared on the remote.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import StrEnum

from release_pr.exceptions import InvalidVersionError

_SEMVER_RE = re.compile(
    r"^v?(?P<major>0|[1-9]\d*)\.(?P<minor>0|[1-9]\d*)\.(?P<patch>0|[1-9]\d*)"
    r"(?:-(?P<prerelease>[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?"
    r"(?:\+(?P<build>[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?$"
)


class BumpType(StrEnum):
    """Size of a version increment."""

    MAJOR = "major"
    MINOR = "minor"
    PATCH = "patch"
    NONE = "none"

    @property
    def severity(self) -> int:
        """Rank used to pick the largest bump out of several."""
        return _SEVERITY[self]


_SEVERITY = {
    BumpType.NONE: 0,
    BumpType.PATCH: 1,
    BumpType.MINOR: 2,
    BumpType.MAJOR: 3,
}


def _prerelease_key(prerelease: str | None) -> tuple[int, tuple[tuple[int, int | str], ...]]:
    # A version without prerelease sorts after any of its prereleases.
    if prerelease is None:
        return (1, ())
    parts: list[tuple[int, int | str]] = []
    for ident in prerelease.split("."):
        if ident.isdigit():
            parts.append((0, int(ident)))
        else:
            parts.append((1, ident))
    return (0, tuple(parts))


@dataclass(frozen=True, slots=True)
class Version:
    """A semantic version.

    Attributes:
        major: Major component
        minor: Minor component
        patch: Patch component
        prerelease: Dot separated prerelease identifiers, e.g. ``rc.1``
    """

    major: int
    minor: int
    patch: int
    prerelease: str | None = None

    @classmethod
    def parse(cls, text: str) -> Version:
        """Parse a version string, tolerating a leading ``v``.

        Raises:
            InvalidVersionError: If the text is not a semantic version
        """
        match = _SEMVER_RE.match(text.strip())
        if match is None:
            raise InvalidVersionError(f"Invalid semantic version: {text!r}")
        return cls(
            int(match.group("major")),
            int(match.group("minor")),
            int(match.group("patch")),
            match.group("prerelease"),
        )

    @property
    def is_pre_major(self) -> bool:
        """True for ``0.x.y`` versions."""
        return self.major == 0

    def bump(self, bump_type: BumpType) -> Version:
        """Return the next version for the given bump.

        Follows npm ``semver.inc``: bumping a prerelease of the target
        version releases it instead of skipping past it, so ``2.0.0-rc.1``
        bumped by major becomes ``2.0.0``.
        """
        if bump_type == BumpType.NONE:
            return self
        if bump_type == BumpType.MAJOR:
            if self.prerelease and self.minor == 0 and self.patch == 0:
                return Version(self.major, 0, 0)
            return Version(self.major + 1, 0, 0)
        if bump_type == BumpType.MINOR:
            if self.prerelease and self.patch == 0:
                return Version(self.major, self.minor, 0)
            return Version(self.major, self.minor + 1, 0)
        if self.prerelease:
            return Version(self.major, self.minor, self.patch)
        return Version(self.major, self.minor, self.patch + 1)

    def _key(self) -> tuple[int, int, int, tuple[int, tuple[tuple[int, int | str], ...]]]:
        return (self.major, self.minor, self.patch, _prerelease_key(self.prerelease))

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._key() < other._key()

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._key() <= other._key()

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._key() > other._key()

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._key() >= other._key()

    def __str__(self) -> str:
        base = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            return f"{base}-{self.prerelease}"
        return base


def parse_version(text: str) -> Version:
    """Shorthand for :meth:`Version.parse`."""
    return Version.parse(text)


def is_valid_version(text: str) -> bool:
    """Return True if text parses as a semantic version."""
    return _SEMVER_RE.match(text.strip()) is not None
