"""pyproject.toml and ``__version__`` updates for Python releases.

Versions are replaced with targeted regular expressions rather than a
TOML round-trip, so formatting and comments survive the update.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from release_pr.exceptions import UpdaterError, VersionNotFoundError
from release_pr.updaters.base import Update

# Sections that may carry the project version, in lookup order.
_VERSION_SECTIONS = (r"\[project\]", r"\[tool\.poetry\]")

_VERSION_LINE_RE = re.compile(r'^(version\s*=\s*)["\'][^"\']+["\']', re.MULTILINE)

DEFAULT_VERSION_FILE_PATTERN = r'^(__version__\s*=\s*)["\'][^"\']+["\']'


def set_pyproject_version(content: str, new_version: str) -> str:
    """Return pyproject.toml contents with the project version replaced.

    Only the first ``version = ...`` line inside [project] (or, failing
    that, [tool.poetry]) is changed.

    Raises:
        VersionNotFoundError: If no version line exists in either section
    """

    def replace(match: re.Match[str]) -> str:
        return _VERSION_LINE_RE.sub(rf'\g<1>"{new_version}"', match.group(0), count=1)

    for section in _VERSION_SECTIONS:
        # The whole section up to the next table header or EOF.
        section_re = re.compile(rf"^{section}.*?(?=^\[|\Z)", re.MULTILINE | re.DOTALL)
        section_match = section_re.search(content)
        if section_match is None or not _VERSION_LINE_RE.search(section_match.group(0)):
            continue
        return section_re.sub(replace, content, count=1)

    raise VersionNotFoundError(
        "Could not find version to update in pyproject.toml. "
        "Expected [project].version or [tool.poetry].version."
    )


@dataclass(kw_only=True)
class PyprojectUpdate(Update):
    """Set the project version in pyproject.toml."""

    def update_content(self, content: str | None) -> str:
        if content is None:
            raise UpdaterError(f"{self.path} does not exist")
        return set_pyproject_version(content, self.version)


@dataclass(kw_only=True)
class VersionFileUpdate(Update):
    """Set ``__version__ = "..."`` in a Python module.

    Attributes:
        pattern: Regex whose first group is kept in front of the new quoted
            version. Defaults to matching ``__version__ = "..."``.
    """

    pattern: str = DEFAULT_VERSION_FILE_PATTERN

    def update_content(self, content: str | None) -> str:
        if content is None:
            raise UpdaterError(f"Version file not found: {self.path}")

        new_content, count = re.subn(
            self.pattern,
            rf'\g<1>"{self.version}"',
            content,
            count=1,
            flags=re.MULTILINE,
        )
        if count == 0:
            raise VersionNotFoundError(f"Could not find version pattern in {self.path}")
        return new_content
