"""CHANGELOG.md update."""

from __future__ import annotations

import re
from dataclasses import dataclass

from release_pr.updaters.base import Update

DEFAULT_HEADER = "# Changelog"

# First release heading, e.g. "## 1.2.0 (...)", "### [1.2.0](...)".
_RELEASE_HEADING_RE = re.compile(r"^#{2,3} \[?v?\d", re.MULTILINE)


@dataclass(kw_only=True)
class ChangelogUpdate(Update):
    """Prepend the new entry above the latest release in the changelog.

    Anything before the first release heading (title, badges, notes) is
    kept in place.
    """

    create: bool = True

    def update_content(self, content: str | None) -> str:
        entry = self.changelog_entry.strip()

        if not content or not content.strip():
            return f"{DEFAULT_HEADER}\n\n{entry}\n"

        match = _RELEASE_HEADING_RE.search(content)
        if match is None:
            return f"{content.rstrip()}\n\n{entry}\n"

        preamble = content[: match.start()].rstrip()
        rest = content[match.start() :]
        if preamble:
            return f"{preamble}\n\n{entry}\n\n{rest}"
        return f"{entry}\n\n{rest}"
