"""Base class for file updates carried by a release PR."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(kw_only=True)
class Update(ABC):
    """A change to one file, computed from its current contents.

    Updates never touch the filesystem; the source-control collaborator
    reads the file, calls :meth:`update_content` and commits the result.

    Attributes:
        path: Repository relative path of the file
        version: Version being released
        changelog_entry: Rendered changelog entry for the release
        package_name: Name of the package being released
        create: Whether the file may be created when it does not exist
    """

    path: str
    version: str
    changelog_entry: str = ""
    package_name: str = ""
    create: bool = False

    @abstractmethod
    def update_content(self, content: str | None) -> str:
        """Return the new file contents.

        Args:
            content: Current contents, or None if the file does not exist
        """

    def __str__(self) -> str:
        return f"{type(self).__name__}({self.path})"
