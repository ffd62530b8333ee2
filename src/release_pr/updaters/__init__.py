"""File updates applied by a release PR."""

from __future__ import annotations

from release_pr.updaters.base import Update
from release_pr.updaters.changelog import ChangelogUpdate
from release_pr.updaters.package_json import PackageJsonUpdate, SamplesPackageJsonUpdate
from release_pr.updaters.pyproject import PyprojectUpdate, VersionFileUpdate

__all__ = [
    "ChangelogUpdate",
    "PackageJsonUpdate",
    "PyprojectUpdate",
    "SamplesPackageJsonUpdate",
    "Update",
    "VersionFileUpdate",
]
