"""package.json updates for Node releases."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

from release_pr.exceptions import UpdaterError, VersionNotFoundError
from release_pr.updaters.base import Update

_DEPENDENCY_KEYS = ("dependencies", "devDependencies", "peerDependencies", "optionalDependencies")


def _load(path: str, content: str | None) -> dict[str, Any]:
    if content is None:
        raise UpdaterError(f"{path} does not exist")
    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise UpdaterError(f"{path} is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise UpdaterError(f"{path} must contain a JSON object")
    return data


def _dump(data: dict[str, Any]) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"


@dataclass(kw_only=True)
class PackageJsonUpdate(Update):
    """Set the top-level ``version`` of a package.json."""

    def update_content(self, content: str | None) -> str:
        data = _load(self.path, content)
        if "version" not in data:
            raise VersionNotFoundError(f"No version field in {self.path}")
        data["version"] = self.version
        return _dump(data)


@dataclass(kw_only=True)
class SamplesPackageJsonUpdate(Update):
    """Point the samples package at the version being released.

    The samples package.json depends on the library itself; that
    dependency is pinned to ``^<version>``. Other dependencies are left
    alone.
    """

    def update_content(self, content: str | None) -> str:
        data = _load(self.path, content)
        pinned = f"^{self.version}"
        found = False
        for key in _DEPENDENCY_KEYS:
            deps = data.get(key)
            if isinstance(deps, dict) and self.package_name in deps:
                deps[self.package_name] = pinned
                found = True
        if not found:
            data.setdefault("dependencies", {})[self.package_name] = pinned
        return _dump(data)
