"""Configuration loading from pyproject.toml.

release-pr reads its settings from the ``[tool.release-pr]`` table.
Values passed on the command line override file values.
"""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from release_pr.config.models import ReleasePRConfig
from release_pr.exceptions import ConfigNotFoundError, ConfigValidationError

TOOL_KEY = "release-pr"


def find_pyproject_toml(start: Path | None = None) -> Path:
    """Find pyproject.toml by walking up from ``start``.

    Args:
        start: Directory to start from (defaults to the working directory)

    Returns:
        Path to the nearest pyproject.toml

    Raises:
        ConfigNotFoundError: If no pyproject.toml exists up to the filesystem root
    """
    current = (start or Path.cwd()).resolve()
    if current.is_file():
        current = current.parent

    for directory in (current, *current.parents):
        candidate = directory / "pyproject.toml"
        if candidate.is_file():
            return candidate

    raise ConfigNotFoundError(f"No pyproject.toml found in {current} or any parent directory")


def load_pyproject_toml(path: Path) -> dict[str, Any]:
    """Parse a pyproject.toml file.

    Raises:
        ConfigNotFoundError: If the file does not exist
        ConfigValidationError: If the file is not valid TOML
    """
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except FileNotFoundError as e:
        raise ConfigNotFoundError(f"Config file not found: {path}") from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigValidationError(f"Invalid TOML in {path}: {e}") from e


def extract_release_pr_config(data: dict[str, Any]) -> dict[str, Any]:
    """Return the ``[tool.release-pr]`` table, or an empty dict."""
    section = data.get("tool", {}).get(TOOL_KEY, {})
    if not isinstance(section, dict):
        raise ConfigValidationError(f"[tool.{TOOL_KEY}] must be a table")
    return dict(section)


def build_config(values: dict[str, Any]) -> ReleasePRConfig:
    """Validate raw values into a ReleasePRConfig.

    Raises:
        ConfigValidationError: If validation fails
    """
    try:
        return ReleasePRConfig.model_validate(values)
    except ValidationError as e:
        raise ConfigValidationError(f"Invalid release-pr configuration:\n{e}") from e


def load_config(path: Path | None = None, **overrides: Any) -> ReleasePRConfig:
    """Load configuration, merging CLI overrides over file values.

    A missing pyproject.toml is not an error: defaults plus overrides are
    used. Overrides whose value is None are ignored.

    Args:
        path: pyproject.toml or a directory to search upward from
        **overrides: Top-level config keys to force

    Returns:
        Validated configuration
    """
    values: dict[str, Any] = {}

    try:
        pyproject_path = path if path is not None and path.is_file() else find_pyproject_toml(path)
    except ConfigNotFoundError:
        pyproject_path = None

    if pyproject_path is not None:
        values = extract_release_pr_config(load_pyproject_toml(pyproject_path))

    values.update({key: value for key, value in overrides.items() if value is not None})
    return build_config(values)
