"""Configuration models for release-pr.

All models are Pydantic models with defaults, so an empty
``[tool.release-pr]`` table (or none at all) is a valid configuration.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from release_pr.core.version import is_valid_version, parse_version

DEFAULT_LABELS = ["autorelease: pending"]


class CommitsConfig(BaseModel):
    """How commit types map to version bumps."""

    model_config = ConfigDict(extra="forbid")

    types_major: list[str] = Field(default_factory=list)
    types_minor: list[str] = Field(default_factory=lambda: ["feat"])
    types_patch: list[str] = Field(default_factory=lambda: ["fix", "perf", "revert"])
    breaking_pattern: str = r"^BREAKING[ -]CHANGE"
    skip_release_patterns: list[str] = Field(
        default_factory=lambda: ["[skip release]", "[release skip]"]
    )


class ChangelogConfig(BaseModel):
    """Changelog file location and visible sections.

    ``sections`` maps a commit type to its heading; the mapping order is
    the rendering order. Types without an entry are left out of the
    changelog.
    """

    model_config = ConfigDict(extra="forbid")

    path: Path = Path("CHANGELOG.md")
    sections: dict[str, str] = Field(
        default_factory=lambda: {
            "feat": "Features",
            "fix": "Bug Fixes",
            "perf": "Performance Improvements",
            "revert": "Reverts",
            "docs": "Documentation",
            "style": "Styles",
            "refactor": "Code Refactoring",
            "test": "Tests",
            "build": "Build System",
            "ci": "Continuous Integration",
            "chore": "Miscellaneous Chores",
        }
    )
    breaking_heading: str = "⚠ BREAKING CHANGES"


class ReleasePRConfig(BaseModel):
    """Root configuration."""

    model_config = ConfigDict(extra="forbid")

    repo_url: str = ""
    package_name: str = ""
    release_type: str = "node"
    labels: list[str] = Field(default_factory=lambda: list(DEFAULT_LABELS))
    bump_minor_pre_major: bool = False
    release_as: str | None = None
    initial_version: str = "1.0.0"
    tag_prefix: str = "v"
    version_files: list[Path] = Field(default_factory=list)
    token: str | None = Field(default=None, exclude=True, repr=False)

    commits: CommitsConfig = Field(default_factory=CommitsConfig)
    changelog: ChangelogConfig = Field(default_factory=ChangelogConfig)

    @field_validator("labels", mode="before")
    @classmethod
    def _split_labels(cls, value: object) -> object:
        if isinstance(value, str):
            return [label.strip() for label in value.split(",") if label.strip()]
        return value

    @field_validator("release_as", mode="before")
    @classmethod
    def _empty_release_as(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("release_as")
    @classmethod
    def _valid_release_as(cls, value: str | None) -> str | None:
        if value is None:
            return None
        if not is_valid_version(value):
            raise ValueError(f"release_as must be a semantic version, got {value!r}")
        return str(parse_version(value))

    @property
    def release_branch_prefix(self) -> str:
        return f"release-{self.tag_prefix}"

    def branch_for(self, version: str) -> str:
        """Branch name a release PR for ``version`` is opened from."""
        return f"{self.release_branch_prefix}{version}"
