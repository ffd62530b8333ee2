"""Tests for release type strategies."""

from __future__ import annotations

from pathlib import Path

import pytest

from release_pr.config.models import ReleasePRConfig
from release_pr.core.candidate import ReleaseCandidate
from release_pr.core.strategies import NodeStrategy, PythonStrategy, get_strategy
from release_pr.exceptions import UnknownReleaseTypeError
from release_pr.updaters import (
    ChangelogUpdate,
    PackageJsonUpdate,
    PyprojectUpdate,
    SamplesPackageJsonUpdate,
    VersionFileUpdate,
)

CANDIDATE = ReleaseCandidate(version="1.3.0", previous_tag="v1.2.3")
ENTRY = "## 1.3.0 (2024-01-15)\n\n### Features\n\n* add widget"


class TestGetStrategy:
    """Tests for get_strategy()."""

    def test_node(self, config: ReleasePRConfig):
        assert isinstance(get_strategy(config), NodeStrategy)

    def test_python(self):
        assert isinstance(get_strategy(ReleasePRConfig(release_type="python")), PythonStrategy)

    def test_unknown(self):
        with pytest.raises(UnknownReleaseTypeError, match="unknown release type: 'ruby'") as exc_info:
            get_strategy(ReleasePRConfig(release_type="ruby"))
        assert exc_info.value.known == ["node", "python"]


class TestNodeStrategy:
    """Tests for NodeStrategy.build_updates()."""

    def test_updates_in_fixed_order(self, config: ReleasePRConfig):
        updates = NodeStrategy(config).build_updates(CANDIDATE, ENTRY)

        assert [type(u) for u in updates] == [ChangelogUpdate, PackageJsonUpdate, SamplesPackageJsonUpdate]
        assert [u.path for u in updates] == ["CHANGELOG.md", "package.json", "samples/package.json"]

    def test_updates_carry_release_payload(self, config: ReleasePRConfig):
        for update in NodeStrategy(config).build_updates(CANDIDATE, ENTRY):
            assert update.version == "1.3.0"
            assert update.changelog_entry == ENTRY
            assert update.package_name == "@acme/widgets"


class TestPythonStrategy:
    """Tests for PythonStrategy.build_updates()."""

    def test_pyproject_and_version_files(self):
        config = ReleasePRConfig(
            release_type="python",
            package_name="widgets",
            version_files=[Path("src/widgets/__init__.py")],
        )
        updates = PythonStrategy(config).build_updates(CANDIDATE, ENTRY)

        assert [type(u) for u in updates] == [ChangelogUpdate, PyprojectUpdate, VersionFileUpdate]
        assert updates[2].path == "src/widgets/__init__.py"

    def test_custom_changelog_path(self):
        config = ReleasePRConfig(release_type="python", changelog={"path": "docs/CHANGES.md"})
        updates = PythonStrategy(config).build_updates(CANDIDATE, ENTRY)

        assert updates[0].path == "docs/CHANGES.md"
