"""Tests for semantic version parsing and bumping."""

from __future__ import annotations

import pytest

from release_pr.core.version import BumpType, Version, is_valid_version, parse_version
from release_pr.exceptions import InvalidVersionError


class TestParse:
    """Tests for Version.parse()."""

    def test_parse_plain(self):
        assert Version.parse("1.2.3") == Version(1, 2, 3)

    def test_parse_with_v_prefix(self):
        assert Version.parse("v1.2.3") == Version(1, 2, 3)

    def test_parse_prerelease(self):
        version = parse_version("2.0.0-rc.1")

        assert version.prerelease == "rc.1"
        assert str(version) == "2.0.0-rc.1"

    def test_build_metadata_dropped(self):
        assert str(Version.parse("1.0.0+build.5")) == "1.0.0"

    @pytest.mark.parametrize("text", ["", "1.2", "1.2.3.4", "01.2.3", "latest", "v1.x.0"])
    def test_invalid(self, text: str):
        with pytest.raises(InvalidVersionError):
            Version.parse(text)
        assert not is_valid_version(text)


class TestBump:
    """Tests for Version.bump()."""

    @pytest.mark.parametrize(
        ("start", "bump", "expected"),
        [
            ("1.2.3", BumpType.MAJOR, "2.0.0"),
            ("1.2.3", BumpType.MINOR, "1.3.0"),
            ("1.2.3", BumpType.PATCH, "1.2.4"),
            ("1.2.3", BumpType.NONE, "1.2.3"),
            ("0.4.1", BumpType.MINOR, "0.5.0"),
        ],
    )
    def test_bump(self, start: str, bump: BumpType, expected: str):
        assert str(Version.parse(start).bump(bump)) == expected

    def test_prerelease_is_released_by_matching_bump(self):
        """Bumping a prerelease of the target version releases it."""
        assert str(Version.parse("2.0.0-rc.1").bump(BumpType.MAJOR)) == "2.0.0"
        assert str(Version.parse("1.3.0-beta.2").bump(BumpType.MINOR)) == "1.3.0"
        assert str(Version.parse("1.2.4-alpha").bump(BumpType.PATCH)) == "1.2.4"

    def test_prerelease_bumped_past_when_larger(self):
        assert str(Version.parse("1.2.4-alpha").bump(BumpType.MINOR)) == "1.3.0"


class TestOrdering:
    """Tests for semver precedence."""

    def test_numeric_ordering(self):
        assert Version.parse("1.10.0") > Version.parse("1.9.9")

    def test_prerelease_sorts_before_release(self):
        assert Version.parse("1.0.0-rc.1") < Version.parse("1.0.0")

    def test_prerelease_identifiers(self):
        ordered = ["1.0.0-alpha", "1.0.0-alpha.1", "1.0.0-beta", "1.0.0-beta.2", "1.0.0-beta.11", "1.0.0"]
        versions = [Version.parse(v) for v in ordered]

        assert sorted(reversed(versions)) == versions

    def test_is_pre_major(self):
        assert Version.parse("0.9.0").is_pre_major
        assert not Version.parse("1.0.0").is_pre_major


class TestBumpType:
    def test_severity_order(self):
        assert BumpType.NONE.severity < BumpType.PATCH.severity < BumpType.MINOR.severity < BumpType.MAJOR.severity

    def test_str(self):
        assert str(BumpType.MINOR) == "minor"
