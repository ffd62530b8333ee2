"""Tests for release candidate selection."""

from __future__ import annotations

import pytest

from release_pr.core.candidate import SEED_VERSION, ReleaseCandidate, coerce_release_candidate
from release_pr.core.version import BumpType
from release_pr.exceptions import VersionComputationError
from release_pr.vcs.models import Tag


@pytest.fixture
def tag() -> Tag:
    return Tag(name="v1.2.3", sha="abc123", version="1.2.3")


class TestCoerceReleaseCandidate:
    """Tests for coerce_release_candidate()."""

    def test_first_release_uses_seed(self):
        """Without a previous tag the seed version is used whatever the bump."""
        candidate = coerce_release_candidate(None, BumpType.MAJOR)

        assert candidate == ReleaseCandidate(version=SEED_VERSION, previous_tag=None)
        assert candidate.version == "1.0.0"

    def test_custom_seed(self):
        assert coerce_release_candidate(None, BumpType.PATCH, seed_version="0.1.0").version == "0.1.0"

    @pytest.mark.parametrize(
        ("bump", "expected"),
        [(BumpType.MAJOR, "2.0.0"), (BumpType.MINOR, "1.3.0"), (BumpType.PATCH, "1.2.4")],
    )
    def test_bumps_previous_version(self, tag: Tag, bump: BumpType, expected: str):
        candidate = coerce_release_candidate(tag, bump)

        assert candidate.version == expected
        assert candidate.previous_tag == "v1.2.3"

    @pytest.mark.parametrize("bump", list(BumpType))
    def test_override_wins(self, tag: Tag, bump: BumpType):
        """release_as is used verbatim regardless of the computed bump."""
        assert coerce_release_candidate(tag, bump, "2.0.0").version == "2.0.0"

    def test_override_on_first_release(self):
        candidate = coerce_release_candidate(None, BumpType.MINOR, "0.1.0")

        assert candidate.version == "0.1.0"
        assert candidate.previous_tag is None

    def test_override_may_go_backwards(self, tag: Tag):
        """Operator overrides are trusted; no monotonicity check is applied."""
        candidate = coerce_release_candidate(tag, BumpType.MINOR, "1.0.0")

        assert candidate.version == "1.0.0"
        assert candidate.previous_tag == "v1.2.3"

    def test_malformed_previous_version(self):
        broken = Tag(name="vnext", sha="abc123", version="next")

        with pytest.raises(VersionComputationError, match="failed to increment next") as exc_info:
            coerce_release_candidate(broken, BumpType.PATCH)
        assert exc_info.value.version == "next"
