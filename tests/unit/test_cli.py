"""Tests for the command line interface."""

from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

from release_pr import __version__
from release_pr.cli import app
from release_pr.cli.commands import release_pr as command
from release_pr.vcs.models import Commit, PullRequest, Tag

runner = CliRunner()

PYPROJECT = """\
[tool.release-pr]
repo_url = "https://github.com/acme/widgets"
package_name = "@acme/widgets"
"""


@pytest.fixture
def pyproject(tmp_path: Path) -> Path:
    path = tmp_path / "pyproject.toml"
    path.write_text(PYPROJECT)
    return path


@pytest.fixture
def scm(monkeypatch: pytest.MonkeyPatch, make_scm):
    """Replace the GitHub client with an in-memory one."""
    fake = make_scm(
        tag=Tag(name="v1.2.3", sha="tagsha", version="1.2.3"),
        commits=[Commit(sha="abc1234def", message="feat: add widget")],
    )
    monkeypatch.setattr(command, "create_source_control", lambda config: fake)
    return fake


def test_version():
    result = runner.invoke(app, ["--version"])

    assert result.exit_code == 0
    assert __version__ in result.output


def test_opens_release_pr(pyproject: Path, scm):
    result = runner.invoke(app, ["release-pr", "--config", str(pyproject)])

    assert result.exit_code == 0, result.output
    assert "Release PR" in result.output
    assert result.output.strip().endswith("1")
    assert scm.opened[0]["branch"] == "release-v1.3.0"


def test_overrides_from_options(pyproject: Path, scm):
    result = runner.invoke(
        app,
        ["release-pr", "--config", str(pyproject), "--release-as", "2.0.0", "--label", "release,pending"],
    )

    assert result.exit_code == 0, result.output
    assert scm.opened[0]["version"] == "2.0.0"
    assert scm.labeled == {1: ["release", "pending"]}


def test_pending_release(pyproject: Path, scm):
    scm.merged_pr = PullRequest(number=9, sha="mergesha", labels=("autorelease: pending",))

    result = runner.invoke(app, ["release-pr", "--config", str(pyproject)])

    assert result.exit_code == 0
    assert "#9" in result.output
    assert "open_pr" not in scm.calls


def test_nothing_to_release(pyproject: Path, scm):
    scm.commits = [Commit(sha="abc1234def", message="chore: update deps")]

    result = runner.invoke(app, ["release-pr", "--config", str(pyproject)])

    assert result.exit_code == 0
    assert "Nothing to do" in result.output


def test_dry_run_changes_nothing(pyproject: Path, scm):
    result = runner.invoke(app, ["release-pr", "--config", str(pyproject), "--dry-run"])

    assert result.exit_code == 0, result.output
    assert "Dry Run Preview" in result.output
    assert "chore: release 1.3.0" in result.output
    assert "open_pr" not in scm.calls


def test_unknown_release_type(pyproject: Path, scm):
    result = runner.invoke(app, ["release-pr", "--config", str(pyproject), "--release-type", "cobol"])

    assert result.exit_code == 1
    assert "unknown release type" in result.output
    assert scm.calls == []


def test_missing_repo_url(tmp_path: Path, scm):
    path = tmp_path / "pyproject.toml"
    path.write_text('[tool.release-pr]\npackage_name = "widgets"\n')

    result = runner.invoke(app, ["release-pr", "--config", str(path)])

    assert result.exit_code == 1
    assert "repository URL is required" in result.output


def test_version_error_exits(pyproject: Path, scm):
    scm.tag = Tag(name="vnext", sha="t", version="next")

    result = runner.invoke(app, ["release-pr", "--config", str(pyproject)])

    assert result.exit_code == 1
    assert "failed to increment next" in result.output


def test_invalid_release_as(pyproject: Path, scm):
    result = runner.invoke(app, ["release-pr", "--config", str(pyproject), "--release-as", "next"])

    assert result.exit_code == 1
    assert "Error loading config" in result.output
    assert scm.calls == []
