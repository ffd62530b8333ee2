"""Typer application and command wiring."""

from __future__ import annotations

import logging

import typer
from rich.console import Console
from rich.logging import RichHandler

from release_pr import __version__
from release_pr.cli.commands.release_pr import run_release_pr

console = Console()
err_console = Console(stderr=True)

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
    help="Maintain a single up-to-date release PR from conventional commits.",
)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )
    # httpx logs every request at INFO; ours are enough.
    logging.getLogger("httpx").setLevel(logging.WARNING)


@app.callback(invoke_without_command=True)
def _main(  # pyright: ignore[reportUnusedFunction]
    version: bool = typer.Option(False, "--version", help="Show version and exit."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    if version:
        typer.echo(__version__)
        raise typer.Exit(code=0)
    _configure_logging(verbose)


@app.command("release-pr")
def release_pr(
    repo_url: str | None = typer.Option(
        None, "--repo-url", help="GitHub URL of the repository being released."
    ),
    package_name: str | None = typer.Option(
        None, "--package-name", help="Name of the package that will be published."
    ),
    release_type: str | None = typer.Option(
        None, "--release-type", help="Kind of release: [cyan]node[/] or [cyan]python[/]."
    ),
    bump_minor_pre_major: bool | None = typer.Option(
        None,
        "--bump-minor-pre-major/--no-bump-minor-pre-major",
        help="Before 1.0.0, features bump the patch version instead of minor.",
    ),
    release_as: str | None = typer.Option(
        None, "--release-as", help="Force the release version, e.g. 2.0.0."
    ),
    label: str | None = typer.Option(
        None, "--label", help="Comma separated labels marking release PRs."
    ),
    token: str | None = typer.Option(
        None,
        "--token",
        envvar=["GH_TOKEN", "GITHUB_TOKEN"],
        help="GitHub token with write access.",
        show_envvar=True,
    ),
    config: str | None = typer.Option(
        None, "--config", help="pyproject.toml holding [tool.release-pr] settings."
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", help="Show the release PR that would be opened, change nothing."
    ),
) -> None:
    """Open or refresh the release PR for the pending release."""
    overrides = {
        "repo_url": repo_url,
        "package_name": package_name,
        "release_type": release_type,
        "bump_minor_pre_major": bump_minor_pre_major,
        "release_as": release_as,
        "labels": label,
        "token": token,
    }
    pr_number = run_release_pr(config, overrides, dry_run, console, err_console)
    if pr_number is not None:
        typer.echo(pr_number)


def main() -> None:
    app()
