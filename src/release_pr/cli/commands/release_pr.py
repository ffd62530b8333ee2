"""Implementation of the 'release-pr' command.

The command opens (or refreshes) the release PR for the pending release,
or previews it with ``--dry-run``.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

import httpx
from rich.markdown import Markdown
from rich.markup import escape
from rich.panel import Panel

from release_pr.config.loader import load_config
from release_pr.core.release_pr import ReleasePR, ReleasePRState
from release_pr.core.strategies import get_strategy
from release_pr.exceptions import ConfigError, ConfigValidationError, ReleasePRError
from release_pr.vcs.github import GitHub

if TYPE_CHECKING:
    from rich.console import Console

    from release_pr.config.models import ReleasePRConfig
    from release_pr.core.release_pr import ReleasePlan
    from release_pr.vcs.base import SourceControl


def create_source_control(config: ReleasePRConfig) -> SourceControl:
    return GitHub.from_repo_url(config.repo_url, config.token, tag_prefix=config.tag_prefix)


def run_release_pr(
    config_path: str | None,
    overrides: dict[str, Any],
    dry_run: bool,
    console: Console,
    err_console: Console,
) -> int | None:
    """Run the release-pr command.

    Args:
        config_path: pyproject.toml, or a directory to search upward from
        overrides: Command line values overriding [tool.release-pr]
        dry_run: Only show what the release PR would contain
        console: Console for standard output
        err_console: Console for error output

    Returns:
        Number of the opened or pending PR, None if nothing needs releasing
    """
    project_path = Path(config_path) if config_path else Path.cwd()

    # Load configuration; configuration errors abort before any remote call.
    try:
        config = load_config(project_path, **overrides)
        if not config.repo_url:
            raise ConfigValidationError("A repository URL is required (--repo-url)")
        if not config.package_name:
            raise ConfigValidationError("A package name is required (--package-name)")
        strategy = get_strategy(config)
    except ConfigError as e:
        err_console.print(f"[red]Error loading config:[/] {escape(str(e))}")
        raise SystemExit(1) from e

    try:
        scm = create_source_control(config)
    except ConfigError as e:
        err_console.print(f"[red]Error loading config:[/] {escape(str(e))}")
        raise SystemExit(1) from e
    release = ReleasePR(config, scm, strategy)

    try:
        if dry_run:
            return _preview(release, console)
        outcome = release.run()
    except ReleasePRError as e:
        err_console.print(f"[red]Error:[/] {escape(str(e))}")
        raise SystemExit(1) from e
    except httpx.HTTPStatusError as e:
        err_console.print(
            f"[red]GitHub API error:[/] {e.response.status_code} {e.request.method} {e.request.url}"
        )
        raise SystemExit(1) from e
    except httpx.HTTPError as e:
        err_console.print(f"[red]GitHub API error:[/] {escape(str(e))}")
        raise SystemExit(1) from e
    finally:
        close = getattr(scm, "close", None)
        if close is not None:
            close()

    if outcome.state == ReleasePRState.PENDING_RELEASE_EXISTS:
        console.print(
            f"[yellow]Release PR [cyan]#{outcome.pr_number}[/] was merged but not released yet. "
            "Nothing to do.[/]"
        )
    elif outcome.state == ReleasePRState.NO_USER_FACING_CHANGE:
        console.print("[yellow]No user facing changes since the last release. Nothing to do.[/]")
    else:
        version = outcome.candidate.version if outcome.candidate else ""
        message = f"[green]Release PR [cyan]#{outcome.pr_number}[/] is open for version {version}[/]"
        if outcome.closed:
            message += "\n\nClosed stale PRs: " + ", ".join(f"#{n}" for n in outcome.closed)
        console.print(Panel(message, title="[green]Release PR[/]", border_style="green"))
    return outcome.pr_number


def _preview(release: ReleasePR, console: Console) -> int | None:
    pending = release.find_pending_release()
    if pending is not None:
        console.print(f"[yellow]Release PR [cyan]#{pending.number}[/] is pending release.[/]")
        return pending.number

    plan = release.plan()
    if plan is None:
        console.print("[yellow]No user facing changes since the last release. Nothing to do.[/]")
        return None

    console.print(_preview_panel(plan))
    console.print(Markdown(plan.changelog_entry))
    console.print("\n[dim]Run without [cyan]--dry-run[/] to open the release PR.[/]")
    return None


def _preview_panel(plan: ReleasePlan) -> Panel:
    previous = plan.candidate.previous_tag or "no previous release"
    files = "\n".join(f"  • Update [cyan]{update.path}[/]" for update in plan.updates)
    return Panel(
        f"[bold]{plan.title}[/] ({plan.bump} bump from {previous})\n"
        f"Branch [cyan]{plan.branch}[/] at {plan.sha[:7]}\n\n"
        f"[bold]Would make the following changes:[/]\n\n{files}",
        title="[yellow]Dry Run Preview[/]",
        border_style="yellow",
    )
