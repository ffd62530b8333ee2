"""Progress checkpoints printed at each decision point of a run."""

from __future__ import annotations

from enum import StrEnum

from rich.console import Console
from rich.markup import escape

_console = Console(stderr=True)


class CheckpointType(StrEnum):
    SUCCESS = "success"
    FAILURE = "failure"


def get_console() -> Console:
    return _console


def set_console(console: Console) -> None:
    """Redirect checkpoints, e.g. to a recording console in tests."""
    global _console
    _console = console


def checkpoint(message: str, kind: CheckpointType) -> None:
    if kind == CheckpointType.SUCCESS:
        _console.print(f"[green]✔[/] {escape(message)}")
    else:
        _console.print(f"[red]✖[/] {escape(message)}")
