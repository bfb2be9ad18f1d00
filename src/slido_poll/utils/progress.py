"""
src/slido_poll/utils/progress.py
Phase notifications and the queued-poll overview shown before a run.
"""

from __future__ import annotations

import sys
from typing import Optional, Protocol, Sequence

from rich.console import Console
from rich.table import Column, Table

from ..models import PollDefinition
from .logger import logger, step, success


class ProgressReporter(Protocol):
    """Receives phase notifications from the runner."""

    def phase_started(self, label: str) -> None:
        ...

    def phase_succeeded(self, label: str) -> None:
        ...

    def phase_failed(self, label: str, reason: str) -> None:
        ...


class LoggingReporter:
    """Report phases through the layered console logger."""

    def phase_started(self, label: str) -> None:
        step(label)

    def phase_succeeded(self, label: str) -> None:
        success(f"{label} – done")

    def phase_failed(self, label: str, reason: str) -> None:
        logger.error(f"{label} – {reason}")


def _option_summary(poll: PollDefinition) -> str:
    return ", ".join(f"{o.name}*" if o.correct else o.name for o in poll.options)


def print_poll_table(polls: Sequence[PollDefinition], console: Optional[Console] = None) -> None:
    """List the polls that are about to be created (correct answers starred)."""
    if not polls:
        return
    if console is None:
        if not sys.stdout.isatty():
            for i, poll in enumerate(polls, 1):
                print(f"  {i:2d}. {poll.prompt} [{_option_summary(poll)}]")
            sys.stdout.flush()
            return
        console = Console()

    table = Table(
        Column(header="#", justify="right", style="blue"),
        Column(header="Prompt", style="bold"),
        Column(header="Options", style="bright_blue"),
        Column(header="Correct", justify="center"),
        box=None,
        show_header=True,
        header_style="bold blue",
        expand=False,
    )
    for i, poll in enumerate(polls, 1):
        table.add_row(str(i), poll.prompt, _option_summary(poll), "on" if poll.has_correct_answer else "off")
    console.print()
    console.print(table)
    console.print()


__all__ = ["LoggingReporter", "ProgressReporter", "print_poll_table"]
