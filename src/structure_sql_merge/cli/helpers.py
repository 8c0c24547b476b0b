"""Console objects and reporting helpers shared by CLI commands."""

from __future__ import annotations

from rich.console import Console

from ..constants import PROG_NAME

__all__ = ["console", "err_console", "report_error", "report_warning"]

console = Console(soft_wrap=True, highlight=False)
err_console = Console(stderr=True, soft_wrap=True, highlight=False)


def report_error(message: object) -> None:
    """Print ``<prog>: <message>`` on stderr."""
    err_console.print(f"{PROG_NAME}: {message}", markup=False)


def report_warning(message: object) -> None:
    err_console.print(f"{PROG_NAME}: {message}", markup=False, style="yellow")
