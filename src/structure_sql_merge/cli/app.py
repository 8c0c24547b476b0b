"""``git-merge-structure-sql`` command."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import typer

from structure_sql_merge import __version__
from structure_sql_merge.constants import DRIVER_NAME, DUMP_FILENAME, EX_FAILURE, EX_USAGE, PROG_NAME
from structure_sql_merge.driver import run_merge_driver
from structure_sql_merge.errors import StructureSqlMergeError
from structure_sql_merge.installer import InstallScope, install_driver

from .helpers import console, err_console, report_error, report_warning

USAGE = f"""\
{PROG_NAME} - git merge driver for db/structure.sql in a Rails project {__version__}

usage: {PROG_NAME} <current-file> <base-file> <other-file>
       {PROG_NAME} --install [--local]

    --install     Enable this merge driver in Git (default: global)
    --local       With --install, enable it for the current repository only
    --version     Show the version and exit
"""

app = typer.Typer(
    name=PROG_NAME,
    help="git merge driver for db/structure.sql in a Rails project.",
    add_completion=False,
)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"{PROG_NAME} {__version__}")
        raise typer.Exit()


def _install(scope: InstallScope) -> None:
    result = install_driver(scope)
    config_label = str(result.config_file) if result.config_file else f"git config ({scope.value})"
    console.print(f'{config_label}: Adding the "{DRIVER_NAME}" driver definition', markup=False)
    if result.attributes_added:
        console.print(
            f'{result.attributes_file}: Registering the "{DRIVER_NAME}" driver for {DUMP_FILENAME}',
            markup=False,
        )


@app.command()
def merge(
    files: Optional[List[Path]] = typer.Argument(
        None,
        metavar="CURRENT BASE OTHER",
        help="Current, base and other versions of the file, as passed by git (%A %O %B)",
        show_default=False,
    ),
    install: bool = typer.Option(False, "--install", help="Enable this merge driver in Git (default: global)"),
    local: bool = typer.Option(False, "--local", help="With --install, enable it for the current repository only"),
    debug: bool = typer.Option(False, "--debug", help="Log merge decisions to stderr"),
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show the version and exit"
    ),
) -> None:
    """Merge three versions of structure.sql, or register the driver with --install."""
    if debug:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    try:
        if install:
            _install(InstallScope.LOCAL if local else InstallScope.GLOBAL)
            return

        paths = list(files or [])
        if len(paths) != 3:
            err_console.print(USAGE, markup=False, end="")
            raise typer.Exit(EX_USAGE)

        result = run_merge_driver(*paths)
    except (StructureSqlMergeError, OSError) as exc:
        report_error(exc)
        raise typer.Exit(EX_FAILURE)

    if not result.supported:
        report_warning("Unsupported format; falling back to git-merge-file(1)")
    raise typer.Exit(result.exit_code)


def main() -> None:
    app(prog_name=PROG_NAME)
