"""Shared constants for driver registration and process exit codes."""

from __future__ import annotations

PROG_NAME = "git-merge-structure-sql"
DRIVER_NAME = "merge-structure-sql"
DRIVER_DESCRIPTION = "Rails structure.sql merge driver"
DUMP_FILENAME = "structure.sql"

EX_FAILURE = 1
# sysexits.h EX_USAGE
EX_USAGE = 64

__all__ = [
    "PROG_NAME",
    "DRIVER_NAME",
    "DRIVER_DESCRIPTION",
    "DUMP_FILENAME",
    "EX_FAILURE",
    "EX_USAGE",
]
