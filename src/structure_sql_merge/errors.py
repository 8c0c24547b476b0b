"""Exception hierarchy for the structure.sql merge driver."""

from __future__ import annotations

from pathlib import Path


class StructureSqlMergeError(Exception):
    """Base exception for merge driver errors."""
    pass


class DriverIOError(StructureSqlMergeError):
    """A dump file could not be read or written."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")


class GitNotFoundError(StructureSqlMergeError):
    """The git executable is not available on PATH."""

    def __init__(self) -> None:
        super().__init__("git executable not found on PATH")


class InstallError(StructureSqlMergeError):
    """Registering the driver in git configuration failed."""
    pass


class UnknownDialectError(StructureSqlMergeError, KeyError):
    """No dump dialect is registered under the requested name."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"unknown dump dialect: {name}")

    def __str__(self) -> str:
        return self.args[0]
