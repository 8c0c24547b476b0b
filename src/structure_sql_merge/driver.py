"""Merge driver entry point: dialect-aware pre-merge, then git merge-file.

Git invokes the driver with the current, base and other versions of a
conflicted ``structure.sql``. The dialect-specific step only reduces
spurious differences (ledger rows, volatile fields); every remaining
difference is left to ``git merge-file``, whose status becomes ours.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from .core.git import merge_file
from .dialects import Dialect, identify
from .errors import DriverIOError

__all__ = [
    "MergeResult",
    "merge_contents",
    "read_dump",
    "run_merge_driver",
    "write_dump",
]

logger = logging.getLogger(__name__)

# (current, base, other) -> exit status
MergeRunner = Callable[[Path, Path, Path], int]


@dataclass(frozen=True)
class MergeResult:
    """Outcome of one driver invocation."""

    dialect: str | None
    exit_code: int

    @property
    def supported(self) -> bool:
        return self.dialect is not None


def read_dump(path: Path) -> str:
    """Read a dump file, keeping line endings and undecodable bytes intact."""
    try:
        with open(path, encoding="utf-8", errors="surrogateescape", newline="") as f:
            return f.read()
    except OSError as exc:
        raise DriverIOError(path, exc.strerror or str(exc)) from exc


def write_dump(path: Path, content: str) -> None:
    try:
        with open(path, "w", encoding="utf-8", errors="surrogateescape", newline="") as f:
            f.write(content)
    except OSError as exc:
        raise DriverIOError(path, exc.strerror or str(exc)) from exc


def merge_contents(contents: list[str]) -> Dialect | None:
    """Merge ``contents`` in place using the dialect of the first text.

    The first text alone decides the dialect for all of them; detecting per
    text could apply different renderers to the same ledger.
    Returns the dialect used, or None when the format is unsupported.
    """
    dialect = identify(contents[0])
    if dialect is None:
        return None
    dialect.merge(contents)
    return dialect


def run_merge_driver(
    current: Path,
    base: Path,
    other: Path,
    *,
    runner: MergeRunner | None = None,
) -> MergeResult:
    """Pre-merge the three dump files in place, then run the generic merge.

    Nothing is written until all three texts are merged in memory. With an
    unsupported format the files are left byte-identical and only the
    generic merge runs. ``runner`` defaults to ``git merge-file``.

    Raises:
        DriverIOError: If a file cannot be read or written.
        GitNotFoundError: If the default runner cannot find git.
    """
    runner = runner or merge_file
    paths = [Path(current), Path(base), Path(other)]
    contents = [read_dump(path) for path in paths]

    dialect = merge_contents(contents)
    if dialect is None:
        logger.debug("No dialect matched %s", paths[0])
    else:
        for path, content in zip(paths, contents):
            write_dump(path, content)

    exit_code = runner(*paths)
    logger.debug("Generic merge exited with status %d", exit_code)
    return MergeResult(dialect=dialect.name if dialect else None, exit_code=exit_code)
