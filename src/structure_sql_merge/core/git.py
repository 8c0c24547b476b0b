"""Thin wrappers around the git executable."""

from __future__ import annotations

import logging
import os
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Sequence

from ..errors import GitNotFoundError

__all__ = ["GitCommandResult", "run_git", "merge_file"]

logger = logging.getLogger(__name__)


@dataclass
class GitCommandResult:
    returncode: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0


def run_git(
    args: Sequence[str],
    *,
    cwd: Path | None = None,
    env: Mapping[str, str] | None = None,
    capture: bool = True,
) -> GitCommandResult:
    """Run ``git <args>`` and return its status and output.

    A non-zero exit status is returned, not raised; callers decide what a
    failure means. With ``capture=False`` the command inherits stdout and
    stderr, and the result carries empty output.

    Raises:
        GitNotFoundError: If git is not installed or not on PATH.
    """
    command = ["git", *args]
    run_env = {**os.environ, **env} if env else None
    logger.debug("Running %s", " ".join(command))
    try:
        completed = subprocess.run(
            command,
            cwd=str(cwd) if cwd else None,
            env=run_env,
            capture_output=capture,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
        )
    except FileNotFoundError:
        raise GitNotFoundError() from None
    return GitCommandResult(
        returncode=completed.returncode,
        stdout=completed.stdout or "",
        stderr=completed.stderr or "",
    )


def merge_file(current: Path, base: Path, other: Path) -> int:
    """Run ``git merge-file -q`` over the three files and return its status.

    The merged result, with conflict markers if any, lands in ``current``.
    The status is the number of conflicts, or negative on error.
    """
    result = run_git(["merge-file", "-q", str(current), str(base), str(other)], capture=False)
    return result.returncode
