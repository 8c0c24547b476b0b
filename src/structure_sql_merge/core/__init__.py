"""Process plumbing shared by the merge driver and the installer."""

from __future__ import annotations

from .git import GitCommandResult, merge_file, run_git

__all__ = ["GitCommandResult", "merge_file", "run_git"]
