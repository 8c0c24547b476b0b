"""Registration of the merge driver in git configuration.

Installing writes the ``merge.<driver>`` definition with ``git config`` and
associates ``structure.sql`` with the driver in an attributes file. Both
steps are safe to repeat.
"""

from __future__ import annotations

import logging
import os
import re
import shlex
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from .constants import DRIVER_DESCRIPTION, DRIVER_NAME, DUMP_FILENAME, PROG_NAME
from .core.git import run_git
from .errors import InstallError

__all__ = [
    "InstallScope",
    "InstallResult",
    "attributes_entry",
    "ensure_attributes_entry",
    "install_driver",
    "resolve_attributes_file",
]

logger = logging.getLogger(__name__)


class InstallScope(str, Enum):
    GLOBAL = "global"
    LOCAL = "local"


@dataclass(frozen=True)
class InstallResult:
    """Files touched by an install."""

    scope: InstallScope
    config_file: Path | None
    attributes_file: Path
    attributes_added: bool


def attributes_entry(driver_name: str = DRIVER_NAME) -> str:
    return f"{DUMP_FILENAME} merge={driver_name}"


def _attributes_pattern(driver_name: str) -> re.Pattern[str]:
    return re.compile(
        rf"^\s*{re.escape(DUMP_FILENAME)}\s+(?:\S+\s+)*merge={re.escape(driver_name)}(?:\s|$)"
    )


def _config_args(scope: InstallScope) -> list[str]:
    return ["config", "--global"] if scope is InstallScope.GLOBAL else ["config"]


def _git_config(scope: InstallScope, key: str, value: str) -> None:
    result = run_git([*_config_args(scope), key, value])
    if not result.ok:
        raise InstallError(f"git config {key} failed: {result.stderr.strip() or result.returncode}")


def locate_config_file(scope: InstallScope) -> Path | None:
    """Return the config file ``git config -e`` would open, if git reports one."""
    result = run_git([*_config_args(scope), "-e"], env={"GIT_EDITOR": "echo"})
    path = result.stdout.strip()
    return Path(path) if result.ok and path else None


def _xdg_config_home() -> Path:
    return Path(os.environ.get("XDG_CONFIG_HOME") or "~/.config").expanduser()


def resolve_attributes_file(scope: InstallScope) -> Path:
    """Find (and for the global scope, register) the attributes file to edit.

    Raises:
        InstallError: If no home directory candidate exists, or the local
            scope is requested outside a git repository.
    """
    if scope is InstallScope.LOCAL:
        result = run_git(["rev-parse", "--git-dir"])
        if not result.ok:
            raise InstallError("not in a git directory")
        return (Path(result.stdout.strip()) / "info" / "attributes").resolve()

    result = run_git(["config", "--global", "core.attributesfile"])
    if result.ok and result.stdout.strip():
        return Path(result.stdout.strip()).expanduser()

    candidates = [
        (_xdg_config_home() / "git", "attributes"),
        (Path("~").expanduser(), ".gitattributes"),
    ]
    for directory, filename in candidates:
        if directory.is_dir():
            attributes_file = directory / filename
            _git_config(InstallScope.GLOBAL, "core.attributesfile", str(attributes_file))
            return attributes_file
    raise InstallError("no home directory to hold a global attributes file")


def ensure_attributes_entry(attributes_file: Path, driver_name: str = DRIVER_NAME) -> bool:
    """Append the ``structure.sql`` driver entry unless one is present.

    Returns True if the file was modified.
    """
    pattern = _attributes_pattern(driver_name)
    if attributes_file.exists():
        lines = attributes_file.read_text(encoding="utf-8").splitlines()
    else:
        lines = []

    if any(pattern.match(line) for line in lines):
        return False

    if lines and lines[-1].strip():
        lines.append("")
    lines.append(attributes_entry(driver_name))
    attributes_file.parent.mkdir(parents=True, exist_ok=True)
    attributes_file.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return True


def install_driver(scope: InstallScope = InstallScope.GLOBAL) -> InstallResult:
    """Define the merge driver and bind ``structure.sql`` to it.

    Raises:
        InstallError: If git configuration cannot be updated.
        GitNotFoundError: If git is not available.
    """
    config_file = locate_config_file(scope)
    _git_config(scope, f"merge.{DRIVER_NAME}.name", DRIVER_DESCRIPTION)
    _git_config(scope, f"merge.{DRIVER_NAME}.driver", f"{shlex.quote(PROG_NAME)} %A %O %B")

    attributes_file = resolve_attributes_file(scope)
    added = ensure_attributes_entry(attributes_file)
    logger.debug("Attributes file %s %s", attributes_file, "updated" if added else "unchanged")
    return InstallResult(
        scope=scope,
        config_file=config_file,
        attributes_file=attributes_file,
        attributes_added=added,
    )
