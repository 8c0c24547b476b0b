"""End-to-end merges of real dump fixtures through git merge-file."""

from __future__ import annotations

import shutil
from pathlib import Path

import pytest
from typer.testing import CliRunner

from structure_sql_merge.cli import app
from structure_sql_merge.driver import run_merge_driver

pytestmark = [
    pytest.mark.git_repo,
    pytest.mark.skipif(shutil.which("git") is None, reason="git executable not available"),
]

FIXTURES = Path(__file__).resolve().parent.parent / "fixtures"


def _copy_fixture(name: str, dest: Path) -> tuple[Path, Path, Path]:
    source = FIXTURES / name
    paths = []
    for version in ("ours", "base", "theirs"):
        shutil.copyfile(source / version, dest / version)
        paths.append(dest / version)
    return tuple(paths)


@pytest.mark.parametrize(
    "fixture, dialect",
    [("sqlite3", "default"), ("postgresql", "postgresql"), ("mysql", "mysql")],
)
def test_merges_dump_files(tmp_path: Path, fixture: str, dialect: str) -> None:
    ours, base, theirs = _copy_fixture(fixture, tmp_path)

    result = run_merge_driver(ours, base, theirs)

    assert result.dialect == dialect
    assert result.exit_code == 0
    assert ours.read_bytes() == (FIXTURES / fixture / "merged").read_bytes()


@pytest.mark.parametrize("fixture", ["sqlite3", "postgresql", "mysql"])
def test_merge_is_independent_of_branch_order(tmp_path: Path, fixture: str) -> None:
    ours, base, theirs = _copy_fixture(fixture, tmp_path)

    # Swap the roles of the two branches.
    result = run_merge_driver(theirs, base, ours)

    assert result.exit_code == 0
    assert theirs.read_bytes() == (FIXTURES / fixture / "merged").read_bytes()


def test_merging_merged_output_again_is_a_no_op(tmp_path: Path) -> None:
    merged = FIXTURES / "mysql" / "merged"
    paths = []
    for version in ("ours", "base", "theirs"):
        shutil.copyfile(merged, tmp_path / version)
        paths.append(tmp_path / version)

    result = run_merge_driver(*paths)

    assert result.exit_code == 0
    assert all(path.read_bytes() == merged.read_bytes() for path in paths)


def test_real_schema_conflict_is_left_to_the_user(tmp_path: Path) -> None:
    ours, base, theirs = _copy_fixture("sqlite3", tmp_path)
    header = 'CREATE TABLE IF NOT EXISTS "schema_migrations"'
    ours.write_text(ours.read_text(encoding="utf-8").replace(header, "-- ours\n" + header), encoding="utf-8")
    theirs.write_text(theirs.read_text(encoding="utf-8").replace(header, "-- theirs\n" + header), encoding="utf-8")

    result = run_merge_driver(ours, base, theirs)

    assert result.exit_code > 0
    content = ours.read_text(encoding="utf-8")
    assert "<<<<<<< " in content
    assert "('20210103000000'),\n('20210104000000');\n" in content


def test_command_line_merge(tmp_path: Path) -> None:
    ours, base, theirs = _copy_fixture("postgresql", tmp_path)

    result = CliRunner().invoke(app, [str(ours), str(base), str(theirs)])

    assert result.exit_code == 0
    assert ours.read_bytes() == (FIXTURES / "postgresql" / "merged").read_bytes()
