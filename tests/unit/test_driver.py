"""Unit tests for the merge driver orchestration (generic merge stubbed)."""

from __future__ import annotations

from pathlib import Path

import pytest

from structure_sql_merge.driver import merge_contents, read_dump, run_merge_driver, write_dump
from structure_sql_merge.errors import DriverIOError

HEADER = 'INSERT INTO "schema_migrations" (version) VALUES\n'


def dump(*versions: str) -> str:
    return "CREATE TABLE t (id integer);\n" + HEADER + ",\n".join(f"('{v}')" for v in versions) + ";\n\n"


class RecordingRunner:
    def __init__(self, exit_code: int = 0):
        self.exit_code = exit_code
        self.calls: list[tuple[Path, Path, Path]] = []
        self.snapshots: list[list[bytes]] = []

    def __call__(self, current: Path, base: Path, other: Path) -> int:
        self.calls.append((current, base, other))
        self.snapshots.append([path.read_bytes() for path in (current, base, other)])
        return self.exit_code


def _write(tmp_path: Path, ours: str, base: str, theirs: str) -> tuple[Path, Path, Path]:
    paths = (tmp_path / "ours", tmp_path / "base", tmp_path / "theirs")
    for path, content in zip(paths, (ours, base, theirs)):
        path.write_bytes(content.encode("utf-8"))
    return paths


def test_rewrites_all_three_files_before_generic_merge(tmp_path: Path) -> None:
    paths = _write(tmp_path, dump("1", "2"), dump("1"), dump("1", "3"))
    runner = RecordingRunner()

    result = run_merge_driver(*paths, runner=runner)

    assert result.dialect == "default"
    assert result.supported
    assert result.exit_code == 0
    assert runner.calls == [paths]
    expected = dump("1", "2", "3").encode("utf-8")
    assert runner.snapshots[0] == [expected, expected, expected]


def test_generic_merge_status_is_passed_through(tmp_path: Path) -> None:
    paths = _write(tmp_path, dump("1"), dump("1"), dump("2"))

    result = run_merge_driver(*paths, runner=RecordingRunner(exit_code=2))

    assert result.exit_code == 2


def test_unsupported_format_leaves_files_byte_identical(tmp_path: Path) -> None:
    originals = ["CREATE TABLE a (id int);\r\n", "CREATE TABLE b (id int);\n", "\xe9\n"]
    paths = _write(tmp_path, *originals)
    runner = RecordingRunner(exit_code=1)

    result = run_merge_driver(*paths, runner=runner)

    assert result.dialect is None
    assert not result.supported
    assert result.exit_code == 1
    assert len(runner.calls) == 1
    assert [path.read_bytes() for path in paths] == [text.encode("utf-8") for text in originals]


def test_dialect_is_taken_from_current_file(tmp_path: Path) -> None:
    mysql = "-- MySQL dump 10.13\nINSERT INTO schema_migrations (version) VALUES ('1');\n\n"
    paths = _write(tmp_path, dump("1"), mysql, dump("2"))

    result = run_merge_driver(*paths, runner=RecordingRunner())

    assert result.dialect == "default"
    # The base text has no default-style envelope and is left alone.
    assert paths[1].read_text(encoding="utf-8") == mysql
    assert paths[0].read_text(encoding="utf-8") == dump("1", "2")


def test_missing_file_is_reported_before_anything_is_written(tmp_path: Path) -> None:
    ours, base, theirs = _write(tmp_path, dump("1"), dump("1"), dump("2"))
    theirs.unlink()
    runner = RecordingRunner()

    with pytest.raises(DriverIOError) as excinfo:
        run_merge_driver(ours, base, theirs, runner=runner)

    assert excinfo.value.path == theirs
    assert runner.calls == []
    assert ours.read_text(encoding="utf-8") == dump("1")


def test_crlf_and_undecodable_bytes_round_trip(tmp_path: Path) -> None:
    path = tmp_path / "dump.sql"
    raw = b"-- \xff\xfe\r\nSELECT 1;\r\n"
    path.write_bytes(raw)

    write_dump(path, read_dump(path))

    assert path.read_bytes() == raw


def test_merge_contents_returns_none_for_unsupported_text() -> None:
    contents = ["a\n", "b\n", "c\n"]
    assert merge_contents(contents) is None
    assert contents == ["a\n", "b\n", "c\n"]


def test_merge_contents_merges_in_place() -> None:
    contents = [dump("2"), dump("1"), dump("3")]

    dialect = merge_contents(contents)

    assert dialect is not None and dialect.name == "default"
    assert contents == [dump("1", "2", "3")] * 3
