"""Legacy mysqldump dialect: one ledger INSERT statement per migration.

    INSERT INTO schema_migrations (version) VALUES ('20210101000000');

    INSERT INTO schema_migrations (version) VALUES ('20210102000000');

Such dumps also carry volatile fields that are scrubbed before the ledger
is merged.
"""

from __future__ import annotations

import re

from .base import VERSION_SHAPE, Dialect, Envelope, iter_lines
from .volatility import merge_dump_timestamps, scrub_auto_increment_values

DUMP_HEADER = re.compile(r"^-- MySQL dump ", re.MULTILINE)
STATEMENT = re.compile(
    rf"INSERT INTO schema_migrations \(version\) VALUES \('(?P<version>{VERSION_SHAPE})'\);(?P<tail>\s*)"
)


def _statement_version(line: str) -> str | None:
    match = STATEMENT.fullmatch(line)
    # A statement must be followed by whitespace to count as a ledger entry.
    if match is None or not match.group("tail"):
        return None
    return match.group("version")


class MySQLDialect(Dialect):
    name = "mysql"

    def matches(self, text: str) -> bool:
        return DUMP_HEADER.search(text) is not None

    def find_envelope(self, text: str) -> Envelope | None:
        """Locate the first run of ledger statements and their trailing blank lines."""
        start: int | None = None
        end = 0
        versions: list[str] = []
        for offset, line in iter_lines(text):
            version = _statement_version(line)
            if version is not None:
                if start is None:
                    start = offset
                versions.append(version)
                end = offset + len(line)
            elif start is not None and not line.strip():
                end = offset + len(line)
            elif start is not None:
                break

        if start is None:
            return None
        return Envelope(start, end, tuple(versions))

    def extract_versions(self, text: str) -> list[str]:
        # Every ledger statement counts, not only the run that gets replaced.
        versions = []
        for _, line in iter_lines(text):
            version = _statement_version(line)
            if version is not None:
                versions.append(version)
        return versions

    def scrub(self, contents: list[str]) -> None:
        merge_dump_timestamps(contents)
        scrub_auto_increment_values(contents)

    def render(self, versions: list[str]) -> str:
        return "".join(f"INSERT INTO schema_migrations (version) VALUES ('{version}');\n\n" for version in versions)
