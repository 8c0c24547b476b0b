"""Shared shape of the version ledger merge.

Every dialect locates its ledger envelope with a small line scanner, splits
the envelope into migration version tokens, and renders the sorted union of
all tokens back in its own punctuation. Rendering is a hard byte-for-byte
contract: merging texts that already carry the merged ledger is a no-op.
"""

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterable, Iterator

__all__ = [
    "VERSION_SHAPE",
    "Envelope",
    "Dialect",
    "InsertValuesDialect",
    "iter_lines",
    "union_versions",
]

logger = logging.getLogger(__name__)

# Migration versions are opaque tokens; Rails writes 14-digit timestamps.
VERSION_SHAPE = r"[0-9A-Za-z_]+"


@dataclass(frozen=True)
class Envelope:
    """Character span of a ledger region and the versions found in it."""

    start: int
    end: int
    versions: tuple[str, ...]


def iter_lines(text: str, start: int = 0) -> Iterator[tuple[int, str]]:
    """Yield ``(offset, line)`` pairs from ``start``; lines keep their ``\\n``.

    Only ``\\n`` separates lines, so ``\\r`` and other characters that
    ``str.splitlines`` treats as breaks stay part of the line.
    """
    offset = start
    length = len(text)
    while offset < length:
        newline = text.find("\n", offset)
        end = length if newline < 0 else newline + 1
        yield offset, text[offset:end]
        offset = end


def union_versions(*ledgers: Iterable[str]) -> list[str]:
    """Return the deduplicated union of all ledgers in lexicographic order."""
    merged: set[str] = set()
    for ledger in ledgers:
        merged.update(ledger)
    return sorted(merged)


class Dialect(ABC):
    """One recognized schema dump syntax."""

    name: str = ""

    def matches(self, text: str) -> bool:
        """Return True when ``text`` structurally belongs to this dialect."""
        return self.find_envelope(text) is not None

    @abstractmethod
    def find_envelope(self, text: str) -> Envelope | None:
        """Locate the ledger region that the rewrite replaces."""

    @abstractmethod
    def render(self, versions: list[str]) -> str:
        """Render versions in the canonical envelope syntax."""

    def extract_versions(self, text: str) -> list[str]:
        """Return the ledger versions of ``text`` in source order."""
        envelope = self.find_envelope(text)
        return list(envelope.versions) if envelope else []

    def scrub(self, contents: list[str]) -> None:
        """Normalize non-semantic noise across ``contents`` in place."""

    def merge_versions(self, contents: list[str]) -> list[str]:
        """Replace every ledger in ``contents`` with the union of all ledgers.

        Texts without a locatable envelope contribute nothing and are left
        as they are. Returns the merged ledger.
        """
        merged = union_versions(*(self.extract_versions(content) for content in contents))
        if not merged:
            logger.debug("%s: no ledger found in any text", self.name)
            return merged

        block = self.render(merged)
        for index, content in enumerate(contents):
            envelope = self.find_envelope(content)
            if envelope is None:
                logger.debug("%s: text #%d has no ledger envelope", self.name, index + 1)
                continue
            contents[index] = content[: envelope.start] + block + content[envelope.end :]

        logger.debug("%s: merged ledger holds %d version(s)", self.name, len(merged))
        return merged

    def merge(self, contents: list[str]) -> list[str]:
        """Run the full dialect merge (scrub, then ledger) over ``contents`` in place."""
        self.scrub(contents)
        return self.merge_versions(contents)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name!r}>"


class InsertValuesDialect(Dialect):
    """Ledger kept in a single multi-row ``INSERT ... VALUES`` statement.

    The envelope begins right after the header line and spans the run of
    version lines that follow it, plus ``TERMINATOR`` when the dialect puts
    the statement terminator on a line of its own.
    """

    HEADER = re.compile(
        r'^INSERT INTO (?P<quote>["`])schema_migrations(?P=quote) \(version\) VALUES\n',
        re.MULTILINE,
    )
    VERSION_LINE: re.Pattern[str]
    TERMINATOR = ""

    def find_envelope(self, text: str) -> Envelope | None:
        for header in self.HEADER.finditer(text):
            start = end = header.end()
            versions: list[str] = []
            for offset, line in iter_lines(text, start):
                match = self.VERSION_LINE.fullmatch(line)
                if match is None:
                    break
                versions.append(match.group("version"))
                end = offset + len(line)

            if not versions:
                continue
            if self.TERMINATOR:
                if not text.startswith(self.TERMINATOR, end):
                    continue
                end += len(self.TERMINATOR)
            return Envelope(start, end, tuple(versions))
        return None
