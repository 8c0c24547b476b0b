"""Scrubbing of fields that differ between dumps of identical schemas.

mysqldump stamps every dump with its completion time and records the
current ``AUTO_INCREMENT`` counter of each table. Neither reflects a schema
change, yet both make otherwise identical dumps conflict.
"""

from __future__ import annotations

import logging
import re

__all__ = [
    "DUMP_TIMESTAMP_PATTERN",
    "AUTO_INCREMENT_PATTERN",
    "merge_dump_timestamps",
    "scrub_auto_increment_values",
]

logger = logging.getLogger(__name__)

DUMP_TIMESTAMP_PATTERN = re.compile(r"^(?P<prefix>-- Dump completed on )(?P<timestamp>.+)$", re.MULTILINE)
# ") ENGINE=InnoDB AUTO_INCREMENT=42 DEFAULT CHARSET=utf8mb4;"
AUTO_INCREMENT_PATTERN = re.compile(r"^(?P<head>\)(?= ).*) AUTO_INCREMENT=\d+(?=.*;$)", re.MULTILINE)


def merge_dump_timestamps(contents: list[str]) -> str | None:
    """Rewrite every dump timestamp in ``contents`` to the latest one found.

    Timestamps compare as strings; mysqldump writes them in a fixed
    ``YYYY-MM-DD HH:MM:SS`` layout, where that order is chronological.
    Returns the timestamp applied, or None when no text carries one.
    """
    latest = max(
        (match.group("timestamp") for content in contents for match in DUMP_TIMESTAMP_PATTERN.finditer(content)),
        default=None,
    )
    if latest is None:
        return None

    for index, content in enumerate(contents):
        contents[index] = DUMP_TIMESTAMP_PATTERN.sub(lambda match: match.group("prefix") + latest, content)
    logger.debug("Unified dump timestamps to %s", latest)
    return latest


def scrub_auto_increment_values(contents: list[str]) -> None:
    """Delete ``AUTO_INCREMENT=<n>`` table options from every text in place."""
    for index, content in enumerate(contents):
        contents[index] = AUTO_INCREMENT_PATTERN.sub(lambda match: match.group("head"), content)
