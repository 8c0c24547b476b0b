"""Dialect registry for schema dump formats.

The set of dialects is closed. ``DIALECTS`` lists them in precedence order,
most specific first, because detectors are not mutually exclusive: a
mysqldump file could also contain text the default detector accepts.
"""

from __future__ import annotations

import logging

from ..errors import UnknownDialectError
from .base import VERSION_SHAPE, Dialect, Envelope, union_versions
from .default import DefaultDialect
from .mysql import MySQLDialect
from .postgresql import LeadingCommaDialect

__all__ = [
    "DIALECTS",
    "VERSION_SHAPE",
    "Dialect",
    "DefaultDialect",
    "Envelope",
    "LeadingCommaDialect",
    "MySQLDialect",
    "get_dialect",
    "identify",
    "union_versions",
]

logger = logging.getLogger(__name__)

DIALECTS: tuple[Dialect, ...] = (
    MySQLDialect(),
    LeadingCommaDialect(),
    DefaultDialect(),
)


def identify(sample: str) -> Dialect | None:
    """Return the first registered dialect whose detector matches ``sample``."""
    for dialect in DIALECTS:
        if dialect.matches(sample):
            logger.debug("Detected %s dialect", dialect.name)
            return dialect
    return None


def get_dialect(name: str) -> Dialect:
    """Look up a registered dialect by name."""
    for dialect in DIALECTS:
        if dialect.name == name:
            return dialect
    raise UnknownDialectError(name)
