"""Default ledger dialect: PostgreSQL, SQLite and newer MySQL dumps.

    INSERT INTO "schema_migrations" (version) VALUES
    ('20210101000000'),
    ('20210102000000');
"""

from __future__ import annotations

import re

from .base import VERSION_SHAPE, InsertValuesDialect


class DefaultDialect(InsertValuesDialect):
    name = "default"

    VERSION_LINE = re.compile(rf"\('(?P<version>{VERSION_SHAPE})'\)[,;]\n")

    def render(self, versions: list[str]) -> str:
        return ",\n".join(f"('{version}')" for version in versions) + ";\n"
