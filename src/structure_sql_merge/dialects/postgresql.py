"""PostgreSQL ledger dialect with leading commas.

    INSERT INTO "schema_migrations" (version) VALUES
     ('20210101000000')
    ,('20210102000000')
    ;
"""

from __future__ import annotations

import re

from .base import VERSION_SHAPE, InsertValuesDialect


class LeadingCommaDialect(InsertValuesDialect):
    name = "postgresql"

    VERSION_LINE = re.compile(rf"[, ]\('(?P<version>{VERSION_SHAPE})'\)\n")
    TERMINATOR = ";"

    def render(self, versions: list[str]) -> str:
        return " " + "\n,".join(f"('{version}')" for version in versions) + "\n;"
