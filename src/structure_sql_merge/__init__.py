"""git merge driver for the ``db/structure.sql`` schema dump of a Rails project.

Usage:
    git-merge-structure-sql <current-file> <base-file> <other-file>
    git-merge-structure-sql --install [--local]
"""

__version__ = "0.1.0"

from .dialects import DIALECTS, Dialect, get_dialect, identify  # noqa: E402
from .driver import MergeResult, merge_contents, run_merge_driver  # noqa: E402
from .errors import StructureSqlMergeError  # noqa: E402

__all__ = [
    "__version__",
    "DIALECTS",
    "Dialect",
    "MergeResult",
    "StructureSqlMergeError",
    "get_dialect",
    "identify",
    "merge_contents",
    "run_merge_driver",
]
