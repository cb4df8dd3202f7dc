"""ccreport: a text report over cold-clear optimizer result files.

Main modules:
- scanner: list result files, match keys and extract values
- report: line output and pivot tables
- config: default keys, result directory and environment overrides
- cli: the ``ccreport`` command
"""

from .config import DEFAULT_KEYS, KeysFileError, ReportError
from .models import MatchMode, ReportRow
from .scanner import MissingDirectoryError, iter_rows, run

# Import version information
from .version import VERSION

__all__ = [
    "DEFAULT_KEYS",
    "VERSION",
    "KeysFileError",
    "MatchMode",
    "MissingDirectoryError",
    "ReportError",
    "ReportRow",
    "iter_rows",
    "run",
]
