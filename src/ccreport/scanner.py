"""
Text scanner for optimizer result files.

Result files are read as opaque text rather than parsed as JSON: the
contents are split on commas into fragments, fragments containing a key
are kept, and whatever follows the first colon becomes the value.

Rows are produced key-major: every file is reported for the first key
before any file is reported for the second.
"""

import logging
import os
import re
import sys
from collections import Counter
from pathlib import Path
from typing import IO, Iterator, List, Optional, Sequence, Union

from .config import RESULT_FILE_PATTERN, ReportError
from .models import MatchMode, ReportRow
from .report import write_lines

logger = logging.getLogger(__name__)

__all__ = [
    "MissingDirectoryError",
    "extract_value",
    "field_name",
    "iter_rows",
    "list_result_files",
    "match_fragments",
    "read_result_file",
    "row_label",
    "run",
    "scan_file",
    "split_fragments",
]

_IDENTIFIER = re.compile(r"[A-Za-z0-9_]+")


class MissingDirectoryError(ReportError):
    """Raised when the result directory does not exist."""

    pass


def list_result_files(
    directory: Union[str, Path],
    pattern: str = RESULT_FILE_PATTERN,
    sort: bool = True,
) -> List[Path]:
    """List directory entries whose name contains ``pattern``.

    Matching is case-sensitive substring containment, so ``jsonexport.txt``
    matches and ``result.JSON`` does not.

    Args:
        directory: Directory to list
        pattern: Substring the entry name must contain
        sort: Sort names; otherwise keep the platform listing order

    Returns:
        Paths of matching entries

    Raises:
        MissingDirectoryError: If ``directory`` is not an existing directory
    """
    root = Path(directory)
    if not root.is_dir():
        raise MissingDirectoryError(f"Result directory not found: {root}")

    names = [name for name in os.listdir(root) if pattern in name]
    if sort:
        names.sort()
    logger.debug("Found %d result files in %s", len(names), root)
    return [root / name for name in names]


def row_label(path: Path) -> str:
    """File name with one trailing ``.json`` removed."""
    name = path.name
    if name.endswith(".json"):
        return name[: -len(".json")]
    return name


def read_result_file(path: Path) -> Optional[str]:
    """Read a whole result file, or return None if it cannot be read."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("Skipping unreadable file %s: %s", path, exc)
        return None


def split_fragments(text: str) -> List[str]:
    """Split file contents on commas."""
    return text.split(",")


def field_name(fragment: str) -> str:
    """Last identifier before the first colon, e.g. ``clear1`` in ``{"clear1": 5``."""
    if ":" not in fragment:
        return ""
    head = fragment.split(":", 1)[0]
    identifiers = _IDENTIFIER.findall(head)
    return identifiers[-1] if identifiers else ""


def match_fragments(
    fragments: Sequence[str],
    key: str,
    mode: MatchMode = MatchMode.SUBSTRING,
) -> List[str]:
    """Keep the fragments that match ``key``.

    In substring mode ``clear1`` also matches ``clear10:9``. Exact mode
    compares the fragment's field name against the key with its quote
    characters removed.
    """
    if MatchMode.parse(mode) is MatchMode.EXACT:
        bare_key = key.strip().strip("\"'")
        return [f for f in fragments if field_name(f) == bare_key]
    return [f for f in fragments if key in f]


def extract_value(fragment: str) -> str:
    """Everything after the first colon, whitespace stripped."""
    parts = fragment.split(":", 1)
    if len(parts) < 2:
        return ""
    return parts[1].strip()


def scan_file(
    path: Path,
    key: str,
    mode: MatchMode = MatchMode.SUBSTRING,
) -> List[ReportRow]:
    """Return the rows one file yields for one key."""
    text = read_result_file(path)
    if text is None:
        return []

    fragments = split_fragments(text)
    matches = match_fragments(fragments, key, mode)
    logger.debug("%s: %d/%d fragments match %r", path.name, len(matches), len(fragments), key)

    name = row_label(path)
    return [ReportRow(name=name, value=extract_value(f), key=key) for f in matches]


def iter_rows(
    directory: Union[str, Path],
    keys: Sequence[str],
    mode: MatchMode = MatchMode.SUBSTRING,
    sort: bool = True,
) -> Iterator[ReportRow]:
    """Yield report rows, key-major then file-major.

    The directory is listed once up front, so a missing directory fails
    before any row is produced.
    """
    files = list_result_files(directory, sort=sort)
    labels = Counter(row_label(path) for path in files)
    for label, count in labels.items():
        if count > 1:
            logger.warning("%d result files share the row label %r", count, label)
    for key in keys:
        for path in files:
            yield from scan_file(path, key, mode)


def run(
    directory: Union[str, Path],
    keys: Sequence[str],
    stream: Optional[IO[str]] = None,
    mode: MatchMode = MatchMode.SUBSTRING,
    sort: bool = True,
) -> List[ReportRow]:
    """Print the report for ``directory`` and return the rows written.

    Lines are written as each file is scanned.
    """
    if stream is None:
        stream = sys.stdout
    return write_lines(iter_rows(directory, keys, mode=mode, sort=sort), stream)
