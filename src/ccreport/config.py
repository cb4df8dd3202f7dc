"""Report configuration loaded from environment variables and keys files."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import List, Optional, Sequence

import yaml

from .models import MatchMode

logger = logging.getLogger(__name__)

__all__ = [
    "DEFAULT_KEYS",
    "DEFAULT_RESULT_DIR",
    "RESULT_FILE_PATTERN",
    "KeysFileError",
    "ReportError",
    "load_keys_file",
    "resolve_directory",
    "resolve_keys",
    "resolve_match_mode",
]

# Quotes anchor the match: bumpiness" skips bumpiness_sq,
# "jeopardy skips timed_jeopardy.
DEFAULT_KEYS = (
    "clear1",
    "clear2",
    "clear4",
    "back_to_back",
    'bumpiness"',
    "perfect_clear",
    '"jeopardy',
)

DEFAULT_RESULT_DIR = "~/.local/share/tttz/thirdparty/cold-clear/optimizer/best"

# Substring a directory entry must contain to count as a result file
RESULT_FILE_PATTERN = "json"

# Environment overrides, read at call time
ENV_DIR = "CCREPORT_DIR"
ENV_KEYS = "CCREPORT_KEYS"  # comma-separated
ENV_MATCH = "CCREPORT_MATCH"


class ReportError(Exception):
    """Base exception for report errors."""

    pass


class KeysFileError(ReportError):
    """Raised when a keys file cannot be loaded."""

    pass


def _split_env_keys(raw: str) -> List[str]:
    return [k.strip() for k in raw.split(",") if k.strip()]


def resolve_directory(directory: Optional[str] = None) -> Path:
    """Return the result directory to scan.

    Args:
        directory: Explicit directory, e.g. from ``--dir``

    Returns:
        Path with ``~`` expanded. Falls back to ``$CCREPORT_DIR`` and then
        to :data:`DEFAULT_RESULT_DIR`.
    """
    if not directory:
        directory = os.getenv(ENV_DIR) or DEFAULT_RESULT_DIR
    path = Path(directory).expanduser()
    logger.debug("Result directory: %s", path)
    return path


def load_keys_file(path: str) -> List[str]:
    """Load an ordered key list from a YAML file with a ``keys:`` list."""
    keys_path = Path(path).expanduser()
    try:
        with open(keys_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except OSError as exc:
        raise KeysFileError(f"Cannot read keys file {keys_path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise KeysFileError(f"Invalid YAML in keys file {keys_path}: {exc}") from exc

    keys = data.get("keys") if isinstance(data, dict) else None
    if not isinstance(keys, list) or not keys:
        raise KeysFileError(f"Keys file {keys_path} has no 'keys' list")
    if not all(isinstance(k, str) and k for k in keys):
        raise KeysFileError(f"Keys file {keys_path} must list non-empty strings")
    return list(keys)


def resolve_keys(
    keys: Optional[Sequence[str]] = None,
    keys_file: Optional[str] = None,
) -> List[str]:
    """Return the ordered key list.

    Precedence: explicit ``keys``, then ``keys_file``, then
    ``$CCREPORT_KEYS``, then :data:`DEFAULT_KEYS`. Blank keys raise
    :class:`ReportError` before anything is scanned.
    """
    if keys:
        resolved = list(keys)
    elif keys_file:
        resolved = load_keys_file(keys_file)
    else:
        resolved = _split_env_keys(os.getenv(ENV_KEYS, "")) or list(DEFAULT_KEYS)
    blank = [k for k in resolved if not k.strip()]
    if blank:
        raise ReportError(f"Keys must not be empty or blank: {blank!r}")
    logger.debug("Keys: %s", resolved)
    return resolved


def resolve_match_mode(mode: Optional[str] = None) -> MatchMode:
    """Return the match mode from ``mode`` or ``$CCREPORT_MATCH``."""
    if not mode:
        mode = os.getenv(ENV_MATCH) or MatchMode.SUBSTRING.value
    return MatchMode.parse(mode)
