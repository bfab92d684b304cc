"""
Utilities for finding CODEOWNERS files on disk.
"""

from pathlib import Path

import structlog

from file_codeowners.core.config import config

logger = structlog.get_logger(__name__)


def find_codeowners_in_directory(directory: str | Path) -> Path | None:
    """
    Find a CODEOWNERS file directly inside a directory.

    Args:
        directory: Directory to look in (usually a repository root)

    Returns:
        Path of the first configured candidate that exists, or None
    """
    base = Path(directory)
    for candidate in config.locator.candidates:
        path = base / candidate
        if path.is_file():
            return path
    return None


def find_nearest_codeowners(start: str | Path = ".") -> Path | None:
    """
    Find the nearest CODEOWNERS file, walking up from a directory.

    Args:
        start: Directory to start from

    Returns:
        Path of the CODEOWNERS file, or None if no ancestor has one
    """
    current = Path(start).resolve()
    for directory in (current, *current.parents):
        path = find_codeowners_in_directory(directory)
        if path is not None:
            return path

    logger.warning("codeowners_not_found", start=str(current))
    return None
