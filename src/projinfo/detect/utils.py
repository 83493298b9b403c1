"""Shared file reading helpers for project inspection.

Manifests are read through these helpers so that symlinks pointing
outside the inspected directory are never followed.
"""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

# Manifests larger than this are truncated and will fail to parse
MAX_MANIFEST_BYTES = 1024 * 1024


def is_safe_path(file_path: Path, project_root: Path) -> bool:
    """Check if file path is safe to read.

    Validates that:
    1. The file is not a symbolic link
    2. The resolved path is within the project boundary

    Args:
        file_path: Path to validate
        project_root: Project root directory

    Returns:
        True if path is safe to read, False otherwise
    """
    if file_path.is_symlink():
        logger.debug(f"Skipping symlinked file: {file_path}")
        return False

    try:
        file_path.resolve().relative_to(project_root.resolve())
        return True
    except ValueError:
        logger.warning(f"File outside project boundary: {file_path}")
        return False


def safe_read_text(
    file_path: Path, project_root: Path, limit: int = MAX_MANIFEST_BYTES
) -> str | None:
    """Safely read a text file with symlink protection and size limit.

    Returns:
        File content (at most `limit` characters), or None if the file
        is missing, unsafe or unreadable
    """
    if not file_path.is_file() or not is_safe_path(file_path, project_root):
        return None

    try:
        with open(file_path, encoding="utf-8") as f:
            return f.read(limit)
    except (OSError, UnicodeDecodeError) as e:
        logger.warning(f"Failed to read {file_path}: {e}")
        return None


def basename(path_str: str) -> str:
    """Return the last segment of a slash-separated path string."""
    return path_str.rstrip("/").split("/")[-1]
