"""Convention probing: decide which kind of project a directory holds."""

import logging
from pathlib import Path
from typing import Any

from .conventions import CONVENTION_TABLE, Convention, ConventionSpec
from .parsers import ParseError, read_config_file
from .result import RawProjectData

logger = logging.getLogger(__name__)


class ProbeMiss(Exception):
    """Raised when a directory is not a recognized project."""

    pass


def read_primary_files(
    project_path: Path, primary_files: tuple[str, ...]
) -> dict[str, Any]:
    """Parse and merge a convention's primary files.

    Files are merged in declared order, so keys from later files override
    earlier ones. Files that are missing or fail to parse contribute
    nothing.
    """
    data: dict[str, Any] = {}
    for filename in primary_files:
        file_path = project_path / filename
        if not file_path.exists():
            continue
        try:
            parsed = read_config_file(file_path, project_path)
        except ParseError as e:
            logger.warning(f"Ignoring malformed {filename}: {e}")
            continue
        if parsed:
            data.update(parsed)
    return data


def check_marker_files(
    project_path: Path, marker_files: tuple[str, ...]
) -> dict[str, bool]:
    """Map each marker file name to whether it exists in project_path."""
    return {filename: (project_path / filename).exists() for filename in marker_files}


def probe(
    project_path: Path,
    table: tuple[ConventionSpec, ...] = CONVENTION_TABLE,
) -> RawProjectData | None:
    """Return data for the first convention in table that matches project_path.

    CONTRACT:
      Inputs:
        - project_path: directory to inspect
        - table: conventions in priority order

      Outputs:
        - RawProjectData for the first accepted convention
        - None if no convention accepts

      Invariants:
        - A convention is accepted when its merged primary data is non-empty
          or at least one of its auxiliary files exists
        - Probing stops at the first accepted convention
        - Existence is reported for every primary and auxiliary file
        - Parse failures never propagate
    """
    for spec in table:
        parsed = read_primary_files(project_path, spec.primary_files)
        existence = check_marker_files(project_path, spec.marker_files)
        auxiliary_found = any(existence[f] for f in spec.auxiliary_files)

        if not parsed and not auxiliary_found:
            logger.debug(f"Convention {spec.convention.value} did not match")
            continue

        logger.debug(
            f"Convention {spec.convention.value} matched "
            f"({len(parsed)} fields, auxiliary files found: {auxiliary_found})"
        )
        return RawProjectData(
            convention=spec.convention,
            parsed_fields=parsed,
            auxiliary_existence=existence,
        )
    return None


def count_subdirectory_files(project_path: Path, extensions: tuple[str, ...]) -> int:
    """Count files one directory below project_path with one of the extensions.

    Files in project_path itself are not counted, and hidden directories
    and files are skipped.
    """
    wanted = {f".{ext.lower()}" for ext in extensions}
    count = 0
    for subdir in project_path.iterdir():
        if subdir.name.startswith(".") or not subdir.is_dir():
            continue
        try:
            entries = list(subdir.iterdir())
        except OSError as e:
            logger.debug(f"Cannot list {subdir}: {e}")
            continue
        count += sum(
            1
            for entry in entries
            if not entry.name.startswith(".")
            and entry.suffix.lower() in wanted
            and entry.is_file()
        )
    return count


def detect_by_extension(
    project_path: Path,
    table: tuple[ConventionSpec, ...] = CONVENTION_TABLE,
) -> Convention | None:
    """Guess a project's convention from the source files in its subdirectories.

    The convention with the most matching files wins; ties go to the
    convention listed first in table. Returns None when no files match.
    """
    counts = [
        (spec.convention, count_subdirectory_files(project_path, spec.extensions))
        for spec in table
    ]
    logger.debug(
        "Fallback file counts: "
        + ", ".join(f"{conv.value}={count}" for conv, count in counts)
    )
    # sorted() is stable, so equal counts keep table order
    ranked = sorted(counts, key=lambda item: item[1], reverse=True)
    for convention, count in ranked:
        if count > 0:
            return convention
    return None
