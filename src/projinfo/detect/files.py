"""Documentation and binary file listings for a project root."""

import logging
from pathlib import Path
from typing import Any

from ..constants import DEFAULT_DOC_EXTENSIONS, NON_DOC_FILES
from .conventions import Convention, get_convention_spec
from .result import NormalizedProject
from .utils import basename

logger = logging.getLogger(__name__)


def list_files(project_path: Path) -> list[str]:
    """Names of the regular files directly inside project_path."""
    return sorted(entry.name for entry in project_path.iterdir() if entry.is_file())


def filter_by_extension(files: list[str], extensions: tuple[str, ...]) -> list[str]:
    """Keep files whose extension is one of extensions, ignoring case."""
    wanted = {ext.lower().lstrip(".") for ext in extensions}
    return [f for f in files if "." in f and f.rsplit(".", 1)[1].lower() in wanted]


def _is_readme(filename: str) -> bool:
    return filename.split(".")[0].lower() == "readme"


def get_docs(
    project_path: Path, extensions: tuple[str, ...] = DEFAULT_DOC_EXTENSIONS
) -> list[str]:
    """List documentation files, readme files first.

    requirements.txt is a dependency list rather than documentation and
    is never included.
    """
    docs = [
        f
        for f in filter_by_extension(list_files(project_path), extensions)
        if f.lower() not in NON_DOC_FILES
    ]
    return sorted(docs, key=lambda f: (not _is_readme(f), f.lower()))


def get_bins_from_manifest(fields: dict[str, Any]) -> list[str]:
    """Binary names declared by a manifest's `bin` field.

    A mapping declares binaries by key. A single path string or a list of
    paths declares binaries named after each path's last segment.
    """
    declared = fields.get("bin")
    if not declared:
        return []
    if isinstance(declared, dict):
        return list(declared.keys())
    if isinstance(declared, str):
        return [basename(declared)]
    if isinstance(declared, list):
        return [basename(item) for item in declared if isinstance(item, str)]
    logger.debug(f"Ignoring unsupported bin field: {declared!r}")
    return []


def get_bins(project_path: Path, project: NormalizedProject) -> list[str]:
    """Return the binaries a project provides.

    Node projects list every binary in package.json, so the `bin` field is
    the only source. For other conventions, scripts in the project root
    with the convention's extension are added to the declared binaries.
    """
    declared = get_bins_from_manifest(project.fields)
    if project.convention is None or project.convention is Convention.NODE:
        return declared

    spec = get_convention_spec(project.convention)
    if spec.bin_extension is None:
        return declared

    scripts = [
        f
        for f in filter_by_extension(list_files(project_path), (spec.bin_extension,))
        if f not in spec.non_bin_files
    ]
    bins = list(declared)
    bins.extend(f for f in scripts if f not in bins)
    return bins
