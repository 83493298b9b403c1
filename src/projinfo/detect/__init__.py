"""Project inspection: convention, metadata, workspaces, files and commit state.

Usage:
    from projinfo.detect import inspect_project

    report = inspect_project(Path("/path/to/project"))

    print(report.project.name, report.display_version)
    if report.monorepo and report.monorepo.is_monorepo:
        print(report.monorepo.all_members)
"""

import logging
import time
from pathlib import Path

from ..constants import DEFAULT_DOC_EXTENSIONS
from .files import get_bins, get_docs
from .normalize import normalize
from .probe import ProbeMiss, detect_by_extension, probe
from .result import NormalizedProject, ProjectReport
from .vcs import get_commit
from .workspace import ResolutionError, resolve_workspaces

logger = logging.getLogger(__name__)


def detect_project(project_path: Path) -> NormalizedProject:
    """Detect a project's convention and return its normalized metadata.

    Marker files are probed first; the extension scan of subdirectories
    only runs when no marker file matched.
    """
    project_path = project_path.resolve()
    raw = probe(project_path)
    fallback = None if raw else detect_by_extension(project_path)
    return normalize(raw, project_path.name, fallback=fallback)


def inspect_project(
    project_path: Path,
    *,
    quick: bool = False,
    doc_extensions: tuple[str, ...] = DEFAULT_DOC_EXTENSIONS,
) -> ProjectReport:
    """Inspect project_path and build the complete report.

    CONTRACT:
      Inputs:
        - project_path: directory to inspect, must exist
        - quick: skip slow git lookups (branch and commit count)
        - doc_extensions: extensions of files listed as documentation

      Outputs:
        - ProjectReport with metadata, workspaces, docs, bins and commit

      Raises:
        - ProbeMiss: if the directory is not a recognized project
        - ResolutionError: if a declared workspace directory is missing

      Algorithm:
        1. Probe conventions, falling back to the extension scan
        2. Stop with ProbeMiss if nothing was detected
        3. Resolve workspaces for conventions that support them
        4. List documentation files and binaries
        5. Query git for the latest commit
    """
    project_path = project_path.resolve()
    logger.debug(f"Inspecting {project_path}")
    start_time = time.perf_counter()

    project = detect_project(project_path)
    if not project.is_valid:
        raise ProbeMiss(f"No recognized project in {project_path}")
    logger.debug(
        f"Detected {project.convention.value} project '{project.name}' "
        f"(package manager: {project.package_manager_hint})"
    )

    monorepo = resolve_workspaces(project_path, project)
    if monorepo is not None:
        logger.debug(
            f"Workspaces: {len(monorepo.groups)} groups, "
            f"{len(monorepo.all_members)} packages ({monorepo.source_kind})"
        )

    docs = get_docs(project_path, doc_extensions)
    bins = get_bins(project_path, project)
    logger.debug(f"Found {len(docs)} doc files, {len(bins)} binaries")

    commit = get_commit(project_path, quick=quick)

    duration_ms = int((time.perf_counter() - start_time) * 1000)
    logger.debug(f"Inspection completed in {duration_ms}ms")

    return ProjectReport(
        project=project,
        monorepo=monorepo,
        docs=tuple(docs),
        bins=tuple(bins),
        commit=commit,
    )


__all__ = [
    "ProbeMiss",
    "ProjectReport",
    "ResolutionError",
    "detect_project",
    "inspect_project",
]
