"""Monorepo workspace discovery for node projects.

Workspace globs come from two places: the `packages` list of an external
lerna.json and the `workspaces` field of package.json. Both contribute
groups keyed by the directory in front of the trailing wildcard; groups
from package.json replace lerna.json groups with the same key.
"""

import logging
from pathlib import Path
from typing import Any

from .conventions import WORKSPACE_MANIFEST, supports_workspaces
from .parsers import ParseError, read_config_file
from .result import MonorepoInfo, NormalizedProject, WorkspaceGroup

logger = logging.getLogger(__name__)

_WILDCARD_SUFFIXES = ("/**", "/*")


class ResolutionError(Exception):
    """Raised when a declared workspace glob points at a missing directory."""

    pass


def _glob_list(value: Any) -> list[str]:
    """Extract workspace globs from a list or a {"packages": [...]} mapping."""
    if isinstance(value, dict):
        value = value.get("packages")
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, str)]


def list_member_dirs(project_path: Path, prefix: str) -> list[str]:
    """List sub-package directory names directly inside project_path/prefix.

    Raises:
        ResolutionError: If the directory does not exist
    """
    base = project_path / prefix
    if not base.is_dir():
        raise ResolutionError(f"Workspace path '{prefix}' does not exist in {project_path}")
    return sorted(
        entry.name
        for entry in base.iterdir()
        if entry.is_dir() and not entry.name.startswith(".")
    )


def resolve_globs(project_path: Path, globs: list[str]) -> dict[str, list[str]]:
    """Resolve workspace globs into member directories keyed by prefix.

    Globs of the form `<prefix>/*` list every directory under <prefix>.
    A glob without a wildcard names one package directory, which joins
    the group of its parent directory. Other patterns are skipped.

    Raises:
        ResolutionError: If a glob refers to a directory that does not exist
    """
    groups: dict[str, list[str]] = {}
    for glob in globs:
        if glob.startswith("!"):
            logger.debug(f"Skipping negated workspace glob: {glob}")
            continue

        suffix = next((s for s in _WILDCARD_SUFFIXES if glob.endswith(s)), None)
        if suffix is not None:
            prefix = glob[: -len(suffix)]
            if any(c in prefix for c in "*?[{"):
                logger.warning(f"Unsupported workspace glob: {glob}")
                continue
            groups[prefix] = list_member_dirs(project_path, prefix)
            continue

        if any(c in glob for c in "*?[{"):
            logger.warning(f"Unsupported workspace glob: {glob}")
            continue

        package_dir = project_path / glob
        if not package_dir.is_dir():
            raise ResolutionError(
                f"Workspace package '{glob}' does not exist in {project_path}"
            )
        prefix, _, member = glob.rstrip("/").rpartition("/")
        groups.setdefault(prefix, []).append(member)
    return groups


def resolve_workspaces(
    project_path: Path, normalized: NormalizedProject
) -> MonorepoInfo | None:
    """Discover the workspace package groups of a project.

    CONTRACT:
      Inputs:
        - project_path: project root directory
        - normalized: project metadata from normalize()

      Outputs:
        - MonorepoInfo, or None if the convention has no workspaces

      Invariants:
        - package.json groups override lerna.json groups with the same prefix
        - is_monorepo is True iff at least one group was declared
        - source_kind is "external-manifest" iff lerna.json exists

      Raises:
        - ResolutionError: if a declared workspace directory is missing
    """
    if not supports_workspaces(normalized.convention):
        return None

    manifest_path = project_path / WORKSPACE_MANIFEST
    manifest_exists = manifest_path.exists()
    manifest_data: dict[str, Any] | None = None
    if manifest_exists:
        try:
            manifest_data = read_config_file(manifest_path, project_path)
        except ParseError as e:
            logger.warning(f"Ignoring malformed {WORKSPACE_MANIFEST}: {e}")

    manifest_globs = _glob_list((manifest_data or {}).get("packages"))
    inline_globs = _glob_list(normalized.fields.get("workspaces"))
    logger.debug(
        f"Workspace globs: {WORKSPACE_MANIFEST}={manifest_globs}, "
        f"package.json={inline_globs}"
    )

    packages = resolve_globs(project_path, manifest_globs)
    packages.update(resolve_globs(project_path, inline_globs))

    groups = tuple(
        WorkspaceGroup(glob_prefix=prefix, member_dirs=tuple(members))
        for prefix, members in packages.items()
    )
    return MonorepoInfo(
        is_monorepo=len(groups) > 0,
        source_kind="external-manifest" if manifest_exists else "inline-field",
        groups=groups,
        manifest_data=manifest_data,
    )
