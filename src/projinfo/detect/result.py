"""Data classes for project inspection results.

Every record is frozen: it is built once from its inputs and only read
afterwards by the normalizer, the workspace resolver and the renderer.
"""

from dataclasses import dataclass, field
from typing import Any, Literal

from .conventions import Convention


@dataclass(frozen=True)
class RawProjectData:
    """What the prober found for the first accepted convention."""

    convention: Convention
    parsed_fields: dict[str, Any] = field(default_factory=dict)
    auxiliary_existence: dict[str, bool] = field(default_factory=dict)


@dataclass(frozen=True)
class NormalizedProject:
    """Project metadata reshaped into one structure for all conventions."""

    convention: Convention | None
    fields: dict[str, Any] = field(default_factory=dict)
    auxiliary_existence: dict[str, bool] = field(default_factory=dict)
    is_valid: bool = False
    package_manager_hint: str | None = None

    @property
    def name(self) -> str:
        return self.fields["name"]

    @property
    def scripts(self) -> dict[str, str]:
        """Script name to command mapping; empty when not declared."""
        scripts = self.fields.get("scripts")
        return scripts if isinstance(scripts, dict) else {}


@dataclass(frozen=True)
class WorkspaceGroup:
    """Sub-package directories found under one workspace glob."""

    glob_prefix: str
    member_dirs: tuple[str, ...] = ()


@dataclass(frozen=True)
class MonorepoInfo:
    """Workspace package groups declared by a project."""

    is_monorepo: bool
    source_kind: Literal["external-manifest", "inline-field"]
    groups: tuple[WorkspaceGroup, ...] = ()
    manifest_data: dict[str, Any] | None = None

    @property
    def all_members(self) -> list[str]:
        """All member directories, concatenated in group order."""
        return [member for group in self.groups for member in group.member_dirs]


@dataclass(frozen=True)
class CommitInfo:
    """State of the latest commit, all fields None when git is unavailable."""

    date_iso: str | None = None
    date_relative: str | None = None
    hash: str | None = None
    branch: str | None = None
    commit_count: int | None = None
    is_initial_commit: bool = False
    exists_but_empty: bool = False


@dataclass(frozen=True)
class ProjectReport:
    """Complete inspection result handed to the presentation layer."""

    project: NormalizedProject
    monorepo: MonorepoInfo | None = None
    docs: tuple[str, ...] = ()
    bins: tuple[str, ...] = ()
    commit: CommitInfo = field(default_factory=CommitInfo)

    @property
    def display_version(self) -> str:
        """Project version, falling back to the workspace manifest's version."""
        version = self.project.fields.get("version")
        if version:
            return str(version)
        if self.monorepo and self.monorepo.manifest_data:
            manifest_version = self.monorepo.manifest_data.get("version")
            if manifest_version:
                return str(manifest_version)
        return "unknown"
