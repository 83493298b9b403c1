"""Supported project conventions and the marker files that identify them."""

from dataclasses import dataclass, field
from enum import Enum


class Convention(str, Enum):
    """Project kinds, one per supported ecosystem."""

    PHP = "php"
    PYTHON = "python"
    NODE = "node"


@dataclass(frozen=True)
class ConventionSpec:
    """Marker files and file extensions belonging to one convention.

    Attributes:
        convention: Convention this entry describes
        primary_files: Files that are parsed, merged left to right
        auxiliary_files: Files whose existence alone identifies the convention
        extensions: Source extensions used by the fallback scan
        bin_extension: Extension of executable scripts in the project root
        non_bin_files: Root files with `bin_extension` that are not binaries
    """

    convention: Convention
    primary_files: tuple[str, ...]
    auxiliary_files: tuple[str, ...] = ()
    extensions: tuple[str, ...] = ()
    bin_extension: str | None = None
    non_bin_files: frozenset[str] = field(default_factory=frozenset)

    @property
    def marker_files(self) -> tuple[str, ...]:
        """Primary files followed by auxiliary files."""
        return self.primary_files + self.auxiliary_files


# Probe order matters: the first convention that accepts wins
CONVENTION_TABLE: tuple[ConventionSpec, ...] = (
    ConventionSpec(
        convention=Convention.PHP,
        primary_files=("composer.json",),
        extensions=("php",),
        bin_extension="php",
    ),
    ConventionSpec(
        convention=Convention.PYTHON,
        primary_files=("setup.cfg", "setup.py"),
        auxiliary_files=("requirements.txt",),
        extensions=("py", "py2", "py3"),
        bin_extension="py",
        non_bin_files=frozenset({"setup.py"}),
    ),
    ConventionSpec(
        convention=Convention.NODE,
        primary_files=("package.json",),
        auxiliary_files=("yarn.lock", "package-lock.json"),
        extensions=("js",),
        bin_extension="js",
    ),
)

# Lock file that selects the alternative package manager for node projects
YARN_LOCK = "yarn.lock"

# External workspace manifest for node monorepos
WORKSPACE_MANIFEST = "lerna.json"


def get_convention_spec(
    convention: Convention, table: tuple[ConventionSpec, ...] = CONVENTION_TABLE
) -> ConventionSpec:
    """Look up the table entry for a convention.

    Raises:
        KeyError: If the convention is not part of the table
    """
    for spec in table:
        if spec.convention is convention:
            return spec
    raise KeyError(convention)


def package_manager_for(
    convention: Convention, auxiliary_existence: dict[str, bool]
) -> str:
    """Return the package manager a project of this convention uses."""
    if convention is Convention.NODE:
        return "yarn" if auxiliary_existence.get(YARN_LOCK) else "npm"
    return convention.value


def supports_workspaces(convention: Convention | None) -> bool:
    """Whether projects of this convention can declare sub-packages."""
    return convention is Convention.NODE
