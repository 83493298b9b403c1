"""Shared constants for projinfo."""

# Column separator: U+2502 BOX DRAWINGS LIGHT VERTICAL
LINE = " │ "

# Default width of the scripts, bin and doc columns
DEFAULT_COLUMN_WIDTH = 23
MIN_COLUMN_WIDTH = 8

# Extensions of files listed as documentation
DEFAULT_DOC_EXTENSIONS: tuple[str, ...] = ("md", "rst", "txt")

# Files that share a documentation extension but are not documentation
NON_DOC_FILES = frozenset({"requirements.txt"})

# Label in front of each table column
COLUMN_LABELS = {
    "scripts": "run",
    "bins": "bin",
    "docs": "doc",
}

# Per-project configuration file, looked up in the inspected directory
CONFIG_FILENAME = ".projinfo.yaml"
