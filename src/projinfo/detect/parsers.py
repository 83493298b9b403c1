"""Parsers for the configuration formats found in project manifests.

Three formats are supported:
    - JSON documents (package.json, composer.json, lerna.json)
    - INI-style sectioned files (setup.cfg)
    - Literal assignments inside a setup() call (setup.py)

Only the JSON parser can fail. The INI parser ignores lines it does not
understand and the setup.py scraper is a best-effort line matcher that
returns whatever it managed to find.
"""

import json
import logging
import re
from pathlib import Path
from typing import Any

from .utils import safe_read_text

logger = logging.getLogger(__name__)

_INI_SECTION = re.compile(r"^\s*\[\s*([^\]]*)\s*\]\s*$")
_INI_PARAM = re.compile(r"^\s*([^=]+?)\s*=\s*(.*?)\s*$")
_INI_COMMENT = re.compile(r"^\s*;.*$")

# setup.py: capture starts after a line opening the setup( call
_SETUP_CALL = re.compile(r"^\s*setup\(")
# Only single-quoted scalars are recognized
_SETUP_ASSIGNMENT = re.compile(r"^\s*(\w+)\s*=\s*'([^']*)'")


class ParseError(ValueError):
    """Raised when a structured document is not well-formed."""

    pass


def parse_json(text: str) -> dict[str, Any]:
    """Parse a JSON manifest into a mapping.

    Raises:
        ParseError: If the text is not valid JSON or not a JSON object
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ParseError(f"Invalid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ParseError(f"Expected a JSON object, got {type(data).__name__}")
    return data


def parse_ini(text: str) -> dict[str, Any]:
    """Parse INI-style text into a mapping.

    Keys outside any section are stored at the top level, keys inside a
    section are nested under the section name. A blank line closes the
    current section. Opening a section that already exists keeps its
    previous entries.

    Never raises; lines that match none of the patterns are skipped.
    """
    value: dict[str, Any] = {}
    section: dict[str, str] | None = None

    for line in text.splitlines():
        if _INI_COMMENT.match(line):
            continue

        param = _INI_PARAM.match(line)
        if param:
            target = section if section is not None else value
            target[param.group(1)] = param.group(2)
            continue

        header = _INI_SECTION.match(line)
        if header:
            name = header.group(1).strip()
            existing = value.get(name)
            if not isinstance(existing, dict):
                existing = {}
                value[name] = existing
            section = existing
            continue

        if not line.strip() and section is not None:
            section = None

    return value


def parse_setup_py(text: str) -> dict[str, str]:
    """Scrape single-quoted keyword arguments from a setup() call.

    This does not evaluate anything. Double-quoted values, multi-line
    values, nested calls and expressions are not recognized. Lines after
    the one opening the setup( call are matched against
    `name = 'value'`; the last assignment to a name wins.

    Returns an empty mapping if no setup( call is found.
    """
    in_setup = False
    setup_data: dict[str, str] = {}

    for line in text.splitlines():
        if line.strip().startswith("#"):
            continue
        if in_setup:
            match = _SETUP_ASSIGNMENT.match(line)
            if match:
                setup_data[match.group(1)] = match.group(2)
        elif _SETUP_CALL.match(line):
            in_setup = True

    return setup_data


def read_config_file(file_path: Path, project_root: Path) -> dict[str, Any] | None:
    """Read and parse a manifest using the format implied by its extension.

    Returns:
        Parsed mapping, or None if the file is absent, unreadable or its
        extension is not a supported format

    Raises:
        ParseError: If a JSON manifest is malformed
    """
    suffix = file_path.suffix.lower()
    if suffix not in (".json", ".cfg", ".ini", ".py"):
        logger.debug(f"No parser for {file_path.name}")
        return None

    text = safe_read_text(file_path, project_root)
    if text is None:
        return None

    if suffix == ".json":
        return parse_json(text)
    if suffix == ".py":
        return parse_setup_py(text)
    return parse_ini(text)
