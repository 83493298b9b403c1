"""Reshape raw convention data into a NormalizedProject."""

import logging
import re
from typing import Any

from .conventions import Convention, package_manager_for
from .result import NormalizedProject, RawProjectData

logger = logging.getLogger(__name__)

# python_requires constraints that rule out Python 2
_PY3_MINIMUM = re.compile(r"(?:>=?|~=)\s?3")
_PY3_UPPER_BOUND = re.compile(r"<\s?4")


def parse_python_major(python_requires: str | None) -> int | None:
    """Classify a python_requires constraint as Python 2 or 3.

    Returns 3 for constraints such as ">=3.6", "~=3.8" or "<4", 2 for any
    other constraint, and None when there is no constraint.
    """
    if python_requires is None:
        return None
    if _PY3_MINIMUM.search(python_requires) or _PY3_UPPER_BOUND.search(
        python_requires
    ):
        return 3
    return 2


def _first_non_empty(*candidates: Any) -> Any:
    for candidate in candidates:
        if candidate:
            return candidate
    return None


def _normalize_python_fields(parsed: dict[str, Any]) -> dict[str, Any]:
    """Lift setup.cfg [metadata] to the top level and derive extra fields."""
    metadata = parsed.get("metadata")
    if not isinstance(metadata, dict):
        metadata = {}

    fields = {key: val for key, val in parsed.items() if key != "metadata"}
    fields.update(metadata)

    fields["homepage"] = _first_non_empty(
        metadata.get("home-page"),
        metadata.get("url"),
        parsed.get("home-page"),
        parsed.get("url"),
    )

    options = parsed.get("options")
    python_requires = (
        options.get("python_requires") if isinstance(options, dict) else None
    )
    fields["python_version"] = parse_python_major(python_requires)
    return fields


def normalize(
    raw: RawProjectData | None,
    cwd_base_name: str,
    *,
    fallback: Convention | None = None,
) -> NormalizedProject:
    """Build a NormalizedProject from probe output.

    CONTRACT:
      Inputs:
        - raw: output of probe(), or None if no convention matched
        - cwd_base_name: directory name used when the project has no name
        - fallback: convention guessed from file extensions when raw is None

      Outputs:
        - NormalizedProject whose fields always contain "name"

      Invariants:
        - raw is never modified
        - is_valid is True iff raw or fallback is present
        - package_manager_hint is None iff no convention was detected
    """
    if raw is None:
        if fallback is not None:
            logger.debug(f"Using extension fallback convention {fallback.value}")
        return NormalizedProject(
            convention=fallback,
            fields={"name": cwd_base_name},
            auxiliary_existence={},
            is_valid=fallback is not None,
            package_manager_hint=(
                package_manager_for(fallback, {}) if fallback is not None else None
            ),
        )

    if raw.convention is Convention.PYTHON:
        fields = _normalize_python_fields(raw.parsed_fields)
    else:
        fields = dict(raw.parsed_fields)

    if not fields.get("name"):
        fields["name"] = cwd_base_name

    return NormalizedProject(
        convention=raw.convention,
        fields=fields,
        auxiliary_existence=dict(raw.auxiliary_existence),
        is_valid=True,
        package_manager_hint=package_manager_for(
            raw.convention, raw.auxiliary_existence
        ),
    )
