"""Configuration management for .projinfo.yaml files."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .constants import DEFAULT_COLUMN_WIDTH, DEFAULT_DOC_EXTENSIONS, MIN_COLUMN_WIDTH

logger = logging.getLogger(__name__)

# Current config schema version
CURRENT_VERSION = "1"


class ConfigVersionError(Exception):
    """Raised when config version is incompatible."""

    pass


class ConfigValidationError(Exception):
    """Raised when config values are invalid."""

    pass


def _validate_version(version: Any) -> str:
    """Validate config version and return normalized version string.

    Args:
        version: Version value from config, or None if missing

    Returns:
        Validated version string

    Raises:
        ConfigVersionError: If version is incompatible
    """
    if version is None:
        logger.warning("Config file missing version field, assuming version '1'")
        return CURRENT_VERSION

    try:
        version_num = int(version)
    except (TypeError, ValueError):
        raise ConfigVersionError(
            f"Unrecognized config version '{version}'. "
            f"Supported versions: {CURRENT_VERSION}"
        ) from None

    if version_num > int(CURRENT_VERSION):
        raise ConfigVersionError(
            f"Config file requires projinfo config version {version} or newer. "
            f"This projinfo supports config version {CURRENT_VERSION}. "
            "Please upgrade projinfo to use this config."
        )
    return str(version)


def _validate_bool(data: dict[str, Any], key: str, default: bool) -> bool:
    value = data.get(key, default)
    if not isinstance(value, bool):
        raise ConfigValidationError(f"'{key}' must be true or false, got {value!r}")
    return value


def _validate_column_width(value: Any) -> int:
    """Validate the long column width.

    Raises:
        ConfigValidationError: If the width is not an integer or too small
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigValidationError(f"'column_width' must be an integer, got {value!r}")
    if value < MIN_COLUMN_WIDTH:
        raise ConfigValidationError(
            f"'column_width' must be at least {MIN_COLUMN_WIDTH}, got {value}"
        )
    return value


def _validate_doc_extensions(value: Any) -> tuple[str, ...]:
    """Validate and normalize the list of documentation extensions.

    Leading dots are stripped and extensions are lowercased.

    Raises:
        ConfigValidationError: If the value is not a list of strings
    """
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigValidationError(
            f"'doc_extensions' must be a list of strings, got {value!r}"
        )
    return tuple(ext.lstrip(".").lower() for ext in value if ext.strip("."))


@dataclass
class Config:
    """Represents a .projinfo.yaml configuration."""

    version: str = CURRENT_VERSION

    # Skip the branch and commit count git lookups
    quick: bool = False

    # Output settings
    color: bool = True
    column_width: int = DEFAULT_COLUMN_WIDTH
    doc_extensions: tuple[str, ...] = field(
        default_factory=lambda: DEFAULT_DOC_EXTENSIONS
    )

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load config from a .projinfo.yaml file.

        An empty file yields the defaults.

        Raises:
            ConfigVersionError: If config version is incompatible
            ConfigValidationError: If the file is not valid YAML or a value
                has the wrong type or range
        """
        try:
            with open(path) as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigValidationError(f"{path}: {e}") from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigValidationError(f"{path} must contain a mapping")

        return cls(
            version=_validate_version(data.get("version")),
            quick=_validate_bool(data, "quick", False),
            color=_validate_bool(data, "color", True),
            column_width=_validate_column_width(
                data.get("column_width", DEFAULT_COLUMN_WIDTH)
            ),
            doc_extensions=_validate_doc_extensions(
                data.get("doc_extensions", list(DEFAULT_DOC_EXTENSIONS))
            ),
        )

    @classmethod
    def load_optional(cls, path: Path) -> "Config":
        """Load config from path, or return defaults if the file is missing."""
        if not path.exists():
            logger.debug(f"No config file at {path}, using defaults")
            return cls()
        return cls.load(path)
