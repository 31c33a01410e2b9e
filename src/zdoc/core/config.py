"""Property store read at startup.

Properties are kept as a flat JSON object of string keys. Values may be
strings, booleans, numbers or lists of strings; everything is normalized
to strings so callers read a single representation.

Recognized keys:
    pattern.class, pattern.function, pattern.field:
        Regular expressions replacing the default declaration patterns.
    only_annotated:
        Keep only files that received annotations.
    exclude, exclude.class, exclude.function, exclude.field:
        Comma separated names excluded from matching (or from compilation).
    ignore:
        Comma separated Lua file names that are never annotated.

Any other key names a compiled Lua document and overrides its class name;
an empty value skips the document.

Example:
    >>> properties = load_properties(Path("annotate.json"))
    >>> get_bool(properties, "only_annotated")
    False
"""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from zdoc.core.exceptions import ConfigError
from zdoc.utils.logger import get_logger

logger = get_logger("zdoc.core.config")

PATTERN_KEY_PREFIX = "pattern."
EXCLUDE_KEY = "exclude"
ONLY_ANNOTATED_KEY = "only_annotated"
IGNORE_KEY = "ignore"

RESERVED_KEYS = {EXCLUDE_KEY, ONLY_ANNOTATED_KEY, IGNORE_KEY}

DEFAULT_PROPERTIES: Dict[str, str] = {
    ONLY_ANNOTATED_KEY: "false",
    EXCLUDE_KEY: "",
    IGNORE_KEY: "",
}

_TRUE_VALUES = {"true", "yes", "on", "1"}
_FALSE_VALUES = {"false", "no", "off", "0", ""}


def _normalize_value(key: str, value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float, str)):
        return str(value)
    if isinstance(value, list) and all(isinstance(item, str) for item in value):
        return ",".join(value)
    if value is None:
        return ""
    raise ConfigError(f"Unsupported value for property '{key}': {value!r}")


def is_reserved_key(key: str) -> bool:
    """Return True for keys that configure zdoc rather than name a document."""
    return (
        key in RESERVED_KEYS
        or key.startswith(PATTERN_KEY_PREFIX)
        or key.startswith(EXCLUDE_KEY + ".")
    )


def split_list(value: Optional[str]) -> List[str]:
    """Split a comma separated property value, dropping blanks.

    Example:
        >>> split_list(" IsoPlayer, ,IsoZombie ")
        ['IsoPlayer', 'IsoZombie']
    """
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


def get_bool(properties: Mapping[str, str], key: str, default: bool = False) -> bool:
    """Read a boolean property.

    Raises:
        ConfigError: If the value is not a recognizable boolean.
    """
    value = properties.get(key)
    if value is None:
        return default
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ConfigError(f"Property '{key}' must be a boolean, got '{value}'")


def validate_properties(properties: Mapping[str, str]) -> None:
    """Validate a normalized property store.

    Raises:
        ConfigError: If a pattern does not compile, lacks a ``name`` group,
            or a boolean property is malformed.
    """
    for key, value in properties.items():
        if not key.startswith(PATTERN_KEY_PREFIX) or not value:
            continue
        try:
            compiled = re.compile(value)
        except re.error as exc:
            raise ConfigError(f"Invalid regular expression for '{key}': {exc}") from exc
        if "name" not in compiled.groupindex:
            raise ConfigError(f"Pattern '{key}' must define a named group 'name'")

    get_bool(properties, ONLY_ANNOTATED_KEY)


def load_properties(path: Optional[Path] = None) -> Dict[str, str]:
    """Load a property store, falling back to defaults for missing keys.

    Args:
        path: JSON file to read. None returns the defaults.

    Returns:
        Normalized mapping of property keys to string values.

    Raises:
        ConfigError: If the file is missing, not a JSON object or invalid.
    """
    properties = dict(DEFAULT_PROPERTIES)
    if path is None:
        return properties

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise ConfigError(f"Property file not found: {path}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in property file {path}: {exc}") from exc

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Property file {path} must contain a JSON object")

    for key, value in raw.items():
        properties[str(key)] = _normalize_value(str(key), value)

    validate_properties(properties)
    logger.debug(f"Reading {path.name}, found {len(raw)} keys")
    return properties


def document_overrides(properties: Mapping[str, str]) -> Dict[str, str]:
    """Return the class-name overrides (non-reserved keys) of a store."""
    return {key: value for key, value in properties.items() if not is_reserved_key(key)}
