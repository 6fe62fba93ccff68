from __future__ import annotations

"""
Configuration Validation Service.

Ensures the configuration dictionary conforms to the expected schema before
anything is materialized. Handles type coercion, path expansion and default
value injection.
"""

import codecs
import logging
from typing import Any, Dict, List, Tuple

from mkfiletree.domain.config import get_default_config
from mkfiletree.infra.fs import normalize_path
from mkfiletree.infra.logging.config import _LEVEL_MAP

logger = logging.getLogger(__name__)

_STRING_FIELDS = ["root", "encoding", "log_level", "log_file"]
_BOOL_FIELDS = ["temp", "keep_temp", "create_parents", "dry_run"]


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_config(
        config: Any,
        *,
        strict: bool = False,
) -> Tuple[Dict[str, Any], List[str]]:
    """
    Validate and normalize the provided configuration dictionary.

    Args:
        config: Raw configuration data (usually a dictionary).
        strict: If True, raises exceptions on invalid input instead of coercing.

    Returns:
        Tuple[Dict[str, Any], List[str]]: Normalized configuration and warnings.
    """
    warnings: List[str] = []
    defaults = get_default_config()

    if not isinstance(config, dict):
        msg = f"Invalid config type: expected dict, received {type(config).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using defaults.")
        logger.warning(msg)
        return defaults, warnings

    merged: Dict[str, Any] = dict(defaults)
    merged.update(config)

    for field in _STRING_FIELDS:
        merged[field] = _as_str(merged.get(field), defaults[field], field, warnings, strict)

    for field in _BOOL_FIELDS:
        merged[field] = _as_bool(merged.get(field), defaults[field], field, warnings, strict)

    merged["root"] = normalize_path(merged["root"], defaults["root"])
    merged["encoding"] = _check_encoding(merged["encoding"], defaults["encoding"], warnings, strict)
    merged["log_level"] = _check_level(merged["log_level"], defaults["log_level"], warnings, strict)

    if merged["temp"] and merged["root"]:
        msg = "Options 'temp' and 'root' are mutually exclusive."
        if strict:
            raise ValueError(msg)
        warnings.append(f"{msg} Ignoring 'root'.")
        merged["root"] = ""

    return merged, warnings


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _as_str(value: Any, fallback: str, field: str, warnings: List[str], strict: bool) -> str:
    """Validate and sanitize string inputs."""
    if value is None:
        return fallback
    if isinstance(value, str):
        v = value.strip()
        return v if v else fallback

    msg = f"Invalid field '{field}': expected str, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_bool(value: Any, fallback: bool, field: str, warnings: List[str], strict: bool) -> bool:
    """Coerce various input types into native booleans."""
    if isinstance(value, bool):
        return value
    if value is None:
        return fallback

    if not strict:
        if isinstance(value, (int, float)) and value in (0, 1):
            warnings.append(f"Field '{field}' converted from number {value} to bool.")
            return bool(value)
        if isinstance(value, str):
            s = value.strip().lower()
            if s in ("true", "1", "yes", "y", "on"):
                warnings.append(f"Field '{field}' converted from '{value}' to True.")
                return True
            if s in ("false", "0", "no", "n", "off"):
                warnings.append(f"Field '{field}' converted from '{value}' to False.")
                return False

    msg = f"Invalid field '{field}': expected bool, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: DOMAIN NORMALIZATION
# -----------------------------------------------------------------------------

def _check_encoding(encoding: str, fallback: str, warnings: List[str], strict: bool) -> str:
    """Ensure the text encoding is known to the codec registry."""
    try:
        return codecs.lookup(encoding).name
    except LookupError:
        msg = f"Unknown encoding '{encoding}'."
        if strict:
            raise ValueError(msg)
        warnings.append(f"{msg} Using '{fallback}'.")
        return fallback


def _check_level(level: str, fallback: str, warnings: List[str], strict: bool) -> str:
    upper = level.upper()
    if upper in _LEVEL_MAP:
        return upper
    msg = f"Unknown log level '{level}'."
    if strict:
        raise ValueError(msg)
    warnings.append(f"{msg} Using '{fallback}'.")
    return fallback
