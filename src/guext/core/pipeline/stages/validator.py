from __future__ import annotations

"""
Configuration Validation Service.

Gatekeeper between untrusted configuration sources (CLI, persisted JSON) and
the pipeline. Coerces types, injects defaults for missing keys and normalizes
paths and extensions, collecting a warning for every correction made.
"""

import logging
from typing import Any, Dict, List, Tuple

from guext.domain.config import get_default_config
from guext.infra.fs import normalize_path
from guext.infra.logging.config import _LEVEL_MAP

logger = logging.getLogger(__name__)

# Fields whose surrounding whitespace is significant and must not be stripped
_VERBATIM_FIELDS = ("directive_prefix",)


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_config(
        config: Any,
        *,
        strict: bool = False,
) -> Tuple[Dict[str, Any], List[str]]:
    """
    Validate and normalize a configuration dictionary.

    Args:
        config: Raw configuration data (usually a dictionary).
        strict: If True, raise on invalid values instead of falling back.

    Returns:
        Tuple[Dict[str, Any], List[str]]: Normalized configuration and warnings.

    Raises:
        TypeError: In strict mode, on a value of the wrong type.
        ValueError: In strict mode, on a malformed extension or log level.
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
    merged.update({k: v for k, v in config.items() if k in defaults})

    unknown = sorted(k for k in config if k not in defaults)
    if unknown:
        warnings.append(f"Unknown configuration keys ignored: {', '.join(unknown)}.")

    string_fields = [
        "target_dir", "staging_dir_name", "descriptor_pattern",
        "source_extension", "directive_prefix", "aggregate_file_name",
        "global_marker", "log_level", "log_file",
    ]
    bool_fields = ["disable_isolation"]

    for field in string_fields:
        merged[field] = _as_str(
            merged.get(field), defaults.get(field, ""), field, warnings, strict
        )

    for field in bool_fields:
        merged[field] = _as_bool(
            merged.get(field), defaults.get(field, False), field, warnings, strict
        )

    merged["target_dir"] = normalize_path(merged["target_dir"])
    merged["log_file"] = normalize_path(merged["log_file"])
    merged["log_level"] = _normalize_level(
        merged["log_level"], defaults["log_level"], warnings, strict
    )
    merged["source_extension"] = _normalize_extension(
        merged["source_extension"], warnings, strict
    )

    return merged, warnings


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _as_str(value: Any, fallback: str, field: str, warnings: List[str], strict: bool) -> str:
    """Validate string inputs; empty values fall back to the default."""
    if value is None:
        return fallback
    if isinstance(value, str):
        v = value if field in _VERBATIM_FIELDS else value.strip()
        return v if v.strip() else fallback

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

def _normalize_extension(ext: str, warnings: List[str], strict: bool) -> str:
    """Ensure the source extension starts with a dot."""
    if ext.startswith("."):
        return ext
    if strict:
        raise ValueError(f"Invalid extension '{ext}': must start with '.'.")
    warnings.append(f"Extension '{ext}' corrected to '.{ext}'.")
    return "." + ext


def _normalize_level(level: str, fallback: str, warnings: List[str], strict: bool) -> str:
    """Upper-case a logging level name and reject unknown ones."""
    name = level.upper()
    if name in _LEVEL_MAP:
        return name
    msg = f"Invalid log level '{level}'."
    if strict:
        raise ValueError(msg)
    warnings.append(f"{msg} Using '{fallback}'.")
    return fallback
