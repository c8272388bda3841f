"""Parsing and normalization helpers for configuration values.

Provides boolean parsing, integer parsing with warnings, and header-table
normalization used by other config sub-modules.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)

_VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
_VALID_TRANSPORTS = {"stdio", "streamable-http"}


def _parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in {"true", "1", "yes", "on"}


def _try_parse_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    normalized = str(value).strip().lower()
    if normalized in {"true", "1", "yes", "on"}:
        return True
    if normalized in {"false", "0", "no", "off"}:
        return False
    return None


def _parse_int(value: Any, *, source: str) -> Tuple[Optional[int], Optional[str]]:
    """Parse an integer setting, returning (value, warning).

    Booleans are rejected even though ``bool`` subclasses ``int``; a TOML
    ``timeout_ms = true`` is a typo, not a one millisecond timeout.
    """
    if isinstance(value, bool):
        return None, f"Ignoring {source}: expected integer, got {value!r}"
    try:
        return int(str(value).strip()), None
    except (TypeError, ValueError):
        return None, f"Ignoring {source}: expected integer, got {value!r}"


def _clamp_min(value: int, minimum: int, *, source: str) -> Tuple[int, Optional[str]]:
    if value < minimum:
        return minimum, f"{source}={value} is below {minimum}; using {minimum}"
    return value, None


def _normalize_log_level(value: str) -> str:
    normalized = str(value).strip().upper()
    if normalized not in _VALID_LOG_LEVELS:
        logger.warning(
            "Invalid log level '%s'. Falling back to 'INFO'. Valid options: %s",
            value,
            ", ".join(sorted(_VALID_LOG_LEVELS)),
        )
        return "INFO"
    return normalized


def _normalize_transport(value: str) -> str:
    normalized = str(value).strip().lower().replace("_", "-")
    if normalized == "http":
        normalized = "streamable-http"
    if normalized not in _VALID_TRANSPORTS:
        logger.warning(
            "Invalid transport '%s'. Falling back to 'stdio'. Valid options: %s",
            value,
            ", ".join(sorted(_VALID_TRANSPORTS)),
        )
        return "stdio"
    return normalized


def _parse_headers(mapping: Any, *, source: str) -> Tuple[Dict[str, str], List[str]]:
    """Parse a ``[api.headers]`` table into a str->str dict, collecting warnings."""
    headers: Dict[str, str] = {}
    warnings: List[str] = []

    if not isinstance(mapping, dict):
        warnings.append(f"Ignoring {source}: expected table/dict, got {type(mapping).__name__}")
        return headers, warnings

    for raw_name, raw_value in mapping.items():
        if not isinstance(raw_name, str) or not raw_name.strip():
            warnings.append(f"Ignoring header with invalid name from {source}: {raw_name!r}")
            continue
        if isinstance(raw_value, (dict, list)):
            warnings.append(f"Ignoring header '{raw_name}' from {source}: value must be a scalar")
            continue
        headers[raw_name.strip()] = str(raw_value)

    return headers, warnings
