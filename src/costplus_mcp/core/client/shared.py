"""Shared HTTP utilities for the Cost Plus Drugs client.

Architecture constraints:
    - Imports only from stdlib and httpx types (no httpx.AsyncClient creation)
    - SECURITY: error text and headers pass through redaction before they
      reach logs or response envelopes.

Utilities:
    - redact_secrets(text) -> str
    - redact_headers(headers) -> dict
    - parse_retry_after(response) -> Optional[float]
    - response_excerpt(text) -> str
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    import httpx

RESPONSE_EXCERPT_LENGTH = 200

# Regex to detect potential API keys / bearer tokens in strings
_SECRET_PATTERN = re.compile(
    r"(?i)"
    r"(?:"
    r"(?:api[_-]?key|token|bearer|authorization|secret|password|credential)"
    r"[\s:=]+"
    r")"
    r"['\"]?([^\s'\"]{8,})['\"]?",
)

# Headers that should never appear in logs/errors
_SENSITIVE_HEADERS = frozenset(
    {
        "authorization",
        "x-api-key",
        "api-key",
        "apikey",
        "cookie",
        "set-cookie",
        "proxy-authorization",
    }
)


def redact_secrets(text: str) -> str:
    """Remove API keys and bearer tokens from a text string.

    Scans for patterns like ``api_key=...``, ``Bearer ...``, ``token: ...``
    and replaces the secret portion with ``"****"``.
    """
    if not text:
        return text

    def _replace(match: re.Match[str]) -> str:
        full = match.group(0)
        secret = match.group(1)
        return full.replace(secret, "****")

    return _SECRET_PATTERN.sub(_replace, text)


def redact_headers(headers: dict[str, str]) -> dict[str, str]:
    """Return a copy of *headers* with sensitive values redacted."""
    return {key: "****" if key.lower() in _SENSITIVE_HEADERS else value for key, value in headers.items()}


def parse_retry_after(response: "httpx.Response") -> Optional[float]:
    """Parse the ``Retry-After`` header from an HTTP response.

    Handles numeric values only; date-based values return ``None``.
    """
    retry_after = response.headers.get("Retry-After")
    if retry_after:
        try:
            return float(retry_after)
        except ValueError:
            pass
    return None


def response_excerpt(text: Optional[str]) -> str:
    """First ``RESPONSE_EXCERPT_LENGTH`` characters of a response body, redacted."""
    if not text:
        return ""
    return redact_secrets(text[:RESPONSE_EXCERPT_LENGTH])
