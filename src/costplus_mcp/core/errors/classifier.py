"""Mapping of raw failures onto ``ClassifiedError``.

Classification rules (applied in order):
    1. ``ClassifiedError`` → returned unchanged
    2. ``ToolInputValidationError`` / ``pydantic.ValidationError`` → validation_error, low
    3. ``RequestTimeoutError`` / ``httpx.TimeoutException`` / ``asyncio.TimeoutError`` → timeout, medium
    4. ``httpx.TransportError`` / ``ConnectionError`` → connection_error, high
    5. ``UpstreamStatusError`` → by status (429 rate_limit, 408 timeout,
       502/503/504 connection_error, anything else http_error)
    6. ``EmptyResponseError`` / ``MalformedResponseError`` / ``ResponseShapeError``
       → invalid_response, high
    7. Anything else → unknown, high
"""

import asyncio
import logging
from typing import Any, Dict, Optional

import httpx
from pydantic import ValidationError

from costplus_mcp.core.client.shared import redact_secrets
from costplus_mcp.core.errors.api import ApiErrorKind, ClassifiedError, ErrorSeverity
from costplus_mcp.core.errors.upstream import (
    EmptyResponseError,
    MalformedResponseError,
    RequestTimeoutError,
    ResponseShapeError,
    ToolInputValidationError,
    UpstreamError,
    UpstreamStatusError,
)

logger = logging.getLogger(__name__)

_STATUS_KINDS: Dict[int, tuple[ApiErrorKind, ErrorSeverity]] = {
    429: (ApiErrorKind.RATE_LIMIT, ErrorSeverity.MEDIUM),
    408: (ApiErrorKind.TIMEOUT, ErrorSeverity.MEDIUM),
    502: (ApiErrorKind.CONNECTION_ERROR, ErrorSeverity.HIGH),
    503: (ApiErrorKind.CONNECTION_ERROR, ErrorSeverity.HIGH),
    504: (ApiErrorKind.CONNECTION_ERROR, ErrorSeverity.HIGH),
}

_SEVERITY_LOG_LEVELS = {
    ErrorSeverity.LOW: logging.INFO,
    ErrorSeverity.MEDIUM: logging.WARNING,
    ErrorSeverity.HIGH: logging.ERROR,
    ErrorSeverity.CRITICAL: logging.CRITICAL,
}


def _upstream_details(error: UpstreamError) -> Dict[str, Any]:
    details: Dict[str, Any] = {"endpoint": error.endpoint}
    if error.request_body is not None:
        details["body"] = error.request_body
    if error.response_text is not None:
        details["response_text"] = redact_secrets(error.response_text[:200])
    return details


class ErrorClassifier:
    """Turns raw exceptions into ``ClassifiedError`` and logs them.

    Stateless; safe to share across concurrent requests.
    """

    def classify(self, raw: BaseException, context_label: str = "") -> ClassifiedError:
        """Classify ``raw``; the result carries ``context_label`` and no correlation id."""
        if isinstance(raw, ClassifiedError):
            return raw

        kind, severity, details = self._categorize(raw)
        message = redact_secrets(str(raw)) or type(raw).__name__
        return ClassifiedError(
            message,
            kind=kind,
            severity=severity,
            details=details,
            context_label=context_label,
            original_error=raw,
        )

    def derive(self, error: ClassifiedError, *, correlation_id: str) -> ClassifiedError:
        """Copy ``error`` overriding only its correlation id."""
        return error.with_correlation_id(correlation_id)

    def log(self, error: ClassifiedError, context_label: str) -> None:
        """Emit a structured log record for ``error``. Never raises."""
        try:
            logger.log(
                _SEVERITY_LOG_LEVELS.get(error.severity, logging.ERROR),
                "%s failed [%s/%s] correlation_id=%s: %s",
                context_label,
                error.kind.value,
                error.severity.value,
                error.correlation_id or "-",
                error.message,
                extra={"api_error": error.to_dict(), "context_label": context_label},
            )
        except Exception:  # noqa: BLE001 - log() must not raise into the request path
            logger.debug("Failed to log classified error for %s", context_label, exc_info=True)

    def _categorize(self, raw: BaseException) -> tuple[ApiErrorKind, ErrorSeverity, Dict[str, Any]]:
        if isinstance(raw, ToolInputValidationError):
            return (
                ApiErrorKind.VALIDATION_ERROR,
                ErrorSeverity.LOW,
                {"tool_name": raw.tool_name, "errors": raw.errors},
            )
        if isinstance(raw, ValidationError):
            return (
                ApiErrorKind.VALIDATION_ERROR,
                ErrorSeverity.LOW,
                {"errors": raw.errors(include_url=False, include_context=False)},
            )

        if isinstance(raw, RequestTimeoutError):
            details = _upstream_details(raw)
            details["timeout_seconds"] = raw.timeout_seconds
            return ApiErrorKind.TIMEOUT, ErrorSeverity.MEDIUM, details
        if isinstance(raw, (httpx.TimeoutException, asyncio.TimeoutError)):
            return ApiErrorKind.TIMEOUT, ErrorSeverity.MEDIUM, {"exception": type(raw).__name__}

        if isinstance(raw, (httpx.TransportError, ConnectionError)):
            return ApiErrorKind.CONNECTION_ERROR, ErrorSeverity.HIGH, {"exception": type(raw).__name__}

        if isinstance(raw, UpstreamStatusError):
            kind, severity = _STATUS_KINDS.get(raw.status_code, (ApiErrorKind.HTTP_ERROR, ErrorSeverity.HIGH))
            details = _upstream_details(raw)
            details["status_code"] = raw.status_code
            if raw.retry_after is not None:
                details["retry_after"] = raw.retry_after
            return kind, severity, details

        if isinstance(raw, (EmptyResponseError, MalformedResponseError)):
            details = _upstream_details(raw)
            details["reason"] = raw.reason
            parse_error: Optional[str] = getattr(raw, "parse_error", None)
            if parse_error:
                details["parse_error"] = parse_error
            return ApiErrorKind.INVALID_RESPONSE, ErrorSeverity.HIGH, details
        if isinstance(raw, ResponseShapeError):
            details = _upstream_details(raw)
            details["reason"] = raw.reason
            details["missing"] = raw.missing
            if raw.upstream_errors:
                details["upstream_errors"] = raw.upstream_errors[:5]
            return ApiErrorKind.INVALID_RESPONSE, ErrorSeverity.HIGH, details

        details = {"exception": type(raw).__name__}
        if isinstance(raw, UpstreamError):
            details.update(_upstream_details(raw))
        return ApiErrorKind.UNKNOWN, ErrorSeverity.HIGH, details
