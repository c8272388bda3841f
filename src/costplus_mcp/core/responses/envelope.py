"""Success and failure envelopes for Cost Plus Drugs tool results.

Success envelope ``data``::

    {
        "payload": <upstream payload, unmodified>,
        "total_results": <len(payload) for sequences, else 1>,
        "query_time_ms": <int>,
        "additional_info": {
            "total_results", "query_time", "data_source", "last_updated",
            "api_version", "disclaimer", "notes", "warnings", "next_actions"
        }
    }

Failure envelope ``data``::

    {
        "error_code", "error_type", "remediation",
        "details": {"kind", "severity", "correlation_id", "retryable", ...},
        "partial_data": <any>,
        "context": {"tool_name", "user_input"}
    }
"""

import logging
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from costplus_mcp.core.errors.api import ApiErrorKind, ClassifiedError
from costplus_mcp.core.errors.classifier import ErrorClassifier
from costplus_mcp.core.responses.builders import error_response, success_response
from costplus_mcp.core.responses.types import (
    RESPONSE_VERSION,
    ErrorCode,
    ErrorType,
    ToolResponse,
)

logger = logging.getLogger(__name__)

DISCLAIMER = (
    "Medication information provided for informational purposes only. "
    "Always consult healthcare professionals for medical advice."
)

CLINICAL_NOTES: Tuple[str, ...] = (
    "Cost Plus Drugs provides affordable medications with transparent pricing.",
    "All medications are FDA-approved and sourced from licensed manufacturers.",
    "Prices shown are current as of the query time and may change.",
)


@dataclass(frozen=True)
class NextAction:
    tool: str
    reason: str
    parameters_hint: str

    def to_dict(self) -> Dict[str, str]:
        return {"tool": self.tool, "reason": self.reason, "parameters_hint": self.parameters_hint}


DEFAULT_NEXT_ACTIONS: Tuple[NextAction, ...] = (
    NextAction(
        tool="search_medicines",
        reason="Search for other medications by name or active ingredient",
        parameters_hint="query: [medication name]",
    ),
    NextAction(
        tool="get_collections",
        reason="Browse medication categories to find related treatments",
        parameters_hint="No parameters needed",
    ),
    NextAction(
        tool="get_all_products",
        reason="Page through medications within a category",
        parameters_hint="collection: [collection id], first: [1-1000]",
    ),
)

# kind -> (error_code, error_type, remediation)
_FAILURE_MAPPING: Dict[ApiErrorKind, Tuple[ErrorCode, ErrorType, str]] = {
    ApiErrorKind.TIMEOUT: (
        ErrorCode.UPSTREAM_TIMEOUT,
        ErrorType.UNAVAILABLE,
        "The Cost Plus Drugs API did not respond in time. Retry the request later.",
    ),
    ApiErrorKind.CONNECTION_ERROR: (
        ErrorCode.UPSTREAM_UNAVAILABLE,
        ErrorType.UNAVAILABLE,
        "The Cost Plus Drugs API is unreachable. Retry the request later.",
    ),
    ApiErrorKind.RATE_LIMIT: (
        ErrorCode.RATE_LIMITED,
        ErrorType.RATE_LIMIT,
        "The Cost Plus Drugs API is rate limiting requests. Wait before retrying.",
    ),
    ApiErrorKind.INVALID_RESPONSE: (
        ErrorCode.INVALID_UPSTREAM_RESPONSE,
        ErrorType.INTERNAL,
        "The Cost Plus Drugs API returned an unreadable response. Retry later or report the issue.",
    ),
    ApiErrorKind.HTTP_ERROR: (
        ErrorCode.UPSTREAM_ERROR,
        ErrorType.INTERNAL,
        "The Cost Plus Drugs API rejected the request. Check the parameters and try again.",
    ),
    ApiErrorKind.VALIDATION_ERROR: (
        ErrorCode.VALIDATION_ERROR,
        ErrorType.VALIDATION,
        "Fix the invalid parameters described in details and call the tool again.",
    ),
    ApiErrorKind.UNKNOWN: (
        ErrorCode.INTERNAL_ERROR,
        ErrorType.INTERNAL,
        "An unexpected error occurred. Check the server logs for details.",
    ),
}


def count_results(payload: Any) -> int:
    """Number of results represented by ``payload``."""
    if isinstance(payload, (list, tuple)):
        return len(payload)
    return 1


class ResponseEnvelopeFormatter:
    """Wraps tool results and failures in the standard response contract.

    Stateless apart from configuration; one instance is shared by all tools.

    Args:
        data_source: Label reported as ``additional_info.data_source``
        api_version: Label reported as ``additional_info.api_version``
        classifier: Used to classify non-classified exceptions passed to
            :meth:`wrap_failure`
        next_actions: Follow-up hints attached to every success envelope
    """

    def __init__(
        self,
        *,
        data_source: str = "Cost Plus Drugs API",
        api_version: str = "v1",
        classifier: Optional[ErrorClassifier] = None,
        next_actions: Sequence[NextAction] = DEFAULT_NEXT_ACTIONS,
    ):
        self._data_source = data_source
        self._api_version = api_version
        self._classifier = classifier or ErrorClassifier()
        self._next_actions = tuple(next_actions)

    def wrap_success(
        self,
        payload: Any,
        start_time: Optional[float] = None,
        *,
        warnings: Optional[Sequence[str]] = None,
        request_id: Optional[str] = None,
    ) -> ToolResponse:
        """Build a success envelope around ``payload``.

        Args:
            payload: Tool result; included as-is, never mutated
            start_time: ``time.perf_counter()`` value captured when the tool
                started; elapsed time is measured from here when given
            warnings: Tool-specific warnings for ``additional_info.warnings``
            request_id: Explicit correlation id for ``meta.request_id``
        """
        started = start_time if start_time is not None else time.perf_counter()
        query_time_ms = max(int(round((time.perf_counter() - started) * 1000)), 0)
        total_results = count_results(payload)
        warning_list: List[str] = list(warnings or [])

        additional_info: Dict[str, Any] = {
            "total_results": total_results,
            "query_time": f"{query_time_ms}ms",
            "data_source": self._data_source,
            "last_updated": datetime.now(timezone.utc).isoformat(),
            "api_version": self._api_version,
            "disclaimer": DISCLAIMER,
            "notes": list(CLINICAL_NOTES),
            "warnings": warning_list,
            "next_actions": [action.to_dict() for action in self._next_actions],
        }

        return success_response(
            payload=payload,
            total_results=total_results,
            query_time_ms=query_time_ms,
            additional_info=additional_info,
            warnings=warning_list or None,
            telemetry={"duration_ms": query_time_ms},
            request_id=request_id,
        )

    def wrap_failure(
        self,
        error: BaseException,
        partial_data: Any = None,
        context: Optional[Mapping[str, Any]] = None,
    ) -> ToolResponse:
        """Build a failure envelope for ``error``. Never raises.

        Args:
            error: A ``ClassifiedError``, or any exception (classified here)
            partial_data: Whatever the tool managed to produce before failing
            context: ``{"tool_name": ..., "user_input": ...}``
        """
        try:
            return self._build_failure(error, partial_data, context)
        except Exception:
            logger.exception("Failed to build failure envelope for %s", type(error).__name__)
            return ToolResponse(
                success=False,
                data={
                    "error_code": ErrorCode.INTERNAL_ERROR.value,
                    "error_type": ErrorType.INTERNAL.value,
                },
                error="An internal error occurred",
                meta={"version": RESPONSE_VERSION},
            )

    def _build_failure(
        self,
        error: BaseException,
        partial_data: Any,
        context: Optional[Mapping[str, Any]],
    ) -> ToolResponse:
        classified = error if isinstance(error, ClassifiedError) else self._classifier.classify(error)
        error_code, error_type, remediation = _FAILURE_MAPPING.get(
            classified.kind, _FAILURE_MAPPING[ApiErrorKind.UNKNOWN]
        )

        context_data: Dict[str, Any] = dict(context or {})
        data = {
            "partial_data": partial_data,
            "context": {
                "tool_name": context_data.pop("tool_name", None),
                "user_input": context_data.pop("user_input", None),
                **context_data,
            },
        }

        rate_limit = None
        retry_after = classified.details.get("retry_after")
        if classified.kind == ApiErrorKind.RATE_LIMIT and retry_after is not None:
            rate_limit = {"retry_after": retry_after}

        return error_response(
            classified.message,
            data=data,
            error_code=error_code,
            error_type=error_type,
            remediation=remediation,
            details=classified.to_dict(),
            request_id=classified.correlation_id or None,
            rate_limit=rate_limit,
        )
