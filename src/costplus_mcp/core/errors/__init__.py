"""Error taxonomy for the Cost Plus Drugs client.

Sub-modules:
    api        – ApiErrorKind, ErrorSeverity, ClassifiedError
    upstream   – raw dispatcher failures and ToolInputValidationError
    classifier – ErrorClassifier (classify / derive / log)
"""

from costplus_mcp.core.errors.api import (
    RETRYABLE_KINDS,
    ApiErrorKind,
    ClassifiedError,
    ErrorSeverity,
)
from costplus_mcp.core.errors.classifier import ErrorClassifier
from costplus_mcp.core.errors.upstream import (
    EmptyResponseError,
    MalformedResponseError,
    RequestTimeoutError,
    ResponseShapeError,
    ToolInputValidationError,
    UpstreamError,
    UpstreamStatusError,
)

__all__ = [
    "RETRYABLE_KINDS",
    "ApiErrorKind",
    "ClassifiedError",
    "ErrorClassifier",
    "ErrorSeverity",
    "EmptyResponseError",
    "MalformedResponseError",
    "RequestTimeoutError",
    "ResponseShapeError",
    "ToolInputValidationError",
    "UpstreamError",
    "UpstreamStatusError",
]
