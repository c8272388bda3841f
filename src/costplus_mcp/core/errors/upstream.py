"""Raw upstream failures raised by the request dispatcher.

These are unclassified: the retry orchestrator hands each one to the
``ErrorClassifier`` which maps it onto an ``ApiErrorKind``.
"""

from typing import Optional


class UpstreamError(Exception):
    """Base exception for a single failed upstream attempt.

    Attributes:
        endpoint: Endpoint path the attempt targeted
        message: Human-readable error description
        request_body: Serialized JSON request body
        response_text: First 200 characters of the response body, if any
    """

    def __init__(
        self,
        endpoint: str,
        message: str,
        *,
        request_body: Optional[str] = None,
        response_text: Optional[str] = None,
    ):
        self.endpoint = endpoint
        self.message = message
        self.request_body = request_body
        self.response_text = response_text
        super().__init__(message)


class UpstreamStatusError(UpstreamError):
    """Raised when the upstream answers with a non-2xx status.

    The body is never parsed as data for these responses, even when present.
    """

    def __init__(
        self,
        endpoint: str,
        status_code: int,
        reason: str = "",
        *,
        request_body: Optional[str] = None,
        response_text: Optional[str] = None,
        retry_after: Optional[float] = None,
    ):
        self.status_code = status_code
        self.reason = reason
        self.retry_after = retry_after
        message = f"HTTP {status_code}: {reason}" if reason else f"HTTP {status_code}"
        super().__init__(
            endpoint,
            message,
            request_body=request_body,
            response_text=response_text,
        )


class EmptyResponseError(UpstreamError):
    """Raised when a 2xx response has an empty or whitespace-only body."""

    reason = "empty"

    def __init__(self, endpoint: str, *, request_body: Optional[str] = None, response_text: str = ""):
        super().__init__(
            endpoint,
            "API returned empty response",
            request_body=request_body,
            response_text=response_text,
        )


class MalformedResponseError(UpstreamError):
    """Raised when a 2xx response body is not valid JSON."""

    reason = "unparsable"

    def __init__(
        self,
        endpoint: str,
        *,
        request_body: Optional[str] = None,
        response_text: str = "",
        parse_error: Optional[str] = None,
    ):
        self.parse_error = parse_error
        super().__init__(
            endpoint,
            "API returned invalid JSON",
            request_body=request_body,
            response_text=response_text,
        )


class ResponseShapeError(UpstreamError):
    """Raised when a decoded response lacks the fields a tool needs.

    GraphQL error bodies (``{"errors": [...], "data": null}``) end up here.
    """

    reason = "unexpected_shape"

    def __init__(
        self,
        endpoint: str,
        missing: str,
        *,
        upstream_errors: Optional[list] = None,
    ):
        self.missing = missing
        self.upstream_errors = upstream_errors or []
        message = f"API response has no {missing}"
        if self.upstream_errors:
            first = self.upstream_errors[0]
            detail = first.get("message") if isinstance(first, dict) else first
            message = f"{message}: {detail}"
        super().__init__(endpoint, message)


class RequestTimeoutError(UpstreamError):
    """Raised when an attempt exceeds its deadline and is cancelled."""

    def __init__(self, endpoint: str, timeout_seconds: float, *, request_body: Optional[str] = None):
        self.timeout_seconds = timeout_seconds
        super().__init__(
            endpoint,
            f"Request to {endpoint} timed out after {timeout_seconds:g}s",
            request_body=request_body,
        )


class ToolInputValidationError(Exception):
    """Raised when tool input fails schema validation.

    Attributes:
        tool_name: Tool whose input was rejected
        errors: pydantic-style error list (``loc``, ``msg``, ``type``)
    """

    def __init__(self, tool_name: str, errors: list[dict], message: Optional[str] = None):
        self.tool_name = tool_name
        self.errors = errors
        if message is None:
            parts = []
            for err in errors:
                loc = ".".join(str(p) for p in err.get("loc", ())) or "input"
                parts.append(f"{loc}: {err.get('msg', 'invalid value')}")
            message = f"Invalid input for {tool_name}: " + "; ".join(parts)
        super().__init__(message)
