"""Classified API error model.

``ClassifiedError`` is the only error shape that leaves the client layer.
It carries a closed ``ApiErrorKind``, an ordered ``ErrorSeverity``, the
correlation id of the logical request, and a read-only details mapping.
"""

from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional


class ApiErrorKind(str, Enum):
    """Closed set of failure categories produced by the classifier."""

    TIMEOUT = "timeout"
    CONNECTION_ERROR = "connection_error"
    RATE_LIMIT = "rate_limit"
    INVALID_RESPONSE = "invalid_response"
    HTTP_ERROR = "http_error"
    VALIDATION_ERROR = "validation_error"
    UNKNOWN = "unknown"


RETRYABLE_KINDS = frozenset(
    {
        ApiErrorKind.TIMEOUT,
        ApiErrorKind.CONNECTION_ERROR,
        ApiErrorKind.RATE_LIMIT,
    }
)


_SEVERITY_RANK = {"low": 0, "medium": 1, "high": 2, "critical": 3}


class ErrorSeverity(str, Enum):
    """Severity of a classified error, ordered LOW < MEDIUM < HIGH < CRITICAL."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @property
    def rank(self) -> int:
        return _SEVERITY_RANK[self.value]

    # str's lexical comparison would put "critical" first
    def __lt__(self, other: object) -> bool:
        if not isinstance(other, ErrorSeverity):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: object) -> bool:
        if not isinstance(other, ErrorSeverity):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, ErrorSeverity):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, ErrorSeverity):
            return NotImplemented
        return self.rank >= other.rank

    __hash__ = str.__hash__


class ClassifiedError(Exception):
    """A failure that has been categorized for retry and reporting decisions.

    Instances are immutable: use :meth:`with_correlation_id` to obtain a copy
    tagged with a different correlation id.

    Attributes:
        message: Human-readable error description
        kind: Failure category
        severity: Ordered severity level
        correlation_id: Id of the logical request (empty until tagged)
        details: Read-only mapping (endpoint, request body, response excerpt, reason)
        context_label: Where the failure was observed (e.g. ``"/graphql/ - attempt 2"``)
        original_error: The raw exception this was classified from, if any
    """

    def __init__(
        self,
        message: str,
        *,
        kind: ApiErrorKind,
        severity: ErrorSeverity,
        correlation_id: str = "",
        details: Optional[Mapping[str, Any]] = None,
        context_label: str = "",
        original_error: Optional[BaseException] = None,
    ):
        self._message = message
        self._kind = kind
        self._severity = severity
        self._correlation_id = correlation_id
        self._details: Mapping[str, Any] = MappingProxyType(dict(details or {}))
        self._context_label = context_label
        self._original_error = original_error
        super().__init__(message)

    @property
    def message(self) -> str:
        return self._message

    @property
    def kind(self) -> ApiErrorKind:
        return self._kind

    @property
    def severity(self) -> ErrorSeverity:
        return self._severity

    @property
    def correlation_id(self) -> str:
        return self._correlation_id

    @property
    def details(self) -> Mapping[str, Any]:
        return self._details

    @property
    def context_label(self) -> str:
        return self._context_label

    @property
    def original_error(self) -> Optional[BaseException]:
        return self._original_error

    @property
    def retryable(self) -> bool:
        return self._kind in RETRYABLE_KINDS

    def with_correlation_id(self, correlation_id: str) -> "ClassifiedError":
        """Return a copy differing only in its correlation id."""
        copy = ClassifiedError(
            self._message,
            kind=self._kind,
            severity=self._severity,
            correlation_id=correlation_id,
            details=self._details,
            context_label=self._context_label,
            original_error=self._original_error,
        )
        copy.__cause__ = self.__cause__
        return copy

    def to_dict(self) -> dict[str, Any]:
        """Serializable view used in failure envelopes and structured logs."""
        return {
            "kind": self._kind.value,
            "severity": self._severity.value,
            "correlation_id": self._correlation_id,
            "retryable": self.retryable,
            "context": self._context_label,
            **dict(self._details),
        }

    def __repr__(self) -> str:
        return (
            f"ClassifiedError(kind={self._kind.value!r}, severity={self._severity.value!r}, "
            f"correlation_id={self._correlation_id!r}, message={self._message!r})"
        )
