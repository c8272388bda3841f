"""
Observability utilities for costplus-mcp.

Provides metrics collection and audit logging for MCP tools and resources.

FastMCP Integration:
    The decorators in this module wrap tool and resource handlers to provide
    consistent observability. Tools normally get ``mcp_tool`` through
    ``costplus_mcp.core.naming.canonical_tool``:

        @canonical_tool(mcp, canonical_name="search_medicines")
        async def search_medicines(query: str = "") -> dict:
            ...

    For resources, apply ``mcp_resource`` beneath ``mcp.resource``:

        @mcp.resource("cost-plus-drugs://collections")
        @mcp_resource(resource_type="collections")
        def list_collections() -> str:
            ...
"""

import functools
import inspect
import logging
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Dict, Optional, TypeVar, Union

logger = logging.getLogger(__name__)

T = TypeVar("T")


class MetricType(Enum):
    """Types of metrics that can be emitted."""

    COUNTER = "counter"
    TIMER = "timer"


class AuditEventType(Enum):
    """Types of audit events for security logging."""

    AUTH_SUCCESS = "auth_success"
    AUTH_FAILURE = "auth_failure"
    RESOURCE_ACCESS = "resource_access"
    TOOL_INVOCATION = "tool_invocation"


@dataclass
class Metric:
    """Structured metric data."""

    name: str
    value: Union[int, float]
    metric_type: MetricType
    labels: Dict[str, str] = field(default_factory=dict)
    timestamp: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "name": self.name,
            "value": self.value,
            "type": self.metric_type.value,
            "labels": self.labels,
            "timestamp": self.timestamp,
        }


@dataclass
class AuditEvent:
    """Structured audit event for security logging."""

    event_type: AuditEventType
    details: Dict[str, Any] = field(default_factory=dict)
    timestamp: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())
    client_id: Optional[str] = None
    ip_address: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result: Dict[str, Any] = {
            "event_type": self.event_type.value,
            "timestamp": self.timestamp,
            "details": self.details,
        }
        if self.client_id:
            result["client_id"] = self.client_id
        if self.ip_address:
            result["ip_address"] = self.ip_address
        return result


class MetricsCollector:
    """
    Collects and emits metrics to the standard logger.

    Metrics are logged as structured records (``extra={"metric": ...}``) for
    log aggregation systems.
    """

    def __init__(self, prefix: str = "costplus_mcp"):
        self.prefix = prefix
        self._logger = logging.getLogger(f"{__name__}.metrics")

    def emit(self, metric: Metric) -> None:
        """Emit a metric to the logger."""
        self._logger.info("METRIC: %s.%s", self.prefix, metric.name, extra={"metric": metric.to_dict()})

    def counter(self, name: str, value: int = 1, labels: Optional[Dict[str, str]] = None) -> None:
        """Emit a counter metric."""
        self.emit(Metric(name=name, value=value, metric_type=MetricType.COUNTER, labels=labels or {}))

    def timer(self, name: str, duration_ms: float, labels: Optional[Dict[str, str]] = None) -> None:
        """Emit a timer metric (duration in milliseconds)."""
        self.emit(Metric(name=name, value=duration_ms, metric_type=MetricType.TIMER, labels=labels or {}))


# Global metrics collector
_metrics = MetricsCollector()


class AuditLogger:
    """
    Structured audit logging for security events.

    Audit logs are written to a separate logger for easy filtering.
    """

    def __init__(self) -> None:
        self._logger = logging.getLogger(f"{__name__}.audit")

    def log(self, event: AuditEvent) -> None:
        """Log an audit event."""
        self._logger.info("AUDIT: %s", event.event_type.value, extra={"audit": event.to_dict()})

    def auth_success(self, client_id: Optional[str] = None, **details: Any) -> None:
        """Log successful authentication."""
        self.log(AuditEvent(event_type=AuditEventType.AUTH_SUCCESS, client_id=client_id, details=details))

    def auth_failure(
        self,
        reason: str,
        client_id: Optional[str] = None,
        ip_address: Optional[str] = None,
        **details: Any,
    ) -> None:
        """Log failed authentication."""
        self.log(
            AuditEvent(
                event_type=AuditEventType.AUTH_FAILURE,
                client_id=client_id,
                ip_address=ip_address,
                details={"reason": reason, **details},
            )
        )

    def resource_access(self, resource_type: str, resource_id: str, action: str = "read", **details: Any) -> None:
        """Log resource access."""
        self.log(
            AuditEvent(
                event_type=AuditEventType.RESOURCE_ACCESS,
                details={
                    "resource_type": resource_type,
                    "resource_id": resource_id,
                    "action": action,
                    **details,
                },
            )
        )

    def tool_invocation(
        self,
        tool_name: str,
        success: bool = True,
        duration_ms: Optional[float] = None,
        **details: Any,
    ) -> None:
        """Log tool invocation."""
        self.log(
            AuditEvent(
                event_type=AuditEventType.TOOL_INVOCATION,
                details={
                    "tool": tool_name,
                    "success": success,
                    "duration_ms": duration_ms,
                    **details,
                },
            )
        )


# Global audit logger
_audit = AuditLogger()


def get_audit_logger() -> AuditLogger:
    """Get the global audit logger."""
    return _audit


def _envelope_failed(result: Any) -> bool:
    # Tools report failures as envelopes rather than exceptions
    return isinstance(result, dict) and result.get("success") is False


def mcp_tool(
    tool_name: Optional[str] = None, emit_metrics: bool = True, audit: bool = True
) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """
    Decorator for MCP tool handlers with observability.

    Automatically:
    - Emits latency and status metrics
    - Creates audit log entries

    A handler that returns a failure envelope (``{"success": False, ...}``)
    is recorded with status ``error`` even though it did not raise.

    Args:
        tool_name: Override tool name (defaults to function name)
        emit_metrics: Whether to emit metrics
        audit: Whether to create audit log entries
    """

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        name = tool_name or func.__name__

        def _record(start: float, success: bool, error_msg: Optional[str]) -> None:
            duration_ms = (time.perf_counter() - start) * 1000

            if emit_metrics:
                labels = {"tool": name, "status": "success" if success else "error"}
                _metrics.counter("tool.invocations", labels=labels)
                _metrics.timer("tool.latency", duration_ms, labels={"tool": name})

            if audit:
                _audit.tool_invocation(
                    tool_name=name,
                    success=success,
                    duration_ms=round(duration_ms, 2),
                    error=error_msg,
                )

        @functools.wraps(func)
        async def async_wrapper(*args: Any, **kwargs: Any) -> T:
            start = time.perf_counter()
            success = True
            error_msg = None

            try:
                result = await func(*args, **kwargs)
                if _envelope_failed(result):
                    success = False
                    error_msg = result.get("error")  # type: ignore[union-attr]
                return result
            except Exception as e:
                success = False
                error_msg = str(e)
                raise
            finally:
                _record(start, success, error_msg)

        @functools.wraps(func)
        def sync_wrapper(*args: Any, **kwargs: Any) -> T:
            start = time.perf_counter()
            success = True
            error_msg = None

            try:
                result = func(*args, **kwargs)
                if _envelope_failed(result):
                    success = False
                    error_msg = result.get("error")  # type: ignore[union-attr]
                return result
            except Exception as e:
                success = False
                error_msg = str(e)
                raise
            finally:
                _record(start, success, error_msg)

        if inspect.iscoroutinefunction(func):
            return async_wrapper  # type: ignore[return-value]
        return sync_wrapper

    return decorator


def mcp_resource(
    resource_type: Optional[str] = None, emit_metrics: bool = True, audit: bool = True
) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """
    Decorator for MCP resource handlers with observability.

    Args:
        resource_type: Type of resource (e.g., "collections")
        emit_metrics: Whether to emit metrics
        audit: Whether to create audit log entries
    """

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        rtype = resource_type or "resource"

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> T:
            start = time.perf_counter()
            success = True
            error_msg = None
            resource_id = kwargs.get("collection_id") or kwargs.get("query") or "all"

            try:
                return func(*args, **kwargs)
            except Exception as e:
                success = False
                error_msg = str(e)
                raise
            finally:
                duration_ms = (time.perf_counter() - start) * 1000

                if emit_metrics:
                    labels = {"resource_type": rtype, "status": "success" if success else "error"}
                    _metrics.counter("resource.access", labels=labels)
                    _metrics.timer("resource.latency", duration_ms, labels={"resource_type": rtype})

                if audit:
                    _audit.resource_access(
                        resource_type=rtype,
                        resource_id=str(resource_id),
                        action="read",
                        success=success,
                        duration_ms=round(duration_ms, 2),
                        error=error_msg,
                    )

        return wrapper

    return decorator
