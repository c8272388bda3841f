"""Request correlation context.

Every logical upstream request gets one correlation id, generated before the
first attempt and shared by every retry of that request. The active id is
also kept in a ``ContextVar`` so log records and response envelopes built
while the request is in flight can pick it up without threading it through
every call.
"""

import contextvars
from contextlib import contextmanager
from typing import Iterator, Optional

from ulid import ULID

DEFAULT_CORRELATION_PREFIX = "mcp-costplus"

_correlation_id: contextvars.ContextVar[str] = contextvars.ContextVar(
    "costplus_mcp_correlation_id", default=""
)


def generate_correlation_id(prefix: str = DEFAULT_CORRELATION_PREFIX) -> str:
    """Return ``"{prefix}-{ULID}"``.

    The ULID carries a millisecond timestamp and 80 random bits, so ids are
    unique within a process and sort by creation time.
    """
    return f"{prefix}-{ULID()}"


def get_correlation_id() -> str:
    """Return the correlation id bound to the current context, or ``""``."""
    return _correlation_id.get()


def set_correlation_id(correlation_id: str) -> contextvars.Token[str]:
    return _correlation_id.set(correlation_id)


@contextmanager
def correlation_scope(correlation_id: str) -> Iterator[str]:
    """Bind ``correlation_id`` for the duration of the ``with`` block."""
    token = _correlation_id.set(correlation_id)
    try:
        yield correlation_id
    finally:
        _correlation_id.reset(token)


class CorrelationTracker:
    """Generates correlation ids for logical requests.

    Stateless; a single instance is shared by the whole client layer.
    """

    def __init__(self, prefix: str = DEFAULT_CORRELATION_PREFIX) -> None:
        self.prefix = prefix

    def new_id(self, prefix: Optional[str] = None) -> str:
        return generate_correlation_id(prefix or self.prefix)
