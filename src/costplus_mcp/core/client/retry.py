"""Bounded retry with linear backoff.

Each logical request gets one correlation id, generated before the first
attempt and shared by every attempt. Failures are classified, tagged with
that id, and logged before the retry decision is made. Only timeout,
connection and rate-limit failures are retried; the delay before attempt
``n`` is ``base_delay * (n - 1)``.
"""

import asyncio
import logging
from typing import Any, Optional, Protocol

from costplus_mcp.core.client.dispatcher import RequestDispatcher
from costplus_mcp.core.context import CorrelationTracker, correlation_scope
from costplus_mcp.core.errors.api import ClassifiedError
from costplus_mcp.core.errors.classifier import ErrorClassifier

logger = logging.getLogger(__name__)


class SleepFunc(Protocol):
    """Protocol for injectable sleep function."""

    async def __call__(self, seconds: float) -> None: ...


def backoff_delay(base_delay: float, attempt_number: int) -> float:
    """Delay to wait before ``attempt_number`` (1-based). Zero before the first."""
    return base_delay * max(attempt_number - 1, 0)


class RetryOrchestrator:
    """Runs a request through the dispatcher with bounded retries.

    Args:
        dispatcher: Performs the individual attempts
        classifier: Maps raw failures to ``ClassifiedError`` and logs them
        tracker: Source of correlation ids
        max_attempts: Upper bound on attempts per logical request (>= 1)
        base_delay: Linear backoff base in seconds
        sleep_func: Injectable sleep function for time control in tests

    Testing example:
        >>> sleeps = []
        >>> async def fake_sleep(s): sleeps.append(s)
        >>> orchestrator = RetryOrchestrator(dispatcher, ErrorClassifier(),
        ...     CorrelationTracker(), max_attempts=3, base_delay=1.0,
        ...     sleep_func=fake_sleep)
    """

    def __init__(
        self,
        dispatcher: RequestDispatcher,
        classifier: ErrorClassifier,
        tracker: CorrelationTracker,
        *,
        max_attempts: int = 3,
        base_delay: float = 1.0,
        sleep_func: Optional[SleepFunc] = None,
    ):
        if max_attempts < 1:
            raise ValueError(f"max_attempts must be >= 1, got {max_attempts}")
        self._dispatcher = dispatcher
        self._classifier = classifier
        self._tracker = tracker
        self._max_attempts = max_attempts
        self._base_delay = base_delay
        self._sleep = sleep_func or asyncio.sleep

    @property
    def max_attempts(self) -> int:
        return self._max_attempts

    async def call(self, endpoint: str, body: str) -> Any:
        """Execute the logical request, returning the decoded payload.

        Raises:
            ClassifiedError: Non-retryable failure, or the last failure once
                ``max_attempts`` is exhausted. Always carries the request's
                correlation id.
        """
        correlation_id = self._tracker.new_id()
        last_error: Optional[ClassifiedError] = None

        with correlation_scope(correlation_id):
            for attempt_number in range(1, self._max_attempts + 1):
                if last_error is not None:
                    delay = backoff_delay(self._base_delay, attempt_number)
                    logger.info(
                        "Retrying %s in %.2fs (attempt %d/%d, correlation_id=%s)",
                        endpoint,
                        delay,
                        attempt_number,
                        self._max_attempts,
                        correlation_id,
                    )
                    await self._sleep(delay)

                try:
                    return await self._dispatcher.dispatch(endpoint, body, attempt_number)
                except Exception as exc:
                    last_error = self._classify(exc, endpoint, attempt_number, correlation_id)
                    if not last_error.retryable:
                        raise last_error from exc

        # Attempts exhausted
        raise last_error from last_error.original_error

    def _classify(
        self,
        exc: Exception,
        endpoint: str,
        attempt_number: int,
        correlation_id: str,
    ) -> ClassifiedError:
        error = self._classifier.classify(exc, f"{endpoint} - attempt {attempt_number}")
        error = self._classifier.derive(error, correlation_id=correlation_id)
        self._classifier.log(error, f"API request to {endpoint}")
        return error
