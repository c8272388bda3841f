"""Single-attempt HTTP dispatch against the upstream API.

``RequestDispatcher.dispatch`` performs exactly one POST under a deadline and
either returns the decoded JSON payload or raises one of the raw failures in
``costplus_mcp.core.errors.upstream``. It never retries and never classifies;
both are the retry orchestrator's job.
"""

import asyncio
import json
import logging
from dataclasses import dataclass
from typing import Any, Optional

import httpx

from costplus_mcp.config.domains import ApiConfig
from costplus_mcp.core.client.shared import parse_retry_after, redact_headers, response_excerpt
from costplus_mcp.core.errors.upstream import (
    EmptyResponseError,
    MalformedResponseError,
    RequestTimeoutError,
    UpstreamStatusError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RequestAttempt:
    """One try of a logical request."""

    endpoint: str
    body: str
    attempt_number: int = 1


class RequestDispatcher:
    """Sends one request attempt and decodes the response.

    Stateless apart from configuration, so one instance serves any number of
    concurrent requests.

    Args:
        config: Upstream API settings (base URL, headers, timeout)
        client: Optional shared ``httpx.AsyncClient``; when omitted a client
            is opened and closed around each attempt
        transport: Optional transport for the per-attempt client (tests
            pass an ``httpx.MockTransport``)
    """

    def __init__(
        self,
        config: ApiConfig,
        *,
        client: Optional[httpx.AsyncClient] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._config = config
        self._client = client
        self._transport = transport

    @property
    def config(self) -> ApiConfig:
        return self._config

    async def dispatch(self, endpoint: str, body: str, attempt_number: int = 1) -> Any:
        """POST ``body`` to ``{base_url}{endpoint}`` and return the decoded JSON.

        Raises:
            RequestTimeoutError: The attempt exceeded ``timeout_ms`` and was cancelled
            UpstreamStatusError: The upstream answered with a non-2xx status
            EmptyResponseError: The body was empty or whitespace-only
            MalformedResponseError: The body was not valid JSON
            httpx.TransportError: Connection-level failure
        """
        attempt = RequestAttempt(endpoint=endpoint, body=body, attempt_number=attempt_number)
        timeout = self._config.timeout_seconds
        logger.debug(
            "Dispatching %s (attempt %d, timeout %.1fs, headers=%s)",
            endpoint,
            attempt_number,
            timeout,
            redact_headers(self._config.headers),
        )

        try:
            response = await asyncio.wait_for(self._send(attempt), timeout=timeout)
        except asyncio.TimeoutError as e:
            raise RequestTimeoutError(endpoint, timeout, request_body=body) from e

        return self._decode(attempt, response)

    async def _send(self, attempt: RequestAttempt) -> httpx.Response:
        url = f"{self._config.base_url}{attempt.endpoint}"
        headers = dict(self._config.headers)

        if self._client is not None:
            return await self._client.post(url, content=attempt.body, headers=headers)

        async with httpx.AsyncClient(
            timeout=self._config.timeout_seconds,
            transport=self._transport,
        ) as client:
            response = await client.post(url, content=attempt.body, headers=headers)
            await response.aread()
            return response

    def _decode(self, attempt: RequestAttempt, response: httpx.Response) -> Any:
        if not response.is_success:
            raise UpstreamStatusError(
                attempt.endpoint,
                response.status_code,
                response.reason_phrase,
                request_body=attempt.body,
                response_text=response_excerpt(response.text),
                retry_after=parse_retry_after(response),
            )

        text = response.text
        if not text or not text.strip():
            raise EmptyResponseError(
                attempt.endpoint,
                request_body=attempt.body,
                response_text=text or "",
            )

        try:
            return json.loads(text)
        except ValueError as e:
            raise MalformedResponseError(
                attempt.endpoint,
                request_body=attempt.body,
                response_text=response_excerpt(text),
                parse_error=str(e),
            ) from e
