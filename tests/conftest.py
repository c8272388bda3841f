"""Shared fixtures for costplus-mcp tests.

Provides a service factory wired to ``httpx.MockTransport`` and a recording
fake sleep, so no test touches the network or waits on backoff.
"""

from typing import Any, List

import httpx
import pytest

from costplus_mcp.core.services import ServiceContainer, build_services
from tests.helpers import Handler, make_config


@pytest.fixture
def recorded_sleeps() -> List[float]:
    return []


@pytest.fixture
def fake_sleep(recorded_sleeps):
    """Sleep replacement that records the requested delays."""

    async def _sleep(seconds: float) -> None:
        recorded_sleeps.append(seconds)

    return _sleep


@pytest.fixture
def make_services(fake_sleep):
    """Factory building a ServiceContainer around a MockTransport handler."""

    def _make(handler: Handler, **api_overrides: Any) -> ServiceContainer:
        config = make_config(**api_overrides)
        return build_services(config, transport=httpx.MockTransport(handler), sleep_func=fake_sleep)

    return _make
