"""Service container wiring the client layer together.

Built exactly once by ``server.create_server`` and passed explicitly to every
tool and resource registration function.
"""

import logging
from dataclasses import dataclass
from typing import Optional

import httpx

from costplus_mcp.config.server import ServerConfig
from costplus_mcp.core.client.dispatcher import RequestDispatcher
from costplus_mcp.core.client.graphql import CostPlusGraphQLClient
from costplus_mcp.core.client.health import HealthCheckAggregator
from costplus_mcp.core.client.retry import RetryOrchestrator, SleepFunc
from costplus_mcp.core.context import CorrelationTracker
from costplus_mcp.core.errors.classifier import ErrorClassifier
from costplus_mcp.core.responses.envelope import ResponseEnvelopeFormatter

logger = logging.getLogger(__name__)


@dataclass
class ServiceContainer:
    """Shared, stateless services used by the tool handlers."""

    config: ServerConfig
    classifier: ErrorClassifier
    client: CostPlusGraphQLClient
    formatter: ResponseEnvelopeFormatter
    health: HealthCheckAggregator


def build_services(
    config: ServerConfig,
    *,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    sleep_func: Optional[SleepFunc] = None,
) -> ServiceContainer:
    """Construct the service graph from configuration.

    Args:
        config: Server configuration
        transport: Optional httpx transport (tests pass ``httpx.MockTransport``)
        sleep_func: Optional sleep override for retry backoff
    """
    api = config.api
    classifier = ErrorClassifier()
    dispatcher = RequestDispatcher(api, transport=transport)
    orchestrator = RetryOrchestrator(
        dispatcher,
        classifier,
        CorrelationTracker(),
        max_attempts=api.retry_attempts,
        base_delay=api.retry_delay_seconds,
        sleep_func=sleep_func,
    )
    client = CostPlusGraphQLClient(orchestrator, endpoint=api.graphql_endpoint)
    formatter = ResponseEnvelopeFormatter(
        data_source=api.data_source,
        api_version=api.api_version,
        classifier=classifier,
    )
    health = HealthCheckAggregator(client, probe_query=config.health.probe_query)

    logger.debug(
        "Services ready: %s (timeout=%dms, attempts=%d, delay=%dms)",
        api.graphql_url,
        api.timeout_ms,
        api.retry_attempts,
        api.retry_delay_ms,
    )
    return ServiceContainer(
        config=config,
        classifier=classifier,
        client=client,
        formatter=formatter,
        health=health,
    )
