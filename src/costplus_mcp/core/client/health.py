"""Upstream health probing.

The verdict is derived from per-endpoint probe results:

    - healthy:   every probe succeeded and at least one ran
    - degraded:  some, but not all, probes succeeded
    - unhealthy: no probe succeeded (including when none ran)

Verdicts are computed fresh on every call and never cached.
"""

import logging
import time
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping

from costplus_mcp.core.client.graphql import CostPlusGraphQLClient
from costplus_mcp.core.client.shared import redact_secrets

logger = logging.getLogger(__name__)

GRAPHQL_ENDPOINT_KEY = "graphql_endpoint"
DEFAULT_PROBE_QUERY = "query { __typename }"


class HealthStatus(str, Enum):
    HEALTHY = "healthy"
    DEGRADED = "degraded"
    UNHEALTHY = "unhealthy"


@dataclass
class HealthVerdict:
    """Result of one health check.

    Attributes:
        status: Overall verdict
        latency_ms: Wall-clock time spent probing
        endpoints: Probe name -> whether it succeeded
    """

    status: HealthStatus
    latency_ms: float
    endpoints: Dict[str, bool] = field(default_factory=dict)

    @property
    def is_healthy(self) -> bool:
        return self.status == HealthStatus.HEALTHY

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["status"] = self.status.value
        return data


def derive_health_status(results: Mapping[str, bool]) -> HealthStatus:
    """Pure verdict function over probe results."""
    total = len(results)
    succeeded = sum(1 for ok in results.values() if ok)

    if total > 0 and succeeded == total:
        return HealthStatus.HEALTHY
    if succeeded > 0:
        return HealthStatus.DEGRADED
    return HealthStatus.UNHEALTHY


class HealthCheckAggregator:
    """Probes the GraphQL endpoint and reports a three-state verdict."""

    def __init__(self, client: CostPlusGraphQLClient, probe_query: str = DEFAULT_PROBE_QUERY):
        self._client = client
        self._probe_query = probe_query

    async def check(self) -> HealthVerdict:
        """Run all probes. Probe failures are logged, never raised."""
        start = time.perf_counter()
        results: Dict[str, bool] = {}

        try:
            await self._client.perform_graphql_call(self._probe_query)
            results[GRAPHQL_ENDPOINT_KEY] = True
        except Exception as e:
            logger.warning("Health probe %s failed: %s", GRAPHQL_ENDPOINT_KEY, redact_secrets(str(e)))
            results[GRAPHQL_ENDPOINT_KEY] = False

        latency_ms = round((time.perf_counter() - start) * 1000, 2)
        verdict = HealthVerdict(
            status=derive_health_status(results),
            latency_ms=latency_ms,
            endpoints=results,
        )
        logger.info("Health check: %s (%.2fms)", verdict.status.value, latency_ms)
        return verdict
