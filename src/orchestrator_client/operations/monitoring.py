"""Internal metrics orchestrator keeps about itself, over the last N seconds."""

from __future__ import annotations

from typing import List, Optional

from orchestrator_client.client import OrchestratorClient
from orchestrator_client.models import (
    BackendQueryMetric,
    DiscoveryMetric,
    DiscoveryQueueMetric,
    WriteBufferMetric,
)
from orchestrator_client.operations._paths import build_path


def _seconds(seconds: int) -> int:
    seconds = int(seconds)
    if seconds <= 0:
        raise ValueError(f"seconds must be positive, got {seconds}")
    return seconds


async def get_discovery_metrics_raw(
    client: OrchestratorClient, seconds: int
) -> List[DiscoveryMetric]:
    return await client.call(
        List[DiscoveryMetric],
        build_path("discovery-metrics-raw", _seconds(seconds)),
        op="discovery_metrics_raw",
    )


async def get_discovery_metrics_aggregated(
    client: OrchestratorClient, seconds: int
) -> List[DiscoveryMetric]:
    return await client.call(
        List[DiscoveryMetric],
        build_path("discovery-metrics-aggregated", _seconds(seconds)),
        op="discovery_metrics_aggregated",
    )


async def get_discovery_queue_metrics_raw(
    client: OrchestratorClient, seconds: int, queue: Optional[str] = None
) -> List[DiscoveryQueueMetric]:
    """Queue metrics for every discovery queue, or only `queue`."""
    return await client.call(
        List[DiscoveryQueueMetric],
        build_path("discovery-queue-metrics-raw", queue, _seconds(seconds)),
        op="discovery_queue_metrics_raw",
    )


async def get_discovery_queue_metrics_aggregated(
    client: OrchestratorClient, seconds: int, queue: Optional[str] = None
) -> List[DiscoveryQueueMetric]:
    return await client.call(
        List[DiscoveryQueueMetric],
        build_path("discovery-queue-metrics-aggregated", queue, _seconds(seconds)),
        op="discovery_queue_metrics_aggregated",
    )


async def get_backend_query_metrics_raw(
    client: OrchestratorClient, seconds: int
) -> List[BackendQueryMetric]:
    return await client.call(
        List[BackendQueryMetric],
        build_path("backend-query-metrics-raw", _seconds(seconds)),
        op="backend_query_metrics_raw",
    )


async def get_backend_query_metrics_aggregated(
    client: OrchestratorClient, seconds: int
) -> List[BackendQueryMetric]:
    return await client.call(
        List[BackendQueryMetric],
        build_path("backend-query-metrics-aggregated", _seconds(seconds)),
        op="backend_query_metrics_aggregated",
    )


async def get_write_buffer_metrics_raw(
    client: OrchestratorClient, seconds: int
) -> List[WriteBufferMetric]:
    return await client.call(
        List[WriteBufferMetric],
        build_path("write-buffer-metrics-raw", _seconds(seconds)),
        op="write_buffer_metrics_raw",
    )


async def get_write_buffer_metrics_aggregated(
    client: OrchestratorClient, seconds: int
) -> List[WriteBufferMetric]:
    return await client.call(
        List[WriteBufferMetric],
        build_path("write-buffer-metrics-aggregated", _seconds(seconds)),
        op="write_buffer_metrics_aggregated",
    )
