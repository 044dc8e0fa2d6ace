"""
Instance pools: named groups of instances submitted by external tooling
(e.g. a load balancer) and the lag heuristics orchestrator derives from them.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Union

from pydantic import StrictInt

from orchestrator_client.client import OrchestratorClient
from orchestrator_client.models import InstanceKey, PoolInstancesMap
from orchestrator_client.operations._paths import build_path


async def submit_pool_instances(
    client: OrchestratorClient,
    pool: str,
    instances: Iterable[Union[InstanceKey, str]] = (),
) -> None:
    """
    Replace the membership of `pool`. Instances go out comma separated in the
    `instances` query parameter as "host:port".
    """
    members = ",".join(str(i) for i in instances)
    await client.call_action(
        build_path("submit-pool-instances", pool),
        params={"instances": members},
        op="submit_pool_instances",
    )


async def get_cluster_pool_instances(
    client: OrchestratorClient, cluster: str
) -> Dict[str, List[InstanceKey]]:
    return await client.call(
        PoolInstancesMap,
        build_path("cluster-pool-instances", cluster),
        op="cluster_pool_instances",
    )


async def get_cluster_pool_instances_for_pool(
    client: OrchestratorClient, cluster: str, pool: str
) -> List[InstanceKey]:
    return await client.call(
        List[InstanceKey],
        build_path("cluster-pool-instances", cluster, pool),
        op="cluster_pool_instances",
    )


async def get_heuristic_cluster_pool_instances(
    client: OrchestratorClient, cluster: str
) -> Dict[str, List[InstanceKey]]:
    return await client.call(
        PoolInstancesMap,
        build_path("heuristic-cluster-pool-instances", cluster),
        op="heuristic_cluster_pool_instances",
    )


async def get_heuristic_cluster_pool_instances_for_pool(
    client: OrchestratorClient, cluster: str, pool: str
) -> List[InstanceKey]:
    return await client.call(
        List[InstanceKey],
        build_path("heuristic-cluster-pool-instances", cluster, pool),
        op="heuristic_cluster_pool_instances",
    )


async def get_heuristic_cluster_pool_lag(
    client: OrchestratorClient, cluster: str
) -> Dict[str, int]:
    """Lag in seconds per pool."""
    return await client.call(
        Dict[str, StrictInt],
        build_path("heuristic-cluster-pool-lag", cluster),
        op="heuristic_cluster_pool_lag",
    )


async def get_heuristic_cluster_pool_lag_for_pool(
    client: OrchestratorClient, cluster: str, pool: str
) -> int:
    """Lag in seconds for one pool. Floats are truncated, null reads as 0."""
    return await client.call_int(
        build_path("heuristic-cluster-pool-lag", cluster, pool),
        op="heuristic_cluster_pool_lag",
    )
