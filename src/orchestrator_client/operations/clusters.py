from __future__ import annotations

from typing import List

from pydantic import StrictStr

from orchestrator_client.client import OrchestratorClient
from orchestrator_client.models import ClusterInfo, Instance, InstanceKey
from orchestrator_client.operations._paths import build_path


async def get_cluster(client: OrchestratorClient, cluster: str) -> List[Instance]:
    """All instances of the cluster identified by name or any member hint."""
    return await client.call(List[Instance], build_path("cluster", cluster), op="cluster")


async def get_cluster_by_alias(client: OrchestratorClient, alias: str) -> List[Instance]:
    return await client.call(
        List[Instance], build_path("cluster", "alias", alias), op="cluster_by_alias"
    )


async def get_cluster_by_instance(
    client: OrchestratorClient, key: InstanceKey
) -> List[Instance]:
    return await client.call(
        List[Instance],
        build_path("cluster", "instance", key),
        op="cluster_by_instance",
    )


async def get_cluster_info(client: OrchestratorClient, cluster: str) -> ClusterInfo:
    return await client.call(
        ClusterInfo, build_path("cluster-info", cluster), op="cluster_info"
    )


async def get_cluster_info_by_alias(
    client: OrchestratorClient, alias: str
) -> ClusterInfo:
    return await client.call(
        ClusterInfo,
        build_path("cluster-info", "alias", alias),
        op="cluster_info_by_alias",
    )


async def get_cluster_osc_replicas(
    client: OrchestratorClient, cluster: str
) -> List[Instance]:
    """Replicas suitable for online schema change tooling."""
    return await client.call(
        List[Instance],
        build_path("cluster-osc-replicas", cluster),
        op="cluster_osc_replicas",
    )


async def set_cluster_alias(client: OrchestratorClient, cluster: str, alias: str) -> None:
    await client.call_action(
        build_path("set-cluster-alias", cluster),
        method="POST",
        json={"alias": alias},
        op="set_cluster_alias",
    )


async def get_clusters(client: OrchestratorClient) -> List[str]:
    return await client.call(List[StrictStr], build_path("clusters"), op="clusters")


async def get_clusters_info(client: OrchestratorClient) -> List[ClusterInfo]:
    return await client.call(
        List[ClusterInfo], build_path("clusters-info"), op="clusters_info"
    )


async def get_cluster_master(client: OrchestratorClient, cluster: str) -> Instance:
    return await client.call(Instance, build_path("master", cluster), op="master")


async def get_all_masters(client: OrchestratorClient) -> List[Instance]:
    return await client.call(List[Instance], build_path("masters"), op="masters")


async def reload_cluster_alias(client: OrchestratorClient) -> None:
    await client.call_action(build_path("reload-cluster-alias"), op="reload_cluster_alias")
