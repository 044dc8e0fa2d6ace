from __future__ import annotations

from typing import List, Optional, Sequence

from orchestrator_client.client import OrchestratorClient
from orchestrator_client.models import Instance, InstanceKey
from orchestrator_client.operations._paths import build_path


async def get_instance(client: OrchestratorClient, key: InstanceKey) -> Instance:
    """Fetch the current snapshot of a single instance."""
    return await client.call(Instance, build_path("instance", key), op="get_instance")


async def get_instance_replicas(
    client: OrchestratorClient, key: InstanceKey
) -> List[Instance]:
    return await client.call(
        List[Instance],
        build_path("instance-replicas", key),
        op="get_instance_replicas",
    )


async def discover_instance(client: OrchestratorClient, key: InstanceKey) -> Instance:
    """Ask orchestrator to probe the instance now and return what it found."""
    return await client.call(Instance, build_path("discover", key), op="discover")


async def async_discover_instance(
    client: OrchestratorClient, key: InstanceKey
) -> Instance:
    return await client.call(
        Instance, build_path("async-discover", key), op="async_discover"
    )


async def refresh_instance(client: OrchestratorClient, key: InstanceKey) -> Instance:
    return await client.call(Instance, build_path("refresh", key), op="refresh")


async def forget_instance(client: OrchestratorClient, key: InstanceKey) -> Instance:
    return await client.call(Instance, build_path("forget", key), op="forget")


async def forget_cluster(client: OrchestratorClient, cluster: str) -> List[Instance]:
    return await client.call(
        List[Instance], build_path("forget-cluster", cluster), op="forget_cluster"
    )


async def get_all_instances(client: OrchestratorClient) -> List[Instance]:
    return await client.call(
        List[Instance], build_path("all-instances"), op="all_instances"
    )


async def resolve_instance(client: OrchestratorClient, key: InstanceKey) -> Instance:
    return await client.call(Instance, build_path("resolve", key), op="resolve")


async def set_read_only(client: OrchestratorClient, key: InstanceKey) -> Instance:
    return await client.call(
        Instance, build_path("set-read-only", key), op="set_read_only"
    )


async def set_writeable(client: OrchestratorClient, key: InstanceKey) -> Instance:
    return await client.call(
        Instance, build_path("set-writeable", key), op="set_writeable"
    )


async def kill_query(
    client: OrchestratorClient, key: InstanceKey, process_id: int
) -> Instance:
    return await client.call(
        Instance, build_path("kill-query", key, int(process_id)), op="kill_query"
    )


async def search_instances(
    client: OrchestratorClient, search: Optional[str] = None
) -> List[Instance]:
    """
    Search known instances by free text. Without a search term the server
    returns every instance it knows about.
    """
    path = build_path("search", search) if search else build_path("search")
    return await client.call(List[Instance], path, op="search")


async def bulk_instances(
    client: OrchestratorClient, keys: Sequence[InstanceKey]
) -> List[Instance]:
    """POST a list of instance keys and get their snapshots back."""
    body = [k.model_dump(by_alias=True) for k in keys]
    return await client.call(
        List[Instance],
        build_path("bulk-instances"),
        method="POST",
        json=body,
        op="bulk_instances",
    )


async def get_problems(
    client: OrchestratorClient, cluster: Optional[str] = None
) -> List[Instance]:
    return await client.call(
        List[Instance], build_path("problems", cluster), op="problems"
    )
