from __future__ import annotations

from typing import List, Optional

from orchestrator_client.client import OrchestratorClient
from orchestrator_client.models import Instance, InstanceKey, Maintenance
from orchestrator_client.operations._paths import build_path, duration_segment
from orchestrator_client.utils.durations import DurationLike


async def begin_maintenance(
    client: OrchestratorClient,
    key: InstanceKey,
    owner: str,
    reason: str,
    *,
    duration: Optional[DurationLike] = None,
) -> Maintenance:
    """
    Mark an instance as under maintenance so orchestrator leaves it alone.
    - owner/reason: free text, percent-encoded into the path.
    - duration: optional timedelta, seconds or "1h 30m"; sent as "<N>s".
    """
    path = build_path(
        "begin-maintenance", key, owner, reason, duration_segment(duration)
    )
    return await client.call(Maintenance, path, op="begin_maintenance")


async def end_maintenance(client: OrchestratorClient, key: InstanceKey) -> Maintenance:
    return await client.call(
        Maintenance, build_path("end-maintenance", key), op="end_maintenance"
    )


async def end_maintenance_by_id(
    client: OrchestratorClient, maintenance_id: int
) -> Maintenance:
    return await client.call(
        Maintenance,
        build_path("end-maintenance", int(maintenance_id)),
        op="end_maintenance_by_id",
    )


async def in_maintenance(client: OrchestratorClient, key: InstanceKey) -> bool:
    return await client.call_bool(build_path("in-maintenance", key), op="in_maintenance")


async def get_maintenance(client: OrchestratorClient) -> List[Maintenance]:
    """Active maintenance windows across all instances."""
    return await client.call(
        List[Maintenance], build_path("maintenance"), op="maintenance"
    )


async def begin_downtime(
    client: OrchestratorClient,
    key: InstanceKey,
    owner: str,
    reason: str,
    *,
    duration: Optional[DurationLike] = None,
) -> Instance:
    """
    Downtime an instance: failure detection still runs but no recovery is
    attempted for it. Without a duration the server default applies.
    """
    path = build_path("begin-downtime", key, owner, reason, duration_segment(duration))
    return await client.call(Instance, path, op="begin_downtime")


async def end_downtime(client: OrchestratorClient, key: InstanceKey) -> Instance:
    return await client.call(Instance, build_path("end-downtime", key), op="end_downtime")


async def get_downtimed(
    client: OrchestratorClient, cluster: Optional[str] = None
) -> List[Instance]:
    return await client.call(
        List[Instance], build_path("downtimed", cluster), op="downtimed"
    )
