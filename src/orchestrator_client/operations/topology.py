"""Relocation, matching and topology views."""

from __future__ import annotations

from typing import List, Union

from pydantic import StrictStr

from orchestrator_client.client import OrchestratorClient
from orchestrator_client.envelope import details_as_bool
from orchestrator_client.models import Instance, InstanceKey
from orchestrator_client.operations._paths import build_path, parse_instance_keys

ClusterOrInstance = Union[str, InstanceKey]


async def _single(client: OrchestratorClient, name: str, *parts) -> Instance:
    return await client.call(
        Instance, build_path(name, *parts), op=name.replace("-", "_")
    )


async def _multi(client: OrchestratorClient, name: str, *parts) -> List[Instance]:
    return await client.call(
        List[Instance], build_path(name, *parts), op=name.replace("-", "_")
    )


# --- Smart relocation ---


async def relocate(
    client: OrchestratorClient, key: InstanceKey, below: InstanceKey
) -> Instance:
    """
    Move `key` below `below` using whatever method works (GTID, Pseudo-GTID,
    binlog servers or plain binlog coordinates).
    """
    return await _single(client, "relocate", key, below)


async def relocate_below(
    client: OrchestratorClient, key: InstanceKey, below: InstanceKey
) -> Instance:
    return await _single(client, "relocate-below", key, below)


async def relocate_replicas(
    client: OrchestratorClient, key: InstanceKey, below: InstanceKey
) -> List[Instance]:
    return await _multi(client, "relocate-replicas", key, below)


async def regroup_replicas(
    client: OrchestratorClient, key: InstanceKey
) -> List[Instance]:
    return await _multi(client, "regroup-replicas", key)


async def regroup_replicas_bls(
    client: OrchestratorClient, key: InstanceKey
) -> List[Instance]:
    return await _multi(client, "regroup-replicas-bls", key)


async def regroup_replicas_gtid(
    client: OrchestratorClient, key: InstanceKey
) -> List[Instance]:
    return await _multi(client, "regroup-replicas-gtid", key)


async def regroup_replicas_pgtid(
    client: OrchestratorClient, key: InstanceKey
) -> List[Instance]:
    return await _multi(client, "regroup-replicas-pgtid", key)


# --- Classic binlog file:pos moves ---


async def move_up(client: OrchestratorClient, key: InstanceKey) -> Instance:
    return await _single(client, "move-up", key)


async def move_up_replicas(
    client: OrchestratorClient, key: InstanceKey
) -> List[Instance]:
    return await _multi(client, "move-up-replicas", key)


async def move_below(
    client: OrchestratorClient, key: InstanceKey, sibling: InstanceKey
) -> Instance:
    return await _single(client, "move-below", key, sibling)


async def move_equivalent(
    client: OrchestratorClient, key: InstanceKey, below: InstanceKey
) -> Instance:
    return await _single(client, "move-equivalent", key, below)


async def repoint(
    client: OrchestratorClient, key: InstanceKey, below: InstanceKey
) -> Instance:
    return await _single(client, "repoint", key, below)


async def repoint_replicas(
    client: OrchestratorClient, key: InstanceKey
) -> List[Instance]:
    return await _multi(client, "repoint-replicas", key)


async def make_co_master(client: OrchestratorClient, key: InstanceKey) -> Instance:
    return await _single(client, "make-co-master", key)


async def take_siblings(client: OrchestratorClient, key: InstanceKey) -> Instance:
    return await _single(client, "take-siblings", key)


async def take_master(client: OrchestratorClient, key: InstanceKey) -> Instance:
    return await _single(client, "take-master", key)


async def master_equivalent(
    client: OrchestratorClient, key: InstanceKey, log_file: str, log_pos: int
) -> Instance:
    return await _single(client, "master-equivalent", key, log_file, int(log_pos))


# --- GTID moves ---


async def move_below_gtid(
    client: OrchestratorClient, key: InstanceKey, below: InstanceKey
) -> Instance:
    return await _single(client, "move-below-gtid", key, below)


async def move_gtid(
    client: OrchestratorClient, key: InstanceKey, below: InstanceKey
) -> Instance:
    return await _single(client, "move-gtid", key, below)


async def move_replicas_gtid(
    client: OrchestratorClient, key: InstanceKey, below: InstanceKey
) -> List[Instance]:
    return await _multi(client, "move-replicas-gtid", key, below)


# --- Pseudo-GTID matching ---


async def match(
    client: OrchestratorClient, key: InstanceKey, below: InstanceKey
) -> Instance:
    return await _single(client, "match", key, below)


async def match_below(
    client: OrchestratorClient, key: InstanceKey, below: InstanceKey
) -> Instance:
    return await _single(client, "match-below", key, below)


async def match_up(client: OrchestratorClient, key: InstanceKey) -> Instance:
    return await _single(client, "match-up", key)


async def match_replicas(
    client: OrchestratorClient, key: InstanceKey, below: InstanceKey
) -> List[Instance]:
    return await _multi(client, "match-replicas", key, below)


async def match_up_replicas(
    client: OrchestratorClient, key: InstanceKey
) -> List[Instance]:
    return await _multi(client, "match-up-replicas", key)


async def last_pseudo_gtid(client: OrchestratorClient, key: InstanceKey) -> Instance:
    return await _single(client, "last-pseudo-gtid", key)


async def can_replicate_from(
    client: OrchestratorClient, key: InstanceKey, master: InstanceKey
) -> bool:
    """
    Whether `key` can replicate from `master`.

    Returns the verdict the server puts in the envelope Message ("true"/"false")
    rather than the Instance record in Details; callers wanting the replica
    record should use `instances.get_instance`.
    """
    envelope = await client.call_action(
        build_path("can-replicate-from", key, master), op="can_replicate_from"
    )
    return details_as_bool(envelope.message)


async def can_replicate_from_gtid(
    client: OrchestratorClient, key: InstanceKey, master: InstanceKey
) -> bool:
    """GTID flavour of can_replicate_from; returns the Message verdict too."""
    envelope = await client.call_action(
        build_path("can-replicate-from-gtid", key, master),
        op="can_replicate_from_gtid",
    )
    return details_as_bool(envelope.message)


# --- Views ---


async def get_topology(client: OrchestratorClient, target: ClusterOrInstance) -> str:
    """ASCII tree of the cluster, by cluster hint or by any member instance."""
    return await client.get_text(build_path("topology", target), op="topology")


async def get_topology_tabulated(
    client: OrchestratorClient, target: ClusterOrInstance
) -> str:
    return await client.get_text(
        build_path("topology-tabulated", target), op="topology_tabulated"
    )


async def get_topology_tags(
    client: OrchestratorClient, target: ClusterOrInstance
) -> List[Instance]:
    return await _multi(client, "topology-tags", target)


async def snapshot_topologies(client: OrchestratorClient) -> List[InstanceKey]:
    """
    Trigger a topology snapshot. Returns the instance keys the server listed;
    entries that are not valid "host:port" strings are skipped.
    """
    values = await client.call(
        List[StrictStr], build_path("snapshot-topologies"), op="snapshot_topologies"
    )
    return parse_instance_keys(values)
