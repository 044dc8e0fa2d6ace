"""
Operation namespaces for the orchestrator API, one module per feature area.

Every function takes an OrchestratorClient as its first argument:

    from orchestrator_client.operations import instances
    inst = await instances.get_instance(client, key)
"""

from . import (
    agents,
    clusters,
    instances,
    maintenance,
    monitoring,
    pools,
    raft,
    recovery,
    replication,
    system,
    tags,
    topology,
)

__all__ = [
    "agents",
    "clusters",
    "instances",
    "maintenance",
    "monitoring",
    "pools",
    "raft",
    "recovery",
    "replication",
    "system",
    "tags",
    "topology",
]
