"""Replication thread control, binlog housekeeping, semi-sync and GTID."""

from __future__ import annotations

from typing import List

from pydantic import StrictStr

from orchestrator_client.client import OrchestratorClient
from orchestrator_client.models import Instance, InstanceKey
from orchestrator_client.operations._paths import build_path


async def _instance_op(
    client: OrchestratorClient, name: str, key: InstanceKey, *extra
) -> Instance:
    return await client.call(
        Instance, build_path(name, key, *extra), op=name.replace("-", "_")
    )


async def start_replica(client: OrchestratorClient, key: InstanceKey) -> Instance:
    return await _instance_op(client, "start-replica", key)


async def restart_replica(client: OrchestratorClient, key: InstanceKey) -> Instance:
    return await _instance_op(client, "restart-replica", key)


async def stop_replica(client: OrchestratorClient, key: InstanceKey) -> Instance:
    return await _instance_op(client, "stop-replica", key)


async def stop_replica_nice(client: OrchestratorClient, key: InstanceKey) -> Instance:
    """Stop replication after the SQL thread has caught up with the IO thread."""
    return await _instance_op(client, "stop-replica-nice", key)


async def reset_replica(client: OrchestratorClient, key: InstanceKey) -> Instance:
    return await _instance_op(client, "reset-replica", key)


async def detach_replica(client: OrchestratorClient, key: InstanceKey) -> Instance:
    return await _instance_op(client, "detach-replica", key)


async def reattach_replica(client: OrchestratorClient, key: InstanceKey) -> Instance:
    return await _instance_op(client, "reattach-replica", key)


async def detach_replica_master_host(
    client: OrchestratorClient, key: InstanceKey
) -> Instance:
    return await _instance_op(client, "detach-replica-master-host", key)


async def reattach_replica_master_host(
    client: OrchestratorClient, key: InstanceKey
) -> Instance:
    return await _instance_op(client, "reattach-replica-master-host", key)


async def skip_query(client: OrchestratorClient, key: InstanceKey) -> Instance:
    return await _instance_op(client, "skip-query", key)


async def flush_binary_logs(client: OrchestratorClient, key: InstanceKey) -> Instance:
    return await _instance_op(client, "flush-binary-logs", key)


async def purge_binary_logs(
    client: OrchestratorClient, key: InstanceKey, log_file: str
) -> Instance:
    """Purge binary logs up to (not including) `log_file`."""
    return await _instance_op(client, "purge-binary-logs", key, log_file)


async def restart_replica_statements(
    client: OrchestratorClient, key: InstanceKey
) -> List[str]:
    return await client.call(
        List[StrictStr],
        build_path("restart-replica-statements", key),
        op="restart_replica_statements",
    )


async def delay_replication(
    client: OrchestratorClient, key: InstanceKey, seconds: int
) -> Instance:
    return await _instance_op(client, "delay-replication", key, int(seconds))


async def enable_semi_sync_master(client: OrchestratorClient, key: InstanceKey) -> Instance:
    return await _instance_op(client, "enable-semi-sync-master", key)


async def disable_semi_sync_master(
    client: OrchestratorClient, key: InstanceKey
) -> Instance:
    return await _instance_op(client, "disable-semi-sync-master", key)


async def enable_semi_sync_replica(
    client: OrchestratorClient, key: InstanceKey
) -> Instance:
    return await _instance_op(client, "enable-semi-sync-replica", key)


async def disable_semi_sync_replica(
    client: OrchestratorClient, key: InstanceKey
) -> Instance:
    return await _instance_op(client, "disable-semi-sync-replica", key)


# --- GTID ---


async def enable_gtid(client: OrchestratorClient, key: InstanceKey) -> Instance:
    return await _instance_op(client, "enable-gtid", key)


async def disable_gtid(client: OrchestratorClient, key: InstanceKey) -> Instance:
    return await _instance_op(client, "disable-gtid", key)


async def locate_errant_gtid(client: OrchestratorClient, key: InstanceKey) -> Instance:
    return await _instance_op(client, "locate-gtid-errant", key)


async def gtid_errant_reset_master(
    client: OrchestratorClient, key: InstanceKey
) -> Instance:
    """Remove errant GTIDs by resetting the replica's master status."""
    return await _instance_op(client, "gtid-errant-reset-master", key)


async def gtid_errant_inject_empty(
    client: OrchestratorClient, key: InstanceKey
) -> Instance:
    """Inject empty transactions on the master to absorb errant GTIDs."""
    return await _instance_op(client, "gtid-errant-inject-empty", key)
