"""Failure analysis, recovery, takeovers, audit and acknowledgements."""

from __future__ import annotations

from typing import List, Optional

from pydantic import StrictStr

from orchestrator_client.client import OrchestratorClient
from orchestrator_client.envelope import details_as_bool
from orchestrator_client.models import (
    AutomatedRecoveryFilter,
    BlockedTopologyRecovery,
    CandidatePromotionRule,
    Instance,
    InstanceKey,
    RecoveryStep,
    ReplicationAnalysis,
    TopologyRecovery,
)
from orchestrator_client.operations._paths import build_path

# --- Analysis ---


async def get_replication_analysis(
    client: OrchestratorClient, cluster: Optional[str] = None
) -> List[ReplicationAnalysis]:
    """Current failure analysis, for every cluster or only `cluster`."""
    return await client.call(
        List[ReplicationAnalysis],
        build_path("replication-analysis", cluster),
        op="replication_analysis",
    )


async def get_instance_replication_analysis(
    client: OrchestratorClient, key: InstanceKey
) -> ReplicationAnalysis:
    return await client.call(
        ReplicationAnalysis,
        build_path("replication-analysis", "instance", key),
        op="instance_replication_analysis",
    )


async def get_replication_analysis_changelog(
    client: OrchestratorClient,
) -> List[ReplicationAnalysis]:
    return await client.call(
        List[ReplicationAnalysis],
        build_path("replication-analysis-changelog"),
        op="replication_analysis_changelog",
    )


# --- Recovery ---


async def recover(
    client: OrchestratorClient,
    key: InstanceKey,
    candidate: Optional[InstanceKey] = None,
) -> TopologyRecovery:
    """
    Run a full recovery for a failed instance. `candidate` asks orchestrator
    to prefer that replica as the successor.
    """
    return await client.call(
        TopologyRecovery, build_path("recover", key, candidate), op="recover"
    )


async def recover_lite(
    client: OrchestratorClient,
    key: InstanceKey,
    candidate: Optional[InstanceKey] = None,
) -> TopologyRecovery:
    """Recovery without running external hooks."""
    return await client.call(
        TopologyRecovery, build_path("recover-lite", key, candidate), op="recover_lite"
    )


async def graceful_master_takeover(
    client: OrchestratorClient,
    cluster: str,
    designated: Optional[InstanceKey] = None,
) -> TopologyRecovery:
    return await client.call(
        TopologyRecovery,
        build_path("graceful-master-takeover", cluster, designated),
        op="graceful_master_takeover",
    )


async def graceful_master_takeover_instance(
    client: OrchestratorClient,
    key: InstanceKey,
    designated: Optional[InstanceKey] = None,
) -> TopologyRecovery:
    return await client.call(
        TopologyRecovery,
        build_path("graceful-master-takeover", key, designated),
        op="graceful_master_takeover",
    )


async def graceful_master_takeover_auto(
    client: OrchestratorClient,
    cluster: str,
    designated: Optional[InstanceKey] = None,
) -> TopologyRecovery:
    """Let orchestrator pick the new master unless `designated` is given."""
    return await client.call(
        TopologyRecovery,
        build_path("graceful-master-takeover-auto", cluster, designated),
        op="graceful_master_takeover_auto",
    )


async def graceful_master_takeover_auto_instance(
    client: OrchestratorClient, key: InstanceKey
) -> TopologyRecovery:
    return await client.call(
        TopologyRecovery,
        build_path("graceful-master-takeover-auto", key),
        op="graceful_master_takeover_auto",
    )


async def force_master_failover(
    client: OrchestratorClient, cluster: str
) -> TopologyRecovery:
    return await client.call(
        TopologyRecovery,
        build_path("force-master-failover", cluster),
        op="force_master_failover",
    )


async def force_master_failover_instance(
    client: OrchestratorClient, key: InstanceKey
) -> TopologyRecovery:
    return await client.call(
        TopologyRecovery,
        build_path("force-master-failover", key),
        op="force_master_failover",
    )


async def force_master_takeover(
    client: OrchestratorClient, cluster: str, designated: InstanceKey
) -> TopologyRecovery:
    return await client.call(
        TopologyRecovery,
        build_path("force-master-takeover", cluster, designated),
        op="force_master_takeover",
    )


async def force_master_takeover_instance(
    client: OrchestratorClient, key: InstanceKey, designated: InstanceKey
) -> TopologyRecovery:
    return await client.call(
        TopologyRecovery,
        build_path("force-master-takeover", key, designated),
        op="force_master_takeover",
    )


async def register_candidate(
    client: OrchestratorClient,
    key: InstanceKey,
    rule: CandidatePromotionRule | str,
) -> Instance:
    rule = CandidatePromotionRule(rule)
    return await client.call(
        Instance, build_path("register-candidate", key, rule), op="register_candidate"
    )


async def get_automated_recovery_filters(
    client: OrchestratorClient,
) -> List[AutomatedRecoveryFilter]:
    """The server lists filter patterns as plain strings."""
    patterns = await client.call(
        List[StrictStr],
        build_path("automated-recovery-filters"),
        op="automated_recovery_filters",
    )
    return [AutomatedRecoveryFilter(pattern=p) for p in patterns]


# --- Audit ---


async def audit_failure_detection(
    client: OrchestratorClient, page: int = 0, *, alias: Optional[str] = None
) -> List[ReplicationAnalysis]:
    path = (
        build_path("audit-failure-detection", "alias", alias, int(page))
        if alias
        else build_path("audit-failure-detection", int(page))
    )
    return await client.call(
        List[ReplicationAnalysis], path, op="audit_failure_detection"
    )


async def audit_failure_detection_by_id(
    client: OrchestratorClient, detection_id: int
) -> ReplicationAnalysis:
    return await client.call(
        ReplicationAnalysis,
        build_path("audit-failure-detection", "id", int(detection_id)),
        op="audit_failure_detection_by_id",
    )


async def audit_recovery(
    client: OrchestratorClient,
    page: int = 0,
    *,
    cluster: Optional[str] = None,
    alias: Optional[str] = None,
) -> List[TopologyRecovery]:
    """Recovery history, newest first; optionally scoped by cluster or alias."""
    if cluster:
        path = build_path("audit-recovery", "cluster", cluster, int(page))
    elif alias:
        path = build_path("audit-recovery", "alias", alias, int(page))
    else:
        path = build_path("audit-recovery", int(page))
    return await client.call(List[TopologyRecovery], path, op="audit_recovery")


async def audit_recovery_by_id(
    client: OrchestratorClient, recovery_id: int
) -> TopologyRecovery:
    return await client.call(
        TopologyRecovery,
        build_path("audit-recovery", "id", int(recovery_id)),
        op="audit_recovery_by_id",
    )


async def audit_recovery_by_uid(
    client: OrchestratorClient, uid: str
) -> List[TopologyRecovery]:
    return await client.call(
        List[TopologyRecovery],
        build_path("audit-recovery", "uid", uid),
        op="audit_recovery_by_uid",
    )


async def audit_recovery_steps(
    client: OrchestratorClient, uid: str
) -> List[RecoveryStep]:
    return await client.call(
        List[RecoveryStep], build_path("audit-recovery-steps", uid), op="audit_recovery_steps"
    )


async def get_active_cluster_recovery(
    client: OrchestratorClient, cluster: str
) -> TopologyRecovery:
    return await client.call(
        TopologyRecovery,
        build_path("active-cluster-recovery", cluster),
        op="active_cluster_recovery",
    )


async def get_recently_active_cluster_recovery(
    client: OrchestratorClient, cluster: str
) -> List[TopologyRecovery]:
    return await client.call(
        List[TopologyRecovery],
        build_path("recently-active-cluster-recovery", cluster),
        op="recently_active_cluster_recovery",
    )


async def get_recently_active_instance_recovery(
    client: OrchestratorClient, key: InstanceKey
) -> List[TopologyRecovery]:
    return await client.call(
        List[TopologyRecovery],
        build_path("recently-active-instance-recovery", key),
        op="recently_active_instance_recovery",
    )


# --- Acknowledgement ---


async def _acknowledge(
    client: OrchestratorClient, path: str, comment: str, op: str
) -> TopologyRecovery:
    return await client.call(
        TopologyRecovery, path, method="POST", json={"comment": comment}, op=op
    )


async def acknowledge_cluster_recovery(
    client: OrchestratorClient, cluster: str, comment: str
) -> TopologyRecovery:
    """Acknowledge recoveries of a cluster so new ones are not blocked."""
    return await _acknowledge(
        client,
        build_path("ack-recovery", "cluster", cluster),
        comment,
        "ack_cluster_recovery",
    )


async def acknowledge_cluster_recovery_by_alias(
    client: OrchestratorClient, alias: str, comment: str
) -> TopologyRecovery:
    return await _acknowledge(
        client,
        build_path("ack-recovery", "cluster", "alias", alias),
        comment,
        "ack_cluster_recovery_by_alias",
    )


async def acknowledge_instance_recovery(
    client: OrchestratorClient, key: InstanceKey, comment: str
) -> TopologyRecovery:
    return await _acknowledge(
        client,
        build_path("ack-recovery", "instance", key),
        comment,
        "ack_instance_recovery",
    )


async def acknowledge_recovery_by_id(
    client: OrchestratorClient, recovery_id: int, comment: str
) -> TopologyRecovery:
    return await _acknowledge(
        client,
        build_path("ack-recovery", int(recovery_id)),
        comment,
        "ack_recovery_by_id",
    )


async def acknowledge_recovery_by_uid(
    client: OrchestratorClient, uid: str, comment: str
) -> TopologyRecovery:
    return await _acknowledge(
        client,
        build_path("ack-recovery", "uid", uid),
        comment,
        "ack_recovery_by_uid",
    )


async def acknowledge_all_recoveries(
    client: OrchestratorClient, comment: str
) -> List[TopologyRecovery]:
    return await client.call(
        List[TopologyRecovery],
        build_path("ack-all-recoveries"),
        method="POST",
        json={"comment": comment},
        op="ack_all_recoveries",
    )


# --- Blocking and global switch ---


async def get_blocked_recoveries(
    client: OrchestratorClient, cluster: Optional[str] = None
) -> List[BlockedTopologyRecovery]:
    path = (
        build_path("blocked-recoveries", "cluster", cluster)
        if cluster
        else build_path("blocked-recoveries")
    )
    return await client.call(
        List[BlockedTopologyRecovery], path, op="blocked_recoveries"
    )


async def disable_global_recoveries(client: OrchestratorClient) -> None:
    await client.call_action(
        build_path("disable-global-recoveries"), op="disable_global_recoveries"
    )


async def enable_global_recoveries(client: OrchestratorClient) -> None:
    await client.call_action(
        build_path("enable-global-recoveries"), op="enable_global_recoveries"
    )


async def check_global_recoveries(client: OrchestratorClient) -> bool:
    """
    True when automated recoveries are enabled cluster-wide. The server
    answers "enabled"/"disabled"; boolean-shaped Details are accepted too.
    """
    envelope = await client.get(
        build_path("check-global-recoveries"), op="check_global_recoveries"
    )
    if isinstance(envelope.details, str) and envelope.details.strip().lower() == "enabled":
        return True
    return details_as_bool(envelope.details)
