"""Service health, configuration, KV stores, audit log and hostname handling."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import StrictStr

from orchestrator_client.client import OrchestratorClient
from orchestrator_client.envelope import details_as_dict
from orchestrator_client.models import (
    AuditEntry,
    CandidatePromotionRule,
    HostnameResolveCache,
    InstanceKey,
)
from orchestrator_client.operations._paths import build_path

# --- Health ---
# These only confirm a success envelope; a failing node raises
# OrchestratorAPIError (or OrchestratorHTTPError when it answers 5xx bare).


async def health(client: OrchestratorClient) -> None:
    await client.call_action(build_path("health"), op="health")


async def lb_check(client: OrchestratorClient) -> None:
    await client.call_action(build_path("lb-check"), op="lb_check")


async def ping(client: OrchestratorClient) -> None:
    await client.call_action(build_path("_ping"), op="ping")


async def leader_check(
    client: OrchestratorClient, error_status_code: Optional[int] = None
) -> None:
    """
    Succeeds when the pinned node is the raft/backend leader.
    `error_status_code` sets the HTTP status a non-leader answers with.
    """
    code = None if error_status_code is None else int(error_status_code)
    await client.call_action(build_path("leader-check", code), op="leader_check")


async def status(client: OrchestratorClient) -> Dict[str, Any]:
    envelope = await client.get(build_path("status"), op="status")
    return details_as_dict(envelope.details)


async def get_headers(client: OrchestratorClient) -> Dict[str, List[str]]:
    """Request headers as seen by the server; handy behind proxies."""
    return await client.call(
        Dict[StrictStr, List[StrictStr]], build_path("headers"), op="headers"
    )


# --- Configuration and KV ---


async def reload_configuration(client: OrchestratorClient) -> None:
    await client.call_action(
        build_path("reload-configuration"), op="reload_configuration"
    )


async def submit_masters_to_kv_stores(
    client: OrchestratorClient, cluster: Optional[str] = None
) -> None:
    """Publish master identities to the KV stores, for all clusters or one."""
    await client.call_action(
        build_path("submit-masters-to-kv-stores", cluster),
        op="submit_masters_to_kv_stores",
    )


# --- Audit ---


async def get_audit(
    client: OrchestratorClient, page: int = 0, key: Optional[InstanceKey] = None
) -> List[AuditEntry]:
    if key is not None:
        path = build_path("audit", "instance", key, int(page))
    else:
        path = build_path("audit", int(page))
    return await client.call(List[AuditEntry], path, op="audit")


# --- Hostname resolution ---


async def get_hostname_resolve_cache(
    client: OrchestratorClient,
) -> List[HostnameResolveCache]:
    return await client.call(
        List[HostnameResolveCache],
        build_path("hostname-resolve-cache"),
        op="hostname_resolve_cache",
    )


async def reset_hostname_resolve_cache(client: OrchestratorClient) -> None:
    await client.call_action(
        build_path("reset-hostname-resolve-cache"), op="reset_hostname_resolve_cache"
    )


async def register_hostname_unresolve(
    client: OrchestratorClient, key: InstanceKey, virtual_name: str
) -> None:
    """Map an instance to a virtual hostname used when reporting it."""
    await client.call_action(
        build_path("register-hostname-unresolve", key, virtual_name),
        op="register_hostname_unresolve",
    )


async def deregister_hostname_unresolve(
    client: OrchestratorClient, key: InstanceKey
) -> None:
    await client.call_action(
        build_path("deregister-hostname-unresolve", key),
        op="deregister_hostname_unresolve",
    )


async def get_bulk_promotion_rules(
    client: OrchestratorClient,
) -> Dict[str, CandidatePromotionRule]:
    return await client.call(
        Dict[StrictStr, CandidatePromotionRule],
        build_path("bulk-promotion-rules"),
        op="bulk_promotion_rules",
    )
