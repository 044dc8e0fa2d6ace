from __future__ import annotations

from typing import Any, Dict, List

from pydantic import StrictStr

from orchestrator_client.client import OrchestratorClient
from orchestrator_client.envelope import details_as_dict
from orchestrator_client.models import RaftMembershipHealth, RaftState
from orchestrator_client.operations._paths import build_path


async def grab_election(client: OrchestratorClient) -> None:
    await client.call_action(build_path("grab-election"), op="grab_election")


async def add_raft_peer(client: OrchestratorClient, addr: str) -> None:
    await client.call_action(build_path("raft-add-peer", addr), op="raft_add_peer")


async def remove_raft_peer(client: OrchestratorClient, addr: str) -> None:
    await client.call_action(
        build_path("raft-remove-peer", addr), op="raft_remove_peer"
    )


async def yield_raft(client: OrchestratorClient, node: str) -> None:
    """Ask the current raft leader to step down in favour of `node`."""
    await client.call_action(build_path("raft-yield", node), op="raft_yield")


async def yield_raft_hint(client: OrchestratorClient, hint: str) -> None:
    await client.call_action(build_path("raft-yield-hint", hint), op="raft_yield_hint")


async def get_raft_peers(client: OrchestratorClient) -> List[str]:
    return await client.call(List[StrictStr], build_path("raft-peers"), op="raft_peers")


async def get_raft_state(client: OrchestratorClient) -> RaftState:
    return await client.call(RaftState, build_path("raft-state"), op="raft_state")


async def get_raft_leader(client: OrchestratorClient) -> str:
    """Address of the raft leader; empty when the node does not know one."""
    return await client.call_str(build_path("raft-leader"), op="raft_leader")


async def get_raft_health(client: OrchestratorClient) -> RaftMembershipHealth:
    return await client.call(
        RaftMembershipHealth, build_path("raft-health"), op="raft_health"
    )


async def get_raft_status(client: OrchestratorClient) -> Dict[str, Any]:
    envelope = await client.get(build_path("raft-status"), op="raft_status")
    return details_as_dict(envelope.details)


async def get_raft_snapshot(client: OrchestratorClient) -> bytes:
    """Raw snapshot body, returned untouched."""
    return await client.get_bytes(build_path("raft-snapshot"), op="raft_snapshot")


async def submit_raft_follower_health_report(
    client: OrchestratorClient, auth_token: str, raft_bind: str, raft_advertise: str
) -> None:
    await client.call_action(
        build_path("raft-follower-health-report", auth_token, raft_bind, raft_advertise),
        op="raft_follower_health_report",
    )


async def reelect(client: OrchestratorClient) -> None:
    await client.call_action(build_path("reelect"), op="reelect")
