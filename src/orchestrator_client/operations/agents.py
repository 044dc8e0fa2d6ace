"""orchestrator-agent control: LVM snapshots, MySQL service and seeding."""

from __future__ import annotations

from typing import List

from orchestrator_client.client import OrchestratorClient
from orchestrator_client.models import Agent, AgentSeed, AgentSeedState
from orchestrator_client.operations._paths import build_path


async def _agent_command(client: OrchestratorClient, *parts) -> None:
    # Commands answer with an envelope only; Details carries nothing useful.
    await client.call_action(build_path(*parts), op=str(parts[0]).replace("-", "_"))


async def get_agents(client: OrchestratorClient) -> List[Agent]:
    return await client.call(List[Agent], build_path("agents"), op="agents")


async def get_agent(client: OrchestratorClient, host: str) -> Agent:
    return await client.call(Agent, build_path("agent", host), op="agent")


async def agent_umount(client: OrchestratorClient, host: str) -> None:
    await _agent_command(client, "agent-umount", host)


async def agent_mount(client: OrchestratorClient, host: str) -> None:
    await _agent_command(client, "agent-mount", host)


async def agent_create_snapshot(client: OrchestratorClient, host: str) -> None:
    await _agent_command(client, "agent-create-snapshot", host)


async def agent_remove_lv(client: OrchestratorClient, host: str) -> None:
    await _agent_command(client, "agent-removelv", host)


async def agent_mysql_stop(client: OrchestratorClient, host: str) -> None:
    await _agent_command(client, "agent-mysql-stop", host)


async def agent_mysql_start(client: OrchestratorClient, host: str) -> None:
    await _agent_command(client, "agent-mysql-start", host)


async def agent_seed(
    client: OrchestratorClient, target_host: str, source_host: str
) -> AgentSeed:
    """Start copying data from `source_host` onto `target_host`."""
    return await client.call(
        AgentSeed, build_path("agent-seed", target_host, source_host), op="agent_seed"
    )


async def get_agent_active_seeds(
    client: OrchestratorClient, host: str
) -> List[AgentSeed]:
    return await client.call(
        List[AgentSeed], build_path("agent-active-seeds", host), op="agent_active_seeds"
    )


async def get_agent_recent_seeds(
    client: OrchestratorClient, host: str
) -> List[AgentSeed]:
    return await client.call(
        List[AgentSeed], build_path("agent-recent-seeds", host), op="agent_recent_seeds"
    )


async def get_agent_seed_details(
    client: OrchestratorClient, seed_id: int
) -> AgentSeed:
    return await client.call(
        AgentSeed,
        build_path("agent-seed-details", int(seed_id)),
        op="agent_seed_details",
    )


async def get_agent_seed_states(
    client: OrchestratorClient, seed_id: int
) -> List[AgentSeedState]:
    return await client.call(
        List[AgentSeedState],
        build_path("agent-seed-states", int(seed_id)),
        op="agent_seed_states",
    )


async def abort_agent_seed(client: OrchestratorClient, seed_id: int) -> None:
    await _agent_command(client, "agent-abort-seed", int(seed_id))


async def agent_custom_command(
    client: OrchestratorClient, host: str, command: str
) -> None:
    """Run a command configured under the agent's CustomCommands by name."""
    await _agent_command(client, "agent-custom-command", host, command)


async def get_all_seeds(client: OrchestratorClient) -> List[AgentSeed]:
    return await client.call(List[AgentSeed], build_path("seeds"), op="seeds")
