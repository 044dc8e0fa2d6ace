import pytest
import respx
from httpx import Response
from orchestrator_client.client import OrchestratorClient
from orchestrator_client.errors import OrchestratorAPIError, OrchestratorDecodeError
from orchestrator_client.models import CandidatePromotionRule, InstanceKey
from orchestrator_client.operations import agents, monitoring, pools, raft, system

API = "http://orc.example.com:3000/api"
DB1 = InstanceKey(hostname="db1.example.com", port=3306)


def ok(details):
    return Response(200, json={"Code": 1, "Message": "", "Details": details})


@pytest.fixture
def client():
    return OrchestratorClient(base_url="http://orc.example.com:3000")


# --- system ---


@pytest.mark.asyncio
@respx.mock
async def test_health_checks_pass_on_success_envelope(client):
    respx.get(f"{API}/health").mock(return_value=ok({"Healthy": True}))
    respx.get(f"{API}/_ping").mock(return_value=ok(None))
    leader = respx.get(f"{API}/leader-check/503").mock(return_value=ok("OK"))

    async with client:
        await system.health(client)
        await system.ping(client)
        await system.leader_check(client, 503)

    assert leader.called


@pytest.mark.asyncio
@respx.mock
async def test_lb_check_failure_is_an_api_error(client):
    respx.get(f"{API}/lb-check").mock(
        return_value=Response(500, json={"Code": 0, "Message": "Not healthy"})
    )

    async with client:
        with pytest.raises(OrchestratorAPIError) as exc:
            await system.lb_check(client)

    assert exc.value.message == "Not healthy"


@pytest.mark.asyncio
@respx.mock
async def test_status_and_headers(client):
    respx.get(f"{API}/status").mock(
        return_value=ok({"Healthy": True, "Hostname": "orc1", "AvailableNodes": []})
    )
    respx.get(f"{API}/headers").mock(
        return_value=ok({"Accept": ["application/json"], "X-Forwarded-For": ["10.0.0.1"]})
    )

    async with client:
        status = await system.status(client)
        headers = await system.get_headers(client)

    assert status["Hostname"] == "orc1"
    assert headers["Accept"] == ["application/json"]


@pytest.mark.asyncio
@respx.mock
async def test_audit_pages(client):
    respx.get(f"{API}/audit/1").mock(
        return_value=ok(
            [
                {
                    "AuditId": 9,
                    "AuditType": "begin-downtime",
                    "AuditInstanceKey": {"Hostname": "db1.example.com", "Port": 3306},
                    "Message": "owner: admin",
                }
            ]
        )
    )
    per_instance = respx.get(f"{API}/audit/instance/db1.example.com/3306/0").mock(
        return_value=ok(None)
    )

    async with client:
        entries = await system.get_audit(client, 1)
        assert await system.get_audit(client, key=DB1) == []

    assert entries[0].audit_instance_key == DB1
    assert per_instance.called


@pytest.mark.asyncio
@respx.mock
async def test_hostname_unresolve_registration(client):
    register = respx.get(
        f"{API}/register-hostname-unresolve/db1.example.com/3306/orders-primary"
    ).mock(return_value=ok(None))
    deregister = respx.get(
        f"{API}/deregister-hostname-unresolve/db1.example.com/3306"
    ).mock(return_value=ok(None))

    async with client:
        await system.register_hostname_unresolve(client, DB1, "orders-primary")
        await system.deregister_hostname_unresolve(client, DB1)

    assert register.called
    assert deregister.called


@pytest.mark.asyncio
@respx.mock
async def test_bulk_promotion_rules(client):
    respx.get(f"{API}/bulk-promotion-rules").mock(
        return_value=ok({"db1.example.com:3306": "prefer", "db9:3306": "must_not"})
    )

    async with client:
        rules = await system.get_bulk_promotion_rules(client)

    assert rules["db9:3306"] is CandidatePromotionRule.MUST_NOT


@pytest.mark.asyncio
@respx.mock
async def test_submit_masters_to_kv_stores_optionally_scoped(client):
    everywhere = respx.get(f"{API}/submit-masters-to-kv-stores").mock(return_value=ok([]))
    scoped = respx.get(f"{API}/submit-masters-to-kv-stores/orders").mock(
        return_value=ok([])
    )

    async with client:
        await system.submit_masters_to_kv_stores(client)
        await system.submit_masters_to_kv_stores(client, "orders")

    assert everywhere.called
    assert scoped.called


# --- raft ---


@pytest.mark.asyncio
@respx.mock
async def test_raft_state_and_leader(client):
    respx.get(f"{API}/raft-state").mock(
        return_value=ok({"Leader": "10.0.0.1:10008", "IsLeader": False, "State": "Follower"})
    )
    respx.get(f"{API}/raft-leader").mock(return_value=ok("10.0.0.1:10008"))

    async with client:
        state = await raft.get_raft_state(client)
        leader = await raft.get_raft_leader(client)

    assert state.state == "Follower"
    assert leader == "10.0.0.1:10008"


@pytest.mark.asyncio
@respx.mock
async def test_raft_status_null_is_empty_dict(client):
    respx.get(f"{API}/raft-status").mock(return_value=ok(None))

    async with client:
        assert await raft.get_raft_status(client) == {}


@pytest.mark.asyncio
@respx.mock
async def test_raft_snapshot_is_raw_bytes(client):
    respx.get(f"{API}/raft-snapshot").mock(return_value=Response(200, content=b"SNAP"))

    async with client:
        assert await raft.get_raft_snapshot(client) == b"SNAP"


@pytest.mark.asyncio
@respx.mock
async def test_raft_peer_management_paths(client):
    add = respx.get(f"{API}/raft-add-peer/10.0.0.4:10008").mock(return_value=ok(None))
    report = respx.get(
        f"{API}/raft-follower-health-report/tok/10.0.0.4:10008/orc4:10008"
    ).mock(return_value=ok(None))

    async with client:
        await raft.add_raft_peer(client, "10.0.0.4:10008")
        await raft.submit_raft_follower_health_report(
            client, "tok", "10.0.0.4:10008", "orc4:10008"
        )

    assert add.called
    assert report.called


# --- agents ---


@pytest.mark.asyncio
@respx.mock
async def test_agents_and_seeds(client):
    respx.get(f"{API}/agents").mock(
        return_value=ok(
            [
                {
                    "Hostname": "db1.example.com",
                    "Port": 3002,
                    "AvailableDiskSpaceRatio": 0.42,
                    "LogicalVolume": {"Name": "lv_mysql", "MySQLPort": 3306},
                }
            ]
        )
    )
    seed = respx.get(f"{API}/agent-seed/db2.example.com/db1.example.com").mock(
        return_value=ok({"SeedId": 5, "TargetHostname": "db2.example.com"})
    )

    async with client:
        found = await agents.get_agents(client)
        started = await agents.agent_seed(client, "db2.example.com", "db1.example.com")

    assert found[0].logical_volume.mysql_port == 3306
    assert found[0].available_disk_space_ratio == 0.42
    assert started.seed_id == 5
    assert seed.called


@pytest.mark.asyncio
@respx.mock
async def test_agent_commands_only_check_the_envelope(client):
    umount = respx.get(f"{API}/agent-umount/db1.example.com").mock(return_value=ok(None))
    custom = respx.get(f"{API}/agent-custom-command/db1.example.com/rotate-logs").mock(
        return_value=ok("done")
    )
    abort = respx.get(f"{API}/agent-abort-seed/5").mock(
        return_value=ok({"anything": "goes"})
    )

    async with client:
        await agents.agent_umount(client, "db1.example.com")
        await agents.agent_custom_command(client, "db1.example.com", "rotate-logs")
        await agents.abort_agent_seed(client, 5)

    assert umount.called
    assert custom.called
    assert abort.called


# --- pools ---


@pytest.mark.asyncio
@respx.mock
async def test_submit_pool_instances_query(client):
    route = respx.get(f"{API}/submit-pool-instances/readers").mock(return_value=ok(None))

    async with client:
        await pools.submit_pool_instances(
            client, "readers", [DB1, "db2.example.com:3306"]
        )

    params = route.calls[0].request.url.params
    assert params["instances"] == "db1.example.com:3306,db2.example.com:3306"


@pytest.mark.asyncio
@respx.mock
async def test_cluster_pool_instances_map(client):
    respx.get(f"{API}/cluster-pool-instances/orders").mock(
        return_value=ok({"readers": [{"Hostname": "db1.example.com", "Port": 3306}]})
    )

    async with client:
        by_pool = await pools.get_cluster_pool_instances(client, "orders")

    assert by_pool == {"readers": [DB1]}


@pytest.mark.asyncio
@respx.mock
async def test_heuristic_pool_lag(client):
    respx.get(f"{API}/heuristic-cluster-pool-lag/orders").mock(
        return_value=ok({"readers": 3, "reports": 0})
    )
    respx.get(f"{API}/heuristic-cluster-pool-lag/orders/readers").mock(
        return_value=ok(3.0)
    )
    respx.get(f"{API}/heuristic-cluster-pool-lag/orders/broken").mock(
        return_value=ok("soon")
    )

    async with client:
        assert await pools.get_heuristic_cluster_pool_lag(client, "orders") == {
            "readers": 3,
            "reports": 0,
        }
        assert await pools.get_heuristic_cluster_pool_lag_for_pool(
            client, "orders", "readers"
        ) == 3
        with pytest.raises(OrchestratorDecodeError):
            await pools.get_heuristic_cluster_pool_lag_for_pool(
                client, "orders", "broken"
            )


# --- monitoring ---


@pytest.mark.asyncio
@respx.mock
async def test_discovery_queue_metrics_per_queue(client):
    all_queues = respx.get(f"{API}/discovery-queue-metrics-raw/60").mock(
        return_value=ok(None)
    )
    one_queue = respx.get(f"{API}/discovery-queue-metrics-aggregated/DEFAULT/60").mock(
        return_value=ok([{"QueueName": "DEFAULT", "QueueLength": 4}])
    )

    async with client:
        assert await monitoring.get_discovery_queue_metrics_raw(client, 60) == []
        metrics = await monitoring.get_discovery_queue_metrics_aggregated(
            client, 60, queue="DEFAULT"
        )

    assert all_queues.called
    assert one_queue.called
    assert metrics[0].queue_length == 4


@pytest.mark.asyncio
async def test_monitoring_window_must_be_positive(client):
    with pytest.raises(ValueError):
        await monitoring.get_write_buffer_metrics_raw(client, 0)
    await client.aclose()
