import asyncio
import logging
import time

import httpx
import pytest
import respx
from httpx import Response
from orchestrator_client.client import OrchestratorClient
from orchestrator_client.core.context import call_context
from orchestrator_client.errors import LeaderResolutionError, OrchestratorCancelledError
from orchestrator_client.leader import LeaderResolver, normalize_endpoint

ENDPOINTS = ["http://orc1:3000", "http://orc2:3000/", "http://orc3:3000"]


@pytest.mark.parametrize(
    "endpoint,prefix,expected",
    [
        ("http://orc1:3000", None, "http://orc1:3000/api"),
        ("http://orc1:3000/", None, "http://orc1:3000/api"),
        ("http://orc1:3000/api", None, "http://orc1:3000/api"),
        ("http://orc1:3000", "/orchestrator/", "http://orc1:3000/orchestrator/api"),
        ("http://orc1:3000/orchestrator", "orchestrator", "http://orc1:3000/orchestrator/api"),
    ],
)
def test_normalize_endpoint(endpoint, prefix, expected):
    assert normalize_endpoint(endpoint, prefix) == expected


def test_resolver_needs_somewhere_to_go():
    with pytest.raises(ValueError):
        LeaderResolver(endpoints=["", "  "])


@pytest.mark.asyncio
@respx.mock
async def test_first_affirmative_probe_wins():
    respx.get("http://orc1:3000/api/leader-check").mock(return_value=Response(404))
    respx.get("http://orc2:3000/api/leader-check").mock(
        side_effect=httpx.ConnectError("down")
    )
    respx.get("http://orc3:3000/api/leader-check").mock(return_value=Response(200))
    route = respx.get("http://orc3:3000/api/clusters").mock(
        return_value=Response(200, json={"Code": 1, "Details": ["c1"]})
    )

    client = OrchestratorClient(endpoints=ENDPOINTS)
    async with client:
        env = await client.get("/clusters")

    assert client.leader == "http://orc3:3000/api"
    assert env.details == ["c1"]
    assert route.called


@pytest.mark.asyncio
@respx.mock
async def test_ties_go_to_declaration_order():
    respx.get("http://orc1:3000/api/leader-check").mock(return_value=Response(200))

    client = OrchestratorClient(endpoints=ENDPOINTS)
    async with client:
        pass

    assert client.leader == "http://orc1:3000/api"


@pytest.mark.asyncio
@respx.mock
async def test_routed_leader_check_is_the_second_pass():
    for host in ("orc1", "orc2", "orc3"):
        respx.get(f"http://{host}:3000/api/leader-check").mock(return_value=Response(500))
    respx.get("http://orc1:3000/api/routed-leader-check").mock(return_value=Response(503))
    respx.get("http://orc2:3000/api/routed-leader-check").mock(return_value=Response(200))

    client = OrchestratorClient(endpoints=ENDPOINTS)
    leader = await client.ensure_leader()
    await client.aclose()

    assert leader == "http://orc2:3000/api"


@pytest.mark.asyncio
@respx.mock
async def test_no_leader_raises_and_sends_nothing_else(caplog):
    for host in ("orc1", "orc2", "orc3"):
        respx.get(f"http://{host}:3000/api/leader-check").mock(return_value=Response(500))
        respx.get(f"http://{host}:3000/api/routed-leader-check").mock(
            return_value=Response(500)
        )

    client = OrchestratorClient(endpoints=ENDPOINTS)
    with caplog.at_level(logging.DEBUG, logger="orchestrator_client.leader"):
        with pytest.raises(LeaderResolutionError) as exc:
            await client.get("/clusters")
    await client.aclose()

    assert exc.value.endpoints == [
        "http://orc1:3000/api",
        "http://orc2:3000/api",
        "http://orc3:3000/api",
    ]
    probes = [r for r in caplog.records if r.getMessage() == "orchestrator.leader_probe"]
    assert len(probes) == 6


@pytest.mark.asyncio
@respx.mock(assert_all_called=False)
async def test_single_endpoint_is_used_without_probing():
    probe = respx.get("http://orc1:3000/api/leader-check").mock(
        return_value=Response(200)
    )

    client = OrchestratorClient(endpoints=["http://orc1:3000"])
    async with client:
        assert client.leader == "http://orc1:3000/api"

    assert not probe.called


@pytest.mark.asyncio
@respx.mock
async def test_refresh_leader_re_probes():
    respx.get("http://orc1:3000/api/leader-check").mock(
        side_effect=[Response(200), Response(500)]
    )
    respx.get("http://orc2:3000/api/leader-check").mock(return_value=Response(200))

    client = OrchestratorClient(endpoints=ENDPOINTS[:2])
    assert await client.ensure_leader() == "http://orc1:3000/api"
    assert await client.refresh_leader() == "http://orc2:3000/api"
    await client.aclose()


@pytest.mark.asyncio
@respx.mock
async def test_leader_resolution_respects_the_call_deadline():
    async def slow_leader_check(request):
        await asyncio.sleep(2)
        return Response(200, json={"Code": 1, "Details": "OK"})

    respx.get("http://orc1:3000/api/leader-check").mock(side_effect=slow_leader_check)
    client = OrchestratorClient(endpoints=ENDPOINTS)

    with call_context(timeout=0.2):
        started = time.monotonic()
        with pytest.raises(OrchestratorCancelledError) as exc:
            await client.get("/clusters")

    assert time.monotonic() - started < 1
    assert "leader resolution" in str(exc.value)
    assert client.leader is None
    await client.aclose()
