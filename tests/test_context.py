import asyncio

import pytest
from orchestrator_client.core.context import (
    CallContext,
    apply_call_context,
    call_context,
    current_call_context,
    reset_call_context,
)
from orchestrator_client.errors import OrchestratorCancelledError


def test_call_context_is_scoped_to_the_block():
    assert current_call_context() is None
    with call_context(timeout=10) as ctx:
        assert current_call_context() is ctx
        assert 0 < ctx.remaining() <= 10
    assert current_call_context() is None


def test_nested_contexts_restore_the_outer_one():
    with call_context() as outer:
        with call_context(timeout=1) as inner:
            assert current_call_context() is inner
        assert current_call_context() is outer


def test_apply_and_reset_by_token():
    ctx = CallContext.with_timeout(None)
    token = apply_call_context(ctx)
    try:
        assert current_call_context() is ctx
        assert ctx.remaining() is None
        assert not ctx.expired()
    finally:
        reset_call_context(token)
    assert current_call_context() is None


def test_cancel_and_expiry_raise_on_check():
    ctx = CallContext()
    ctx.check()

    ctx.cancel("shutdown")
    with pytest.raises(OrchestratorCancelledError, match="shutdown"):
        ctx.check()

    with pytest.raises(OrchestratorCancelledError, match="deadline"):
        CallContext.with_timeout(0).check()


@pytest.mark.asyncio
async def test_contexts_are_isolated_between_tasks():
    seen = {}

    async def worker(name, timeout):
        with call_context(timeout=timeout) as ctx:
            await asyncio.sleep(0)
            seen[name] = current_call_context() is ctx

    await asyncio.gather(worker("a", 5), worker("b", 10))

    assert seen == {"a": True, "b": True}


@pytest.mark.asyncio
async def test_wait_cancelled_wakes_on_cancel():
    ctx = CallContext()
    waiter = asyncio.ensure_future(ctx.wait_cancelled())
    await asyncio.sleep(0)
    assert not waiter.done()

    ctx.cancel("shutdown")
    await asyncio.wait_for(waiter, timeout=1)

    # already-cancelled contexts return at once
    await asyncio.wait_for(ctx.wait_cancelled(), timeout=1)
