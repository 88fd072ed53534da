import asyncio

import pytest

from hikewise.ingestors.fanout import gather_all_or_nothing


@pytest.mark.anyio
async def test_results_keep_argument_order():
    async def delayed(value, delay):
        await asyncio.sleep(delay)
        return value

    results = await gather_all_or_nothing(delayed("slow", 0.02), delayed("fast", 0))

    assert results == ["slow", "fast"]


@pytest.mark.anyio
async def test_no_awaitables_returns_empty_list():
    assert await gather_all_or_nothing() == []


@pytest.mark.anyio
async def test_first_failure_cancels_pending_siblings():
    cancelled = asyncio.Event()

    async def slow():
        try:
            await asyncio.sleep(30)
        except asyncio.CancelledError:
            cancelled.set()
            raise

    async def boom():
        await asyncio.sleep(0)
        raise ValueError("boom")

    with pytest.raises(ValueError, match="boom"):
        await gather_all_or_nothing(slow(), boom())

    assert cancelled.is_set()


@pytest.mark.anyio
async def test_completed_sibling_result_is_discarded_on_failure():
    async def ok():
        return "ok"

    async def boom():
        await asyncio.sleep(0.01)
        raise RuntimeError("late failure")

    with pytest.raises(RuntimeError, match="late failure"):
        await gather_all_or_nothing(ok(), boom())
