"""Concurrent fan-out with an all-or-nothing join."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable

logger = logging.getLogger("hikewise.ingestors.fanout")


async def gather_all_or_nothing(*aws: Awaitable[Any]) -> list[Any]:
    """Run awaitables concurrently and return their results in order.

    On the first failure every still-pending sibling is cancelled and the
    failure is re-raised, so callers never see a partial result.
    """

    tasks = [asyncio.ensure_future(aw) for aw in aws]
    if not tasks:
        return []

    try:
        done, pending = await asyncio.wait(tasks, return_when=asyncio.FIRST_EXCEPTION)
    except asyncio.CancelledError:
        for task in tasks:
            task.cancel()
        raise

    failed = next(
        (task for task in tasks if task in done and not task.cancelled() and task.exception()),
        None,
    )
    if failed is not None:
        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)
        logger.debug("Fan-out aborted; cancelled %d pending task(s)", len(pending))
        raise failed.exception()

    return [task.result() for task in tasks]


__all__ = ["gather_all_or_nothing"]
