"""Join combinator for concurrently issued calls.

``gather_all`` makes the failure policy explicit: ``WAIT_ALL`` lets every call
finish and then raises the first failure in argument order, ``FAIL_FAST``
cancels the outstanding calls as soon as one fails.
"""

from __future__ import annotations

import asyncio
import enum
from collections.abc import Awaitable
from typing import Any


class JoinPolicy(enum.Enum):
    WAIT_ALL = "wait_all"
    FAIL_FAST = "fail_fast"


async def gather_all(
    *awaitables: Awaitable[Any], policy: JoinPolicy = JoinPolicy.WAIT_ALL
) -> list[Any]:
    tasks = [asyncio.ensure_future(awaitable) for awaitable in awaitables]
    if not tasks:
        return []

    if policy is JoinPolicy.FAIL_FAST:
        try:
            return list(await asyncio.gather(*tasks))
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

    results = await asyncio.gather(*tasks, return_exceptions=True)
    for result in results:
        if isinstance(result, BaseException):
            raise result
    return list(results)
