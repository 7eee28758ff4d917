from __future__ import annotations

import asyncio
from concurrent.futures import ThreadPoolExecutor
from typing import Awaitable, Callable, TypeVar

T = TypeVar("T")


def _run_in_new_loop(factory: Callable[[], Awaitable[T]]) -> T:
    async def _runner() -> T:
        return await factory()

    return asyncio.run(_runner())


def run_sync(factory: Callable[[], Awaitable[T]]) -> T:
    """
    Run an async callable to completion from synchronous code.

    The coroutine is created and awaited on a dedicated worker thread that owns its own
    event loop, so this is safe to call whether or not the calling thread runs a loop.
    Exceptions raised by the coroutine are re-raised in the caller.
    """
    with ThreadPoolExecutor(max_workers=1, thread_name_prefix="data-source-bridge") as executor:
        return executor.submit(_run_in_new_loop, factory).result()
