"""Blocking adapter for synchronous callers.

The paging core is async-only. Code that must call it from a synchronous
context (a UI thread, a script) goes through ``run_blocking`` instead of
creating event loops inline.
"""

from __future__ import annotations

import asyncio
from collections.abc import Coroutine
from concurrent.futures import ThreadPoolExecutor
from typing import Any, TypeVar

T = TypeVar("T")


def run_blocking(coro: Coroutine[Any, Any, T]) -> T:
    """Run ``coro`` to completion and return its result.

    Without a running loop in this thread the coroutine runs on a fresh loop
    here. Inside a running loop it runs on a private loop in a worker thread,
    so the caller's loop is blocked but not re-entered.
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(coro)

    with ThreadPoolExecutor(max_workers=1, thread_name_prefix="pagewalk-blocking") as pool:
        return pool.submit(asyncio.run, coro).result()
