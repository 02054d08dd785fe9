# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import asyncio
import contextvars
from collections.abc import Coroutine
from concurrent.futures import ThreadPoolExecutor
from typing import Any, TypeVar

T = TypeVar("T")


def run_async(coro: Coroutine[Any, Any, T]) -> T:  # noqa: UP047
    """Drive a coroutine to completion from a synchronous Flask view.

    Views normally run without an event loop, so ``asyncio.run`` is enough.
    Under a server that already runs a loop in this thread the coroutine gets
    a private loop on a helper thread, carrying the caller's context along.
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(coro)

    ctx = contextvars.copy_context()
    with ThreadPoolExecutor(max_workers=1, thread_name_prefix="run-async") as pool:
        return pool.submit(ctx.run, asyncio.run, coro).result()
