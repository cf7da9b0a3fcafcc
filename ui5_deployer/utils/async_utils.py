# ui5_deployer/utils/async_utils.py
"""Asynchronous operation utilities"""

import asyncio
from typing import Any, Coroutine, TypeVar

T = TypeVar('T')


def run_async(coro: Coroutine[Any, Any, T]) -> T:
    """
    Run a deploy coroutine from synchronous code

    Args:
        coro: Coroutine to run

    Returns:
        Coroutine result

    Raises:
        RuntimeError: If an event loop is already running in this thread;
            await ``deploy_async`` there instead
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(coro)

    coro.close()
    raise RuntimeError("run_async() cannot be used inside a running event loop, await the coroutine instead")
