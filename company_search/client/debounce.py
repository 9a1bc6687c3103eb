"""
Delay a call until its input has been quiet for a fixed interval.
"""

import asyncio
import inspect
from typing import Any, Callable, Optional


class Debouncer:
    """Run only the last of a burst of calls, ``delay`` seconds after it.

    Each call cancels the one still waiting. Must be used from inside a
    running event loop.
    """

    def __init__(self, delay: float):
        self.delay = delay
        self._pending: Optional[asyncio.Task] = None

    def __call__(self, func: Callable[..., Any], *args, **kwargs) -> asyncio.Task:
        self.cancel()
        self._pending = asyncio.ensure_future(self._fire(func, args, kwargs))
        return self._pending

    async def _fire(self, func, args, kwargs):
        await asyncio.sleep(self.delay)
        result = func(*args, **kwargs)
        if inspect.isawaitable(result):
            result = await result
        return result

    @property
    def pending(self) -> bool:
        return self._pending is not None and not self._pending.done()

    def cancel(self):
        if self.pending:
            self._pending.cancel()
        self._pending = None
