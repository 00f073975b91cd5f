import asyncio
import contextlib
from typing import Awaitable, Callable, Optional, TypeVar

T = TypeVar("T")


class LatestRequestRunner:
    """Runs one load at a time per page; the newest load always wins.

    Starting a load cancels the one still in flight. close() cancels
    everything, after which the runner refuses new work.
    """

    def __init__(self):
        self._generation = 0
        self._task: Optional[asyncio.Task] = None
        self._closed = False

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def closed(self) -> bool:
        return self._closed

    def is_current(self, generation: int) -> bool:
        return not self._closed and generation == self._generation

    async def run(self, load: Callable[[int], Awaitable[T]]) -> Optional[T]:
        """Run `load(generation)`; returns None if a newer load or close() superseded it."""
        if self._closed:
            raise RuntimeError("Runner is closed")

        self._generation += 1
        generation = self._generation
        if self._task is not None and not self._task.done():
            self._task.cancel()

        task = asyncio.ensure_future(load(generation))
        self._task = task
        try:
            result = await task
        except asyncio.CancelledError:
            if task.cancelled() and not self.is_current(generation):
                return None
            raise
        return result if self.is_current(generation) else None

    async def close(self) -> None:
        self._closed = True
        task, self._task = self._task, None
        if task is not None and not task.done():
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task
