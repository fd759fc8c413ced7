"""Event-loop backed scheduler for the key chord timeout."""

import asyncio
from collections.abc import Callable

from fold_editor.protocols import TimerHandle


class LoopScheduler:
    """Schedule callbacks on an asyncio event loop.

    The editor is single threaded: callbacks run on the loop thread, between
    key events, never concurrently with a reducer step.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        """Run ``callback`` once after ``delay`` seconds."""
        return self.loop.call_later(delay, callback)
