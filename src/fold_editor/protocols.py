"""Protocols for dependency injection in the editor core."""

from collections.abc import Callable
from typing import Protocol, runtime_checkable


@runtime_checkable
class TimerHandle(Protocol):
    """A scheduled callback that can be cancelled before it fires."""

    def cancel(self) -> None:
        """Prevent the callback from running. Safe to call more than once."""
        ...


@runtime_checkable
class SchedulerProtocol(Protocol):
    """Protocol for the clock used by the key chord timeout."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        """Run ``callback`` once after ``delay`` seconds."""
        ...
