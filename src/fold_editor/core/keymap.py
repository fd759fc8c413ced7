"""Chorded key bindings: a trie of key tokens resolved to action names."""

from collections.abc import Callable, Mapping
from typing import Union

from loguru import logger

from fold_editor.config import KEY_TIMEOUT_MS
from fold_editor.protocols import SchedulerProtocol, TimerHandle

# A trie node maps a key token to a deeper node or to an action name.
Keymap = Mapping[str, Union["Keymap", str]]

LEADER = " "
CANCEL_KEY = "Escape"
GROUP_HINT = "+prefix"

DEFAULT_KEYMAP: Keymap = {
    LEADER: {
        "c": {"a": "toggleFold", "f": "foldAll", "o": "unfoldAll"},
        "s": "toggleSearch",
        "z": "toggleZen",
        "b": "toggleFilter",
    },
    "j": "moveDown",
    "k": "moveUp",
    "h": "goToParent",
    "l": "goToFirstChild",
    "/": "searchMode",
    "Ctrl+f2": "toggleBookmark",
    "f2": "nextBookmark",
    "Shift+f2": "prevBookmark",
}


def lookup(keymap: Keymap, keys: tuple[str, ...] | list[str]) -> Keymap | str | None:
    """Walk ``keys`` from the root of ``keymap``.

    Returns the trie node or action name reached, or None on a dead end.
    """
    node: Keymap | str = keymap
    for key in keys:
        if isinstance(node, str) or key not in node:
            return None
        node = node[key]
    return node


class KeymapMatcher:
    """Turn a stream of key tokens into action names.

    Tokens accumulate in a buffer until they spell a bound action, hit a
    dead end, or go idle for ``timeout_ms``. At most one timeout is pending:
    every key event cancels the previous one before arming the next.
    """

    def __init__(
        self,
        keymap: Keymap,
        on_action: Callable[[str], None],
        *,
        scheduler: SchedulerProtocol,
        timeout_ms: int = KEY_TIMEOUT_MS,
        cancel_key: str = CANCEL_KEY,
        on_reset: Callable[[], None] | None = None,
    ) -> None:
        self.keymap = keymap
        self.on_action = on_action
        self.on_reset = on_reset
        self.scheduler = scheduler
        self.timeout_ms = timeout_ms
        self.cancel_key = cancel_key

        self._buffer: list[str] = []
        self._timer: TimerHandle | None = None
        # Bumped whenever the timer is replaced, so a late callback is ignored.
        self._generation = 0

    @property
    def buffer(self) -> tuple[str, ...]:
        """Keys typed so far in the current chord."""
        return tuple(self._buffer)

    @property
    def pending(self) -> bool:
        return self._timer is not None

    def _clear_timer(self) -> None:
        self._generation += 1
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _arm_timer(self) -> None:
        self._clear_timer()
        generation = self._generation
        self._timer = self.scheduler.call_later(
            self.timeout_ms / 1000, lambda: self._on_timeout(generation)
        )

    def _on_timeout(self, generation: int) -> None:
        if generation != self._generation:
            return
        self._timer = None
        if self._buffer:
            logger.debug("Key chord {!r} timed out", self._buffer)
            self._buffer.clear()
            if self.on_reset is not None:
                self.on_reset()

    def cancel(self) -> None:
        """Drop the partial chord and any pending timeout."""
        self._clear_timer()
        self._buffer.clear()

    def feed(self, key: str) -> str | None:
        """Consume one key token.

        Returns:
            The action name fired by this key, or None.
        """
        if key == self.cancel_key:
            self.cancel()
            return None

        self._buffer.append(key)
        self._arm_timer()

        node = lookup(self.keymap, self._buffer)
        if node is None:
            logger.debug("No binding for {!r}, resetting", self._buffer)
            self.cancel()
            return None

        if isinstance(node, str):
            self.cancel()
            self.on_action(node)
            return node

        return None

    def hints(self) -> dict[str, str]:
        """Bindings reachable from the current buffer.

        Maps each next key to its action name, or to ``GROUP_HINT`` when the
        key opens a deeper chord.
        """
        node = lookup(self.keymap, self._buffer)
        if node is None or isinstance(node, str):
            return {}
        return {key: value if isinstance(value, str) else GROUP_HINT for key, value in node.items()}
