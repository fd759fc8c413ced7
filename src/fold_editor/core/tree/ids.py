"""Node id generation scoped to a parse session."""

import random


class IdGenerator:
    """Produce unique node ids: a monotonic counter plus a random suffix.

    Each editor session owns its own generator, so repeated parses in one
    process never share hidden counter state. Pass ``seed`` for
    reproducible ids in tests.
    """

    def __init__(self, *, seed: int | None = None) -> None:
        self._counter = 0
        self._rng = random.Random(seed)

    def next_id(self) -> str:
        """Return a fresh id."""
        self._counter += 1
        suffix = self._rng.getrandbits(32)
        return f"{self._counter:x}-{suffix:08x}"
