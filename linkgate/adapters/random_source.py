"""
Random Source Adapter.

Implements RandomPort for the traffic split with the stdlib PRNG. Tests
inject a fixed source instead; a seed makes this one reproducible.
"""

import random
from collections.abc import Sequence
from typing import TypeVar

T = TypeVar("T")


class SystemRandomSource:
    """Uniform choice over the configured destinations."""

    def __init__(self, seed: int | None = None) -> None:
        self._random = random.Random(seed)

    def choice(self, options: Sequence[T]) -> T:
        return self._random.choice(options)
