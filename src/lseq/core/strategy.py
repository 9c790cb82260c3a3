"""
Per-depth allocation strategies.

At every depth of the hierarchy the generator either grows new digits up
from the left neighbor or shrinks them down from the right neighbor. The
choice is made once per depth, at random, the first time the depth is
visited, and then never changes for the lifetime of the table. Sticking to
one flank per depth keeps the other flank open for later insertions.
"""

from __future__ import annotations

import logging
import secrets
import threading
from enum import Enum
from random import Random
from types import MappingProxyType
from typing import Mapping

logger = logging.getLogger(__name__)


class Strategy(str, Enum):
    """The identifier allocation strategy to use at a depth."""

    ADD_FROM_LEFT = "add_from_left"
    """Generate identifiers by adding a delta to the left neighbor."""

    SUBTRACT_FROM_RIGHT = "subtract_from_right"
    """Generate identifiers by subtracting a delta from the right neighbor."""

    @classmethod
    def random(cls, rng: Random | None = None) -> Strategy:
        """Pick one of the strategies uniformly at random."""
        rng = rng or secrets.SystemRandom()
        return rng.choice([cls.ADD_FROM_LEFT, cls.SUBTRACT_FROM_RIGHT])


class StrategyTable:
    """
    Lazily populated depth -> strategy memo.

    Entries are added on first visit and never replaced or removed. The
    check-then-assign step runs under a lock so concurrent callers can
    never assign two different strategies to the same depth.
    """

    def __init__(self, rng: Random | None = None) -> None:
        self._rng = rng or secrets.SystemRandom()
        self._lock = threading.Lock()
        self._strategies: dict[int, Strategy] = {}

    def ensure(self, depth: int) -> Strategy:
        """
        Return the strategy for ``depth``, assigning one if it has none yet.

        Args:
            depth: Hierarchy depth (non-negative)

        Returns:
            The strategy fixed for this depth
        """
        with self._lock:
            strategy = self._strategies.get(depth)
            if strategy is None:
                strategy = Strategy.random(self._rng)
                self._strategies[depth] = strategy
                logger.info("Assigned strategy %s to depth %d", strategy.value, depth)
            return strategy

    def get(self, depth: int) -> Strategy | None:
        """Return the strategy for ``depth`` without assigning one."""
        with self._lock:
            return self._strategies.get(depth)

    def snapshot(self) -> Mapping[int, Strategy]:
        """Read-only copy of the current assignments."""
        with self._lock:
            return MappingProxyType(dict(self._strategies))

    def __contains__(self, depth: object) -> bool:
        with self._lock:
            return depth in self._strategies

    def __len__(self) -> int:
        with self._lock:
            return len(self._strategies)
