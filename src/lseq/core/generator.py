"""
LSEQ identifier generator.

Given the identifiers on either side of an insertion point, the generator
produces a new identifier that sorts strictly between them:

1. Missing neighbors are replaced by the root sentinels: value 0 and
   max_value(0), both resolved at depth 0.
2. Starting at depth 0, the depth is increased until the interval
   between the neighbors has at least one free slot.
3. A random delta in [1, min(interval, boundary)] is drawn.
4. The depth's fixed strategy decides whether the delta is added to the
   normalized left neighbor or subtracted from the normalized right one.

Replicas generate independently; two replicas only collide if they pick
the same digit, and even then the owner tag keeps the order total.

Example:
    >>> generator = new_generator()
    >>> first = generator.generate("replica-a")
    >>> second = generator.generate("replica-a", first)
    >>> first < second
    True
"""

from __future__ import annotations

import logging
import secrets
from dataclasses import dataclass
from random import Random
from typing import TYPE_CHECKING, Any, Mapping, TypeVar

from lseq.core.base import DEFAULT_INITIAL_WIDTH, BitBase, DoubleBase, digit_length
from lseq.core.exceptions import (
    AllocationError,
    ConfigurationError,
    InvalidDigitError,
    PreconditionError,
)
from lseq.core.ident import Ident, compare_digits
from lseq.core.strategy import Strategy, StrategyTable

if TYPE_CHECKING:
    from lseq.core.config.models import GeneratorConfig

logger = logging.getLogger(__name__)

DEFAULT_BOUNDARY = 10

M = TypeVar("M")


@dataclass(frozen=True)
class Allocation:
    """
    Record of one generation step.

    Attributes:
        ident: The generated identifier
        depth: Depth the identifier resolves at
        interval: Free slots found between the neighbors at that depth
        step: Upper bound used for the random delta
        delta: The random delta that was applied
        strategy: Strategy applied at that depth
    """

    ident: Ident[Any]
    depth: int
    interval: int
    step: int
    delta: int
    strategy: Strategy


class LSEQGenerator:
    """
    Identifier generator owning one strategy table.

    A generator instance is safe to share between threads: the only mutable
    state is the strategy table, which serializes its own updates.

    Attributes:
        base: Bit-width policy
        boundary: Maximum random step at any depth
    """

    def __init__(
        self,
        base: BitBase | None = None,
        boundary: int = DEFAULT_BOUNDARY,
        rng: Random | None = None,
    ) -> None:
        """
        Initialize the generator.

        Args:
            base: Bit-width policy (defaults to DoubleBase with width 5)
            boundary: Maximum random step (must be positive)
            rng: Random source for deltas and strategy choices

        Raises:
            ConfigurationError: If boundary is not a positive integer
        """
        if isinstance(boundary, bool) or not isinstance(boundary, int) or boundary < 1:
            raise ConfigurationError(
                f"Boundary must be a positive integer, got {boundary!r}",
                boundary=boundary,
            )

        self.base = base if base is not None else DoubleBase()
        self.boundary = boundary
        self._rng = rng or secrets.SystemRandom()
        self._strategies = StrategyTable(self._rng)

    @classmethod
    def from_config(cls, config: GeneratorConfig, rng: Random | None = None) -> LSEQGenerator:
        """Build a generator from a GeneratorConfig."""
        return cls(DoubleBase(config.initial_width), config.boundary, rng=rng)

    @property
    def strategies(self) -> Mapping[int, Strategy]:
        """Read-only snapshot of the strategies assigned so far."""
        return self._strategies.snapshot()

    def _neighbor_digit(self, ident: Ident[Any]) -> int:
        """Return a neighbor's digit after checking it resolves at some depth."""
        try:
            self.base.depth_of(digit_length(ident.digit))
        except InvalidDigitError as e:
            raise InvalidDigitError(f"Neighbor {ident} is malformed: {e}", digit=ident.digit) from e
        return ident.digit

    def search_depth(self, left: int, right: int) -> tuple[int, int]:
        """
        Find the shallowest depth with room between two digits.

        Args:
            left: Left digit (guard bit included)
            right: Right digit (guard bit included)

        Returns:
            Tuple of (depth, interval at that depth); interval is >= 1

        Raises:
            PreconditionError: If left does not sit strictly before right
        """
        if compare_digits(left, right) >= 0:
            raise PreconditionError(
                "Neighbors leave no room: left digit does not sort before right digit",
                left=left,
                right=right,
            )

        depth = 0
        interval = self.base.interval(left, right, depth)
        while interval < 1:
            depth += 1
            interval = self.base.interval(left, right, depth)
        return depth, interval

    def allocate(
        self,
        meta: M,
        left: Ident[Any] | None = None,
        right: Ident[Any] | None = None,
    ) -> Allocation:
        """
        Generate an identifier and return the full allocation record.

        Precondition: when both neighbors are given, ``left < right``.

        Args:
            meta: Owner tag for the new identifier
            left: Identifier immediately before the insertion point
            right: Identifier immediately after the insertion point

        Returns:
            Allocation holding the new identifier and how it was made

        Raises:
            InvalidDigitError: If a neighbor's digit does not resolve at any depth
            PreconditionError: If the neighbors are misordered or share a position
            AllocationError: If the result breaks the ordering invariant
        """
        left_digit = (
            self._neighbor_digit(left)
            if left is not None
            else self.base.boundary_digit(0, 0)
        )
        right_digit = (
            self._neighbor_digit(right)
            if right is not None
            else self.base.boundary_digit(self.base.max_value(0), 0)
        )

        if left is not None and right is not None and not left < right:
            raise PreconditionError(
                f"Left neighbor {left} does not sort before right neighbor {right}",
                left=left,
                right=right,
            )

        depth, interval = self.search_depth(left_digit, right_digit)
        step = max(1, min(interval, self.boundary))
        delta = self._rng.randint(1, step)
        strategy = self._strategies.ensure(depth)

        if strategy is Strategy.ADD_FROM_LEFT:
            digit = self.base.normalize(left_digit, depth) + delta
        else:
            digit = self.base.normalize(right_digit, depth) - delta

        if digit_length(digit) != self.base.cumulative_width(depth):
            raise AllocationError(
                f"Digit {digit} does not resolve at depth {depth}",
                digit=digit,
                depth=depth,
            )
        if compare_digits(left_digit, digit) >= 0 or compare_digits(digit, right_digit) >= 0:
            raise AllocationError(
                f"Digit {digit} escaped its neighbors at depth {depth}",
                digit=digit,
                depth=depth,
            )

        ident = Ident(meta=meta, digit=digit)
        logger.debug(
            "Allocated %s at depth %d (interval=%d, step=%d, delta=%d, strategy=%s)",
            ident,
            depth,
            interval,
            step,
            delta,
            strategy.value,
        )
        return Allocation(
            ident=ident,
            depth=depth,
            interval=interval,
            step=step,
            delta=delta,
            strategy=strategy,
        )

    def generate(
        self,
        meta: M,
        left: Ident[Any] | None = None,
        right: Ident[Any] | None = None,
    ) -> Ident[M]:
        """
        Generate an identifier strictly between ``left`` and ``right``.

        Either neighbor may be omitted to insert at the start or end of the
        sequence. See allocate() for the full list of errors.

        Preconditions:
            - ``left < right`` when both are given.
            - The neighbors occupy different aligned positions. Two replicas
              that picked the same digit produce identifiers ordered only by
              their owner tags; nothing fits between such a pair, so
              inserting between them raises PreconditionError. Callers
              merging concurrent edits should insert on the far side of
              the pair instead.
        """
        return self.allocate(meta, left, right).ident


def new_generator(
    initial_width: int = DEFAULT_INITIAL_WIDTH,
    boundary: int = DEFAULT_BOUNDARY,
    rng: Random | None = None,
) -> LSEQGenerator:
    """
    Create a generator with a DoubleBase policy.

    Args:
        initial_width: Field width at depth 0 (default: 5)
        boundary: Maximum random step (default: 10)
        rng: Optional random source (default: system randomness)

    Raises:
        ConfigurationError: If either parameter is not positive
    """
    return LSEQGenerator(DoubleBase(initial_width), boundary, rng=rng)
