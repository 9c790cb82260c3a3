"""
Insertion simulation for inspecting identifier growth.

Drives a generator the way a sequence CRDT would: keep a sorted list of
identifiers, pick an insertion point, hand the generator the two current
neighbors, insert the result. Every insertion is checked against its
neighbors so the run doubles as an end-to-end ordering check.

Example:
    >>> report = simulate(new_generator(), 1000, pattern=InsertPattern.APPEND)
    >>> report.count
    1000
"""

from __future__ import annotations

import logging
import secrets
from collections import Counter
from enum import Enum
from random import Random

from pydantic import BaseModel, Field

from lseq.core.exceptions import AllocationError
from lseq.core.generator import LSEQGenerator
from lseq.core.ident import Ident
from lseq.core.strategy import Strategy

logger = logging.getLogger(__name__)


class InsertPattern(str, Enum):
    """Where new identifiers are inserted."""

    RANDOM = "random"
    APPEND = "append"
    PREPEND = "prepend"


class SimulationReport(BaseModel):
    """Summary of a simulated insertion run."""

    count: int
    pattern: InsertPattern
    replicas: int
    max_depth: int = 0
    max_length: int = 0
    mean_length: float = 0.0
    depth_histogram: dict[int, int] = Field(default_factory=dict)
    strategies: dict[int, Strategy] = Field(default_factory=dict)


def _pick_position(pattern: InsertPattern, size: int, rng: Random) -> int:
    if pattern is InsertPattern.APPEND:
        return size
    if pattern is InsertPattern.PREPEND:
        return 0
    return rng.randint(0, size)


def simulate(
    generator: LSEQGenerator,
    count: int,
    *,
    pattern: InsertPattern = InsertPattern.RANDOM,
    replicas: int = 1,
    rng: Random | None = None,
) -> SimulationReport:
    """
    Insert ``count`` identifiers and report how they grew.

    Args:
        generator: Generator to drive
        count: Number of insertions
        pattern: Where to insert (random position, always last, always first)
        replicas: Number of owner tags to spread insertions across
        rng: Random source for positions and owner tags

    Returns:
        SimulationReport for the run

    Raises:
        ValueError: If count is negative or replicas is less than 1
        AllocationError: If an identifier lands out of order or repeats
    """
    if count < 0:
        raise ValueError("count must be non-negative")
    if replicas < 1:
        raise ValueError("replicas must be at least 1")

    rng = rng or secrets.SystemRandom()
    owners = [f"replica-{i}" for i in range(replicas)]
    sequence: list[Ident[str]] = []
    seen: set[Ident[str]] = set()
    depths: Counter[int] = Counter()
    total_length = 0

    for _ in range(count):
        position = _pick_position(pattern, len(sequence), rng)
        left = sequence[position - 1] if position > 0 else None
        right = sequence[position] if position < len(sequence) else None

        allocation = generator.allocate(rng.choice(owners), left, right)
        ident = allocation.ident

        if (left is not None and not left < ident) or (right is not None and not ident < right):
            raise AllocationError(
                f"{ident} landed outside its neighbors at position {position}",
                position=position,
            )
        if ident in seen:
            raise AllocationError(f"{ident} was generated twice", position=position)

        sequence.insert(position, ident)
        seen.add(ident)
        depths[allocation.depth] += 1
        total_length += ident.length

    logger.debug("Simulated %d insertions (%s)", count, pattern.value)

    return SimulationReport(
        count=count,
        pattern=pattern,
        replicas=replicas,
        max_depth=max(depths, default=0),
        max_length=max((ident.length for ident in sequence), default=0),
        mean_length=total_length / count if count else 0.0,
        depth_histogram=dict(sorted(depths.items())),
        strategies=dict(generator.strategies),
    )
