"""
Core identifier space: bit-width policy, identifiers, strategies and the
generator that ties them together.
"""

from lseq.core.base import DEFAULT_INITIAL_WIDTH, BitBase, DoubleBase
from lseq.core.exceptions import (
    AllocationError,
    ConfigurationError,
    InvalidDigitError,
    LSEQError,
    PreconditionError,
)
from lseq.core.generator import DEFAULT_BOUNDARY, Allocation, LSEQGenerator, new_generator
from lseq.core.ident import Ident
from lseq.core.strategy import Strategy, StrategyTable

__all__ = [
    # Bit-width policy
    "BitBase",
    "DoubleBase",
    "DEFAULT_INITIAL_WIDTH",
    # Identifiers
    "Ident",
    # Strategies
    "Strategy",
    "StrategyTable",
    # Generator
    "Allocation",
    "LSEQGenerator",
    "DEFAULT_BOUNDARY",
    "new_generator",
    # Errors
    "LSEQError",
    "ConfigurationError",
    "PreconditionError",
    "InvalidDigitError",
    "AllocationError",
]
