"""
Bit-width policy for the hierarchical identifier space.

Every depth of the (unbounded) identifier tree owns a field of bits. With
an initial width of 5, depth 0 has 5 bits, depth 1 has 6, depth 2 has 7 and
so on. An identifier resolved at depth d carries the concatenation of the
fields for depths 0..d, so its logical length is the cumulative width:

    depth   field width   cumulative width   max value
    0       5             5                  31
    1       6             11                 63
    2       7             18                 127

Digits are plain Python ints with a guard bit set one position above the
most significant logical bit. The guard bit keeps leading zeros visible:
the 5-bit value 00011 is stored as 0b100011, so its logical length is
``digit.bit_length() - 1``. Shifting a digit moves the guard bit along with
it, which is why normalization is a bare shift.

Public API:
    - BitBase: Protocol for bit-width policies
    - DoubleBase: Default policy (field width grows by one bit per depth)

Example:
    >>> base = DoubleBase()
    >>> base.cumulative_width(1)
    11
    >>> base.max_value(0)
    31
    >>> base.decode(base.encode([3, 17]))
    [3, 17]
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from lseq.core.exceptions import ConfigurationError, InvalidDigitError

DEFAULT_INITIAL_WIDTH = 5


def digit_length(digit: int) -> int:
    """
    Return the logical bit length of a guard-bit digit.

    Raises:
        InvalidDigitError: If the digit has no guard bit (digit < 1)
    """
    if digit < 1:
        raise InvalidDigitError(f"Digit {digit} has no guard bit", digit=digit)
    return digit.bit_length() - 1


def strip_guard(digit: int) -> int:
    """Return the logical value of a digit with its guard bit cleared."""
    return digit ^ (1 << digit_length(digit))


@runtime_checkable
class BitBase(Protocol):
    """
    Protocol for bit-width policies.

    A policy decides how many bits each depth of the hierarchy gets and
    answers the arithmetic questions the generator asks about digits.
    Implementations must be pure and stateless.
    """

    initial: int

    def field_width(self, depth: int) -> int:
        """Number of bits owned by ``depth`` alone."""
        ...

    def cumulative_width(self, depth: int) -> int:
        """Total logical length of a digit resolved at ``depth``."""
        ...

    def max_value(self, depth: int) -> int:
        """Largest raw value ``depth``'s own field can hold."""
        ...

    def depth_of(self, length: int) -> int:
        """Depth whose cumulative width equals ``length``."""
        ...

    def boundary_digit(self, value: int, depth: int) -> int:
        """Guard-bit digit for a raw value resolved at ``depth``."""
        ...

    def normalize(self, digit: int, depth: int) -> int:
        """Realign ``digit`` to the cumulative width of ``depth``."""
        ...

    def interval(self, left: int, right: int, depth: int) -> int:
        """Free slots strictly between two digits at ``depth``."""
        ...

    def decode(self, digit: int) -> list[int]:
        """Split a digit into its per-depth fields."""
        ...


@dataclass(frozen=True)
class DoubleBase:
    """
    Bit-width policy where depth d has ``initial + d`` bits.

    Attributes:
        initial: Field width at depth 0 (must be positive)
    """

    initial: int = DEFAULT_INITIAL_WIDTH

    def __post_init__(self) -> None:
        if isinstance(self.initial, bool) or not isinstance(self.initial, int):
            raise ConfigurationError(
                f"Initial width must be an integer, got {self.initial!r}",
                initial=self.initial,
            )
        if self.initial < 1:
            raise ConfigurationError(
                f"Initial width must be positive, got {self.initial}",
                initial=self.initial,
            )

    def field_width(self, depth: int) -> int:
        return self.initial + depth

    def cumulative_width(self, depth: int) -> int:
        """
        Sum of field widths for depths 0..depth.

        Closed form of the triangular sum: n(n+1)/2 - m(m+1)/2 with
        n = field_width(depth) and m = initial - 1.
        """
        n = self.field_width(depth)
        m = self.initial - 1
        return (n * (n + 1)) // 2 - (m * (m + 1)) // 2

    def max_value(self, depth: int) -> int:
        return (1 << self.field_width(depth)) - 1

    def depth_of(self, length: int) -> int:
        """
        Find the depth whose cumulative width equals ``length``.

        Raises:
            InvalidDigitError: If no depth resolves at exactly ``length`` bits
        """
        depth = 0
        while self.cumulative_width(depth) < length:
            depth += 1
        if self.cumulative_width(depth) != length:
            raise InvalidDigitError(
                f"Length {length} does not match any depth "
                f"(nearest cumulative width is {self.cumulative_width(depth)})"
            )
        return depth

    def boundary_digit(self, value: int, depth: int) -> int:
        """
        Build the guard-bit digit for ``value`` resolved at ``depth``.

        Raises:
            InvalidDigitError: If value is negative or does not fit
        """
        width = self.cumulative_width(depth)
        if value < 0 or value >> width:
            raise InvalidDigitError(
                f"Value {value} does not fit in {width} bits", digit=value
            )
        return value | (1 << width)

    def normalize(self, digit: int, depth: int) -> int:
        """
        Realign a digit so its logical length equals cumulative_width(depth).

        Shorter digits are padded with zero low bits; longer ones lose their
        low bits. The guard bit travels with the shift.
        """
        length = digit_length(digit)
        total = self.cumulative_width(depth)
        if length < total:
            return digit << (total - length)
        return digit >> (length - total)

    def interval(self, left: int, right: int, depth: int) -> int:
        """
        Count free slots strictly between two digits resolved at ``depth``.

        When both digits are shorter than the depth's cumulative width the
        whole field of that depth is free and ``max_value(depth)`` is returned
        without shifting.
        """
        total = self.cumulative_width(depth)
        if digit_length(left) < total and digit_length(right) < total:
            return self.max_value(depth)
        return self.normalize(right, depth) - self.normalize(left, depth) - 1

    def decode(self, digit: int) -> list[int]:
        """
        Split a digit into per-depth field values, most significant first.

        Raises:
            InvalidDigitError: If the digit has no guard bit or its length
                matches no depth
        """
        length = digit_length(digit)
        depth = self.depth_of(length)
        value = strip_guard(digit)

        fields = []
        for level in range(depth + 1):
            shift = length - self.cumulative_width(level)
            mask = (1 << self.field_width(level)) - 1
            fields.append((value >> shift) & mask)
        return fields

    def encode(self, fields: Sequence[int]) -> int:
        """
        Build a guard-bit digit from per-depth field values.

        Raises:
            InvalidDigitError: If no fields are given or a field does not fit
                its depth's width
        """
        if not fields:
            raise InvalidDigitError("Cannot encode an empty field list")

        value = 0
        for level, field in enumerate(fields):
            width = self.field_width(level)
            if field < 0 or field >> width:
                raise InvalidDigitError(
                    f"Field {field} at depth {level} does not fit in {width} bits",
                    digit=field,
                )
            value = (value << width) | field
        return self.boundary_digit(value, len(fields) - 1)
