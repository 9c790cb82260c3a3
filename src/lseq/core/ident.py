"""
Identifier model and total order.

An Ident pairs an owner tag (the replica that created it) with a guard-bit
digit. Idents are ordered as fixed-point fractions: the shorter digit is
left-shifted until both have the same bit length, the most significant
bits decide, and the owner tag breaks ties.

The owner tag can be any hashable value with a total order (UUID, int,
str, ...). Nothing else is assumed about it.

Example:
    >>> a = Ident.from_value("a", 3, 5)    # 00011
    >>> b = Ident.from_value("a", 97, 11)  # 00001 100001
    >>> b < a
    True
    >>> str(a)
    '[Ident meta=a digit=3]'
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, StrictInt, ValidationError, field_validator

from lseq.core.base import digit_length, strip_guard
from lseq.core.exceptions import InvalidDigitError

if TYPE_CHECKING:
    from lseq.core.base import BitBase


M = TypeVar("M")


def align(left: int, right: int) -> tuple[int, int]:
    """
    Left-shift the shorter of two digits so both have the same bit length.

    Guard bits included, so the aligned pair compares like two fractions.
    """
    left_len = left.bit_length()
    right_len = right.bit_length()
    if left_len > right_len:
        return left, right << (left_len - right_len)
    return left << (right_len - left_len), right


def compare_digits(left: int, right: int) -> int:
    """Compare two digits by aligned position. Returns -1, 0 or 1."""
    left_norm, right_norm = align(left, right)
    return (left_norm > right_norm) - (left_norm < right_norm)


class Ident(BaseModel, Generic[M]):
    """
    Immutable identifier: owner tag plus guard-bit digit.

    Equality is structural (same meta, same digit). Ordering follows the
    aligned digit, then the meta, then the raw digit length.

    The digit must be a real int (no bools, floats or numeric strings)
    carrying a guard bit. Construction with a bad digit raises
    InvalidDigitError rather than pydantic's ValidationError; other
    validation failures are left as ValidationError. Whether the digit's
    length matches a depth depends on the bit-width policy, so the
    generator checks that when it receives a neighbor.
    """

    meta: M
    digit: StrictInt

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    def __init__(self, **data: Any) -> None:
        try:
            super().__init__(**data)
        except ValidationError as e:
            digit_errors = [err for err in e.errors() if err["loc"][:1] == ("digit",)]
            if not digit_errors:
                raise
            raw = data.get("digit")
            raise InvalidDigitError(
                f"Invalid digit {raw!r}: {digit_errors[0]['msg']}",
                digit=raw if isinstance(raw, int) and not isinstance(raw, bool) else None,
            ) from e

    @field_validator("digit")
    @classmethod
    def validate_digit(cls, v: int) -> int:
        """Validate that the digit carries a guard bit."""
        if v < 1:
            raise ValueError("Digit must carry a guard bit (digit >= 1)")
        return v

    @classmethod
    def from_value(cls, meta: M, value: int, length: int) -> Ident[M]:
        """
        Build an Ident from a raw value and its logical bit length.

        Raises:
            InvalidDigitError: If the value is negative or needs more than
                length bits
        """
        if value < 0 or value >> length:
            raise InvalidDigitError(f"Value {value} does not fit in {length} bits", digit=value)
        return cls(meta=meta, digit=value | (1 << length))

    @property
    def length(self) -> int:
        """Logical bit length (guard bit excluded)."""
        return digit_length(self.digit)

    @property
    def value(self) -> int:
        """Digit value with the guard bit cleared."""
        return strip_guard(self.digit)

    def compare(self, other: Ident[Any]) -> int:
        """
        Total order over identifiers. Returns -1, 0 or 1.

        1. Aligned digits decide when they differ.
        2. Otherwise the meta decides when it differs.
        3. Otherwise the shorter raw digit sorts first.
        """
        by_digit = compare_digits(self.digit, other.digit)
        if by_digit:
            return by_digit

        if self.meta != other.meta:
            return -1 if self.meta < other.meta else 1

        self_len = self.digit.bit_length()
        other_len = other.digit.bit_length()
        return (self_len > other_len) - (self_len < other_len)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Ident):
            return NotImplemented
        return self.compare(other) < 0

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Ident):
            return NotImplemented
        return self.compare(other) <= 0

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Ident):
            return NotImplemented
        return self.compare(other) > 0

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Ident):
            return NotImplemented
        return self.compare(other) >= 0

    def clone(self) -> Ident[M]:
        """Return an independent copy (meta deep-copied)."""
        return self.model_copy(deep=True)

    def describe(self, base: BitBase) -> str:
        """Format with the digit split into per-depth fields."""
        return f"[Ident meta={self.meta!r} digit={base.decode(self.digit)}]"

    def __str__(self) -> str:
        """Format as [Ident meta=... digit=<unguarded value>]"""
        return f"[Ident meta={self.meta} digit={self.value}]"
