"""
Exceptions for identifier generation.

Exception Hierarchy:
    LSEQError (base)
    ├── ConfigurationError (bad initial width or boundary)
    ├── PreconditionError (neighbors that cannot bracket a new identifier)
    ├── InvalidDigitError (digit without guard bit, undecodable length)
    └── AllocationError (generated digit broke an ordering invariant)

None of these are retryable: every one is a deterministic function of
the inputs.

Example:
    >>> from lseq.core.exceptions import PreconditionError
    >>> try:
    ...     generator.generate("a", right, left)
    ... except PreconditionError as e:
    ...     print(f"Cannot insert: {e}")
"""


class LSEQError(Exception):
    """
    Base exception for all identifier errors.

    Attributes:
        message: Human-readable error message
        context: Optional dictionary of additional context
    """

    def __init__(self, message: str, **context: object) -> None:
        """
        Initialize an error with message and context.

        Args:
            message: Human-readable error message
            **context: Additional context as keyword arguments
        """
        super().__init__(message)
        self.message = message
        self.context = context

    def __str__(self) -> str:
        """Return string representation of the error."""
        return self.message


class ConfigurationError(LSEQError, ValueError):
    """
    Raised when a bit-width policy or generator is constructed with
    invalid parameters (non-positive initial width or boundary).
    """


class PreconditionError(LSEQError, ValueError):
    """
    Raised when the neighbors passed to the generator are misordered,
    or occupy the same aligned position so nothing fits between them.

    Attributes:
        left: The left neighbor as supplied
        right: The right neighbor as supplied
    """

    def __init__(self, message: str, left: object = None, right: object = None) -> None:
        super().__init__(message, left=left, right=right)
        self.left = left
        self.right = right


class InvalidDigitError(LSEQError, ValueError):
    """
    Raised when a digit is not an integer, is missing its guard bit, has a
    logical length matching no depth's cumulative width, or has a field
    overflowing its width.

    Attributes:
        digit: The offending digit (or field value)
    """

    def __init__(self, message: str, digit: int | None = None) -> None:
        super().__init__(message, digit=digit)
        self.digit = digit


class AllocationError(LSEQError, RuntimeError):
    """
    Raised when a freshly generated identifier does not sit strictly
    between its neighbors or does not resolve at the depth it was
    generated for. Indicates a bug, never bad luck.
    """
