"""
Errors and warnings raised by seedstream.

Every error signals a caller input contract violation. They all derive
from SeedError, which is itself a ValueError.
"""

from __future__ import annotations

from typing import Any, Iterable


def hpaste(values: Iterable[Any], max_head: int = 3, max_tail: int = 1) -> str:
    """
    Join values for an error message, abbreviating long listings.

    Example:
        >>> hpaste(range(1, 10))
        '1, 2, 3, ..., 9'
    """
    items = [str(v) for v in values]
    if len(items) > max_head + max_tail + 1:
        items = items[:max_head] + ["..."] + items[-max_tail:]
    return ", ".join(items)


class SeedError(ValueError):
    """Base class for invalid seed or count arguments."""

    pass


class InvalidCountError(SeedError):
    """Raised when the number of seeds is negative or not an integer."""

    pass


class InvalidSeedShapeError(SeedError):
    """Raised when a seed specification is none of the accepted forms."""

    pass


class LengthMismatchError(SeedError):
    """Raised when a pre-generated seed list does not have one seed per element."""

    pass


class HeterogeneousSeedsError(SeedError):
    """Raised when the seeds of a pre-generated list differ in length."""

    pass


class ScalarSeedsNotAllowedError(SeedError):
    """Raised when a pre-generated seed list holds scalars instead of generator states."""

    pass


class NonIntegerSeedsError(SeedError):
    """Raised when a pre-generated seed list holds non-integer values."""

    pass


class InvalidSeedListError(SeedError):
    """Raised when a pre-generated seed list is rejected by the generator."""

    pass


class InvalidStateWarning(RuntimeWarning):
    """Emitted when the ambient generator state is malformed and gets reseeded."""

    pass
