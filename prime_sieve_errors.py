# prime_sieve_errors.py
"""
Error kinds raised by the prime sieve and its views.

Every kind derives from SieveError and from the closest built-in exception,
so `except IndexError` around a rank lookup or `except RuntimeError` around an
iteration behaves as it would for a list.
"""

from __future__ import annotations


class SieveError(Exception):
    """Base class for everything the sieve raises on purpose."""


class InvalidArgument(SieveError, ValueError):
    """Bound or range argument is malformed (negative, non-integer, ...)."""


class InvalidRange(InvalidArgument):
    """Window request is empty or does not fit inside the container."""


class CapacityExceeded(InvalidArgument, OverflowError):
    """Requested bound is larger than the sieve's configured maximum."""

    def __init__(self, bound: int, max_bound: int):
        super().__init__(f"Cannot extend sieve to {bound}; maximum bound is {max_bound}.")
        self.bound = bound
        self.max_bound = max_bound


class IndexOutOfRange(SieveError, IndexError):
    """Rank lies outside [0, size)."""

    def __init__(self, rank: int, size: int):
        super().__init__(f"rank {rank} out of range for size {size}")
        self.rank = rank
        self.size = size


class EmptyContainer(SieveError, LookupError):
    """First/last prime requested from a container holding no primes."""


class ConcurrentStructuralChange(SieveError, RuntimeError):
    """The sieve was extended or cleared while an iterator was live."""


class UnsupportedOperation(SieveError, TypeError):
    """Per-element insert/remove/replace; a prime table only grows or resets."""
