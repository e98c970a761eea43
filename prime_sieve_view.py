# prime_sieve_view.py
"""
PrimeView: a fixed window over a PrimeSieve.

The window pins the first and last prime *values* when it is built and then
answers every query by asking the parent sieve and discarding anything
outside [first, last]. It is never re-validated against later growth of the
parent; growth only adds primes above the pinned range, so ranks inside the
window keep their meaning. Iteration is fail-fast against the parent's
generation.
"""

from __future__ import annotations
from typing import TYPE_CHECKING, Iterator, Optional, Tuple

from prime_sieve_contract import PrimeContainer, check_window
from prime_sieve_errors import UnsupportedOperation

if TYPE_CHECKING:
    from prime_sieve import PrimeSieve


class PrimeView(PrimeContainer):

    def __init__(self, sieve: "PrimeSieve", from_rank: int, to_rank: int):
        check_window(from_rank, to_rank, len(sieve))
        self._sieve = sieve
        self._first: int = sieve[from_rank]
        self._last: int = sieve[to_rank - 1]
        self._from: int = from_rank
        self._to: int = to_rank

    @property
    def sieve(self) -> "PrimeSieve":
        return self._sieve

    @property
    def from_rank(self) -> int:
        return self._from

    @property
    def to_rank(self) -> int:
        return self._to

    @property
    def generation(self) -> int:
        return self._sieve.generation

    def _in_bounds(self, n: int) -> bool:
        return self._first <= n <= self._last

    def __len__(self) -> int:
        return self._to - self._from

    def __contains__(self, value: object) -> bool:
        return value in self._sieve and self._in_bounds(value)

    def _prime_at(self, rank: int) -> int:
        return self._sieve[rank + self._from]

    def rank_of(self, value: object) -> Optional[int]:
        rank = self._sieve.rank_of(value)
        if rank is None or not self._from <= rank < self._to:
            return None
        return rank - self._from

    def next_prime(self, n: int) -> Optional[int]:
        if not self._in_bounds(n):
            return None
        p = self._sieve.next_prime(n)
        return p if p is not None and self._in_bounds(p) else None

    def previous_prime(self, n: int) -> Optional[int]:
        if not self._in_bounds(n):
            return None
        p = self._sieve.previous_prime(n)
        return p if p is not None and self._in_bounds(p) else None

    def first_prime(self) -> int:
        return self._first

    def last_prime(self) -> int:
        return self._last

    def bounds(self) -> Tuple[int, int]:
        return self._first, self._last

    def composites(self) -> Iterator[int]:
        return self._sieve.composites_between(self._first, self._last)

    def window(self, from_rank: int, to_rank: int) -> "PrimeView":
        # always a window of the parent sieve, never of this view
        check_window(from_rank, to_rank, len(self))
        return self._sieve.window(from_rank + self._from, to_rank + self._from)

    def extend(self, bound: int):
        raise UnsupportedOperation("a window cannot be extended; extend its sieve")

    def clear(self):
        raise UnsupportedOperation("a window cannot be cleared; clear its sieve")
