# prime_sieve_waypoints.py
"""
Waypoint index: sparse (rank -> prime) anchors for the sieve.

values[i] is the prime of rank i * stride. Every newly discovered prime is
offered in ascending order; one in `stride` is kept. When the kept population
reaches `capacity`, stride and capacity double and every other entry is
dropped, so the anchors stay exactly i * stride apart. Upkeep is O(1)
amortized per prime and a lookup never walks more than stride - 1 primes.
"""

from __future__ import annotations
from bisect import bisect_left
from typing import List, Optional, Tuple

INITIAL_CAPACITY = 4


class WaypointIndex:

    def __init__(self):
        self.values: List[int] = []
        self.stride: int = 1
        self.capacity: int = INITIAL_CAPACITY
        self.primes_seen: int = 0  # also the rank the next offered prime gets

    def reset(self) -> None:
        self.values = []
        self.stride = 1
        self.capacity = INITIAL_CAPACITY
        self.primes_seen = 0

    @property
    def population(self) -> int:
        return len(self.values)

    def record(self, p: int) -> None:
        """Offer the next prime (must be larger than every prime offered so far)."""
        if self.primes_seen % self.stride == 0:
            self.values.append(p)
        self.primes_seen += 1
        if len(self.values) == self.capacity:
            self._coarsen()

    def _coarsen(self) -> None:
        self.stride *= 2
        self.capacity *= 2
        # even positions are exactly the multiples of the new stride
        self.values = self.values[::2]

    def anchor(self, rank: int) -> Tuple[int, int]:
        """
        Return (waypoint value, steps) for a rank in [0, primes_seen):
        the prime of `rank` is `steps` candidates after the waypoint.
        """
        return self.values[rank // self.stride], rank % self.stride

    def last(self) -> Optional[int]:
        return self.values[-1] if self.values else None

    def ceiling(self, value: int) -> Optional[Tuple[int, int]]:
        """(rank, prime) of the first waypoint >= value, or None past the last one."""
        i = bisect_left(self.values, value)
        if i == len(self.values):
            return None
        return i * self.stride, self.values[i]
