# prime_sieve_vector.py
"""
Candidate vector: one bit per integer in [0, upper_bound].

bit n == 1  -> n is still a candidate (after a completed growth step: n is prime)
bit n == 0  -> n is known composite (0 and 1 are always 0)

Bits are only ever cleared, except for the fresh region appended by grow(),
which starts all-candidate and is sieved by the owner in the same step.
"""

from __future__ import annotations
from typing import Iterator, Optional

from bitarray import bitarray
from bitarray.util import ones, zeros


class CandidateVector:
    """Growable per-integer candidate/composite flags backed by a bitarray."""

    def __init__(self):
        # positions 0 and 1 are never candidates
        self.bits: bitarray = zeros(2)

    @property
    def upper_bound(self) -> int:
        return len(self.bits) - 1

    def grow(self, bound: int) -> None:
        """Append (upper_bound, bound] as candidates. No-op if bound is not larger."""
        extra = bound - self.upper_bound
        if extra > 0:
            self.bits.extend(ones(extra))

    def eliminate(self, p: int, start: int, stop: int) -> None:
        """Clear start, start+p, ... up to and including stop."""
        if start <= stop:
            self.bits[start:stop + 1:p] = 0

    def reset(self) -> None:
        self.bits = zeros(2)

    def is_candidate(self, n: int) -> bool:
        return 0 <= n <= self.upper_bound and bool(self.bits[n])

    def count(self, start: int = 0, stop: Optional[int] = None) -> int:
        """Number of candidates in [start, stop] (stop defaults to upper_bound)."""
        if stop is None or stop > self.upper_bound:
            stop = self.upper_bound
        start = max(start, 0)
        if start > stop:
            return 0
        return self.bits.count(1, start, stop + 1)

    # ------------------------- Searches -------------------------
    # All searches return -1 when nothing is found, like bitarray.find().

    def next_candidate(self, n: int, stop: Optional[int] = None) -> int:
        """Least candidate > n and <= stop."""
        return self._find(1, n + 1, stop)

    def previous_candidate(self, n: int) -> int:
        """Greatest candidate < n."""
        end = min(n, len(self.bits))
        if end <= 0:
            return -1
        return self.bits.find(1, 0, end, right=True)

    def next_composite(self, n: int, stop: Optional[int] = None) -> int:
        """Least non-candidate > n and <= stop."""
        return self._find(0, n + 1, stop)

    def candidates(self, start: int = 0, stop: Optional[int] = None) -> Iterator[int]:
        """Ascending candidates in [start, stop]; the vector must not change meanwhile."""
        if stop is None or stop > self.upper_bound:
            stop = self.upper_bound
        start = max(start, 0)
        if start > stop:
            return iter(())
        return self.bits.search(1, start, stop + 1)

    def _find(self, value: int, start: int, stop: Optional[int]) -> int:
        if stop is None or stop > self.upper_bound:
            stop = self.upper_bound
        start = max(start, 0)
        if start > stop:
            return -1
        return self.bits.find(value, start, stop + 1)
