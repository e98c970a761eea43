#!/usr/bin/env python3
"""
Prime Sieve — incremental Sieve of Eratosthenes with a rank index.

PrimeSieve is an ascending, random-access table of every prime up to its
current bound. extend() grows the table by sieving only the new region;
a sparse waypoint index keeps rank <-> value translation cheap as it grows.
The table is append-only: it can be extended or cleared, never edited.

Usage examples:
  - Primes up to 1_000, printed:
      python prime_sieve.py --limit 1000 --print-primes

  - Grow from 10_000 to 1_000_000 in 8 steps, then report:
      python prime_sieve.py --start 10000 --limit 1000000 --steps 8 --stats

  - Rank lookups and a windowed composite listing:
      python prime_sieve.py --limit 100 --rank 0 --rank 24 --index-of 97
      python prime_sieve.py --limit 30 --window 0:10 --print-composites

  - Golden-angle spiral of the primes (needs matplotlib):
      python prime_sieve.py --limit 20000 --png primes_spiral.png
"""

from __future__ import annotations
import argparse
import json
import sys
import time
from math import isqrt
from typing import Dict, Iterator, List, Optional, Tuple

from prime_sieve_contract import PrimeContainer
from prime_sieve_errors import (
    CapacityExceeded,
    EmptyContainer,
    InvalidArgument,
    SieveError,
)
from prime_sieve_vector import CandidateVector
from prime_sieve_view import PrimeView
from prime_sieve_waypoints import WaypointIndex

__version__ = "1.0.0"

FIRST_PRIME = 2
MAX_BOUND = 1 << 30
DEFAULT_BOUND = 1 << 14


class PrimeSieve(PrimeContainer):
    """
    Growable table of the primes in [1, upper_bound].

    Owns the candidate vector, the waypoint index and the generation counter.
    extend() and clear() are the only mutators; each real change bumps the
    generation so live iterators fail fast.
    """

    def __init__(self, bound: int = DEFAULT_BOUND, *, max_bound: int = MAX_BOUND):
        if isinstance(max_bound, bool) or not isinstance(max_bound, int) or max_bound < 1:
            raise InvalidArgument(f"max_bound must be a positive integer, got {max_bound!r}")
        self.max_bound: int = max_bound
        self._check_bound(bound)
        if bound < 1:
            raise InvalidArgument(f"initial bound must be at least 1, got {bound}")
        self._vector = CandidateVector()
        self._waypoints = WaypointIndex()
        self._generation: int = 0
        self._grow(bound)

    # ------------------------- Growth -------------------------

    def _check_bound(self, bound: int) -> None:
        if isinstance(bound, bool) or not isinstance(bound, int):
            raise InvalidArgument(f"bound must be an int, got {bound!r}")
        if bound < 0:
            raise InvalidArgument(f"bound must not be negative, got {bound}")
        if bound > self.max_bound:
            raise CapacityExceeded(bound, self.max_bound)

    def _grow(self, bound: int) -> bool:
        """Sieve (upper_bound, bound]. Returns False when there is nothing new."""
        vector = self._vector
        old = vector.upper_bound
        if bound <= old:
            return False

        # 1) new region starts all-candidate
        vector.grow(bound)

        # 2) strike multiples of every prime p <= sqrt(bound) inside the new region;
        #    p is reached only after all smaller primes, so its own bit is final
        limit = isqrt(bound)
        p = vector.next_candidate(FIRST_PRIME - 1, limit)
        while p != -1:
            start = max(p * p, (old // p + 1) * p)
            vector.eliminate(p, start, bound)
            p = vector.next_candidate(p, limit)

        # 3) survivors above the old bound are the new primes, ascending
        for q in vector.candidates(old + 1, bound):
            self._waypoints.record(q)
        return True

    def extend(self, bound: int) -> None:
        """
        Sieve every integer up to `bound`. A bound at or below the current one
        changes nothing and does not invalidate live iterators.
        """
        self._check_bound(bound)
        if self._grow(bound):
            self._generation += 1

    def clear(self) -> None:
        """Drop every prime and return to upper_bound == 1."""
        self._vector.reset()
        self._waypoints.reset()
        self._generation += 1

    # ------------------------- State -------------------------

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def upper_bound(self) -> int:
        return self._vector.upper_bound

    @property
    def stride(self) -> int:
        """Rank distance between consecutive waypoints."""
        return self._waypoints.stride

    @property
    def waypoint_count(self) -> int:
        return self._waypoints.population

    def bounds(self) -> Tuple[int, int]:
        return 1, self._vector.upper_bound

    def __len__(self) -> int:
        return self._waypoints.primes_seen

    def __contains__(self, value: object) -> bool:
        return isinstance(value, int) and self._vector.is_candidate(value)

    def first_prime(self) -> int:
        if not self:
            raise EmptyContainer("sieve holds no primes")
        return FIRST_PRIME

    def last_prime(self) -> int:
        if not self:
            raise EmptyContainer("sieve holds no primes")
        return self._vector.previous_candidate(self._vector.upper_bound + 1)

    # ------------------------- Rank <-> value -------------------------

    def _prime_at(self, rank: int) -> int:
        p, steps = self._waypoints.anchor(rank)
        for _ in range(steps):
            p = self._vector.next_candidate(p)
        return p

    def rank_of(self, value: object) -> Optional[int]:
        if value not in self:
            return None
        if value > self._waypoints.last():
            rank, p = len(self) - 1, self.last_prime()
        else:
            rank, p = self._waypoints.ceiling(value)
        # walk back from the anchor to the value
        while p > value:
            p = self._vector.previous_candidate(p)
            rank -= 1
        return rank

    def next_prime(self, n: int) -> Optional[int]:
        p = self._vector.next_candidate(n)
        return p if p != -1 else None

    def previous_prime(self, n: int) -> Optional[int]:
        p = self._vector.previous_candidate(n)
        return p if p != -1 else None

    # ------------------------- Composites -------------------------

    def composites(self) -> Iterator[int]:
        if not self:
            return iter(())
        return self.composites_between(FIRST_PRIME, self.last_prime())

    def composites_between(self, low: int, high: int) -> Iterator[int]:
        """
        Lazy ascending composites in [low, high], clipped to the span of known
        primes. The generation is captured now, not on the first next().
        """
        if not self:
            return iter(())
        low = max(low, FIRST_PRIME)
        high = min(high, self.last_prime())
        return self._walk_composites(self._generation, low, high)

    def _walk_composites(self, expected: int, low: int, high: int) -> Iterator[int]:
        n = low - 1
        while True:
            self._check_generation(expected)
            n = self._vector.next_composite(n, high)
            if n == -1:
                return
            yield n

    # ------------------------- Windows -------------------------

    def window(self, from_rank: int, to_rank: int) -> PrimeView:
        return PrimeView(self, from_rank, to_rank)


# ------------------------- CLI -------------------------

def parse_window(val: str) -> Tuple[int, int]:
    """Parse "A:B" into the rank pair (A, B)."""
    try:
        a, b = str(val).split(":")
        return int(a), int(b)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid window (expected A:B): {val}")


def growth_schedule(start: int, limit: int, steps: int) -> List[int]:
    """Bounds that take a sieve from `start` to `limit` in `steps` equal extensions."""
    if steps < 1:
        raise InvalidArgument(f"steps must be at least 1, got {steps}")
    if limit <= start:
        return [limit]
    return [start + (limit - start) * k // steps for k in range(1, steps + 1)]


def collect_stats(sieve: PrimeSieve, sieve_sec: float) -> Dict[str, object]:
    return {
        "version": __version__,
        "upper_bound": sieve.upper_bound,
        "primes_found": len(sieve),
        "largest_prime": sieve.last_prime() if sieve else None,
        "waypoints": {"stride": sieve.stride, "population": sieve.waypoint_count},
        "generation": sieve.generation,
        "timing": {"sieve_sec": sieve_sec},
    }


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Prime Sieve — incremental Sieve of Eratosthenes with a rank index.")
    p.add_argument("--limit", type=int, required=True, help="Upper bound N (inclusive) to sieve up to.")
    p.add_argument("--start", type=int, default=None, help="Initial bound before incremental growth (default: --limit).")
    p.add_argument("--steps", type=int, default=1, help="Extend from --start to --limit in this many steps (default 1).")
    p.add_argument("--max-bound", type=int, default=MAX_BOUND, help=f"Largest bound the sieve accepts (default {MAX_BOUND}).")
    p.add_argument("--window", type=parse_window, default=None, help="Restrict output to ranks A:B (half-open).")
    p.add_argument("--print-primes", action="store_true", help="Print the primes.")
    p.add_argument("--print-composites", action="store_true", help="Print the composites between first and last prime.")
    p.add_argument("--rank", type=int, action="append", default=[], help="Print the prime of this rank (repeatable).")
    p.add_argument("--index-of", type=int, action="append", default=[], help="Print the rank of this prime (repeatable).")
    p.add_argument("--stats", action="store_true", help="Print simple statistics at end.")
    p.add_argument("--json", type=str, default=None, help="Optional stats JSON path.")
    p.add_argument("--png", type=str, default=None, help="Optional golden-angle spiral PNG path (needs matplotlib).")
    p.add_argument("--png-bw", action="store_true", help="Render PNG in black & white (grayscale)")
    p.add_argument("--png-grid", dest="png_grid", action="store_true", default=True, help="Show grid lines")
    p.add_argument("--no-png-grid", dest="png_grid", action="store_false")
    return p


def run(args: argparse.Namespace) -> int:
    start = args.limit if args.start is None else min(args.start, args.limit)

    t0 = time.time()
    sieve = PrimeSieve(start, max_bound=args.max_bound)
    for bound in growth_schedule(start, args.limit, args.steps):
        sieve.extend(bound)
    t1 = time.time()

    target: PrimeContainer = sieve if args.window is None else sieve.window(*args.window)

    if args.print_primes:
        for p in target:
            print(p)
    if args.print_composites:
        for n in target.composites():
            print(n)
    for r in args.rank:
        print(f"prime[{r}] = {target[r]}")
    for v in args.index_of:
        rank = target.rank_of(v)
        print(f"index({v}) = {rank if rank is not None else 'not found'}")

    stats = collect_stats(sieve, t1 - t0)
    if args.stats:
        print("--- stats ---")
        print(f"upper bound    : {stats['upper_bound']}")
        print(f"primes found   : {stats['primes_found']}")
        print(f"largest prime  : {stats['largest_prime']}")
        print(f"waypoint stride: {sieve.stride} (x{sieve.waypoint_count})")
        print(f"generation     : {sieve.generation}")
        print(f"sieve time     : {t1 - t0:.3f}s")
        if args.window is not None:
            print(f"window         : {target!r} ({len(target)} primes)")

    if args.json:
        with open(args.json, "w") as jf:
            json.dump(stats, jf, indent=2)
        print(f"[saved] {args.json}")

    if args.png:
        from prime_sieve_spiral import HAVE_MPL, save_spiral_png
        if not HAVE_MPL:
            print("[warn] matplotlib not available; skipping PNG")
        else:
            save_spiral_png(target, args.png, bw=args.png_bw, show_grid=args.png_grid)

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    ap = build_arg_parser()
    args = ap.parse_args(argv)
    try:
        return run(args)
    except SieveError as exc:
        print(f"[error] {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
