from __future__ import annotations

from math import isqrt
from typing import List

import pytest

from prime_sieve import PrimeSieve


def base_primes_up_to(n: int) -> List[int]:
    """Plain one-shot Sieve of Eratosthenes, used as the reference."""
    if n < 2:
        return []
    sieve = bytearray(b"\x01") * (n + 1)
    sieve[0:2] = b"\x00\x00"
    for p in range(2, isqrt(n) + 1):
        if sieve[p]:
            start = p * p
            sieve[start:n+1:p] = b"\x00" * (((n - start) // p) + 1)
    return [i for i, ok in enumerate(sieve) if ok]


PRIMES_TO_30 = [2, 3, 5, 7, 11, 13, 17, 19, 23, 29]


@pytest.fixture
def sieve30() -> PrimeSieve:
    return PrimeSieve(30)


@pytest.fixture
def sieve100() -> PrimeSieve:
    return PrimeSieve(100)
