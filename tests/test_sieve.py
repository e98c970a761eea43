from __future__ import annotations

import random

import pytest

from conftest import PRIMES_TO_30, base_primes_up_to
from prime_sieve import DEFAULT_BOUND, MAX_BOUND, PrimeSieve
from prime_sieve_errors import (
    CapacityExceeded,
    ConcurrentStructuralChange,
    EmptyContainer,
    IndexOutOfRange,
    InvalidArgument,
)


# ------------------------- Scenarios -------------------------

def test_sieve_to_30(sieve30: PrimeSieve) -> None:
    assert list(sieve30) == PRIMES_TO_30
    assert len(sieve30) == 10
    assert sieve30[0] == 2
    assert sieve30[9] == 29
    assert sieve30.rank_of(17) == 6
    assert sieve30.next_prime(7) == 11
    assert sieve30.previous_prime(11) == 7


def test_bound_one_is_empty_then_grows_to_two() -> None:
    s = PrimeSieve(1)
    assert len(s) == 0
    assert list(s) == []
    s.extend(2)
    assert list(s) == [2]
    assert len(s) == 1


def test_clear_empties_and_first_last_raise(sieve30: PrimeSieve) -> None:
    sieve30.clear()
    assert len(sieve30) == 0
    assert sieve30.is_empty()
    assert sieve30.bounds() == (1, 1)
    with pytest.raises(EmptyContainer):
        sieve30.first_prime()
    with pytest.raises(EmptyContainer):
        sieve30.last_prime()
    sieve30.extend(10)
    assert list(sieve30) == [2, 3, 5, 7]


def test_composites_up_to_last_prime(sieve30: PrimeSieve) -> None:
    expected = [4, 6, 8, 9, 10, 12, 14, 15, 16, 18, 20, 21, 22, 24, 25, 26, 27, 28]
    assert list(sieve30.composites()) == expected
    assert list(sieve30.window(0, 10).composites()) == expected


def test_composites_of_tiny_sieves() -> None:
    assert list(PrimeSieve(1).composites()) == []
    assert list(PrimeSieve(3).composites()) == []
    assert list(PrimeSieve(5).composites()) == [4]


def test_default_bound() -> None:
    s = PrimeSieve()
    assert s.upper_bound == DEFAULT_BOUND
    assert len(s) == len(base_primes_up_to(DEFAULT_BOUND))


# ------------------------- Growth -------------------------

@pytest.mark.parametrize("b1,b2", [(1, 2), (2, 3), (10, 11), (30, 31), (97, 1000), (1000, 1009), (4, 10_000)])
def test_extending_in_two_steps_matches_one_step(b1: int, b2: int) -> None:
    stepped = PrimeSieve(b1)
    stepped.extend(b2)
    direct = PrimeSieve(b2)
    assert list(stepped) == list(direct) == base_primes_up_to(b2)
    assert stepped.upper_bound == b2


def test_growing_one_integer_at_a_time() -> None:
    s = PrimeSieve(1)
    for b in range(2, 400):
        s.extend(b)
    assert list(s) == base_primes_up_to(399)


def test_random_growth_schedule() -> None:
    rng = random.Random(1234)
    s = PrimeSieve(2)
    bound = 2
    for _ in range(60):
        bound += rng.randrange(0, 700)
        s.extend(bound)
        ref = base_primes_up_to(bound)
        assert len(s) == len(ref)
        assert s.get_if_present(len(ref) - 1) == ref[-1]
        assert s.get_if_present(len(ref)) is None
    assert list(s) == base_primes_up_to(bound)


def test_extend_to_smaller_bound_changes_nothing(sieve100: PrimeSieve) -> None:
    before = list(sieve100)
    generation = sieve100.generation
    sieve100.extend(50)
    sieve100.extend(100)
    sieve100.extend(0)
    assert list(sieve100) == before
    assert sieve100.upper_bound == 100
    assert sieve100.generation == generation


def test_generation_counts_real_changes(sieve30: PrimeSieve) -> None:
    g = sieve30.generation
    sieve30.extend(40)
    assert sieve30.generation == g + 1
    sieve30.clear()
    assert sieve30.generation == g + 2


def test_larger_table() -> None:
    s = PrimeSieve(100_000)
    assert len(s) == 9592
    assert s[9591] == 99991
    assert s.last_prime() == 99991
    assert s.rank_of(99991) == 9591
    assert s[1000] == 7927


# ------------------------- Rank <-> value -------------------------

@pytest.mark.parametrize("bound", [2, 3, 7, 30, 1000, 5000])
def test_rank_value_inverse(bound: int) -> None:
    s = PrimeSieve(bound)
    ref = base_primes_up_to(bound)
    for rank, p in enumerate(ref):
        assert s[rank] == p
        assert s.rank_of(p) == rank
        assert s.index(p) == rank


def test_rank_of_non_members(sieve30: PrimeSieve) -> None:
    assert sieve30.rank_of(4) is None
    assert sieve30.rank_of(1) is None
    assert sieve30.rank_of(31) is None
    assert sieve30.rank_of(-7) is None
    assert sieve30.rank_of("7") is None
    with pytest.raises(ValueError):
        sieve30.index(9)
    assert sieve30.count(7) == 1
    assert sieve30.count(8) == 0


def test_rank_access_bounds(sieve30: PrimeSieve) -> None:
    assert sieve30[-1] == 29
    assert sieve30[-10] == 2
    with pytest.raises(IndexOutOfRange):
        sieve30[10]
    with pytest.raises(IndexError):
        sieve30[-11]
    with pytest.raises(IndexOutOfRange):
        PrimeSieve(1)[0]


def test_get_if_present(sieve30: PrimeSieve) -> None:
    assert sieve30.get_if_present(9) == 29
    assert sieve30.get_if_present(10) is None
    assert sieve30.get_if_present(10_000) is None
    with pytest.raises(IndexOutOfRange):
        sieve30.get_if_present(-1)


def test_membership(sieve30: PrimeSieve) -> None:
    assert 29 in sieve30
    assert 2 in sieve30
    assert 1 not in sieve30
    assert 27 not in sieve30
    assert 31 not in sieve30
    assert -3 not in sieve30
    assert "2" not in sieve30
    assert 2.0 not in sieve30


def test_next_and_previous_prime(sieve30: PrimeSieve) -> None:
    assert sieve30.next_prime(-5) == 2
    assert sieve30.next_prime(2) == 3
    assert sieve30.next_prime(24) == 29
    assert sieve30.next_prime(29) is None
    assert sieve30.next_prime(30) is None
    assert sieve30.previous_prime(3) == 2
    assert sieve30.previous_prime(2) is None
    assert sieve30.previous_prime(30) == 29
    assert sieve30.previous_prime(1000) == 29


def test_bounds_and_first_last(sieve30: PrimeSieve) -> None:
    assert sieve30.bounds() == (1, 30)
    assert sieve30.first_prime() == 2
    assert sieve30.last_prime() == 29


# ------------------------- Errors -------------------------

def test_capacity_exceeded_leaves_sieve_untouched() -> None:
    s = PrimeSieve(10, max_bound=100)
    with pytest.raises(CapacityExceeded) as info:
        s.extend(101)
    assert isinstance(info.value, OverflowError)
    assert isinstance(info.value, InvalidArgument)
    assert info.value.max_bound == 100
    assert list(s) == [2, 3, 5, 7]
    s.extend(100)
    assert len(s) == 25


def test_default_capacity() -> None:
    with pytest.raises(CapacityExceeded):
        PrimeSieve(MAX_BOUND + 1)


@pytest.mark.parametrize("bound", [-1, 2.5, "10", True, None])
def test_invalid_bounds(sieve30: PrimeSieve, bound) -> None:
    with pytest.raises(InvalidArgument):
        sieve30.extend(bound)
    assert list(sieve30) == PRIMES_TO_30


@pytest.mark.parametrize("bound", [0, -4])
def test_constructor_needs_positive_bound(bound: int) -> None:
    with pytest.raises(InvalidArgument):
        PrimeSieve(bound)


def test_constructor_rejects_bad_max_bound() -> None:
    with pytest.raises(InvalidArgument):
        PrimeSieve(10, max_bound=0)


def test_composites_fail_fast(sieve30: PrimeSieve) -> None:
    composites = sieve30.composites()
    sieve30.extend(60)
    with pytest.raises(ConcurrentStructuralChange):
        next(composites)


def test_composites_fail_fast_mid_enumeration(sieve30: PrimeSieve) -> None:
    composites = sieve30.composites()
    assert next(composites) == 4
    assert next(composites) == 6
    sieve30.clear()
    with pytest.raises(RuntimeError):
        next(composites)
