# prime_sieve_contract.py
"""
Append-only sequence contract shared by PrimeSieve and PrimeView.

A prime container is an ascending, random-access sequence of primes. It can
only grow (extend) or be reset (clear) as a whole; every per-element mutator
raises UnsupportedOperation.

Fail-fast iteration: the owning sieve keeps a `generation` number that goes
up on every structural change. Iterators, cursors and composite enumerations
copy it when created and compare it on every step.
"""

from __future__ import annotations
import operator
from abc import abstractmethod
from collections.abc import Sequence
from typing import Callable, Iterator, List, Optional, Tuple

from prime_sieve_errors import (
    ConcurrentStructuralChange,
    IndexOutOfRange,
    InvalidArgument,
    InvalidRange,
    UnsupportedOperation,
)

_HASH_MULTIPLIER = 31
_HASH_MASK = (1 << 64) - 1


def check_window(from_rank: int, to_rank: int, size: int) -> None:
    """Validate a [from_rank, to_rank) window request against a container size."""
    if not 0 <= from_rank <= to_rank <= size:
        raise InvalidRange(f"window [{from_rank}, {to_rank}) is outside [0, {size}]")
    if from_rank == to_rank:
        raise InvalidRange(f"window [{from_rank}, {to_rank}) is empty")


class PrimeContainer(Sequence):
    """
    Abstract ordered container of primes.

    Subclasses supply size, rank access, reverse lookup, neighbour queries,
    composites and windowing; this class derives iteration, equality, hashing,
    display and slicing from those, and refuses per-element mutation.
    """

    # ------------------------- Required by subclasses -------------------------

    @property
    @abstractmethod
    def generation(self) -> int:
        """Structural-change counter of the underlying sieve."""

    @abstractmethod
    def __len__(self) -> int: ...

    @abstractmethod
    def __contains__(self, value: object) -> bool: ...

    @abstractmethod
    def _prime_at(self, rank: int) -> int:
        """Prime of a rank already checked to lie in [0, len)."""

    @abstractmethod
    def rank_of(self, value: object) -> Optional[int]:
        """Rank of a prime in this container, or None."""

    @abstractmethod
    def next_prime(self, n: int) -> Optional[int]: ...

    @abstractmethod
    def previous_prime(self, n: int) -> Optional[int]: ...

    @abstractmethod
    def first_prime(self) -> int: ...

    @abstractmethod
    def last_prime(self) -> int: ...

    @abstractmethod
    def bounds(self) -> Tuple[int, int]:
        """Closed interval of integers this container covers."""

    @abstractmethod
    def composites(self) -> Iterator[int]:
        """Lazy, fail-fast ascending composites between first and last prime."""

    @abstractmethod
    def window(self, from_rank: int, to_rank: int) -> "PrimeContainer":
        """View over ranks [from_rank, to_rank) of the underlying sieve."""

    # ------------------------- Fail-fast support -------------------------

    def _check_generation(self, expected: int) -> None:
        if self.generation != expected:
            raise ConcurrentStructuralChange(
                f"{type(self).__name__} was modified during iteration")

    # ------------------------- Access -------------------------

    def __getitem__(self, key):
        if isinstance(key, slice):
            start, stop, step = key.indices(len(self))
            if step != 1:
                raise InvalidArgument("prime windows do not support a step")
            return self.window(start, stop)
        rank = operator.index(key)
        size = len(self)
        if rank < 0:
            rank += size
        if not 0 <= rank < size:
            raise IndexOutOfRange(operator.index(key), size)
        return self._prime_at(rank)

    def get_if_present(self, rank: int) -> Optional[int]:
        """Prime of `rank`, or None when rank >= len. Negative ranks are an error."""
        if rank < 0:
            raise IndexOutOfRange(rank, len(self))
        if rank >= len(self):
            return None
        return self._prime_at(rank)

    def is_empty(self) -> bool:
        return len(self) == 0

    def index(self, value, start: int = 0, stop: Optional[int] = None) -> int:
        rank = self.rank_of(value)
        start, stop, _ = slice(start, stop).indices(len(self))
        if rank is None or not start <= rank < stop:
            raise ValueError(f"{value!r} is not in {type(self).__name__}")
        return rank

    def count(self, value) -> int:
        return 1 if value in self else 0

    def to_list(self) -> List[int]:
        return list(self)

    # ------------------------- Iteration -------------------------

    def __iter__(self) -> Iterator[int]:
        first = self.first_prime() if len(self) else None
        return PrimeIterator(self, first, self.next_prime)

    def __reversed__(self) -> Iterator[int]:
        last = self.last_prime() if len(self) else None
        return PrimeIterator(self, last, self.previous_prime)

    def cursor(self, index: int = 0) -> "PrimeCursor":
        """Bidirectional cursor positioned just before rank `index`."""
        return PrimeCursor(self, index)

    # ------------------------- Equality / hash / display -------------------------

    def __eq__(self, other):
        if not isinstance(other, (PrimeContainer, list, tuple)):
            return NotImplemented
        if len(self) != len(other):
            return False
        return all(a == b for a, b in zip(self, other))

    def __hash__(self):
        result = 1
        for p in self:
            result = (result * _HASH_MULTIPLIER + hash(p)) & _HASH_MASK
        return result

    def __repr__(self):
        if len(self) <= 3:
            return "[" + ", ".join(str(p) for p in self) + "]"
        first = self.first_prime()
        last = self.last_prime()
        return f"[{first}, {self.next_prime(first)}, ..., {self.previous_prime(last)}, {last}]"

    # ------------------------- Per-element mutation: never -------------------------

    def _refuse(self, *args, **kwargs):
        raise UnsupportedOperation(
            f"{type(self).__name__} does not support per-element mutation")

    __setitem__ = _refuse
    __delitem__ = _refuse
    __iadd__ = _refuse
    append = _refuse
    insert = _refuse
    remove = _refuse
    pop = _refuse
    sort = _refuse
    reverse = _refuse


class PrimeIterator:
    """
    Fail-fast iterator: yields `first`, then repeatedly `advance(previous)`
    until it returns None.
    """

    def __init__(self, container: PrimeContainer, first: Optional[int],
                 advance: Callable[[int], Optional[int]]):
        self._container = container
        self._next = first
        self._advance = advance
        self._expected = container.generation

    def __iter__(self):
        return self

    def __next__(self) -> int:
        self._container._check_generation(self._expected)
        if self._next is None:
            raise StopIteration
        current = self._next
        self._next = self._advance(current)
        return current


class PrimeCursor:
    """
    Bidirectional, fail-fast cursor over a prime container.

    The cursor sits between two elements: next() returns the one after it and
    moves forward, previous() returns the one before it and moves back.
    next_index()/previous_index() report the ranks those calls would return.
    """

    def __init__(self, container: PrimeContainer, index: int = 0):
        size = len(container)
        if not 0 <= index <= size:
            raise IndexOutOfRange(index, size)
        self._container = container
        self._index = index
        self._expected = container.generation
        self._next: Optional[int] = container[index] if index < size else None
        self._previous: Optional[int] = container[index - 1] if index > 0 else None

    def __iter__(self):
        return self

    def __next__(self) -> int:
        return self.next()

    def has_next(self) -> bool:
        return self._next is not None

    def has_previous(self) -> bool:
        return self._previous is not None

    def next(self) -> int:
        self._container._check_generation(self._expected)
        if self._next is None:
            raise StopIteration
        self._previous = self._next
        self._next = self._container.next_prime(self._previous)
        self._index += 1
        return self._previous

    def previous(self) -> int:
        self._container._check_generation(self._expected)
        if self._previous is None:
            raise StopIteration
        self._next = self._previous
        self._previous = self._container.previous_prime(self._next)
        self._index -= 1
        return self._next

    def next_index(self) -> int:
        return self._index

    def previous_index(self) -> int:
        return self._index - 1

    def add(self, value: int):
        raise UnsupportedOperation("cursor cannot insert into a prime container")

    def remove(self):
        raise UnsupportedOperation("cursor cannot remove from a prime container")

    def set(self, value: int):
        raise UnsupportedOperation("cursor cannot replace a prime")
