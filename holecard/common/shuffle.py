"""
Randomness used for shuffling.

Shuffling takes its randomness from an injectable source so that tests and
replays can fix the deck order. Anything with a ``randint(a, b)`` method will
do: a seeded :class:`random.Random`, :class:`random.SystemRandom`, or a stub.
"""

import random
from typing import MutableSequence, Optional, Protocol, TypeVar

T = TypeVar("T")


class RandomSource(Protocol):
    """The randomness capability a shuffle needs."""

    def randint(self, a: int, b: int) -> int:
        """Return an integer N such that a <= N <= b."""
        ...


def make_rng(seed: Optional[int] = None) -> RandomSource:
    """
    Create a random source.

    :param seed: Seed for a reproducible :class:`random.Random`. When None, an
                 OS-backed :class:`random.SystemRandom` is returned.
    """
    if seed is None:
        return random.SystemRandom()
    return random.Random(seed)


def fisher_yates(items: MutableSequence[T], rng: RandomSource) -> MutableSequence[T]:
    """
    Shuffle ``items`` in place with the Fisher-Yates (Knuth) algorithm.

    Walks from the last index down to 1, swapping each position with one drawn
    uniformly from ``[0, i]``. Given an unbiased source every permutation is
    equally likely.

    >>> fisher_yates([1, 2, 3], FixedOrder())
    [1, 2, 3]
    """
    for i in range(len(items) - 1, 0, -1):
        j = rng.randint(0, i)
        if not 0 <= j <= i:
            raise ValueError(f"Random source returned {j}, outside [0, {i}]")
        items[i], items[j] = items[j], items[i]
    return items


class FixedOrder:
    """
    A random source under which Fisher-Yates swaps every card with itself.

    Used to play a stacked deck in its given order.
    """

    def randint(self, a: int, b: int) -> int:
        return b
