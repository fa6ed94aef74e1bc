"""
Statistical checks of shuffle quality.

Shuffles a canonical deck many times, counts which card lands in each position
and runs a chi-square goodness-of-fit test per position against the uniform
distribution. A fair Fisher-Yates shuffle puts every card in every position
with probability 1/52.
"""

from dataclasses import dataclass
from typing import Callable, Dict, Optional

import numpy as np
import scipy.stats as stats

from holecard.common.card import Card
from holecard.common.deck import Deck
from holecard.common.shuffle import RandomSource, make_rng


def card_indices(deck_factory: Callable[[], Deck] = Deck) -> Dict[Card, int]:
    """Map each card of a fresh deck to its pre-shuffle position."""
    return {card: i for i, card in enumerate(deck_factory().cards)}


def position_frequencies(
    trials: int,
    rng: Optional[RandomSource] = None,
    deck_factory: Callable[[], Deck] = Deck,
) -> np.ndarray:
    """
    Count card placements over repeated shuffles.

    Args:
        trials: Number of shuffles
        rng: Random source shared by all shuffles
        deck_factory: Builds the deck to shuffle

    Returns:
        A ``(positions, cards)`` integer matrix where entry ``[p, c]`` is how
        often the card originally at index ``c`` ended up at position ``p``.
    """
    if trials <= 0:
        raise ValueError("trials must be positive")

    rng = rng if rng is not None else make_rng()
    index_of = card_indices(deck_factory)
    size = len(index_of)
    counts = np.zeros((size, size), dtype=np.int64)
    positions = np.arange(size)

    for _ in range(trials):
        deck = deck_factory().shuffle(rng)
        order = np.fromiter((index_of[card] for card in deck.cards), dtype=np.int64)
        counts[positions, order] += 1

    return counts


@dataclass
class UniformityReport:
    """
    Per-position chi-square results.

    Attributes:
        trials: Number of shuffles measured
        chi_square: Chi-square statistic for each position
        p_values: p-value for each position
    """

    trials: int
    chi_square: np.ndarray
    p_values: np.ndarray

    @property
    def min_p_value(self) -> float:
        return float(self.p_values.min())

    def is_uniform(self, alpha: float = 0.01) -> bool:
        """
        True unless some position rejects uniformity at ``alpha``, with a
        Bonferroni correction over the positions tested.
        """
        return self.min_p_value >= alpha / len(self.p_values)

    def to_dict(self):
        return {
            "trials": self.trials,
            "min_p_value": self.min_p_value,
            "max_chi_square": float(self.chi_square.max()),
        }


def shuffle_uniformity(
    trials: int,
    rng: Optional[RandomSource] = None,
    deck_factory: Callable[[], Deck] = Deck,
) -> UniformityReport:
    """
    Test every deck position for a uniform card distribution.

    Args:
        trials: Number of shuffles; at least five per card keeps the test valid
        rng: Random source shared by all shuffles
        deck_factory: Builds the deck to shuffle
    """
    counts = position_frequencies(trials, rng, deck_factory)
    # Expected frequencies default to uniform along the card axis
    chi_square, p_values = stats.chisquare(counts, axis=1)
    return UniformityReport(
        trials=trials,
        chi_square=np.asarray(chi_square),
        p_values=np.asarray(p_values),
    )
