"""
This module contains the Deck class, which represents a single 52-card deck.

>>> deck = Deck()
>>> deck.size
52
>>> deck.draw()
Card(Suit.SPADES, Rank.KING)
>>> deck.size
51
"""

from typing import Iterable, Iterator, List, Optional

from holecard.common.card import Card, Rank, Suit
from holecard.common.shuffle import RandomSource, fisher_yates, make_rng

SUIT_ORDER = [Suit.HEARTS, Suit.DIAMONDS, Suit.CLUBS, Suit.SPADES]
RANK_ORDER = [
    Rank.ACE,
    Rank.TWO,
    Rank.THREE,
    Rank.FOUR,
    Rank.FIVE,
    Rank.SIX,
    Rank.SEVEN,
    Rank.EIGHT,
    Rank.NINE,
    Rank.TEN,
    Rank.JACK,
    Rank.QUEEN,
    Rank.KING,
]


class DeckExhaustedError(IndexError):
    """Raised when a card is drawn from an empty deck."""

    pass


class Deck:
    """
    A class representing a deck of cards.

    The end of the card list is the top of the deck: :meth:`draw` removes the
    last card.
    """

    # Precompute the canonical order, suit-major and rank-minor
    _default_deck = [Card(suit, rank) for suit in SUIT_ORDER for rank in RANK_ORDER]

    def __init__(self, cards: Optional[Iterable[Card]] = None):
        """
        Initialize a Deck instance.

        :param cards: Cards to populate the deck with, bottom first (optional).
                      If not provided, the 52 cards in canonical order.
        """
        if cards is None:
            self.cards: List[Card] = []
            self.initialize()
        else:
            self.cards = list(cards)

    @classmethod
    def canonical_order(cls) -> List[Card]:
        """Return the 52 cards in their pre-shuffle order."""
        return cls._default_deck.copy()

    @classmethod
    def stacked(cls, draw_order: Iterable[Card]) -> "Deck":
        """
        Build a deck whose successive draws return ``draw_order`` in order.

        >>> deck = Deck.stacked([Card(Suit.CLUBS, Rank.TEN), Card(Suit.SPADES, Rank.ACE)])
        >>> deck.draw()
        Card(Suit.CLUBS, Rank.TEN)
        """
        return cls(reversed(list(draw_order)))

    def initialize(self) -> "Deck":
        """Populate the deck with the 52 canonical cards, discarding any others."""
        self.cards = self.canonical_order()
        return self

    def shuffle(self, rng: Optional[RandomSource] = None) -> "Deck":
        """
        Shuffle the cards in place with Fisher-Yates.

        :param rng: Source of randomness; an OS-backed generator when omitted.
        """
        fisher_yates(self.cards, rng if rng is not None else make_rng())
        return self

    def draw(self) -> Card:
        """
        Remove and return the top card.

        :raises DeckExhaustedError: If the deck is empty.
        """
        if not self.cards:
            raise DeckExhaustedError("Cannot draw from an empty deck")
        return self.cards.pop()

    @property
    def size(self) -> int:
        """Return the number of remaining cards in the deck."""
        return len(self.cards)

    def is_empty(self) -> bool:
        """Check if the deck is empty."""
        return len(self.cards) == 0

    def reset(self) -> "Deck":
        """Restore all 52 cards in canonical order."""
        return self.initialize()

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def __repr__(self) -> str:
        return f"Deck({[repr(card) for card in self.cards]})"

    def __str__(self) -> str:
        return f"Deck of {len(self.cards)} cards"
