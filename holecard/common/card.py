"""
This module defines the `Suit`, `Rank`, and `Card` classes, which are used to represent playing cards.

- `Suit`: An enum representing the four suits of a standard deck of playing
cards: Hearts, Diamonds, Clubs, and Spades.

- `Rank`: An enum representing the thirteen ranks of a standard deck of playing
cards: Ace, Two through Ten, Jack, Queen and King. Each rank carries its
blackjack base value.

- `Card`: An immutable playing card. A card has a suit and a rank, and exposes
the display key the rendering layer uses to pick a face texture.

This module is part of the `holecard` package, a blackjack table engine.
"""

from dataclasses import dataclass
from enum import Enum, unique


@unique
class Suit(Enum):
    """
    Enum for suits in a card deck.
    """

    HEARTS = "hearts"
    DIAMONDS = "diamonds"
    CLUBS = "clubs"
    SPADES = "spades"

    @property
    def symbol(self) -> str:
        """The suit symbol used for text display."""
        return _SUIT_SYMBOLS[self]

    def __str__(self) -> str:
        return self.symbol


_SUIT_SYMBOLS = {
    Suit.HEARTS: "♥",
    Suit.DIAMONDS: "♦",
    Suit.CLUBS: "♣",
    Suit.SPADES: "♠",
}


@unique
class Rank(Enum):
    """
    Enum for ranks in a card deck.

    The value of each member is its label, so every rank stays a distinct
    member even where blackjack values coincide (ten and the face cards).
    """

    ACE = "ace"
    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "10"
    JACK = "jack"
    QUEEN = "queen"
    KING = "king"

    @property
    def base_value(self) -> int:
        """The value of the rank before any ace demotion: ace 11, faces 10."""
        if self is Rank.ACE:
            return 11
        if self in (Rank.JACK, Rank.QUEEN, Rank.KING):
            return 10
        return int(self.value)

    @property
    def short(self) -> str:
        """A short string representation of the rank."""
        if self in (Rank.ACE, Rank.JACK, Rank.QUEEN, Rank.KING):
            return self.name[0]
        return self.value

    def __str__(self) -> str:
        return self.short


@dataclass(frozen=True)
class Card:
    """
    Class representing a playing card. Cards are values: two cards with the
    same suit and rank are equal and hash alike.

    >>> card = Card(Suit.HEARTS, Rank.TWO)
    >>> print(card)
    2 of ♥
    >>> card.display_key
    'hearts_2'
    """

    suit: Suit
    rank: Rank

    def __post_init__(self):
        if not isinstance(self.suit, Suit):
            raise TypeError(f"Invalid suit: {self.suit!r}")
        if not isinstance(self.rank, Rank):
            raise TypeError(f"Invalid rank: {self.rank!r}")

    @property
    def base_value(self) -> int:
        """Blackjack value of the card with an ace counted as 11."""
        return self.rank.base_value

    @property
    def display_key(self) -> str:
        """Key of the form ``"{suit}_{rank}"`` used to select a face texture."""
        return f"{self.suit.value}_{self.rank.value}"

    @classmethod
    def from_display_key(cls, key: str) -> "Card":
        """
        Build a card from its display key.

        :param key: A key such as ``"spades_ace"`` or ``"hearts_10"``.
        :raises ValueError: If the key does not name one of the 52 cards.
        """
        suit_part, _, rank_part = key.partition("_")
        try:
            return cls(Suit(suit_part), Rank(rank_part))
        except ValueError as exc:
            raise ValueError(f"Unknown card key: {key!r}") from exc

    def __repr__(self) -> str:
        return f"Card(Suit.{self.suit.name}, Rank.{self.rank.name})"

    def __str__(self) -> str:
        return f"{self.rank.short} of {self.suit.symbol}"
