"""
Read-only snapshots of a round for presentation layers.

A :class:`TableView` is everything a renderer needs to draw the table: the
cards in each hand (with the dealer's hole card marked face-down until it is
revealed), the scores a player is allowed to see, the phase and the result.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, TYPE_CHECKING

from holecard.common.card import Card

if TYPE_CHECKING:
    from holecard.blackjack.round import Phase, RoundResult


@dataclass(frozen=True)
class CardView:
    """
    One card as shown on the table.

    Attributes:
        card: The card itself
        face_up: Whether the renderer may show the card's face
    """

    card: Card
    face_up: bool = True

    @property
    def display_key(self) -> str:
        return self.card.display_key

    def to_dict(self) -> Dict[str, Any]:
        if not self.face_up:
            return {"face_up": False}
        return {
            "face_up": True,
            "suit": self.card.suit.value,
            "rank": self.card.rank.value,
            "display_key": self.card.display_key,
        }

    def __str__(self) -> str:
        return str(self.card) if self.face_up else "??"


@dataclass(frozen=True)
class TableView:
    """
    Immutable snapshot of a round.

    Attributes:
        phase: Phase of the round when the snapshot was taken
        player_cards: Player cards in the order dealt
        dealer_cards: Dealer cards in the order dealt, hole card face-down until revealed
        player_score: Full player score
        dealer_score: Dealer score the player may see
        dealer_hole_card_revealed: Whether the hole card has been turned over
        result: The round result once resolved
    """

    phase: "Phase"
    player_cards: Tuple[CardView, ...] = field(default_factory=tuple)
    dealer_cards: Tuple[CardView, ...] = field(default_factory=tuple)
    player_score: int = 0
    dealer_score: int = 0
    dealer_hole_card_revealed: bool = False
    result: Optional["RoundResult"] = None

    @property
    def player_keys(self) -> List[Tuple[str, str]]:
        """(suit, rank) pairs of the player cards."""
        return [(c.card.suit.value, c.card.rank.value) for c in self.player_cards]

    @property
    def dealer_keys(self) -> List[Tuple[str, str, bool]]:
        """(suit, rank, face_up) triples of the dealer cards."""
        return [
            (c.card.suit.value, c.card.rank.value, c.face_up) for c in self.dealer_cards
        ]

    def to_dict(self) -> Dict[str, Any]:
        """Plain-data form for adapters that serialize the table."""
        return {
            "phase": self.phase.name,
            "player": {
                "cards": [c.to_dict() for c in self.player_cards],
                "score": self.player_score,
            },
            "dealer": {
                "cards": [c.to_dict() for c in self.dealer_cards],
                "score": self.dealer_score,
                "hole_card_revealed": self.dealer_hole_card_revealed,
            },
            "result": self.result.to_dict() if self.result else None,
        }
