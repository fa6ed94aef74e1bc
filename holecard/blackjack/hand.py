"""
BlackjackHand: a hand scored under the soft-ace rule.
"""

from typing import Any, Dict

from holecard.blackjack.constants import ACE_DEMOTION, BLACKJACK
from holecard.common.card import Card, Rank
from holecard.common.hand import Hand


class BlackjackHand(Hand):
    """A hand in the game of Blackjack with cached scoring."""

    __slots__ = ("_cards", "_cache")

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._cache: Dict[str, Any] = {"score": None, "soft_aces": None}

    def _invalidate_cache(self) -> None:
        self._cache["score"] = None
        self._cache["soft_aces"] = None

    def add_card(self, card: Card) -> None:
        """Add a card and drop the cached score."""
        super().add_card(card)
        self._invalidate_cache()

    def clear(self) -> None:
        super().clear()
        self._invalidate_cache()

    def _evaluate(self) -> None:
        # Every ace starts at 11; demote one at a time while the hand is over 21
        total = 0
        soft_aces = 0
        for card in self._cards:
            total += card.base_value
            if card.rank is Rank.ACE:
                soft_aces += 1

        while total > BLACKJACK and soft_aces > 0:
            total -= ACE_DEMOTION
            soft_aces -= 1

        self._cache["score"] = total
        self._cache["soft_aces"] = soft_aces

    def score(self) -> int:
        """
        Calculate the score of the hand.

        Aces count 11 unless that busts the hand, in which case they are demoted
        to 1 one by one until the total is 21 or less or no ace is left to demote.
        """
        if self._cache["score"] is None:
            self._evaluate()
        return self._cache["score"]

    @property
    def is_bust(self) -> bool:
        """True when the score exceeds 21."""
        return self.score() > BLACKJACK

    @property
    def is_soft(self) -> bool:
        """Determine if the hand is soft (contains an ace counted as 11)."""
        if self._cache["soft_aces"] is None:
            self._evaluate()
        return self._cache["soft_aces"] > 0

    @property
    def is_blackjack(self) -> bool:
        """21 on exactly two cards. Informational only; it ends nothing early."""
        return len(self._cards) == 2 and self.score() == BLACKJACK

    @property
    def first_card_value(self) -> int:
        """Base value of the first card dealt, or 0 for an empty hand."""
        if not self._cards:
            return 0
        return self._cards[0].base_value
