"""Defines the Action enum for the possible actions a player can take in a round of blackjack."""
from enum import Enum


class Action(Enum):
    """Enum for the possible actions a player can take in a round of blackjack."""

    HIT = "hit"
    STAND = "stand"

    @classmethod
    def parse(cls, text: str) -> "Action":
        """
        Parse a typed command such as ``"hit"``, ``"H"`` or ``"stand"``.

        :raises ValueError: If the text names no action.
        """
        cleaned = text.strip().lower()
        for action in cls:
            if cleaned in (action.value, action.value[0]):
                return action
        raise ValueError(f"Unknown action: {text!r}")
