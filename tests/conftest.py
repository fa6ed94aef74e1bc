"""
Pytest configuration for tests at the root level.

This module contains pytest fixtures shared by the engine tests.
"""

import pytest

from holecard.blackjack.round import Round
from holecard.common.card import Card
from holecard.common.deck import Deck
from holecard.common.shuffle import FixedOrder
from holecard.events import EventBus, EventEmitter


# Reset event bus before each test
@pytest.fixture(scope="function", autouse=True)
def reset_event_bus():
    """Reset the event bus singleton before each test."""
    EventBus._instance = None
    yield
    EventBus._instance = None


@pytest.fixture
def emitter():
    """A private event emitter."""
    return EventEmitter()


@pytest.fixture
def stacked_round(emitter):
    """
    Build a round whose deck deals the given display keys in order.

    Usage: ``stacked_round("clubs_10", "diamonds_10", "spades_ace", "hearts_9")``
    deals the dealer clubs_10, the player diamonds_10, and so on.
    """

    def factory(*keys):
        order = [Card.from_display_key(key) for key in keys]
        return Round(
            rng=FixedOrder(),
            deck_factory=lambda: Deck.stacked(order),
            emitter=emitter,
        )

    return factory
