"""
Tests for the events a round publishes.
"""

import random

from holecard.blackjack.round import Round
from holecard.events import EventBus


def record(emitter):
    events = []
    emitter.on_any(events.append)
    return events


def names(events):
    return [event_type for event_type, _ in events]


def test_start_publishes_deal_in_order(stacked_round, emitter):
    events = record(emitter)
    game = stacked_round("clubs_10", "diamonds_10", "spades_ace", "hearts_9")
    game.start()

    assert names(events) == [
        "ROUND_STARTED",
        "SHUFFLE",
        "CARD_DEALT",
        "CARD_DEALT",
        "CARD_DEALT",
        "CARD_DEALT",
    ]
    dealt = [data for event_type, data in events if event_type == "CARD_DEALT"]
    assert [d["recipient"] for d in dealt] == ["dealer", "player", "dealer", "player"]
    assert dealt[0]["card"] == "clubs_10"
    # The hole card is announced face down without its identity
    assert dealt[2]["face_up"] is False
    assert dealt[2]["card"] is None
    assert dealt[2]["score"] == 10
    assert dealt[3]["score"] == 19


def test_stand_reveals_hole_card_and_ends_round(stacked_round, emitter):
    game = stacked_round("clubs_10", "diamonds_10", "spades_ace", "hearts_9")
    game.start()
    events = record(emitter)
    game.player_stand()

    assert names(events) == [
        "PLAYER_ACTION",
        "CARD_REVEALED",
        "DEALER_ACTION",
        "ROUND_ENDED",
    ]
    revealed = events[1][1]
    assert revealed["card"] == "spades_ace"
    assert revealed["score"] == 21
    ended = events[-1][1]
    assert ended["outcome"] == "dealer_wins"
    assert ended["round"] == 1


def test_player_bust_publishes_hand_busted(stacked_round, emitter):
    game = stacked_round(
        "clubs_10", "diamonds_10", "spades_2", "hearts_9", "clubs_5"
    )
    game.start()
    events = record(emitter)
    game.player_hit()

    assert names(events) == ["PLAYER_ACTION", "CARD_DEALT", "HAND_BUSTED", "ROUND_ENDED"]
    assert events[2][1] == {"hand": "player", "score": 24}


def test_dealer_bust_publishes_hand_busted(stacked_round, emitter):
    game = stacked_round("clubs_10", "diamonds_10", "spades_6", "hearts_2", "clubs_king")
    game.start()
    events = record(emitter)
    game.player_stand()

    assert "HAND_BUSTED" in names(events)
    busted = dict(events)["HAND_BUSTED"]
    assert busted == {"hand": "dealer", "score": 26}


def test_round_defaults_to_global_bus():
    events = record(EventBus.get_instance())
    Round(rng=random.Random(1)).start()
    assert names(events)[0] == "ROUND_STARTED"
