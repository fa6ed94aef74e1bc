"""
Tests for the event system.

Most cases subscribe to a real round so the emitter is exercised with the
events and payloads the table actually publishes.
"""

import logging
import threading
from unittest.mock import MagicMock

from holecard.events import EventEmitter, EventBus, EngineEventType, EventPriority

OPENING = ("clubs_10", "diamonds_10", "spades_ace", "hearts_9")


def test_enum_and_name_address_the_same_listeners(stacked_round, emitter):
    by_enum = MagicMock()
    by_name = MagicMock()
    emitter.on(EngineEventType.CARD_DEALT, by_enum)
    emitter.on("CARD_DEALT", by_name)

    stacked_round(*OPENING).start()

    assert by_enum.call_count == by_name.call_count == 4
    assert emitter.listener_count(EngineEventType.CARD_DEALT) == 2
    assert emitter.listener_count("CARD_DEALT") == 2


def test_priority_orders_handlers_within_an_event(stacked_round, emitter):
    calls = []
    emitter.on(
        EngineEventType.CARD_DEALT,
        lambda data: calls.append(("low", data["index"])),
        EventPriority.LOW,
    )
    emitter.on(
        EngineEventType.CARD_DEALT,
        lambda data: calls.append(("critical", data["index"])),
        EventPriority.CRITICAL,
    )
    emitter.on(EngineEventType.CARD_DEALT, lambda data: calls.append(("normal", data["index"])))

    stacked_round(*OPENING).start()

    # Every card reaches all three handlers, highest priority first
    assert calls[:3] == [("critical", 0), ("normal", 0), ("low", 0)]
    assert [who for who, _ in calls] == ["critical", "normal", "low"] * 4


def test_equal_priority_keeps_subscription_order(stacked_round, emitter):
    calls = []
    emitter.on(EngineEventType.CARD_REVEALED, lambda data: calls.append("renderer"))
    emitter.on(EngineEventType.CARD_REVEALED, lambda data: calls.append("sound"))
    emitter.on(
        EngineEventType.CARD_REVEALED,
        lambda data: calls.append("animation"),
        EventPriority.HIGH,
    )

    game = stacked_round(*OPENING)
    game.start()
    game.player_stand()

    assert calls == ["animation", "renderer", "sound"]


def test_on_any_runs_after_specific_handlers(stacked_round, emitter):
    calls = []
    emitter.on_any(lambda event: calls.append(("any", event[0])), EventPriority.CRITICAL)
    emitter.on(EngineEventType.ROUND_STARTED, lambda data: calls.append(("round", data["round"])))

    stacked_round(*OPENING).start()

    assert calls[:2] == [("round", 1), ("any", "ROUND_STARTED")]


def test_once_sees_only_the_first_card(stacked_round, emitter):
    first_card = MagicMock()
    emitter.once(EngineEventType.CARD_DEALT, first_card)

    stacked_round(*OPENING).start()

    first_card.assert_called_once()
    assert first_card.call_args[0][0]["card"] == "clubs_10"
    assert emitter.listener_count(EngineEventType.CARD_DEALT) == 0


def test_once_is_removed_even_when_it_raises(emitter, caplog):
    def explode(data):
        raise RuntimeError("boom")

    emitter.once(EngineEventType.SHUFFLE, explode)
    with caplog.at_level(logging.ERROR, logger="holecard.events"):
        emitter.emit(EngineEventType.SHUFFLE, {"cards": 52})

    assert emitter.listener_count(EngineEventType.SHUFFLE) == 0
    assert "boom" in caplog.text


def test_unsubscribe_removes_one_of_two_identical_subscriptions(emitter):
    callback = MagicMock()
    first = emitter.on(EngineEventType.HAND_BUSTED, callback)
    emitter.on(EngineEventType.HAND_BUSTED, callback)

    first()
    first()
    emitter.emit(EngineEventType.HAND_BUSTED, {"hand": "player", "score": 24})

    assert callback.call_count == 1
    assert emitter.listener_count(EngineEventType.HAND_BUSTED) == 1


def test_unsubscribed_handler_misses_later_rounds(stacked_round, emitter):
    starts = []
    unsubscribe = emitter.on(EngineEventType.ROUND_STARTED, lambda data: starts.append(data["round"]))
    game = stacked_round(*OPENING)

    game.start()
    game.player_stand()
    unsubscribe()
    game.start()

    assert starts == [1]


def test_remove_all_listeners(emitter):
    dealt = MagicMock()
    ended = MagicMock()
    anything = MagicMock()
    emitter.on(EngineEventType.CARD_DEALT, dealt)
    emitter.on(EngineEventType.ROUND_ENDED, ended)
    emitter.on_any(anything)

    emitter.remove_all_listeners(EngineEventType.CARD_DEALT)
    emitter.emit(EngineEventType.CARD_DEALT, {})
    emitter.emit(EngineEventType.ROUND_ENDED, {})
    dealt.assert_not_called()
    ended.assert_called_once()

    emitter.remove_all_listeners()
    emitter.emit(EngineEventType.ROUND_ENDED, {})
    assert ended.call_count == 1
    assert anything.call_count == 2
    assert emitter.listener_count() == 0


def test_failing_handler_does_not_break_the_round(stacked_round, emitter, caplog):
    """A broken renderer is logged and later handlers and the round carry on."""

    def broken_renderer(data):
        raise ValueError("texture missing")

    after = MagicMock()
    emitter.on(EngineEventType.CARD_DEALT, broken_renderer, EventPriority.HIGH)
    emitter.on(EngineEventType.CARD_DEALT, after)
    game = stacked_round(*OPENING)

    with caplog.at_level(logging.ERROR, logger="holecard.events"):
        game.start()

    assert after.call_count == 4
    assert game.player_score == 19
    assert "CARD_DEALT" in caplog.text
    assert "texture missing" in caplog.text


def test_event_bus_singleton():
    bus1 = EventBus.get_instance()
    bus2 = EventBus.get_instance()

    assert bus1 is bus2
    assert isinstance(bus1, EventEmitter)


def test_concurrent_emits_reach_every_handler(emitter):
    count = {"value": 0}
    lock = threading.Lock()

    def increment_counter(data):
        with lock:
            count["value"] += 1

    emitter.on(EngineEventType.UI_UPDATE_NEEDED, increment_counter)

    threads = [
        threading.Thread(
            target=lambda: emitter.emit(EngineEventType.UI_UPDATE_NEEDED, {"phase": "IDLE"})
        )
        for _ in range(10)
    ]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert count["value"] == 10
