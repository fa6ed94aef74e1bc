"""
Event system for the holecard engine.

The round publishes what happens at the table (cards dealt, the hole card
revealed, busts, results) through an :class:`EventEmitter`. Presentation layers
subscribe to these events instead of polling the round after every call.

Events are addressed by name; an :class:`EngineEventType` member and its name
are interchangeable everywhere the emitter takes an event type.
"""

from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Union
import threading
import logging
from enum import Enum

logger = logging.getLogger("holecard.events")

EventType = Union[str, Enum]


class EventPriority(Enum):
    """Priority levels for event handlers; higher runs first."""

    LOW = 0
    NORMAL = 1
    HIGH = 2
    CRITICAL = 3


@dataclass(frozen=True, eq=False)
class _Subscription:
    # eq=False keeps identity comparison so a callback subscribed twice
    # is removed one subscription at a time
    callback: Callable
    priority: int


def _event_name(event_type: EventType) -> str:
    return event_type.name if isinstance(event_type, Enum) else event_type


class EventEmitter:
    """
    Synchronous, priority-ordered event emitter.

    Handlers for one event type run from highest to lowest priority, in
    subscription order within a priority, followed by the ``on_any``
    handlers. Registration is thread-safe; handlers are called outside the
    lock. A handler that raises is logged and the remaining handlers still run.
    """

    def __init__(self):
        self._listeners: Dict[str, List[_Subscription]] = defaultdict(list)
        self._global_listeners: List[_Subscription] = []
        self._listener_lock = threading.RLock()

    def _subscribe(
        self, handlers: List[_Subscription], callback: Callable, priority: EventPriority
    ) -> Callable[[], None]:
        subscription = _Subscription(callback, priority.value)
        with self._listener_lock:
            position = next(
                (i for i, s in enumerate(handlers) if s.priority < subscription.priority),
                len(handlers),
            )
            handlers.insert(position, subscription)

        def unsubscribe():
            with self._listener_lock:
                if subscription in handlers:
                    handlers.remove(subscription)

        return unsubscribe

    def on(
        self,
        event_type: EventType,
        callback: Callable,
        priority: EventPriority = EventPriority.NORMAL,
    ) -> Callable:
        """
        Subscribe to an event type.

        Args:
            event_type: The event type to subscribe to (name or enum)
            callback: Called as ``callback(event_data)``
            priority: Priority level for this handler

        Returns:
            Function that removes this subscription
        """
        with self._listener_lock:
            handlers = self._listeners[_event_name(event_type)]
        return self._subscribe(handlers, callback, priority)

    def once(
        self,
        event_type: EventType,
        callback: Callable,
        priority: EventPriority = EventPriority.NORMAL,
    ) -> Callable:
        """Subscribe to the next occurrence of an event type only."""
        unsubscribe = None

        def one_time_handler(event_data):
            # Unsubscribe first so a raising callback is still removed
            unsubscribe()
            callback(event_data)

        unsubscribe = self.on(event_type, one_time_handler, priority)
        return unsubscribe

    def on_any(
        self, callback: Callable, priority: EventPriority = EventPriority.NORMAL
    ) -> Callable:
        """
        Subscribe to every event.

        The callback receives one ``(event_name, event_data)`` tuple.
        """
        return self._subscribe(self._global_listeners, callback, priority)

    def emit(self, event_type: EventType, data: Dict[str, Any]) -> None:
        """Deliver ``data`` to the handlers of ``event_type``, then to ``on_any`` handlers."""
        name = _event_name(event_type)

        with self._listener_lock:
            calls = [(s.callback, data) for s in self._listeners.get(name, [])]
            calls += [(s.callback, (name, data)) for s in self._global_listeners]

        for callback, payload in calls:
            try:
                callback(payload)
            except Exception:
                logger.error("Error in event handler for %s", name, exc_info=True)

    def listener_count(self, event_type: Optional[EventType] = None) -> int:
        """Number of listeners for one event type, or of ``on_any`` listeners when None."""
        with self._listener_lock:
            if event_type is None:
                return len(self._global_listeners)
            return len(self._listeners.get(_event_name(event_type), []))

    def remove_all_listeners(self, event_type: Optional[EventType] = None) -> None:
        """Remove the listeners of one event type, or every listener when None."""
        with self._listener_lock:
            if event_type is None:
                self._listeners.clear()
                self._global_listeners.clear()
            else:
                self._listeners.pop(_event_name(event_type), None)


class EventBus:
    """
    Process-wide emitter shared by rounds and engines that are not given one.
    """

    _instance = None
    _lock = threading.Lock()

    @classmethod
    def get_instance(cls) -> EventEmitter:
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = EventEmitter()
        return cls._instance


class EngineEventType(Enum):
    """
    Event types published by the round and the table engine.
    """

    # Engine lifecycle
    ENGINE_INIT = "engine_init"
    ENGINE_SHUTDOWN = "engine_shutdown"

    # Round lifecycle
    ROUND_STARTED = "round_started"
    ROUND_ENDED = "round_ended"
    SHUFFLE = "shuffle"

    # Cards
    CARD_DEALT = "card_dealt"
    CARD_REVEALED = "card_revealed"

    # Actions
    PLAYER_ACTION = "player_action"
    DEALER_ACTION = "dealer_action"
    HAND_BUSTED = "hand_busted"

    # Presentation
    UI_UPDATE_NEEDED = "ui_update_needed"
