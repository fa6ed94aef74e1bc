"""
Event system for the holecard engine.

This package provides the event emitter through which the round notifies
presentation layers of what happens at the table.
"""

from holecard.events.emitter import (
    EventEmitter,
    EventBus,
    EventPriority,
    EngineEventType,
)

__all__ = ["EventEmitter", "EventBus", "EventPriority", "EngineEventType"]
