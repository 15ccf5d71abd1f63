"""
Event system for the playground launcher

Backend services publish these; the UI layer subscribes through the EventBus.
"""

from models.events.types import EventType
from models.events.base import Event
from models.events.sources import EventSource

from models.events.playground_events import (
    PlaygroundsChangedEvent,
    PlaygroundSelectedEvent,
    PlaygroundLoadFailedEvent,
    AnimationScriptRejectedEvent,
    OverlayFrameChangedEvent,
)

__all__ = [
    "EventType",
    "Event",
    "EventSource",
    "PlaygroundsChangedEvent",
    "PlaygroundSelectedEvent",
    "PlaygroundLoadFailedEvent",
    "AnimationScriptRejectedEvent",
    "OverlayFrameChangedEvent",
]
