"""
Middleware for EventBus

Middleware = pipeline functions that process events before handlers.
Can modify events, block events, or log/validate events.
"""

from models.events import Event, EventType
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.EVENT)


def log_middleware(event: Event) -> Event:
    """
    Log all events for debugging

    Overlay ticks are logged at DEBUG to keep the console readable.

    Usage:
        event_bus.add_middleware(log_middleware)
    """
    source_str = event.source.name if event.source else "-"
    message = f"Event: {event.type.name} from {source_str}"

    if event.type == EventType.OVERLAY_FRAME_CHANGED:
        log.debug(message, index=event.to_data().get("index"))
    else:
        log.info(message)
    return event
