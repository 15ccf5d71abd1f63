from enum import Enum, auto


class EventSource(Enum):
    """Event source identifiers for application events"""
    CATALOG = auto()             # Playground directory scans
    PLAYGROUND_SERVICE = auto()  # Selection workflow
    PLAYBACK = auto()            # Overlay animation ticks
