"""
Enums for the playground launcher core
"""

from enum import Enum, auto


class PlaybackState(Enum):
    """
    Overlay playback lifecycle

    IDLE: nothing to play, or never started
    RUNNING: cycling through frames
    STOPPED: explicitly halted, restart begins at frame 0
    """
    IDLE = auto()
    RUNNING = auto()
    STOPPED = auto()


class OverlaySlot(Enum):
    """Image slots of the playground window"""
    TOP = auto()
    BOTTOM = auto()
    LEFT = auto()
    RIGHT = auto()
    BACKGROUND = auto()


class LogLevel(Enum):
    """Log severity levels"""
    DEBUG = auto()
    INFO = auto()
    WARN = auto()
    ERROR = auto()


class LogCategory(Enum):
    """Log categories for grouping related events"""
    CONFIG = auto()      # Editor settings, settings.txt resolution
    PLAYGROUND = auto()  # Scanning, selection
    ANIMATION = auto()   # animation.txt parsing, playback
    SYSTEM = auto()      # Startup, shutdown, errors
    EVENT = auto()       # Event bus
    TASK = auto()        # Asyncio task registry
