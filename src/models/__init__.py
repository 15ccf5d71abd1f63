"""
Models package - Data models for the playground launcher
"""

from .enums import PlaybackState, OverlaySlot, LogLevel, LogCategory

__all__ = [
    'PlaybackState',
    'OverlaySlot',
    'LogLevel',
    'LogCategory',
]
