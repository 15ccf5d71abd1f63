from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from models.domain.config import EffectiveConfig
from models.domain.overlay import OverlayImages
from models.domain.playground import PlaygroundDescriptor
from models.events.base import Event
from models.events.sources import EventSource
from models.events.types import EventType


@dataclass(init=False)
class PlaygroundsChangedEvent(Event):
    added: List[str]
    removed: List[str]

    def __init__(self, added: List[str], removed: List[str]):
        super().__init__(
            type=EventType.PLAYGROUNDS_CHANGED,
            source=EventSource.CATALOG,
        )
        self.added = added
        self.removed = removed


@dataclass(init=False)
class PlaygroundSelectedEvent(Event):
    playground: PlaygroundDescriptor
    config: EffectiveConfig
    frame_count: int

    def __init__(self, playground: PlaygroundDescriptor, config: EffectiveConfig, frame_count: int):
        super().__init__(
            type=EventType.PLAYGROUND_SELECTED,
            source=EventSource.PLAYGROUND_SERVICE,
        )
        self.playground = playground
        self.config = config
        self.frame_count = frame_count


@dataclass(init=False)
class PlaygroundLoadFailedEvent(Event):
    """Main image missing - the UI clears the preview and shows the error"""
    playground: PlaygroundDescriptor
    message: str
    missing_path: Optional[Path]

    def __init__(self, playground: PlaygroundDescriptor, message: str, missing_path: Optional[Path]):
        super().__init__(
            type=EventType.PLAYGROUND_LOAD_FAILED,
            source=EventSource.PLAYGROUND_SERVICE,
        )
        self.playground = playground
        self.message = message
        self.missing_path = missing_path


@dataclass(init=False)
class AnimationScriptRejectedEvent(Event):
    playground: PlaygroundDescriptor
    message: str
    line_number: int

    def __init__(self, playground: PlaygroundDescriptor, message: str, line_number: int):
        super().__init__(
            type=EventType.ANIMATION_SCRIPT_REJECTED,
            source=EventSource.PLAYGROUND_SERVICE,
        )
        self.playground = playground
        self.message = message
        self.line_number = line_number


@dataclass(init=False)
class OverlayFrameChangedEvent(Event):
    playground: str
    index: int
    images: OverlayImages

    def __init__(self, playground: str, index: int, images: OverlayImages):
        super().__init__(
            type=EventType.OVERLAY_FRAME_CHANGED,
            source=EventSource.PLAYBACK,
        )
        self.playground = playground
        self.index = index
        self.images = images
