from enum import Enum, auto


class EventType(Enum):
    # Catalog
    PLAYGROUNDS_CHANGED = auto()

    # Selection
    PLAYGROUND_SELECTED = auto()
    PLAYGROUND_LOAD_FAILED = auto()
    ANIMATION_SCRIPT_REJECTED = auto()

    # Playback
    OVERLAY_FRAME_CHANGED = auto()
