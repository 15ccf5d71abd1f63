"""Overlay animation domain models"""

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

from models.enums import OverlaySlot


def _slot_paths(images) -> Dict[OverlaySlot, Optional[Path]]:
    return {slot: getattr(images, slot.name.lower()) for slot in OverlaySlot}


@dataclass(frozen=True)
class OverlayFrame:
    """One timed step of an overlay animation (immutable, parsed from animation.txt)"""
    duration: float  # seconds, >= 0
    top: Optional[Path] = None
    bottom: Optional[Path] = None
    left: Optional[Path] = None
    right: Optional[Path] = None
    background: Optional[Path] = None

    def paths(self) -> Dict[OverlaySlot, Optional[Path]]:
        return _slot_paths(self)


@dataclass(frozen=True)
class OverlayImages:
    """
    Visible image set for one playback tick.

    Every slot is fully determined by the frame: a slot whose file is
    absent or missing on disk is None, never left over from the previous frame.
    """
    top: Optional[Path] = None
    bottom: Optional[Path] = None
    left: Optional[Path] = None
    right: Optional[Path] = None
    background: Optional[Path] = None

    @classmethod
    def from_frame(cls, frame: OverlayFrame) -> "OverlayImages":
        """Keep only the frame paths that point at existing files"""
        shown = {
            slot.name.lower(): path if path is not None and path.is_file() else None
            for slot, path in frame.paths().items()
        }
        return cls(**shown)

    def paths(self) -> Dict[OverlaySlot, Optional[Path]]:
        return _slot_paths(self)

    def is_empty(self) -> bool:
        return not any(self.paths().values())
