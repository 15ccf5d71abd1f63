"""Effective playground configuration"""

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional


@dataclass(frozen=True)
class EffectiveConfig:
    """
    Fully resolved layout and image paths for one playground.

    Built fresh on every selection (defaults -> file convention ->
    settings.txt) and replaced wholesale afterwards, never mutated.
    Path fields use None for "empty".
    """

    # === Window ===
    window_width: float = 960
    window_height: float = 540
    top_most: bool = True

    # === Overlay panel sizes ===
    top_height: float = 156
    bottom_height: float = 0
    left_width: float = 0
    right_width: float = 0

    # === Images ===
    background_image_path: Optional[Path] = None
    preview_image_path: Optional[Path] = None
    top_overlay_path: Optional[Path] = None
    bottom_overlay_path: Optional[Path] = None
    left_overlay_path: Optional[Path] = None
    right_overlay_path: Optional[Path] = None

    def with_changes(self, **changes) -> "EffectiveConfig":
        """Return a copy with the given fields replaced"""
        return replace(self, **changes)
