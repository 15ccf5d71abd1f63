"""Editor settings domain model"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from models.domain.config import EffectiveConfig


def _optional_path(value: str) -> Optional[Path]:
    return Path(value) if value else None


@dataclass
class EditorSettings:
    """
    Launcher-level settings persisted in editor_settings.yaml

    Default values defined here are the single source of truth used by
    ConfigManager when neither the user file nor factory defaults load.
    Path fields are kept as plain strings, the way the editor shows them.
    """

    # === Window ===
    window_title: str = "Shimoji-ee Playground"
    window_width: float = 960
    window_height: float = 540
    main_window_top_most: bool = True

    # === Overlays ===
    top_overlay_path: str = "playgrounds/Scrubland Playground/top.png"
    bottom_overlay_path: str = ""
    left_overlay_path: str = ""
    right_overlay_path: str = ""
    top_height: float = 156
    bottom_height: float = 0
    left_width: float = 0
    right_width: float = 0

    # === Playground ===
    selected_playground: str = "Scrubland Playground"
    background_path: str = "playgrounds/Scrubland Playground/assets/main/playground.png"
    start_direct_playground: bool = False
    accepted_playground_license: bool = False

    def to_effective_config(self) -> EffectiveConfig:
        """Build the resolver defaults from these settings"""
        return EffectiveConfig(
            window_width=self.window_width,
            window_height=self.window_height,
            top_most=self.main_window_top_most,
            top_height=self.top_height,
            bottom_height=self.bottom_height,
            left_width=self.left_width,
            right_width=self.right_width,
            background_image_path=_optional_path(self.background_path),
            top_overlay_path=_optional_path(self.top_overlay_path),
            bottom_overlay_path=_optional_path(self.bottom_overlay_path),
            left_overlay_path=_optional_path(self.left_overlay_path),
            right_overlay_path=_optional_path(self.right_overlay_path),
        )
