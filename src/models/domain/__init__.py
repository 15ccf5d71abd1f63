"""Domain models - Config, overlay and playground value objects"""

from models.domain.config import EffectiveConfig
from models.domain.editor import EditorSettings
from models.domain.overlay import OverlayFrame, OverlayImages
from models.domain.playground import PlaygroundDescriptor, AppDescriptor

__all__ = [
    "EffectiveConfig",
    "EditorSettings",
    "OverlayFrame",
    "OverlayImages",
    "PlaygroundDescriptor",
    "AppDescriptor",
]
