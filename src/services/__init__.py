"""Services layer"""

from .event_bus import EventBus
from .config_resolver import ConfigResolver
from .animation_parser import parse_animation, AnimationScriptParser
from .playback import Playback
from .playground_catalog import PlaygroundCatalog, scan_playgrounds, discover_apps
from .playground_service import PlaygroundService
from .service_container import ServiceContainer

__all__ = [
    "EventBus",
    "ConfigResolver",
    "parse_animation",
    "AnimationScriptParser",
    "Playback",
    "PlaygroundCatalog",
    "scan_playgrounds",
    "discover_apps",
    "PlaygroundService",
    "ServiceContainer",
]
