"""Service Container - Dependency injection container for all core services"""

from dataclasses import dataclass
from managers.config_manager import ConfigManager
from services.event_bus import EventBus
from services.playground_catalog import PlaygroundCatalog
from services.playground_service import PlaygroundService


@dataclass
class ServiceContainer:
    """
    Aggregates the services a UI layer needs.

    - config_manager: editor settings (load/save/reset)
    - catalog: playground directories
    - playground_service: selection workflow and overlay playback
    - event_bus: events for the UI to subscribe to

    Usage:
        services = main_asyncio.build_services(Path("playgrounds"), Path("editor_settings.yaml"))
        services.event_bus.subscribe(EventType.OVERLAY_FRAME_CHANGED, window.show_overlays)
        await services.playground_service.refresh_catalog()
    """

    config_manager: ConfigManager
    catalog: PlaygroundCatalog
    playground_service: PlaygroundService
    event_bus: EventBus
