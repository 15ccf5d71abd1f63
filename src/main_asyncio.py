"""
main_asyncio.py - Headless entry point for the playground launcher core
----------------------------------------------------------------------

Responsible for:
- loading editor settings
- wiring services (Dependency Injection)
- selecting the saved (or first) playground and running its overlay playback
- graceful shutdown on Ctrl+C
"""

import sys

# Set UTF-8 encoding for output BEFORE logging starts (tree symbols in logs)
if hasattr(sys.stdout, 'reconfigure') and sys.stdout.encoding != 'UTF-8':
    sys.stdout.reconfigure(encoding='utf-8')  # type: ignore
if hasattr(sys.stderr, 'reconfigure') and sys.stderr.encoding != 'UTF-8':
    sys.stderr.reconfigure(encoding='utf-8')  # type: ignore

import argparse
import asyncio
from pathlib import Path
from typing import List, Optional

from lifecycle import ShutdownCoordinator
from lifecycle.handlers import PlaygroundShutdownHandler, TaskCancellationHandler
from managers import ConfigManager
from models.enums import LogCategory, LogLevel
from models.events import EventType, OverlayFrameChangedEvent, PlaygroundLoadFailedEvent
from services import EventBus, PlaygroundCatalog, PlaygroundService, ServiceContainer, discover_apps
from services.middleware import log_middleware
from utils.logger import get_logger, configure_logger

log = get_logger().for_category(LogCategory.SYSTEM)


def build_services(playgrounds_root: Path, settings_path: Path) -> ServiceContainer:
    """Create and wire all core services."""
    config_manager = ConfigManager(settings_path)
    config_manager.load()

    event_bus = EventBus()
    event_bus.add_middleware(log_middleware)

    catalog = PlaygroundCatalog(playgrounds_root)
    playground_service = PlaygroundService(catalog, config_manager, event_bus)

    return ServiceContainer(
        config_manager=config_manager,
        catalog=catalog,
        playground_service=playground_service,
        event_bus=event_bus,
    )


def _print_overlays(event: OverlayFrameChangedEvent) -> None:
    shown = {
        slot.name.lower(): path.name
        for slot, path in event.images.paths().items()
        if path is not None
    }
    log.info(f"[{event.playground}] frame {event.index}", **(shown or {"overlays": "none"}))


def _report_failure(event: PlaygroundLoadFailedEvent) -> None:
    log.error(f"Playground not found: {event.playground.name}", reason=event.message)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="playground-studio",
        description="Resolve a playground and run its overlay animation headless.",
    )
    parser.add_argument("--root", type=Path, default=Path("playgrounds"), help="playgrounds directory")
    parser.add_argument("--apps", type=Path, default=Path("apps"), help="plugin apps directory")
    parser.add_argument("--settings", type=Path, default=Path("editor_settings.yaml"), help="editor settings file")
    parser.add_argument("--playground", help="playground to select (default: saved or first)")
    parser.add_argument("--debug", action="store_true", help="verbose logging")
    return parser.parse_args(argv)


async def main(args: argparse.Namespace) -> int:
    """Main async entry point."""
    configure_logger(LogLevel.DEBUG if args.debug else LogLevel.INFO)
    log.info("Starting playground launcher...")

    services = build_services(args.root, args.settings)
    services.event_bus.subscribe(EventType.OVERLAY_FRAME_CHANGED, _print_overlays)
    services.event_bus.subscribe(EventType.PLAYGROUND_LOAD_FAILED, _report_failure)

    apps = discover_apps(args.apps)
    if apps:
        log.info(f"{len(apps)} plugin apps available", apps=", ".join(a.name for a in apps))

    service = services.playground_service
    await service.refresh_catalog()
    if args.playground and args.playground != (service.selected.name if service.selected else None):
        if not await service.select(args.playground):
            log.error(f"Could not select playground '{args.playground}'")

    if not len(services.catalog):
        log.warn(f"No playgrounds in {args.root.resolve()}")

    coordinator = ShutdownCoordinator()
    coordinator.register(PlaygroundShutdownHandler(service))
    coordinator.register(TaskCancellationHandler(exclude=[asyncio.current_task()]))
    coordinator.setup_signal_handlers(asyncio.get_running_loop())

    service.start_watching(interval=1.0)

    try:
        await coordinator.wait_for_shutdown()
    except asyncio.CancelledError:
        coordinator.request_shutdown("cancelled")
    finally:
        await coordinator.shutdown_all()

    return 0


def run() -> None:
    """Console script entry point."""
    args = parse_args()
    try:
        sys.exit(asyncio.run(main(args)))
    except KeyboardInterrupt:
        log.info("Interrupted")


if __name__ == "__main__":
    run()
