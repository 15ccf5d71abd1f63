"""Playground service - Selection workflow for the launcher"""

import asyncio
from pathlib import Path
from typing import List, Optional

from lifecycle.task_registry import create_tracked_task, TaskCategory
from managers.config_manager import ConfigManager
from models.domain.config import EffectiveConfig
from models.domain.overlay import OverlayFrame, OverlayImages
from models.domain.playground import PlaygroundDescriptor
from models.errors import MalformedAnimationScript, MissingMainImage
from models.events import (
    AnimationScriptRejectedEvent,
    OverlayFrameChangedEvent,
    PlaygroundLoadFailedEvent,
    PlaygroundSelectedEvent,
    PlaygroundsChangedEvent,
)
from services.animation_parser import parse_animation
from services.config_resolver import ConfigResolver
from services.event_bus import EventBus
from services.playback import Playback, SleepFn
from services.playground_catalog import PlaygroundCatalog
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.PLAYGROUND)


class PlaygroundService:
    """
    Runs the selection workflow and owns the active Playback.

    select():
    1. resolve EffectiveConfig from editor settings + playground directory
       (missing main image or unreadable files: stop playback, publish
       PlaygroundLoadFailed)
    2. parse animation.txt (rejected scripts become an empty sequence and
       publish AnimationScriptRejected)
    3. stop the old Playback, start the new one
    4. publish PlaygroundSelected

    Every playback tick publishes OverlayFrameChanged. The UI layer only
    subscribes to events; this service never touches widgets.
    """

    def __init__(
        self,
        catalog: PlaygroundCatalog,
        config_manager: ConfigManager,
        event_bus: EventBus,
        resolver: Optional[ConfigResolver] = None,
        sleep: SleepFn = asyncio.sleep
    ):
        self.catalog = catalog
        self.config_manager = config_manager
        self.event_bus = event_bus
        self.resolver = resolver or ConfigResolver()
        self._sleep = sleep

        self.selected: Optional[PlaygroundDescriptor] = None
        self.config: Optional[EffectiveConfig] = None
        self.frames: List[OverlayFrame] = []
        self.playback: Optional[Playback] = None
        self.current_images: Optional[OverlayImages] = None

        self._watch_task: Optional[asyncio.Task] = None

    # ============================================================
    # Selection
    # ============================================================

    async def select(self, name: str) -> bool:
        """
        Select a playground by directory name.

        Returns:
            True when the playground resolved and is displayable
        """
        playground = self.catalog.get(name)
        if playground is None:
            log.warn(f"Unknown playground: {name}")
            return False

        self.selected = playground
        defaults = self.config_manager.settings.to_effective_config()
        try:
            self.config = self.resolver.resolve(playground.directory, defaults)
        except MissingMainImage as e:
            await self._fail_selection(playground, e.message, e.path)
            return False
        except OSError as e:
            path = Path(e.filename) if e.filename else playground.directory
            await self._fail_selection(playground, f"Playground files unreadable: {e}", path)
            return False

        frames = await self._load_frames(playground)
        self._replace_playback(playground, frames)

        self.config_manager.settings.selected_playground = name
        log.info(f"Selected playground '{name}'", frames=len(frames))
        await self.event_bus.publish(PlaygroundSelectedEvent(playground, self.config, len(frames)))
        return True

    async def _load_frames(self, playground: PlaygroundDescriptor) -> List[OverlayFrame]:
        try:
            return parse_animation(playground.directory)
        except MalformedAnimationScript as e:
            log.error(f"Animation script rejected: {e.message}")
            await self.event_bus.publish(
                AnimationScriptRejectedEvent(playground, e.message, e.line_number)
            )
            return []
        except OSError as e:
            message = f"Animation script unreadable: {e}"
            log.error(message)
            await self.event_bus.publish(AnimationScriptRejectedEvent(playground, message, 0))
            return []

    async def _fail_selection(self, playground: PlaygroundDescriptor, message: str, path: Optional[Path]) -> None:
        # Nothing of the previous playground may keep animating
        self.stop()
        self.playback = None
        self.frames = []
        self.current_images = None
        self.config = None
        log.error(f"Playground '{playground.name}' not displayable", path=path)
        await self.event_bus.publish(PlaygroundLoadFailedEvent(playground, message, path))

    def _replace_playback(self, playground: PlaygroundDescriptor, frames: List[OverlayFrame]) -> None:
        # Old playback must be stopped first: one pending tick at a time
        if self.playback is not None:
            self.playback.stop()

        self.frames = frames
        self.current_images = None
        self.playback = Playback(
            frames,
            on_frame=lambda images: self._on_frame(playground.name, images),
            sleep=self._sleep,
            name=playground.name,
        )
        self.playback.start()

    def _on_frame(self, playground_name: str, images: OverlayImages) -> None:
        self.current_images = images
        index = self.playback.current_index if self.playback else 0
        self.event_bus.publish_nowait(OverlayFrameChangedEvent(playground_name, index, images))

    # ============================================================
    # Catalog
    # ============================================================

    async def refresh_catalog(self) -> bool:
        """
        Rescan playgrounds; select the saved (or first) one when nothing
        is selected or the selected one disappeared.

        Returns:
            True when the catalog changed
        """
        added, removed = self.catalog.refresh()
        changed = bool(added or removed)
        if changed:
            await self.event_bus.publish(PlaygroundsChangedEvent(added, removed))

        if self.selected is None or self.selected.name not in self.catalog:
            if self.selected is not None:
                log.warn(f"Selected playground '{self.selected.name}' was removed")
                self.stop()
                self.selected = None
                self.config = None
            default = self.catalog.default_selection(self.config_manager.settings.selected_playground)
            if default is not None:
                await self.select(default.name)

        return changed

    def start_watching(self, interval: float = 1.0) -> asyncio.Task:
        """Periodic catalog refresh as a tracked task"""
        if self._watch_task is not None and not self._watch_task.done():
            return self._watch_task
        self._watch_task = create_tracked_task(
            self._watch_loop(interval),
            category=TaskCategory.CATALOG,
            description=f"Playground rescan every {interval}s",
        )
        return self._watch_task

    async def _watch_loop(self, interval: float) -> None:
        try:
            while True:
                try:
                    await self.refresh_catalog()
                except Exception as e:
                    log.error(f"Playground rescan failed: {e}", error_type=type(e).__name__)
                await asyncio.sleep(interval)
        except asyncio.CancelledError:
            log.debug("Catalog watcher cancelled")

    # ============================================================
    # Lifecycle
    # ============================================================

    def stop(self) -> None:
        """Stop the active playback"""
        if self.playback is not None:
            self.playback.stop()

    async def shutdown(self) -> None:
        """Stop playback and the catalog watcher"""
        log.info("Shutting down playground service...")
        self.stop()
        if self.playback is not None:
            await self.playback.wait_closed()

        if self._watch_task is not None:
            self._watch_task.cancel()
            try:
                await self._watch_task
            except asyncio.CancelledError:
                pass
            self._watch_task = None
