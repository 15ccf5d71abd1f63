from __future__ import annotations

from typing import TYPE_CHECKING

from lifecycle.shutdown_protocol import IShutdownHandler
from utils.logger import get_logger, LogCategory

if TYPE_CHECKING:
    from services.playground_service import PlaygroundService

log = get_logger().for_category(LogCategory.SYSTEM)


class PlaygroundShutdownHandler(IShutdownHandler):
    """
    Stops overlay playback and the catalog watcher.

    Priority: 100 (first - no tick may fire during teardown)
    """

    def __init__(self, playground_service: "PlaygroundService"):
        self.playground_service = playground_service

    @property
    def shutdown_priority(self) -> int:
        return 100

    async def shutdown(self) -> None:
        log.info("Stopping playground playback...")
        await self.playground_service.shutdown()
