from __future__ import annotations

import asyncio
from typing import List, Optional

from lifecycle.shutdown_protocol import IShutdownHandler
from lifecycle.task_registry import TaskRegistry
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.SYSTEM)


class TaskCancellationHandler(IShutdownHandler):
    """
    Cancels every task still active in the TaskRegistry.

    Priority: 40 (after component handlers)
    """

    def __init__(self, exclude: Optional[List[asyncio.Task]] = None):
        self.exclude = exclude or []

    @property
    def shutdown_priority(self) -> int:
        return 40

    async def shutdown(self) -> None:
        registry = TaskRegistry.instance()
        loop = asyncio.get_running_loop()
        tasks = [
            r.task for r in registry.active()
            if r.task not in self.exclude and r.task.get_loop() is loop
        ]
        log.info(f"Cancelling {len(tasks)} background tasks...")

        for task in tasks:
            task.cancel()

        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)

        log.debug(registry.summary())
