"""Shutdown handlers, called in priority order by ShutdownCoordinator"""

from .playground_shutdown_handler import PlaygroundShutdownHandler
from .task_cancellation_handler import TaskCancellationHandler

__all__ = [
    "PlaygroundShutdownHandler",
    "TaskCancellationHandler",
]
