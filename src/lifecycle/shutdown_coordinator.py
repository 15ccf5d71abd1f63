"""
Shutdown coordinator that orchestrates graceful shutdown of all components.

Manages signal handlers, shutdown sequencing, and error handling across
multiple shutdown handlers in priority order.
"""

import asyncio
import signal
from typing import List, Optional
from lifecycle.shutdown_protocol import IShutdownHandler
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.SYSTEM)


class ShutdownCoordinator:
    """
    Coordinates graceful shutdown of multiple components.

    Example:
        coordinator = ShutdownCoordinator()
        coordinator.register(PlaygroundShutdownHandler(playground_service))
        coordinator.register(TaskCancellationHandler())

        coordinator.setup_signal_handlers(asyncio.get_running_loop())
        await coordinator.wait_for_shutdown()
        await coordinator.shutdown_all()
    """

    def __init__(self, timeout_per_handler: float = 5.0):
        self._handlers: List[IShutdownHandler] = []
        self._shutdown_event = asyncio.Event()
        self._timeout_per_handler = timeout_per_handler
        self.reason: Optional[str] = None

    def register(self, handler: IShutdownHandler) -> None:
        """
        Register a shutdown handler.

        Handler must have a shutdown_priority property and an async shutdown() method.
        """
        if not hasattr(handler, "shutdown_priority"):
            raise ValueError(f"Handler {handler} missing shutdown_priority property")
        if not hasattr(handler, "shutdown"):
            raise ValueError(f"Handler {handler} missing shutdown() method")

        self._handlers.append(handler)
        log.debug(f"Registered shutdown handler: {handler.__class__.__name__}")

    def setup_signal_handlers(self, loop: asyncio.AbstractEventLoop) -> None:
        """Install SIGINT/SIGTERM handlers that trigger shutdown."""
        for sig in (signal.SIGINT, signal.SIGTERM):
            try:
                loop.add_signal_handler(sig, lambda s=sig: self.request_shutdown(s.name))
            except NotImplementedError:
                # Windows event loops: Ctrl+C surfaces as KeyboardInterrupt instead
                log.debug(f"Signal handler for {sig.name} not supported on this platform")

        log.debug("Signal handlers installed (SIGINT, SIGTERM)")

    def request_shutdown(self, reason: str) -> None:
        if self.reason is None:
            self.reason = reason
            log.info(f"Shutdown requested: {reason}")
        self._shutdown_event.set()

    async def wait_for_shutdown(self) -> None:
        await self._shutdown_event.wait()

    async def shutdown_all(self) -> None:
        """Run handlers by priority (highest first); failures don't stop the sequence."""
        log.info("Shutting down...", reason=self.reason or "-")

        for handler in sorted(self._handlers, key=lambda h: h.shutdown_priority, reverse=True):
            name = handler.__class__.__name__
            try:
                await asyncio.wait_for(handler.shutdown(), timeout=self._timeout_per_handler)
                log.debug(f"{name} done")
            except asyncio.TimeoutError:
                log.error(f"{name} timed out after {self._timeout_per_handler}s")
            except Exception as e:
                log.error(f"{name} failed: {e}")

        log.info("Shutdown complete")
