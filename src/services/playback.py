"""
Overlay playback

Cycles through parsed OverlayFrames on the asyncio loop. Each frame stays up
for its own duration, so the animation period is non-uniform.

State machine:

    IDLE --start() [frames]--> RUNNING --stop()--> STOPPED
      ^ start() [no frames]      |  ^                 |
      +--------------------------+  +----start()------+   (restarts at frame 0)
"""

import asyncio
from typing import Awaitable, Callable, Optional, Sequence, Tuple

from lifecycle.task_registry import create_tracked_task, TaskCategory
from models.domain.overlay import OverlayFrame, OverlayImages
from models.enums import PlaybackState
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.ANIMATION)

FrameCallback = Callable[[OverlayImages], None]
SleepFn = Callable[[float], Awaitable[None]]


class Playback:
    """
    Restartable, cancellable overlay animation loop.

    At most one tick is pending per instance: start() cancels any pending
    tick before scheduling a new one, stop() cancels it.

    Zero-duration frames are rescheduled with zero delay, i.e. the next frame
    is applied on the following event-loop iteration.

    Usage:
        playback = Playback(parse_animation(directory), on_frame=ui.show_overlays)
        playback.start()      # applies frame 0 immediately (needs a running loop)
        ...
        playback.stop()
        await playback.wait_closed()
    """

    def __init__(
        self,
        frames: Sequence[OverlayFrame],
        on_frame: FrameCallback,
        *,
        sleep: SleepFn = asyncio.sleep,
        name: str = "overlay"
    ) -> None:
        """
        Args:
            frames: Frame sequence (copied, never mutated)
            on_frame: Called with the visible image set on every applied frame
            sleep: Awaitable delay function (injectable for tests)
            name: Label used in logs and task descriptions
        """
        self._frames: Tuple[OverlayFrame, ...] = tuple(frames)
        self._on_frame = on_frame
        self._sleep = sleep
        self.name = name

        self._state = PlaybackState.IDLE
        self._index = 0
        self._task: Optional[asyncio.Task] = None

    # ============================================================
    # Introspection
    # ============================================================

    @property
    def state(self) -> PlaybackState:
        return self._state

    @property
    def current_index(self) -> int:
        return self._index

    @property
    def frames(self) -> Tuple[OverlayFrame, ...]:
        return self._frames

    @property
    def has_pending_tick(self) -> bool:
        return self._task is not None and not self._task.done()

    # ============================================================
    # Control
    # ============================================================

    def start(self) -> None:
        """
        Start (or restart) from frame 0.

        No-op on an empty sequence - the state stays IDLE and the callback
        is never called.
        """
        if not self._frames:
            log.debug(f"Playback '{self.name}' has no frames, staying idle")
            return

        self._cancel_pending()

        self._state = PlaybackState.RUNNING
        self._index = 0
        self._apply_current()

        # Callback may have stopped us
        if self._state is not PlaybackState.RUNNING:
            return

        self._task = create_tracked_task(
            self._run(),
            category=TaskCategory.PLAYBACK,
            description=f"Playback '{self.name}': {len(self._frames)} frames",
        )
        log.info(f"Playback '{self.name}' started", frames=len(self._frames))

    def stop(self) -> None:
        """Halt playback and cancel the pending tick."""
        was_running = self._state is PlaybackState.RUNNING
        self._state = PlaybackState.STOPPED
        self._cancel_pending()
        if was_running:
            log.info(f"Playback '{self.name}' stopped", index=self._index)

    async def wait_closed(self) -> None:
        """Wait until the tick task has finished after stop()."""
        task = self._task
        if task is None:
            return
        try:
            await task
        except asyncio.CancelledError:
            pass
        if self._task is task:
            self._task = None

    # ============================================================
    # Internals
    # ============================================================

    def _cancel_pending(self) -> None:
        # Cancelled task stays referenced so wait_closed() can await it
        if self._task is not None and not self._task.done():
            self._task.cancel()

    def _apply_current(self) -> None:
        frame = self._frames[self._index]
        images = OverlayImages.from_frame(frame)
        log.debug(
            f"Frame {self._index + 1}/{len(self._frames)}",
            playback=self.name,
            duration=f"{frame.duration}s",
        )
        try:
            self._on_frame(images)
        except Exception as e:
            log.error(f"Frame callback failed on '{self.name}': {e}", index=self._index)

    async def _run(self) -> None:
        """Tick loop: wait current duration, advance (wrapping), apply, repeat."""
        try:
            while self._state is PlaybackState.RUNNING:
                await self._sleep(self._frames[self._index].duration)
                if self._state is not PlaybackState.RUNNING:
                    break
                self._index = (self._index + 1) % len(self._frames)
                self._apply_current()
        except asyncio.CancelledError:
            log.debug(f"Playback '{self.name}' tick cancelled")
