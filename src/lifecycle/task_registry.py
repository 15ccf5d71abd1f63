"""
Task Registry
-------------

Centralized tracking of asyncio tasks created by the launcher core
(playback ticks, catalog rescans, event delivery).

Features:
- Register tasks with metadata (category, description)
- Track completion state, cancellation, errors
- Introspection API for debugging and shutdown
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from enum import Enum, auto
from collections import deque
from typing import Any, Deque, Dict, List, Optional
from datetime import datetime, timezone

from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.TASK)


# ---------------------------------------------------------------------------
# TASK CATEGORY ENUM
# ---------------------------------------------------------------------------

class TaskCategory(Enum):
    """Logical grouping of asynchronous tasks."""
    PLAYBACK = auto()
    CATALOG = auto()
    EVENTBUS = auto()
    SYSTEM = auto()


# ---------------------------------------------------------------------------
# TASK METADATA
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TaskInfo:
    """Immutable metadata captured at task creation time."""
    id: int
    category: TaskCategory
    description: str
    created_at: str  # ISO UTC string


@dataclass
class TaskRecord:
    """Internal structure tracking task state."""
    task: asyncio.Task
    info: TaskInfo
    cancelled: bool = False
    finished_with_error: Optional[BaseException] = None
    finished_return: Optional[Any] = None


# ---------------------------------------------------------------------------
# TASK REGISTRY SINGLETON
# ---------------------------------------------------------------------------

class TaskRegistry:
    """
    Global registry for asyncio tasks.

    Running tasks are kept until they finish; finished records move to a
    bounded history, so per-tick tasks never accumulate.
    """

    _instance: Optional["TaskRegistry"] = None

    def __init__(self, history_limit: int = 100) -> None:
        self._active: Dict[asyncio.Task, TaskRecord] = {}
        self._history: Deque[TaskRecord] = deque(maxlen=history_limit)
        self._next_id: int = 1

    @classmethod
    def instance(cls) -> "TaskRegistry":
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    def register(self, task: asyncio.Task, category: TaskCategory, description: str) -> int:
        """Register a new task with metadata."""
        task_id = self._next_id
        self._next_id += 1

        info = TaskInfo(
            id=task_id,
            category=category,
            description=description,
            created_at=datetime.now(timezone.utc).isoformat(),
        )
        self._active[task] = TaskRecord(task=task, info=info)

        log.debug(f"[Task {task_id}] Registered ({category.name}) - {description}")

        task.add_done_callback(self._on_task_done)
        return task_id

    def _on_task_done(self, task: asyncio.Task) -> None:
        record = self._active.pop(task, None)
        if record is None:
            return
        self._history.append(record)

        if task.cancelled():
            record.cancelled = True
            log.debug(f"[Task {record.info.id}] Cancelled")
            return

        exc = task.exception()
        if exc:
            record.finished_with_error = exc
            log.error(f"[Task {record.info.id}] FAILED: {exc}", description=record.info.description)
        else:
            record.finished_return = task.result()
            log.debug(f"[Task {record.info.id}] Completed successfully")

    # -----------------------------
    # Public API
    # -----------------------------

    def list_all(self) -> List[TaskRecord]:
        """Running tasks plus the most recently finished ones."""
        return list(self._history) + list(self._active.values())

    def active(self, category: Optional[TaskCategory] = None) -> List[TaskRecord]:
        """Return tasks that are still running, optionally for one category."""
        return [
            r for r in self._active.values()
            if not r.task.done() and (category is None or r.info.category == category)
        ]

    def failed(self) -> List[TaskRecord]:
        return [r for r in self._history if r.finished_with_error is not None]

    def summary(self) -> str:
        """Return human-readable summary for logs."""
        running = len(self.active())
        failed = len(self.failed())
        cancelled = len([r for r in self._history if r.cancelled])
        return (
            f"Tasks: total={self._next_id - 1}, running={running}, "
            f"failed={failed}, cancelled={cancelled}"
        )

    def prune(self) -> None:
        """Forget the finished-task history."""
        self._history.clear()


# ---------------------------------------------------------------------------
# Convenience wrapper function
# ---------------------------------------------------------------------------

def create_tracked_task(
    coro,
    *,
    category: TaskCategory,
    description: str,
    loop: Optional[asyncio.AbstractEventLoop] = None
) -> asyncio.Task:
    """
    Create and register a task in a single call.
    """
    loop = loop or asyncio.get_running_loop()
    task = loop.create_task(coro)

    TaskRegistry.instance().register(
        task=task,
        category=category,
        description=description
    )

    return task
