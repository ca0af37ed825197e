from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from threading import RLock
from typing import Callable, Deque, List

from .models import TaskEntity, TaskStatus

logger = logging.getLogger(__name__)


# PUBLIC_INTERFACE
@dataclass(frozen=True)
class TaskEvent:
    """
    Confirmation of a successful task mutation, shaped for a transient UI toast.
    """

    kind: str
    task_id: str
    title: str
    message: str
    destructive: bool = False
    occurred_at: datetime = field(default_factory=datetime.now)


Subscriber = Callable[[TaskEvent], None]


def created_event(task: TaskEntity) -> TaskEvent:
    return TaskEvent(
        kind="created",
        task_id=task["id"],
        title="Task created",
        message="Your new task has been successfully created.",
    )


def updated_event(task: TaskEntity) -> TaskEvent:
    return TaskEvent(
        kind="updated",
        task_id=task["id"],
        title="Task updated",
        message="Your task has been successfully updated.",
    )


def toggled_event(task: TaskEntity) -> TaskEvent:
    """Build the event for a toggle, given the task *after* the flip."""
    if task["status"] == TaskStatus.COMPLETED:
        return TaskEvent(
            kind="completed",
            task_id=task["id"],
            title="Task completed",
            message="Great job completing this task!",
        )
    return TaskEvent(
        kind="reopened",
        task_id=task["id"],
        title="Task reopened",
        message="Task has been marked as todo.",
    )


def deleted_event(task_id: str) -> TaskEvent:
    return TaskEvent(
        kind="deleted",
        task_id=task_id,
        title="Task deleted",
        message="Your task has been successfully deleted.",
        destructive=True,
    )


def shared_event(task: TaskEntity) -> TaskEvent:
    n = len(task["shared_with"])
    return TaskEvent(
        kind="shared",
        task_id=task["id"],
        title="Task shared",
        message=f"Task has been shared with {n} user{'s' if n > 1 else ''}.",
    )


# PUBLIC_INTERFACE
class Notifier:
    """
    Synchronous publish/subscribe channel for task events.

    Subscribers are called in registration order on the publishing thread. A
    subscriber that raises is logged and skipped; the mutation that produced the
    event stands. The last `history` events are kept for clients that poll.
    """

    def __init__(self, history: int = 50) -> None:
        self._lock = RLock()
        self._subscribers: List[Subscriber] = []
        self._recent: Deque[TaskEvent] = deque(maxlen=max(history, 0))

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register a callback; returns a function that unregisters it."""
        with self._lock:
            self._subscribers.append(callback)

        def _unsubscribe() -> None:
            with self._lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

        return _unsubscribe

    def publish(self, event: TaskEvent) -> None:
        with self._lock:
            self._recent.append(event)
            subscribers = list(self._subscribers)
        logger.debug("Publishing %s event for task_id=%s", event.kind, event.task_id)
        for callback in subscribers:
            try:
                callback(event)
            except Exception:
                logger.exception("Task event subscriber failed kind=%s task_id=%s", event.kind, event.task_id)

    def recent(self, limit: int = 20) -> List[TaskEvent]:
        """Most recent events, newest first."""
        with self._lock:
            items = list(self._recent)
        items.reverse()
        return items[: max(limit, 0)]
