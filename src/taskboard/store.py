from __future__ import annotations

import logging
from datetime import datetime
from threading import RLock
from typing import Dict, Iterable, List, Optional

from .events import (
    Notifier,
    TaskEvent,
    created_event,
    deleted_event,
    shared_event,
    toggled_event,
    updated_event,
)
from .models import TaskEntity, TaskStatus, copy_task
from .schemas import TaskCreate, TaskUpdate

logger = logging.getLogger(__name__)

# Fields a patch may touch; id, created_at and created_by are never merged.
_PATCHABLE = ("title", "description", "status", "priority", "due_date")


# PUBLIC_INTERFACE
class TaskNotFoundError(LookupError):
    """Raised when an operation references a task id that is not in the store."""

    def __init__(self, task_id: str) -> None:
        super().__init__(f"Task not found: {task_id}")
        self.task_id = task_id


# PUBLIC_INTERFACE
class TaskStore:
    """
    Authoritative in-memory task collection and its mutation operations.

    Iteration order is newest-first by insertion: create() puts the new task at
    the head. Reads hand out copies; every mutation stores an updated copy,
    bumps `version` and publishes a TaskEvent on the notifier.
    """

    def __init__(self, notifier: Optional[Notifier] = None) -> None:
        self._lock = RLock()
        self._items: Dict[str, TaskEntity] = {}
        self._next_id = 1
        self._version = 0
        self.notifier = notifier if notifier is not None else Notifier()

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    @property
    def version(self) -> int:
        """Increases on every successful mutation or load."""
        return self._version

    def _now(self) -> datetime:
        return datetime.now()

    def _allocate_id(self) -> str:
        with self._lock:
            while str(self._next_id) in self._items:
                self._next_id += 1
            task_id = str(self._next_id)
            self._next_id += 1
            return task_id

    def _require(self, task_id: str) -> TaskEntity:
        existing = self._items.get(task_id)
        if existing is None:
            raise TaskNotFoundError(task_id)
        return existing

    def _commit(self, entity: TaskEntity) -> TaskEntity:
        self._items[entity["id"]] = entity
        self._version += 1
        return copy_task(entity)

    def _emit(self, event: TaskEvent) -> None:
        self.notifier.publish(event)

    def load(self, tasks: Iterable[TaskEntity]) -> None:
        """
        Replace the whole collection, keeping the given iteration order.
        """
        with self._lock:
            items: Dict[str, TaskEntity] = {}
            for task in tasks:
                if task["id"] in items:
                    raise ValueError(f"duplicate task id: {task['id']}")
                items[task["id"]] = copy_task(task)
            self._items = items
            self._version += 1
        logger.info("TaskStore loaded %s tasks", len(items))

    def snapshot(self) -> List[TaskEntity]:
        """Copies of every task in iteration order."""
        with self._lock:
            return [copy_task(t) for t in self._items.values()]

    def get(self, task_id: str) -> TaskEntity:
        with self._lock:
            return copy_task(self._require(task_id))

    def create(self, data: TaskCreate, actor: str) -> TaskEntity:
        entity: TaskEntity = {
            "id": self._allocate_id(),
            "title": data.title,
            "description": data.description,
            "status": data.status,
            "priority": data.priority,
            "due_date": data.due_date,
            "created_by": actor,
            "created_at": self._now(),
            "shared_with": [],
        }
        with self._lock:
            self._items = {entity["id"]: entity, **self._items}
            self._version += 1
            created = copy_task(entity)
        logger.info("Task created id=%s by=%s", created["id"], actor)
        self._emit(created_event(created))
        return created

    def update(self, task_id: str, patch: TaskUpdate) -> TaskEntity:
        with self._lock:
            updated = copy_task(self._require(task_id))
            # Only fields present in the payload; an explicit null clears the value
            for name in _PATCHABLE:
                if name in patch.model_fields_set:
                    value = getattr(patch, name)
                    if value is None and name in ("title", "status", "priority"):
                        continue
                    updated[name] = value  # type: ignore[literal-required]
            result = self._commit(updated)
        logger.debug("Task updated id=%s fields=%s", task_id, sorted(patch.model_fields_set))
        self._emit(updated_event(result))
        return result

    def toggle_complete(self, task_id: str) -> TaskEntity:
        with self._lock:
            updated = copy_task(self._require(task_id))
            if updated["status"] == TaskStatus.COMPLETED:
                updated["status"] = TaskStatus.TODO
            else:
                updated["status"] = TaskStatus.COMPLETED
            result = self._commit(updated)
        logger.debug("Task toggled id=%s status=%s", task_id, result["status"].value)
        self._emit(toggled_event(result))
        return result

    def delete(self, task_id: str) -> None:
        with self._lock:
            self._require(task_id)
            del self._items[task_id]
            self._version += 1
        logger.info("Task deleted id=%s", task_id)
        self._emit(deleted_event(task_id))

    def share(self, task_id: str, emails: Iterable[str]) -> TaskEntity:
        with self._lock:
            updated = copy_task(self._require(task_id))
            shared: List[str] = []
            for email in emails:
                if email not in shared:
                    shared.append(email)
            updated["shared_with"] = shared
            result = self._commit(updated)
        logger.debug("Task shared id=%s recipients=%s", task_id, len(shared))
        self._emit(shared_event(result))
        return result
