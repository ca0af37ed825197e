from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import List, Optional, TypedDict


# PUBLIC_INTERFACE
class TaskStatus(str, Enum):
    """Workflow status of a task."""

    TODO = "todo"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


# PUBLIC_INTERFACE
class TaskPriority(str, Enum):
    """Priority of a task."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


# PUBLIC_INTERFACE
class TaskEntity(TypedDict):
    """
    A task as held by the in-memory store.

    Fields:
    - id: Opaque unique identifier, immutable after creation
    - title: Short title (trimmed and length-checked on input via schemas)
    - description: Optional detailed description
    - status: todo / in-progress / completed
    - priority: low / medium / high
    - due_date: Optional calendar due date
    - created_by: Identifier of the user who created the task
    - created_at: Creation timestamp, the default sort key
    - shared_with: Collaborator emails, without duplicates, in the order entered
    """

    id: str
    title: str
    description: Optional[str]
    status: TaskStatus
    priority: TaskPriority
    due_date: Optional[date]
    created_by: str
    created_at: datetime
    shared_with: List[str]


def copy_task(task: TaskEntity) -> TaskEntity:
    """Return a copy that does not share the mutable shared_with list."""
    clone = task.copy()
    clone["shared_with"] = list(task["shared_with"])
    return clone
