from __future__ import annotations

from datetime import datetime, time
from typing import Iterable, Optional

from .models import TaskEntity, TaskStatus
from .schemas import TaskStats


def is_overdue(task: TaskEntity, now: datetime) -> bool:
    """
    A task is overdue once the start of its due day has passed and it is not completed.
    """
    due = task["due_date"]
    if due is None or task["status"] == TaskStatus.COMPLETED:
        return False
    return datetime.combine(due, time.min) < now


# PUBLIC_INTERFACE
def compute_stats(tasks: Iterable[TaskEntity], now: Optional[datetime] = None) -> TaskStats:
    """
    Count total, completed, in-progress and overdue tasks over the whole collection.
    """
    ts = now or datetime.now()
    total = completed = in_progress = overdue = 0
    for task in tasks:
        total += 1
        if task["status"] == TaskStatus.COMPLETED:
            completed += 1
        elif task["status"] == TaskStatus.IN_PROGRESS:
            in_progress += 1
        if is_overdue(task, ts):
            overdue += 1
    return TaskStats(total=total, completed=completed, in_progress=in_progress, overdue=overdue)
