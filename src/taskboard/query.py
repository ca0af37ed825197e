from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from threading import RLock
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from .models import TaskEntity, TaskPriority, TaskStatus, copy_task


# PUBLIC_INTERFACE
class StatusFilter(str, Enum):
    ALL = "all"
    TODO = "todo"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


# PUBLIC_INTERFACE
class PriorityFilter(str, Enum):
    ALL = "all"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


# PUBLIC_INTERFACE
class SortKey(str, Enum):
    CREATED = "created"
    DUE = "due"
    PRIORITY = "priority"
    STATUS = "status"


PRIORITY_RANK: Dict[TaskPriority, int] = {
    TaskPriority.HIGH: 3,
    TaskPriority.MEDIUM: 2,
    TaskPriority.LOW: 1,
}

STATUS_RANK: Dict[TaskStatus, int] = {
    TaskStatus.TODO: 1,
    TaskStatus.IN_PROGRESS: 2,
    TaskStatus.COMPLETED: 3,
}


@dataclass(frozen=True)
class QuerySpec:
    """
    Search, filter and sort parameters for the task list view.
    """
    search_term: str = ""
    status_filter: StatusFilter = StatusFilter.ALL
    priority_filter: PriorityFilter = PriorityFilter.ALL
    sort_by: SortKey = SortKey.CREATED

    @property
    def is_filtered(self) -> bool:
        """True when search, status or priority narrows the view."""
        return (
            bool(self.search_term)
            or self.status_filter != StatusFilter.ALL
            or self.priority_filter != PriorityFilter.ALL
        )


def matches_search(task: TaskEntity, term: str) -> bool:
    if not term:
        return True
    s = term.lower()
    title_ok = s in (task["title"] or "").lower()
    desc_ok = s in task["description"].lower() if task["description"] else False
    return title_ok or desc_ok


# PUBLIC_INTERFACE
def matches(task: TaskEntity, spec: QuerySpec) -> bool:
    """Whether a task passes every filter in the spec."""
    if spec.status_filter != StatusFilter.ALL and task["status"].value != spec.status_filter.value:
        return False
    if spec.priority_filter != PriorityFilter.ALL and task["priority"].value != spec.priority_filter.value:
        return False
    return matches_search(task, spec.search_term)


def _due_key(task: TaskEntity) -> Tuple[int, object]:
    # Undated tasks share one rank after every dated task
    due = task["due_date"]
    return (1, 0) if due is None else (0, due)


_SORT_KEYS: Dict[SortKey, Tuple[Callable[[TaskEntity], object], bool]] = {
    SortKey.CREATED: (lambda t: t["created_at"], True),
    SortKey.DUE: (_due_key, False),
    SortKey.PRIORITY: (lambda t: PRIORITY_RANK[t["priority"]], True),
    SortKey.STATUS: (lambda t: STATUS_RANK[t["status"]], False),
}


# PUBLIC_INTERFACE
def sort_tasks(tasks: Iterable[TaskEntity], sort_by: SortKey = SortKey.CREATED) -> List[TaskEntity]:
    """
    Stable sort by the given key:
    - created: newest first
    - due: earliest first, tasks without a due date last
    - priority: high, medium, low
    - status: todo, in-progress, completed
    Ties keep their incoming order.
    """
    key, reverse = _SORT_KEYS[sort_by]
    # sorted(reverse=True) keeps equal elements in their original order
    return sorted(tasks, key=key, reverse=reverse)  # type: ignore[arg-type]


# PUBLIC_INTERFACE
def apply_query(tasks: Iterable[TaskEntity], spec: Optional[QuerySpec] = None) -> List[TaskEntity]:
    """
    Filter then sort. Pure: the input is not modified and the result holds copies.
    """
    q = spec or QuerySpec()
    filtered = [copy_task(t) for t in tasks if matches(t, q)]
    return sort_tasks(filtered, q.sort_by)


# PUBLIC_INTERFACE
class QueryView:
    """
    Remembers the last (collection version, spec) -> result pair so repeated
    reads of an unchanged view skip the recomputation.
    """

    def __init__(self) -> None:
        self._lock = RLock()
        self._key: Optional[Tuple[int, QuerySpec]] = None
        self._result: List[TaskEntity] = []

    def compute(self, version: int, tasks: Callable[[], List[TaskEntity]], spec: QuerySpec) -> List[TaskEntity]:
        """
        Return the view for `spec`; `tasks` is only called when the cached pair is stale.
        """
        key = (version, spec)
        with self._lock:
            if self._key != key:
                self._result = apply_query(tasks(), spec)
                self._key = key
            return [copy_task(t) for t in self._result]

    def invalidate(self) -> None:
        with self._lock:
            self._key = None
            self._result = []
