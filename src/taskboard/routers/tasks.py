from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request, status
from pydantic import BaseModel, Field

from ..query import PriorityFilter, QuerySpec, QueryView, SortKey, StatusFilter
from ..schemas import ShareRequest, TaskCreate, TaskOut, TaskStats, TaskUpdate
from ..stats import compute_stats
from ..store import TaskStore
from ..utils import list_envelope

router = APIRouter(
    prefix="/api/v1/tasks",
    tags=["tasks"],
)


class TaskListEnvelope(BaseModel):
    """
    Envelope for the filtered, sorted task list.
    """
    items: List[TaskOut] = Field(..., description="Tasks in display order")
    count: int = Field(..., description="Number of tasks in this view")
    total: int = Field(..., description="Number of tasks in the whole collection")
    filtered: bool = Field(..., description="Whether search or filters narrowed the view")
    empty_hint: Optional[str] = Field(default=None, description="Message to show when the view is empty")


def _get_store(request: Request) -> TaskStore:
    """
    Dependency returning the store owned by the running application.
    """
    return request.app.state.store


def _get_view(request: Request) -> QueryView:
    return request.app.state.query_view


def _get_actor(request: Request) -> str:
    return request.app.state.settings.default_actor


# PUBLIC_INTERFACE
@router.post(
    "/",
    response_model=TaskOut,
    status_code=status.HTTP_201_CREATED,
    summary="Create Task",
    description="Create a new task and return it. New tasks are listed first.",
    responses={
        201: {"description": "Task created successfully"},
        422: {"description": "Validation error"},
    },
)
def create_task(
    payload: TaskCreate,
    store: TaskStore = Depends(_get_store),
    actor: str = Depends(_get_actor),
) -> TaskOut:
    """
    Create a new task on behalf of the configured user.
    """
    created = store.create(payload, actor)
    return TaskOut(**created)


# PUBLIC_INTERFACE
@router.get(
    "/",
    response_model=TaskListEnvelope,
    summary="List Tasks",
    description=(
        "List tasks with search, filters and sorting.\n\n"
        "Query parameters:\n"
        "- q: case-insensitive search over title and description\n"
        "- status: all, todo, in-progress or completed\n"
        "- priority: all, low, medium or high\n"
        "- sort_by: created (newest first), due (earliest first, undated last), "
        "priority (high first) or status (todo first)\n\n"
        "Returns an envelope with the tasks and the size of the whole collection."
    ),
    responses={
        200: {"description": "List retrieved successfully"},
        422: {"description": "Invalid query parameters"},
    },
)
def list_tasks(
    q: Optional[str] = Query(None, description="Search text for title/description"),
    status_filter: StatusFilter = Query(StatusFilter.ALL, alias="status", description="Status filter"),
    priority_filter: PriorityFilter = Query(PriorityFilter.ALL, alias="priority", description="Priority filter"),
    sort_by: SortKey = Query(SortKey.CREATED, description="Sort key"),
    store: TaskStore = Depends(_get_store),
    view: QueryView = Depends(_get_view),
) -> TaskListEnvelope:
    """
    Derive the list view from the current collection.
    """
    spec = QuerySpec(
        search_term=q.strip() if q else "",
        status_filter=status_filter,
        priority_filter=priority_filter,
        sort_by=sort_by,
    )
    items = view.compute(store.version, store.snapshot, spec)
    envelope = list_envelope(
        items=[TaskOut(**it) for it in items],
        total=len(store),
        filtered=spec.is_filtered,
    )
    return TaskListEnvelope(**envelope)


# PUBLIC_INTERFACE
@router.get(
    "/stats",
    response_model=TaskStats,
    summary="Task Stats",
    description="Total, completed, in-progress and overdue counts over all tasks, ignoring filters.",
)
def task_stats(store: TaskStore = Depends(_get_store)) -> TaskStats:
    """
    Dashboard counters.
    """
    return compute_stats(store.snapshot())


# PUBLIC_INTERFACE
@router.get(
    "/{task_id}",
    response_model=TaskOut,
    summary="Get Task",
    description="Get a single task by ID, e.g. to populate the edit form.",
    responses={
        200: {"description": "Task found"},
        404: {"description": "Task not found"},
    },
)
def get_task(task_id: str, store: TaskStore = Depends(_get_store)) -> TaskOut:
    """
    Retrieve a single task by its ID.
    """
    return TaskOut(**store.get(task_id))


# PUBLIC_INTERFACE
@router.put(
    "/{task_id}",
    response_model=TaskOut,
    summary="Replace Task",
    description=(
        "Replace the editable fields of a task. Omitted optional fields are cleared; "
        "id, creator, creation time and sharing are kept."
    ),
    responses={
        200: {"description": "Task updated"},
        404: {"description": "Task not found"},
    },
)
def put_task(task_id: str, payload: TaskCreate, store: TaskStore = Depends(_get_store)) -> TaskOut:
    """
    Full update implemented through the merging update by setting every field.
    """
    update = TaskUpdate(
        title=payload.title,
        description=payload.description,
        status=payload.status,
        priority=payload.priority,
        due_date=payload.due_date,
    )
    return TaskOut(**store.update(task_id, update))


# PUBLIC_INTERFACE
@router.patch(
    "/{task_id}",
    response_model=TaskOut,
    summary="Update Task",
    description="Partially update fields of a task.",
    responses={
        200: {"description": "Task updated"},
        404: {"description": "Task not found"},
    },
)
def patch_task(task_id: str, payload: TaskUpdate, store: TaskStore = Depends(_get_store)) -> TaskOut:
    """
    Partial update of a task.
    """
    return TaskOut(**store.update(task_id, payload))


# PUBLIC_INTERFACE
@router.post(
    "/{task_id}/toggle",
    response_model=TaskOut,
    summary="Toggle Complete",
    description="Mark a completed task as todo, or any other task as completed.",
    responses={
        200: {"description": "Task toggled"},
        404: {"description": "Task not found"},
    },
)
def toggle_task(task_id: str, store: TaskStore = Depends(_get_store)) -> TaskOut:
    return TaskOut(**store.toggle_complete(task_id))


# PUBLIC_INTERFACE
@router.put(
    "/{task_id}/share",
    response_model=TaskOut,
    summary="Share Task",
    description="Replace the list of collaborators the task is shared with.",
    responses={
        200: {"description": "Task shared"},
        404: {"description": "Task not found"},
    },
)
def share_task(task_id: str, payload: ShareRequest, store: TaskStore = Depends(_get_store)) -> TaskOut:
    return TaskOut(**store.share(task_id, payload.emails))


# PUBLIC_INTERFACE
@router.delete(
    "/{task_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Task",
    description="Delete a task by ID.",
    responses={
        204: {"description": "Task deleted"},
        404: {"description": "Task not found"},
    },
)
def delete_task(task_id: str, store: TaskStore = Depends(_get_store)) -> None:
    """
    Delete a task. Returns 204 on success, 404 if not found.
    """
    store.delete(task_id)
    return None
