from __future__ import annotations

from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .models import TaskPriority, TaskStatus


def _clean_title(v: Optional[str]) -> Optional[str]:
    if v is None:
        return v
    s = v.strip()
    if not (1 <= len(s) <= 200):
        raise ValueError("title length must be between 1 and 200 characters")
    return s


# PUBLIC_INTERFACE
class TaskCreate(BaseModel):
    """
    Schema for creating a new task (the task edit form).
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "title": "Design new landing page",
                "description": "Create wireframes and mockups for the new product landing page",
                "status": "in-progress",
                "priority": "high",
                "due_date": "2025-07-08",
            }
        }
    )

    title: str = Field(..., description="Short title for the task", min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, description="Optional detailed description")
    status: TaskStatus = Field(default=TaskStatus.TODO, description="Workflow status")
    priority: TaskPriority = Field(default=TaskPriority.MEDIUM, description="Task priority")
    due_date: Optional[date] = Field(default=None, description="Due date as an ISO8601 calendar date")

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        """
        Strip whitespace and enforce 1..200 length.
        """
        if v is None:
            raise ValueError("title is required")
        return _clean_title(v)  # type: ignore[return-value]


# PUBLIC_INTERFACE
class TaskUpdate(BaseModel):
    """
    Schema for updating an existing task.
    All fields are optional; only fields present in the payload are merged, so an
    explicit null clears description or due_date.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "title": "Design new landing page v2",
                "status": "completed",
                "due_date": None,
            }
        }
    )

    title: Optional[str] = Field(default=None, description="Short title for the task", min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, description="Optional detailed description")
    status: Optional[TaskStatus] = Field(default=None, description="Workflow status")
    priority: Optional[TaskPriority] = Field(default=None, description="Task priority")
    due_date: Optional[date] = Field(default=None, description="Due date as an ISO8601 calendar date")

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: Optional[str]) -> Optional[str]:
        """
        If title is provided, strip whitespace and enforce 1..200 length.
        """
        return _clean_title(v)


# PUBLIC_INTERFACE
class ShareRequest(BaseModel):
    """
    Collaborators a task is shared with. Replaces the previous list.
    """

    model_config = ConfigDict(
        json_schema_extra={"example": {"emails": ["sarah@example.com", "mike@example.com"]}}
    )

    emails: List[str] = Field(default_factory=list, description="Collaborator email addresses")

    @field_validator("emails")
    @classmethod
    def clean_emails(cls, v: List[str]) -> List[str]:
        """
        Trim entries, reject blanks and drop exact duplicates (first one wins).
        """
        cleaned: List[str] = []
        for raw in v:
            email = raw.strip()
            if not email:
                raise ValueError("email addresses must not be blank")
            if email not in cleaned:
                cleaned.append(email)
        return cleaned


# PUBLIC_INTERFACE
class TaskOut(BaseModel):
    """
    Schema returned by the API for a task.
    """

    id: str = Field(..., description="Unique identifier of the task")
    title: str = Field(..., description="Short title for the task")
    description: Optional[str] = Field(default=None, description="Optional detailed description")
    status: TaskStatus = Field(..., description="Workflow status")
    priority: TaskPriority = Field(..., description="Task priority")
    due_date: Optional[date] = Field(default=None, description="Due date as an ISO8601 calendar date")
    created_by: str = Field(..., description="User who created the task")
    created_at: datetime = Field(..., description="Creation timestamp")
    shared_with: List[str] = Field(default_factory=list, description="Collaborator email addresses")


# PUBLIC_INTERFACE
class TaskStats(BaseModel):
    """
    Dashboard counters over the whole (unfiltered) collection.
    """

    total: int = Field(..., description="Number of tasks")
    completed: int = Field(..., description="Number of completed tasks")
    in_progress: int = Field(..., description="Number of tasks in progress")
    overdue: int = Field(..., description="Open tasks whose due date has passed")


# PUBLIC_INTERFACE
class NotificationOut(BaseModel):
    """
    A confirmation message emitted after a successful mutation.
    """

    kind: str = Field(..., description="created, updated, completed, reopened, deleted or shared")
    task_id: str = Field(..., description="Task the mutation applied to")
    title: str = Field(..., description="Short toast title")
    message: str = Field(..., description="Toast body")
    destructive: bool = Field(default=False, description="Whether the UI should style it as destructive")
    occurred_at: datetime = Field(..., description="When the mutation happened")
