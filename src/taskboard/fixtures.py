"""
Seed tasks shown on a fresh dashboard.
"""
from __future__ import annotations

from datetime import date, datetime
from typing import List

from .models import TaskEntity, TaskPriority, TaskStatus
from .store import TaskStore


# PUBLIC_INTERFACE
def seed_tasks() -> List[TaskEntity]:
    """Return fresh copies of the seed tasks in display order."""
    tasks: List[TaskEntity] = [
        {
            "id": "1",
            "title": "Design new landing page",
            "description": "Create wireframes and mockups for the new product landing page",
            "status": TaskStatus.IN_PROGRESS,
            "priority": TaskPriority.HIGH,
            "due_date": date(2025, 7, 8),
            "created_by": "user1",
            "created_at": datetime(2025, 7, 1),
            "shared_with": ["john@example.com"],
        },
        {
            "id": "2",
            "title": "Set up CI/CD pipeline",
            "description": "Configure automated testing and deployment",
            "status": TaskStatus.TODO,
            "priority": TaskPriority.MEDIUM,
            "due_date": date(2025, 7, 10),
            "created_by": "user1",
            "created_at": datetime(2025, 7, 2),
            "shared_with": [],
        },
        {
            "id": "3",
            "title": "Review pull requests",
            "description": "Review and merge pending pull requests",
            "status": TaskStatus.COMPLETED,
            "priority": TaskPriority.LOW,
            "due_date": date(2025, 7, 5),
            "created_by": "user1",
            "created_at": datetime(2025, 7, 3),
            "shared_with": [],
        },
        {
            "id": "4",
            "title": "Client meeting preparation",
            "description": "Prepare presentation and demo for client meeting",
            "status": TaskStatus.TODO,
            "priority": TaskPriority.HIGH,
            "due_date": date(2025, 7, 6),
            "created_by": "user1",
            "created_at": datetime(2025, 7, 4),
            "shared_with": ["sarah@example.com", "mike@example.com"],
        },
    ]
    return tasks


# PUBLIC_INTERFACE
def seed_store(store: TaskStore) -> None:
    """Replace the store's contents with the seed tasks."""
    store.load(seed_tasks())
