from __future__ import annotations

from datetime import date, datetime
from typing import Optional

import pytest
from fastapi.testclient import TestClient

from taskboard.events import Notifier
from taskboard.main import create_app
from taskboard.models import TaskEntity, TaskPriority, TaskStatus
from taskboard.settings import Settings
from taskboard.store import TaskStore


def make_task(
    task_id: str,
    title: str = "Task",
    description: Optional[str] = None,
    status: TaskStatus = TaskStatus.TODO,
    priority: TaskPriority = TaskPriority.MEDIUM,
    due_date: Optional[date] = None,
    created_at: Optional[datetime] = None,
) -> TaskEntity:
    return {
        "id": task_id,
        "title": title,
        "description": description,
        "status": status,
        "priority": priority,
        "due_date": due_date,
        "created_by": "user1",
        "created_at": created_at or datetime(2024, 1, 1),
        "shared_with": [],
    }


@pytest.fixture()
def store() -> TaskStore:
    """Empty store with its own notifier."""
    return TaskStore(Notifier(history=10))


def _settings(seed: bool) -> Settings:
    return Settings(
        seed_fixtures=seed,
        default_actor="tester@example.com",
        cors_allow_origins=["*"],
        notification_history=20,
        log_level="INFO",
    )


@pytest.fixture()
def client() -> TestClient:
    """Client for a fresh app with an empty collection."""
    return TestClient(create_app(_settings(seed=False)))


@pytest.fixture()
def seeded_client() -> TestClient:
    """Client for a fresh app loaded with the seed tasks."""
    return TestClient(create_app(_settings(seed=True)))
