"""
Task dashboard backend package.

The core lives in `taskboard.store` (mutations) and `taskboard.query`
(filter/sort/search); `taskboard.main` exposes both over HTTP for the
dashboard UI.
"""

from .query import QuerySpec, apply_query
from .store import TaskNotFoundError, TaskStore

__all__ = ["QuerySpec", "TaskNotFoundError", "TaskStore", "apply_query"]
