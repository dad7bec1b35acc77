"""Persistence: SQLite store and its caching proxy."""
from .base import TaskRepository
from .cached_task_repository import CachedTaskRepository
from .db import Database
from .sqlite_task_repository import SQLiteTaskRepository

__all__ = ["TaskRepository", "CachedTaskRepository", "Database", "SQLiteTaskRepository"]
