# Rev 0.1.0

"""Pytest fixtures for taskdesk (Rev 0.1.0)"""
from __future__ import annotations
from datetime import date
from pathlib import Path

import pytest

from taskdesk.repositories.cached_task_repository import CachedTaskRepository
from taskdesk.repositories.sqlite_task_repository import SQLiteTaskRepository
from taskdesk.services.task_service import TaskModel

from .fakes import CountingRepository

# Fixed "today" so due-date checks do not depend on the wall clock
TODAY = date(2025, 5, 1)


@pytest.fixture()
def db_path(tmp_path: Path) -> Path:
    return tmp_path / "tasksdb" / "tasks.sqlite3"


@pytest.fixture()
def store(db_path: Path) -> SQLiteTaskRepository:
    return SQLiteTaskRepository(db_path)


@pytest.fixture()
def counting(store: SQLiteTaskRepository) -> CountingRepository:
    return CountingRepository(store)


@pytest.fixture()
def repo(store: SQLiteTaskRepository) -> CachedTaskRepository:
    return CachedTaskRepository(store)


@pytest.fixture()
def model(repo: CachedTaskRepository):
    m = TaskModel(repo, today=lambda: TODAY)
    try:
        yield m
    finally:
        m.shutdown(wait=True)


@pytest.fixture(scope="session")
def qapp():
    from PySide6.QtCore import QCoreApplication
    app = QCoreApplication.instance() or QCoreApplication([])
    yield app


@pytest.fixture()
def pump(qapp):
    """Deliver queued Qt events posted to the main thread."""
    from PySide6.QtCore import QCoreApplication

    def _pump() -> None:
        QCoreApplication.sendPostedEvents(None, 0)
        QCoreApplication.processEvents()

    return _pump


@pytest.fixture(autouse=True)
def _no_store_singleton():
    SQLiteTaskRepository.reset_instance()
    yield
    SQLiteTaskRepository.reset_instance()
