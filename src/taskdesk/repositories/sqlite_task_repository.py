# Rev 0.1.0
from __future__ import annotations

import sqlite3
import threading
from datetime import date
from pathlib import Path
from typing import ClassVar, List, Optional

from ..errors import InputError, StoreError
from ..models.entities import BasicTask, RecurringTask, Task, recurrence_days
from ..models.state import TaskState
from ..utils.logging_setup import get_logger
from .db import TABLE, Database

_COLUMNS = "ID, TITLE, DESCRIPTION, STATE, DUEDATE, RECURRENCE_DAYS"


class SQLiteTaskRepository:
    """
    Authoritative task store backed by SQLite.

    Every call opens its own connection (see Database.connect). Any sqlite
    failure surfaces as StoreError.

    Ids: MAX(ID) + 1, but never below an id this process already handed out,
    so deleting the newest task does not recycle its id. delete_all_tasks()
    starts over at 1. Assumes a single writing process.

    One instance per process is obtained with `instance()`; the constructor
    stays available for tests and tools that point at another file.
    """

    _instance: ClassVar[Optional["SQLiteTaskRepository"]] = None
    _instance_lock: ClassVar[threading.Lock] = threading.Lock()

    def __init__(self, db_or_path: Database | Path | str) -> None:
        self._db = db_or_path if isinstance(db_or_path, Database) else Database(db_or_path)
        self._log = get_logger("Store")
        self._last_id = 0
        self._alloc_lock = threading.Lock()
        self._db.ensure_schema()
        self._log.info("Task store ready db=%s", self._db.path)

    # -------------------------
    # Singleton
    # -------------------------
    @classmethod
    def instance(cls, path: Optional[Path | str] = None) -> "SQLiteTaskRepository":
        """Process-wide store, created lazily on first call."""
        if cls._instance is None:
            with cls._instance_lock:
                if cls._instance is None:
                    if path is None:
                        from ..utils.config import resolve_db_path
                        path = resolve_db_path()
                    cls._instance = cls(path)
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        with cls._instance_lock:
            cls._instance = None

    @property
    def path(self) -> Path:
        return self._db.path

    # -------------------------
    # Row mapping
    # -------------------------
    def _row_to_task(self, row: sqlite3.Row) -> Optional[Task]:
        task_id = int(row["ID"])
        state = TaskState.from_db(row["STATE"])
        due = self._parse_due(row["DUEDATE"], task_id)
        days = row["RECURRENCE_DAYS"]
        try:
            if task_id < 1:
                raise InputError(f"id {task_id} is not a persisted id")
            if days is not None and int(days) > 0:
                return RecurringTask(task_id, row["TITLE"], row["DESCRIPTION"], state, due, interval=int(days))
            return BasicTask(task_id, row["TITLE"], row["DESCRIPTION"], state, due)
        except InputError as e:
            self._log.warning("Skipping unreadable task row id=%s: %s", task_id, e)
            return None

    def _parse_due(self, raw, task_id) -> Optional[date]:
        if raw is None or raw == "":
            return None
        if isinstance(raw, date):
            return raw
        try:
            return date.fromisoformat(str(raw)[:10])
        except ValueError:
            self._log.warning("Task %s has unreadable DUEDATE %r; treating as unset", task_id, raw)
            return None

    @staticmethod
    def _task_params(task: Task) -> tuple:
        days = recurrence_days(task)
        return (
            task.title,
            task.description,
            task.state.value,
            task.due_date.isoformat() if task.due_date is not None else None,
            days if days and days > 0 else None,
        )

    # -------------------------
    # Reads
    # -------------------------
    def list_tasks(self) -> List[Task]:
        try:
            with self._db.connect() as con:
                rows = con.execute(f"SELECT {_COLUMNS} FROM {TABLE} ORDER BY ID").fetchall()
        except sqlite3.Error as e:
            raise StoreError("Failed to fetch tasks", e) from e
        tasks = (self._row_to_task(r) for r in rows)
        return [t for t in tasks if t is not None]

    def get_task(self, task_id: int) -> Optional[Task]:
        if task_id is None or task_id <= 0:
            raise InputError(f"task id must be positive, got {task_id!r}")
        try:
            with self._db.connect() as con:
                row = con.execute(f"SELECT {_COLUMNS} FROM {TABLE} WHERE ID = ?", (int(task_id),)).fetchone()
        except sqlite3.Error as e:
            raise StoreError(f"Failed to get task id={task_id}", e) from e
        return self._row_to_task(row) if row else None

    def count_tasks(self) -> int:
        try:
            with self._db.connect() as con:
                (n,) = con.execute(f"SELECT COUNT(*) FROM {TABLE}").fetchone()
        except sqlite3.Error as e:
            raise StoreError("Failed to count tasks", e) from e
        return int(n)

    def next_id(self) -> int:
        try:
            with self._db.connect() as con:
                return self._next_id(con)
        except sqlite3.Error as e:
            raise StoreError("Failed to generate next ID", e) from e

    def _next_id(self, con: sqlite3.Connection) -> int:
        (max_id,) = con.execute(f"SELECT MAX(ID) FROM {TABLE}").fetchone()
        return max(int(max_id or 0), self._last_id) + 1

    # -------------------------
    # Writes
    # -------------------------
    def add_task(self, task: Task) -> Task:
        """Insert `task` under a freshly allocated id (task.id is ignored)."""
        if task is None:
            raise InputError("task must not be None")
        with self._alloc_lock:
            try:
                with self._db.connect() as con:
                    # hold the write lock from MAX(ID) through the INSERT
                    con.execute("BEGIN IMMEDIATE")
                    new_id = self._next_id(con)
                    con.execute(
                        f"INSERT INTO {TABLE} (ID, TITLE, DESCRIPTION, STATE, DUEDATE, RECURRENCE_DAYS) "
                        "VALUES (?, ?, ?, ?, ?, ?)",
                        (new_id, *self._task_params(task)),
                    )
            except sqlite3.Error as e:
                raise StoreError("Failed to add task", e) from e
            self._last_id = new_id
        self._log.debug("Task added id=%s kind=%s state=%s", new_id, task.kind, task.state.value)
        return task.with_id(new_id)

    def update_task(self, task: Task) -> None:
        """Replace the row with task.id. A missing row is not an error."""
        if task is None:
            raise InputError("task must not be None")
        try:
            with self._db.connect() as con:
                cur = con.execute(
                    f"UPDATE {TABLE} SET TITLE = ?, DESCRIPTION = ?, STATE = ?, DUEDATE = ?, "
                    "RECURRENCE_DAYS = ? WHERE ID = ?",
                    (*self._task_params(task), int(task.id)),
                )
        except sqlite3.Error as e:
            raise StoreError(f"Failed to update task id={task.id}", e) from e
        if cur.rowcount == 0:
            self._log.debug("Update skipped, no task id=%s", task.id)

    def delete_task(self, task_id: int) -> None:
        if task_id is None or task_id <= 0:
            raise InputError(f"task id must be positive, got {task_id!r}")
        try:
            with self._db.connect() as con:
                con.execute(f"DELETE FROM {TABLE} WHERE ID = ?", (int(task_id),))
        except sqlite3.Error as e:
            raise StoreError(f"Failed to delete task id={task_id}", e) from e

    def delete_all_tasks(self) -> None:
        with self._alloc_lock:
            try:
                with self._db.connect() as con:
                    con.execute(f"DELETE FROM {TABLE}")
            except sqlite3.Error as e:
                raise StoreError("Failed to delete all tasks", e) from e
            self._last_id = 0
