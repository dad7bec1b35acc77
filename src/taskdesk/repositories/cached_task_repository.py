# Rev 0.1.0
from __future__ import annotations

import threading
from typing import Dict, List, Optional

from ..models.entities import Task
from ..utils.logging_setup import get_logger
from .base import TaskRepository


class CachedTaskRepository:
    """
    Read-through cache in front of a TaskRepository.

    Two caches: the last list_tasks() result and a by-id map filled from that
    list or from get_task() hits (misses are not cached). Every write goes to
    the target first and then drops both caches. One lock serializes all calls.
    """

    def __init__(self, target: TaskRepository):
        self._target = target
        self._lock = threading.RLock()
        self._tasks: Optional[List[Task]] = None
        self._by_id: Dict[int, Task] = {}
        self._log = get_logger("Cache")

    # ---- target
    @property
    def target(self) -> TaskRepository:
        return self._target

    @target.setter
    def target(self, target: TaskRepository) -> None:
        with self._lock:
            self._target = target
            self.invalidate()

    def invalidate(self) -> None:
        with self._lock:
            self._tasks = None
            self._by_id.clear()

    # ---- reads
    def list_tasks(self) -> List[Task]:
        with self._lock:
            if self._tasks is None:
                tasks = list(self._target.list_tasks())
                self._tasks = tasks
                self._by_id = {t.id: t for t in tasks}
                self._log.debug("Cache filled with %d tasks", len(tasks))
            return list(self._tasks)

    def get_task(self, task_id: int) -> Optional[Task]:
        with self._lock:
            hit = self._by_id.get(task_id)
            if hit is not None:
                return hit
            task = self._target.get_task(task_id)
            if task is not None:
                self._by_id[task_id] = task
            return task

    def count_tasks(self) -> int:
        return len(self.list_tasks())

    # ---- writes
    def add_task(self, task: Task) -> Task:
        with self._lock:
            try:
                return self._target.add_task(task)
            finally:
                self.invalidate()

    def update_task(self, task: Task) -> None:
        with self._lock:
            try:
                self._target.update_task(task)
            finally:
                self.invalidate()

    def delete_task(self, task_id: int) -> None:
        with self._lock:
            try:
                self._target.delete_task(task_id)
            finally:
                self.invalidate()

    def delete_all_tasks(self) -> None:
        with self._lock:
            try:
                self._target.delete_all_tasks()
            finally:
                self.invalidate()
