# Rev 0.1.0

"""Observable task model (Rev 0.1.0)
Asynchronous facade over a TaskRepository (normally the caching proxy).
- Persistence runs on a fixed ThreadPoolExecutor (4 workers by default, 1 for strict ordering)
- snapshot() serves the last loaded list without touching the database
- Observers are called with no payload after every successful mutation or load
"""
from __future__ import annotations
import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from datetime import date
from typing import Callable, List, Optional, Tuple, Union

from ..errors import InputError, ModelError, StoreError
from ..models.entities import BasicTask, RecurringTask, Task
from ..models.state import TaskState
from ..models.types import Dispatcher, Observer
from ..repositories.base import TaskRepository

log = logging.getLogger(__name__)

StateArg = Union[TaskState, str, None]


class TaskModel:
    def __init__(
        self,
        repository: TaskRepository,
        *,
        workers: int = 4,
        callback_dispatcher: Optional[Dispatcher] = None,
        today: Callable[[], date] = date.today,
    ) -> None:
        if workers < 1:
            raise ModelError("workers must be at least 1")
        self._repo = repository
        self._workers = workers
        self._executor = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="taskdesk-worker")
        self._dispatch = callback_dispatcher
        self._today = today
        self._snapshot: Tuple[Task, ...] = ()
        self._snapshot_lock = threading.Lock()
        self._observers: List[Observer] = []
        self._observers_lock = threading.Lock()
        self._closed = False

    @property
    def repository(self) -> TaskRepository:
        return self._repo

    @property
    def workers(self) -> int:
        return self._workers

    # ---- lifecycle
    def shutdown(self, wait: bool = True) -> None:
        """Stop accepting work; with wait=True, block until queued jobs finish."""
        self._closed = True
        self._executor.shutdown(wait=wait)

    def __enter__(self) -> "TaskModel":
        return self

    def __exit__(self, *exc) -> None:
        self.shutdown(wait=True)

    # ---- observers
    def subscribe(self, observer: Observer) -> None:
        with self._observers_lock:
            if observer not in self._observers:
                self._observers.append(observer)

    def unsubscribe(self, observer: Observer) -> None:
        with self._observers_lock:
            if observer in self._observers:
                self._observers.remove(observer)

    def _notify_observers(self) -> None:
        with self._observers_lock:
            current = list(self._observers)
        for obs in current:
            try:
                obs()
            except Exception:
                log.exception("Task observer %r raised", obs)

    # ---- queries
    def snapshot(self) -> Tuple[Task, ...]:
        return self._snapshot

    def load(self) -> "Future[bool]":
        return self._schedule("load", None)

    def list_async(self, callback: Callable[[List[Task]], None]) -> "Future[bool]":
        """
        Fetch a fresh list and hand it to `callback`.
        Without a callback_dispatcher the callback runs on the worker thread;
        with one, the dispatcher decides where (normally the UI thread).
        """
        if callback is None:
            raise ModelError("callback is required")

        def run() -> bool:
            try:
                tasks = self._repo.list_tasks()
            except StoreError as e:
                log.error("list_async failed: %s", e)
                return False
            except Exception:
                log.exception("list_async failed unexpectedly")
                return False

            def deliver() -> None:
                callback(tasks)

            try:
                if self._dispatch is None:
                    deliver()
                else:
                    self._dispatch(deliver)
            except Exception:
                log.exception("list_async callback raised")
                return False
            return True

        return self._submit(run)

    # ---- commands
    def add_task(
        self,
        title: Optional[str],
        description: Optional[str] = None,
        state: StateArg = None,
        due_date: Optional[date] = None,
    ) -> "Future[bool]":
        self._check_title(title)
        self._check_due_date(due_date)
        task = self._build(lambda: BasicTask(0, title, description, TaskState.parse(state), due_date))
        return self._schedule(f"add task {task.title!r}", lambda: self._repo.add_task(task))

    def add_recurring_task(
        self,
        title: Optional[str],
        description: Optional[str],
        state: StateArg,
        due_date: Optional[date],
        interval: int,
    ) -> "Future[bool]":
        self._check_title(title)
        self._check_interval(interval)
        self._check_due_date(due_date)
        task = self._build(
            lambda: RecurringTask(0, title, description, TaskState.parse(state), due_date, interval=interval)
        )
        return self._schedule(f"add recurring task {task.title!r}", lambda: self._repo.add_task(task))

    def update_task(self, task: Task) -> "Future[bool]":
        if task is None:
            raise ModelError("task is required")
        if not isinstance(task, (BasicTask, RecurringTask)):
            raise ModelError(f"not a task: {task!r}")
        if task.id <= 0:
            raise ModelError(f"task id must be positive, got {task.id}")
        return self._schedule(f"update task id={task.id}", lambda: self._repo.update_task(task))

    def delete_task(self, task_id: int) -> "Future[bool]":
        if isinstance(task_id, bool) or not isinstance(task_id, int) or task_id <= 0:
            raise ModelError(f"task id must be a positive integer, got {task_id!r}")
        return self._schedule(f"delete task id={task_id}", lambda: self._repo.delete_task(task_id))

    def delete_all_tasks(self) -> "Future[bool]":
        return self._schedule("delete all tasks", self._repo.delete_all_tasks)

    # ---- validation
    @staticmethod
    def _check_title(title: Optional[str]) -> None:
        if title is None or not str(title).strip():
            raise ModelError("Title is required")

    @staticmethod
    def _check_interval(interval) -> None:
        if isinstance(interval, bool) or not isinstance(interval, int) or interval <= 0:
            raise ModelError("Recurrence interval must be a positive number of days")

    def _check_due_date(self, due_date: Optional[date]) -> None:
        if due_date is not None and due_date < self._today():
            raise ModelError("Due date must be today or in the future")

    @staticmethod
    def _build(factory: Callable[[], Task]) -> Task:
        try:
            return factory()
        except InputError as e:
            raise ModelError(str(e), e) from e

    # ---- scheduling
    def _submit(self, fn: Callable[[], bool]) -> "Future[bool]":
        if self._closed:
            raise ModelError("model is shut down")
        try:
            return self._executor.submit(fn)
        except RuntimeError as e:
            raise ModelError("model is shut down", e) from e

    def _schedule(self, op: str, work: Optional[Callable[[], object]]) -> "Future[bool]":
        """Run `work` (if any), refresh the snapshot, then notify. Failures are logged and dropped."""

        def run() -> bool:
            try:
                if work is not None:
                    work()
                # list and publish under one lock; jobs must not interleave here
                with self._snapshot_lock:
                    self._snapshot = tuple(self._repo.list_tasks())
            except StoreError as e:
                log.error("%s failed: %s", op, e)
                return False
            except Exception:
                log.exception("%s failed unexpectedly", op)
                return False
            self._notify_observers()
            return True

        return self._submit(run)
