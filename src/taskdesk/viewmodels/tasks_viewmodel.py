# Rev 0.1.0 UI-thread re-dispatch + restated validation
from __future__ import annotations

import logging
import threading
from concurrent.futures import Future
from datetime import date
from typing import Callable, Iterable, List, Optional, Union

from PySide6.QtCore import QObject, Qt, Signal, Slot

from ..errors import InputError, ModelError
from ..models.entities import BasicTask, RecurringTask, Task
from ..models.filters import TaskFilter
from ..models.state import TaskState
from ..models.types import Observer
from ..services.report import build_report
from .dto import TaskInput

log = logging.getLogger(__name__)

StateArg = Union[TaskState, str, None]


class TasksViewModel(QObject):
    """
    VM for the task list.
    Emits (always on the thread this object lives in):
      - tasksChanged()            after every model change
      - tasksLoaded(tasks: list)  when a list_async() result arrives
    """

    tasksChanged = Signal()
    tasksLoaded = Signal(list)

    # worker thread -> UI thread hops
    _modelChanged = Signal()
    _listReady = Signal(object, object)

    def __init__(self, model, parent: QObject | None = None, *, today: Callable[[], date] = date.today):
        super().__init__(parent)
        self._model = model
        self._today = today
        self._observers: List[Observer] = []
        self._observers_lock = threading.Lock()

        self._modelChanged.connect(self._on_model_changed, Qt.ConnectionType.QueuedConnection)
        self._listReady.connect(self._on_list_ready, Qt.ConnectionType.QueuedConnection)
        self._model.subscribe(self._on_tasks_changed)

    def dispose(self) -> None:
        self._model.unsubscribe(self._on_tasks_changed)

    # ---- observers
    def register_observer(self, observer: Observer) -> None:
        with self._observers_lock:
            if observer not in self._observers:
                self._observers.append(observer)

    def unregister_observer(self, observer: Observer) -> None:
        with self._observers_lock:
            if observer in self._observers:
                self._observers.remove(observer)

    # ---- queries
    def tasks(self) -> List[Task]:
        return list(self._model.snapshot())

    def filtered(self, task_filter: Optional[TaskFilter] = None) -> List[Task]:
        tasks = self._model.snapshot()
        if task_filter is None:
            return list(tasks)
        return [t for t in tasks if task_filter.matches(t)]

    def find(self, task_id: int) -> Optional[Task]:
        for t in self._model.snapshot():
            if t.id == task_id:
                return t
        return None

    @staticmethod
    def build_filter(
        title: Optional[str] = None,
        state: StateArg = None,
        due_text: Optional[str] = None,
        *,
        match_any: bool = False,
    ) -> TaskFilter:
        return TaskFilter.from_form(title, state, due_text, match_any=match_any)

    def report(self) -> str:
        return build_report(self._model.snapshot())

    def reload(self) -> Future:
        return self._model.load()

    def list_async(self, callback: Optional[Callable[[List[Task]], None]] = None) -> Future:
        """Fresh list from storage; `callback` (and tasksLoaded) run on the UI thread."""
        return self._model.list_async(lambda tasks: self._listReady.emit(callback, list(tasks)))

    # ---- commands
    def add_task(
        self,
        title: Optional[str],
        description: Optional[str] = None,
        state: StateArg = None,
        due_date: Optional[date] = None,
    ) -> Future:
        self._check_title(title)
        st = self._state(state)
        self._check_due_date(due_date)
        return self._model.add_task(title, description, st, due_date)

    def add_recurring_task(
        self,
        title: Optional[str],
        description: Optional[str],
        state: StateArg,
        due_date: Optional[date],
        interval: int,
    ) -> Future:
        self._check_title(title)
        st = self._state(state)
        if isinstance(interval, bool) or not isinstance(interval, int) or interval <= 0:
            raise ModelError("recurrenceDays must be positive")
        self._check_due_date(due_date)
        add_recurring = getattr(self._model, "add_recurring_task", None)
        if not callable(add_recurring):
            raise ModelError("Model does not support recurring tasks")
        return add_recurring(title, description, st, due_date, interval)

    def update_task(self, task: Task) -> Future:
        if task is None:
            raise ModelError("task is required")
        if not isinstance(task, (BasicTask, RecurringTask)):
            raise ModelError(f"not a task: {task!r}")
        # only a changed due date is checked; overdue tasks stay editable
        existing = self.find(task.id)
        if existing is None or existing.due_date != task.due_date:
            self._check_due_date(task.due_date)
        return self._model.update_task(task)

    def delete_task(self, task_id: int) -> Future:
        return self._model.delete_task(task_id)

    def delete_tasks(self, task_ids: Iterable[int]) -> List[Future]:
        return [self.delete_task(tid) for tid in task_ids]

    def submit(self, data: TaskInput) -> Future:
        """Create a task from dialog input; recurrence_days > 0 makes it recurring."""
        if data is None:
            raise ModelError("task input is required")
        if data.recurrence_days < 0:
            raise ModelError("recurrenceDays must be positive")
        if data.is_recurring:
            return self.add_recurring_task(data.title, data.description, data.state, data.due_date, data.recurrence_days)
        return self.add_task(data.title, data.description, data.state, data.due_date)

    def edit(self, task_id: int, data: TaskInput) -> Future:
        """Replace the task `task_id` with dialog input, switching variant if needed."""
        if data is None:
            raise ModelError("task input is required")
        existing = self.find(task_id)
        if existing is None:
            raise ModelError(f"No task with id {task_id}")
        if data.recurrence_days < 0:
            raise ModelError("recurrenceDays must be positive")
        self._check_title(data.title)
        st = self._state(data.state)
        try:
            if data.is_recurring:
                updated: Task = RecurringTask(
                    existing.id, data.title, data.description, st, data.due_date, interval=data.recurrence_days
                )
            else:
                updated = BasicTask(existing.id, data.title, data.description, st, data.due_date)
        except InputError as e:
            raise ModelError(str(e), e) from e
        return self.update_task(updated)

    # ---- validation
    @staticmethod
    def _check_title(title: Optional[str]) -> None:
        if title is None or not str(title).strip():
            raise ModelError("Title is required")

    @staticmethod
    def _state(state: StateArg) -> TaskState:
        try:
            return TaskState.parse(state)
        except InputError as e:
            raise ModelError(str(e), e) from e

    def _check_due_date(self, due_date: Optional[date]) -> None:
        if due_date is not None and due_date < self._today():
            raise ModelError("Due date must be today or in the future")

    # ---- model -> UI
    def _on_tasks_changed(self) -> None:
        # model observer; may run on a worker thread
        self._modelChanged.emit()

    @Slot()
    def _on_model_changed(self) -> None:
        self.tasksChanged.emit()
        with self._observers_lock:
            current = list(self._observers)
        for obs in current:
            try:
                obs()
            except Exception:
                log.exception("View observer %r raised", obs)

    @Slot(object, object)
    def _on_list_ready(self, callback, tasks) -> None:
        self.tasksLoaded.emit(tasks)
        if callback is None:
            return
        try:
            callback(tasks)
        except Exception:
            log.exception("list_async callback raised")
