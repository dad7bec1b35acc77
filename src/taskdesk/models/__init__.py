"""Task domain: state, entities and filters."""
from .state import TaskState
from .entities import BasicTask, RecurringTask, Task, recurrence_days
from .filters import ALWAYS_FALSE, ALWAYS_TRUE, TaskFilter

__all__ = [
    "TaskState",
    "BasicTask",
    "RecurringTask",
    "Task",
    "recurrence_days",
    "TaskFilter",
    "ALWAYS_TRUE",
    "ALWAYS_FALSE",
]
