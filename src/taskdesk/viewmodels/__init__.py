from .dto import TaskInput
from .tasks_viewmodel import TasksViewModel

__all__ = ["TaskInput", "TasksViewModel"]
