# Rev 0.1.0
from __future__ import annotations
from dataclasses import dataclass
from datetime import date
from typing import Optional, Union

from ..models.state import TaskState


@dataclass(frozen=True)
class TaskInput:
    """
    Form data handed from the task dialog to the view-model.
    recurrence_days > 0 asks for a RecurringTask, 0 for a BasicTask.
    """
    title: str
    description: Optional[str] = None
    state: Union[TaskState, str, None] = None
    due_date: Optional[date] = None
    recurrence_days: int = 0

    @property
    def is_recurring(self) -> bool:
        return bool(self.recurrence_days) and self.recurrence_days > 0
