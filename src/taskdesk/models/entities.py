# Rev 0.1.0
"""Immutable task records. A task is either a BasicTask or a RecurringTask."""
from __future__ import annotations
import dataclasses
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional, Union

from ..errors import InputError
from .state import TaskState
from .types import TaskKind

TITLE_MAX = 255
DESCRIPTION_MAX = 1024


@dataclass(frozen=True)
class _TaskBase:
    id: int
    title: str
    description: Optional[str] = None
    state: TaskState = TaskState.TODO
    due_date: Optional[date] = None

    def __post_init__(self) -> None:
        if not isinstance(self.id, int) or self.id < 0:
            raise InputError(f"id must be a non-negative integer, got {self.id!r}")
        if self.title is None or not str(self.title).strip():
            raise InputError("title must not be empty")
        title = str(self.title).strip()
        if len(title) > TITLE_MAX:
            raise InputError(f"title is longer than {TITLE_MAX} characters")
        object.__setattr__(self, "title", title)

        if self.description is not None and len(self.description) > DESCRIPTION_MAX:
            raise InputError(f"description is longer than {DESCRIPTION_MAX} characters")

        if not isinstance(self.state, TaskState):
            # accept canonical names, anything else is a caller bug
            if isinstance(self.state, str) and self.state in TaskState.__members__:
                object.__setattr__(self, "state", TaskState(self.state))
            else:
                raise InputError(f"state must be a TaskState, got {self.state!r}")

        if isinstance(self.due_date, datetime):
            object.__setattr__(self, "due_date", self.due_date.date())
        elif self.due_date is not None and not isinstance(self.due_date, date):
            raise InputError(f"due_date must be a date, got {self.due_date!r}")

    def with_id(self, new_id: int):
        return dataclasses.replace(self, id=new_id)

    def replace(self, **changes):
        """Return a copy of the same variant with `changes` applied."""
        return dataclasses.replace(self, **changes)


@dataclass(frozen=True)
class BasicTask(_TaskBase):

    @property
    def kind(self) -> TaskKind:
        return "BASIC"


@dataclass(frozen=True)
class RecurringTask(_TaskBase):
    """Task that repeats every `interval` days."""
    interval: int = field(kw_only=True)

    def __post_init__(self) -> None:
        super().__post_init__()
        if isinstance(self.interval, bool) or not isinstance(self.interval, int) or self.interval < 1:
            raise InputError(f"interval must be a positive number of days, got {self.interval!r}")

    @property
    def kind(self) -> TaskKind:
        return "RECURRING"


Task = Union[BasicTask, RecurringTask]


def recurrence_days(task: Task) -> Optional[int]:
    """Interval in days for recurring tasks, None for basic ones."""
    if isinstance(task, RecurringTask):
        return task.interval
    return None
