# Rev 0.1.0
"""Plain-text task report used by the report dialog and the console."""
from __future__ import annotations
from typing import Iterable

from ..models.entities import BasicTask, RecurringTask, Task

EMPTY_REPORT = "No tasks."


def format_task(task: Task) -> str:
    """One report line, e.g. `[1] Buy milk [TODO] - 2025-06-01 (Type: BASIC)`."""
    match task:
        case RecurringTask(id=tid, title=title, state=state, due_date=due, interval=days):
            return f"[{tid}] {title} [{state}] - {due} (Type: RECURRING, Interval: {days} days)"
        case BasicTask(id=tid, title=title, state=state, due_date=due):
            return f"[{tid}] {title} [{state}] - {due} (Type: BASIC)"
    raise TypeError(f"not a task: {task!r}")


def format_summary(task: Task) -> str:
    match task:
        case RecurringTask(title=title, state=state, due_date=due, interval=days):
            return f"Recurring Task: {title} [{days} days], State: {state}, Due: {due}"
        case BasicTask(title=title, state=state, due_date=due):
            return f"Task: {title}, State: {state}, Due: {due}"
    raise TypeError(f"not a task: {task!r}")


def build_report(tasks: Iterable[Task]) -> str:
    lines = [format_task(t) for t in tasks]
    return "\n".join(lines) if lines else EMPTY_REPORT
