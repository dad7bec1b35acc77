# Rev 0.1.0
"""
Composable task predicates.

Atomic filters (by_title, by_state, by_due_date) combine with and_/or_
(also spelled & and |). Both combinators short-circuit.
"""
from __future__ import annotations
from datetime import date
from typing import Callable, Optional, Union

from .entities import Task
from .state import TaskState


class TaskFilter:
    """A total predicate over Task."""

    __slots__ = ("_pred", "_label")

    def __init__(self, pred: Callable[[Task], bool], label: str = "filter") -> None:
        self._pred = pred
        self._label = label

    def matches(self, task: Task) -> bool:
        return bool(self._pred(task))

    __call__ = matches

    def __repr__(self) -> str:
        return f"TaskFilter({self._label})"

    # ---- combinators
    def and_(self, other: TaskFilter) -> TaskFilter:
        left, right = self, other
        return TaskFilter(lambda t: left.matches(t) and right.matches(t), f"{left._label} AND {right._label}")

    def or_(self, other: TaskFilter) -> TaskFilter:
        left, right = self, other
        return TaskFilter(lambda t: left.matches(t) or right.matches(t), f"{left._label} OR {right._label}")

    def negate(self) -> TaskFilter:
        inner = self
        return TaskFilter(lambda t: not inner.matches(t), f"NOT {inner._label}")

    __and__ = and_
    __or__ = or_
    __invert__ = negate

    # ---- atoms
    @staticmethod
    def by_title(text: Optional[str]) -> TaskFilter:
        needle = (text or "").lower()
        if not needle:
            return TaskFilter(lambda t: True, "title~''")
        return TaskFilter(lambda t: t.title is not None and needle in t.title.lower(), f"title~{needle!r}")

    @staticmethod
    def by_state(name: Union[str, TaskState]) -> TaskFilter:
        wanted = str(name).casefold()
        return TaskFilter(lambda t: t.state is not None and t.state.value.casefold() == wanted, f"state={name}")

    @staticmethod
    def by_due_date(day: date) -> TaskFilter:
        return TaskFilter(lambda t: t.due_date is not None and t.due_date == day, f"due={day}")

    @staticmethod
    def from_form(
        title: Optional[str] = None,
        state: Optional[Union[str, TaskState]] = None,
        due_text: Optional[str] = None,
        *,
        match_any: bool = False,
    ) -> TaskFilter:
        """
        Build the filter for the filter form.
        Title is always part of it; state and due date only when provided.
        A due date that is not ISO YYYY-MM-DD is treated as not provided.
        """
        result = TaskFilter.by_title(title)
        extra = []
        if state is not None and str(state).strip():
            extra.append(TaskFilter.by_state(str(state).strip()))
        due_text = (due_text or "").strip()
        if due_text:
            try:
                extra.append(TaskFilter.by_due_date(date.fromisoformat(due_text)))
            except ValueError:
                pass
        for f in extra:
            result = result.or_(f) if match_any else result.and_(f)
        return result


ALWAYS_TRUE = TaskFilter(lambda t: True, "true")
ALWAYS_FALSE = TaskFilter(lambda t: False, "false")

by_title = TaskFilter.by_title
by_state = TaskFilter.by_state
by_due_date = TaskFilter.by_due_date
