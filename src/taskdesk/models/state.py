# Rev 0.1.0

"""Task lifecycle state."""
from __future__ import annotations
from enum import StrEnum
from typing import Optional

from ..errors import InputError


class TaskState(StrEnum):
    """
    Closed set of lifecycle values.
    The value is the canonical name used on disk and by filters.
    """

    TODO = "TODO"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"

    @property
    def label(self) -> str:
        return _LABELS[self]

    @classmethod
    def from_db(cls, raw: Optional[str]) -> TaskState:
        # Stored names are case-sensitive; anything unknown degrades to TODO
        if not raw:
            return cls.TODO
        try:
            return cls(raw)
        except ValueError:
            return cls.TODO

    @classmethod
    def parse(cls, text: "Optional[str | TaskState]") -> TaskState:
        """Parse user input (case-insensitive). None or blank means TODO."""
        if isinstance(text, TaskState):
            return text
        if text is None or not str(text).strip():
            return cls.TODO
        key = str(text).strip().upper().replace(" ", "_").replace("-", "_")
        try:
            return cls(key)
        except ValueError:
            raise InputError(f"unknown state: {text!r}") from None


_LABELS = {
    TaskState.TODO: "To do",
    TaskState.IN_PROGRESS: "In progress",
    TaskState.COMPLETED: "Completed",
}
