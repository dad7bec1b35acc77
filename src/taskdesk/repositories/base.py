# Rev 0.1.0
"""Repository port shared by the SQLite store and the caching proxy."""
from __future__ import annotations
from typing import List, Optional, Protocol

from ..models.entities import Task


class TaskRepository(Protocol):
    def list_tasks(self) -> List[Task]: ...

    def get_task(self, task_id: int) -> Optional[Task]: ...

    def add_task(self, task: Task) -> Task: ...

    def update_task(self, task: Task) -> None: ...

    def delete_task(self, task_id: int) -> None: ...

    def delete_all_tasks(self) -> None: ...
