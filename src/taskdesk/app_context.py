# taskdesk application context
# Rev 0.1.0

from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from .repositories.cached_task_repository import CachedTaskRepository
from .repositories.sqlite_task_repository import SQLiteTaskRepository
from .services.task_service import TaskModel
from .utils.config import load_settings
from .utils.logging_setup import get_logger


@dataclass
class AppContext:
    """Central container for shared app resources."""
    store: SQLiteTaskRepository
    repository: CachedTaskRepository
    model: TaskModel
    settings: Dict[str, Any] = field(default_factory=dict)
    dispatcher: Optional[Any] = None   # UiDispatcher, kept alive with the context

    @classmethod
    def create(
        cls,
        db_path: Optional[Path | str] = None,
        settings: Optional[Dict[str, Any]] = None,
        *,
        ui_callbacks: Optional[bool] = None,
    ) -> "AppContext":
        """
        Initialize store, cache and model.
        Without db_path the process-wide store is used. Callbacks from
        list_async go to the UI thread unless settings say "worker"; that
        needs a running QCoreApplication.
        """
        log = get_logger("AppContext")
        settings = settings if settings is not None else load_settings()
        model_cfg = settings.get("model") or {}

        store = SQLiteTaskRepository(db_path) if db_path is not None else SQLiteTaskRepository.instance()
        repository = CachedTaskRepository(store)

        if ui_callbacks is None:
            ui_callbacks = model_cfg.get("callbacks", "ui") == "ui"
        dispatcher = None
        if ui_callbacks:
            from .utils.qt_dispatch import UiDispatcher
            dispatcher = UiDispatcher()

        model = TaskModel(
            repository,
            workers=int(model_cfg.get("workers", 4)),
            callback_dispatcher=dispatcher,
        )
        ctx = cls(store=store, repository=repository, model=model, settings=settings, dispatcher=dispatcher)
        log.info("AppContext initialized with DB=%s workers=%s", store.path, model.workers)
        return ctx

    def create_view_model(self, parent=None):
        from .viewmodels.tasks_viewmodel import TasksViewModel
        vm = TasksViewModel(self.model, parent)
        self.model.load()
        return vm

    def close(self) -> None:
        self.model.shutdown(wait=True)
