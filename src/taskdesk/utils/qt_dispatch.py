# Rev 0.1.0
from __future__ import annotations
import logging
from typing import Callable

from PySide6.QtCore import QObject, Qt, Signal, Slot

log = logging.getLogger(__name__)


class UiDispatcher(QObject):
    """
    Runs callables on the thread this object lives in (the UI thread).
    Safe to call from any thread; delivery goes through a queued connection,
    so it happens on the next event-loop pass.
    """

    _invoke = Signal(object)

    def __init__(self, parent: QObject | None = None):
        super().__init__(parent)
        self._invoke.connect(self._run, Qt.ConnectionType.QueuedConnection)

    def __call__(self, fn: Callable[[], None]) -> None:
        self._invoke.emit(fn)

    @Slot(object)
    def _run(self, fn: Callable[[], None]) -> None:
        try:
            fn()
        except Exception:
            log.exception("UI callback raised")
