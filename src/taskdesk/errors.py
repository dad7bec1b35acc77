# Rev 0.1.0

"""Exception types shared by the store, the model and the view-model."""
from __future__ import annotations
from typing import Optional


class TaskdeskError(Exception):
    """Base class for every error raised by taskdesk."""


class InputError(TaskdeskError, ValueError):
    """Invalid argument handed to an entity or repository call."""


class ModelError(TaskdeskError):
    """Validation failure raised synchronously by the model or view-model."""

    def __init__(self, message: str, cause: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause


class StoreError(TaskdeskError):
    """Any failure coming out of the embedded database."""

    def __init__(self, message: str, cause: Optional[BaseException] = None) -> None:
        super().__init__(message if cause is None else f"{message}: {cause}")
        self.message = message
        self.cause = cause
