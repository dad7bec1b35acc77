from .report import build_report, format_summary, format_task
from .task_service import TaskModel

__all__ = ["TaskModel", "build_report", "format_task", "format_summary"]
