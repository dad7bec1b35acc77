from __future__ import annotations

from datetime import date

import pytest

from taskdesk.models.entities import BasicTask, RecurringTask
from taskdesk.models.state import TaskState
from taskdesk.services.report import EMPTY_REPORT, build_report, format_summary, format_task

MILK = BasicTask(1, "Buy milk", "2%", TaskState.TODO, date(2025, 6, 1))
GYM = RecurringTask(2, "Gym", None, TaskState.IN_PROGRESS, None, interval=7)


def test_task_lines():
    assert format_task(MILK) == "[1] Buy milk [TODO] - 2025-06-01 (Type: BASIC)"
    assert format_task(GYM) == "[2] Gym [IN_PROGRESS] - None (Type: RECURRING, Interval: 7 days)"


def test_summary_lines():
    assert format_summary(MILK) == "Task: Buy milk, State: TODO, Due: 2025-06-01"
    assert format_summary(GYM) == "Recurring Task: Gym [7 days], State: IN_PROGRESS, Due: None"


def test_report_joins_in_order():
    assert build_report([MILK, GYM]).splitlines() == [format_task(MILK), format_task(GYM)]


def test_empty_report():
    assert build_report([]) == EMPTY_REPORT == "No tasks."


def test_non_task_rejected():
    with pytest.raises(TypeError):
        format_task("Buy milk")
