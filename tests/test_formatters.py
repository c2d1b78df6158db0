"""
Tests for text formatting
"""

from taskboard.services.status import TaskStats
from taskboard.utils.formatters import (
    format_board,
    format_due_date,
    format_minutes,
    format_stats,
    format_task_line,
)


def test_format_minutes():
    assert format_minutes(0) == "0m"
    assert format_minutes(45) == "45m"
    assert format_minutes(60) == "1h 0m"
    assert format_minutes(125) == "2h 5m"


def test_format_due_date():
    assert format_due_date("2026-02-16") == "Feb 16, 2026"
    assert format_due_date("2026-11-03") == "Nov 3, 2026"


def test_format_task_line(make_task):
    task = make_task(
        "A", "todo", 2,
        title="Write report", priority="high", due_date="2026-01-05",
        estimatedMinutes=90, elapsedMinutes=30,
        todos=[{"id": "d1", "title": "a", "completed": True}, {"id": "d2", "title": "b"}],
    )

    line = format_task_line(task, today="2026-03-10")

    assert line == "2. Write report [high] due Jan 5, 2026 (overdue) 30m/1h 30m todos 1/2"


def test_format_board(make_task):
    columns = {
        "todo": [make_task("A", title="Plan", due_date=None)],
        "in_progress": [],
    }

    text = format_board(columns, today="2026-03-10")

    assert text == "TO DO (1)\n  0. Plan [medium]\n\nIN PROGRESS (0)\n  (empty)"


def test_format_stats():
    stats = TaskStats(total=4, todo=1, in_progress=1, completed=2, overdue=1, completion_rate=50)

    assert format_stats(stats) == (
        "Total: 4 | To do: 1 | In progress: 1 | Completed: 2 | Overdue: 1 | Completion: 50%"
    )


def test_format_due_date_keeps_malformed_value(make_task):
    assert format_due_date("next week") == "next week"

    task = make_task("A", title="Plan", due_date="2026/04/01")
    assert format_task_line(task, today="2026-03-10") == "0. Plan [medium] due 2026/04/01"
