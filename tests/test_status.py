"""
Tests for status derivation and statistics
"""

from taskboard.models.task import Todo
from taskboard.services.status import (
    compute_stats,
    is_overdue,
    round_half_up,
    should_auto_complete,
    sort_by_priority,
)


def test_is_overdue(make_task):
    today = "2026-01-01"

    assert is_overdue(make_task("A", "todo", due_date="2020-01-01"), today)
    assert is_overdue(make_task("A", "in_progress", due_date="2025-12-31"), today)
    assert not is_overdue(make_task("A", "completed", due_date="2020-01-01"), today)
    assert not is_overdue(make_task("A", "todo", due_date="2026-01-01"), today)
    assert not is_overdue(make_task("A", "todo", due_date=None), today)


def test_stats(board_tasks, make_task):
    tasks = board_tasks + [make_task("L", "todo", 3, due_date="2026-02-01")]

    stats = compute_stats(tasks, today="2026-03-10")

    assert stats.total == 7
    assert stats.todo == 4
    assert stats.in_progress == 2
    assert stats.completed == 1
    assert stats.overdue == 1
    assert stats.completion_rate == 14


def test_stats_empty_board():
    stats = compute_stats([], today="2026-03-10")

    assert stats.total == 0
    assert stats.completion_rate == 0


def test_stats_count_timer_overdue_by_date_only(make_task):
    tasks = [
        make_task("A", "overdue", 0, due_date="2099-01-01"),
        make_task("B", "completed", 0, due_date="2020-01-01"),
    ]

    stats = compute_stats(tasks, today="2026-03-10")

    assert stats.overdue == 0
    assert stats.completion_rate == 50


def test_should_auto_complete():
    done = [Todo(id="1", title="a", completed=True), Todo(id="2", title="b", completed=True)]
    open_ = [Todo(id="1", title="a", completed=True), Todo(id="2", title="b")]

    assert should_auto_complete(done, "in_progress")
    assert not should_auto_complete(done, "completed")
    assert not should_auto_complete(open_, "todo")
    assert not should_auto_complete([], "todo")
    assert not should_auto_complete(None, "todo")


def test_sort_by_priority_is_stable(make_task):
    tasks = [
        make_task("L1", priority="low"),
        make_task("H1", priority="high"),
        make_task("M1", priority="medium"),
        make_task("H2", priority="high"),
    ]

    assert [t.id for t in sort_by_priority(tasks)] == ["H1", "H2", "M1", "L1"]


def test_round_half_up():
    assert round_half_up(12.5) == 13
    assert round_half_up(2.5) == 3
    assert round_half_up(33.3) == 33
