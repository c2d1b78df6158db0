"""
Status derivation: overdue checks, auto-completion and board statistics
"""

import math
from typing import Iterable, List, Optional, Sequence
from pydantic import BaseModel
from taskboard.config.constants import PRIORITY_RANK
from taskboard.models.task import Task, TaskStatus, Todo
from taskboard.utils.date_utils import get_current_date_str


class TaskStats(BaseModel):
    """Counts shown on the dashboard"""
    total: int = 0
    todo: int = 0
    in_progress: int = 0
    completed: int = 0
    overdue: int = 0
    completion_rate: int = 0


def is_overdue(task: Task, today: Optional[str] = None) -> bool:
    """
    Check whether a task is past its due date

    Completed tasks are never overdue. Dates are fixed-width YYYY-MM-DD, so
    plain string comparison orders them correctly.
    """
    if task.status == TaskStatus.COMPLETED.value:
        return False
    if not task.due_date:
        return False
    return task.due_date < (today or get_current_date_str())


def all_todos_completed(todos: Optional[Sequence[Todo]]) -> bool:
    return bool(todos) and all(todo.completed for todo in todos)


def should_auto_complete(todos: Optional[Sequence[Todo]], status: str) -> bool:
    """
    A task completes itself once every todo is checked

    One-way: unchecking a todo never reopens the task.
    """
    return all_todos_completed(todos) and status != TaskStatus.COMPLETED.value


def priority_rank(priority: str) -> int:
    return PRIORITY_RANK[priority]


def sort_by_priority(tasks: Iterable[Task]) -> List[Task]:
    return sorted(tasks, key=lambda t: priority_rank(t.priority))


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def compute_stats(tasks: Sequence[Task], today: Optional[str] = None) -> TaskStats:
    """
    Compute dashboard statistics over a snapshot

    Args:
        tasks: All tasks (unfiltered)
        today: Reference date for overdue checks (defaults to current date)

    Returns:
        TaskStats; completion_rate is a rounded percentage, 0 for an empty board
    """
    today = today or get_current_date_str()
    total = len(tasks)
    completed = sum(1 for t in tasks if t.status == TaskStatus.COMPLETED.value)
    return TaskStats(
        total=total,
        todo=sum(1 for t in tasks if t.status == TaskStatus.TODO.value),
        in_progress=sum(1 for t in tasks if t.status == TaskStatus.IN_PROGRESS.value),
        completed=completed,
        overdue=sum(1 for t in tasks if is_overdue(t, today)),
        completion_rate=round_half_up(completed / total * 100) if total else 0,
    )
