"""
Message formatting utilities
"""

from datetime import date
from typing import Dict, List, Optional
from taskboard.models.task import Task
from taskboard.services.status import TaskStats, is_overdue

HEADER_TITLES: Dict[str, str] = {
    "todo": "TO DO",
    "in_progress": "IN PROGRESS",
    "completed": "COMPLETED",
    "overdue": "OVER BUDGET",
}


def format_minutes(minutes: int) -> str:
    """
    Format a duration in minutes

    Examples: 45 -> "45m", 125 -> "2h 5m"
    """
    hours, mins = divmod(minutes, 60)
    if hours > 0:
        return f"{hours}h {mins}m"
    return f"{mins}m"


def format_due_date(due_date: str) -> str:
    """
    Format a YYYY-MM-DD date for display

    Example: "2026-02-16" -> "Feb 16, 2026". Unparseable values are shown as is.
    """
    try:
        parsed = date.fromisoformat(due_date)
    except ValueError:
        return due_date
    return f"{parsed.strftime('%b')} {parsed.day}, {parsed.year}"


def format_task_line(task: Task, today: Optional[str] = None) -> str:
    """One-line task summary"""
    line = f"{task.order}. {task.title} [{task.priority}]"
    if task.due_date:
        line += f" due {format_due_date(task.due_date)}"
        if is_overdue(task, today):
            line += " (overdue)"
    if task.estimated_minutes:
        line += f" {format_minutes(task.elapsed_minutes)}/{format_minutes(task.estimated_minutes)}"
    if task.todos:
        done = sum(1 for todo in task.todos if todo.completed)
        line += f" todos {done}/{len(task.todos)}"
    return line


def format_board(columns: Dict[str, List[Task]], today: Optional[str] = None) -> str:
    """Render columns as plain text sections"""
    sections = []
    for status, tasks in columns.items():
        header = HEADER_TITLES.get(status, status.upper())
        lines = [f"{header} ({len(tasks)})"]
        if tasks:
            lines.extend(f"  {format_task_line(task, today)}" for task in tasks)
        else:
            lines.append("  (empty)")
        sections.append("\n".join(lines))
    return "\n\n".join(sections)


def format_stats(stats: TaskStats) -> str:
    return (
        f"Total: {stats.total} | To do: {stats.todo} | In progress: {stats.in_progress} | "
        f"Completed: {stats.completed} | Overdue: {stats.overdue} | "
        f"Completion: {stats.completion_rate}%"
    )
