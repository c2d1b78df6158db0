"""
Column ordering rules

Pure functions over a snapshot of tasks. Each planner returns the list of
(task_id, changes) pairs that turn the snapshot into the new ordering; the
caller applies and persists them.
"""

from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple
from taskboard.models.task import Task, TaskStatus
from taskboard.utils.error_handler import ValidationError

TaskChanges = Dict[str, Any]
PlannedUpdate = Tuple[str, TaskChanges]


def normalize_status(status: Any) -> str:
    """
    Validate a status value and return its plain string form

    Raises:
        ValidationError: If the value is not a known status
    """
    try:
        return TaskStatus(status).value
    except ValueError:
        raise ValidationError(f"Unknown task status: {status!r}")


def column_tasks(tasks: Iterable[Task], status: Any) -> List[Task]:
    """
    Tasks of one column sorted by order

    The sort is stable, so duplicate order values keep their fetch order.
    """
    status = normalize_status(status)
    return sorted((t for t in tasks if t.status == status), key=lambda t: t.order)


def max_order(tasks: Iterable[Task], status: Any) -> int:
    """Highest order in a column, -1 for an empty column"""
    return max((t.order for t in column_tasks(tasks, status)), default=-1)


def _completion_changes(task: Task, new_status: str, today: str) -> TaskChanges:
    """Keep completed_at set exactly while the task is completed"""
    if new_status == TaskStatus.COMPLETED.value:
        if task.status != new_status or not task.completed_at:
            return {"completed_at": today}
        return {}
    if task.completed_at:
        return {"completed_at": None}
    return {}


def plan_move(
    tasks: Sequence[Task],
    task_id: str,
    new_status: Any,
    target_index: int,
    today: str,
) -> Optional[List[PlannedUpdate]]:
    """
    Plan a move of one task to position target_index of a column

    The whole target column is renumbered and every task in it gets an
    update. On a cross-column move the source column is re-densified too,
    with updates only for tasks whose order actually changed.

    target_index ranges over 0..column size; on a same-column move the last
    slot means "append at the end".

    Returns:
        None if the task is unknown, [] for a same-position no-op

    Raises:
        ValidationError: If new_status is unknown or target_index is out of range
    """
    new_status = normalize_status(new_status)
    moved = next((t for t in tasks if t.id == task_id), None)
    if moved is None:
        return None

    target = column_tasks(tasks, new_status)
    others = [t for t in target if t.id != task_id]
    same_column = moved.status == new_status
    # a same-column index may count the moved task itself
    limit = len(target) if same_column else len(others)
    if not 0 <= target_index <= limit:
        raise ValidationError(
            f"Target index {target_index} out of range 0..{limit} for column '{new_status}'"
        )
    target_index = min(target_index, len(others))

    if same_column and [t.id for t in target].index(task_id) == target_index:
        return []

    reordered = list(others)
    reordered.insert(target_index, moved)

    updates: List[PlannedUpdate] = []
    for index, task in enumerate(reordered):
        changes: TaskChanges = {"order": index}
        if task.id == task_id:
            changes["status"] = new_status
            changes.update(_completion_changes(moved, new_status, today))
        updates.append((task.id, changes))

    if not same_column:
        remaining = [t for t in column_tasks(tasks, moved.status) if t.id != task_id]
        updates.extend(_densify(remaining))

    return updates


def plan_reorder(
    tasks: Sequence[Task],
    status: Any,
    previous_index: int,
    current_index: int,
) -> List[PlannedUpdate]:
    """
    Plan a move-element reorder inside one column

    Remove at previous_index, insert at current_index of the shortened list,
    renumber 0..n-1. Every task of the column gets an update.

    Raises:
        ValidationError: If an index is outside the column
    """
    column = column_tasks(tasks, status)
    if previous_index == current_index:
        return []

    size = len(column)
    for name, index in (("previous", previous_index), ("current", current_index)):
        if not 0 <= index < size:
            raise ValidationError(
                f"{name.capitalize()} index {index} out of range for column "
                f"'{normalize_status(status)}' with {size} tasks"
            )

    reordered = list(column)
    moved = reordered.pop(previous_index)
    reordered.insert(current_index, moved)
    return [(task.id, {"order": index}) for index, task in enumerate(reordered)]


def plan_renumber(tasks: Sequence[Task], status: Any) -> List[PlannedUpdate]:
    """Re-densify one column; only tasks whose order changes are returned"""
    return _densify(column_tasks(tasks, status))


def _densify(ordered: Sequence[Task]) -> List[PlannedUpdate]:
    return [
        (task.id, {"order": index})
        for index, task in enumerate(ordered)
        if task.order != index
    ]


def is_dense(tasks: Iterable[Task], status: Any) -> bool:
    """True if the column's orders are exactly 0..n-1"""
    orders = sorted(t.order for t in column_tasks(tasks, status))
    return orders == list(range(len(orders)))
