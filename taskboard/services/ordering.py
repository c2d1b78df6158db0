"""
Task ordering engine: drag-and-drop moves and reorders between board columns
"""

from typing import Any, Optional
from taskboard.models.response import OperationResult
from taskboard.models.task import Task, TaskMoveEvent
from taskboard.services.columns import (
    column_tasks,
    normalize_status,
    plan_move,
    plan_renumber,
    plan_reorder,
)
from taskboard.services.task_store import TaskStore
from taskboard.utils.date_utils import get_current_date_str
from taskboard.utils.logger import logger


class TaskOrderingEngine:
    """Service keeping every column densely ordered while tasks move"""

    def __init__(self, store: TaskStore):
        """
        Initialize ordering engine

        Args:
            store: Task store holding the view and the repository client
        """
        self.store = store
        self.logger = logger

    async def move_task(
        self,
        task_id: str,
        new_status: Any,
        target_index: int,
        today: Optional[str] = None,
    ) -> OperationResult:
        """
        Move a task to position target_index of a column

        The view is updated before any network call; afterwards one PATCH is
        issued per task of the target column (plus re-densified tasks of the
        source column). Unknown task ids are ignored.

        Args:
            task_id: Task to move
            new_status: Target column
            target_index: Position in the target column, 0..column size
            today: Date stamped into completed_at when moving into completed

        Returns:
            OperationResult (skipped for unknown tasks and same-position moves)

        Raises:
            ValidationError: If new_status or target_index is invalid
        """
        updates = plan_move(
            self.store.snapshot(),
            task_id,
            new_status,
            target_index,
            today or get_current_date_str(),
        )
        if updates is None:
            self.logger.debug(f"[Ordering] Move ignored, task {task_id} not found")
            return OperationResult(action="move task", skipped=True)
        if not updates:
            self.logger.debug(f"[Ordering] Move of {task_id} to {new_status}[{target_index}] is a no-op")
            return OperationResult(action="move task", skipped=True)

        self.logger.info(f"[Ordering] Moving task {task_id} to {new_status} at index {target_index}")
        return await self.store.persist_batch(updates, action="move task")

    async def reorder_task(self, status: Any, previous_index: int, current_index: int) -> OperationResult:
        """
        Move a task inside one column

        Args:
            status: Column
            previous_index: Current position of the task
            current_index: Position to move it to

        Returns:
            OperationResult (skipped when both indices are equal)

        Raises:
            ValidationError: If status or an index is invalid
        """
        updates = plan_reorder(self.store.snapshot(), status, previous_index, current_index)
        if not updates:
            return OperationResult(action="reorder tasks", skipped=True)

        self.logger.info(f"[Ordering] Reordering {status}: {previous_index} -> {current_index}")
        return await self.store.persist_batch(updates, action="reorder tasks")

    async def handle_move_event(self, event: TaskMoveEvent) -> OperationResult:
        """Dispatch a drop event to reorder_task or move_task"""
        if event.previous_status == event.new_status:
            return await self.reorder_task(event.new_status, event.previous_index, event.current_index)
        return await self.move_task(event.task_id, event.new_status, event.current_index)

    async def change_status(self, task_id: str, new_status: Any, today: Optional[str] = None) -> OperationResult:
        """
        Put a task at the end of another column (status edit outside drag-and-drop)

        No-op when the task already has that status or is unknown.
        """
        task = self.store.get(task_id)
        target = column_tasks(self.store.snapshot(), new_status)
        if task is None or task.status == normalize_status(new_status):
            return OperationResult(action="move task", skipped=True)
        return await self.move_task(task_id, new_status, len(target), today)

    async def renumber_column(self, status: Any) -> OperationResult:
        """
        Re-densify a column and persist the tasks whose order changed

        Also repairs a backend left non-dense by an interrupted batch.
        """
        updates = plan_renumber(self.store.snapshot(), status)
        if not updates:
            return OperationResult(action="renumber tasks", skipped=True)
        return await self.store.persist_batch(updates, action="renumber tasks")

    async def delete_task(self, task_id: str) -> Optional[Task]:
        """Delete a task and close the gap it leaves in its column"""
        removed = await self.store.delete_task(task_id)
        if removed is not None:
            await self.renumber_column(removed.status)
        return removed

    def position_of(self, task_id: str) -> Optional[int]:
        """Index of a task inside its column, None if unknown"""
        task = self.store.get(task_id)
        if task is None:
            return None
        ids = [t.id for t in column_tasks(self.store.snapshot(), task.status)]
        return ids.index(task_id)
