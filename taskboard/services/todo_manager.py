"""
Todo checklist service
"""

import uuid
from typing import List, Optional
from taskboard.models.response import OperationResult
from taskboard.models.task import TaskStatus, Todo
from taskboard.services.columns import PlannedUpdate, column_tasks, plan_move
from taskboard.services.status import should_auto_complete
from taskboard.services.task_store import TaskStore
from taskboard.utils.date_utils import get_current_date_str, get_current_datetime, to_iso_timestamp
from taskboard.utils.logger import logger


class TodoManager:
    """Service for managing the todos of a task"""

    def __init__(self, store: TaskStore):
        """
        Initialize todo manager

        Args:
            store: Task store
        """
        self.store = store
        self.logger = logger

    async def add_todo(self, task_id: str, title: str) -> OperationResult:
        """
        Append a todo to a task

        Args:
            task_id: Task ID
            title: Todo title

        Returns:
            OperationResult (skipped for unknown tasks)
        """
        task = self.store.get(task_id)
        if task is None:
            return OperationResult(action="add todo", skipped=True)

        todos = list(task.todos or [])
        todos.append(Todo(
            id=f"todo-{uuid.uuid4().hex[:12]}",
            task_id=task_id,
            title=title,
            completed=False,
            order=len(todos),
            created_at=to_iso_timestamp(get_current_datetime()),
        ))
        self.logger.debug(f"[Todos] Adding '{title}' to task {task_id}")
        return await self.store.persist_batch([(task_id, {"todos": todos})], action="add todo")

    async def toggle_todo(
        self,
        task_id: str,
        todo_id: str,
        completed: bool,
        today: Optional[str] = None,
    ) -> OperationResult:
        """
        Check or uncheck a todo

        When the last open todo is checked the task is completed and moved to
        the end of the completed column in the same batch. Unchecking never
        reopens a task. Setting a todo to the state it already has is a no-op.
        """
        task = self.store.get(task_id)
        todos = (task.todos or []) if task is not None else []
        current = next((todo for todo in todos if todo.id == todo_id), None)
        if current is None or current.completed == completed:
            return OperationResult(action="toggle todo", skipped=True)

        todos = [
            todo.model_copy(update={"completed": completed}) if todo.id == todo_id else todo
            for todo in task.todos
        ]

        updates: List[PlannedUpdate] = [(task_id, {"todos": todos})]
        if should_auto_complete(todos, task.status):
            self.logger.info(f"[Todos] All todos done, completing task {task_id}")
            snapshot = self.store.snapshot()
            move = plan_move(
                snapshot,
                task_id,
                TaskStatus.COMPLETED,
                len(column_tasks(snapshot, TaskStatus.COMPLETED)),
                today or get_current_date_str(),
            )
            updates = [
                (update_id, {**changes, "todos": todos} if update_id == task_id else changes)
                for update_id, changes in move
            ]

        return await self.store.persist_batch(updates, action="toggle todo")

    async def delete_todo(self, task_id: str, todo_id: str) -> OperationResult:
        """Remove a todo and renumber the remaining ones"""
        task = self.store.get(task_id)
        if task is None or not task.todos or all(todo.id != todo_id for todo in task.todos):
            return OperationResult(action="delete todo", skipped=True)

        remaining = sorted((t for t in task.todos if t.id != todo_id), key=lambda t: t.order)
        todos = [todo.model_copy(update={"order": index}) for index, todo in enumerate(remaining)]
        return await self.store.persist_batch([(task_id, {"todos": todos})], action="delete todo")

    def ordered_todos(self, task_id: str) -> List[Todo]:
        task = self.store.get(task_id)
        if task is None or not task.todos:
            return []
        return sorted(task.todos, key=lambda t: t.order)
