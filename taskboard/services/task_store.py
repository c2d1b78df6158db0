"""
Task store: optimistic view state on top of repository-confirmed state
"""

import asyncio
from typing import Any, Callable, Dict, List, Optional, Sequence
from taskboard.api.tasks_client import TasksClient
from taskboard.models.response import OperationResult
from taskboard.models.task import Task, TaskFormData, TaskPriority
from taskboard.services.columns import PlannedUpdate, TaskChanges, column_tasks, max_order, normalize_status
from taskboard.services.status import TaskStats, compute_stats, sort_by_priority
from taskboard.config.constants import BOARD_COLUMNS, DEFAULT_STATUS, OVER_BUDGET_STATUS
from taskboard.utils.error_handler import ValidationError, describe_failure
from taskboard.utils.logger import logger

NotificationSink = Callable[[str], None]

# Written only by the ordering engine
PLACEMENT_FIELDS = ("order", "completed_at")


class TaskStore:
    """
    In-memory task collection for one board

    Two copies of every task are kept:

    * view - what the user sees; engine operations patch it synchronously
      before any network call is made (optimistic update)
    * committed - the last state the backend confirmed

    A failed persistence call never rolls the view back. The failure is
    recorded in ``error`` (and sent to the notification sink, if any);
    ``reconcile()`` or ``load_tasks()`` brings the view back in line.
    """

    def __init__(self, tasks_client: TasksClient, notify: Optional[NotificationSink] = None):
        """
        Initialize task store

        Args:
            tasks_client: Task repository client
            notify: Optional callable receiving user-facing error messages
        """
        self.client = tasks_client
        self.notify = notify
        self.logger = logger

        # Insertion order = fetch order (tie-break for duplicate order values)
        self._view: Dict[str, Task] = {}
        self._committed: Dict[str, Task] = {}

        self.loading: bool = False
        self.error: Optional[str] = None
        self.search_query: str = ""
        self.priority_filter: Optional[str] = None

    # ------------------------------------------------------------------
    # State access
    # ------------------------------------------------------------------

    def snapshot(self) -> List[Task]:
        """Current view as an immutable-by-convention list"""
        return list(self._view.values())

    def committed_snapshot(self) -> List[Task]:
        return list(self._committed.values())

    def get(self, task_id: str) -> Optional[Task]:
        return self._view.get(task_id)

    def set_all(self, tasks: Sequence[Task]):
        """Replace both view and committed state"""
        self._view = {task.id: task for task in tasks}
        self._committed = dict(self._view)

    def apply_changes(self, task_id: str, changes: TaskChanges) -> Optional[Task]:
        """
        Patch the view of one task

        Returns:
            Updated task, or None if the task is not in the view
        """
        task = self._view.get(task_id)
        if task is None:
            self.logger.debug(f"[TaskStore] Skipping changes for unknown task {task_id}")
            return None
        updated = task.model_copy(update=changes)
        self._view[task_id] = updated
        return updated

    def _confirm(self, task_id: str, changes: TaskChanges, confirmed: Optional[Task]):
        """Record a backend-confirmed update in committed state"""
        if confirmed is not None:
            self._committed[task_id] = confirmed
            return
        base = self._committed.get(task_id) or self._view.get(task_id)
        if base is not None:
            self._committed[task_id] = base.model_copy(update=changes)

    def reconcile(self):
        """Resync the view from the last confirmed state (manual refresh)"""
        self.logger.info(f"[TaskStore] Reconciling view with {len(self._committed)} confirmed tasks")
        self._view = dict(self._committed)

    # ------------------------------------------------------------------
    # Errors
    # ------------------------------------------------------------------

    def _record_error(self, message: str):
        self.error = message
        self.logger.warning(f"[TaskStore] {message}")
        if self.notify is not None:
            self.notify(message)

    def clear_error(self):
        self.error = None

    # ------------------------------------------------------------------
    # Repository operations
    # ------------------------------------------------------------------

    async def load_tasks(self) -> bool:
        """
        Load all tasks from the backend

        Returns:
            True on success
        """
        self.loading = True
        self.error = None
        try:
            tasks = await self.client.get_tasks()
        except Exception as e:
            self.logger.error(f"[TaskStore] Failed to load tasks: {e}", exc_info=True)
            self._record_error(f"Failed to load tasks: {describe_failure(e)}")
            return False
        finally:
            self.loading = False

        self.set_all(tasks)
        self.logger.info(f"[TaskStore] Loaded {len(tasks)} tasks")
        return True

    async def create_task(self, form: TaskFormData) -> Optional[Task]:
        """
        Create a task at the end of the first column

        Returns:
            Created task, or None on failure
        """
        self.loading = True
        self.error = None
        order = max_order(self._view.values(), DEFAULT_STATUS) + 1
        try:
            task = await self.client.create_task(form, order)
        except Exception as e:
            self.logger.error(f"[TaskStore] Failed to create task: {e}", exc_info=True)
            self._record_error(f"Failed to create task: {describe_failure(e)}")
            return None
        finally:
            self.loading = False

        self._view[task.id] = task
        self._committed[task.id] = task
        return task

    async def update_task(self, task_id: str, changes: TaskChanges) -> Optional[Task]:
        """
        Update a task and apply the backend's answer

        Not optimistic: the view changes only after the backend confirms.
        Column placement is left to TaskOrderingEngine: ``order`` and
        ``completed_at`` are refused, and so is a ``status`` different from
        the current one (use TaskOrderingEngine.change_status).

        Raises:
            ValidationError: If changes touch column placement
        """
        self._check_placement(task_id, changes)

        self.loading = True
        self.error = None
        try:
            confirmed = await self.client.update_task(task_id, changes)
        except Exception as e:
            self.logger.error(f"[TaskStore] Failed to update task {task_id}: {e}", exc_info=True)
            self._record_error(f"Failed to update task: {describe_failure(e)}")
            return None
        finally:
            self.loading = False

        self._confirm(task_id, changes, confirmed)
        if task_id in self._committed:
            self._view[task_id] = self._committed[task_id]
        return self._view.get(task_id)

    def _check_placement(self, task_id: str, changes: TaskChanges):
        touched = [field for field in PLACEMENT_FIELDS if field in changes]
        if touched:
            raise ValidationError(f"Cannot update {', '.join(touched)} directly; move the task instead")
        if "status" in changes:
            task = self._view.get(task_id)
            if task is None or normalize_status(changes["status"]) != task.status:
                raise ValidationError("Status changes must go through TaskOrderingEngine.change_status")

    async def delete_task(self, task_id: str) -> Optional[Task]:
        """
        Delete a task on the backend, then drop it locally

        Returns:
            The removed task, or None if nothing was removed
        """
        self.loading = True
        self.error = None
        try:
            await self.client.delete_task(task_id)
        except Exception as e:
            self.logger.error(f"[TaskStore] Failed to delete task {task_id}: {e}", exc_info=True)
            self._record_error(f"Failed to delete task: {describe_failure(e)}")
            return None
        finally:
            self.loading = False

        self._committed.pop(task_id, None)
        return self._view.pop(task_id, None)

    async def persist_batch(self, updates: List[PlannedUpdate], action: str) -> OperationResult:
        """
        Apply updates to the view, then PATCH them concurrently

        The view is patched before the first call is issued. Calls are
        independent; a failing call neither stops nor undoes the others.
        At most one error message is recorded for the whole batch.

        Args:
            updates: (task_id, changes) pairs
            action: Verb phrase used in the error message ("move task")

        Returns:
            OperationResult describing the batch
        """
        for task_id, changes in updates:
            self.apply_changes(task_id, changes)

        result = OperationResult(action=action, task_ids=[task_id for task_id, _ in updates])
        if not updates:
            result.skipped = True
            return result

        self.logger.debug(f"[TaskStore] Persisting {len(updates)} updates ({action})")
        outcomes = await asyncio.gather(
            *(self.client.update_task(task_id, changes) for task_id, changes in updates),
            return_exceptions=True,
        )

        failures: List[BaseException] = []
        for (task_id, changes), outcome in zip(updates, outcomes):
            if isinstance(outcome, Exception):
                self.logger.error(f"[TaskStore] Update of task {task_id} failed ({action}): {outcome}")
                failures.append(outcome)
            elif isinstance(outcome, BaseException):
                raise outcome
            elif task_id in self._view or task_id in self._committed:
                self._confirm(task_id, changes, outcome)

        result.attempted = len(updates)
        result.failed = len(failures)
        if failures:
            message = f"Failed to {action}: {describe_failure(failures[0])}"
            if len(failures) > 1:
                message += f" ({len(failures)} of {len(updates)} updates failed)"
            result.error = message
            self._record_error(message)
        return result

    # ------------------------------------------------------------------
    # Filters and derived views (recomputed from a snapshot on every call)
    # ------------------------------------------------------------------

    def set_search_query(self, query: str):
        self.search_query = query

    def set_priority_filter(self, priority: Optional[Any]):
        self.priority_filter = TaskPriority(priority).value if priority else None

    def filtered_tasks(self) -> List[Task]:
        """Tasks matching the search query and priority filter"""
        tasks = self.snapshot()
        query = self.search_query.lower().strip()

        if query:
            tasks = [
                t for t in tasks
                if query in t.title.lower() or query in t.description.lower()
            ]

        if self.priority_filter:
            tasks = [t for t in tasks if t.priority == self.priority_filter]

        return tasks

    def column(self, status: Any) -> List[Task]:
        """Filtered tasks of one column, sorted by order"""
        return column_tasks(self.filtered_tasks(), status)

    def board(self) -> Dict[str, List[Task]]:
        """Board columns in display order; the over-budget column only when used"""
        columns = {status: self.column(status) for status in BOARD_COLUMNS}
        over_budget = self.column(OVER_BUDGET_STATUS)
        if over_budget:
            columns[OVER_BUDGET_STATUS] = over_budget
        return columns

    def todo_tasks(self) -> List[Task]:
        return self.column("todo")

    def in_progress_tasks(self) -> List[Task]:
        return self.column("in_progress")

    def completed_tasks(self) -> List[Task]:
        return self.column("completed")

    def tasks_by_priority(self) -> List[Task]:
        return sort_by_priority(self.filtered_tasks())

    def stats(self, today: Optional[str] = None) -> TaskStats:
        """Statistics over all tasks, ignoring filters"""
        return compute_stats(self.snapshot(), today)
