"""
Task timer: start / pause / stop / reset and elapsed-time arithmetic

Elapsed time is stored in whole minutes. While a timer runs, only its start
timestamp is stored; the live value is derived on demand and never written
back until the timer is paused or stopped.
"""

from datetime import datetime
from typing import Optional
from taskboard.models.response import OperationResult
from taskboard.models.task import Task, TaskStatus, TimerStatus
from taskboard.services.columns import TaskChanges, column_tasks, plan_move
from taskboard.services.status import round_half_up
from taskboard.services.task_store import TaskStore
from taskboard.utils.date_utils import (
    get_current_datetime,
    get_current_date_str,
    to_iso_timestamp,
    whole_minutes_between,
)
from taskboard.utils.logger import logger


def running_minutes(task: Task, now: datetime) -> int:
    """Whole minutes since the timer was (re)started, 0 if not running"""
    if task.timer_status != TimerStatus.RUNNING.value or not task.timer_started_at:
        return 0
    return whole_minutes_between(task.timer_started_at, now)


def display_elapsed(task: Task, now: Optional[datetime] = None) -> int:
    """
    Live elapsed minutes for presentation

    Callers re-evaluate this periodically (e.g. once per second) while the
    timer runs; it never mutates the task.
    """
    return task.elapsed_minutes + running_minutes(task, now or get_current_datetime())


def progress_percentage(task: Task, now: Optional[datetime] = None) -> int:
    """Elapsed share of the estimate, capped at 100; 0 without an estimate"""
    estimated = task.estimated_minutes or 0
    if estimated == 0:
        return 0
    return min(round_half_up(display_elapsed(task, now) / estimated * 100), 100)


def is_overtime(task: Task, now: Optional[datetime] = None) -> bool:
    estimated = task.estimated_minutes or 0
    return estimated > 0 and display_elapsed(task, now) > estimated


class TimerTracker:
    """Service for task timers"""

    def __init__(self, store: TaskStore):
        """
        Initialize timer tracker

        Args:
            store: Task store
        """
        self.store = store
        self.logger = logger

    async def start(self, task_id: str, now: Optional[datetime] = None) -> OperationResult:
        """
        Start or resume a timer

        No-op when the timer is already running or completed (a completed
        timer must be reset first) and for unknown tasks.
        """
        task = self.store.get(task_id)
        if task is None or task.timer_status in (TimerStatus.RUNNING.value, TimerStatus.COMPLETED.value):
            self.logger.debug(f"[Timer] Start ignored for task {task_id}")
            return OperationResult(action="start timer", skipped=True)

        now = now or get_current_datetime()
        changes: TaskChanges = {
            "timer_status": TimerStatus.RUNNING.value,
            "timer_started_at": to_iso_timestamp(now),
        }
        return await self.store.persist_batch([(task_id, changes)], action="start timer")

    async def pause(self, task_id: str, now: Optional[datetime] = None) -> OperationResult:
        """Pause a running timer, folding the running minutes into elapsed_minutes"""
        task = self.store.get(task_id)
        if task is None or task.timer_status != TimerStatus.RUNNING.value:
            self.logger.debug(f"[Timer] Pause ignored for task {task_id}")
            return OperationResult(action="pause timer", skipped=True)

        now = now or get_current_datetime()
        changes: TaskChanges = {
            "timer_status": TimerStatus.PAUSED.value,
            "elapsed_minutes": task.elapsed_minutes + running_minutes(task, now),
            "timer_started_at": None,
        }
        return await self.store.persist_batch([(task_id, changes)], action="pause timer")

    async def stop(self, task_id: str, now: Optional[datetime] = None) -> OperationResult:
        """
        Stop a running or paused timer

        If the final elapsed time exceeds the estimate, the task is moved to
        the end of the overdue column in the same batch.
        """
        task = self.store.get(task_id)
        if task is None or task.timer_status not in (TimerStatus.RUNNING.value, TimerStatus.PAUSED.value):
            self.logger.debug(f"[Timer] Stop ignored for task {task_id}")
            return OperationResult(action="stop timer", skipped=True)

        now = now or get_current_datetime()
        final_elapsed = task.elapsed_minutes + running_minutes(task, now)
        changes: TaskChanges = {
            "timer_status": TimerStatus.COMPLETED.value,
            "elapsed_minutes": final_elapsed,
            "timer_started_at": None,
        }

        over_budget = bool(task.estimated_minutes) and final_elapsed > task.estimated_minutes
        if not over_budget or task.status == TaskStatus.OVERDUE.value:
            return await self.store.persist_batch([(task_id, changes)], action="stop timer")

        self.logger.info(
            f"[Timer] Task {task_id} over budget ({final_elapsed} > {task.estimated_minutes} min)"
        )
        snapshot = self.store.snapshot()
        overdue_column = column_tasks(snapshot, TaskStatus.OVERDUE)
        updates = plan_move(
            snapshot,
            task_id,
            TaskStatus.OVERDUE,
            len(overdue_column),
            get_current_date_str(now),
        )
        updates = [
            (update_id, {**update_changes, **changes} if update_id == task_id else update_changes)
            for update_id, update_changes in updates
        ]
        return await self.store.persist_batch(updates, action="stop timer")

    async def reset(self, task_id: str) -> OperationResult:
        """Reset a timer to idle with zero elapsed time, whatever its state"""
        if self.store.get(task_id) is None:
            return OperationResult(action="reset timer", skipped=True)

        changes: TaskChanges = {
            "timer_status": TimerStatus.IDLE.value,
            "elapsed_minutes": 0,
            "timer_started_at": None,
        }
        return await self.store.persist_batch([(task_id, changes)], action="reset timer")
