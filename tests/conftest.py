"""
Pytest configuration and fixtures
"""

import pytest
from unittest.mock import AsyncMock, MagicMock
from taskboard.api.tasks_client import TasksClient
from taskboard.models.task import Task
from taskboard.services.task_store import TaskStore
from taskboard.services.ordering import TaskOrderingEngine
from taskboard.services.timer import TimerTracker
from taskboard.services.todo_manager import TodoManager


def build_task(task_id: str, status: str = "todo", order: int = 0, **fields) -> Task:
    """Build a task with sensible defaults"""
    data = {
        "id": task_id,
        "title": fields.pop("title", f"Task {task_id}"),
        "description": fields.pop("description", ""),
        "status": status,
        "priority": fields.pop("priority", "medium"),
        "dueDate": fields.pop("due_date", "2099-12-31"),
        "createdAt": fields.pop("created_at", "2026-01-01"),
        "order": order,
    }
    data.update(fields)
    return Task.model_validate(data)


@pytest.fixture
def make_task():
    """Task factory"""
    return build_task


@pytest.fixture
def mock_tasks_client():
    """Mock task repository; updates are acknowledged without a body"""
    client = MagicMock(spec=TasksClient)
    client.get_tasks = AsyncMock(return_value=[])
    client.get_task = AsyncMock()
    client.create_task = AsyncMock()
    client.update_task = AsyncMock(return_value=None)
    client.delete_task = AsyncMock(return_value=True)
    client.close = AsyncMock()
    return client


@pytest.fixture
def notifications():
    """Collected notification messages"""
    return []


@pytest.fixture
def task_store(mock_tasks_client, notifications):
    """Task store with mocked repository"""
    return TaskStore(mock_tasks_client, notify=notifications.append)


@pytest.fixture
def board_tasks():
    """Three columns: todo T1..T3, in_progress P1..P2, completed C1"""
    return [
        build_task("T1", "todo", 0),
        build_task("T2", "todo", 1),
        build_task("T3", "todo", 2),
        build_task("P1", "in_progress", 0),
        build_task("P2", "in_progress", 1),
        build_task("C1", "completed", 0, completedAt="2026-01-02"),
    ]


@pytest.fixture
def seeded_store(task_store, board_tasks):
    task_store.set_all(board_tasks)
    return task_store


@pytest.fixture
def ordering_engine(seeded_store):
    return TaskOrderingEngine(seeded_store)


@pytest.fixture
def timer_tracker(task_store):
    return TimerTracker(task_store)


@pytest.fixture
def todo_manager(task_store):
    return TodoManager(task_store)

