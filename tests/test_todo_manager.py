"""
Tests for TodoManager
"""

import pytest


@pytest.fixture
def checklist_store(task_store, make_task):
    task_store.set_all([
        make_task(
            "A", "todo", 0,
            todos=[
                {"id": "d1", "taskId": "A", "title": "Write draft", "order": 0},
                {"id": "d2", "taskId": "A", "title": "Review", "order": 1},
            ],
        ),
        make_task("B", "todo", 1),
        make_task("C1", "completed", 0, completedAt="2026-01-02"),
    ])
    return task_store


@pytest.mark.asyncio
async def test_task_completes_after_last_todo(todo_manager, checklist_store, mock_tasks_client):
    """Test that only the second toggle completes the task"""
    await todo_manager.toggle_todo("A", "d1", True, today="2026-03-10")

    task = checklist_store.get("A")
    assert task.status == "todo"
    assert mock_tasks_client.update_task.call_count == 1

    await todo_manager.toggle_todo("A", "d2", True, today="2026-03-10")

    task = checklist_store.get("A")
    assert task.status == "completed"
    assert task.completed_at == "2026-03-10"
    assert all(todo.completed for todo in task.todos)
    assert [t.id for t in checklist_store.column("completed")] == ["C1", "A"]
    assert [t.id for t in checklist_store.column("todo")] == ["B"]
    assert checklist_store.get("B").order == 0


@pytest.mark.asyncio
async def test_unchecking_does_not_reopen(todo_manager, checklist_store):
    await todo_manager.toggle_todo("A", "d1", True)
    await todo_manager.toggle_todo("A", "d2", True)
    await todo_manager.toggle_todo("A", "d2", False)

    task = checklist_store.get("A")
    assert task.status == "completed"
    assert [todo.completed for todo in todo_manager.ordered_todos("A")] == [True, False]


@pytest.mark.asyncio
async def test_add_todo_appends(todo_manager, checklist_store, mock_tasks_client):
    result = await todo_manager.add_todo("A", "Publish")

    assert result.success
    todos = todo_manager.ordered_todos("A")
    assert [todo.title for todo in todos] == ["Write draft", "Review", "Publish"]
    assert todos[-1].order == 2
    assert todos[-1].id.startswith("todo-")
    assert todos[-1].completed is False

    task_id, changes = mock_tasks_client.update_task.call_args.args
    assert task_id == "A"
    assert len(changes["todos"]) == 3


@pytest.mark.asyncio
async def test_add_todo_to_task_without_checklist(todo_manager, checklist_store):
    await todo_manager.add_todo("B", "First step")

    todos = todo_manager.ordered_todos("B")
    assert len(todos) == 1
    assert todos[0].order == 0
    assert todos[0].task_id == "B"


@pytest.mark.asyncio
async def test_delete_todo_renumbers(todo_manager, checklist_store):
    await todo_manager.delete_todo("A", "d1")

    todos = todo_manager.ordered_todos("A")
    assert [(todo.id, todo.order) for todo in todos] == [("d2", 0)]


@pytest.mark.asyncio
async def test_unknown_ids_are_skipped(todo_manager, checklist_store, mock_tasks_client):
    assert (await todo_manager.toggle_todo("A", "nope", True)).skipped
    assert (await todo_manager.toggle_todo("missing", "d1", True)).skipped
    assert (await todo_manager.delete_todo("B", "d1")).skipped
    assert (await todo_manager.add_todo("missing", "x")).skipped

    mock_tasks_client.update_task.assert_not_called()
    assert todo_manager.ordered_todos("missing") == []


@pytest.mark.asyncio
async def test_rechecking_a_checked_todo_does_not_complete(todo_manager, task_store, make_task, mock_tasks_client):
    """A task moved out of completed stays put when a checked todo is checked again"""
    task_store.set_all([
        make_task(
            "A", "in_progress", 0,
            todos=[
                {"id": "d1", "title": "Write draft", "completed": True, "order": 0},
                {"id": "d2", "title": "Review", "completed": True, "order": 1},
            ],
        ),
    ])

    result = await todo_manager.toggle_todo("A", "d1", True)

    assert result.skipped
    assert task_store.get("A").status == "in_progress"
    mock_tasks_client.update_task.assert_not_called()
