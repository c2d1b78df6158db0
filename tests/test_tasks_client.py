"""
Tests for TasksClient and the shared request/retry logic
"""

import json
import httpx
import pytest
from taskboard.api.tasks_client import TasksClient
from taskboard.config.constants import MAX_RETRIES
from taskboard.models.task import TaskFormData
from taskboard.utils.error_handler import APIError, NotFoundError

BASE_URL = "http://tasks.test"

TASK_JSON = {
    "id": "1",
    "title": "Write report",
    "description": "Quarterly numbers",
    "status": "in_progress",
    "priority": "high",
    "dueDate": "2026-04-01",
    "createdAt": "2026-03-01",
    "order": 0,
    "estimatedMinutes": 90,
    "elapsedMinutes": 15,
    "timerStatus": "paused",
}


@pytest.fixture(autouse=True)
def no_retry_delay(monkeypatch):
    monkeypatch.setattr("taskboard.api.base_client.RETRY_DELAY", 0)


@pytest.fixture
def requests_seen():
    return []


def make_client(handler, requests_seen):
    def recording_handler(request: httpx.Request) -> httpx.Response:
        requests_seen.append(request)
        return handler(request)

    http_client = httpx.AsyncClient(transport=httpx.MockTransport(recording_handler))
    return TasksClient(base_url=BASE_URL, http_client=http_client)


@pytest.mark.asyncio
async def test_get_tasks(requests_seen):
    client = make_client(lambda request: httpx.Response(200, json=[TASK_JSON]), requests_seen)

    async with client:
        tasks = await client.get_tasks()

    assert len(tasks) == 1
    task = tasks[0]
    assert task.status == "in_progress"
    assert task.due_date == "2026-04-01"
    assert task.estimated_minutes == 90
    assert task.timer_status == "paused"
    assert requests_seen[0].method == "GET"
    assert str(requests_seen[0].url) == f"{BASE_URL}/tasks"


@pytest.mark.asyncio
async def test_get_tasks_numeric_ids(requests_seen):
    payload = [dict(TASK_JSON, id=7, todos=[{"id": 3, "taskId": 7, "title": "x"}])]
    client = make_client(lambda request: httpx.Response(200, json=payload), requests_seen)

    async with client:
        tasks = await client.get_tasks()

    assert tasks[0].id == "7"
    assert tasks[0].todos[0].task_id == "7"


@pytest.mark.asyncio
async def test_get_tasks_unexpected_payload(requests_seen):
    client = make_client(lambda request: httpx.Response(200, json={"error": "nope"}), requests_seen)

    async with client:
        assert await client.get_tasks() == []


@pytest.mark.asyncio
async def test_update_task_sends_only_changed_fields(requests_seen):
    def handler(request):
        body = json.loads(request.content)
        return httpx.Response(200, json={**TASK_JSON, **body})

    client = make_client(handler, requests_seen)

    async with client:
        task = await client.update_task("1", {"order": 2, "status": "todo", "completed_at": None})

    request = requests_seen[0]
    assert request.method == "PATCH"
    assert str(request.url) == f"{BASE_URL}/tasks/1"
    assert json.loads(request.content) == {"order": 2, "status": "todo", "completedAt": None}
    assert task.order == 2
    assert task.status == "todo"


@pytest.mark.asyncio
async def test_update_task_empty_body(requests_seen):
    client = make_client(lambda request: httpx.Response(204), requests_seen)

    async with client:
        assert await client.update_task("1", {"order": 0}) is None


@pytest.mark.asyncio
async def test_create_task_payload(requests_seen):
    def handler(request):
        body = json.loads(request.content)
        return httpx.Response(201, json={**body, "id": "42"})

    client = make_client(handler, requests_seen)
    form = TaskFormData(title="New", dueDate="2026-05-01", priority="low")

    async with client:
        task = await client.create_task(form, 4)

    body = json.loads(requests_seen[0].content)
    assert requests_seen[0].method == "POST"
    assert body["title"] == "New"
    assert body["dueDate"] == "2026-05-01"
    assert body["priority"] == "low"
    assert body["status"] == "todo"
    assert body["order"] == 4
    assert body["elapsedMinutes"] == 0
    assert body["timerStatus"] == "idle"
    assert "estimatedMinutes" not in body
    assert task.id == "42"


@pytest.mark.asyncio
async def test_delete_task(requests_seen):
    client = make_client(lambda request: httpx.Response(200, json={}), requests_seen)

    async with client:
        assert await client.delete_task("9") is True

    assert requests_seen[0].method == "DELETE"
    assert str(requests_seen[0].url) == f"{BASE_URL}/tasks/9"


@pytest.mark.asyncio
async def test_not_found_is_not_retried(requests_seen):
    client = make_client(lambda request: httpx.Response(404, json={}), requests_seen)

    async with client:
        with pytest.raises(NotFoundError) as exc_info:
            await client.get_task("missing")

    assert exc_info.value.error_code == "404"
    assert len(requests_seen) == 1


@pytest.mark.asyncio
async def test_server_error_retried_then_raised(requests_seen):
    client = make_client(lambda request: httpx.Response(500, text="boom"), requests_seen)

    async with client:
        with pytest.raises(APIError) as exc_info:
            await client.update_task("1", {"order": 1})

    assert exc_info.value.message == "HTTP error! status: 500"
    assert exc_info.value.error_code == "500"
    assert len(requests_seen) == MAX_RETRIES


@pytest.mark.asyncio
async def test_transient_error_recovers(requests_seen):
    def handler(request):
        if len(requests_seen) == 1:
            return httpx.Response(503)
        return httpx.Response(200, json=[TASK_JSON])

    client = make_client(handler, requests_seen)

    async with client:
        tasks = await client.get_tasks()

    assert len(tasks) == 1
    assert len(requests_seen) == 2


@pytest.mark.asyncio
async def test_network_error(requests_seen):
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    client = make_client(handler, requests_seen)

    async with client:
        with pytest.raises(APIError, match="Request error: connection refused"):
            await client.get_tasks()

    assert len(requests_seen) == MAX_RETRIES
