"""
REST client for the task backend (json-server style /tasks resource)
"""

from typing import Optional, Dict, Any, List
import httpx
from taskboard.api.base_client import BaseAPIClient
from taskboard.config.settings import settings
from taskboard.config.constants import TASKS_ENDPOINT, DEFAULT_STATUS
from taskboard.models.task import Task, TaskFormData, TaskUpdate
from taskboard.utils.date_utils import get_current_date_str
from taskboard.utils.logger import logger


class TasksClient(BaseAPIClient):
    """Client for the /tasks REST resource"""

    def __init__(
        self,
        base_url: Optional[str] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        """Initialize tasks client"""
        super().__init__(
            base_url or settings.TASKS_API_URL,
            timeout=settings.REQUEST_TIMEOUT,
            http_client=http_client,
        )
        self.logger = logger

    def _get_headers(self) -> Dict[str, str]:
        """Get request headers"""
        return {"Content-Type": "application/json"}

    async def get_tasks(self) -> List[Task]:
        """
        Get all tasks

        Returns:
            Tasks in the order the backend returned them
        """
        data = await self.get(endpoint=TASKS_ENDPOINT, headers=self._get_headers())
        if not isinstance(data, list):
            self.logger.warning(f"Unexpected tasks payload type: {type(data).__name__}")
            return []
        return [Task.model_validate(item) for item in data]

    async def get_task(self, task_id: str) -> Task:
        """Get a single task by ID"""
        data = await self.get(endpoint=f"{TASKS_ENDPOINT}/{task_id}", headers=self._get_headers())
        return Task.model_validate(data)

    async def create_task(self, form: TaskFormData, order: int) -> Task:
        """
        Create a new task in the first column

        Args:
            form: Caller-supplied task fields
            order: Position in the todo column

        Returns:
            Created task as stored by the backend
        """
        new_task: Dict[str, Any] = form.model_dump(mode="json", by_alias=True, exclude_none=True)
        new_task.update({
            "status": DEFAULT_STATUS,
            "order": order,
            "createdAt": get_current_date_str(),
            "elapsedMinutes": 0,
            "timerStatus": "idle",
        })
        data = await self.post(endpoint=TASKS_ENDPOINT, headers=self._get_headers(), json_data=new_task)
        self.logger.info(f"Created task '{form.title}' (order {order})")
        return Task.model_validate(data)

    async def update_task(self, task_id: str, changes: Dict[str, Any]) -> Optional[Task]:
        """
        Partially update a task

        Args:
            task_id: Task ID
            changes: Changed fields keyed by model field name

        Returns:
            Server-confirmed task, or None when the backend answered without a body
        """
        payload = TaskUpdate(**changes).to_payload()
        data = await self.patch(
            endpoint=f"{TASKS_ENDPOINT}/{task_id}",
            headers=self._get_headers(),
            json_data=payload,
        )
        if not data:
            return None
        return Task.model_validate(data)

    async def delete_task(self, task_id: str) -> bool:
        """Delete a task"""
        await self.delete(endpoint=f"{TASKS_ENDPOINT}/{task_id}", headers=self._get_headers())
        self.logger.info(f"Deleted task {task_id}")
        return True
