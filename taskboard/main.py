"""
Main application entry point
"""

import asyncio
from typing import Optional
from taskboard.api.tasks_client import TasksClient
from taskboard.services.task_store import NotificationSink, TaskStore
from taskboard.services.ordering import TaskOrderingEngine
from taskboard.services.timer import TimerTracker
from taskboard.services.todo_manager import TodoManager
from taskboard.utils.formatters import format_board, format_stats
from taskboard.utils.error_handler import format_error_message
from taskboard.utils.logger import logger
from taskboard.config.settings import settings


class TaskBoard:
    """Task board application: store plus the services operating on it"""

    def __init__(
        self,
        tasks_client: Optional[TasksClient] = None,
        notify: Optional[NotificationSink] = None,
    ):
        """
        Initialize task board

        Args:
            tasks_client: Task repository client (defaults to TASKS_API_URL)
            notify: Optional callable receiving user-facing error messages
        """
        self.tasks_client = tasks_client or TasksClient()
        self.store = TaskStore(self.tasks_client, notify=notify)
        self.ordering = TaskOrderingEngine(self.store)
        self.timer = TimerTracker(self.store)
        self.todos = TodoManager(self.store)
        self.logger = logger

    async def initialize(self) -> bool:
        """Load tasks from the backend"""
        return await self.store.load_tasks()

    async def refresh(self) -> bool:
        """Discard the optimistic view and reload everything"""
        self.logger.info("[TaskBoard] Refreshing from backend")
        return await self.store.load_tasks()

    def render(self, today: Optional[str] = None) -> str:
        """Plain-text board with statistics"""
        return f"{format_board(self.store.board(), today)}\n\n{format_stats(self.store.stats(today))}"

    async def close(self):
        await self.tasks_client.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()


async def main():
    """Print the current board"""
    try:
        settings.validate()
    except ValueError as e:
        logger.error(format_error_message(e))
        return

    async with TaskBoard(notify=lambda message: logger.error(message)) as board:
        if not await board.initialize():
            return
        print(board.render())


def run():
    asyncio.run(main())


if __name__ == "__main__":
    run()
