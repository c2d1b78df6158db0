"""
Task model
"""

from enum import Enum
from typing import Optional, List
from pydantic import BaseModel, Field, ConfigDict


class TaskStatus(str, Enum):
    """Task status; also the column a task is shown in"""
    TODO = "todo"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    OVERDUE = "overdue"  # stored only by the timer over-budget rule


class TaskPriority(str, Enum):
    """Task priority"""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class TimerStatus(str, Enum):
    """Timer lifecycle state"""
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    COMPLETED = "completed"


class Todo(BaseModel):
    """Checklist item belonging to a task"""

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    id: str
    task_id: Optional[str] = Field(None, alias="taskId")
    title: str
    completed: bool = False
    order: int = 0
    created_at: Optional[str] = Field(None, alias="createdAt")


class Task(BaseModel):
    """Task model"""

    model_config = ConfigDict(
        populate_by_name=True,
        use_enum_values=True,
        validate_default=True,
        coerce_numbers_to_str=True,
    )

    id: str
    title: str
    description: str = ""
    status: TaskStatus = TaskStatus.TODO
    priority: TaskPriority = TaskPriority.MEDIUM
    due_date: Optional[str] = Field(None, alias="dueDate")  # YYYY-MM-DD
    created_at: Optional[str] = Field(None, alias="createdAt")
    completed_at: Optional[str] = Field(None, alias="completedAt")
    order: int = 0

    # Timer
    estimated_minutes: Optional[int] = Field(None, alias="estimatedMinutes")
    elapsed_minutes: int = Field(0, alias="elapsedMinutes")
    timer_status: TimerStatus = Field(TimerStatus.IDLE, alias="timerStatus")
    timer_started_at: Optional[str] = Field(None, alias="timerStartedAt")

    todos: Optional[List[Todo]] = None


class TaskFormData(BaseModel):
    """Task creation payload supplied by the caller"""

    model_config = ConfigDict(populate_by_name=True, use_enum_values=True)

    title: str = Field(min_length=1)
    description: str = ""
    priority: TaskPriority = TaskPriority.MEDIUM
    due_date: str = Field(alias="dueDate", pattern=r"^\d{4}-\d{2}-\d{2}$")
    estimated_minutes: Optional[int] = Field(None, alias="estimatedMinutes", ge=0)


class TaskUpdate(BaseModel):
    """Task update model (partial PATCH body)

    Only explicitly set fields are sent, so None means "clear this field".
    """

    model_config = ConfigDict(populate_by_name=True, use_enum_values=True)

    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    due_date: Optional[str] = Field(None, alias="dueDate")
    completed_at: Optional[str] = Field(None, alias="completedAt")
    order: Optional[int] = None
    estimated_minutes: Optional[int] = Field(None, alias="estimatedMinutes")
    elapsed_minutes: Optional[int] = Field(None, alias="elapsedMinutes")
    timer_status: Optional[TimerStatus] = Field(None, alias="timerStatus")
    timer_started_at: Optional[str] = Field(None, alias="timerStartedAt")
    todos: Optional[List[Todo]] = None

    def to_payload(self) -> dict:
        """JSON body with camelCase keys"""
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)


class TaskMoveEvent(BaseModel):
    """Drag-and-drop event emitted by a board column"""

    model_config = ConfigDict(populate_by_name=True, use_enum_values=True)

    task_id: str = Field(alias="taskId")
    previous_status: TaskStatus = Field(alias="previousStatus")
    new_status: TaskStatus = Field(alias="newStatus")
    previous_index: int = Field(alias="previousIndex")
    current_index: int = Field(alias="currentIndex")
