"""Task-related Pydantic models."""

from datetime import datetime
from enum import Enum

from pydantic import AliasChoices, BaseModel, Field

TITLE_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 500


class Priority(str, Enum):
    """Task priority levels."""

    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"

    @property
    def rank(self) -> int:
        """Sort rank, higher is more important."""
        return {Priority.HIGH: 3, Priority.MEDIUM: 2, Priority.LOW: 1}[self]


class Category(str, Enum):
    """Task categories."""

    WORK = "Work"
    PERSONAL = "Personal"
    STUDY = "Study"
    HEALTH = "Health"


class TaskStatus(str, Enum):
    """Status filter for task listings."""

    ALL = "all"
    COMPLETED = "completed"
    PENDING = "pending"
    OVERDUE = "overdue"


class TaskSortField(str, Enum):
    """Sortable task fields."""

    CREATED_AT = "created_at"
    DUE_DATE = "due_date"
    TITLE = "title"
    PRIORITY = "priority"


class SortOrder(str, Enum):
    """Sort direction."""

    ASC = "asc"
    DESC = "desc"


class Task(BaseModel):
    """A stored task record owned by a single user."""

    id: str = Field(..., description="Opaque unique identifier")
    owner_id: str = Field(..., description="Identifier of the owning user")
    title: str = Field(..., min_length=1, max_length=TITLE_MAX_LENGTH)
    description: str = Field(default="", max_length=DESCRIPTION_MAX_LENGTH)
    due_at: datetime | None = Field(default=None, description="Due timestamp (date and time combined)")
    priority: Priority = Priority.MEDIUM
    category: Category = Category.PERSONAL
    completed: bool = False
    created_at: datetime


class TaskCreate(BaseModel):
    """Request to create a task."""

    title: str = Field(..., description="Task title", min_length=1, max_length=TITLE_MAX_LENGTH)
    description: str = Field(default="", max_length=DESCRIPTION_MAX_LENGTH)
    due_at: datetime | None = Field(
        default=None,
        description="Due timestamp; also accepted as due_date, the key POST /ai/parse-task returns",
        validation_alias=AliasChoices("due_at", "due_date"),
    )
    priority: Priority = Priority.MEDIUM
    category: Category = Category.PERSONAL
    completed: bool = False


class TaskUpdate(BaseModel):
    """Partial update of a task. Only fields that are set are applied."""

    title: str | None = Field(default=None, min_length=1, max_length=TITLE_MAX_LENGTH)
    description: str | None = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)
    due_at: datetime | None = Field(default=None, validation_alias=AliasChoices("due_at", "due_date"))
    priority: Priority | None = None
    category: Category | None = None
    completed: bool | None = None


class TaskToggleRequest(BaseModel):
    """Request to set the completion state of a task."""

    completed: bool


class TaskFilters(BaseModel):
    """Search, status and ordering options for task listings."""

    search: str | None = Field(default=None, description="Case-insensitive title substring")
    status: TaskStatus = TaskStatus.ALL
    sort_by: TaskSortField = TaskSortField.CREATED_AT
    sort_order: SortOrder = SortOrder.DESC


class TaskListResponse(BaseModel):
    """Envelope for task listings."""

    success: bool = True
    data: list[Task] = Field(default_factory=list)


class TaskResponse(BaseModel):
    """Envelope for a single task."""

    success: bool = True
    data: Task
