"""Owner-scoped task record storage."""

import logging
import threading
import uuid
from datetime import datetime
from functools import lru_cache
from typing import Protocol
from zoneinfo import ZoneInfo

from ..config import settings
from ..errors import TaskNotFoundError
from ..models.task import (
    SortOrder,
    Task,
    TaskCreate,
    TaskFilters,
    TaskSortField,
    TaskStatus,
    TaskUpdate,
)

logger = logging.getLogger(__name__)


class TaskStore(Protocol):
    """CRUD over task records, always filtered to one owner."""

    def create_task(self, owner_id: str, data: TaskCreate) -> Task: ...

    def list_tasks(
        self,
        owner_id: str,
        filters: TaskFilters | None = None,
        now: datetime | None = None,
    ) -> list[Task]: ...

    def get_task(self, owner_id: str, task_id: str) -> Task: ...

    def update_task(self, owner_id: str, task_id: str, data: TaskUpdate) -> Task: ...

    def delete_task(self, owner_id: str, task_id: str) -> None: ...

    def toggle_task_complete(self, owner_id: str, task_id: str, completed: bool) -> Task: ...


def _local(moment: datetime | None, tz: ZoneInfo) -> datetime | None:
    if moment is not None and moment.tzinfo is None:
        return moment.replace(tzinfo=tz)
    return moment


class InMemoryTaskStore:
    """Process-local task store.

    Title search, status filters and the plain field orderings are applied
    while querying; priority ordering is applied to the fetched rows, after a
    created_at descending base order.
    """

    def __init__(self, timezone_str: str | None = None):
        """Initialize an empty store.

        Args:
            timezone_str: Timezone assumed for naive timestamps
        """
        self.tz = ZoneInfo(timezone_str or settings.timezone)
        self._tasks: dict[str, Task] = {}
        self._lock = threading.Lock()

    def create_task(self, owner_id: str, data: TaskCreate) -> Task:
        task = Task(
            id=str(uuid.uuid4()),
            owner_id=owner_id,
            title=data.title,
            description=data.description,
            due_at=_local(data.due_at, self.tz),
            priority=data.priority,
            category=data.category,
            completed=data.completed,
            created_at=datetime.now(self.tz),
        )
        with self._lock:
            self._tasks[task.id] = task

        logger.info(f"Task created: {task.id} for owner {owner_id}")
        return task

    def _owned(self, owner_id: str, task_id: str) -> Task:
        task = self._tasks.get(task_id)
        if task is None or task.owner_id != owner_id:
            raise TaskNotFoundError("Task not found or you do not have permission to change it.")
        return task

    def get_task(self, owner_id: str, task_id: str) -> Task:
        with self._lock:
            return self._owned(owner_id, task_id)

    def list_tasks(
        self,
        owner_id: str,
        filters: TaskFilters | None = None,
        now: datetime | None = None,
    ) -> list[Task]:
        filters = filters or TaskFilters()
        now = now or datetime.now(self.tz)

        with self._lock:
            tasks = [task for task in self._tasks.values() if task.owner_id == owner_id]

        if filters.search:
            needle = filters.search.lower()
            tasks = [task for task in tasks if needle in task.title.lower()]

        if filters.status == TaskStatus.COMPLETED:
            tasks = [task for task in tasks if task.completed]
        elif filters.status == TaskStatus.PENDING:
            tasks = [task for task in tasks if not task.completed]
        elif filters.status == TaskStatus.OVERDUE:
            tasks = [
                task for task in tasks
                if not task.completed and task.due_at is not None and task.due_at < now
            ]

        descending = filters.sort_order == SortOrder.DESC

        if filters.sort_by == TaskSortField.PRIORITY:
            tasks.sort(key=lambda task: task.created_at, reverse=True)
            tasks.sort(key=lambda task: task.priority.rank, reverse=descending)
        elif filters.sort_by == TaskSortField.DUE_DATE:
            dated = sorted((t for t in tasks if t.due_at is not None), key=lambda t: t.due_at, reverse=descending)
            tasks = dated + [t for t in tasks if t.due_at is None]
        elif filters.sort_by == TaskSortField.TITLE:
            tasks.sort(key=lambda task: task.title.lower(), reverse=descending)
        else:
            tasks.sort(key=lambda task: task.created_at, reverse=descending)

        return tasks

    def update_task(self, owner_id: str, task_id: str, data: TaskUpdate) -> Task:
        # due_at may be cleared with null; the other fields are not nullable
        changes = {
            key: value
            for key, value in data.model_dump(exclude_unset=True).items()
            if value is not None or key == "due_at"
        }
        if "due_at" in changes:
            changes["due_at"] = _local(changes["due_at"], self.tz)

        with self._lock:
            task = self._owned(owner_id, task_id)
            updated = Task.model_validate({**task.model_dump(), **changes})
            self._tasks[task_id] = updated

        logger.info(f"Task updated: {task_id} ({', '.join(changes) or 'no changes'})")
        return updated

    def delete_task(self, owner_id: str, task_id: str) -> None:
        with self._lock:
            self._owned(owner_id, task_id)
            del self._tasks[task_id]

        logger.info(f"Task deleted: {task_id}")

    def toggle_task_complete(self, owner_id: str, task_id: str, completed: bool) -> Task:
        return self.update_task(owner_id, task_id, TaskUpdate(completed=completed))


@lru_cache(maxsize=1)
def get_task_store() -> TaskStore:
    """Get or create the TaskStore singleton."""
    return InMemoryTaskStore()
