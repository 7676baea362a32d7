"""Task record endpoints, scoped to the calling user."""

from fastapi import APIRouter, Depends

from ..dependencies import get_current_owner
from ..models.task import (
    TaskCreate,
    TaskFilters,
    TaskListResponse,
    TaskResponse,
    TaskToggleRequest,
    TaskUpdate,
)
from ..services.task_store import TaskStore, get_task_store

router = APIRouter(tags=["tasks"])


@router.get("", response_model=TaskListResponse)
async def list_tasks(
    filters: TaskFilters = Depends(),
    owner_id: str = Depends(get_current_owner),
    store: TaskStore = Depends(get_task_store),
) -> TaskListResponse:
    """
    List the caller's tasks.

    Query parameters:
    - search: case-insensitive title substring
    - status: all, completed, pending, overdue
    - sort_by: created_at, due_date, title, priority
    - sort_order: asc, desc
    """
    return TaskListResponse(data=store.list_tasks(owner_id, filters))


@router.post("", response_model=TaskResponse, status_code=201)
async def create_task(
    request: TaskCreate,
    owner_id: str = Depends(get_current_owner),
    store: TaskStore = Depends(get_task_store),
) -> TaskResponse:
    """Create a task, typically from the output of ``POST /ai/parse-task``."""
    return TaskResponse(data=store.create_task(owner_id, request))


@router.get("/{task_id}", response_model=TaskResponse)
async def get_task(
    task_id: str,
    owner_id: str = Depends(get_current_owner),
    store: TaskStore = Depends(get_task_store),
) -> TaskResponse:
    """Fetch one of the caller's tasks."""
    return TaskResponse(data=store.get_task(owner_id, task_id))


@router.patch("/{task_id}", response_model=TaskResponse)
async def update_task(
    task_id: str,
    request: TaskUpdate,
    owner_id: str = Depends(get_current_owner),
    store: TaskStore = Depends(get_task_store),
) -> TaskResponse:
    """Apply a partial update to one of the caller's tasks."""
    return TaskResponse(data=store.update_task(owner_id, task_id, request))


@router.post("/{task_id}/toggle", response_model=TaskResponse)
async def toggle_task(
    task_id: str,
    request: TaskToggleRequest,
    owner_id: str = Depends(get_current_owner),
    store: TaskStore = Depends(get_task_store),
) -> TaskResponse:
    """Set the completion state of one of the caller's tasks."""
    return TaskResponse(data=store.toggle_task_complete(owner_id, task_id, request.completed))


@router.delete("/{task_id}")
async def delete_task(
    task_id: str,
    owner_id: str = Depends(get_current_owner),
    store: TaskStore = Depends(get_task_store),
) -> dict[str, bool]:
    """Delete one of the caller's tasks."""
    store.delete_task(owner_id, task_id)
    return {"success": True}
