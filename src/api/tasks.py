"""Task API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from src.api.dependencies import get_task_service
from src.schemas.auth import MessageResponse
from src.schemas.task import TaskCreate, TaskPageResponse, TaskResponse, TaskUpdate
from src.services.task_service import DEFAULT_LIMIT, DEFAULT_PAGE, TaskService

router = APIRouter(prefix="/api/tasks", tags=["tasks"])


@router.post("", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
def create_task(
    task_data: TaskCreate,
    task_service: Annotated[TaskService, Depends(get_task_service)],
):
    """Create a task for the current user."""
    task_service.create(task_data.title, task_data.description)
    return MessageResponse(message="Task created")


@router.get("", response_model=TaskPageResponse)
def list_tasks(
    task_service: Annotated[TaskService, Depends(get_task_service)],
    page: int = Query(default=DEFAULT_PAGE, description="1-based page number"),
    limit: int = Query(default=DEFAULT_LIMIT, description="Tasks per page"),
):
    """List the current user's tasks, paginated."""
    result = task_service.list(page, limit)
    return TaskPageResponse(
        data=[TaskResponse.model_validate(task) for task in result.items],
        total=result.total,
        page=result.page,
        pages=result.pages,
    )


@router.get("/{task_id}", response_model=TaskResponse)
def get_task(
    task_id: int,
    task_service: Annotated[TaskService, Depends(get_task_service)],
):
    """Get a single task."""
    return task_service.get(task_id)


@router.put("/{task_id}", response_model=MessageResponse)
def update_task(
    task_id: int,
    task_data: TaskUpdate,
    task_service: Annotated[TaskService, Depends(get_task_service)],
):
    """Update a task. Missing fields keep their current value."""
    task_service.update(task_id, task_data.model_dump())
    return MessageResponse(message="Task updated")


@router.patch("/{task_id}", response_model=MessageResponse)
def patch_task(
    task_id: int,
    task_data: TaskUpdate,
    task_service: Annotated[TaskService, Depends(get_task_service)],
):
    """Partially update a task."""
    task_service.patch(task_id, task_data.provided_fields())
    return MessageResponse(message="Task partially updated")


@router.delete("/{task_id}", response_model=MessageResponse)
def delete_task(
    task_id: int,
    task_service: Annotated[TaskService, Depends(get_task_service)],
):
    """Delete a task."""
    task_service.delete(task_id)
    return MessageResponse(message="Task deleted")


@router.patch("/{task_id}/complete", response_model=MessageResponse)
def complete_task(
    task_id: int,
    task_service: Annotated[TaskService, Depends(get_task_service)],
):
    """Mark a task as completed."""
    task_service.complete(task_id)
    return MessageResponse(message="Task marked as completed")
