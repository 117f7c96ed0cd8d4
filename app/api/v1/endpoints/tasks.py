"""Task API: thin routes delegating to TaskLifecycleService."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Request

from app.api.v1.dependencies import (
    CurrentUser,
    get_task_service,
    get_task_service_for_write,
)
from app.application.dtos.task import TaskCreate, TaskFilter, TaskUpdate
from app.application.use_cases.tasks import TaskLifecycleService
from app.core.limiter import limit_writes
from app.schemas.common import ApiResponse, CountResponse, DetailResponse, ok
from app.schemas.task import (
    TaskCreateRequest,
    TaskResponse,
    TaskSearchRequest,
    TaskStatusRequest,
    TaskUpdateRequest,
)

router = APIRouter()

TaskId = Annotated[str, Path(min_length=1, max_length=64)]
ReadService = Annotated[TaskLifecycleService, Depends(get_task_service)]
WriteService = Annotated[TaskLifecycleService, Depends(get_task_service_for_write)]


def _one(task: object) -> ApiResponse[TaskResponse]:
    return ok(TaskResponse.model_validate(task))


def _many(tasks: list) -> ApiResponse[list[TaskResponse]]:
    return ok([TaskResponse.model_validate(t) for t in tasks])


@router.post("", response_model=ApiResponse[TaskResponse], status_code=201)
@limit_writes
async def create_task(
    request: Request,
    body: TaskCreateRequest,
    current_user: CurrentUser,
    task_svc: WriteService,
):
    """Create a task owned by the current user; non-admin assignees are notified."""
    created = await task_svc.create_task(
        current_user,
        TaskCreate(
            title=body.title,
            description=body.description,
            assigned_to=frozenset(body.assigned_to),
            status=body.status,
        ),
    )
    return _one(created)


@router.post("/search", response_model=ApiResponse[list[TaskResponse]])
async def search_tasks(
    body: TaskSearchRequest,
    current_user: CurrentUser,
    task_svc: ReadService,
):
    """List active tasks; every id in assigned_to must be an assignee."""
    tasks = await task_svc.get_tasks(
        TaskFilter(
            assigned_to=frozenset(body.assigned_to),
            status=body.status,
            created_by=body.created_by,
        )
    )
    return _many(tasks)


@router.get("/trash", response_model=ApiResponse[list[TaskResponse]])
async def get_trash(current_user: CurrentUser, task_svc: ReadService):
    """Trashed tasks created by the current user."""
    return _many(await task_svc.get_trash(current_user))


@router.delete("/trash", response_model=ApiResponse[CountResponse])
@limit_writes
async def empty_trash(
    request: Request,
    current_user: CurrentUser,
    task_svc: WriteService,
):
    """Permanently delete every trashed task the current user created."""
    deleted = await task_svc.empty_trash(current_user)
    return ok(CountResponse(deleted=deleted))


@router.get("/user/{user_id}", response_model=ApiResponse[list[TaskResponse]])
async def get_user_tasks(
    user_id: TaskId,
    current_user: CurrentUser,
    task_svc: ReadService,
):
    """Active tasks assigned to user_id."""
    return _many(await task_svc.get_user_tasks(user_id))


@router.get("/{task_id}", response_model=ApiResponse[TaskResponse])
async def get_task(task_id: TaskId, current_user: CurrentUser, task_svc: ReadService):
    return _one(await task_svc.get_task(current_user, task_id))


@router.put("/{task_id}", response_model=ApiResponse[TaskResponse])
@limit_writes
async def update_task(
    request: Request,
    task_id: TaskId,
    body: TaskUpdateRequest,
    current_user: CurrentUser,
    task_svc: WriteService,
):
    """General update (creator or admin); non-admin assignees are notified.

    Omitted fields are unchanged; an explicit null description clears it.
    """
    fields = body.model_dump(exclude_unset=True)
    if fields.get("assigned_to") is not None:
        fields["assigned_to"] = frozenset(fields["assigned_to"])
    updated = await task_svc.update_task(current_user, task_id, TaskUpdate(**fields))
    return _one(updated)


@router.patch("/{task_id}/status", response_model=ApiResponse[TaskResponse])
@limit_writes
async def update_task_status(
    request: Request,
    task_id: TaskId,
    body: TaskStatusRequest,
    current_user: CurrentUser,
    task_svc: WriteService,
):
    """Change status (assignee or admin). Starting progress notifies every admin."""
    updated = await task_svc.update_task_status(current_user, task_id, body.status)
    return _one(updated)


@router.patch("/{task_id}/trash", response_model=ApiResponse[TaskResponse])
@limit_writes
async def move_to_trash(
    request: Request,
    task_id: TaskId,
    current_user: CurrentUser,
    task_svc: WriteService,
):
    return _one(await task_svc.move_to_trash(current_user, task_id))


@router.patch("/{task_id}/restore", response_model=ApiResponse[TaskResponse])
@limit_writes
async def restore_task(
    request: Request,
    task_id: TaskId,
    current_user: CurrentUser,
    task_svc: WriteService,
):
    return _one(await task_svc.restore_task(current_user, task_id))


@router.delete("/{task_id}", response_model=ApiResponse[DetailResponse])
@limit_writes
async def delete_from_trash(
    request: Request,
    task_id: TaskId,
    current_user: CurrentUser,
    task_svc: WriteService,
):
    """Permanently delete one trashed task (creator only)."""
    await task_svc.delete_from_trash(current_user, task_id)
    return ok(DetailResponse(message="Task deleted permanently"))
