"""Tasks API: tasks live under a project for list/create, and by id for update/delete."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from app.api.v1.dependencies import (
    get_audit_trail,
    get_current_user,
    get_task_repo,
    get_task_repo_for_write,
)
from app.application.dtos.user import UserResult
from app.domain.exceptions import ValidationException
from app.infrastructure.persistence.repositories.task_repo import TaskRepository
from app.infrastructure.services import AuditTrailService
from app.schemas.common import DataResponse
from app.schemas.task import TaskCreateRequest, TaskListResponse, TaskResponse, TaskUpdate

project_tasks_router = APIRouter()
router = APIRouter()


@project_tasks_router.get(
    "/{project_id}/tasks", response_model=DataResponse[TaskListResponse]
)
async def list_tasks(
    project_id: str,
    task_repo: Annotated[TaskRepository, Depends(get_task_repo)],
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
):
    tasks = await task_repo.list_for_project(project_id, skip=skip, limit=limit)
    return DataResponse(
        data=TaskListResponse(tasks=[TaskResponse.model_validate(t) for t in tasks])
    )


@project_tasks_router.post(
    "/{project_id}/tasks",
    response_model=DataResponse[TaskResponse],
    status_code=201,
)
async def create_task(
    project_id: str,
    body: TaskCreateRequest,
    current_user: Annotated[UserResult, Depends(get_current_user)],
    task_repo: Annotated[TaskRepository, Depends(get_task_repo_for_write)],
    audit: Annotated[AuditTrailService, Depends(get_audit_trail)],
):
    task = await task_repo.create_task(
        project_id,
        body.title,
        description=body.description,
        priority=body.priority.value,
        created_by=current_user.id,
    )
    await audit.log_task_created(
        current_user.tenant_id,
        current_user.id,
        task.id,
        {"title": task.title, "project_id": project_id},
    )
    return DataResponse(data=TaskResponse.model_validate(task))


@router.put("/{task_id}", response_model=DataResponse[TaskResponse])
async def update_task(
    task_id: str,
    body: TaskUpdate,
    current_user: Annotated[UserResult, Depends(get_current_user)],
    task_repo: Annotated[TaskRepository, Depends(get_task_repo_for_write)],
    audit: Annotated[AuditTrailService, Depends(get_audit_trail)],
):
    changes = body.model_dump(exclude_unset=True, mode="json")
    if not changes:
        raise ValidationException("No fields to update")
    task = await task_repo.update_task(task_id, changes)
    await audit.log_task_updated(
        current_user.tenant_id, current_user.id, task.id, {"changes": changes}
    )
    return DataResponse(data=TaskResponse.model_validate(task))


@router.delete("/{task_id}", status_code=204)
async def delete_task(
    task_id: str,
    current_user: Annotated[UserResult, Depends(get_current_user)],
    task_repo: Annotated[TaskRepository, Depends(get_task_repo_for_write)],
    audit: Annotated[AuditTrailService, Depends(get_audit_trail)],
):
    deleted = await task_repo.delete_task(task_id)
    await audit.log_task_deleted(
        current_user.tenant_id, current_user.id, deleted.id, {"title": deleted.title}
    )
