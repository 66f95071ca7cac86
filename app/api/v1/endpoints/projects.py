"""Projects API: tenant-scoped project CRUD. Every write records an audit event."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from app.api.v1.dependencies import (
    get_audit_trail,
    get_current_user,
    get_project_repo,
    get_project_repo_for_write,
)
from app.application.dtos.user import UserResult
from app.domain.exceptions import ResourceNotFoundException, ValidationException
from app.infrastructure.persistence.repositories.project_repo import ProjectRepository
from app.infrastructure.services import AuditTrailService
from app.schemas.common import DataResponse
from app.schemas.project import (
    ProjectCreateRequest,
    ProjectListResponse,
    ProjectResponse,
    ProjectUpdate,
)

router = APIRouter()


@router.get("", response_model=DataResponse[ProjectListResponse])
async def list_projects(
    project_repo: Annotated[ProjectRepository, Depends(get_project_repo)],
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
):
    """List the tenant's projects, newest first."""
    projects = await project_repo.list_projects(skip=skip, limit=limit)
    return DataResponse(
        data=ProjectListResponse(
            projects=[ProjectResponse.model_validate(p) for p in projects]
        )
    )


@router.post("", response_model=DataResponse[ProjectResponse], status_code=201)
async def create_project(
    body: ProjectCreateRequest,
    current_user: Annotated[UserResult, Depends(get_current_user)],
    project_repo: Annotated[ProjectRepository, Depends(get_project_repo_for_write)],
    audit: Annotated[AuditTrailService, Depends(get_audit_trail)],
):
    project = await project_repo.create_project(
        name=body.name,
        description=body.description,
        created_by=current_user.id,
    )
    await audit.log_project_created(
        current_user.tenant_id, current_user.id, project.id, {"name": project.name}
    )
    return DataResponse(data=ProjectResponse.model_validate(project))


@router.get("/{project_id}", response_model=DataResponse[ProjectResponse])
async def get_project(
    project_id: str,
    project_repo: Annotated[ProjectRepository, Depends(get_project_repo)],
):
    project = await project_repo.get(project_id)
    if not project:
        raise ResourceNotFoundException("project", project_id)
    return DataResponse(data=ProjectResponse.model_validate(project))


@router.put("/{project_id}", response_model=DataResponse[ProjectResponse])
async def update_project(
    project_id: str,
    body: ProjectUpdate,
    current_user: Annotated[UserResult, Depends(get_current_user)],
    project_repo: Annotated[ProjectRepository, Depends(get_project_repo_for_write)],
    audit: Annotated[AuditTrailService, Depends(get_audit_trail)],
):
    """Partially update a project; only the fields sent are recorded as changes."""
    changes = body.model_dump(exclude_unset=True, mode="json")
    if not changes:
        raise ValidationException("No fields to update")
    project = await project_repo.update_project(project_id, changes)
    await audit.log_project_updated(
        current_user.tenant_id, current_user.id, project.id, {"changes": changes}
    )
    return DataResponse(data=ProjectResponse.model_validate(project))


@router.delete("/{project_id}", status_code=204)
async def delete_project(
    project_id: str,
    current_user: Annotated[UserResult, Depends(get_current_user)],
    project_repo: Annotated[ProjectRepository, Depends(get_project_repo_for_write)],
    audit: Annotated[AuditTrailService, Depends(get_audit_trail)],
):
    """Delete a project and, by cascade, its tasks."""
    deleted = await project_repo.delete_project(project_id)
    await audit.log_project_deleted(
        current_user.tenant_id, current_user.id, deleted.id, {"name": deleted.name}
    )
