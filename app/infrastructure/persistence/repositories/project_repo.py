"""Project repository (tenant-scoped). Methods return application DTOs."""

from __future__ import annotations

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.project import ProjectResult
from app.domain.exceptions import ResourceNotFoundException
from app.infrastructure.persistence.models.project import Project
from app.infrastructure.persistence.repositories.base import TenantScopedRepository

_UPDATABLE_FIELDS = ("name", "description", "status")


def _to_result(p: Project) -> ProjectResult:
    """Map Project ORM to ProjectResult DTO."""
    return ProjectResult(
        id=p.id,
        tenant_id=p.tenant_id,
        name=p.name,
        description=p.description,
        status=p.status,
        created_by=p.created_by,
        created_at=p.created_at,
        updated_at=p.updated_at,
    )


class ProjectRepository(TenantScopedRepository[Project]):
    """Projects of one tenant."""

    def __init__(self, db: AsyncSession, tenant_id: str) -> None:
        super().__init__(db, Project, tenant_id)

    async def _get_or_raise(self, project_id: str) -> Project:
        project = await self.get_by_id(project_id)
        if project is None:
            raise ResourceNotFoundException("project", project_id)
        return project

    async def get(self, project_id: str) -> ProjectResult | None:
        project = await self.get_by_id(project_id)
        return _to_result(project) if project else None

    async def list_projects(self, skip: int = 0, limit: int = 100) -> list[ProjectResult]:
        return [_to_result(p) for p in await self.get_all(skip=skip, limit=limit)]

    async def create_project(
        self,
        name: str,
        description: str | None,
        created_by: str | None,
    ) -> ProjectResult:
        project = Project(
            tenant_id=self.tenant_id,
            name=name,
            description=description,
            created_by=created_by,
        )
        return _to_result(await self.create(project))

    async def update_project(self, project_id: str, changes: dict[str, Any]) -> ProjectResult:
        """Apply changes (name, description, status); raise ResourceNotFoundException if missing."""
        project = await self._get_or_raise(project_id)
        for key, value in changes.items():
            if key in _UPDATABLE_FIELDS:
                setattr(project, key, value)
        return _to_result(await self.update(project))

    async def delete_project(self, project_id: str) -> ProjectResult:
        """Delete project (tasks cascade); return the deleted project."""
        project = await self._get_or_raise(project_id)
        snapshot = _to_result(project)
        await self.delete(project)
        return snapshot
