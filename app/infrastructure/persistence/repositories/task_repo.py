"""Task repository (tenant-scoped). Methods return application DTOs."""

from __future__ import annotations

from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.task import TaskResult
from app.domain.exceptions import ResourceNotFoundException
from app.infrastructure.persistence.models.project import Project
from app.infrastructure.persistence.models.task import Task
from app.infrastructure.persistence.repositories.base import TenantScopedRepository

_UPDATABLE_FIELDS = ("title", "description", "status", "priority")


def _to_result(t: Task) -> TaskResult:
    """Map Task ORM to TaskResult DTO."""
    return TaskResult(
        id=t.id,
        tenant_id=t.tenant_id,
        project_id=t.project_id,
        title=t.title,
        description=t.description,
        status=t.status,
        priority=t.priority,
        created_by=t.created_by,
        created_at=t.created_at,
        updated_at=t.updated_at,
    )


class TaskRepository(TenantScopedRepository[Task]):
    """Tasks of one tenant. Project-level calls raise 404 for a project outside the tenant."""

    def __init__(self, db: AsyncSession, tenant_id: str) -> None:
        super().__init__(db, Task, tenant_id)

    async def _get_or_raise(self, task_id: str) -> Task:
        task = await self.get_by_id(task_id)
        if task is None:
            raise ResourceNotFoundException("task", task_id)
        return task

    async def _ensure_project(self, project_id: str) -> None:
        result = await self.db.execute(
            select(Project.id).where(
                Project.id == project_id, Project.tenant_id == self.tenant_id
            )
        )
        if result.scalar_one_or_none() is None:
            raise ResourceNotFoundException("project", project_id)

    async def list_for_project(
        self, project_id: str, skip: int = 0, limit: int = 100
    ) -> list[TaskResult]:
        await self._ensure_project(project_id)
        result = await self.db.execute(
            select(Task)
            .where(Task.tenant_id == self.tenant_id, Task.project_id == project_id)
            .order_by(Task.created_at.desc())
            .offset(skip)
            .limit(limit)
        )
        return [_to_result(t) for t in result.scalars().all()]

    async def create_task(
        self,
        project_id: str,
        title: str,
        *,
        description: str | None = None,
        priority: str = "medium",
        created_by: str | None = None,
    ) -> TaskResult:
        await self._ensure_project(project_id)
        task = Task(
            tenant_id=self.tenant_id,
            project_id=project_id,
            title=title,
            description=description,
            priority=priority,
            created_by=created_by,
        )
        return _to_result(await self.create(task))

    async def update_task(self, task_id: str, changes: dict[str, Any]) -> TaskResult:
        task = await self._get_or_raise(task_id)
        for key, value in changes.items():
            if key in _UPDATABLE_FIELDS:
                setattr(task, key, value)
        return _to_result(await self.update(task))

    async def delete_task(self, task_id: str) -> TaskResult:
        task = await self._get_or_raise(task_id)
        snapshot = _to_result(task)
        await self.delete(task)
        return snapshot
