"""Task endpoints: nested list/create under a project, update/delete by id."""

from datetime import UTC, datetime
from unittest.mock import AsyncMock

import pytest
from httpx import AsyncClient

from app.api.v1.dependencies import get_task_repo, get_task_repo_for_write
from app.application.dtos.task import TaskResult
from app.domain.exceptions import ResourceNotFoundException
from app.infrastructure.persistence.repositories.task_repo import TaskRepository
from tests.conftest import TENANT_ID

NOW = datetime(2026, 5, 4, 9, 30, tzinfo=UTC)


def make_task(task_id: str = "k1", title: str = "Write launch notes", **kwargs) -> TaskResult:
    fields = {
        "id": task_id,
        "tenant_id": TENANT_ID,
        "project_id": "p1",
        "title": title,
        "description": None,
        "status": "todo",
        "priority": "medium",
        "created_by": "user-member",
        "created_at": NOW,
        "updated_at": NOW,
    }
    fields.update(kwargs)
    return TaskResult(**fields)


@pytest.fixture
def task_repo(override) -> AsyncMock:
    repo = AsyncMock(spec=TaskRepository)
    override(get_task_repo, repo)
    override(get_task_repo_for_write, repo)
    return repo


async def test_list_tasks_for_project(
    client: AsyncClient, member_user, task_repo
) -> None:
    task_repo.list_for_project.return_value = [make_task()]

    response = await client.get("/api/v1/projects/p1/tasks")

    assert response.status_code == 200
    tasks = response.json()["data"]["tasks"]
    assert tasks[0]["title"] == "Write launch notes"
    task_repo.list_for_project.assert_awaited_once_with("p1", skip=0, limit=100)


async def test_list_tasks_unknown_project_returns_404(
    client: AsyncClient, member_user, task_repo
) -> None:
    task_repo.list_for_project.side_effect = ResourceNotFoundException("project", "nope")

    response = await client.get("/api/v1/projects/nope/tasks")

    assert response.status_code == 404


async def test_create_task_records_event(
    client: AsyncClient, member_user, task_repo, audit_trail
) -> None:
    task_repo.create_task.return_value = make_task(priority="high")

    response = await client.post(
        "/api/v1/projects/p1/tasks",
        json={"title": "Write launch notes", "priority": "high"},
    )

    assert response.status_code == 201
    assert response.json()["data"]["priority"] == "high"
    task_repo.create_task.assert_awaited_once_with(
        "p1",
        "Write launch notes",
        description=None,
        priority="high",
        created_by=member_user.id,
    )
    audit_trail.log_task_created.assert_awaited_once_with(
        TENANT_ID, member_user.id, "k1", {"title": "Write launch notes", "project_id": "p1"}
    )


async def test_create_task_rejects_unknown_priority(
    client: AsyncClient, member_user, task_repo, audit_trail
) -> None:
    response = await client.post(
        "/api/v1/projects/p1/tasks", json={"title": "x", "priority": "urgent"}
    )

    assert response.status_code == 422
    task_repo.create_task.assert_not_awaited()


async def test_update_task_records_changes(
    client: AsyncClient, member_user, task_repo, audit_trail
) -> None:
    task_repo.update_task.return_value = make_task(status="in_progress")

    response = await client.put("/api/v1/tasks/k1", json={"status": "in_progress"})

    assert response.status_code == 200
    audit_trail.log_task_updated.assert_awaited_once_with(
        TENANT_ID, member_user.id, "k1", {"changes": {"status": "in_progress"}}
    )


async def test_delete_task_records_title(
    client: AsyncClient, member_user, task_repo, audit_trail
) -> None:
    task_repo.delete_task.return_value = make_task()

    response = await client.delete("/api/v1/tasks/k1")

    assert response.status_code == 204
    audit_trail.log_task_deleted.assert_awaited_once_with(
        TENANT_ID, member_user.id, "k1", {"title": "Write launch notes"}
    )


async def test_delete_missing_task_returns_404_without_event(
    client: AsyncClient, member_user, task_repo, audit_trail
) -> None:
    task_repo.delete_task.side_effect = ResourceNotFoundException("task", "k404")

    response = await client.delete("/api/v1/tasks/k404")

    assert response.status_code == 404
    audit_trail.log_task_deleted.assert_not_awaited()


@pytest.mark.parametrize("field", ["title", "status", "priority"])
async def test_update_task_rejects_null_for_required_field(
    client: AsyncClient, admin_user, task_repo, audit_trail, field: str
) -> None:
    response = await client.put("/api/v1/tasks/k1", json={field: None})

    assert response.status_code == 422
    task_repo.update_task.assert_not_awaited()
    audit_trail.log_task_updated.assert_not_awaited()
