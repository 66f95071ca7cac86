"""Project endpoints: envelopes, tenant scoping and the audit events each write records."""

from datetime import UTC, datetime
from unittest.mock import AsyncMock

import pytest
from httpx import AsyncClient

from app.api.v1.dependencies import (
    get_audit_trail,
    get_project_repo,
    get_project_repo_for_write,
)
from app.application.dtos.project import ProjectResult
from app.domain.exceptions import ResourceNotFoundException
from app.infrastructure.persistence.repositories.project_repo import ProjectRepository
from app.infrastructure.services import AuditTrailService
from tests.conftest import TENANT_ID

NOW = datetime(2026, 5, 4, 9, 30, tzinfo=UTC)


def make_project(project_id: str = "p1", name: str = "Apollo", **kwargs) -> ProjectResult:
    fields = {
        "id": project_id,
        "tenant_id": TENANT_ID,
        "name": name,
        "description": None,
        "status": "active",
        "created_by": "user-admin",
        "created_at": NOW,
        "updated_at": NOW,
    }
    fields.update(kwargs)
    return ProjectResult(**fields)


@pytest.fixture
def project_repo(override) -> AsyncMock:
    repo = AsyncMock(spec=ProjectRepository)
    override(get_project_repo, repo)
    override(get_project_repo_for_write, repo)
    return repo


async def test_list_projects_wraps_in_data_envelope(
    client: AsyncClient, admin_user, project_repo
) -> None:
    project_repo.list_projects.return_value = [make_project(), make_project("p2", "Gemini")]

    response = await client.get("/api/v1/projects")

    assert response.status_code == 200
    projects = response.json()["data"]["projects"]
    assert [p["name"] for p in projects] == ["Apollo", "Gemini"]


async def test_create_project_records_create_event(
    client: AsyncClient, admin_user, project_repo, audit_trail
) -> None:
    project_repo.create_project.return_value = make_project(description="Moon")

    response = await client.post(
        "/api/v1/projects", json={"name": "Apollo", "description": "Moon"}
    )

    assert response.status_code == 201
    assert response.json()["data"]["id"] == "p1"
    project_repo.create_project.assert_awaited_once_with(
        name="Apollo", description="Moon", created_by=admin_user.id
    )
    audit_trail.log_project_created.assert_awaited_once_with(
        TENANT_ID, admin_user.id, "p1", {"name": "Apollo"}
    )


async def test_create_project_succeeds_when_audit_store_is_down(
    client: AsyncClient, admin_user, project_repo, override
) -> None:
    def unavailable_factory():
        raise ConnectionError("audit database unreachable")

    override(get_audit_trail, AuditTrailService(unavailable_factory))
    project_repo.create_project.return_value = make_project()

    response = await client.post("/api/v1/projects", json={"name": "Apollo"})

    assert response.status_code == 201
    assert response.json()["data"]["name"] == "Apollo"


async def test_create_project_requires_name(
    client: AsyncClient, admin_user, project_repo, audit_trail
) -> None:
    response = await client.post("/api/v1/projects", json={"description": "x"})

    assert response.status_code == 422
    audit_trail.log_project_created.assert_not_awaited()


async def test_get_project_missing_returns_404(
    client: AsyncClient, member_user, project_repo
) -> None:
    project_repo.get.return_value = None

    response = await client.get("/api/v1/projects/p404")

    assert response.status_code == 404
    body = response.json()
    assert body["error"] == "RESOURCE_NOT_FOUND"
    assert body["details"] == {"resource_type": "project", "resource_id": "p404"}


async def test_update_project_records_only_changed_fields(
    client: AsyncClient, member_user, project_repo, audit_trail
) -> None:
    project_repo.update_project.return_value = make_project(status="completed")

    response = await client.put("/api/v1/projects/p1", json={"status": "completed"})

    assert response.status_code == 200
    assert response.json()["data"]["status"] == "completed"
    project_repo.update_project.assert_awaited_once_with("p1", {"status": "completed"})
    audit_trail.log_project_updated.assert_awaited_once_with(
        TENANT_ID, member_user.id, "p1", {"changes": {"status": "completed"}}
    )


async def test_update_project_without_fields_returns_400(
    client: AsyncClient, admin_user, project_repo, audit_trail
) -> None:
    response = await client.put("/api/v1/projects/p1", json={})

    assert response.status_code == 400
    assert response.json()["error"] == "VALIDATION_ERROR"
    project_repo.update_project.assert_not_awaited()
    audit_trail.log_project_updated.assert_not_awaited()


async def test_update_project_of_other_tenant_returns_404_without_event(
    client: AsyncClient, admin_user, project_repo, audit_trail
) -> None:
    project_repo.update_project.side_effect = ResourceNotFoundException("project", "p-other")

    response = await client.put("/api/v1/projects/p-other", json={"name": "Mine now"})

    assert response.status_code == 404
    audit_trail.log_project_updated.assert_not_awaited()


async def test_delete_project_records_deleted_name(
    client: AsyncClient, admin_user, project_repo, audit_trail
) -> None:
    project_repo.delete_project.return_value = make_project(name="Old")

    response = await client.delete("/api/v1/projects/p1")

    assert response.status_code == 204
    audit_trail.log_project_deleted.assert_awaited_once_with(
        TENANT_ID, admin_user.id, "p1", {"name": "Old"}
    )


async def test_projects_require_authentication(client: AsyncClient) -> None:
    response = await client.get("/api/v1/projects")

    assert response.status_code == 401
    assert response.json()["error"] == "AUTHENTICATION_ERROR"
    assert response.headers["www-authenticate"] == "Bearer"


async def test_invalid_bearer_token_is_rejected(client: AsyncClient) -> None:
    response = await client.get(
        "/api/v1/projects", headers={"Authorization": "Bearer not-a-jwt"}
    )

    assert response.status_code == 401


@pytest.mark.parametrize("field", ["name", "status"])
async def test_update_project_rejects_null_for_required_field(
    client: AsyncClient, admin_user, project_repo, audit_trail, field: str
) -> None:
    response = await client.put("/api/v1/projects/p1", json={field: None})

    assert response.status_code == 422
    project_repo.update_project.assert_not_awaited()
    audit_trail.log_project_updated.assert_not_awaited()


async def test_update_project_accepts_null_description(
    client: AsyncClient, admin_user, project_repo, audit_trail
) -> None:
    project_repo.update_project.return_value = make_project()

    response = await client.put("/api/v1/projects/p1", json={"description": None})

    assert response.status_code == 200
    project_repo.update_project.assert_awaited_once_with("p1", {"description": None})
