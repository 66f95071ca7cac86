"""Audit log listing: admin only, tenant-scoped, filters passed to the repository."""

from datetime import UTC, datetime
from unittest.mock import AsyncMock

import pytest
from httpx import AsyncClient

from app.api.v1.dependencies import get_audit_log_repo
from app.application.dtos.audit_log import AuditLogResult
from app.infrastructure.persistence.repositories.audit_log_repo import AuditLogRepository
from tests.conftest import TENANT_ID


@pytest.fixture
def audit_repo(override) -> AsyncMock:
    repo = AsyncMock(spec=AuditLogRepository)
    repo.list.return_value = [
        AuditLogResult(
            id="a2",
            tenant_id=TENANT_ID,
            user_id="user-admin",
            action="DELETE_PROJECT",
            entity="project",
            entity_id="p1",
            metadata={"name": "Apollo"},
            created_at=datetime(2026, 2, 2, tzinfo=UTC),
        ),
        AuditLogResult(
            id="a1",
            tenant_id=TENANT_ID,
            user_id="user-admin",
            action="CREATE_PROJECT",
            entity="project",
            entity_id="p1",
            metadata={},
            created_at=datetime(2026, 2, 1, tzinfo=UTC),
        ),
    ]
    repo.count.return_value = 2
    override(get_audit_log_repo, repo)
    return repo


async def test_admin_lists_tenant_audit_log(
    client: AsyncClient, admin_user, audit_repo
) -> None:
    response = await client.get("/api/v1/audit-logs")

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["total"] == 2
    assert (data["skip"], data["limit"]) == (0, 100)
    assert [i["id"] for i in data["items"]] == ["a2", "a1"]
    assert data["items"][0]["metadata"] == {"name": "Apollo"}
    assert audit_repo.list.await_args.args == (TENANT_ID,)


async def test_filters_are_passed_to_repository(
    client: AsyncClient, admin_user, audit_repo
) -> None:
    response = await client.get(
        "/api/v1/audit-logs",
        params={
            "entity": "project",
            "action": "DELETE_PROJECT",
            "user_id": "user-admin",
            "from_timestamp": "2026-02-01T00:00:00Z",
            "skip": 5,
            "limit": 10,
        },
    )

    assert response.status_code == 200
    kwargs = audit_repo.list.await_args.kwargs
    assert kwargs["skip"] == 5
    assert kwargs["limit"] == 10
    assert kwargs["entity"] == "project"
    assert kwargs["action"] == "DELETE_PROJECT"
    assert kwargs["user_id"] == "user-admin"
    assert kwargs["from_timestamp"] == datetime(2026, 2, 1, tzinfo=UTC)
    assert kwargs["to_timestamp"] is None
    assert audit_repo.count.await_args.kwargs["entity"] == "project"


async def test_unknown_action_filter_returns_422(
    client: AsyncClient, admin_user, audit_repo
) -> None:
    response = await client.get("/api/v1/audit-logs", params={"action": "ARCHIVE"})

    assert response.status_code == 422
    audit_repo.list.assert_not_awaited()


async def test_member_cannot_read_audit_log(
    client: AsyncClient, member_user, audit_repo
) -> None:
    response = await client.get("/api/v1/audit-logs")

    assert response.status_code == 403
    audit_repo.list.assert_not_awaited()
