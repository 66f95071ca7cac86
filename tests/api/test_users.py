"""Tenant user endpoints: admin-only writes, path tenant checks, audit events."""

from unittest.mock import AsyncMock

import pytest
from httpx import AsyncClient

from app.api.v1.dependencies import get_user_repo, get_user_repo_for_write
from app.domain.exceptions import UserAlreadyExistsException
from app.infrastructure.persistence.repositories.user_repo import UserRepository
from tests.conftest import OTHER_TENANT_ID, TENANT_ID, make_user

USERS_URL = f"/api/v1/tenants/{TENANT_ID}/users"


@pytest.fixture
def user_repo(override) -> AsyncMock:
    repo = AsyncMock(spec=UserRepository)
    override(get_user_repo, repo)
    override(get_user_repo_for_write, repo)
    return repo


async def test_list_users(client: AsyncClient, member_user, user_repo) -> None:
    user_repo.get_users_by_tenant.return_value = [make_user(), member_user]

    response = await client.get(USERS_URL)

    assert response.status_code == 200
    emails = [u["email"] for u in response.json()["data"]["users"]]
    assert emails == ["admin@acme.test", "member@acme.test"]
    assert "hashed_password" not in response.json()["data"]["users"][0]


async def test_path_tenant_must_match_token_tenant(
    client: AsyncClient, admin_user, user_repo
) -> None:
    response = await client.get(f"/api/v1/tenants/{OTHER_TENANT_ID}/users")

    assert response.status_code == 403
    user_repo.get_users_by_tenant.assert_not_awaited()


async def test_admin_creates_user_and_event_is_recorded(
    client: AsyncClient, admin_user, user_repo, audit_trail
) -> None:
    new_user = make_user("user-new", role="user", email="new@acme.test")
    user_repo.create_user.return_value = new_user

    response = await client.post(
        USERS_URL,
        json={
            "email": "new@acme.test",
            "full_name": "Nia New",
            "password": "correct-horse-battery",
            "role": "user",
        },
    )

    assert response.status_code == 201
    assert response.json()["data"]["id"] == "user-new"
    audit_trail.log_user_created.assert_awaited_once_with(
        TENANT_ID, admin_user.id, "user-new", {"email": "new@acme.test", "role": "user"}
    )


async def test_non_admin_cannot_create_user(
    client: AsyncClient, member_user, user_repo, audit_trail
) -> None:
    response = await client.post(
        USERS_URL,
        json={"email": "x@acme.test", "full_name": "X", "password": "longenough"},
    )

    assert response.status_code == 403
    user_repo.create_user.assert_not_awaited()
    audit_trail.log_user_created.assert_not_awaited()


async def test_duplicate_email_returns_409(
    client: AsyncClient, admin_user, user_repo, audit_trail
) -> None:
    user_repo.create_user.side_effect = UserAlreadyExistsException()

    response = await client.post(
        USERS_URL,
        json={"email": "admin@acme.test", "full_name": "Dup", "password": "longenough"},
    )

    assert response.status_code == 409
    assert response.json()["error"] == "USER_ALREADY_EXISTS"
    audit_trail.log_user_created.assert_not_awaited()


async def test_update_user_never_records_password(
    client: AsyncClient, admin_user, user_repo, audit_trail
) -> None:
    user_repo.update_user.return_value = make_user("user-member", role="admin")

    response = await client.put(
        f"{USERS_URL}/user-member",
        json={"role": "admin", "password": "brand-new-password"},
    )

    assert response.status_code == 200
    user_repo.update_user.assert_awaited_once_with(
        "user-member", TENANT_ID, {"role": "admin", "password": "brand-new-password"}
    )
    audit_trail.log_user_updated.assert_awaited_once_with(
        TENANT_ID,
        admin_user.id,
        "user-member",
        {"changes": {"role": "admin"}, "password_changed": True},
    )


async def test_delete_user_records_email(
    client: AsyncClient, admin_user, user_repo, audit_trail
) -> None:
    user_repo.delete_user.return_value = make_user(
        "user-member", role="user", email="member@acme.test"
    )

    response = await client.delete(f"{USERS_URL}/user-member")

    assert response.status_code == 204
    audit_trail.log_user_deleted.assert_awaited_once_with(
        TENANT_ID, admin_user.id, "user-member", {"email": "member@acme.test"}
    )


async def test_admin_cannot_delete_self(
    client: AsyncClient, admin_user, user_repo, audit_trail
) -> None:
    response = await client.delete(f"{USERS_URL}/{admin_user.id}")

    assert response.status_code == 400
    user_repo.delete_user.assert_not_awaited()
    audit_trail.log_user_deleted.assert_not_awaited()


async def test_create_user_accepts_camel_case_full_name(
    client: AsyncClient, admin_user, user_repo, audit_trail
) -> None:
    user_repo.create_user.return_value = make_user("user-new", role="user", email="new@acme.test")

    response = await client.post(
        USERS_URL,
        json={"email": "new@acme.test", "fullName": "Nia New", "password": "longenough"},
    )

    assert response.status_code == 201
    assert user_repo.create_user.await_args.kwargs["full_name"] == "Nia New"


@pytest.mark.parametrize("field", ["email", "full_name", "password", "role", "is_active"])
async def test_update_user_rejects_null_for_required_field(
    client: AsyncClient, admin_user, user_repo, audit_trail, field: str
) -> None:
    response = await client.put(f"{USERS_URL}/user-member", json={field: None})

    assert response.status_code == 422
    user_repo.update_user.assert_not_awaited()
    audit_trail.log_user_updated.assert_not_awaited()


async def test_other_tenant_path_reports_permission_denied(
    client: AsyncClient, admin_user, user_repo
) -> None:
    response = await client.get(f"/api/v1/tenants/{OTHER_TENANT_ID}/users")

    assert response.json()["error"] == "PERMISSION_DENIED"


async def test_member_write_reports_permission_denied(
    client: AsyncClient, member_user, user_repo
) -> None:
    response = await client.delete(f"{USERS_URL}/user-admin")

    assert response.status_code == 403
    assert response.json() == {
        "error": "PERMISSION_DENIED",
        "message": "Admin role required",
    }
