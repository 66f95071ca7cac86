"""Pytest configuration and fixtures for taskhub.

Uses app.main:app for HTTP tests and app.infrastructure.persistence.database
for DB-dependent fixtures. API tests replace repositories and the audit trail
through app.dependency_overrides, so they run without Postgres.
"""

import os

os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")

from collections.abc import Callable
from datetime import UTC, datetime
from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.v1.dependencies import get_audit_trail, get_current_user
from app.application.dtos.user import UserResult
from app.core.limiter import limiter
from app.infrastructure.persistence import database
from app.infrastructure.services import AuditTrailService
from app.main import app

# Used by tests that enable tenant creation via CREATE_TENANT_SECRET.
_TEST_CREATE_TENANT_SECRET = "test-create-tenant-secret"

TENANT_ID = "tenant-acme"
OTHER_TENANT_ID = "tenant-globex"


def make_user(
    user_id: str = "user-admin",
    *,
    tenant_id: str = TENANT_ID,
    role: str = "admin",
    email: str = "admin@acme.test",
) -> UserResult:
    return UserResult(
        id=user_id,
        tenant_id=tenant_id,
        email=email,
        full_name="Ada Admin" if role == "admin" else "Uma User",
        role=role,
        is_active=True,
        created_at=datetime(2026, 1, 1, tzinfo=UTC),
    )


@pytest.fixture(autouse=True)
def _reset_app_state():
    """Clear dependency overrides and disable rate limits around every test."""
    limiter.enabled = False
    yield
    app.dependency_overrides.clear()
    limiter.enabled = True


@pytest.fixture
async def client() -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def override() -> Callable[[Callable, object], None]:
    """Return a helper that makes a dependency return a fixed value."""

    def _override(dependency: Callable, value: object) -> None:
        app.dependency_overrides[dependency] = lambda: value

    return _override


@pytest.fixture
def audit_trail(override) -> AsyncMock:
    """AuditTrailService stand-in; assert on its log_* calls."""
    mock = AsyncMock(spec=AuditTrailService)
    override(get_audit_trail, mock)
    return mock


@pytest.fixture
def admin_user(override) -> UserResult:
    """Authenticate requests as the tenant admin."""
    user = make_user()
    override(get_current_user, user)
    return user


@pytest.fixture
def member_user(override) -> UserResult:
    """Authenticate requests as a non-admin user of the same tenant."""
    user = make_user("user-member", role="user", email="member@acme.test")
    override(get_current_user, user)
    return user


@pytest.fixture
async def db_session() -> AsyncSession:
    """Database session for repository/integration tests. Rolls back after test.

    Requires DATABASE_URL (schema from `alembic upgrade head`). Skips when
    Postgres is not configured. Mark such tests with @pytest.mark.requires_db;
    run without DB via: pytest -m 'not requires_db'.
    """
    database._ensure_engine()
    if database.AsyncSessionLocal is None:
        pytest.skip(
            "Postgres not configured: set DATABASE_URL, then run: alembic upgrade head"
        )
    async with database.AsyncSessionLocal() as session:
        yield session
        await session.rollback()
