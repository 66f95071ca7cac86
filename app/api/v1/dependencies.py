"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for the current user, role and tenant checks,
repositories and the audit trail. Routes depend only on these; tests swap
them with app.dependency_overrides.

Read dependencies use get_db (no commit); write dependencies use
get_db_transactional (commit on success, rollback on error). The audit trail
uses its own sessions from the shared factory, never the request session.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.user import UserResult
from app.application.services.tenant_creation_service import TenantCreationService
from app.core.config import get_settings
from app.domain.enums import UserRole
from app.domain.exceptions import AuthenticationException, AuthorizationException
from app.infrastructure.persistence.database import (
    get_db,
    get_db_transactional,
    get_session_factory,
)
from app.infrastructure.persistence.repositories import (
    AuditLogRepository,
    ProjectRepository,
    TaskRepository,
    TenantRepository,
    UserRepository,
)
from app.infrastructure.security.jwt import verify_token
from app.infrastructure.services import AuditTrailService

_http_bearer = HTTPBearer(auto_error=False)


# ---- Audit trail ----


def get_audit_trail() -> AuditTrailService:
    """Audit recorder bound to the shared session factory (own transaction per event)."""
    return AuditTrailService(get_session_factory())


# ---- Users and auth ----


async def get_user_repo(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> UserRepository:
    """User repository for read operations."""
    return UserRepository(db)


async def get_user_repo_for_write(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> UserRepository:
    """User repository for writes (transactional)."""
    return UserRepository(db)


async def get_current_user_optional(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_http_bearer)],
) -> UserResult | None:
    """Return current user from JWT if present; else None.

    The user lookup opens its own short session only once a valid token is
    seen, so unauthenticated requests never touch the database.
    """
    if not credentials:
        return None
    try:
        payload = verify_token(credentials.credentials)
    except ValueError:
        return None
    async with get_session_factory()() as session:
        user = await UserRepository(session).get_by_id_and_tenant(
            payload["sub"], payload["tenant_id"]
        )
    if not user or not user.is_active:
        return None
    return user


async def get_current_user(
    current_user: Annotated[UserResult | None, Depends(get_current_user_optional)],
) -> UserResult:
    """Return current user from JWT; raise 401 if missing or invalid."""
    if current_user is None:
        raise AuthenticationException("Not authenticated")
    return current_user


async def require_admin(
    current_user: Annotated[UserResult, Depends(get_current_user)],
) -> UserResult:
    """Require the tenant admin role; raise 403 otherwise."""
    if current_user.role != UserRole.ADMIN.value:
        raise AuthorizationException(message="Admin role required")
    return current_user


def get_verified_tenant_id(
    tenant_id: str,
    current_user: Annotated[UserResult, Depends(get_current_user)],
) -> str:
    """Ensure path tenant_id matches the token tenant; return tenant_id or raise 403."""
    if tenant_id != current_user.tenant_id:
        raise AuthorizationException(resource="tenant", action="access")
    return tenant_id


# ---- Tenants ----


async def get_tenant_repo(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> TenantRepository:
    """Tenant repository for read operations."""
    return TenantRepository(db)


async def get_tenant_repo_for_write(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> TenantRepository:
    """Tenant repository for writes (transactional)."""
    return TenantRepository(db)


async def get_tenant_creation_service(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> TenantCreationService:
    """Tenant and admin user created in one request transaction."""
    return TenantCreationService(
        tenant_repo=TenantRepository(db),
        user_repo=UserRepository(db),
    )


def verify_create_tenant_secret(request: Request) -> None:
    """Require X-Create-Tenant-Secret to match CREATE_TENANT_SECRET.

    503 when tenant creation is not configured; 401 when the header is
    missing or wrong.
    """
    secret = get_settings().create_tenant_secret
    if secret is None or not secret.get_secret_value():
        raise HTTPException(status_code=503, detail="Tenant creation is not configured")
    provided = request.headers.get("X-Create-Tenant-Secret")
    if provided != secret.get_secret_value():
        raise HTTPException(status_code=401, detail="Invalid or missing tenant creation secret")


# ---- Projects and tasks (tenant-scoped by the token) ----


async def get_project_repo(
    current_user: Annotated[UserResult, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ProjectRepository:
    """Project repository for read operations, scoped to the caller's tenant."""
    return ProjectRepository(db, current_user.tenant_id)


async def get_project_repo_for_write(
    current_user: Annotated[UserResult, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> ProjectRepository:
    """Project repository for writes (transactional), scoped to the caller's tenant."""
    return ProjectRepository(db, current_user.tenant_id)


async def get_task_repo(
    current_user: Annotated[UserResult, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> TaskRepository:
    """Task repository for read operations, scoped to the caller's tenant."""
    return TaskRepository(db, current_user.tenant_id)


async def get_task_repo_for_write(
    current_user: Annotated[UserResult, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> TaskRepository:
    """Task repository for writes (transactional), scoped to the caller's tenant."""
    return TaskRepository(db, current_user.tenant_id)


# ---- Audit log (read) ----


async def get_audit_log_repo(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> AuditLogRepository:
    """Audit log repository for read (list). Writes go through the audit trail."""
    return AuditLogRepository(db)
