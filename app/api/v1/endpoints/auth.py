"""Auth API: login and current user.

Uses only injected dependencies (get_user_repo, get_tenant_repo,
get_audit_trail); no manual repo construction. JWT created via
infrastructure security.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from app.api.v1.dependencies import (
    get_audit_trail,
    get_current_user,
    get_tenant_repo,
    get_user_repo,
)
from app.application.dtos.user import UserResult
from app.core.limiter import limit_auth
from app.domain.enums import TenantStatus
from app.domain.exceptions import AuthenticationException
from app.infrastructure.persistence.repositories.tenant_repo import TenantRepository
from app.infrastructure.persistence.repositories.user_repo import UserRepository
from app.infrastructure.security.jwt import create_access_token
from app.infrastructure.services import AuditTrailService
from app.schemas.auth import LoginRequest, TokenResponse
from app.schemas.common import DataResponse
from app.schemas.user import UserResponse
from app.shared.request_audit import get_client_context

router = APIRouter()


@router.post("/login", response_model=DataResponse[TokenResponse])
@limit_auth
async def login(
    request: Request,
    body: LoginRequest,
    user_repo: Annotated[UserRepository, Depends(get_user_repo)],
    tenant_repo: Annotated[TenantRepository, Depends(get_tenant_repo)],
    audit: Annotated[AuditTrailService, Depends(get_audit_trail)],
):
    """Authenticate with tenant_code, email and password; return JWT and user.

    Unknown tenant, suspended tenant and wrong password all answer the same
    401 so callers cannot tell which part was wrong.
    """
    tenant = await tenant_repo.get_by_code(body.tenant_code.strip().lower())
    if not tenant or tenant.status != TenantStatus.ACTIVE:
        raise AuthenticationException("Invalid credentials")

    user = await user_repo.authenticate(
        email=body.email,
        tenant_id=tenant.id,
        password=body.password,
    )
    if not user:
        raise AuthenticationException("Invalid credentials")

    token = create_access_token(user.id, user.tenant_id, user.role)
    _, ip_address, user_agent = get_client_context(request)
    await audit.log_login(
        user.tenant_id,
        user.id,
        {"ip": ip_address, "user_agent": user_agent},
    )
    return DataResponse(
        data=TokenResponse(
            access_token=token,
            token_type="bearer",
            user=UserResponse.model_validate(user),
        )
    )


@router.get("/me", response_model=DataResponse[UserResponse])
async def get_me(
    current_user: Annotated[UserResult, Depends(get_current_user)],
):
    """Return the currently authenticated user from JWT.

    Requires Authorization: Bearer <token>.
    """
    return DataResponse(data=UserResponse.model_validate(current_user))
