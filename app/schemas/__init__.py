"""Pydantic request/response schemas for the API."""

from app.schemas.audit_log import AuditLogEntryResponse, AuditLogListResponse
from app.schemas.auth import LoginRequest, TokenResponse
from app.schemas.common import DataResponse, ErrorResponse
from app.schemas.health import HealthResponse
from app.schemas.project import (
    ProjectCreateRequest,
    ProjectListResponse,
    ProjectResponse,
    ProjectUpdate,
)
from app.schemas.task import TaskCreateRequest, TaskListResponse, TaskResponse, TaskUpdate
from app.schemas.tenant import (
    TenantCreateRequest,
    TenantCreateResponse,
    TenantResponse,
    TenantUpdate,
)
from app.schemas.user import UserCreateRequest, UserListResponse, UserResponse, UserUpdate

__all__ = [
    "AuditLogEntryResponse",
    "AuditLogListResponse",
    "DataResponse",
    "ErrorResponse",
    "HealthResponse",
    "LoginRequest",
    "ProjectCreateRequest",
    "ProjectListResponse",
    "ProjectResponse",
    "ProjectUpdate",
    "TaskCreateRequest",
    "TaskListResponse",
    "TaskResponse",
    "TaskUpdate",
    "TenantCreateRequest",
    "TenantCreateResponse",
    "TenantResponse",
    "TenantUpdate",
    "TokenResponse",
    "UserCreateRequest",
    "UserListResponse",
    "UserResponse",
    "UserUpdate",
]
