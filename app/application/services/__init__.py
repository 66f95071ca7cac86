"""Application services: tenant creation."""

from app.application.services.tenant_creation_service import TenantCreationService

__all__ = ["TenantCreationService"]
