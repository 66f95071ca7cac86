"""Shared utilities: enums, telemetry, and cross-cutting helpers.

Used by domain, application, and infrastructure. No business logic.
"""

from app.shared.enums import AuditAction, AuditEntity
from app.shared.utils import generate_cuid

__all__ = [
    "AuditAction",
    "AuditEntity",
    "generate_cuid",
]
