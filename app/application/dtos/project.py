"""DTOs for projects (no dependency on ORM)."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class ProjectResult:
    """Project read-model."""

    id: str
    tenant_id: str
    name: str
    description: str | None
    status: str
    created_by: str | None
    created_at: datetime
    updated_at: datetime
