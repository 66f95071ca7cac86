"""DTOs for tasks (no dependency on ORM)."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class TaskResult:
    """Task read-model."""

    id: str
    tenant_id: str
    project_id: str
    title: str
    description: str | None
    status: str
    priority: str
    created_by: str | None
    created_at: datetime
    updated_at: datetime
