"""Project ORM model. Tenant-scoped container for tasks."""

from sqlalchemy import CheckConstraint, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.domain.enums import ProjectStatus
from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import CreatedByMixin, MultiTenantModel
from app.infrastructure.persistence.models.tenant import _in_values


class Project(MultiTenantModel, CreatedByMixin, Base):
    """Project. Table: project. Deleting a project deletes its tasks."""

    __tablename__ = "project"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        default=ProjectStatus.ACTIVE.value,
        server_default="active",
    )

    __table_args__ = (
        CheckConstraint(_in_values("status", ProjectStatus.values()), name="project_status_check"),
        Index("ix_project_tenant_created", "tenant_id", "created_at"),
    )
