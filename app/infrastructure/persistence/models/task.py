"""Task ORM model. Belongs to one project within the same tenant."""

from sqlalchemy import CheckConstraint, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.domain.enums import TaskPriority, TaskStatus
from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import CreatedByMixin, MultiTenantModel
from app.infrastructure.persistence.models.tenant import _in_values


class Task(MultiTenantModel, CreatedByMixin, Base):
    """Task. Table: task."""

    __tablename__ = "task"

    project_id: Mapped[str] = mapped_column(
        String, ForeignKey("project.id", ondelete="CASCADE"), nullable=False, index=True
    )
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(
        String(32), nullable=False, default=TaskStatus.TODO.value, server_default="todo"
    )
    priority: Mapped[str] = mapped_column(
        String(16),
        nullable=False,
        default=TaskPriority.MEDIUM.value,
        server_default="medium",
    )

    __table_args__ = (
        CheckConstraint(_in_values("status", TaskStatus.values()), name="task_status_check"),
        CheckConstraint(
            _in_values("priority", TaskPriority.values()), name="task_priority_check"
        ),
        Index("ix_task_tenant_project", "tenant_id", "project_id"),
    )
