from sqlalchemy import DateTime, ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship
from datetime import datetime
from crm.database.base import Base, AuditMixin
import uuid
from typing import TYPE_CHECKING

# Avoid circular import issues when using type hints for related models
if TYPE_CHECKING:
    from .lookups import ActivityType, ActivityStatus


class Activity(AuditMixin, Base):
    """
    A task, call, meeting or follow-up tracked against the CRM.

    Type and status are lookup rows; assignment to a user or team is optional.
    An activity counts as completed once `completed_date` is set.
    """
    __tablename__ = "activities"

    activity_id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    activity_type_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("activity_types.activity_type_id"), nullable=False, index=True
    )
    activity_status_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("activity_statuses.activity_status_id"), nullable=False, index=True
    )

    # Assignment is by plain id; users and teams live in their own aggregates
    assigned_user_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, nullable=True, index=True)
    assigned_team_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, nullable=True, index=True)

    subject: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(String(2000), nullable=True)

    due_date: Mapped[datetime | None] = mapped_column(DateTime, nullable=True, index=True)
    start_date: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    completed_date: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    completed_by: Mapped[uuid.UUID | None] = mapped_column(Uuid, nullable=True)

    # --- Relationships ---
    # selectin: display names must be available without lazy IO in async code
    activity_type: Mapped["ActivityType | None"] = relationship(lazy="selectin")
    activity_status: Mapped["ActivityStatus | None"] = relationship(lazy="selectin")

    def __repr__(self) -> str:
        return f"<Activity(id={self.activity_id!r}, subject={self.subject!r})>"
