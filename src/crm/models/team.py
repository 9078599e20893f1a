from sqlalchemy import ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column
from crm.database.base import Base, AuditMixin
import uuid


class Team(AuditMixin, Base):
    """A named group of users with an optional team lead."""
    __tablename__ = "teams"

    team_id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    team_lead_user_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("users.user_id"), nullable=True, index=True
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True, index=True)
    description: Mapped[str | None] = mapped_column(String(500), nullable=True)

    def __repr__(self) -> str:
        return f"<Team(id={self.team_id!r}, name={self.name!r})>"
