from sqlalchemy import String, DateTime, Uuid
from sqlalchemy.orm import Mapped, mapped_column
from datetime import datetime
from crm.database.base import Base, AuditMixin
import uuid


class User(AuditMixin, Base):
    """
    SQLAlchemy model for User.

    Represents a CRM user who can sign in, be assigned activities and belong
    to teams and roles (through the `team_users` / `user_roles` junctions).
    """
    __tablename__ = "users"

    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    # Login name (must be unique and non-null)
    login_name: Mapped[str] = mapped_column(
        String(100),
        unique=True,
        index=True,
        nullable=False
    )

    # Argon2 hash (never store plain-text passwords)
    login_password: Mapped[str] = mapped_column(
        String(255),
        nullable=False
    )

    # Stamped by the auth router on successful sign-in
    last_login: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)

    def __repr__(self) -> str:
        return f"<User(id={self.user_id!r}, login_name={self.login_name!r})>"
