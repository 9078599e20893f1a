from sqlalchemy import String, Uuid
from sqlalchemy.orm import Mapped, mapped_column
from crm.database.base import Base, AuditMixin
import uuid


class Role(AuditMixin, Base):
    __tablename__ = "roles"

    role_id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True, index=True)
    description: Mapped[str | None] = mapped_column(String(500), nullable=True)

    def __repr__(self) -> str:
        return f"<Role(id={self.role_id!r}, name={self.name!r})>"
