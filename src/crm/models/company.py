from sqlalchemy import ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship
from crm.database.base import Base, AuditMixin
import uuid
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .lookups import AccountType, AccountStatus


class Company(AuditMixin, Base):
    """SQLAlchemy model for a customer or prospect organisation."""
    __tablename__ = "companies"

    company_id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    # Self reference for subsidiaries
    parent_company_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("companies.company_id"), nullable=True, index=True
    )

    name: Mapped[str] = mapped_column(String(200), nullable=False, index=True)
    description: Mapped[str | None] = mapped_column(String(2000), nullable=True)
    website: Mapped[str | None] = mapped_column(String(255), nullable=True)

    account_type_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("account_types.account_type_id"), nullable=False, index=True
    )
    account_status_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("account_statuses.account_status_id"), nullable=False, index=True
    )

    account_type: Mapped["AccountType | None"] = relationship(lazy="selectin")
    account_status: Mapped["AccountStatus | None"] = relationship(lazy="selectin")

    def __repr__(self) -> str:
        return f"<Company(id={self.company_id!r}, name={self.name!r})>"
