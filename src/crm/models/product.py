from sqlalchemy import ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship
from crm.database.base import Base, AuditMixin
import uuid
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .lookups import ProductType


class Product(AuditMixin, Base):
    __tablename__ = "products"

    product_id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    product_type_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("product_types.product_type_id"), nullable=False, index=True
    )
    # Product names are unique; looked up by name from quotes and orders
    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True, index=True)
    description: Mapped[str | None] = mapped_column(String(2000), nullable=True)

    product_type: Mapped["ProductType | None"] = relationship(lazy="selectin")

    def __repr__(self) -> str:
        return f"<Product(id={self.product_id!r}, name={self.name!r})>"
