from uuid import UUID

from .common import AuditDto, CamelModel


class ProductDto(CamelModel):
    product_id: UUID
    product_type_id: UUID
    name: str
    description: str | None = None


class ProductListDto(CamelModel):
    product: ProductDto
    product_type_name: str | None = None


class ProductDetailsDto(ProductListDto):
    audit: AuditDto


class _ProductFields(CamelModel):
    product_type_id: UUID | None = None
    name: str | None = None
    description: str | None = None


class CreateProductCommand(_ProductFields):
    product_id: UUID | None = None
    created_by: UUID | None = None


class UpdateProductCommand(_ProductFields):
    product_id: UUID | None = None
    modified_by: UUID | None = None
