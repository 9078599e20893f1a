from crm.models.product import Product
from crm.schemas.product import (
    CreateProductCommand,
    ProductDetailsDto,
    ProductDto,
    ProductListDto,
    UpdateProductCommand,
)
from .common import audit_dto, label_of, new_id, stamp_create, stamp_update


def to_dto(entity: Product) -> ProductDto:
    return ProductDto(
        product_id=entity.product_id,
        product_type_id=entity.product_type_id,
        name=entity.name,
        description=entity.description,
    )


def to_list_dto(entity: Product) -> ProductListDto:
    return ProductListDto(product=to_dto(entity), product_type_name=label_of(entity.product_type))


def to_details_dto(entity: Product) -> ProductDetailsDto:
    return ProductDetailsDto(
        product=to_dto(entity),
        product_type_name=label_of(entity.product_type),
        audit=audit_dto(entity),
    )


def from_create(command: CreateProductCommand) -> Product:
    entity = Product(
        product_id=new_id(command.product_id),
        product_type_id=command.product_type_id,
        name=command.name.strip(),
        description=command.description,
    )
    return stamp_create(entity, command.created_by)


def apply_update(entity: Product, command: UpdateProductCommand) -> Product:
    entity.product_type_id = command.product_type_id
    entity.name = command.name.strip()
    entity.description = command.description
    return stamp_update(entity, command.modified_by)
