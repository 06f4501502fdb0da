import logging

from sqlalchemy.orm import Session

import app.repositories.product as product_repo
from app.db.models.product import Product as ProductModel
from app.db.models.product import ProductCategory as CategoryModel
from app.db.transaction import transaction
from app.errors import DomainValidationError, DuplicateResourceError, NotFoundError
from app.schemas.product import ProductCreate, ProductUpdate

logger = logging.getLogger(__name__)


def create_category(db: Session, name: str) -> CategoryModel:
    """
    Create a product category.

    Raises:
        DuplicateResourceError: If a category with this name already exists
    """
    with transaction(db):
        if product_repo.get_category_by_name(db, name):
            raise DuplicateResourceError(f"Category {name} already exists")
        category = product_repo.create_category(db, name)
    return category


def get_all_categories(db: Session) -> list[CategoryModel]:
    return product_repo.get_all_categories(db)


def _require_category(db: Session, category_id: int) -> None:
    if not product_repo.get_category_by_id(db, category_id):
        raise NotFoundError(f"Category with id {category_id} not found")


def create_product(db: Session, product_data: ProductCreate) -> ProductModel:
    """
    Create a product.

    Raises:
        NotFoundError: If the category doesn't exist
    """
    logger.info("Saving product: %s", product_data.name)
    with transaction(db):
        _require_category(db, product_data.category_id)
        product = product_repo.create_product(db, **product_data.model_dump())
    return product


def update_product(
    db: Session, product_id: int, product_data: ProductUpdate
) -> ProductModel:
    """
    Update a product. Only fields explicitly provided are updated.

    Raises:
        NotFoundError: If the product or the new category doesn't exist
    """
    update_fields = {
        field: value
        for field, value in product_data.model_dump(exclude_unset=True).items()
        if value is not None
    }
    with transaction(db):
        product = get_product(db, product_id)
        if "category_id" in update_fields:
            _require_category(db, update_fields["category_id"])
        product = product_repo.update_product(db, product, **update_fields)
    return product


def get_product(db: Session, product_id: int) -> ProductModel:
    """
    Get a product by ID.

    Raises:
        NotFoundError: If product doesn't exist
    """
    product = product_repo.get_product_by_id(db, product_id)
    if not product:
        raise NotFoundError("Product not found")
    return product


def get_all_products(db: Session, active: bool | None = None) -> list[ProductModel]:
    return product_repo.get_all_products(db, active=active)


def delete_product(db: Session, product_id: int) -> None:
    """
    Delete a product.

    - A product can only be deleted while no quotation item references it

    Raises:
        NotFoundError: If product doesn't exist
        DomainValidationError: If quotation items reference the product
    """
    logger.info("Deleting product: %s", product_id)
    with transaction(db):
        product = get_product(db, product_id)
        if product_repo.count_items_by_product_id(db, product_id):
            raise DomainValidationError(
                "Cannot delete product: product is referenced by quotation items"
            )
        product_repo.delete_product(db, product)
