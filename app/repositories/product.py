from sqlalchemy.orm import Session

from app.db.models.product import Product as ProductModel
from app.db.models.product import ProductCategory as CategoryModel
from app.db.models.quotation import Item as ItemModel


def get_category_by_id(db: Session, category_id: int) -> CategoryModel | None:
    return db.query(CategoryModel).filter(CategoryModel.id == category_id).first()


def get_category_by_name(db: Session, name: str) -> CategoryModel | None:
    return db.query(CategoryModel).filter(CategoryModel.name == name).first()


def get_all_categories(db: Session) -> list[CategoryModel]:
    return db.query(CategoryModel).order_by(CategoryModel.name).all()


def create_category(db: Session, name: str) -> CategoryModel:
    db_category = CategoryModel(name=name)
    db.add(db_category)
    db.flush()
    return db_category


def get_product_by_id(db: Session, product_id: int) -> ProductModel | None:
    """Get a product by ID."""
    return db.query(ProductModel).filter(ProductModel.id == product_id).first()


def get_all_products(db: Session, active: bool | None = None) -> list[ProductModel]:
    """Get all products, optionally only active or inactive ones."""
    query = db.query(ProductModel)
    if active is not None:
        query = query.filter(ProductModel.active.is_(active))
    return query.order_by(ProductModel.name, ProductModel.id).all()


def create_product(db: Session, **fields) -> ProductModel:
    """Stage a new product and flush it. Pure data access - no business logic."""
    db_product = ProductModel(**fields)
    db.add(db_product)
    db.flush()
    return db_product


def update_product(db: Session, product: ProductModel, **kwargs) -> ProductModel:
    """Update a product. Only updates fields that are explicitly provided."""
    for field, value in kwargs.items():
        setattr(product, field, value)
    db.flush()
    return product


def count_items_by_product_id(db: Session, product_id: int) -> int:
    return db.query(ItemModel).filter(ItemModel.product_id == product_id).count()


def delete_product(db: Session, product: ProductModel) -> None:
    db.delete(product)
    db.flush()
