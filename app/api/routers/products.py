from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.api.deps import get_db
from app.services.product import (
    create_category,
    create_product,
    delete_product,
    get_all_categories,
    get_all_products,
    get_product,
    update_product,
)
from app.schemas.product import (
    Category,
    CategoryCreate,
    Product,
    ProductCreate,
    ProductUpdate,
)

router = APIRouter(prefix="/products", tags=["products"])


@router.get("/categories", response_model=list[Category])
def get_categories(db: Session = Depends(get_db)):
    return [Category.model_validate(c) for c in get_all_categories(db)]


@router.post(
    "/categories", response_model=Category, status_code=status.HTTP_201_CREATED
)
def create_new_category(category_data: CategoryCreate, db: Session = Depends(get_db)):
    return Category.model_validate(create_category(db, category_data.name))


@router.post("", response_model=Product, status_code=status.HTTP_201_CREATED)
def create_new_product(product_data: ProductCreate, db: Session = Depends(get_db)):
    return Product.model_validate(create_product(db, product_data))


@router.get("", response_model=list[Product])
def get_products(
    active: bool | None = Query(None, description="Filter by active flag"),
    db: Session = Depends(get_db),
):
    return [Product.model_validate(p) for p in get_all_products(db, active=active)]


@router.get("/{product_id}", response_model=Product)
def get_product_by_id(product_id: int, db: Session = Depends(get_db)):
    return Product.model_validate(get_product(db, product_id))


@router.put("/{product_id}", response_model=Product)
def update_product_by_id(
    product_id: int,
    product_data: ProductUpdate,
    db: Session = Depends(get_db),
):
    return Product.model_validate(update_product(db, product_id, product_data))


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_product_by_id(product_id: int, db: Session = Depends(get_db)):
    """
    Delete a product.

    A product can only be deleted while no quotation item references it.
    """
    delete_product(db, product_id)
