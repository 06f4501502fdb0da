from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class Category(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str


class CategoryCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=120)


class Product(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str | None = None
    price: Decimal
    stock: Decimal
    category_id: int
    category_name: str | None = None
    active: bool


class ProductCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    price: Decimal = Field(..., ge=0, description="Unit price (must be >= 0)")
    stock: Decimal = Field(Decimal("0"), ge=0, description="Stock (must be >= 0)")
    category_id: int
    active: bool = True


class ProductUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    price: Decimal | None = Field(None, ge=0, description="Unit price (must be >= 0)")
    stock: Decimal | None = Field(None, ge=0, description="Stock (must be >= 0)")
    category_id: int | None = None
    active: bool | None = None
