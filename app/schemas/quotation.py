from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from app.domain.quotation_status import QuotationStatus


class Item(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    product_id: int
    quantity: Decimal
    price: Decimal
    subtotal: Decimal


class ItemCreate(BaseModel):
    product_id: int
    quantity: Decimal = Field(..., gt=0, description="Quantity (must be > 0)")
    price: Decimal | None = Field(
        None, ge=0, description="Unit price; defaults to the product's current price"
    )


class ItemUpdate(BaseModel):
    quantity: Decimal | None = Field(None, gt=0, description="Quantity (must be > 0)")
    price: Decimal | None = Field(None, ge=0, description="Unit price (must be >= 0)")


class ItemUpsert(ItemCreate):
    """An entry of a full item-list replacement: with ``id`` it updates, without it creates."""

    id: int | None = None


class Quotation(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    customer_id: int
    seller_id: int
    date_time: datetime
    budget_status: QuotationStatus
    items: list[Item] = []
    total: Decimal


class QuotationCreate(BaseModel):
    customer_id: int
    seller_id: int
    items: list[ItemCreate] = Field(default_factory=list)


class QuotationUpdate(BaseModel):
    customer_id: int | None = None
    seller_id: int | None = None
    items: list[ItemUpsert] | None = Field(
        None, description="Replaces the whole item list; omitted items are deleted"
    )


class StatusChange(BaseModel):
    budget_status: QuotationStatus
