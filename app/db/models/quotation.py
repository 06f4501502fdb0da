from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import Column, DateTime, Enum, ForeignKey, Integer, Numeric
from sqlalchemy.orm import relationship

from app.db.base import Base
from app.domain.quotation_status import QuotationStatus


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Quotation(Base):
    __tablename__ = "quotations"

    id = Column(Integer, primary_key=True, index=True)
    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=False, index=True)
    seller_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    date_time = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    budget_status = Column(
        Enum(QuotationStatus, native_enum=False, length=20, validate_strings=True),
        nullable=False,
        default=QuotationStatus.OPEN,
    )

    # Relationships
    customer = relationship("Customer")
    seller = relationship("User")
    # Items are owned: detaching one from the list deletes it.
    items = relationship(
        "Item",
        back_populates="quotation",
        cascade="all, delete-orphan",
        order_by="Item.id",
    )

    @property
    def total(self) -> Decimal:
        return sum((item.subtotal for item in self.items), Decimal("0"))


class Item(Base):
    __tablename__ = "quotation_items"

    id = Column(Integer, primary_key=True, index=True)
    quotation_id = Column(
        Integer, ForeignKey("quotations.id", ondelete="CASCADE"), nullable=False, index=True
    )
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False)
    quantity = Column(Numeric(12, 3), nullable=False)
    price = Column(Numeric(12, 2), nullable=False)

    # Relationships
    quotation = relationship("Quotation", back_populates="items")
    product = relationship("Product")

    @property
    def subtotal(self) -> Decimal:
        return Decimal(self.quantity) * Decimal(self.price)
