from sqlalchemy import Boolean, Column, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import relationship

from app.db.base import Base


class ProductCategory(Base):
    __tablename__ = "product_categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(120), unique=True, nullable=False)


class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    description = Column(String, nullable=True)
    price = Column(Numeric(12, 2), nullable=False)
    stock = Column(Numeric(12, 3), nullable=False, default=0)
    category_id = Column(Integer, ForeignKey("product_categories.id"), nullable=False)
    active = Column(Boolean, nullable=False, default=True)

    # Relationships
    category = relationship("ProductCategory", backref="products")

    @property
    def category_name(self) -> str | None:
        return self.category.name if self.category is not None else None
