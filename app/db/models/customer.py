from sqlalchemy import JSON, Boolean, Column, Date, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from app.db.base import Base


class Customer(Base):
    __tablename__ = "customers"

    id = Column(Integer, primary_key=True, index=True)
    cpf_cnpj = Column(String(32), unique=True, nullable=False, index=True)
    name = Column(String(255), nullable=False)
    trade_name = Column(String(255), nullable=True)
    email = Column(String(320), unique=True, nullable=True, index=True)
    birth_foundation_date = Column(Date, nullable=True)
    state_registration = Column(String(64), nullable=True)
    phone_numbers = Column(JSON, nullable=False, default=list)
    deleted = Column(Boolean, nullable=False, default=False)

    # Relationships
    address = relationship(
        "Address",
        back_populates="customer",
        uselist=False,
        cascade="all, delete-orphan",
    )


class Address(Base):
    __tablename__ = "addresses"

    id = Column(Integer, primary_key=True, index=True)
    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=False, unique=True)
    street = Column(String(255), nullable=False)
    number = Column(String(32), nullable=True)
    complement = Column(String(255), nullable=True)
    district = Column(String(255), nullable=True)
    city = Column(String(255), nullable=False)
    state = Column(String(64), nullable=False)
    zip_code = Column(String(16), nullable=True)

    customer = relationship("Customer", back_populates="address")
