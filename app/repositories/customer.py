from sqlalchemy.orm import Session

from app.db.models.customer import Address as AddressModel
from app.db.models.customer import Customer as CustomerModel
from app.domain.tombstone import tombstone_email, tombstone_value


def _active_customers(db: Session):
    return db.query(CustomerModel).filter(CustomerModel.deleted.is_(False))


def get_customer_by_id(db: Session, customer_id: int) -> CustomerModel | None:
    """Get a non-deleted customer by ID."""
    return _active_customers(db).filter(CustomerModel.id == customer_id).first()


def get_customer_by_cpf_cnpj_and_id_not(
    db: Session, cpf_cnpj: str, customer_id: int | None
) -> CustomerModel | None:
    query = _active_customers(db).filter(CustomerModel.cpf_cnpj == cpf_cnpj)
    if customer_id is not None:
        query = query.filter(CustomerModel.id != customer_id)
    return query.first()


def get_customer_by_email_and_id_not(
    db: Session, email: str, customer_id: int | None
) -> CustomerModel | None:
    query = _active_customers(db).filter(CustomerModel.email == email)
    if customer_id is not None:
        query = query.filter(CustomerModel.id != customer_id)
    return query.first()


def get_all_customers_paginated(
    db: Session, page: int = 1, page_size: int = 100, name: str | None = None
) -> tuple[list[CustomerModel], int]:
    """
    Get all non-deleted customers with pagination, sorted by name.

    Args:
        page: Page number (1-indexed)
        page_size: Number of items per page
        name: Optional filter on name or trade name (case-insensitive partial match)
    """
    query = _active_customers(db)
    if name:
        pattern = f"%{name}%"
        query = query.filter(
            CustomerModel.name.ilike(pattern) | CustomerModel.trade_name.ilike(pattern)
        )
    total = query.count()
    skip = (page - 1) * page_size
    customers = (
        query.order_by(CustomerModel.name, CustomerModel.id)
        .offset(skip)
        .limit(page_size)
        .all()
    )
    return customers, total


def create_customer(db: Session, address: dict | None = None, **fields) -> CustomerModel:
    """Stage a new customer (and its address) and flush it."""
    db_customer = CustomerModel(deleted=False, **fields)
    if address is not None:
        db_customer.address = AddressModel(**address)
    db.add(db_customer)
    db.flush()
    return db_customer


def update_customer(db: Session, customer: CustomerModel, **kwargs) -> CustomerModel:
    """
    Update a customer. Only updates fields that are explicitly provided.

    Passing ``address=None`` removes the address; passing a dict replaces it.
    """
    address_given = "address" in kwargs
    address = kwargs.pop("address", None)
    for field, value in kwargs.items():
        setattr(customer, field, value)
    if address_given:
        if address is None:
            customer.address = None
        elif customer.address is None:
            customer.address = AddressModel(**address)
        else:
            for field, value in address.items():
                setattr(customer.address, field, value)
    db.flush()
    return customer


def is_customer_deleted(db: Session, customer_id: int) -> int:
    return (
        db.query(CustomerModel)
        .filter(CustomerModel.id == customer_id, CustomerModel.deleted.is_(True))
        .count()
    )


def soft_delete_customer_by_id(db: Session, customer_id: int, tombstone: str) -> int:
    """Conditionally mark a customer deleted, freeing its tax id and email. Returns rows affected."""
    return (
        db.query(CustomerModel)
        .filter(CustomerModel.id == customer_id, CustomerModel.deleted.is_(False))
        .update(
            {
                CustomerModel.deleted: True,
                CustomerModel.cpf_cnpj: tombstone_value(tombstone),
                CustomerModel.email: tombstone_email(tombstone),
            },
            synchronize_session=False,
        )
    )
