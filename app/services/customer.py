import logging

from sqlalchemy.orm import Session

import app.repositories.customer as customer_repo
from app.db.models.customer import Customer as CustomerModel
from app.db.transaction import transaction
from app.domain.tombstone import generate_tombstone
from app.domain.user_validation import is_empty
from app.errors import NotFoundError, ValidationFailedError
from app.schemas.customer import CustomerCreate, CustomerUpdate

logger = logging.getLogger(__name__)


def _validate_customer(
    db: Session,
    customer_id: int | None,
    name: str | None,
    cpf_cnpj: str | None,
    email: str | None,
) -> list[str]:
    """Collect every violation for a customer record, structural rules first."""
    violations = []
    if is_empty(name):
        violations.append("Name is required")
    if is_empty(cpf_cnpj):
        violations.append("CPF/CNPJ is required")
    if not is_empty(cpf_cnpj) and customer_repo.get_customer_by_cpf_cnpj_and_id_not(
        db, cpf_cnpj, customer_id
    ):
        violations.append("CPF/CNPJ is already associated with another customer")
    if not is_empty(email) and customer_repo.get_customer_by_email_and_id_not(
        db, email, customer_id
    ):
        violations.append("Email is already associated with another customer")
    return violations


def create_customer(db: Session, customer_data: CustomerCreate) -> CustomerModel:
    """
    Create a customer.

    Raises:
        ValidationFailedError: With every violated rule
    """
    logger.info("Saving customer: %s", customer_data.cpf_cnpj)
    with transaction(db):
        violations = _validate_customer(
            db, None, customer_data.name, customer_data.cpf_cnpj, customer_data.email
        )
        if violations:
            raise ValidationFailedError(violations)

        fields = customer_data.model_dump(exclude={"address"})
        address = (
            customer_data.address.model_dump() if customer_data.address else None
        )
        customer = customer_repo.create_customer(db, address=address, **fields)
    return customer


def update_customer(
    db: Session, customer_id: int, customer_data: CustomerUpdate
) -> CustomerModel:
    """
    Update a customer. Fields not included in the request are not updated;
    an explicit ``address: null`` removes the address.

    Raises:
        NotFoundError: If customer doesn't exist or is deleted
        ValidationFailedError: With every violated rule
    """
    logger.info("Updating customer: %s", customer_id)
    update_fields = customer_data.model_dump(exclude_unset=True)
    with transaction(db):
        customer = customer_repo.get_customer_by_id(db, customer_id)
        if not customer:
            raise NotFoundError("Customer not found")

        violations = _validate_customer(
            db,
            customer.id,
            update_fields.get("name", customer.name),
            update_fields.get("cpf_cnpj", customer.cpf_cnpj),
            update_fields.get("email", customer.email),
        )
        if violations:
            raise ValidationFailedError(violations)

        if update_fields.get("phone_numbers") is None:
            update_fields.pop("phone_numbers", None)
        customer = customer_repo.update_customer(db, customer, **update_fields)
    return customer


def get_customer(db: Session, customer_id: int) -> CustomerModel:
    """
    Get a customer by ID.

    Raises:
        NotFoundError: If customer doesn't exist or is deleted
    """
    customer = customer_repo.get_customer_by_id(db, customer_id)
    if not customer:
        raise NotFoundError("Customer not found")
    return customer


def get_all_customers(
    db: Session, page: int = 1, page_size: int = 100, name: str | None = None
) -> tuple[list[CustomerModel], int]:
    return customer_repo.get_all_customers_paginated(
        db, page=page, page_size=page_size, name=name
    )


def delete_customer(db: Session, customer_id: int) -> None:
    """
    Soft-delete a customer, freeing its tax id and email for reuse.

    Raises:
        NotFoundError: If no non-deleted customer with this ID exists
    """
    logger.info("Deleting customer: %s", customer_id)
    with transaction(db):
        if customer_repo.is_customer_deleted(db, customer_id) > 0:
            raise NotFoundError("Customer not found")
        tombstone = generate_tombstone(customer_id)
        if customer_repo.soft_delete_customer_by_id(db, customer_id, tombstone) == 0:
            raise NotFoundError("Customer not found")
