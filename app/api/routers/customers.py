from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.api.deps import PageParams, get_db, get_page_params
from app.services.customer import (
    create_customer,
    delete_customer,
    get_all_customers,
    get_customer,
    update_customer,
)
from app.schemas.customer import Customer, CustomerCreate, CustomerUpdate
from app.schemas.pagination import PaginatedResponse

router = APIRouter(prefix="/customers", tags=["customers"])


@router.post("", response_model=Customer, status_code=status.HTTP_201_CREATED)
def create_new_customer(customer_data: CustomerCreate, db: Session = Depends(get_db)):
    customer = create_customer(db, customer_data)
    return Customer.model_validate(customer)


@router.get("", response_model=PaginatedResponse[Customer])
def get_all_customers_paginated(
    paging: PageParams = Depends(get_page_params),
    name: str | None = Query(None, description="Filter customers by name (partial match)"),
    db: Session = Depends(get_db),
):
    customers, total = get_all_customers(
        db, page=paging.page, page_size=paging.page_size, name=name
    )
    return PaginatedResponse(
        items=[Customer.model_validate(customer) for customer in customers],
        total=total,
        page=paging.page,
        page_size=paging.page_size,
    )


@router.get("/{customer_id}", response_model=Customer)
def get_customer_by_id(customer_id: int, db: Session = Depends(get_db)):
    return Customer.model_validate(get_customer(db, customer_id))


@router.put("/{customer_id}", response_model=Customer)
def update_customer_by_id(
    customer_id: int,
    customer_data: CustomerUpdate,
    db: Session = Depends(get_db),
):
    """
    Update a customer.

    Fields not included in the request are not updated.
    To remove the address, explicitly send it as null.
    """
    customer = update_customer(db, customer_id, customer_data)
    return Customer.model_validate(customer)


@router.delete("/{customer_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_customer_by_id(customer_id: int, db: Session = Depends(get_db)):
    """Soft-delete a customer; its tax id and email become reusable."""
    delete_customer(db, customer_id)
