from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.api.deps import PageParams, get_db, get_page_params
from app.domain.quotation_status import QuotationStatus
from app.services.quotation import (
    add_item,
    change_status,
    create_quotation,
    delete_quotation,
    get_all_quotations,
    get_quotation,
    remove_item,
    update_item,
    update_quotation,
)
from app.schemas.pagination import PaginatedResponse
from app.schemas.quotation import (
    ItemCreate,
    ItemUpdate,
    Quotation,
    QuotationCreate,
    QuotationUpdate,
    StatusChange,
)

router = APIRouter(prefix="/quotations", tags=["quotations"])


@router.post("", response_model=Quotation, status_code=status.HTTP_201_CREATED)
def create_new_quotation(quotation_data: QuotationCreate, db: Session = Depends(get_db)):
    """
    Create a quotation in OPEN status.

    Unknown customer, seller or product is reported as 404.
    """
    quotation = create_quotation(
        db,
        customer_id=quotation_data.customer_id,
        seller_id=quotation_data.seller_id,
        items=quotation_data.items,
    )
    return Quotation.model_validate(quotation)


@router.get("", response_model=PaginatedResponse[Quotation])
def get_all_quotations_paginated(
    paging: PageParams = Depends(get_page_params),
    budget_status: QuotationStatus | None = Query(None, description="Filter by status"),
    customer: int | None = Query(None, description="Filter by customer ID"),
    seller: int | None = Query(None, description="Filter by seller ID"),
    db: Session = Depends(get_db),
):
    quotations, total = get_all_quotations(
        db,
        page=paging.page,
        page_size=paging.page_size,
        status=budget_status,
        customer_id=customer,
        seller_id=seller,
    )
    return PaginatedResponse(
        items=[Quotation.model_validate(q) for q in quotations],
        total=total,
        page=paging.page,
        page_size=paging.page_size,
    )


@router.get("/{quotation_id}", response_model=Quotation)
def get_quotation_by_id(quotation_id: int, db: Session = Depends(get_db)):
    return Quotation.model_validate(get_quotation(db, quotation_id))


@router.put("/{quotation_id}", response_model=Quotation)
def update_quotation_by_id(
    quotation_id: int,
    quotation_data: QuotationUpdate,
    db: Session = Depends(get_db),
):
    """
    Update a quotation.

    Fields not included in the request are not updated. A given item list
    replaces the current one: entries with an id update that item, entries
    without one create an item, and items left out are deleted.
    """
    quotation = update_quotation(
        db,
        quotation_id,
        customer_id=quotation_data.customer_id,
        seller_id=quotation_data.seller_id,
        items=quotation_data.items,
    )
    return Quotation.model_validate(quotation)


@router.put("/{quotation_id}/status", response_model=Quotation)
def change_quotation_status(
    quotation_id: int,
    status_data: StatusChange,
    db: Session = Depends(get_db),
):
    """Move the quotation forward; moving back to an earlier status is rejected."""
    quotation = change_status(db, quotation_id, status_data.budget_status)
    return Quotation.model_validate(quotation)


@router.post(
    "/{quotation_id}/items",
    response_model=Quotation,
    status_code=status.HTTP_201_CREATED,
)
def add_quotation_item(
    quotation_id: int,
    item_data: ItemCreate,
    db: Session = Depends(get_db),
):
    return Quotation.model_validate(add_item(db, quotation_id, item_data))


@router.put("/{quotation_id}/items/{item_id}", response_model=Quotation)
def update_quotation_item(
    quotation_id: int,
    item_id: int,
    item_data: ItemUpdate,
    db: Session = Depends(get_db),
):
    return Quotation.model_validate(update_item(db, quotation_id, item_id, item_data))


@router.delete("/{quotation_id}/items/{item_id}", response_model=Quotation)
def remove_quotation_item(
    quotation_id: int,
    item_id: int,
    db: Session = Depends(get_db),
):
    """Remove an item; it is deleted permanently."""
    return Quotation.model_validate(remove_item(db, quotation_id, item_id))


@router.delete("/{quotation_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_quotation_by_id(quotation_id: int, db: Session = Depends(get_db)):
    """Delete a quotation and all of its items."""
    delete_quotation(db, quotation_id)
