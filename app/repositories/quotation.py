from sqlalchemy.orm import Session

from app.db.models.quotation import Item as ItemModel
from app.db.models.quotation import Quotation as QuotationModel
from app.domain.quotation_status import QuotationStatus


def get_quotation_by_id(db: Session, quotation_id: int) -> QuotationModel | None:
    """Get a quotation by ID."""
    return db.query(QuotationModel).filter(QuotationModel.id == quotation_id).first()


def get_quotation_by_id_for_update(db: Session, quotation_id: int) -> QuotationModel | None:
    """Get a quotation by ID, locking the row until the transaction ends."""
    return (
        db.query(QuotationModel)
        .filter(QuotationModel.id == quotation_id)
        .with_for_update()
        .populate_existing()
        .first()
    )


def get_item_by_id(db: Session, quotation_id: int, item_id: int) -> ItemModel | None:
    """Get an item, only if it belongs to the given quotation."""
    return (
        db.query(ItemModel)
        .filter(ItemModel.id == item_id, ItemModel.quotation_id == quotation_id)
        .first()
    )


def get_all_quotations_paginated(
    db: Session,
    page: int = 1,
    page_size: int = 100,
    status: QuotationStatus | None = None,
    customer_id: int | None = None,
    seller_id: int | None = None,
) -> tuple[list[QuotationModel], int]:
    """
    Get quotations with pagination and optional filters, newest first.

    Args:
        page: Page number (1-indexed)
        page_size: Number of items per page
        status: Optional filter by budget status
        customer_id: Optional filter by customer ID
        seller_id: Optional filter by seller (user) ID
    """
    query = db.query(QuotationModel)
    if status is not None:
        query = query.filter(QuotationModel.budget_status == status)
    if customer_id is not None:
        query = query.filter(QuotationModel.customer_id == customer_id)
    if seller_id is not None:
        query = query.filter(QuotationModel.seller_id == seller_id)
    total = query.count()
    skip = (page - 1) * page_size
    quotations = (
        query.order_by(QuotationModel.date_time.desc(), QuotationModel.id.desc())
        .offset(skip)
        .limit(page_size)
        .all()
    )
    return quotations, total


def create_quotation(
    db: Session, customer_id: int, seller_id: int, items: list[ItemModel]
) -> QuotationModel:
    """Stage a new quotation with its items (cascaded) and flush it."""
    db_quotation = QuotationModel(
        customer_id=customer_id,
        seller_id=seller_id,
        budget_status=QuotationStatus.OPEN,
    )
    db_quotation.items = list(items)
    db.add(db_quotation)
    db.flush()
    return db_quotation


def save_quotation(db: Session, quotation: QuotationModel) -> QuotationModel:
    """Flush pending changes; items detached from ``quotation.items`` are deleted."""
    db.add(quotation)
    db.flush()
    return quotation


def delete_quotation(db: Session, quotation: QuotationModel) -> None:
    """Delete a quotation; its items go with it."""
    db.delete(quotation)
    db.flush()
