"""Quotation lifecycle: status state machine and owned line items."""

import logging
from decimal import Decimal

from sqlalchemy.orm import Session

import app.repositories.customer as customer_repo
import app.repositories.product as product_repo
import app.repositories.quotation as quotation_repo
import app.repositories.user as user_repo
from app.db.models.product import Product as ProductModel
from app.db.models.quotation import Item as ItemModel
from app.db.models.quotation import Quotation as QuotationModel
from app.db.transaction import transaction
from app.domain.quotation_status import QuotationLifecyclePolicy, QuotationStatus
from app.errors import NotFoundError, ValidationFailedError
from app.schemas.quotation import ItemCreate, ItemUpdate, ItemUpsert

logger = logging.getLogger(__name__)


def _require_customer(db: Session, customer_id: int) -> None:
    if not customer_repo.get_customer_by_id(db, customer_id):
        raise NotFoundError(f"Customer with id {customer_id} not found")


def _require_seller(db: Session, seller_id: int) -> None:
    if not user_repo.get_user_by_id(db, seller_id):
        raise NotFoundError(f"Seller with id {seller_id} not found")


def _require_item_changes_allowed(quotation: QuotationModel) -> None:
    policy = QuotationLifecyclePolicy(quotation.budget_status)
    if not policy.accepts_item_changes():
        raise ValidationFailedError(
            [f"Items of a {quotation.budget_status.value} quotation cannot be changed"]
        )


def _require_product(db: Session, product_id: int) -> ProductModel:
    product = product_repo.get_product_by_id(db, product_id)
    if not product:
        raise NotFoundError(f"Product with id {product_id} not found")
    return product


def _build_item(db: Session, product_id: int, quantity: Decimal, price: Decimal | None) -> ItemModel:
    """Build an item, snapshotting the product's current price when none is given."""
    product = _require_product(db, product_id)
    return ItemModel(
        product_id=product.id,
        quantity=quantity,
        price=price if price is not None else product.price,
    )


def create_quotation(
    db: Session,
    customer_id: int,
    seller_id: int,
    items: list[ItemCreate] | None = None,
) -> QuotationModel:
    """
    Create a quotation in OPEN status with its items.

    Raises:
        NotFoundError: If the customer, the seller or an item's product cannot be resolved
    """
    logger.info("Saving quotation for customer %s, seller %s", customer_id, seller_id)
    with transaction(db):
        _require_customer(db, customer_id)
        _require_seller(db, seller_id)
        db_items = [
            _build_item(db, item.product_id, item.quantity, item.price)
            for item in items or []
        ]
        quotation = quotation_repo.create_quotation(
            db, customer_id=customer_id, seller_id=seller_id, items=db_items
        )
    return quotation


def get_quotation(db: Session, quotation_id: int) -> QuotationModel:
    """
    Get a quotation by ID.

    Raises:
        NotFoundError: If quotation doesn't exist
    """
    quotation = quotation_repo.get_quotation_by_id(db, quotation_id)
    if not quotation:
        raise NotFoundError("Quotation not found")
    return quotation


def _get_quotation_for_update(db: Session, quotation_id: int) -> QuotationModel:
    """Load and lock a quotation so status and item checks see its committed state."""
    quotation = quotation_repo.get_quotation_by_id_for_update(db, quotation_id)
    if not quotation:
        raise NotFoundError("Quotation not found")
    return quotation


def get_all_quotations(
    db: Session,
    page: int = 1,
    page_size: int = 100,
    status: QuotationStatus | None = None,
    customer_id: int | None = None,
    seller_id: int | None = None,
) -> tuple[list[QuotationModel], int]:
    return quotation_repo.get_all_quotations_paginated(
        db,
        page=page,
        page_size=page_size,
        status=status,
        customer_id=customer_id,
        seller_id=seller_id,
    )


def _replace_items(db: Session, quotation: QuotationModel, items: list[ItemUpsert]) -> None:
    """Make the item list match ``items``: update by id, create the new ones, drop the rest."""
    current = {item.id: item for item in quotation.items}
    replacement = []
    for entry in items:
        if entry.id is None:
            replacement.append(_build_item(db, entry.product_id, entry.quantity, entry.price))
            continue
        item = current.get(entry.id)
        if item is None:
            raise NotFoundError(f"Item with id {entry.id} not found in this quotation")
        if entry.product_id != item.product_id:
            product = _require_product(db, entry.product_id)
            item.product_id = product.id
            item.price = product.price
        item.quantity = entry.quantity
        if entry.price is not None:
            item.price = entry.price
        replacement.append(item)
    # Items left out are orphans and get deleted on flush.
    quotation.items = replacement


def update_quotation(
    db: Session,
    quotation_id: int,
    customer_id: int | None = None,
    seller_id: int | None = None,
    items: list[ItemUpsert] | None = None,
) -> QuotationModel:
    """
    Update a quotation's customer, seller and/or whole item list.

    Only fields explicitly provided are updated. An ``items`` list replaces
    the current one; items missing from it are permanently deleted.

    Raises:
        NotFoundError: If the quotation, customer, seller, product or a referenced item doesn't exist
        ValidationFailedError: If items are changed on a terminal quotation
    """
    logger.info("Updating quotation: %s", quotation_id)
    with transaction(db):
        quotation = _get_quotation_for_update(db, quotation_id)

        if customer_id is not None:
            _require_customer(db, customer_id)
            quotation.customer_id = customer_id

        if seller_id is not None:
            _require_seller(db, seller_id)
            quotation.seller_id = seller_id

        if items is not None:
            _require_item_changes_allowed(quotation)
            _replace_items(db, quotation, items)

        quotation = quotation_repo.save_quotation(db, quotation)
    return quotation


def change_status(
    db: Session, quotation_id: int, budget_status: QuotationStatus
) -> QuotationModel:
    """
    Move a quotation to ``budget_status``.

    Raises:
        NotFoundError: If quotation doesn't exist
        ValidationFailedError: If the target status is ordered before the current one
    """
    logger.info("Changing quotation %s status to %s", quotation_id, budget_status.value)
    with transaction(db):
        quotation = _get_quotation_for_update(db, quotation_id)
        policy = QuotationLifecyclePolicy(quotation.budget_status)
        if not policy.can_transition_to(budget_status):
            raise ValidationFailedError(
                [
                    f"Cannot change status from {quotation.budget_status.value} "
                    f"back to {budget_status.value}"
                ]
            )
        quotation.budget_status = budget_status
        quotation = quotation_repo.save_quotation(db, quotation)
    return quotation


def add_item(db: Session, quotation_id: int, item_data: ItemCreate) -> QuotationModel:
    """
    Add an item to a non-terminal quotation.

    Raises:
        NotFoundError: If the quotation or the product doesn't exist
        ValidationFailedError: If the quotation is in a terminal status
    """
    with transaction(db):
        quotation = _get_quotation_for_update(db, quotation_id)
        _require_item_changes_allowed(quotation)
        quotation.items.append(
            _build_item(db, item_data.product_id, item_data.quantity, item_data.price)
        )
        quotation = quotation_repo.save_quotation(db, quotation)
    return quotation


def update_item(
    db: Session, quotation_id: int, item_id: int, item_data: ItemUpdate
) -> QuotationModel:
    """
    Change an item's quantity and/or unit price.

    Raises:
        NotFoundError: If the quotation or the item doesn't exist
        ValidationFailedError: If the quotation is in a terminal status
    """
    with transaction(db):
        quotation = _get_quotation_for_update(db, quotation_id)
        _require_item_changes_allowed(quotation)
        item = quotation_repo.get_item_by_id(db, quotation_id, item_id)
        if not item:
            raise NotFoundError("Item not found")
        if item_data.quantity is not None:
            item.quantity = item_data.quantity
        if item_data.price is not None:
            item.price = item_data.price
        quotation = quotation_repo.save_quotation(db, quotation)
    return quotation


def remove_item(db: Session, quotation_id: int, item_id: int) -> QuotationModel:
    """
    Detach an item from its quotation, which deletes it permanently.

    Raises:
        NotFoundError: If the quotation or the item doesn't exist
        ValidationFailedError: If the quotation is in a terminal status
    """
    logger.info("Removing item %s from quotation %s", item_id, quotation_id)
    with transaction(db):
        quotation = _get_quotation_for_update(db, quotation_id)
        _require_item_changes_allowed(quotation)
        item = quotation_repo.get_item_by_id(db, quotation_id, item_id)
        if not item:
            raise NotFoundError("Item not found")
        quotation.items.remove(item)
        quotation = quotation_repo.save_quotation(db, quotation)
    return quotation


def delete_quotation(db: Session, quotation_id: int) -> None:
    """
    Delete a quotation together with its items.

    Raises:
        NotFoundError: If quotation doesn't exist
    """
    logger.info("Deleting quotation: %s", quotation_id)
    with transaction(db):
        quotation = _get_quotation_for_update(db, quotation_id)
        quotation_repo.delete_quotation(db, quotation)
