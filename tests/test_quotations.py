from decimal import Decimal

import pytest
from sqlalchemy.orm import Session

import app.repositories.quotation as quotation_repo
from app.db.models.quotation import Item as ItemModel


@pytest.fixture
def quotation(client, customer, seller_user, product) -> dict:
    response = client.post(
        "/api/v1/quotations",
        json={
            "customer_id": customer.id,
            "seller_id": seller_user.id,
            "items": [
                {"product_id": product.id, "quantity": "2"},
                {"product_id": product.id, "quantity": "1", "price": "120.00"},
            ],
        },
    )
    assert response.status_code == 201
    return response.json()


def _move_to(client, quotation_id: int, status: str):
    return client.put(
        f"/api/v1/quotations/{quotation_id}/status", json={"budget_status": status}
    )


# ============================================================================
# CREATE / READ QUOTATION TESTS
# ============================================================================


def test_create_quotation(quotation, product):
    assert quotation["budget_status"] == "OPEN"
    assert len(quotation["items"]) == 2
    # Price defaults to the product's price at the time the item was added.
    assert Decimal(quotation["items"][0]["price"]) == Decimal("150.00")
    assert Decimal(quotation["items"][1]["price"]) == Decimal("120.00")
    assert Decimal(quotation["total"]) == Decimal("420.00")


def test_create_quotation_unknown_customer(client, seller_user):
    response = client.post(
        "/api/v1/quotations",
        json={"customer_id": 99999, "seller_id": seller_user.id},
    )

    assert response.status_code == 404
    assert "Customer" in response.json()["detail"]


def test_create_quotation_unknown_seller(client, customer):
    response = client.post(
        "/api/v1/quotations",
        json={"customer_id": customer.id, "seller_id": 99999},
    )

    assert response.status_code == 404
    assert "Seller" in response.json()["detail"]


def test_create_quotation_unknown_product(client, customer, seller_user):
    response = client.post(
        "/api/v1/quotations",
        json={
            "customer_id": customer.id,
            "seller_id": seller_user.id,
            "items": [{"product_id": 99999, "quantity": "1"}],
        },
    )

    assert response.status_code == 404


def test_create_quotation_zero_quantity(client, customer, seller_user, product):
    response = client.post(
        "/api/v1/quotations",
        json={
            "customer_id": customer.id,
            "seller_id": seller_user.id,
            "items": [{"product_id": product.id, "quantity": "0"}],
        },
    )

    assert response.status_code == 422


def test_item_price_is_a_snapshot(client, quotation, product):
    client.put(f"/api/v1/products/{product.id}", json={"price": "999.00"})

    response = client.get(f"/api/v1/quotations/{quotation['id']}")

    assert Decimal(response.json()["items"][0]["price"]) == Decimal("150.00")


def test_list_quotations_filter_by_status(client, quotation):
    open_quotations = client.get("/api/v1/quotations", params={"budget_status": "OPEN"})
    closed_quotations = client.get(
        "/api/v1/quotations", params={"budget_status": "CLOSED"}
    )

    assert open_quotations.json()["total"] == 1
    assert closed_quotations.json()["total"] == 0


def test_get_quotation_not_found(client, db: Session):
    response = client.get("/api/v1/quotations/99999")

    assert response.status_code == 404


# ============================================================================
# STATUS TESTS
# ============================================================================


def test_status_moves_forward(client, quotation):
    response = _move_to(client, quotation["id"], "QUOTED")
    assert response.status_code == 200
    assert response.json()["budget_status"] == "QUOTED"

    response = _move_to(client, quotation["id"], "CLOSED")
    assert response.status_code == 200
    assert response.json()["budget_status"] == "CLOSED"


def test_status_cannot_move_back(client, quotation):
    _move_to(client, quotation["id"], "APPROVED")

    response = _move_to(client, quotation["id"], "QUOTED")

    assert response.status_code == 400
    assert response.json()["errors"] == ["Cannot change status from APPROVED back to QUOTED"]
    assert client.get(f"/api/v1/quotations/{quotation['id']}").json()["budget_status"] == "APPROVED"


def test_same_status_is_accepted(client, quotation):
    response = _move_to(client, quotation["id"], "OPEN")

    assert response.status_code == 200
    assert response.json()["budget_status"] == "OPEN"


@pytest.fixture
def locked_quotation_ids(monkeypatch) -> list[int]:
    """Record every quotation loaded with a row lock."""
    locked = []
    get_for_update = quotation_repo.get_quotation_by_id_for_update

    def recording_get_for_update(db, quotation_id):
        locked.append(quotation_id)
        return get_for_update(db, quotation_id)

    monkeypatch.setattr(
        quotation_repo, "get_quotation_by_id_for_update", recording_get_for_update
    )
    return locked


def test_status_change_locks_quotation_row(client, quotation, locked_quotation_ids):
    _move_to(client, quotation["id"], "QUOTED")

    assert locked_quotation_ids == [quotation["id"]]


def test_item_changes_lock_quotation_row(client, quotation, product, locked_quotation_ids):
    item_id = quotation["items"][0]["id"]

    client.post(
        f"/api/v1/quotations/{quotation['id']}/items",
        json={"product_id": product.id, "quantity": "1"},
    )
    client.put(
        f"/api/v1/quotations/{quotation['id']}/items/{item_id}", json={"quantity": "3"}
    )
    client.delete(f"/api/v1/quotations/{quotation['id']}/items/{item_id}")

    assert locked_quotation_ids == [quotation["id"]] * 3


def test_unknown_status_is_rejected(client, quotation):
    response = _move_to(client, quotation["id"], "LOST")

    assert response.status_code == 422


# ============================================================================
# ITEM TESTS
# ============================================================================


def test_add_item(client, quotation, product):
    response = client.post(
        f"/api/v1/quotations/{quotation['id']}/items",
        json={"product_id": product.id, "quantity": "3"},
    )

    assert response.status_code == 201
    assert len(response.json()["items"]) == 3


def test_update_item(client, quotation):
    item_id = quotation["items"][0]["id"]

    response = client.put(
        f"/api/v1/quotations/{quotation['id']}/items/{item_id}",
        json={"quantity": "5"},
    )

    assert response.status_code == 200
    item = response.json()["items"][0]
    assert Decimal(item["quantity"]) == Decimal("5")
    assert Decimal(item["subtotal"]) == Decimal("750.00")


def test_remove_item_is_gone_on_next_read(client, db: Session, quotation):
    item_id = quotation["items"][0]["id"]

    response = client.delete(f"/api/v1/quotations/{quotation['id']}/items/{item_id}")

    assert response.status_code == 200
    assert [item["id"] for item in response.json()["items"]] == [quotation["items"][1]["id"]]
    reread = client.get(f"/api/v1/quotations/{quotation['id']}").json()
    assert item_id not in [item["id"] for item in reread["items"]]
    assert db.query(ItemModel).filter(ItemModel.id == item_id).first() is None


def test_remove_item_of_another_quotation(client, quotation, customer, seller_user):
    other = client.post(
        "/api/v1/quotations",
        json={"customer_id": customer.id, "seller_id": seller_user.id},
    ).json()

    response = client.delete(
        f"/api/v1/quotations/{other['id']}/items/{quotation['items'][0]['id']}"
    )

    assert response.status_code == 404


@pytest.mark.parametrize("status", ["REJECTED", "CLOSED"])
def test_terminal_status_blocks_item_changes(client, quotation, product, status):
    _move_to(client, quotation["id"], status)
    item_id = quotation["items"][0]["id"]

    added = client.post(
        f"/api/v1/quotations/{quotation['id']}/items",
        json={"product_id": product.id, "quantity": "1"},
    )
    removed = client.delete(f"/api/v1/quotations/{quotation['id']}/items/{item_id}")

    assert added.status_code == 400
    assert removed.status_code == 400
    assert len(client.get(f"/api/v1/quotations/{quotation['id']}").json()["items"]) == 2


def test_replace_items(client, db: Session, quotation, product):
    kept, dropped = quotation["items"]

    response = client.put(
        f"/api/v1/quotations/{quotation['id']}",
        json={
            "items": [
                {"id": kept["id"], "product_id": product.id, "quantity": "4"},
                {"product_id": product.id, "quantity": "1", "price": "10.00"},
            ]
        },
    )

    assert response.status_code == 200
    items = response.json()["items"]
    assert len(items) == 2
    assert items[0]["id"] == kept["id"]
    assert Decimal(items[0]["quantity"]) == Decimal("4")
    assert dropped["id"] not in [item["id"] for item in items]
    assert db.query(ItemModel).filter(ItemModel.id == dropped["id"]).first() is None


def test_replace_items_with_foreign_item_id(client, quotation, product):
    response = client.put(
        f"/api/v1/quotations/{quotation['id']}",
        json={"items": [{"id": 99999, "product_id": product.id, "quantity": "1"}]},
    )

    assert response.status_code == 404
    assert len(client.get(f"/api/v1/quotations/{quotation['id']}").json()["items"]) == 2


def test_update_quotation_seller_only_keeps_items(client, quotation, make_user_payload):
    other_seller = client.post("/api/v1/users", json=make_user_payload()).json()

    response = client.put(
        f"/api/v1/quotations/{quotation['id']}", json={"seller_id": other_seller["id"]}
    )

    assert response.status_code == 200
    assert response.json()["seller_id"] == other_seller["id"]
    assert len(response.json()["items"]) == 2


# ============================================================================
# DELETE QUOTATION TESTS
# ============================================================================


def test_delete_quotation_removes_items(client, db: Session, quotation):
    response = client.delete(f"/api/v1/quotations/{quotation['id']}")

    assert response.status_code == 204
    assert client.get(f"/api/v1/quotations/{quotation['id']}").status_code == 404
    assert db.query(ItemModel).count() == 0


def test_delete_quotation_not_found(client, db: Session):
    response = client.delete("/api/v1/quotations/99999")

    assert response.status_code == 404
