"""
Tests for orders router (src/api/routers/orders.py).

Covers:
- Checkout from cart (201, empty cart 400, unknown cart 404)
- Reads (single and list)
- Payment: synchronous approve/decline, background queueing
- Cancel, delete
- Order total with currency conversion

Fixtures (tests/unit/api/conftest.py): approval limit 100.00, USD->EUR 0.5.
"""

from decimal import Decimal
from unittest.mock import MagicMock, patch
from uuid import uuid4

from fastapi import status

TASK_PATH = "src.api.routers.orders.process_payment_task"


# ============================================================================
# POST /api/orders
# ============================================================================


def test_place_order(client, create_cart):
    """Test checkout creates a CONFIRMED order and empties the cart."""
    cart_id = create_cart(("SKU-001", 2, "12.50"))

    response = client.post(
        "/api/orders", json={"cart_id": cart_id, "customer_name": "  Ada   Lovelace "}
    )

    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["status"] == "confirmed"
    assert data["customer_name"] == "Ada Lovelace"
    assert data["currency"] == "USD"
    assert data["item_count"] == 2
    assert Decimal(data["total"]) == Decimal("25.00")
    assert data["payment_reference"] is None

    cart = client.get(f"/api/carts/{cart_id}").json()
    assert cart["items"] == []


def test_place_order_from_empty_cart_returns_400(client, create_cart):
    """Test checkout of an empty cart is rejected."""
    cart_id = create_cart()

    response = client.post(
        "/api/orders", json={"cart_id": cart_id, "customer_name": "Ada"}
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["code"] == "INVALID_SHOPPING_CART"


def test_place_order_from_unknown_cart_returns_404(client):
    """Test checkout of unknown cart returns CART_NOT_FOUND."""
    response = client.post(
        "/api/orders", json={"cart_id": str(uuid4()), "customer_name": "Ada"}
    )

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["code"] == "CART_NOT_FOUND"


def test_place_order_with_blank_name_returns_422(client, create_cart):
    """Test empty customer name fails request validation."""
    cart_id = create_cart(("SKU-001", 1, "1.00"))

    response = client.post("/api/orders", json={"cart_id": cart_id, "customer_name": ""})

    assert response.status_code == 422


# ============================================================================
# GET /api/orders
# ============================================================================


def test_get_order(client, place_order):
    """Test reading an order by ID."""
    order = place_order(("SKU-001", 1, "9.99"))

    response = client.get(f"/api/orders/{order['order_id']}")

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == order


def test_list_orders(client, place_order):
    """Test listing returns every placed order."""
    first = place_order(("SKU-001", 1, "1.00"))
    second = place_order(("SKU-002", 1, "2.00"))

    response = client.get("/api/orders")

    assert response.status_code == status.HTTP_200_OK
    ids = {order["order_id"] for order in response.json()}
    assert ids == {first["order_id"], second["order_id"]}


def test_list_orders_empty(client):
    """Test listing with no orders returns an empty list."""
    assert client.get("/api/orders").json() == []


# ============================================================================
# POST /api/orders/{order_id}/payment
# ============================================================================


def test_pay_order_approved(client, place_order):
    """Test synchronous payment under the approval limit marks order PAID."""
    order = place_order(("SKU-001", 2, "12.50"))

    response = client.post(f"/api/orders/{order['order_id']}/payment")

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["status"] == "approved"
    assert data["transaction_id"].startswith("txn_")
    assert Decimal(data["amount"]) == Decimal("25.00")
    assert data["currency"] == "USD"

    stored = client.get(f"/api/orders/{order['order_id']}").json()
    assert stored["status"] == "paid"
    assert stored["payment_reference"] == data["transaction_id"]


def test_pay_order_declined_returns_402(client, place_order):
    """Test declined charge returns 402 and leaves order CONFIRMED."""
    order = place_order(("SKU-001", 1, "150.00"))

    response = client.post(f"/api/orders/{order['order_id']}/payment")

    assert response.status_code == status.HTTP_402_PAYMENT_REQUIRED
    data = response.json()
    assert data["code"] == "PAYMENT_DECLINED"
    assert data["details"]["order_id"] == order["order_id"]
    assert Decimal(data["details"]["amount"]) == Decimal("150.00")

    stored = client.get(f"/api/orders/{order['order_id']}").json()
    assert stored["status"] == "confirmed"


def test_pay_order_twice_returns_400(client, place_order):
    """Test paying an already PAID order is rejected."""
    order = place_order(("SKU-001", 1, "10.00"))
    client.post(f"/api/orders/{order['order_id']}/payment")

    response = client.post(f"/api/orders/{order['order_id']}/payment")

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["code"] == "INVALID_ORDER"


def test_pay_unknown_order_returns_404(client):
    """Test paying unknown order returns ORDER_NOT_FOUND."""
    response = client.post(f"/api/orders/{uuid4()}/payment")

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["code"] == "ORDER_NOT_FOUND"


def test_pay_order_in_background_queues_task(client, place_order):
    """Test background=true queues Celery task and returns 202."""
    order = place_order(("SKU-001", 1, "10.00"))

    with patch(TASK_PATH) as mock_task:
        mock_task.delay.return_value = MagicMock(id="task-123")
        response = client.post(f"/api/orders/{order['order_id']}/payment?background=true")

    assert response.status_code == status.HTTP_202_ACCEPTED
    assert response.json() == {
        "order_id": order["order_id"],
        "task_id": "task-123",
        "status": "queued",
    }
    mock_task.delay.assert_called_once_with(order["order_id"])

    stored = client.get(f"/api/orders/{order['order_id']}").json()
    assert stored["status"] == "confirmed"


def test_pay_unknown_order_in_background_does_not_queue(client):
    """Test unknown order fails with 404 before a task is queued."""
    with patch(TASK_PATH) as mock_task:
        response = client.post(f"/api/orders/{uuid4()}/payment?background=true")

    assert response.status_code == status.HTTP_404_NOT_FOUND
    mock_task.delay.assert_not_called()


# ============================================================================
# POST /api/orders/{order_id}/cancel
# ============================================================================


def test_cancel_order(client, place_order):
    """Test cancelling a confirmed order."""
    order = place_order(("SKU-001", 1, "10.00"))

    response = client.post(f"/api/orders/{order['order_id']}/cancel")

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["status"] == "cancelled"


def test_cancel_paid_order_returns_400(client, place_order):
    """Test PAID orders cannot be cancelled."""
    order = place_order(("SKU-001", 1, "10.00"))
    client.post(f"/api/orders/{order['order_id']}/payment")

    response = client.post(f"/api/orders/{order['order_id']}/cancel")

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["code"] == "INVALID_ORDER"


def test_pay_cancelled_order_returns_400(client, place_order):
    """Test cancelled orders cannot be paid."""
    order = place_order(("SKU-001", 1, "10.00"))
    client.post(f"/api/orders/{order['order_id']}/cancel")

    response = client.post(f"/api/orders/{order['order_id']}/payment")

    assert response.status_code == status.HTTP_400_BAD_REQUEST


# ============================================================================
# DELETE /api/orders/{order_id}
# ============================================================================


def test_delete_order(client, place_order):
    """Test deleting an order returns 204 and removes it."""
    order = place_order(("SKU-001", 1, "10.00"))

    response = client.delete(f"/api/orders/{order['order_id']}")

    assert response.status_code == status.HTTP_204_NO_CONTENT
    assert response.content == b""
    assert client.get(f"/api/orders/{order['order_id']}").status_code == 404


def test_delete_unknown_order_returns_404(client):
    """Test deleting unknown order returns ORDER_NOT_FOUND."""
    response = client.delete(f"/api/orders/{uuid4()}")

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["code"] == "ORDER_NOT_FOUND"


# ============================================================================
# GET /api/orders/{order_id}/total
# ============================================================================


def test_total_in_order_currency(client, place_order):
    """Test total without currency parameter is not converted."""
    order = place_order(("SKU-001", 2, "12.50"))

    response = client.get(f"/api/orders/{order['order_id']}/total")

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert Decimal(data["amount"]) == Decimal("25.00")
    assert data["currency"] == "USD"
    assert data["converted"] is False


def test_total_converted(client, place_order):
    """Test total converted with the configured rate (USD->EUR 0.5)."""
    order = place_order(("SKU-001", 2, "12.50"))

    response = client.get(f"/api/orders/{order['order_id']}/total?currency=EUR")

    data = response.json()
    assert Decimal(data["amount"]) == Decimal("12.50")
    assert data["currency"] == "EUR"
    assert Decimal(data["original_amount"]) == Decimal("25.00")
    assert data["original_currency"] == "USD"
    assert data["converted"] is True


def test_total_same_currency_requested(client, place_order):
    """Test requesting the order currency returns the original amount."""
    order = place_order(("SKU-001", 1, "10.005"))

    response = client.get(f"/api/orders/{order['order_id']}/total?currency=USD")

    data = response.json()
    assert data["converted"] is False
    assert Decimal(data["amount"]) == Decimal("10.005")


def test_total_without_rate_returns_422(client, place_order):
    """Test missing exchange rate maps to 422 with currency pair details."""
    order = place_order(("SKU-001", 1, "10.00"))

    response = client.get(f"/api/orders/{order['order_id']}/total?currency=GBP")

    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
    data = response.json()
    assert data["code"] == "EXCHANGE_RATE_NOT_FOUND"
    assert data["details"]["source_currency"] == "USD"
    assert data["details"]["target_currency"] == "GBP"


def test_place_order_with_whitespace_name_returns_400(client, create_cart):
    """Test whitespace-only customer name fails command business rules."""
    cart_id = create_cart(("SKU-001", 1, "1.00"))

    response = client.post("/api/orders", json={"cart_id": cart_id, "customer_name": "   "})

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["code"] == "INVALID_PLACE_ORDER_COMMAND"
