"""
Common fixtures for API unit tests.

Provides shared test utilities:
- FastAPI TestClient wired to in-memory storage via dependency_overrides
- Helpers to create carts and orders through the HTTP API
"""

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from src.api.dependencies import get_order_service, get_query_handler
from src.api.main import create_app
from src.application.queries.get_order import GetOrderQueryHandler
from src.application.services.order_service import OrderService
from src.infrastructure.currency.static_exchange_rate_provider import (
    StaticExchangeRateProvider,
)
from src.infrastructure.payments.simulated_payment_gateway import (
    SimulatedPaymentGateway,
)
from src.infrastructure.persistence.repositories.in_memory import (
    InMemoryOrderRepository,
    InMemoryShoppingCartRepository,
)


@pytest.fixture
def order_service():
    """
    OrderService on fresh in-memory repositories.

    Payment approval limit is 100.00, USD->EUR rate is 0.5.
    """
    return OrderService(
        order_repository=InMemoryOrderRepository(),
        cart_repository=InMemoryShoppingCartRepository(),
        payment_gateway=SimulatedPaymentGateway(approval_limit=100),
        rate_provider=StaticExchangeRateProvider({("USD", "EUR"): Decimal("0.5")}),
    )


@pytest.fixture
def app(order_service):
    app = create_app()
    app.dependency_overrides[get_order_service] = lambda: order_service
    app.dependency_overrides[get_query_handler] = lambda: GetOrderQueryHandler(
        order_service.order_repository
    )
    return app


@pytest.fixture
def client(app):
    """FastAPI TestClient (server exceptions are returned as 500 responses)."""
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def create_cart(client):
    """Factory: create a cart with (product_id, quantity, unit_price) lines."""

    def _create(*lines, currency="USD"):
        cart = client.post("/api/carts", json={"currency": currency}).json()
        for product_id, quantity, unit_price in lines:
            response = client.post(
                f"/api/carts/{cart['cart_id']}/items",
                json={
                    "product_id": product_id,
                    "product_name": f"Product {product_id}",
                    "quantity": quantity,
                    "unit_price": unit_price,
                },
            )
            assert response.status_code == 200, response.text
        return cart["cart_id"]

    return _create


@pytest.fixture
def place_order(client, create_cart):
    """Factory: place an order from a new cart, return the order JSON."""

    def _place(*lines, customer_name="Ada Lovelace"):
        cart_id = create_cart(*lines)
        response = client.post(
            "/api/orders", json={"cart_id": cart_id, "customer_name": customer_name}
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _place
