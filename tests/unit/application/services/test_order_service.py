"""
Tests for OrderService.

Uses in-memory repositories and a mocked payment gateway / rate provider.

Covers:
- Cart use cases (create, add, remove)
- place_order (happy path, missing cart, empty cart, invalid command)
- process_payment (approved, declined, wrong state, no gateway)
- cancel_order / delete_order
- convert_order_total
"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from unittest.mock import MagicMock
from uuid import uuid4

import pytest
import pytest_asyncio
from redis.exceptions import RedisError

from src.application.commands.place_order import PlaceOrderCommand
from src.application.queries.get_order import (
    CartNotFoundException,
    GetOrderQueryHandler,
    OrderNotFoundException,
)
from src.application.services.order_service import OrderService
from src.domain.ordering.entities.order import OrderState
from src.domain.ordering.value_objects.money import Money
from src.domain.ordering.value_objects.order_item import OrderItem
from src.domain.ordering.value_objects.payment_receipt import PaymentReceipt
from src.domain.shared.exceptions import (
    ExchangeRateNotFoundError,
    InvalidMoneyError,
    InvalidOrderError,
    InvalidPlaceOrderCommandError,
    InvalidShoppingCartError,
    PaymentDeclinedError,
)
from src.infrastructure.payments.simulated_payment_gateway import (
    SimulatedPaymentGateway,
)
from src.infrastructure.persistence.repositories.in_memory import (
    InMemoryOrderRepository,
    InMemoryShoppingCartRepository,
)


# ============================================================================
# FIXTURES
# ============================================================================


def make_item(product_id="SKU-1", quantity=1, price="10.00"):
    return OrderItem(product_id, f"Product {product_id}", quantity, Money.of(price, "USD"))


@pytest.fixture
def order_repository():
    return InMemoryOrderRepository()


@pytest.fixture
def cart_repository():
    return InMemoryShoppingCartRepository()


@pytest.fixture
def payment_gateway():
    """Mock gateway approving every charge."""
    gateway = MagicMock()
    gateway.charge.side_effect = lambda order_id, amount: PaymentReceipt.approved(
        "txn_test", order_id, amount
    )
    return gateway


@pytest.fixture
def rate_provider():
    provider = MagicMock()
    provider.get_rate.return_value = Decimal("0.5")
    return provider


@pytest.fixture
def service(order_repository, cart_repository, payment_gateway, rate_provider):
    return OrderService(
        order_repository=order_repository,
        cart_repository=cart_repository,
        payment_gateway=payment_gateway,
        rate_provider=rate_provider,
    )


@pytest_asyncio.fixture
async def filled_cart(service):
    """Saved cart with 2 x SKU-1 (10.00) and 1 x SKU-2 (0.005)."""
    cart = await service.create_cart("USD")
    await service.add_to_cart(cart.id, make_item("SKU-1", 2, "10.00"))
    return await service.add_to_cart(cart.id, make_item("SKU-2", 1, "0.005"))


@pytest_asyncio.fixture
async def confirmed_order(service, filled_cart):
    return await service.place_order(
        PlaceOrderCommand(cart_id=filled_cart.id, customer_name="Ada Lovelace")
    )


# ============================================================================
# CART USE CASES
# ============================================================================


@pytest.mark.asyncio
async def test_create_cart_is_saved(service, cart_repository):
    """Test create_cart persists an empty cart."""
    cart = await service.create_cart("eur")

    stored = await cart_repository.get_by_id(cart.id)
    assert stored is not None
    assert stored.currency == "EUR"
    assert stored.is_empty()


@pytest.mark.asyncio
async def test_add_to_cart_merges_and_saves(service, cart_repository):
    """Test add_to_cart saves merged quantities."""
    cart = await service.create_cart()
    await service.add_to_cart(cart.id, make_item("SKU-1", 1))
    await service.add_to_cart(cart.id, make_item("SKU-1", 2))

    stored = await cart_repository.get_by_id(cart.id)
    assert stored.get_item("SKU-1").quantity == 3


@pytest.mark.asyncio
async def test_add_to_missing_cart_raises(service):
    """Test CartNotFoundException for unknown cart."""
    with pytest.raises(CartNotFoundException):
        await service.add_to_cart(uuid4(), make_item())


@pytest.mark.asyncio
async def test_remove_from_cart(service, filled_cart, cart_repository):
    """Test remove_from_cart saves the reduced cart."""
    await service.remove_from_cart(filled_cart.id, "SKU-1", 1)
    await service.remove_from_cart(filled_cart.id, "SKU-2")

    stored = await cart_repository.get_by_id(filled_cart.id)
    assert stored.item_count() == 1
    assert stored.get_item("SKU-2") is None


# ============================================================================
# place_order
# ============================================================================


@pytest.mark.asyncio
async def test_place_order_confirms_and_clears_cart(
    service, filled_cart, order_repository, cart_repository
):
    """Test checkout: order CONFIRMED and saved, cart emptied and saved."""
    order = await service.place_order(
        PlaceOrderCommand(cart_id=filled_cart.id, customer_name="Ada Lovelace")
    )

    assert order.state == OrderState.CONFIRMED
    assert order.total() == Money.of("20.005", "USD")
    assert order.item_count() == 3

    stored_order = await order_repository.get_by_id(order.id)
    assert stored_order.state == OrderState.CONFIRMED

    stored_cart = await cart_repository.get_by_id(filled_cart.id)
    assert stored_cart.is_empty()


@pytest.mark.asyncio
async def test_place_order_missing_cart(service):
    """Test unknown cart raises CartNotFoundException."""
    with pytest.raises(CartNotFoundException):
        await service.place_order(PlaceOrderCommand(cart_id=uuid4(), customer_name="Ada"))


@pytest.mark.asyncio
async def test_place_order_empty_cart(service, order_repository):
    """Test empty cart raises and saves nothing."""
    cart = await service.create_cart()

    with pytest.raises(InvalidShoppingCartError):
        await service.place_order(PlaceOrderCommand(cart_id=cart.id, customer_name="Ada"))

    assert await order_repository.get_all() == []


@pytest.mark.asyncio
async def test_place_order_invalid_command(service, filled_cart, cart_repository):
    """Test command business rules run before the cart is touched."""
    with pytest.raises(InvalidPlaceOrderCommandError):
        await service.place_order(
            PlaceOrderCommand(cart_id=filled_cart.id, customer_name="   ")
        )

    stored_cart = await cart_repository.get_by_id(filled_cart.id)
    assert not stored_cart.is_empty()


@pytest.mark.asyncio
async def test_place_order_keeps_cart_when_order_save_fails(service, filled_cart, cart_repository):
    """Test cart is untouched if the order cannot be saved."""
    service.order_repository = MagicMock()

    async def failing_save(order):
        raise RuntimeError("storage down")

    service.order_repository.save = failing_save

    with pytest.raises(RuntimeError):
        await service.place_order(
            PlaceOrderCommand(cart_id=filled_cart.id, customer_name="Ada")
        )

    stored_cart = await cart_repository.get_by_id(filled_cart.id)
    assert stored_cart.item_count() == 3


# ============================================================================
# process_payment
# ============================================================================


@pytest.mark.asyncio
async def test_process_payment_charges_rounded_total(
    service, confirmed_order, payment_gateway, order_repository
):
    """Test gateway is charged the total rounded half-up and order is PAID."""
    receipt = await service.process_payment(confirmed_order.id)

    charged_amount = payment_gateway.charge.call_args[0][1]
    assert charged_amount == Money.of("20.01", "USD")
    assert receipt.succeeded

    stored = await order_repository.get_by_id(confirmed_order.id)
    assert stored.state == OrderState.PAID
    assert stored.payment_reference == "txn_test"


@pytest.mark.asyncio
async def test_process_payment_declined_keeps_order_confirmed(
    service, confirmed_order, payment_gateway, order_repository
):
    """Test declined charge raises and leaves the order CONFIRMED."""
    payment_gateway.charge.side_effect = lambda order_id, amount: PaymentReceipt.declined(
        "txn_no", order_id, amount, "Card declined"
    )

    with pytest.raises(PaymentDeclinedError) as exc_info:
        await service.process_payment(confirmed_order.id)

    assert exc_info.value.order_id == confirmed_order.id
    assert exc_info.value.amount == Decimal("20.01")
    stored = await order_repository.get_by_id(confirmed_order.id)
    assert stored.state == OrderState.CONFIRMED


@pytest.mark.asyncio
async def test_process_payment_twice_raises(service, confirmed_order, payment_gateway):
    """Test a PAID order cannot be charged again."""
    await service.process_payment(confirmed_order.id)

    with pytest.raises(InvalidOrderError):
        await service.process_payment(confirmed_order.id)

    assert payment_gateway.charge.call_count == 1


@pytest.mark.asyncio
async def test_process_payment_cancelled_order_raises(service, confirmed_order, payment_gateway):
    """Test cancelled order is not charged."""
    await service.cancel_order(confirmed_order.id)

    with pytest.raises(InvalidOrderError):
        await service.process_payment(confirmed_order.id)

    payment_gateway.charge.assert_not_called()


@pytest.mark.asyncio
async def test_process_payment_missing_order(service):
    """Test unknown order raises OrderNotFoundException."""
    with pytest.raises(OrderNotFoundException):
        await service.process_payment(uuid4())


@pytest.mark.asyncio
async def test_process_payment_without_gateway(order_repository, cart_repository):
    """Test RuntimeError when no gateway is configured."""
    service = OrderService(order_repository, cart_repository)

    with pytest.raises(RuntimeError):
        await service.process_payment(uuid4())


# ============================================================================
# cancel / delete
# ============================================================================


@pytest.mark.asyncio
async def test_cancel_order_is_saved(service, confirmed_order, order_repository):
    """Test cancel_order persists CANCELLED state."""
    order = await service.cancel_order(confirmed_order.id)

    assert order.is_cancelled()
    assert (await order_repository.get_by_id(order.id)).is_cancelled()


@pytest.mark.asyncio
async def test_cancel_paid_order_raises(service, confirmed_order):
    """Test PAID order cannot be cancelled."""
    await service.process_payment(confirmed_order.id)

    with pytest.raises(InvalidOrderError):
        await service.cancel_order(confirmed_order.id)


@pytest.mark.asyncio
async def test_delete_order(service, confirmed_order, order_repository):
    """Test delete removes order, second delete raises."""
    await service.delete_order(confirmed_order.id)
    assert await order_repository.get_by_id(confirmed_order.id) is None

    with pytest.raises(OrderNotFoundException):
        await service.delete_order(confirmed_order.id)


# ============================================================================
# convert_order_total
# ============================================================================


@pytest.mark.asyncio
async def test_convert_order_total(service, confirmed_order, rate_provider):
    """Test total is converted with provider rate and rounded."""
    converted = await service.convert_order_total(confirmed_order.id, "EUR")

    assert converted == Money.of("10.00", "EUR")
    rate_provider.get_rate.assert_called_once_with("USD", "EUR")


@pytest.mark.asyncio
async def test_convert_order_total_missing_rate(service, confirmed_order, rate_provider):
    """Test ExchangeRateNotFoundError propagates."""
    rate_provider.get_rate.side_effect = ExchangeRateNotFoundError("no rate", "USD", "JPY")

    with pytest.raises(ExchangeRateNotFoundError):
        await service.convert_order_total(confirmed_order.id, "JPY")


@pytest.mark.asyncio
async def test_convert_without_provider(order_repository, cart_repository):
    """Test RuntimeError when no rate provider is configured."""
    service = OrderService(order_repository, cart_repository)

    with pytest.raises(RuntimeError):
        await service.convert_order_total(uuid4(), "EUR")


# ============================================================================
# FAILURE HANDLING
# ============================================================================


@pytest.mark.asyncio
async def test_payment_retry_after_failed_save_charges_once(
    order_repository, cart_repository
):
    """Test order save failing after approval: second attempt reuses the receipt."""
    gateway = SimulatedPaymentGateway(approval_limit=100)
    service = OrderService(order_repository, cart_repository, payment_gateway=gateway)
    cart = await service.create_cart()
    await service.add_to_cart(cart.id, make_item("SKU-1", 2, "10.00"))
    order = await service.place_order(
        PlaceOrderCommand(cart_id=cart.id, customer_name="Ada Lovelace")
    )

    real_save = order_repository.save
    saves = []

    async def save_failing_once(saved_order):
        saves.append(saved_order.id)
        if len(saves) == 1:
            raise RedisError("connection reset")
        await real_save(saved_order)

    order_repository.save = save_failing_once

    with pytest.raises(RedisError):
        await service.process_payment(order.id)
    first_receipt = gateway.get_receipt(order.id)
    assert (await order_repository.get_by_id(order.id)).state == OrderState.CONFIRMED

    receipt = await service.process_payment(order.id)

    assert receipt.transaction_id == first_receipt.transaction_id
    stored = await order_repository.get_by_id(order.id)
    assert stored.state == OrderState.PAID
    assert stored.payment_reference == first_receipt.transaction_id


@pytest.mark.asyncio
async def test_payment_of_unroundable_total_raises_invalid_money(service, payment_gateway):
    """Test a total too large to round to cents is a domain error, gateway untouched."""
    cart = await service.create_cart()
    await service.add_to_cart(cart.id, make_item("SKU-1", 1, "1e27"))
    order = await service.place_order(
        PlaceOrderCommand(cart_id=cart.id, customer_name="Ada Lovelace")
    )

    with pytest.raises(InvalidMoneyError):
        await service.process_payment(order.id)
    with pytest.raises(InvalidMoneyError):
        await service.convert_order_total(order.id, "EUR")

    payment_gateway.charge.assert_not_called()


@pytest.mark.asyncio
async def test_orders_with_and_without_explicit_date_can_be_listed(
    service, order_repository
):
    """Test an aware order_date and a defaulted one are both stored as UTC."""
    first_cart = await service.create_cart()
    await service.add_to_cart(first_cart.id, make_item())
    aware_date = datetime.now(timezone(timedelta(hours=-5))) - timedelta(hours=1)
    dated = await service.place_order(
        PlaceOrderCommand(cart_id=first_cart.id, customer_name="Ada", order_date=aware_date)
    )
    second_cart = await service.create_cart()
    await service.add_to_cart(second_cart.id, make_item())
    undated = await service.place_order(
        PlaceOrderCommand(cart_id=second_cart.id, customer_name="Grace")
    )

    results = await GetOrderQueryHandler(order_repository).handle_all()

    assert [r.order_id for r in results] == [dated.id, undated.id]
    assert dated.order_date == aware_date
    assert dated.order_date.utcoffset() == timedelta(0)
