"""
Order Service - Application Orchestration

Responsibility:
    Orchestrates the order lifecycle by coordinating the Order aggregate,
    the shopping cart, the repositories and the payment gateway.

Architecture Notes:
    - Part of Application Layer (Services/Use Cases)
    - Depends on Domain Layer only via interfaces (repository and gateway Protocols)
    - Infrastructure implementations are injected (API dependencies, Celery task)
    - No direct HTTP handling (that's API Layer concern)

Contains:
    - OrderService: Checkout, payment, cancellation, deletion, conversion

Does NOT contain:
    - Domain business rules (enforced by Order / ShoppingCart / Money)
    - HTTP handling (delegated to API Layer)
    - Storage details (delegated to repositories)
"""

import logging
from typing import Optional
from uuid import UUID

from src.application.commands.place_order import PlaceOrderCommand
from src.application.queries.get_order import (
    CartNotFoundException,
    OrderNotFoundException,
)
from src.domain.ordering.constants import DEFAULT_CURRENCY
from src.domain.ordering.entities.order import Order, OrderState
from src.domain.ordering.entities.shopping_cart import ShoppingCart
from src.domain.ordering.repositories.order_repository import OrderRepositoryProtocol
from src.domain.ordering.repositories.shopping_cart_repository import (
    ShoppingCartRepositoryProtocol,
)
from src.domain.ordering.services.exchange_rate_provider import (
    ExchangeRateProviderProtocol,
)
from src.domain.ordering.services.payment_gateway import PaymentGatewayProtocol
from src.domain.ordering.value_objects.money import Money
from src.domain.ordering.value_objects.order_item import OrderItem
from src.domain.ordering.value_objects.payment_receipt import PaymentReceipt
from src.domain.shared.exceptions import (
    InvalidOrderError,
    InvalidShoppingCartError,
    PaymentDeclinedError,
)

# Configure logger for this module
logger = logging.getLogger(__name__)


class OrderService:
    """
    Application service for the order lifecycle.

    Workflow:
        1. place_order(): cart -> Order (CONFIRMED), saved; cart cleared
        2. process_payment(): charge gateway -> Order (PAID), saved
        3. cancel_order(): Order (CANCELLED), saved

    Dependencies (injected):
        - order_repository: OrderRepositoryProtocol
        - cart_repository: ShoppingCartRepositoryProtocol
        - payment_gateway: PaymentGatewayProtocol (required for payments only)
        - rate_provider: ExchangeRateProviderProtocol (required for conversion only)

    Usage:
        >>> service = OrderService(order_repo, cart_repo, payment_gateway=gateway)
        >>> order = await service.place_order(
        ...     PlaceOrderCommand(cart_id=cart.id, customer_name="Ada Lovelace")
        ... )
        >>> receipt = await service.process_payment(order.id)
    """

    def __init__(
        self,
        order_repository: OrderRepositoryProtocol,
        cart_repository: ShoppingCartRepositoryProtocol,
        payment_gateway: Optional[PaymentGatewayProtocol] = None,
        rate_provider: Optional[ExchangeRateProviderProtocol] = None,
    ) -> None:
        self.order_repository = order_repository
        self.cart_repository = cart_repository
        self.payment_gateway = payment_gateway
        self.rate_provider = rate_provider

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    async def get_order(self, order_id: UUID) -> Order:
        """
        Load an order or fail.

        Raises:
            OrderNotFoundException: If order does not exist
        """
        order = await self.order_repository.get_by_id(order_id)
        if order is None:
            logger.warning(f"Order not found: {order_id}")
            raise OrderNotFoundException(order_id)
        return order

    async def get_cart(self, cart_id: UUID) -> ShoppingCart:
        """
        Load a shopping cart or fail.

        Raises:
            CartNotFoundException: If cart does not exist or expired
        """
        cart = await self.cart_repository.get_by_id(cart_id)
        if cart is None:
            logger.warning(f"Shopping cart not found: {cart_id}")
            raise CartNotFoundException(cart_id)
        return cart

    # ------------------------------------------------------------------
    # Cart use cases
    # ------------------------------------------------------------------

    async def create_cart(self, currency: str = DEFAULT_CURRENCY) -> ShoppingCart:
        """Create and save an empty cart."""
        cart = ShoppingCart(currency=currency)
        await self.cart_repository.save(cart)
        logger.info(f"Created cart {cart.id} ({cart.currency})")
        return cart

    async def add_to_cart(self, cart_id: UUID, item: OrderItem) -> ShoppingCart:
        """
        Add a line to a cart (merges with an existing line for the same product).

        Raises:
            CartNotFoundException: If cart does not exist
            CurrencyMismatchError: If item currency differs from cart currency
            InvalidShoppingCartError: If product is already in cart at another price
        """
        cart = await self.get_cart(cart_id)
        cart.add_item(item)
        await self.cart_repository.save(cart)
        logger.debug(f"Added {item.quantity} x {item.product_id} to cart {cart.id}")
        return cart

    async def remove_from_cart(
        self, cart_id: UUID, product_id: str, quantity: Optional[int] = None
    ) -> ShoppingCart:
        """
        Remove units of a product (whole line when quantity is None).

        Raises:
            CartNotFoundException: If cart does not exist
            InvalidShoppingCartError: If product is not in cart or quantity < 1
        """
        cart = await self.get_cart(cart_id)
        cart.remove_item(product_id, quantity)
        await self.cart_repository.save(cart)
        logger.debug(f"Removed {quantity or 'all'} x {product_id} from cart {cart.id}")
        return cart

    # ------------------------------------------------------------------
    # Order commands
    # ------------------------------------------------------------------

    async def place_order(self, command: PlaceOrderCommand) -> Order:
        """
        Convert a shopping cart into a confirmed order.

        Process Flow:
            1. Validate command business rules
            2. Load cart (CartNotFoundException if missing)
            3. Build Order from cart (InvalidShoppingCartError if empty)
            4. Confirm order (PENDING -> CONFIRMED)
            5. Save order
            6. Clear and save cart

        The order is always saved before the cart is cleared.

        Args:
            command: PlaceOrderCommand with cart_id and customer_name

        Returns:
            The saved Order in CONFIRMED state

        Raises:
            InvalidPlaceOrderCommandError: If command is invalid
            CartNotFoundException: If cart does not exist
            InvalidShoppingCartError: If cart is empty
        """
        command.validate_business_rules()
        logger.debug(f"Placing order from cart {command.cart_id}")

        cart = await self.get_cart(command.cart_id)
        if cart.is_empty():
            raise InvalidShoppingCartError(
                f"Cannot place an order from empty cart {cart.id}"
            )

        order = Order.from_cart(cart, command.customer_name, command.order_date)
        order.confirm()
        await self.order_repository.save(order)
        logger.info(
            f"Order {order.id} placed for {order.customer_name}: "
            f"{order.item_count()} items, total {order.total()}"
        )

        cart.clear()
        await self.cart_repository.save(cart)
        logger.debug(f"Cart {cart.id} cleared after checkout")

        return order

    async def process_payment(self, order_id: UUID) -> PaymentReceipt:
        """
        Charge the payment gateway for a confirmed order.

        Process Flow:
            1. Load order (OrderNotFoundException if missing)
            2. Require CONFIRMED state
            3. Charge order total rounded to minor units (idempotent per order
               in the gateway, so a retry after a failed save is not charged again)
            4. Approved: mark order PAID with transaction ID, save
            5. Declined: raise PaymentDeclinedError, order unchanged

        Args:
            order_id: Order to pay

        Returns:
            Approved PaymentReceipt

        Raises:
            RuntimeError: If no payment gateway is configured
            OrderNotFoundException: If order does not exist
            InvalidOrderError: If order is not CONFIRMED
            PaymentDeclinedError: If the gateway declines the charge
        """
        if self.payment_gateway is None:
            raise RuntimeError("OrderService has no payment gateway configured")

        order = await self.get_order(order_id)
        if order.state != OrderState.CONFIRMED:
            raise InvalidOrderError(
                f"Cannot process payment for order in state {order.state.value}. "
                f"Must be in CONFIRMED state."
            )

        amount = order.total().rounded()
        logger.info(f"Charging {amount} for order {order.id}")
        receipt = self.payment_gateway.charge(order.id, amount)

        if not receipt.succeeded:
            logger.warning(
                f"Payment declined for order {order.id}: {receipt.message} "
                f"(transaction {receipt.transaction_id})"
            )
            raise PaymentDeclinedError(
                receipt.message, order_id=order.id, amount=amount.amount
            )

        order.mark_paid(receipt.transaction_id)
        await self.order_repository.save(order)
        logger.info(f"Order {order.id} paid (transaction {receipt.transaction_id})")

        return receipt

    async def cancel_order(self, order_id: UUID) -> Order:
        """
        Cancel a pending or confirmed order.

        Raises:
            OrderNotFoundException: If order does not exist
            InvalidOrderError: If order is PAID or already CANCELLED
        """
        order = await self.get_order(order_id)
        order.cancel()
        await self.order_repository.save(order)
        logger.info(f"Order {order.id} cancelled")
        return order

    async def delete_order(self, order_id: UUID) -> None:
        """
        Delete an order from the repository.

        Raises:
            OrderNotFoundException: If order does not exist
        """
        deleted = await self.order_repository.delete(order_id)
        if not deleted:
            raise OrderNotFoundException(order_id)
        logger.info(f"Order {order_id} deleted")

    async def convert_order_total(self, order_id: UUID, target_currency: str) -> Money:
        """
        Express an order total in another currency.

        Raises:
            RuntimeError: If no exchange rate provider is configured
            OrderNotFoundException: If order does not exist
            ExchangeRateNotFoundError: If no rate exists for the pair
        """
        if self.rate_provider is None:
            raise RuntimeError("OrderService has no exchange rate provider configured")

        order = await self.get_order(order_id)
        converted = order.total().convert_to(target_currency, self.rate_provider)
        logger.debug(f"Order {order.id} total {order.total()} = {converted}")
        return converted
