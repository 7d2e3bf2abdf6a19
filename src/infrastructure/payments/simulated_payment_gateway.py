"""
Simulated Payment Gateway

Stand-in for a card processor implementing PaymentGatewayProtocol.
Approves any positive charge up to PAYMENT_APPROVAL_LIMIT (default 10000
in the charge currency) and declines everything else with a reason.

Approved receipts are remembered per order, so a payment retried after a
storage failure gets the original receipt back instead of a second charge.
The memory lives in the gateway instance: API and worker processes each
keep one instance for their lifetime.
"""

import logging
import os
import threading
import uuid
from decimal import Decimal
from typing import Optional, Union
from uuid import UUID

from src.domain.ordering.value_objects.money import Money
from src.domain.ordering.value_objects.payment_receipt import PaymentReceipt

logger = logging.getLogger(__name__)

DEFAULT_APPROVAL_LIMIT = "10000"


class SimulatedPaymentGateway:
    """
    Deterministic, idempotent payment gateway.

    Decision rules:
        - order already approved: original receipt returned, nothing charged
        - amount <= 0: declined ("Charge amount must be positive")
        - amount > approval_limit: declined ("exceeds approval limit")
        - otherwise: approved

    Every new receipt carries a fresh transaction ID "txn_<32 hex chars>",
    declined ones included. Declined receipts are not remembered.

    Examples:
        >>> gateway = SimulatedPaymentGateway(approval_limit=100)
        >>> first = gateway.charge(order_id, Money.of("25.00", "USD"))
        >>> gateway.charge(order_id, Money.of("25.00", "USD")) == first
        True
        >>> gateway.charge(other_id, Money.of("250.00", "USD")).message
        'Amount 250.00 USD exceeds approval limit 100'
    """

    def __init__(self, approval_limit: Optional[Union[int, str, Decimal]] = None) -> None:
        if approval_limit is None:
            approval_limit = os.getenv("PAYMENT_APPROVAL_LIMIT", DEFAULT_APPROVAL_LIMIT)
        self.approval_limit = Decimal(str(approval_limit))
        self._approved: dict[UUID, PaymentReceipt] = {}
        self._lock = threading.Lock()

    @staticmethod
    def _new_transaction_id() -> str:
        return f"txn_{uuid.uuid4().hex}"

    def get_receipt(self, order_id: UUID) -> Optional[PaymentReceipt]:
        """Approved receipt for an order, or None if it was never charged."""
        return self._approved.get(order_id)

    def charge(self, order_id: UUID, amount: Money) -> PaymentReceipt:
        with self._lock:
            existing = self._approved.get(order_id)
            if existing is not None:
                logger.info(
                    f"Order {order_id} already charged ({existing.transaction_id}), "
                    f"returning original receipt"
                )
                return existing

            transaction_id = self._new_transaction_id()

            if amount.amount <= 0:
                logger.warning(f"Declined {amount} for order {order_id}: non-positive amount")
                return PaymentReceipt.declined(
                    transaction_id, order_id, amount, "Charge amount must be positive"
                )

            if amount.amount > self.approval_limit:
                logger.warning(
                    f"Declined {amount} for order {order_id}: above limit {self.approval_limit}"
                )
                return PaymentReceipt.declined(
                    transaction_id,
                    order_id,
                    amount,
                    f"Amount {amount} exceeds approval limit {self.approval_limit}",
                )

            receipt = PaymentReceipt.approved(transaction_id, order_id, amount)
            self._approved[order_id] = receipt
            logger.info(f"Approved {amount} for order {order_id} ({transaction_id})")
            return receipt
