"""
PaymentGateway Domain Service Contract

Protocol (interface) for charging an order amount.

Architecture Notes:
- Protocol pattern (not ABC) for dependency inversion
- A declined charge is a normal outcome and is returned as a receipt with
  succeeded=False; exceptions are reserved for infrastructure failures
- Charges are idempotent per order: once a charge for an order is approved,
  charging the same order again returns that receipt and moves no money
"""

from typing import Protocol
from uuid import UUID

from src.domain.ordering.value_objects.money import Money
from src.domain.ordering.value_objects.payment_receipt import PaymentReceipt


class PaymentGatewayProtocol(Protocol):
    """
    Protocol defining interface for payment processing.

    Usage Example:
        gateway = SimulatedPaymentGateway()
        receipt = gateway.charge(order.id, order.total().rounded())
        if receipt.succeeded:
            order.mark_paid(receipt.transaction_id)
    """

    def charge(self, order_id: UUID, amount: Money) -> PaymentReceipt:
        """
        Charge amount for the given order.

        order_id is the idempotency key: a repeated call for an order whose
        charge was already approved returns the original receipt.

        Args:
            order_id: Order being paid
            amount: Amount to charge (already rounded to minor units)

        Returns:
            PaymentReceipt describing approval or decline
        """
        ...
