"""
Payment Infrastructure Module

Exports:
    - SimulatedPaymentGateway: PaymentGatewayProtocol implementation
"""

from .simulated_payment_gateway import SimulatedPaymentGateway

__all__ = ["SimulatedPaymentGateway"]
