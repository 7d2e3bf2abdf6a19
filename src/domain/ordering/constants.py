"""
Ordering Domain Constants

Business rule constants shared by the Money value object and the order
aggregates.
"""

import re
from decimal import Decimal
from typing import Final


# ============================================================================
# CURRENCY
# ============================================================================

# Currency used when an order or cart is created without one
DEFAULT_CURRENCY: Final[str] = "USD"

# ISO-4217 style alphabetic code: exactly three upper-case letters
CURRENCY_CODE_PATTERN: Final[re.Pattern] = re.compile(r"^[A-Z]{3}$")


# ============================================================================
# MONEY ROUNDING
# ============================================================================

# Minor-unit precision used when money is rounded for display or charging
MONEY_DECIMAL_PLACES: Final[int] = 2
MONEY_QUANTUM: Final[Decimal] = Decimal(1).scaleb(-MONEY_DECIMAL_PLACES)  # 0.01


# ============================================================================
# LINE ITEMS
# ============================================================================

MIN_ITEM_QUANTITY: Final[int] = 1
MAX_ITEM_QUANTITY: Final[int] = 10_000  # per line

# Largest unit price accepted over HTTP
MAX_UNIT_PRICE: Final[Decimal] = Decimal("1000000000")

# Customer name bounds (after whitespace normalization)
MAX_CUSTOMER_NAME_LENGTH: Final[int] = 200
