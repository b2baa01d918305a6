"""
Sales services - Business logic layer.

- Settlement of holds into payments
- Refunds
- Seller purchase history and the activation marker
"""

from .settlement import settle_hold

from .refunds import refund_payment

from .history import (
    list_seller_payments,
    mark_payment_activated,
)

__all__ = [
    'settle_hold',
    'refund_payment',
    'list_seller_payments',
    'mark_payment_activated',
]
