"""Checkout Domain Value Objects"""

from src.service.checkout.domain.value_object.checkout_outcome import (
    CheckoutOutcome,
    Failed,
    Purchased,
    Released,
)
from src.service.checkout.domain.value_object.line_item import LineItem

__all__ = ['CheckoutOutcome', 'Failed', 'LineItem', 'Purchased', 'Released']
