"""Checkout simulation and in-memory order history."""

from storefront.checkout.service import (
    CheckoutError,
    CheckoutService,
    InsufficientStockError,
    UnknownProductError,
)
from storefront.checkout.types import CheckoutRequest, Order

__all__ = [
    "CheckoutError",
    "CheckoutRequest",
    "CheckoutService",
    "InsufficientStockError",
    "Order",
    "UnknownProductError",
]
