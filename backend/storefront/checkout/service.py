"""Checkout simulation: price a cart, record the order, never charge or ship."""

from __future__ import annotations

import asyncio
from collections import defaultdict
from decimal import ROUND_HALF_UP, Decimal
from typing import TYPE_CHECKING
from uuid import uuid4

import structlog

from storefront.checkout.types import Order, OrderLine

if TYPE_CHECKING:
    from shared.catalog.repository import InMemoryProductRepository
    from storefront.checkout.types import CheckoutRequest

logger = structlog.get_logger()

CENT = Decimal("0.01")
FREE_SHIPPING_THRESHOLD = Decimal("100.00")
FLAT_SHIPPING = Decimal("9.99")


class CheckoutError(Exception):
    """Order cannot be placed as requested."""


class UnknownProductError(CheckoutError):
    def __init__(self, product_id: str) -> None:
        super().__init__(f"Product not found: {product_id}")
        self.product_id = product_id


class InsufficientStockError(CheckoutError):
    def __init__(self, product_id: str) -> None:
        super().__init__(f"Insufficient stock for product {product_id}")
        self.product_id = product_id


def _money(value: float | Decimal) -> Decimal:
    return Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP)


class CheckoutService:
    """Turn a checkout request into a confirmed order held in memory.

    Stock levels are checked but not decremented.
    """

    def __init__(self, products: InMemoryProductRepository) -> None:
        self._products = products
        self._orders: dict[str, list[Order]] = defaultdict(list)
        self._lock = asyncio.Lock()

    async def place_order(self, user_id: str, request: CheckoutRequest) -> Order:
        quantities: dict[str, int] = {}
        for item in request.items:
            quantities[item.product_id] = quantities.get(item.product_id, 0) + item.quantity

        lines: list[OrderLine] = []
        for product_id, quantity in quantities.items():
            product = self._products.get(product_id)
            if product is None:
                raise UnknownProductError(product_id)
            if quantity > product.quantity:
                raise InsufficientStockError(product_id)
            unit_price = _money(product.unit_price)
            lines.append(
                OrderLine(
                    product_id=product.id,
                    name=product.name,
                    unit_price=unit_price,
                    quantity=quantity,
                    line_total=_money(unit_price * quantity),
                ),
            )

        subtotal = _money(sum((line.line_total for line in lines), Decimal(0)))
        shipping = Decimal("0.00") if subtotal >= FREE_SHIPPING_THRESHOLD else FLAT_SHIPPING
        order = Order(
            order_id=f"order-{uuid4().hex[:12]}",
            user_id=user_id,
            lines=lines,
            subtotal=subtotal,
            shipping=shipping,
            total=_money(subtotal + shipping),
            shipping_address=request.shipping_address,
        )
        async with self._lock:
            self._orders[user_id].append(order)
        logger.info("order placed", order_id=order.order_id, user_id=user_id, total=str(order.total))
        return order

    async def list_orders(self, user_id: str) -> list[Order]:
        """Orders for ``user_id``, newest first."""
        async with self._lock:
            return list(reversed(self._orders.get(user_id, [])))
