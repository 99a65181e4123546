"""Read-only product repository."""

from __future__ import annotations

from typing import TYPE_CHECKING

from shared.catalog.fixtures import SEED_PRODUCTS

if TYPE_CHECKING:
    from collections.abc import Iterable

    from shared.catalog.models import Product


class InMemoryProductRepository:
    """Products held in memory, in catalog order."""

    def __init__(self, products: Iterable[Product] = SEED_PRODUCTS) -> None:
        self._products: dict[str, Product] = {}
        for product in products:
            if product.id in self._products:
                raise ValueError(f"Duplicate product id '{product.id}'")
            self._products[product.id] = product

    def all(self) -> list[Product]:
        return list(self._products.values())

    def get(self, product_id: str) -> Product | None:
        return self._products.get(product_id)
