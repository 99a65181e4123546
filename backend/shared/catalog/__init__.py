"""Product catalog: models, seed data, and listing queries."""

from shared.catalog.models import Page, Product
from shared.catalog.query import MAX_PAGE_SIZE, ProductQuery, apply_query
from shared.catalog.repository import InMemoryProductRepository

__all__ = [
    "MAX_PAGE_SIZE",
    "InMemoryProductRepository",
    "Page",
    "Product",
    "ProductQuery",
    "apply_query",
]
