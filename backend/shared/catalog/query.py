"""Product search, filtering, sorting, and pagination."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Literal, Self

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from shared.catalog.models import Page, Product

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

DEFAULT_PAGE_SIZE = 12
MAX_PAGE_SIZE = 100

SortField = Literal["name", "price", "rating", "newest"]
SortOrder = Literal["asc", "desc"]


class ProductQuery(BaseModel):
    """Query parameters accepted by the product listing.

    Field names arrive camelCased (``minPrice``, ``sortBy``). Empty strings
    are treated as absent, matching how browsers serialize blank form fields.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")

    search: str | None = None
    brand: str | None = None
    category: str | None = None
    min_price: float | None = Field(default=None, ge=0)
    max_price: float | None = Field(default=None, ge=0)
    page: int = Field(default=1)
    limit: int = Field(default=DEFAULT_PAGE_SIZE)
    sort_by: SortField = "name"
    sort_order: SortOrder = "asc"

    @field_validator("page", mode="after")
    @classmethod
    def _clamp_page(cls, v: int) -> int:
        return max(v, 1)

    @field_validator("limit", mode="after")
    @classmethod
    def _clamp_limit(cls, v: int) -> int:
        return min(max(v, 1), MAX_PAGE_SIZE)

    @model_validator(mode="before")
    @classmethod
    def _drop_absent(cls, data: object) -> object:
        # Blank values fall back to field defaults rather than failing validation.
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if not (isinstance(v, str) and not v.strip())}
        return data

    @model_validator(mode="after")
    def _check_price_range(self) -> Self:
        if self.min_price is not None and self.max_price is not None and self.min_price > self.max_price:
            raise ValueError("minPrice must not exceed maxPrice")
        return self


def _matches(product: Product, query: ProductQuery) -> bool:
    if query.search:
        needle = query.search.lower()
        haystacks = (product.name, product.description, product.brand)
        if not any(needle in h.lower() for h in haystacks):
            return False
    if query.brand and product.brand != query.brand:
        return False
    if query.category and product.category != query.category:
        return False
    if query.min_price is not None and product.price < query.min_price:
        return False
    return not (query.max_price is not None and product.price > query.max_price)


def _sort_key(sort_by: SortField) -> Callable[[Product], Any]:
    if sort_by == "newest":
        # Ascending "newest" lists the most recently added product first.
        return lambda p: -p.created_at.timestamp()
    if sort_by == "name":
        return lambda p: p.name.lower()
    return lambda p: getattr(p, sort_by)


def apply_query(products: Iterable[Product], query: ProductQuery) -> Page:
    """Filter, sort, and slice ``products``. ``total`` counts matches before paging."""
    matched = [p for p in products if _matches(p, query)]
    matched.sort(key=_sort_key(query.sort_by), reverse=query.sort_order == "desc")
    start = (query.page - 1) * query.limit
    return Page(
        items=matched[start : start + query.limit],
        total=len(matched),
        page=query.page,
        limit=query.limit,
    )
