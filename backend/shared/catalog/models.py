"""Catalog models. Serialized with camelCase keys on the wire."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Product(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    id: str
    name: str
    description: str
    price: float = Field(ge=0)
    discounted_price: float | None = Field(default=None, ge=0)
    image: str
    brand: str
    fragrance: str
    size: str
    quantity: int = Field(ge=0)  # units in stock
    rating: float = Field(ge=0, le=5)
    reviews: int = Field(ge=0)
    category: str
    created_at: datetime
    updated_at: datetime

    @property
    def unit_price(self) -> float:
        """Price charged at checkout: the discounted price when there is one."""
        return self.discounted_price if self.discounted_price is not None else self.price

    def to_wire(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class Page(BaseModel):
    items: list[Product]
    total: int
    page: int
    limit: int

    def to_wire(self) -> dict:
        return {
            "items": [p.to_wire() for p in self.items],
            "total": self.total,
            "page": self.page,
            "limit": self.limit,
        }
