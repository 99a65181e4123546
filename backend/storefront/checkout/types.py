from datetime import UTC, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

MAX_CHECKOUT_LINES = 50
MAX_LINE_QUANTITY = 99


class _WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid", frozen=True)


class CheckoutItem(_WireModel):
    product_id: str = Field(min_length=1)
    quantity: int = Field(ge=1, le=MAX_LINE_QUANTITY)


class ShippingAddress(_WireModel):
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    street: str = Field(min_length=1, max_length=200)
    city: str = Field(min_length=1, max_length=100)
    state: str = Field(min_length=1, max_length=100)
    zip_code: str = Field(min_length=1, max_length=20)
    country: str = Field(min_length=1, max_length=100)


class CheckoutRequest(_WireModel):
    items: list[CheckoutItem] = Field(min_length=1, max_length=MAX_CHECKOUT_LINES)
    shipping_address: ShippingAddress


class OrderLine(_WireModel):
    product_id: str
    name: str
    unit_price: Decimal
    quantity: int
    line_total: Decimal


class Order(_WireModel):
    order_id: str
    user_id: str
    lines: list[OrderLine]
    subtotal: Decimal
    shipping: Decimal
    total: Decimal
    shipping_address: ShippingAddress
    status: str = "confirmed"
    created_at: datetime = Field(default_factory=lambda: datetime.now(tz=UTC))

    def to_wire(self) -> dict:
        # Money goes out as JSON numbers, not strings.
        data = self.model_dump(mode="json", by_alias=True)
        for key in ("subtotal", "shipping", "total"):
            data[key] = float(getattr(self, key))
        for wire_line, line in zip(data["lines"], self.lines, strict=True):
            wire_line["unitPrice"] = float(line.unit_price)
            wire_line["lineTotal"] = float(line.line_total)
        return data
