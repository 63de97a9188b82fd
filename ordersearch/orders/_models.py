from datetime import datetime

from pydantic import ConfigDict, EmailStr, Field, field_validator

from ..core import DataModel


class OrderModel(DataModel):
    """Base for order payloads, camelCase on the wire."""

    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        extra="ignore",
        populate_by_name=True,
    )


class ProductItem(OrderModel):
    """Single product line of an order."""

    category: str = Field(min_length=1)
    name: str = Field(min_length=1)
    quantity: int = Field(ge=1)


class Customer(OrderModel):
    """Customer details."""

    full_name: str = Field(alias="fullName", min_length=1)
    full_address: str = Field(alias="fullAddress", min_length=1)
    email: EmailStr


class OrderDocument(OrderModel):
    """Order as stored in the index."""

    customer: Customer
    products: list[ProductItem]
    order_date: str = Field(alias="orderDate", min_length=1)

    @field_validator("order_date")
    @classmethod
    def check_order_date(cls, value: str) -> str:
        try:
            datetime.fromisoformat(value)
        except ValueError as e:
            raise ValueError("orderDate must be an ISO 8601 date") from e
        return value


class Order(OrderDocument):
    """Stored order with the identity assigned by the store."""

    id: str


class OrderFilter(OrderModel):
    """Flat field/value filter. ``id`` matches by identity."""

    id: str | None = None
    order_date: str | None = Field(default=None, alias="orderDate")
    customer_email: str | None = Field(default=None, alias="customer.email")
    customer_full_name: str | None = Field(
        default=None, alias="customer.fullName"
    )
    product_category: str | None = Field(
        default=None, alias="products.category"
    )
    product_name: str | None = Field(default=None, alias="products.name")


class CustomerUpdate(OrderModel):
    full_name: str | None = Field(default=None, alias="fullName")
    full_address: str | None = Field(default=None, alias="fullAddress")
    email: str | None = None


class OrderUpdate(OrderModel):
    """Partial order update. Unset fields are left untouched."""

    customer: CustomerUpdate | None = None
    products: list[ProductItem] | None = None
    order_date: str | None = Field(default=None, alias="orderDate")
