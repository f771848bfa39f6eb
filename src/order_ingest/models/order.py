"""
Canonical order models.

These are the internal, submission-ready representations that every inbound
format is normalized into, plus the created order echoed back by the
downstream order API.
"""

from datetime import datetime, timezone
from decimal import Decimal
from enum import IntEnum
from typing import Annotated, Any, Optional
from uuid import UUID

from pydantic import BeforeValidator, ConfigDict, Field, computed_field, field_validator

from order_ingest.models.base import CamelModel, Money


class OrderStatus(IntEnum):
    """Order lifecycle, serialized as its integer value."""

    RECEIVED = 0
    PICKING = 1
    DISPATCHED = 2
    DELIVERED = 3


def _parse_order_status(value: Any) -> Any:
    """Accept either the integer value or the status name."""
    if isinstance(value, str):
        name = value.strip().upper()
        if name in OrderStatus.__members__:
            return OrderStatus[name]
        if name.isdigit():
            return int(name)
    return value


Status = Annotated[OrderStatus, BeforeValidator(_parse_order_status)]


def _as_utc(value: datetime) -> datetime:
    # Naive timestamps are taken to already be UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class Address(CamelModel):
    """Normalized postal address."""

    model_config = ConfigDict(frozen=True)

    street: Optional[str] = None
    city: Optional[str] = None
    county: Optional[str] = None
    postal_code: Optional[str] = None
    country: Optional[str] = None


class CreateOrderItem(CamelModel):
    """Line item of a canonical create-order request."""

    model_config = ConfigDict(frozen=True)

    product_id: Annotated[int, Field(
        ge=1,
        description='Resolved internal product identifier',
        examples=[7],
    )]

    quantity: Annotated[int, Field(
        ge=1,
        description='Number of units ordered',
        examples=[2],
    )]

    price: Annotated[Money, Field(
        ge=0,
        description='Unit price',
        examples=[9.5],
    )]


class CreateOrderRequest(CamelModel):
    """Canonical create-order request submitted to the downstream order API."""

    model_config = ConfigDict(frozen=True)

    customer_id: Annotated[Optional[int], Field(
        default=None,
        description='Internal customer identifier, absent when unresolved',
        examples=[5],
    )] = None

    supplier_id: Annotated[int, Field(
        default=0,
        description='Supplier identifier, fixed per source format',
        examples=[1, 2],
    )] = 0

    order_date: Annotated[datetime, Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description='UTC timestamp the order was placed',
    )]

    customer_email: Annotated[Optional[str], Field(
        default=None,
        max_length=200,
        description='Customer email address',
        examples=['x@y.com'],
    )] = None

    billing_address: Optional[Address] = None

    delivery_address: Optional[Address] = None

    order_status: Annotated[Status, Field(
        default=OrderStatus.RECEIVED,
        description='Lifecycle status, always Received for new orders',
    )] = OrderStatus.RECEIVED

    order_items: Annotated[list[CreateOrderItem], Field(
        default_factory=list,
        description='Ordered line items',
    )]

    @field_validator('order_date')
    @classmethod
    def normalize_order_date(cls, v: datetime) -> datetime:
        """Store every order date as an aware UTC timestamp."""
        return _as_utc(v)

    @field_validator('order_items', mode='before')
    @classmethod
    def null_items_as_empty(cls, v: Any) -> Any:
        return [] if v is None else v


class CreateOrderHeader(CamelModel):
    """
    The part of a create-order request that is checked before its items.

    Parsed on its own so an invalid supplier is reported even when the item
    list is malformed too.
    """

    supplier_id: Optional[int] = None


class OrderItem(CamelModel):
    """Line item of an order as returned by the downstream order API."""

    id: int = 0
    product_id: int = 0
    product_name: str = ''
    product_code: Optional[UUID] = None
    quantity: int = 0
    price: Money = Decimal('0')

    @computed_field
    @property
    def line_total(self) -> Money:
        return self.quantity * self.price


class Order(CamelModel):
    """Order as persisted and echoed back by the downstream order API."""

    id: Annotated[int, Field(
        description='Server-assigned order identifier',
        examples=[300],
    )]

    customer_id: Optional[int] = None
    supplier_id: int = 0
    supplier_name: str = ''
    order_date: Optional[datetime] = None
    customer_email: Optional[str] = None
    billing_address: Optional[Address] = None
    delivery_address: Optional[Address] = None
    order_status: Status = OrderStatus.RECEIVED
    total_amount: Money = Decimal('0')
    order_items: Optional[list[OrderItem]] = None
