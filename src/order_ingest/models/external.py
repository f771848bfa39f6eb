"""
Supplier payload models.

Each external supplier posts orders in its own shape. These models only
describe what arrives on the wire; they are parsed once, handed to the
order mapping functions, and then discarded.
"""

from datetime import datetime
from decimal import Decimal
from typing import Annotated, Optional
from uuid import UUID

from pydantic import Field

from order_ingest.models.base import CamelModel

# 9999-12-31T23:59:59Z, the last instant a datetime can hold
MAX_EPOCH_SECONDS = 253402300799


class SpeedyAddress(CamelModel):
    """Ship-to / bill-to address as sent by the Speedy courier."""

    street_address: Optional[str] = None
    city: Optional[str] = None
    region: Optional[str] = None
    post_code: Optional[str] = None
    country: Optional[str] = None


class SpeedyLineItem(CamelModel):
    """Speedy line item; product ids are already internal ids."""

    product_id: Annotated[int, Field(ge=1, examples=[7])]
    qty: Annotated[int, Field(ge=1, examples=[2])]
    unit_price: Annotated[Decimal, Field(ge=0, examples=[9.5])]


class SpeedyOrder(CamelModel):
    """Order payload from the Speedy courier."""

    customer_id: Annotated[Optional[int], Field(
        default=None,
        description='Internal customer identifier',
        examples=[5],
    )] = None

    order_timestamp: Annotated[datetime, Field(
        description='When the order was placed',
        examples=['2024-01-15T10:00:00Z'],
    )]

    ship_to: Optional[SpeedyAddress] = None

    bill_to: Optional[SpeedyAddress] = None

    line_items: Optional[list[SpeedyLineItem]] = None


class VaultLocation(CamelModel):
    """Billing / shipping location as sent by the Vault warehouse."""

    address_line: Optional[str] = None
    city_name: Optional[str] = None
    state_province: Optional[str] = None
    zip_postal: Optional[str] = None
    country_code: Optional[str] = None


class VaultDeliveryDetails(CamelModel):
    billing_location: Optional[VaultLocation] = None
    shipping_location: Optional[VaultLocation] = None


class VaultItem(CamelModel):
    """Vault line item; products are identified by an opaque code."""

    product_code: Annotated[UUID, Field(
        description='Vault product code, resolved to an internal product id',
        examples=['550e8400-e29b-41d4-a716-446655440000'],
    )]
    quantity_ordered: Annotated[int, Field(ge=1, examples=[3])]
    price_per_unit: Annotated[Decimal, Field(ge=0, examples=[2.5])]


class VaultOrder(CamelModel):
    """Order payload from the Vault warehouse."""

    customer_email: Annotated[Optional[str], Field(
        default=None,
        description='Customer email, resolved to an internal customer id',
        examples=['x@y.com'],
    )] = None

    placed_at: Annotated[int, Field(
        ge=0,
        le=MAX_EPOCH_SECONDS,
        description='Unix epoch seconds when the order was placed',
        examples=[1705312800],
    )]

    delivery_details: Optional[VaultDeliveryDetails] = None

    items: Optional[list[VaultItem]] = None
