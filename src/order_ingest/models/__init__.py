"""
Order Ingest Models Package

This package contains all Pydantic models used throughout the service:
the canonical order models, the external supplier payloads, the lookup
response shapes, and the error response bodies.
"""

from .base import CamelModel
from .external import (
    SpeedyAddress,
    SpeedyLineItem,
    SpeedyOrder,
    VaultDeliveryDetails,
    VaultItem,
    VaultLocation,
    VaultOrder,
)
from .lookups import CustomerLookup, ProductLookup, SupplierLookup
from .order import (
    Address,
    CreateOrderHeader,
    CreateOrderItem,
    CreateOrderRequest,
    Order,
    OrderItem,
    OrderStatus,
)
from .output import ErrorDetail, ErrorOutput, UpstreamRejectedOutput

__all__ = [
    "CamelModel",

    # Canonical models
    "Address",
    "CreateOrderHeader",
    "CreateOrderItem",
    "CreateOrderRequest",
    "Order",
    "OrderItem",
    "OrderStatus",

    # External supplier payloads
    "SpeedyAddress",
    "SpeedyLineItem",
    "SpeedyOrder",
    "VaultDeliveryDetails",
    "VaultItem",
    "VaultLocation",
    "VaultOrder",

    # Lookup responses
    "CustomerLookup",
    "ProductLookup",
    "SupplierLookup",

    # Output models
    "ErrorDetail",
    "ErrorOutput",
    "UpstreamRejectedOutput",
]
