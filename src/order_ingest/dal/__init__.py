"""
Downstream access layer for the order ingest service.

Collaborators that talk to the downstream order API over the shared HTTP
client. The protocols let the business logic layer accept any object with
the same shape, which keeps the pipeline testable with stubs.
"""

from typing import Optional, Protocol, runtime_checkable
from uuid import UUID

from order_ingest.dal.http_client import build_http_client
from order_ingest.dal.lookup_client import UNKNOWN_SUPPLIER, LookupClient
from order_ingest.dal.orders_api import OrdersApiGateway
from order_ingest.handlers.utils.errors import ErrorContext
from order_ingest.models.order import CreateOrderRequest, Order


@runtime_checkable
class EnrichmentLookups(Protocol):
    """Soft lookups used to enrich inbound orders."""

    def resolve_supplier_name(self, supplier_id: int) -> str:
        ...

    def resolve_customer_id(self, email: str) -> Optional[int]:
        ...

    def resolve_product_id(self, product_code: UUID | str) -> Optional[int]:
        ...


@runtime_checkable
class OrderSubmitter(Protocol):
    """Submits canonical orders to the downstream order API."""

    def submit_order(self, request: CreateOrderRequest, context: Optional[ErrorContext] = None) -> Order:
        ...


__all__ = [
    'EnrichmentLookups',
    'OrderSubmitter',
    'LookupClient',
    'OrdersApiGateway',
    'UNKNOWN_SUPPLIER',
    'build_http_client',
]
