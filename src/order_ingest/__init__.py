"""
Order Ingest Service Module.

Serverless order ingestion in front of an external order REST API. Orders
arrive in one of three formats (canonical, Speedy courier, Vault
warehouse), are normalized into a single canonical create-order request,
enriched through lookups against the same API, and submitted downstream.

Layers:

- handlers: API Gateway entry points and error translation
- logic: format mapping and the ingestion pipeline
- dal: shared HTTP client, enrichment lookups and the order API gateway
- models: Pydantic models for every payload on the wire
"""

__version__ = "1.0.0"
__description__ = "Multi-format order ingestion for an external order API"

from order_ingest.handlers.utils.observability import logger, metrics, tracer
from order_ingest.models.order import CreateOrderRequest, Order, OrderStatus

__all__ = [
    "CreateOrderRequest",
    "Order",
    "OrderStatus",
    "logger",
    "tracer",
    "metrics",
]
