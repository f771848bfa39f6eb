"""
AWS Lambda Handlers Module.

Entry points for the order ingest API. The handler layer only deals with
request decoding, response encoding and error translation; the work is
delegated to the logic layer (order pipeline) and the downstream access
layer (lookups and the order API gateway).

The handlers use AWS Lambda Powertools for:
- Structured logging with correlation IDs
- Distributed tracing with X-Ray
- Custom metrics collection
- API Gateway REST routing
"""

from order_ingest.handlers.utils.observability import logger, metrics, tracer
from order_ingest.handlers.utils.rest_api_resolver import (
    ORDERS_PATH,
    SPEEDY_ORDERS_PATH,
    VAULT_ORDERS_PATH,
    app,
)

__all__ = [
    "logger",
    "tracer",
    "metrics",
    "app",
    "ORDERS_PATH",
    "SPEEDY_ORDERS_PATH",
    "VAULT_ORDERS_PATH",
]
