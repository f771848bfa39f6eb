"""
Business Logic Layer Module.

Order ingestion logic: pure mapping from each supported supplier format to
the canonical create-order request, and the pipeline that sequences
validation, enrichment lookups, normalization and submission.
"""

from order_ingest.logic.address_mapping import speedy_address_to_address, vault_location_to_address
from order_ingest.logic.order_mapping import (
    SPEEDY_SUPPLIER_ID,
    VAULT_SUPPLIER_ID,
    speedy_to_create_order,
    vault_item_to_create_order_item,
    vault_to_create_order,
)
from order_ingest.logic.order_pipeline import OrderPipeline, OrderSource

__all__ = [
    "OrderPipeline",
    "OrderSource",
    "SPEEDY_SUPPLIER_ID",
    "VAULT_SUPPLIER_ID",
    "speedy_address_to_address",
    "speedy_to_create_order",
    "vault_item_to_create_order_item",
    "vault_location_to_address",
    "vault_to_create_order",
]
