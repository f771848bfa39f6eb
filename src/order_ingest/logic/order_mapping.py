"""
Supplier order payloads to canonical create-order requests.

The mapping functions are pure: they never perform lookups themselves, so
any enrichment (supplier name, customer id, product ids) is resolved by the
caller and passed in. Identical inputs always give equal outputs.
"""

from datetime import datetime, timezone
from typing import Optional

from order_ingest.logic.address_mapping import speedy_address_to_address, vault_location_to_address
from order_ingest.models.external import SpeedyLineItem, SpeedyOrder, VaultItem, VaultOrder
from order_ingest.models.order import CreateOrderItem, CreateOrderRequest, OrderStatus

# Supplier ids are fixed per source format
SPEEDY_SUPPLIER_ID = 1
VAULT_SUPPLIER_ID = 2


def speedy_item_to_create_order_item(item: SpeedyLineItem) -> CreateOrderItem:
    return CreateOrderItem(
        product_id=item.product_id,
        quantity=item.qty,
        price=item.unit_price,
    )


def speedy_to_create_order(order: SpeedyOrder, supplier_name: str) -> CreateOrderRequest:
    """
    Map a Speedy courier order onto the canonical create-order request.

    Speedy line items already carry internal product ids, so no product
    lookup is needed. Speedy sends no customer email.

    Args:
        order: Parsed Speedy payload
        supplier_name: Resolved supplier name (enrichment only, not submitted)

    Returns:
        Canonical create-order request for supplier 1
    """
    return CreateOrderRequest(
        customer_id=order.customer_id,
        supplier_id=SPEEDY_SUPPLIER_ID,
        order_date=order.order_timestamp,
        customer_email=None,
        billing_address=speedy_address_to_address(order.bill_to),
        delivery_address=speedy_address_to_address(order.ship_to),
        order_status=OrderStatus.RECEIVED,
        order_items=[speedy_item_to_create_order_item(item) for item in order.line_items or []],
    )


def vault_item_to_create_order_item(item: VaultItem, product_id: int) -> CreateOrderItem:
    """Build a canonical line item once the Vault product code has been resolved."""
    return CreateOrderItem(
        product_id=product_id,
        quantity=item.quantity_ordered,
        price=item.price_per_unit,
    )


def vault_to_create_order(
    order: VaultOrder,
    customer_id: Optional[int],
    order_items: list[CreateOrderItem],
) -> CreateOrderRequest:
    """
    Map a Vault warehouse order onto the canonical create-order request.

    Args:
        order: Parsed Vault payload
        customer_id: Customer id resolved from the order's email
        order_items: Line items with product codes already resolved, used as-is

    Returns:
        Canonical create-order request for supplier 2
    """
    details = order.delivery_details

    return CreateOrderRequest(
        customer_id=customer_id,
        supplier_id=VAULT_SUPPLIER_ID,
        order_date=datetime.fromtimestamp(order.placed_at, tz=timezone.utc),
        customer_email=order.customer_email,
        billing_address=vault_location_to_address(details.billing_location if details else None),
        delivery_address=vault_location_to_address(details.shipping_location if details else None),
        order_status=OrderStatus.RECEIVED,
        order_items=order_items,
    )
