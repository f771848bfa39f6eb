"""
Order ingestion pipeline.

Takes an already-decoded request body in one of the supported formats and
runs it through parse -> structural validation -> enrichment lookups ->
normalization -> submission. Each step either hands its result to the next
or raises a typed service error; nothing is retried and nothing is
partially submitted.
"""

from enum import Enum
from typing import Any, Callable, Optional, TypeVar

from aws_lambda_powertools.metrics import MetricUnit
from pydantic import BaseModel, ValidationError

from order_ingest.dal import EnrichmentLookups, OrderSubmitter
from order_ingest.handlers.utils.errors import ErrorContext, OrderValidationError
from order_ingest.handlers.utils.observability import logger, metrics, tracer
from order_ingest.logic.order_mapping import (
    SPEEDY_SUPPLIER_ID,
    speedy_to_create_order,
    vault_item_to_create_order_item,
    vault_to_create_order,
)
from order_ingest.models.external import SpeedyOrder, VaultItem, VaultOrder
from order_ingest.models.order import CreateOrderHeader, CreateOrderItem, CreateOrderRequest, Order

ParsedModel = TypeVar('ParsedModel', bound=BaseModel)

BODY_REQUIRED = "Request body is required."
NO_ITEMS = "Order must contain at least one item."


class OrderSource(str, Enum):
    """Inbound order format, one per entry point."""

    CANONICAL = 'canonical'
    SPEEDY = 'speedy'
    VAULT = 'vault'


def _field_errors(error: ValidationError) -> list[dict[str, Any]]:
    field_errors = []
    for detail in error.errors():
        field_error = {
            "field": ".".join(str(part) for part in detail["loc"]) or "body",
            "message": detail["msg"],
        }
        # Echo the rejected value when it is a plain scalar
        if isinstance(detail.get("input"), (str, int, float, bool)):
            field_error["value"] = detail["input"]
        field_errors.append(field_error)
    return field_errors


class OrderPipeline:
    """Validates, enriches, normalizes and submits inbound orders."""

    def __init__(self, lookups: EnrichmentLookups, gateway: OrderSubmitter) -> None:
        """
        Initialize the pipeline.

        Args:
            lookups: Soft enrichment lookups (supplier, customer, product)
            gateway: Submits the canonical order downstream
        """
        self.lookups = lookups
        self.gateway = gateway
        self._dispatch: dict[OrderSource, Callable[[Any, Optional[ErrorContext]], Order]] = {
            OrderSource.CANONICAL: self.create_order,
            OrderSource.SPEEDY: self.create_speedy_order,
            OrderSource.VAULT: self.create_vault_order,
        }

    def ingest(
        self,
        source: OrderSource,
        payload: Any,
        context: Optional[ErrorContext] = None,
    ) -> Order:
        """
        Run the pipeline for the given inbound format.

        Args:
            source: Which format the payload is in
            payload: Decoded JSON body, None when the request had no body
            context: Error context for tracing

        Returns:
            The order created by the downstream API
        """
        source = OrderSource(source)
        tracer.put_annotation("order_source", source.value)
        return self._dispatch[source](payload, context)

    @staticmethod
    def _parse(
        model: type[ParsedModel],
        payload: Any,
        context: Optional[ErrorContext],
    ) -> ParsedModel:
        if payload is None:
            raise OrderValidationError(message=BODY_REQUIRED, context=context)

        try:
            return model.model_validate(payload)
        except ValidationError as e:
            logger.warning("Request body failed schema validation", extra={
                "model": model.__name__,
                "error_count": e.error_count(),
            })
            raise OrderValidationError(
                message="Request validation failed.",
                field_errors=_field_errors(e),
                context=context,
            ) from e

    @staticmethod
    def _reject(
        message: str,
        field: str,
        context: Optional[ErrorContext],
    ) -> OrderValidationError:
        metrics.add_metric(name="OrderValidationFailed", unit=MetricUnit.Count, value=1)
        return OrderValidationError(
            message=message,
            field_errors=[{"field": field, "message": message}],
            context=context,
        )

    def _submit(
        self,
        request: CreateOrderRequest,
        source: OrderSource,
        context: Optional[ErrorContext],
    ) -> Order:
        tracer.put_annotation("supplier_id", request.supplier_id)

        created = self.gateway.submit_order(request, context=context)

        metrics.add_metric(name="OrderCreated", unit=MetricUnit.Count, value=1)
        logger.info("Order created", extra={
            "order_id": created.id,
            "order_source": source.value,
            "supplier_id": request.supplier_id,
            "item_count": len(request.order_items),
        })
        return created

    @tracer.capture_method
    def create_order(self, payload: Any, context: Optional[ErrorContext] = None) -> Order:
        """Submit an order that is already in the canonical format."""
        if payload is None:
            raise OrderValidationError(message=BODY_REQUIRED, context=context)

        # The supplier is checked ahead of the full schema, whatever the items hold
        try:
            header = CreateOrderHeader.model_validate(payload)
        except ValidationError:
            header = None
        if header is not None and (header.supplier_id is None or header.supplier_id <= 0):
            raise self._reject("Invalid SupplierId.", "supplierId", context)

        request = self._parse(CreateOrderRequest, payload, context)
        if not request.order_items:
            raise self._reject(NO_ITEMS, "orderItems", context)

        return self._submit(request, OrderSource.CANONICAL, context)

    @tracer.capture_method
    def create_speedy_order(self, payload: Any, context: Optional[ErrorContext] = None) -> Order:
        """
        Ingest a Speedy courier order.

        The supplier name lookup is soft: when it fails the pipeline carries
        on with the "Unknown Supplier" placeholder.
        """
        speedy_order = self._parse(SpeedyOrder, payload, context)

        if speedy_order.customer_id is None or speedy_order.customer_id <= 0:
            raise self._reject("Invalid CustomerId.", "customerId", context)
        if not speedy_order.line_items:
            raise self._reject(NO_ITEMS, "lineItems", context)

        supplier_name = self.lookups.resolve_supplier_name(SPEEDY_SUPPLIER_ID)
        logger.info("Resolved Speedy supplier", extra={"supplier_name": supplier_name})

        try:
            request = speedy_to_create_order(speedy_order, supplier_name)
        except ValidationError as e:
            raise OrderValidationError(
                message="Order could not be normalized.",
                field_errors=_field_errors(e),
                context=context,
            ) from e

        return self._submit(request, OrderSource.SPEEDY, context)

    def _resolve_vault_items(
        self,
        items: list[VaultItem],
        context: Optional[ErrorContext],
    ) -> list[CreateOrderItem]:
        # Sequential, in input order; the first unresolved code aborts the order
        resolved = []
        for index, item in enumerate(items):
            product_id = self.lookups.resolve_product_id(item.product_code)
            if product_id is None:
                logger.warning("Product code could not be resolved", extra={
                    "product_code": str(item.product_code),
                    "item_index": index,
                })
                raise self._reject(
                    f"Product not found for code '{item.product_code}'.",
                    f"items.{index}.productCode",
                    context,
                )
            resolved.append(vault_item_to_create_order_item(item, product_id))
        return resolved

    @tracer.capture_method
    def create_vault_order(self, payload: Any, context: Optional[ErrorContext] = None) -> Order:
        """
        Ingest a Vault warehouse order.

        Both the customer lookup and the per-item product lookups are hard:
        an unresolved email or product code rejects the whole order before
        anything is submitted.
        """
        vault_order = self._parse(VaultOrder, payload, context)

        email = (vault_order.customer_email or "").strip()
        if not email:
            raise self._reject("CustomerEmail is required.", "customerEmail", context)
        if not vault_order.items:
            raise self._reject(NO_ITEMS, "items", context)

        customer_id = self.lookups.resolve_customer_id(email)
        if customer_id is None:
            logger.warning("Customer email could not be resolved", extra={"customer_email": email})
            raise self._reject(
                f"Customer not found for email '{email}'.",
                "customerEmail",
                context,
            )

        order_items = self._resolve_vault_items(vault_order.items, context)

        try:
            request = vault_to_create_order(vault_order, customer_id, order_items)
        except ValidationError as e:
            raise OrderValidationError(
                message="Order could not be normalized.",
                field_errors=_field_errors(e),
                context=context,
            ) from e

        return self._submit(request, OrderSource.VAULT, context)
