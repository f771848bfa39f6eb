"""
Gateway to the downstream order API.

Submits canonical create-order requests and proxies order reads. Every
outcome other than success is raised as a typed service error; nothing is
retried.
"""

from typing import Any, Optional

import httpx
from aws_lambda_powertools.metrics import MetricUnit
from pydantic import TypeAdapter, ValidationError

from order_ingest.handlers.utils.errors import (
    DeserializationFailedError,
    ErrorContext,
    OrderNotFoundError,
    TransportFailureError,
    UpstreamRejectedError,
)
from order_ingest.handlers.utils.observability import logger, metrics, tracer
from order_ingest.models.order import CreateOrderRequest, Order

ORDERS_PATH = 'orders'

_order_list = TypeAdapter(list[Order])


class OrdersApiGateway:
    """Thin client for the downstream order API's /orders resource."""

    def __init__(self, http_client: httpx.Client) -> None:
        """
        Initialize the gateway.

        Args:
            http_client: Shared outbound client, base URL already set
        """
        self.http_client = http_client

    def _send(
        self,
        method: str,
        path: str,
        context: Optional[ErrorContext] = None,
        **kwargs: Any,
    ) -> httpx.Response:
        try:
            return self.http_client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            logger.error("Error calling downstream order API", extra={
                "method": method,
                "path": path,
                "error": str(e),
            })
            metrics.add_metric(name="UpstreamUnavailable", unit=MetricUnit.Count, value=1)
            raise TransportFailureError(
                message=f"Error calling downstream order API: {e}",
                context=context,
            ) from e

    @staticmethod
    def _decode(response: httpx.Response, context: Optional[ErrorContext]) -> Any:
        # Malformed JSON and non-UTF-8 bodies both raise ValueError subclasses
        try:
            return response.json()
        except ValueError as e:
            logger.error("Error deserializing downstream response", extra={
                "status_code": response.status_code,
                "error": str(e),
            })
            raise DeserializationFailedError(
                message=f"Error deserializing JSON response: {e}",
                context=context,
            ) from e

    @staticmethod
    def _reject(
        response: httpx.Response,
        summary: str,
        context: Optional[ErrorContext],
    ) -> UpstreamRejectedError:
        logger.error("Downstream order API returned error", extra={
            "status_code": response.status_code,
        })
        metrics.add_metric(name="UpstreamRejected", unit=MetricUnit.Count, value=1)
        return UpstreamRejectedError(
            status_code=response.status_code,
            body=response.text,
            summary=summary,
            context=context,
        )

    @tracer.capture_method
    def submit_order(
        self,
        request: CreateOrderRequest,
        context: Optional[ErrorContext] = None,
    ) -> Order:
        """
        Submit a canonical create-order request.

        Args:
            request: Canonical order, serialized with camelCase field names
            context: Error context for tracing

        Returns:
            The created order as echoed by the downstream API

        Raises:
            UpstreamRejectedError: Downstream responded with a non-success status
            TransportFailureError: Downstream could not be reached
            DeserializationFailedError: Success status but unparseable body
        """
        payload = request.to_json()
        logger.debug("Sending order to downstream API", extra={"payload": payload})

        response = self._send(
            'POST',
            ORDERS_PATH,
            context=context,
            content=payload,
            headers={'Content-Type': 'application/json'},
        )

        if not response.is_success:
            raise self._reject(response, "Failed to create order.", context)

        body = self._decode(response, context)
        try:
            created = Order.model_validate(body)
        except ValidationError as e:
            raise DeserializationFailedError(
                message=f"Unexpected created order shape: {e.error_count()} error(s)",
                context=context,
            ) from e

        logger.info("Downstream order created", extra={"order_id": created.id})
        return created

    @tracer.capture_method
    def list_orders(self, context: Optional[ErrorContext] = None) -> list[Order]:
        """Fetch every order known to the downstream API."""
        response = self._send('GET', ORDERS_PATH, context=context)

        if not response.is_success:
            raise self._reject(response, "Failed to retrieve orders.", context)

        body = self._decode(response, context)
        try:
            orders = _order_list.validate_python(body or [])
        except ValidationError as e:
            raise DeserializationFailedError(
                message=f"Unexpected order list shape: {e.error_count()} error(s)",
                context=context,
            ) from e

        logger.info("Retrieved orders", extra={"count": len(orders)})
        return orders

    @tracer.capture_method
    def get_order(self, order_id: int, context: Optional[ErrorContext] = None) -> Order:
        """
        Fetch a single order.

        Raises:
            OrderNotFoundError: Downstream answered 404
        """
        response = self._send('GET', f'{ORDERS_PATH}/{order_id}', context=context)

        if response.status_code == httpx.codes.NOT_FOUND:
            logger.warning("Order not found", extra={"order_id": order_id})
            raise OrderNotFoundError(order_id=str(order_id), context=context)
        if not response.is_success:
            raise self._reject(response, "Failed to retrieve order.", context)

        body = self._decode(response, context)
        try:
            return Order.model_validate(body)
        except ValidationError as e:
            raise DeserializationFailedError(
                message=f"Unexpected order shape: {e.error_count()} error(s)",
                context=context,
            ) from e
