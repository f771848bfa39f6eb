"""
Orders Handler - Lambda function for the order ingest API.

Inbound trigger layer: decodes API Gateway requests, hands the body to the
order pipeline, and translates the pipeline's outcome (a created order or a
typed service error) into an HTTP response. No domain logic lives here.
"""

import functools
import json
from typing import Any, Dict, Optional

from aws_lambda_powertools.event_handler import Response, content_types
from aws_lambda_powertools.logging import correlation_paths
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.typing import LambdaContext

from order_ingest.dal import LookupClient, OrdersApiGateway, build_http_client
from order_ingest.handlers.models.env_vars import get_handler_env_vars
from order_ingest.handlers.utils.errors import (
    BaseServiceError,
    ErrorCategory,
    ErrorContext,
    ErrorSeverity,
    OrderValidationError,
    create_error_context,
    format_error_response,
    get_http_status_code,
    log_error_metrics,
)
from order_ingest.handlers.utils.observability import logger, metrics, tracer
from order_ingest.handlers.utils.rest_api_resolver import (
    ORDERS_PATH,
    SPEEDY_ORDERS_PATH,
    VAULT_ORDERS_PATH,
    app,
)
from order_ingest.logic.order_pipeline import OrderPipeline, OrderSource

settings = get_handler_env_vars()

# Built once per execution environment and shared by every invocation
http_client = build_http_client(
    base_url=settings.ORDERS_API_BASE_URL,
    timeout_seconds=settings.HTTP_TIMEOUT_SECONDS,
)
orders_gateway = OrdersApiGateway(http_client)
order_pipeline = OrderPipeline(lookups=LookupClient(http_client), gateway=orders_gateway)


def json_response(status_code: int, body: Any, headers: Optional[Dict[str, str]] = None) -> Response:
    """Create a JSON API Gateway response."""
    return Response(
        status_code=status_code,
        content_type=content_types.APPLICATION_JSON,
        body=body if isinstance(body, str) else json.dumps(body),
        headers=headers,
    )


def handle_service_errors(func):
    """Decorator to handle service errors and convert to HTTP responses."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except BaseServiceError as e:
            log_error_metrics(e)

            return json_response(
                status_code=get_http_status_code(e),
                body=format_error_response(e, include_details=settings.debug_enabled),
            )

        except Exception as e:
            logger.exception("Unexpected error in handler", extra={
                "error": str(e),
                "function_name": func.__name__,
            })

            metrics.add_metric(name="UnexpectedError", unit=MetricUnit.Count, value=1)

            unexpected_error = BaseServiceError(
                message="An unexpected error occurred",
                error_code="INTERNAL_SERVER_ERROR",
                severity=ErrorSeverity.CRITICAL,
                category=ErrorCategory.INFRASTRUCTURE,
            )

            return json_response(
                status_code=500,
                body=format_error_response(unexpected_error),
            )

    return wrapper


def _request_context(operation: str, resource_id: Optional[str] = None) -> ErrorContext:
    request_context = app.current_event.request_context
    request_id = request_context.request_id if request_context else "unknown"
    return create_error_context(
        request_id=request_id or "unknown",
        operation=operation,
        resource_id=resource_id,
    )


def _read_body(context: ErrorContext) -> Any:
    """Decode the JSON body; an absent or blank body decodes to None."""
    raw_body = app.current_event.body
    if raw_body is None or not raw_body.strip():
        return None

    try:
        return json.loads(raw_body)
    except json.JSONDecodeError as e:
        raise OrderValidationError(
            message="Invalid JSON format.",
            field_errors=[{"field": "body", "message": str(e)}],
            context=context,
        ) from e


def _ingest(source: OrderSource, operation: str) -> Response:
    context = _request_context(operation)
    logger.info("Create order request received", extra={"order_source": source.value})

    created = order_pipeline.ingest(source, _read_body(context), context=context)

    return json_response(
        status_code=201,
        body=created.to_json(),
        headers={"Location": f"{ORDERS_PATH}/{created.id}"},
    )


@app.post(ORDERS_PATH)
@tracer.capture_method
@handle_service_errors
def create_order() -> Response:
    """Create an order from a canonical create-order request."""
    return _ingest(OrderSource.CANONICAL, "create_order")


@app.post(SPEEDY_ORDERS_PATH)
@tracer.capture_method
@handle_service_errors
def create_speedy_order() -> Response:
    """Create an order from a Speedy courier payload."""
    return _ingest(OrderSource.SPEEDY, "create_speedy_order")


@app.post(VAULT_ORDERS_PATH)
@tracer.capture_method
@handle_service_errors
def create_vault_order() -> Response:
    """Create an order from a Vault warehouse payload."""
    return _ingest(OrderSource.VAULT, "create_vault_order")


@app.get(ORDERS_PATH)
@tracer.capture_method
@handle_service_errors
def list_orders() -> Response:
    """List every order known to the downstream order API."""
    context = _request_context("list_orders")

    orders = orders_gateway.list_orders(context=context)

    return json_response(
        status_code=200,
        body=[order.model_dump(mode="json", by_alias=True) for order in orders],
    )


@app.get(f"{ORDERS_PATH}/<order_id>")
@tracer.capture_method
@handle_service_errors
def get_order(order_id: str) -> Response:
    """Fetch a single order by id."""
    context = _request_context("get_order", resource_id=order_id)

    if not order_id.isdigit():
        raise OrderValidationError(
            message="Invalid order id.",
            field_errors=[{"field": "order_id", "message": "Order id must be a positive integer."}],
            context=context,
        )

    tracer.put_annotation("order_id", order_id)
    order = orders_gateway.get_order(int(order_id), context=context)

    return json_response(status_code=200, body=order.to_json())


@tracer.capture_lambda_handler
@logger.inject_lambda_context(correlation_id_path=correlation_paths.API_GATEWAY_REST)
@metrics.log_metrics(capture_cold_start_metric=True)
def lambda_handler(event: Dict[str, Any], context: LambdaContext) -> Dict[str, Any]:
    """
    Main Lambda handler function.

    Args:
        event: API Gateway REST event
        context: Lambda context object

    Returns:
        API Gateway response
    """
    try:
        metrics.add_metric(name="RequestCount", unit=MetricUnit.Count, value=1)
        tracer.put_annotation("environment", settings.ENVIRONMENT)
        tracer.put_annotation("app_version", settings.APP_VERSION)

        return app.resolve(event, context)

    except Exception as e:
        metrics.add_metric(name="RequestError", unit=MetricUnit.Count, value=1)

        logger.exception("Unhandled error in lambda handler", extra={"error": str(e)})

        return {
            "statusCode": 500,
            "headers": {"Content-Type": content_types.APPLICATION_JSON},
            "body": json.dumps({
                "error": {
                    "code": "INTERNAL_SERVER_ERROR",
                    "message": "An unexpected error occurred",
                    "error_id": context.aws_request_id,
                }
            }),
        }
