"""
Pytest configuration and shared fixtures for the order ingest service.

This module provides common test fixtures and configuration used across
unit and integration tests. The downstream order API is replaced by an
in-memory stub mounted on an httpx.MockTransport, so no test ever leaves
the process.
"""

import json
import os
from typing import Any, Callable, Dict, List, Optional, Tuple
from unittest.mock import Mock

import httpx
import pytest

# Handler modules read their settings at import time, so the environment
# has to be in place before any test module is collected.
os.environ.update({
    "ENVIRONMENT": "test",
    "APP_VERSION": "test-1.0.0",
    "ORDERS_API_BASE_URL": "https://orders.test/api",
    "HTTP_TIMEOUT_SECONDS": "5",
    "POWERTOOLS_SERVICE_NAME": "test-order-ingest",
    "POWERTOOLS_METRICS_NAMESPACE": "TestOrderIngest",
    "POWERTOOLS_TRACE_DISABLED": "true",  # Disable X-Ray in tests
    "LOG_LEVEL": "DEBUG",
    "DEBUG_MODE": "false",
})

API_BASE_URL = os.environ["ORDERS_API_BASE_URL"]

SPEEDY_PRODUCT_CODE = "550e8400-e29b-41d4-a716-446655440000"
SECOND_PRODUCT_CODE = "6fa459ea-ee8a-3ca4-894e-db77e160355e"

Route = Callable[[httpx.Request], httpx.Response]


class StubOrdersApi:
    """
    In-memory stand-in for the downstream order API.

    Routes are keyed on (method, raw path) so URL-encoded segments can be
    asserted exactly as they went over the wire. Unrouted requests get 404,
    which is also what the real API answers for unknown lookups.
    """

    def __init__(self) -> None:
        self.requests: List[httpx.Request] = []
        self.routes: Dict[Tuple[str, str], Route] = {}

    def route(
        self,
        method: str,
        path: str,
        status_code: int = 200,
        json_body: Any = None,
        text: Optional[str] = None,
        content: Optional[bytes] = None,
        error: Optional[Exception] = None,
    ) -> None:
        """Register a canned response (or a transport error) for a request."""

        def respond(request: httpx.Request) -> httpx.Response:
            if error is not None:
                raise error
            if content is not None:
                return httpx.Response(status_code, content=content)
            if text is not None:
                return httpx.Response(status_code, text=text)
            return httpx.Response(status_code, json=json_body)

        self.routes[(method.upper(), f"/api/{path.lstrip('/')}")] = respond

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        respond = self.routes.get((request.method, request.url.raw_path.decode()))
        if respond is None:
            return httpx.Response(404, text="Not Found")
        return respond(request)

    def calls_to(self, method: str, path: str) -> List[httpx.Request]:
        raw_path = f"/api/{path.lstrip('/')}"
        return [
            request for request in self.requests
            if request.method == method.upper() and request.url.raw_path.decode() == raw_path
        ]

    def submitted_orders(self) -> List[Dict[str, Any]]:
        """JSON bodies of every order POSTed downstream."""
        return [json.loads(request.content) for request in self.calls_to("POST", "orders")]


def created_order_body(order_id: int = 300, **overrides: Any) -> Dict[str, Any]:
    """Created order as the downstream API echoes it back."""
    body = {
        "id": order_id,
        "customerId": 5,
        "supplierId": 1,
        "supplierName": "Speedy",
        "orderDate": "2024-01-15T10:00:00Z",
        "customerEmail": None,
        "billingAddress": None,
        "deliveryAddress": None,
        "orderStatus": 0,
        "totalAmount": 19.0,
        "orderItems": [
            {
                "id": 1,
                "productId": 7,
                "productName": "Widget",
                "productCode": SPEEDY_PRODUCT_CODE,
                "quantity": 2,
                "price": 9.5,
            }
        ],
    }
    body.update(overrides)
    return body


# Sample data fixtures
@pytest.fixture
def speedy_payload() -> Dict[str, Any]:
    """Speedy courier order payload."""
    return {
        "customerId": 5,
        "orderTimestamp": "2024-01-15T10:00:00Z",
        "shipTo": {
            "streetAddress": "1 Dock Road",
            "city": "Leeds",
            "region": "West Yorkshire",
            "postCode": "LS1 1AA",
            "country": "UK",
        },
        "billTo": {
            "streetAddress": "9 High Street",
            "city": "York",
            "region": "North Yorkshire",
            "postCode": "YO1 7HH",
            "country": "UK",
        },
        "lineItems": [{"productId": 7, "qty": 2, "unitPrice": 9.5}],
    }


@pytest.fixture
def vault_payload() -> Dict[str, Any]:
    """Vault warehouse order payload."""
    return {
        "customerEmail": "x@y.com",
        "placedAt": 1705312800,
        "deliveryDetails": {
            "billingLocation": {
                "addressLine": "9 High Street",
                "cityName": "York",
                "stateProvince": "North Yorkshire",
                "zipPostal": "YO1 7HH",
                "countryCode": "GB",
            },
            "shippingLocation": {
                "addressLine": "1 Dock Road",
                "cityName": "Leeds",
                "stateProvince": "West Yorkshire",
                "zipPostal": "LS1 1AA",
                "countryCode": "GB",
            },
        },
        "items": [
            {"productCode": SPEEDY_PRODUCT_CODE, "quantityOrdered": 3, "pricePerUnit": 2.5},
        ],
    }


@pytest.fixture
def canonical_payload() -> Dict[str, Any]:
    """Canonical create-order payload."""
    return {
        "customerId": 5,
        "supplierId": 1,
        "orderDate": "2024-01-15T10:00:00Z",
        "customerEmail": "x@y.com",
        "orderItems": [{"productId": 7, "quantity": 2, "price": 9.5}],
    }


# Downstream API fixtures
@pytest.fixture
def stub_api() -> StubOrdersApi:
    """Stubbed downstream order API."""
    return StubOrdersApi()


@pytest.fixture
def http_client(stub_api):
    """Shared outbound client wired to the stubbed order API."""
    from order_ingest.dal import build_http_client

    client = build_http_client(
        base_url=API_BASE_URL,
        timeout_seconds=5.0,
        transport=httpx.MockTransport(stub_api.handle),
    )
    yield client
    client.close()


@pytest.fixture
def lookup_client(http_client):
    from order_ingest.dal import LookupClient

    return LookupClient(http_client)


@pytest.fixture
def orders_gateway(http_client):
    from order_ingest.dal import OrdersApiGateway

    return OrdersApiGateway(http_client)


@pytest.fixture
def order_pipeline(lookup_client, orders_gateway):
    from order_ingest.logic import OrderPipeline

    return OrderPipeline(lookups=lookup_client, gateway=orders_gateway)


# Lambda fixtures
@pytest.fixture
def api_gateway_event() -> Callable[..., Dict[str, Any]]:
    """Factory for API Gateway REST proxy events."""

    def make_event(
        method: str = "POST",
        path: str = "/api/orders",
        body: Any = None,
        request_id: str = "test-request-id-123",
    ) -> Dict[str, Any]:
        if body is not None and not isinstance(body, str):
            body = json.dumps(body)

        return {
            "httpMethod": method,
            "path": path,
            "resource": path,
            "headers": {
                "Content-Type": "application/json",
                "User-Agent": "test-agent/1.0",
            },
            "multiValueHeaders": {},
            "body": body,
            "requestContext": {
                "requestId": request_id,
                "accountId": "123456789012",
                "stage": "test",
                "httpMethod": method,
                "path": path,
                "protocol": "HTTP/1.1",
                "identity": {
                    "sourceIp": "127.0.0.1",
                    "userAgent": "test-agent/1.0",
                },
            },
            "pathParameters": None,
            "queryStringParameters": None,
            "multiValueQueryStringParameters": None,
            "stageVariables": None,
            "isBase64Encoded": False,
        }

    return make_event


@pytest.fixture
def lambda_context():
    """Create a mock Lambda context for testing."""
    context = Mock()
    context.function_name = "test-order-ingest-function"
    context.function_version = "1"
    context.invoked_function_arn = "arn:aws:lambda:us-east-1:123456789012:function:test-order-ingest-function"
    context.memory_limit_in_mb = "512"
    context.get_remaining_time_in_millis = lambda: 30000
    context.aws_request_id = "test-request-id-123"
    context.log_group_name = "/aws/lambda/test-order-ingest-function"
    context.log_stream_name = "2024/01/01/[$LATEST]test123"
    return context


@pytest.fixture(autouse=True)
def reset_metrics():
    """Drop metrics recorded outside a decorated handler between tests."""
    from order_ingest.handlers.utils.observability import metrics

    metrics.clear_metrics()
    yield
    metrics.clear_metrics()


# Pytest configuration
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
