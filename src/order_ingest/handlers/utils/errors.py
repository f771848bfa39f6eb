"""
Error taxonomy and response helpers for the order ingest service.

Every failure the pipeline can produce is raised as a subclass of
BaseServiceError. The handler layer turns them into API Gateway responses
with the helpers at the bottom of this module.
"""

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional

from aws_lambda_powertools.metrics import MetricUnit
from pydantic import BaseModel, Field

from order_ingest.handlers.utils.observability import logger, metrics, tracer
from order_ingest.models.output import ErrorDetail, ErrorOutput, UpstreamRejectedOutput


class ErrorSeverity(str, Enum):
    """Error severity levels for classification."""
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"


class ErrorCategory(str, Enum):
    """Error categories for classification."""
    VALIDATION = "VALIDATION"
    BUSINESS_LOGIC = "BUSINESS_LOGIC"
    EXTERNAL_SERVICE = "EXTERNAL_SERVICE"
    INFRASTRUCTURE = "INFRASTRUCTURE"


class ErrorContext(BaseModel):
    """Context information for errors."""

    request_id: str = Field(description="Unique request identifier")
    operation: str = Field(description="Operation being performed")
    resource_id: Optional[str] = Field(default=None, description="Resource identifier")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    additional_data: Dict[str, Any] = Field(default_factory=dict)


class BaseServiceError(Exception):
    """Base exception class for service errors."""

    def __init__(
        self,
        message: str,
        error_code: str,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        category: ErrorCategory = ErrorCategory.BUSINESS_LOGIC,
        context: Optional[ErrorContext] = None,
        user_message: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.severity = severity
        self.category = category
        self.context = context
        self.user_message = user_message or "An error occurred while processing your request."
        self.error_id = str(uuid.uuid4())

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for logging and response."""
        return {
            "error_id": self.error_id,
            "error_code": self.error_code,
            "message": self.message,
            "user_message": self.user_message,
            "severity": self.severity.value,
            "category": self.category.value,
            "context": self.context.model_dump(mode="json") if self.context else None,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }


class OrderValidationError(BaseServiceError):
    """
    Raised when client input can't become an order.

    Covers a missing body, malformed JSON, missing or invalid required
    fields, an empty item list, and a hard lookup (customer by email,
    product by code) that found nothing.
    """

    def __init__(
        self,
        message: str,
        field_errors: Optional[List[Dict[str, Any]]] = None,
        context: Optional[ErrorContext] = None,
    ):
        super().__init__(
            message=message,
            error_code="VALIDATION_ERROR",
            severity=ErrorSeverity.LOW,
            category=ErrorCategory.VALIDATION,
            context=context,
            user_message=message,
        )
        self.field_errors = field_errors or []


class UpstreamRejectedError(BaseServiceError):
    """Raised when the downstream order API answers with a non-success status."""

    def __init__(
        self,
        status_code: int,
        body: str,
        summary: str = "Failed to create order.",
        context: Optional[ErrorContext] = None,
    ):
        super().__init__(
            message=f"Downstream order API returned {status_code}",
            error_code="UPSTREAM_REJECTED",
            severity=ErrorSeverity.MEDIUM,
            category=ErrorCategory.EXTERNAL_SERVICE,
            context=context,
            user_message=summary,
        )
        self.status_code = status_code
        self.body = body


class TransportFailureError(BaseServiceError):
    """Raised when the downstream order API can't be reached at all."""

    def __init__(
        self,
        message: str,
        context: Optional[ErrorContext] = None,
    ):
        super().__init__(
            message=message,
            error_code="UPSTREAM_UNAVAILABLE",
            severity=ErrorSeverity.HIGH,
            category=ErrorCategory.EXTERNAL_SERVICE,
            context=context,
            user_message="The order service is temporarily unavailable. Please try again later.",
        )


class DeserializationFailedError(BaseServiceError):
    """Raised when a successful downstream response body can't be parsed."""

    def __init__(
        self,
        message: str,
        context: Optional[ErrorContext] = None,
    ):
        super().__init__(
            message=message,
            error_code="UPSTREAM_RESPONSE_INVALID",
            severity=ErrorSeverity.HIGH,
            category=ErrorCategory.INFRASTRUCTURE,
            context=context,
            user_message="An internal error occurred while processing the order service response.",
        )


class OrderNotFoundError(BaseServiceError):
    """Raised when the downstream order API has no order with the given id."""

    def __init__(
        self,
        order_id: str,
        context: Optional[ErrorContext] = None,
    ):
        super().__init__(
            message=f"Order with ID {order_id} not found.",
            error_code="RESOURCE_NOT_FOUND",
            severity=ErrorSeverity.LOW,
            category=ErrorCategory.BUSINESS_LOGIC,
            context=context,
            user_message=f"Order with ID {order_id} not found.",
        )
        self.order_id = order_id


def create_error_context(
    request_id: str,
    operation: str,
    resource_id: Optional[str] = None,
    **additional_data: Any,
) -> ErrorContext:
    """Create an error context for consistent error handling."""
    return ErrorContext(
        request_id=request_id,
        operation=operation,
        resource_id=resource_id,
        additional_data=additional_data,
    )


@tracer.capture_method
def log_error_metrics(error: BaseServiceError) -> None:
    """Log error metrics for monitoring and alerting."""

    metrics.add_metric(name="ErrorCount", unit=MetricUnit.Count, value=1)
    metrics.add_metric(name=f"Error{error.category.value}Count", unit=MetricUnit.Count, value=1)

    tracer.put_annotation("error_code", error.error_code)
    tracer.put_annotation("error_category", error.category.value)
    tracer.put_metadata("error_details", error.to_dict())

    log = logger.warning if error.severity in (ErrorSeverity.LOW, ErrorSeverity.MEDIUM) else logger.error
    log(
        "Service error occurred",
        extra={
            "error_id": error.error_id,
            "error_code": error.error_code,
            "error_severity": error.severity.value,
            "error_category": error.category.value,
            "error_message": error.message,
            "context": error.context.model_dump(mode="json") if error.context else None,
        }
    )


def format_error_response(
    error: BaseServiceError,
    include_details: bool = False,
) -> Dict[str, Any]:
    """Format error for API response."""

    if isinstance(error, UpstreamRejectedError):
        return UpstreamRejectedOutput(message=error.user_message, details=error.body).model_dump()

    detail = ErrorDetail(
        code=error.error_code,
        message=error.user_message,
        error_id=error.error_id,
        timestamp=datetime.now(timezone.utc).isoformat(),
    )

    if include_details and error.context:
        detail.details = {
            "operation": error.context.operation,
            "resource_id": error.context.resource_id,
        }

    if isinstance(error, OrderValidationError) and error.field_errors:
        detail.field_errors = error.field_errors

    return ErrorOutput(error=detail).model_dump(exclude_none=True)


def get_http_status_code(error: BaseServiceError) -> int:
    """Get appropriate HTTP status code for error."""

    # Downstream rejections keep the downstream status
    if isinstance(error, UpstreamRejectedError):
        return error.status_code

    status_mapping = {
        "VALIDATION_ERROR": 400,
        "RESOURCE_NOT_FOUND": 404,
        "UPSTREAM_UNAVAILABLE": 503,
        "UPSTREAM_RESPONSE_INVALID": 500,
    }

    return status_mapping.get(error.error_code, 500)
