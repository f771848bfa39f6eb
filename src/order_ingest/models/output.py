"""
Output models for API responses using Pydantic.

Error bodies returned by the inbound trigger layer. Successful responses
carry the downstream order models directly.
"""

from typing import Annotated, Any

from pydantic import BaseModel, Field


class ErrorDetail(BaseModel):
    """Body of the "error" member of an error response."""

    code: Annotated[str, Field(
        description='Error code',
        examples=['VALIDATION_ERROR', 'UPSTREAM_REJECTED', 'UPSTREAM_UNAVAILABLE'],
    )]

    message: Annotated[str, Field(
        description='Human-readable error message',
        examples=['Invalid SupplierId.'],
    )]

    error_id: Annotated[str, Field(
        description='Unique identifier of this error occurrence',
    )]

    timestamp: Annotated[str, Field(
        description='ISO timestamp when the error occurred',
    )]

    field_errors: Annotated[list[dict[str, Any]] | None, Field(
        default=None,
        description='Per-field validation failures',
        examples=[[{'field': 'supplierId', 'message': 'Invalid SupplierId.'}]],
    )] = None

    details: Annotated[dict[str, Any] | None, Field(
        default=None,
        description='Operation context, only included in debug mode',
    )] = None


class ErrorOutput(BaseModel):
    """Standard error response model."""

    error: ErrorDetail


class UpstreamRejectedOutput(BaseModel):
    """Body returned when the downstream order API rejects a request."""

    message: Annotated[str, Field(
        default='Failed to create order.',
        description='Summary of the failure',
    )] = 'Failed to create order.'

    details: Annotated[str, Field(
        description='Raw response body from the downstream order API',
    )]
