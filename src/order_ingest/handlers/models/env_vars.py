"""
Environment variable models for type-safe configuration.

Settings for the order ingest handlers, read once per execution environment
through aws-lambda-env-modeler so a misconfigured deployment fails at cold
start instead of on the first request.
"""

from typing import Annotated

from aws_lambda_env_modeler import get_environment_variables
from pydantic import BaseModel, ConfigDict, Field


class OrderIngestEnvVars(BaseModel):
    """Environment variables for the order ingest handlers."""

    model_config = ConfigDict(frozen=True)

    # Downstream order API, lookups hang off the same base
    ORDERS_API_BASE_URL: Annotated[str, Field(
        default='http://localhost:5143/api',
        description='Base URL of the downstream order API',
        pattern=r'^https?://',
    )] = 'http://localhost:5143/api'

    HTTP_TIMEOUT_SECONDS: Annotated[float, Field(
        default=30.0,
        description='Default timeout for every outbound request, in seconds',
        gt=0,
        le=900,
    )] = 30.0

    # Environment name (dev, staging, prod, test)
    ENVIRONMENT: Annotated[str, Field(
        default='dev',
        description='Deployment environment name',
        pattern=r'^(dev|staging|prod|test)$'
    )] = 'dev'

    APP_VERSION: Annotated[str, Field(
        default='1.0.0',
        description='Application version string'
    )] = '1.0.0'

    POWERTOOLS_SERVICE_NAME: Annotated[str, Field(
        default='order-ingest',
        description='Service name for AWS Powertools'
    )] = 'order-ingest'

    LOG_LEVEL: Annotated[str, Field(
        default='INFO',
        description='Log level for application logging',
        pattern=r'^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$'
    )] = 'INFO'

    CORS_ALLOW_ORIGIN: Annotated[str, Field(
        default='*',
        description='CORS allowed origins for API responses'
    )] = '*'

    # Include operation context in error bodies
    DEBUG_MODE: Annotated[str, Field(
        default='false',
        description='Expose error context details in responses (true/false)',
        pattern=r'^(true|false)$'
    )] = 'false'

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.ENVIRONMENT == 'prod'

    @property
    def debug_enabled(self) -> bool:
        """Check if error details should be returned to callers."""
        return self.DEBUG_MODE.lower() == 'true' and not self.is_production


def get_handler_env_vars() -> OrderIngestEnvVars:
    """
    Get typed environment variables for the handlers.

    Returns:
        Validated environment variables model instance
    """
    return get_environment_variables(model=OrderIngestEnvVars)
