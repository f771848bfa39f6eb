"""
REST API resolver for the order ingest handlers.

API Gateway REST resolver with CORS, plus the route paths every entry point
is registered under.
"""

from aws_lambda_powertools.event_handler import APIGatewayRestResolver, CORSConfig

from order_ingest.handlers.models.env_vars import get_handler_env_vars

# API path constants
ORDERS_PATH = '/api/orders'
SPEEDY_ORDERS_PATH = f'{ORDERS_PATH}/speedy'
VAULT_ORDERS_PATH = f'{ORDERS_PATH}/vault'

cors_config = CORSConfig(
    allow_origin=get_handler_env_vars().CORS_ALLOW_ORIGIN,
    max_age=600,
    allow_headers=["content-type", "authorization", "x-api-key"],
)

app = APIGatewayRestResolver(cors=cors_config)
