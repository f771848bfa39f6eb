"""
Orders Lambda Function - Entry point for the order ingest API.

Delegates every API Gateway request (canonical, Speedy and Vault order
creation plus order reads) to the orders handler.
"""

import os
import sys
from typing import Any, Dict

# Make the order_ingest package importable from the deployment bundle
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from aws_lambda_powertools.utilities.typing import LambdaContext
from order_ingest.handlers.orders_handler import lambda_handler as orders_handler


def lambda_handler(event: Dict[str, Any], context: LambdaContext) -> Dict[str, Any]:
    """
    Lambda function entry point for the order ingest API.

    Args:
        event: Lambda event payload (API Gateway event)
        context: Lambda context object

    Returns:
        API Gateway response dictionary
    """
    return orders_handler(event, context)
