"""
Shared outbound HTTP client.

One httpx.Client is built per Lambda execution environment and handed to
every downstream collaborator. It pools connections across invocations, so
it must never be built per request.
"""

from typing import Optional

import httpx

from order_ingest.handlers.utils.observability import logger

DEFAULT_HEADERS = {'Accept': 'application/json'}


def build_http_client(
    base_url: str,
    timeout_seconds: float = 30.0,
    transport: Optional[httpx.BaseTransport] = None,
) -> httpx.Client:
    """
    Build the long-lived client used for lookups and order submission.

    Args:
        base_url: Base URL of the downstream order API
        timeout_seconds: Default timeout applied to every request
        transport: Optional transport override, tests pass an httpx.MockTransport

    Returns:
        Configured httpx client
    """
    logger.info("Outbound HTTP client configured", extra={
        "base_url": base_url,
        "timeout_seconds": timeout_seconds,
    })

    return httpx.Client(
        base_url=base_url,
        timeout=timeout_seconds,
        headers=DEFAULT_HEADERS,
        transport=transport,
    )
