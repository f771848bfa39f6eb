"""
Enrichment lookups against the downstream order API.

Every lookup is soft at this layer: a network error, a non-success status
and an unparseable body all collapse into "not found" (or a placeholder
name). Whether absence is fatal is decided by the caller.
"""

from typing import Optional, TypeVar
from urllib.parse import quote
from uuid import UUID

import httpx
from aws_lambda_powertools.metrics import MetricUnit
from pydantic import BaseModel, ValidationError

from order_ingest.handlers.utils.observability import logger, metrics, tracer
from order_ingest.models.lookups import CustomerLookup, ProductLookup, SupplierLookup

UNKNOWN_SUPPLIER = 'Unknown Supplier'

LookupModel = TypeVar('LookupModel', bound=BaseModel)


class LookupClient:
    """Resolves supplier names, customer ids and product ids."""

    def __init__(self, http_client: httpx.Client) -> None:
        """
        Initialize the lookup client.

        Args:
            http_client: Shared outbound client, base URL already set
        """
        self.http_client = http_client

    def _fetch(self, path: str, model: type[LookupModel]) -> Optional[LookupModel]:
        try:
            response = self.http_client.get(path)
        except httpx.HTTPError as e:
            logger.warning("Lookup request failed", extra={"path": path, "error": str(e)})
            metrics.add_metric(name="LookupFailed", unit=MetricUnit.Count, value=1)
            return None

        if not response.is_success:
            logger.warning("Lookup returned non-success status", extra={
                "path": path,
                "status_code": response.status_code,
            })
            metrics.add_metric(name="LookupFailed", unit=MetricUnit.Count, value=1)
            return None

        # ValueError covers both malformed JSON and bodies that are not UTF-8
        try:
            return model.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            logger.warning("Lookup response could not be parsed", extra={"path": path, "error": str(e)})
            metrics.add_metric(name="LookupFailed", unit=MetricUnit.Count, value=1)
            return None

    @tracer.capture_method
    def resolve_supplier_name(self, supplier_id: int) -> str:
        """
        Look up a supplier's display name.

        Args:
            supplier_id: Internal supplier identifier

        Returns:
            The supplier name, or "Unknown Supplier" if it couldn't be resolved
        """
        supplier = self._fetch(f'suppliers/{supplier_id}', SupplierLookup)
        if supplier is None:
            return UNKNOWN_SUPPLIER
        return supplier.name

    @tracer.capture_method
    def resolve_customer_id(self, email: str) -> Optional[int]:
        """
        Look up the internal customer id registered for an email address.

        Args:
            email: Customer email, URL-encoded into the path

        Returns:
            The customer id, or None if not found
        """
        customer = self._fetch(f'customers/by-email/{quote(email, safe="")}', CustomerLookup)
        return customer.id if customer else None

    @tracer.capture_method
    def resolve_product_id(self, product_code: UUID | str) -> Optional[int]:
        """
        Look up the internal product id for a supplier product code.

        Args:
            product_code: Opaque product code (UUID)

        Returns:
            The product id, or None if not found
        """
        product = self._fetch(f'products/by-code/{product_code}', ProductLookup)
        return product.id if product else None
