"""Response shapes of the downstream lookup endpoints; unknown keys are ignored."""

from order_ingest.models.base import CamelModel


class SupplierLookup(CamelModel):
    id: int
    name: str


class CustomerLookup(CamelModel):
    id: int


class ProductLookup(CamelModel):
    id: int
