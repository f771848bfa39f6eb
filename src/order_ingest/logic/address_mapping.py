"""Supplier address shapes to the canonical Address. Absent in, absent out."""

from typing import Optional

from order_ingest.models.external import SpeedyAddress, VaultLocation
from order_ingest.models.order import Address


def speedy_address_to_address(address: Optional[SpeedyAddress]) -> Optional[Address]:
    """Speedy calls the county "region" and the postal code "postCode"."""
    if address is None:
        return None

    return Address(
        street=address.street_address,
        city=address.city,
        county=address.region,
        postal_code=address.post_code,
        country=address.country,
    )


def vault_location_to_address(location: Optional[VaultLocation]) -> Optional[Address]:
    if location is None:
        return None

    return Address(
        street=location.address_line,
        city=location.city_name,
        county=location.state_province,
        postal_code=location.zip_postal,
        country=location.country_code,
    )
