"""
Unit tests for the enrichment lookups.

Every failure mode must collapse into "not found" (or the placeholder
supplier name) without raising.
"""

import httpx

from conftest import SPEEDY_PRODUCT_CODE

from order_ingest.dal import UNKNOWN_SUPPLIER, EnrichmentLookups


class TestLookupClient:
    """Test cases for LookupClient."""

    def test_satisfies_protocol(self, lookup_client):
        """Test that the client can be handed to the pipeline."""
        assert isinstance(lookup_client, EnrichmentLookups)

    def test_resolve_supplier_name(self, lookup_client, stub_api):
        """Test resolving a supplier name."""
        stub_api.route("GET", "suppliers/1", json_body={"id": 1, "name": "Speedy"})

        assert lookup_client.resolve_supplier_name(1) == "Speedy"
        assert len(stub_api.calls_to("GET", "suppliers/1")) == 1

    def test_supplier_server_error_gives_placeholder(self, lookup_client, stub_api):
        """Test that a 500 from the supplier lookup gives the placeholder name."""
        stub_api.route("GET", "suppliers/1", status_code=500, text="boom")

        assert lookup_client.resolve_supplier_name(1) == UNKNOWN_SUPPLIER

    def test_supplier_transport_error_gives_placeholder(self, lookup_client, stub_api):
        """Test that an unreachable API gives the placeholder name."""
        stub_api.route("GET", "suppliers/1", error=httpx.ConnectError("connection refused"))

        assert lookup_client.resolve_supplier_name(1) == "Unknown Supplier"

    def test_supplier_bad_json_gives_placeholder(self, lookup_client, stub_api):
        """Test that an unparseable body gives the placeholder name."""
        stub_api.route("GET", "suppliers/1", text="<html>")

        assert lookup_client.resolve_supplier_name(1) == UNKNOWN_SUPPLIER

    def test_resolve_customer_id(self, lookup_client, stub_api):
        """Test resolving a customer by email, URL-encoded into the path."""
        stub_api.route("GET", "customers/by-email/x%40y.com", json_body={"id": 42})

        assert lookup_client.resolve_customer_id("x@y.com") == 42
        assert len(stub_api.calls_to("GET", "customers/by-email/x%40y.com")) == 1

    def test_email_with_reserved_characters(self, lookup_client, stub_api):
        """Test that slashes and plus signs can't escape the path segment."""
        stub_api.route("GET", "customers/by-email/a%2Bb%2Fc%40y.com", json_body={"id": 7})

        assert lookup_client.resolve_customer_id("a+b/c@y.com") == 7

    def test_unknown_customer(self, lookup_client, stub_api):
        """Test that a 404 resolves to None."""
        assert lookup_client.resolve_customer_id("nobody@y.com") is None
        assert len(stub_api.requests) == 1

    def test_customer_response_missing_id(self, lookup_client, stub_api):
        """Test that a success body without an id resolves to None."""
        stub_api.route("GET", "customers/by-email/x%40y.com", json_body={"email": "x@y.com"})

        assert lookup_client.resolve_customer_id("x@y.com") is None

    def test_resolve_product_id(self, lookup_client, stub_api):
        """Test resolving a product by code."""
        stub_api.route("GET", f"products/by-code/{SPEEDY_PRODUCT_CODE}", json_body={"Id": 11})

        assert lookup_client.resolve_product_id(SPEEDY_PRODUCT_CODE) == 11

    def test_product_transport_error(self, lookup_client, stub_api):
        """Test that a timeout resolves to None."""
        stub_api.route(
            "GET",
            f"products/by-code/{SPEEDY_PRODUCT_CODE}",
            error=httpx.ReadTimeout("timed out"),
        )

        assert lookup_client.resolve_product_id(SPEEDY_PRODUCT_CODE) is None

    def test_supplier_body_not_utf8_gives_placeholder(self, lookup_client, stub_api):
        """Test that a body that isn't valid UTF-8 gives the placeholder name."""
        stub_api.route("GET", "suppliers/1", content=b'{"id":1,"name":"\xff\xfe"}')

        assert lookup_client.resolve_supplier_name(1) == UNKNOWN_SUPPLIER

    def test_product_body_not_utf8(self, lookup_client, stub_api):
        """Test that a product body that isn't valid UTF-8 resolves to None."""
        stub_api.route("GET", f"products/by-code/{SPEEDY_PRODUCT_CODE}", content=b'{"id":\xff}')

        assert lookup_client.resolve_product_id(SPEEDY_PRODUCT_CODE) is None
