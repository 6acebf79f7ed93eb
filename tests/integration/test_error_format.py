"""Integration tests for standardized error responses."""

import pytest

pytestmark = pytest.mark.integration


class TestStandardizedErrors:
    def test_validation_error_has_standard_format(self, api_client):
        response = api_client.post("/api/v1/listings/", {}, format="json")
        assert response.status_code == 400
        data = response.json()
        assert data["type"] == "validation_error"
        assert isinstance(data["errors"], list)
        for error in data["errors"]:
            assert set(error) == {"field", "code", "detail"}

    def test_malformed_json_has_standard_format(self, api_client):
        response = api_client.post(
            "/api/v1/listings/", data="{", content_type="application/json"
        )
        assert response.status_code == 400
        data = response.json()
        assert data["type"] == "parse_error"
        assert data["errors"][0]["code"] == "parse_error"

    def test_not_found_has_standard_format(self, api_client):
        response = api_client.get("/api/v1/accounts/abc/")
        assert response.status_code == 404
        data = response.json()
        assert data["type"] == "not_found"
        assert "detail" in data["errors"][0]

    def test_method_not_allowed_has_standard_format(self, api_client, make_listing):
        listing = make_listing()
        response = api_client.delete(f"/api/v1/listings/{listing.pk}/")
        assert response.status_code == 405
        data = response.json()
        assert data["type"] == "client_error"
        assert data["errors"][0]["code"] == "method_not_allowed"
