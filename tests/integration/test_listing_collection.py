"""Integration tests for the listing collection endpoint.

Covers:
- Read view of GET /api/v1/listings/.
- Fixed page size of 10.
- Filters: isPublished, title, description, price ranges, owner,
  owner__username.
- Property selection and ordering.
"""

from __future__ import annotations

import pytest

pytestmark = pytest.mark.integration

URL = "/api/v1/listings/"


def _ids(response) -> list[int]:
    return [item["id"] for item in response.json()["results"]]


# ===========================================================================
# LIST
# ===========================================================================


class TestListingList:
    def test_list_empty(self, api_client):
        response = api_client.get(URL)
        assert response.status_code == 200
        assert response.json()["results"] == []
        assert response.json()["count"] == 0

    def test_read_view_shape(self, api_client, make_listing, account):
        listing = make_listing()

        response = api_client.get(URL)

        item = response.json()["results"][0]
        assert set(item) == {"id", "title", "shortDescription", "price", "createdAtAgo", "owner"}
        assert item["id"] == listing.pk
        assert item["owner"] == account.pk

    def test_ordered_by_id(self, api_client, make_listing):
        first, second = make_listing(), make_listing()
        assert _ids(api_client.get(URL)) == [first.pk, second.pk]

    def test_ordering_param(self, api_client, make_listing):
        cheap, dear = make_listing(price=5), make_listing(price=50)
        assert _ids(api_client.get(f"{URL}?ordering=-price")) == [dear.pk, cheap.pk]


# ===========================================================================
# Pagination
# ===========================================================================


class TestListingPagination:
    def test_page_size_is_ten(self, api_client, make_listing):
        for _ in range(12):
            make_listing()

        response = api_client.get(URL)

        data = response.json()
        assert data["count"] == 12
        assert len(data["results"]) == 10
        assert data["next"] is not None
        assert data["previous"] is None

    def test_second_page(self, api_client, make_listing):
        for _ in range(12):
            make_listing()

        response = api_client.get(f"{URL}?page=2")

        assert len(response.json()["results"]) == 2
        assert response.json()["next"] is None

    def test_page_size_not_overridable(self, api_client, make_listing):
        for _ in range(12):
            make_listing()
        response = api_client.get(f"{URL}?page_size=50")
        assert len(response.json()["results"]) == 10

    def test_page_out_of_range(self, api_client):
        response = api_client.get(f"{URL}?page=5")
        assert response.status_code == 404
        assert response.json()["type"] == "not_found"


# ===========================================================================
# Filters
# ===========================================================================


class TestListingFilters:
    def test_is_published(self, api_client, make_listing):
        published = make_listing(is_published=True)
        make_listing()

        assert _ids(api_client.get(f"{URL}?isPublished=true")) == [published.pk]

    def test_title_substring(self, api_client, make_listing):
        brie = make_listing(title="Brie de Meaux")
        make_listing(title="Comté")
        assert _ids(api_client.get(f"{URL}?title=meaux")) == [brie.pk]

    def test_description_substring(self, api_client, make_listing):
        smoky = make_listing(description="Smoked over beech wood")
        make_listing(description="Mild")
        assert _ids(api_client.get(f"{URL}?description=beech")) == [smoky.pk]

    def test_price_less_than(self, api_client, make_listing):
        cheap = make_listing(price=5)
        make_listing(price=20)
        assert _ids(api_client.get(f"{URL}?price__lt=10")) == [cheap.pk]

    def test_price_greater_than(self, api_client, make_listing):
        make_listing(price=5)
        dear = make_listing(price=20)
        assert _ids(api_client.get(f"{URL}?price__gt=10")) == [dear.pk]

    def test_price_range(self, api_client, make_listing):
        make_listing(price=5)
        middle = make_listing(price=15)
        make_listing(price=30)
        assert _ids(api_client.get(f"{URL}?price__range=10,20")) == [middle.pk]

    def test_owner(self, api_client, make_listing, make_account):
        bob = make_account(username="bob")
        make_listing()
        bobs = make_listing(owner=bob)
        assert _ids(api_client.get(f"{URL}?owner={bob.pk}")) == [bobs.pk]

    def test_owner_username_substring(self, api_client, make_listing, make_account):
        bob = make_account(username="bobby")
        make_listing()
        bobs = make_listing(owner=bob)
        assert _ids(api_client.get(f"{URL}?owner__username=BOB")) == [bobs.pk]

    def test_invalid_filter_value(self, api_client):
        response = api_client.get(f"{URL}?price__lt=cheap")
        assert response.status_code == 400
        assert response.json()["type"] == "validation_error"
        assert response.json()["errors"][0]["field"] == "price__lt"


# ===========================================================================
# Property selection
# ===========================================================================


class TestListingProperties:
    def test_bracket_form(self, api_client, make_listing):
        listing = make_listing()
        response = api_client.get(f"{URL}?properties[]=title&properties[]=price")
        assert response.json()["results"] == [
            {"id": listing.pk, "title": listing.title, "price": listing.price}
        ]

    def test_comma_form(self, api_client, make_listing):
        listing = make_listing()
        response = api_client.get(f"{URL}?properties=title,owner")
        assert response.json()["results"] == [
            {"id": listing.pk, "title": listing.title, "owner": listing.owner_id}
        ]

    def test_unknown_property_ignored(self, api_client, make_listing):
        listing = make_listing()
        response = api_client.get(f"{URL}?properties=description")
        assert response.json()["results"] == [{"id": listing.pk}]

    def test_selection_does_not_change_page_size(self, api_client, make_listing):
        for _ in range(11):
            make_listing()
        response = api_client.get(f"{URL}?properties=title")
        assert len(response.json()["results"]) == 10
