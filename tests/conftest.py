import pytest

from rest_framework.test import APIClient

from modules.accounts.credentials import hash_password
from modules.accounts.models import Account
from modules.listings.models import Listing
from modules.listings.ownership import add_listing


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def api_client_with_correlation(api_client):
    """APIClient pre-configured with a known correlation ID header."""
    cid = "test-correlation-id-fixture"
    api_client.defaults["HTTP_X_REQUEST_ID"] = cid
    return api_client, cid


@pytest.fixture()
def make_account():
    """Factory persisting an Account with unique defaults."""
    counter = {"n": 0}

    def _make(**overrides) -> Account:
        counter["n"] += 1
        n = counter["n"]
        defaults = {
            "email": f"seller{n}@example.com",
            "username": f"seller{n}",
            "password": hash_password("s3cret-pass"),
        }
        defaults.update(overrides)
        account = Account(**defaults)
        account.save()
        return account

    return _make


@pytest.fixture()
def account(make_account):
    return make_account(email="alice@example.com", username="alice")


@pytest.fixture()
def make_listing(account):
    """Factory persisting a Listing owned by ``account`` unless told otherwise."""

    def _make(owner=None, **overrides) -> Listing:
        defaults = {
            "title": "Comté 18 mois",
            "description": "Fruity and nutty.",
            "price": 25,
        }
        defaults.update(overrides)
        listing = Listing(**defaults)
        add_listing(owner or account, listing)
        listing.save()
        return listing

    return _make
