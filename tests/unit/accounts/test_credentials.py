"""Unit tests for account credentials and roles."""

from __future__ import annotations

import pytest

from modules.accounts.credentials import (
    BASELINE_ROLE,
    Credentials,
    credentials_for,
    hash_password,
    normalize_roles,
    verify_password,
)
from modules.accounts.models import Account

pytestmark = pytest.mark.unit


class TestNormalizeRoles:
    def test_empty_gets_baseline(self):
        assert normalize_roles([]) == [BASELINE_ROLE]

    def test_none_gets_baseline(self):
        assert normalize_roles(None) == [BASELINE_ROLE]

    def test_baseline_appended_after_stored_roles(self):
        assert normalize_roles(["ROLE_ADMIN"]) == ["ROLE_ADMIN", BASELINE_ROLE]

    def test_duplicates_removed(self):
        roles = ["ROLE_ADMIN", "ROLE_ADMIN", BASELINE_ROLE]
        assert normalize_roles(roles) == ["ROLE_ADMIN", BASELINE_ROLE]

    def test_idempotent(self):
        once = normalize_roles(["ROLE_SELLER"])
        assert normalize_roles(once) == once


class TestAccountRoles:
    def test_stored_roles_untouched(self):
        account = Account(roles=["ROLE_SELLER"])
        assert account.get_roles() == ["ROLE_SELLER", BASELINE_ROLE]
        assert account.roles == ["ROLE_SELLER"]

    def test_default_roles(self):
        assert Account().get_roles() == [BASELINE_ROLE]


class TestPasswords:
    def test_hash_is_not_plain(self):
        hashed = hash_password("s3cret")
        assert hashed != "s3cret"
        assert hashed

    def test_blank_stays_blank(self):
        assert hash_password("") == ""

    def test_verify(self):
        account = Account(password=hash_password("s3cret"))
        assert verify_password(account, "s3cret")
        assert not verify_password(account, "wrong")

    def test_verify_without_password(self):
        assert not verify_password(Account(password=""), "anything")

    def test_set_password(self):
        account = Account()
        account.set_password("s3cret")
        assert verify_password(account, "s3cret")


class TestCredentialsFor:
    def test_record(self):
        account = Account(
            email="alice@example.com",
            password=hash_password("s3cret"),
            roles=["ROLE_ADMIN"],
        )
        credentials = credentials_for(account)
        assert credentials == Credentials(
            identifier="alice@example.com",
            credential_hash=account.password,
            roles=("ROLE_ADMIN", BASELINE_ROLE),
        )

    def test_is_immutable(self):
        credentials = credentials_for(Account(email="a@example.com", password="h"))
        with pytest.raises(AttributeError):
            credentials.roles = ()
