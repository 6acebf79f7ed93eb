"""Unit tests for AccountService.

Covers:
- create_account: happy path, password hashing, collected violations,
  duplicate email/username.
- update_account: partial update, duplicates excluding self, not found.
- check_account: validation of a stored account.
"""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from modules.accounts.credentials import verify_password
from modules.accounts.exceptions import AccountNotFound
from modules.accounts.models import Account
from modules.accounts.services import AccountService
from modules.core.validation import ErrorKind, ValidationFailed

pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def mock_repo():
    repo = MagicMock()
    repo.get_by_email.return_value = None
    repo.get_by_username.return_value = None
    repo.save.side_effect = lambda account: account
    return repo


@pytest.fixture()
def service(mock_repo):
    return AccountService(repository=mock_repo)


def _make_account(pk: int = 1, **overrides) -> Account:
    defaults = {
        "id": pk,
        "email": f"user{pk}@example.com",
        "username": f"user{pk}",
        "password": "pbkdf2_sha256$hash",
    }
    defaults.update(overrides)
    return Account(**defaults)


def _payload(**overrides) -> dict:
    payload = {"email": "bob@example.com", "username": "bob", "password": "s3cret"}
    payload.update(overrides)
    return payload


# ===========================================================================
# create_account
# ===========================================================================


class TestCreateAccount:
    def test_success(self, service, mock_repo):
        account = service.create_account(_payload())

        mock_repo.save.assert_called_once_with(account)
        assert account.email == "bob@example.com"
        assert account.username == "bob"

    def test_password_is_hashed(self, service):
        account = service.create_account(_payload())
        assert account.password != "s3cret"
        assert verify_password(account, "s3cret")

    def test_roles_not_writable(self, service):
        account = service.create_account(_payload(roles=["ROLE_ADMIN"]))
        assert account.roles == []

    def test_blank_fields_reported_together(self, service, mock_repo):
        with pytest.raises(ValidationFailed) as exc_info:
            service.create_account({"email": "", "username": ""})

        assert exc_info.value.fields() == {"email", "username", "password"}
        assert {v.kind for v in exc_info.value.violations} == {ErrorKind.NOT_BLANK}
        mock_repo.save.assert_not_called()

    def test_duplicate_email(self, service, mock_repo):
        mock_repo.get_by_email.return_value = _make_account(pk=7)

        with pytest.raises(ValidationFailed) as exc_info:
            service.create_account(_payload())

        assert [(v.field, v.kind) for v in exc_info.value.violations] == [
            ("email", ErrorKind.DUPLICATE_VALUE)
        ]

    def test_duplicate_lookup_uses_normalized_email(self, service, mock_repo):
        service.create_account(_payload(email="bob@Example.COM"))
        mock_repo.get_by_email.assert_called_once_with("bob@example.com")

    def test_duplicate_and_format_errors_combined(self, service, mock_repo):
        mock_repo.get_by_username.return_value = _make_account(pk=7)

        with pytest.raises(ValidationFailed) as exc_info:
            service.create_account(_payload(email="nope"))

        assert {(v.field, v.kind) for v in exc_info.value.violations} == {
            ("email", ErrorKind.INVALID_FORMAT),
            ("username", ErrorKind.DUPLICATE_VALUE),
        }


# ===========================================================================
# update_account
# ===========================================================================


class TestUpdateAccount:
    def test_partial_update(self, service, mock_repo):
        account = _make_account()
        mock_repo.get_by_id.return_value = account

        result = service.update_account(1, {"username": "robert"})

        assert result.username == "robert"
        assert result.email == "user1@example.com"

    def test_own_values_are_not_duplicates(self, service, mock_repo):
        account = _make_account()
        mock_repo.get_by_id.return_value = account
        mock_repo.get_by_email.return_value = account

        result = service.update_account(1, {"email": "user1@example.com"})
        assert result is account

    def test_taken_username(self, service, mock_repo):
        mock_repo.get_by_id.return_value = _make_account()
        mock_repo.get_by_username.return_value = _make_account(pk=2)

        with pytest.raises(ValidationFailed) as exc_info:
            service.update_account(1, {"username": "user2"})
        assert exc_info.value.fields() == {"username"}
        mock_repo.save.assert_not_called()

    def test_not_found(self, service, mock_repo):
        mock_repo.get_by_id.return_value = None
        with pytest.raises(AccountNotFound):
            service.update_account(5, {"username": "x"})


# ===========================================================================
# Queries
# ===========================================================================


class TestQueries:
    def test_get_account(self, service, mock_repo):
        account = _make_account()
        mock_repo.get_by_id.return_value = account
        assert service.get_account(1) is account

    def test_get_account_not_found(self, service, mock_repo):
        mock_repo.get_by_id.return_value = None
        with pytest.raises(AccountNotFound):
            service.get_account(1)

    def test_list_accounts_delegates(self, service, mock_repo):
        service.list_accounts({"username__icontains": "a"})
        mock_repo.list.assert_called_once_with({"username__icontains": "a"})


class TestCheckAccount:
    def test_valid_account(self, service):
        assert service.check_account(_make_account()) == []

    def test_malformed_email(self, service):
        violations = service.check_account(_make_account(email="broken"))
        assert [(v.field, v.kind) for v in violations] == [
            ("email", ErrorKind.INVALID_FORMAT)
        ]

    def test_blank_password(self, service):
        violations = service.check_account(_make_account(password=""))
        assert [(v.field, v.kind) for v in violations] == [
            ("password", ErrorKind.NOT_BLANK)
        ]
