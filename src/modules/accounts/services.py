"""Account service layer (Use Cases).

Orchestrates creation and update of accounts, delegating persistence to
the injected ``IAccountRepository``.

Rules enforced here:
- Only fields writable under ``ACCOUNT_POLICY`` are accepted.
- ``email`` and ``username`` are required and unique; ``email`` must be
  well-formed; ``password`` is required on creation.
- Every violation of one payload is reported together.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Mapping, Optional

import structlog
from django.db import transaction
from pydantic import ValidationError as PydanticValidationError

from modules.accounts.dtos import CreateAccountDTO, UpdateAccountDTO
from modules.accounts.exceptions import AccountNotFound
from modules.accounts.models import Account
from modules.accounts.policy import ACCOUNT_POLICY
from modules.core.validation import (
    MESSAGES,
    ErrorKind,
    ValidationFailed,
    Violation,
    violations_from_pydantic,
)

if TYPE_CHECKING:
    from django.db.models import QuerySet

    from modules.accounts.repositories.interfaces import IAccountRepository

logger = structlog.get_logger(__name__)

UNIQUE_FIELDS = ("email", "username")


class AccountService:
    """Application service for Account use-cases.

    Receives an ``IAccountRepository`` via constructor injection.
    """

    def __init__(self, repository: IAccountRepository) -> None:
        self._repo = repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_account(self, payload: Mapping[str, Any]) -> Account:
        """Create an account from a raw API payload.

        Raises:
            ValidationFailed: with every blank, malformed or duplicate field.
        """
        data = ACCOUNT_POLICY.accept(payload)
        violations: list[Violation] = []
        dto: CreateAccountDTO | None = None
        try:
            dto = CreateAccountDTO(**data)
        except PydanticValidationError as exc:
            violations.extend(violations_from_pydantic(exc))

        violations.extend(self._duplicates(dto.model_dump() if dto else data))
        if violations or dto is None:
            logger.warning(
                "account.validation_failed",
                fields=sorted({v.field for v in violations}),
            )
            raise ValidationFailed(violations)

        account = Account(email=dto.email, username=dto.username, password=dto.password)
        account = self._repo.save(account)
        logger.info("account.created", account_id=account.pk)
        return account

    @transaction.atomic
    def update_account(self, id: int | str, payload: Mapping[str, Any]) -> Account:
        """Apply the supplied writable fields to an existing account.

        Raises:
            AccountNotFound: if the account does not exist.
            ValidationFailed: if any supplied field is invalid or taken.
        """
        account = self.get_account(id)
        log = logger.bind(account_id=account.pk)

        data = ACCOUNT_POLICY.accept(payload)
        violations: list[Violation] = []
        dto: UpdateAccountDTO | None = None
        try:
            dto = UpdateAccountDTO(**data)
        except PydanticValidationError as exc:
            violations.extend(violations_from_pydantic(exc))

        checked = dto.model_dump(exclude_unset=True) if dto else data
        violations.extend(self._duplicates(checked, exclude_id=account.pk))
        if violations or dto is None:
            log.warning(
                "account.validation_failed",
                fields=sorted({v.field for v in violations}),
            )
            raise ValidationFailed(violations)

        for field in dto.model_fields_set:
            setattr(account, field, getattr(dto, field))

        account = self._repo.save(account)
        log.info("account.updated", fields=sorted(dto.model_fields_set))
        return account

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_accounts(self, filters: Optional[Dict[str, Any]] = None) -> QuerySet[Account]:
        return self._repo.list(filters)

    def get_account(self, id: int | str) -> Account:
        """Retrieve a single account by ID.

        Raises:
            AccountNotFound: if the account does not exist.
        """
        account = self._repo.get_by_id(id)
        if not account:
            raise AccountNotFound(f"Account {id} not found.")
        return account

    def check_account(self, account: Account) -> list[Violation]:
        """Validate a stored account against its own constraints.

        Used when another resource references the account; the account's
        own listings are not looked at.
        """
        violations: list[Violation] = []
        try:
            CreateAccountDTO(
                email=account.email,
                username=account.username,
                password=account.password,
            )
        except PydanticValidationError as exc:
            violations.extend(violations_from_pydantic(exc))
        violations.extend(
            self._duplicates(
                {"email": account.email, "username": account.username},
                exclude_id=account.pk,
            )
        )
        return violations

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _duplicates(
        self, data: Mapping[str, Any], exclude_id: int | None = None
    ) -> list[Violation]:
        """Look up the unique fields of ``data``.

        Pass the validated DTO values when available: those are what gets
        stored (``EmailStr`` lower-cases the domain).
        """
        lookups = {
            "email": self._repo.get_by_email,
            "username": self._repo.get_by_username,
        }
        violations = []
        for field in UNIQUE_FIELDS:
            value = data.get(field)
            if not isinstance(value, str) or not value:
                continue
            existing = lookups[field](value)
            if existing is not None and existing.pk != exclude_id:
                violations.append(
                    Violation(
                        field=field,
                        kind=ErrorKind.DUPLICATE_VALUE,
                        message=MESSAGES[ErrorKind.DUPLICATE_VALUE],
                    )
                )
        return violations
