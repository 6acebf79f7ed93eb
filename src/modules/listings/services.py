"""Listing service layer (Use Cases).

Turns raw API payloads into listings:

1. ``LISTING_POLICY.accept`` keeps the writable fields and converts the
   description to ``<br>`` markup; everything else is dropped.
2. The DTO validates the accepted fields; the owner reference is resolved
   and the owner account checked against its own rules.  Every violation is
   collected before anything is raised.
3. Only then is the listing built or mutated and persisted, inside one
   transaction.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Mapping, Optional

import structlog
from django.db import transaction
from pydantic import ValidationError as PydanticValidationError

from modules.accounts.services import AccountService
from modules.core.validation import (
    MESSAGES,
    ErrorKind,
    ValidationFailed,
    Violation,
    violations_from_pydantic,
)
from modules.listings.dtos import CreateListingDTO, UpdateListingDTO, owner_reference
from modules.listings.exceptions import ListingNotFound
from modules.listings.models import Listing
from modules.listings.ownership import add_listing, transfer_listing
from modules.listings.policy import LISTING_POLICY

if TYPE_CHECKING:
    from django.db.models import QuerySet

    from modules.accounts.models import Account
    from modules.accounts.repositories.interfaces import IAccountRepository
    from modules.listings.repositories.interfaces import IListingRepository

logger = structlog.get_logger(__name__)


class ListingService:
    """Application service for Listing use-cases.

    Receives the listing and account repositories via constructor injection.
    """

    def __init__(
        self,
        repository: IListingRepository,
        account_repository: IAccountRepository,
    ) -> None:
        self._repo = repository
        self._accounts = AccountService(account_repository)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_listing(self, payload: Mapping[str, Any]) -> Listing:
        """Create a listing from a raw API payload.

        Raises:
            ValidationFailed: with every violated field constraint.
            AccountNotFound: if the owner reference does not exist.
        """
        data = LISTING_POLICY.accept(payload)
        violations: list[Violation] = []
        dto: CreateListingDTO | None = None
        try:
            dto = CreateListingDTO(**data)
        except PydanticValidationError as exc:
            violations.extend(violations_from_pydantic(exc))

        owner = self._resolve_owner(data, violations)
        if violations or dto is None or owner is None:
            self._reject(violations)

        listing = Listing(title=dto.title)
        listing.price = dto.price
        listing.description = dto.description
        add_listing(owner, listing)

        listing = self._repo.save(listing)
        logger.info("listing.created", listing_id=listing.pk, owner_id=owner.pk)
        return listing

    @transaction.atomic
    def update_listing(self, id: int | str, payload: Mapping[str, Any]) -> Listing:
        """Apply the supplied writable fields to an existing listing.

        Nothing is changed unless every supplied field is valid.

        Raises:
            ListingNotFound: if the listing does not exist.
            ValidationFailed: with every violated field constraint.
            AccountNotFound: if a new owner reference does not exist.
        """
        listing = self.get_listing(id)
        log = logger.bind(listing_id=listing.pk)

        data = LISTING_POLICY.accept(payload)
        violations: list[Violation] = []
        dto: UpdateListingDTO | None = None
        try:
            dto = UpdateListingDTO(**data)
        except PydanticValidationError as exc:
            violations.extend(violations_from_pydantic(exc))

        owner = self._resolve_owner(data, violations)
        if violations or dto is None:
            self._reject(violations, listing_id=listing.pk)

        changed = sorted(dto.model_fields_set)
        for field in dto.model_fields_set - {"owner"}:
            setattr(listing, field, getattr(dto, field))
        if owner is not None:
            transfer_listing(listing, owner)

        listing = self._repo.save(listing)
        log.info("listing.updated", fields=changed)
        return listing

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_listings(self, filters: Optional[Dict[str, Any]] = None) -> QuerySet[Listing]:
        return self._repo.list(filters)

    def get_listing(self, id: int | str) -> Listing:
        """Retrieve a single listing by ID.

        Raises:
            ListingNotFound: if the listing does not exist.
        """
        listing = self._repo.get_by_id(id)
        if not listing:
            raise ListingNotFound(f"Listing {id} not found.")
        return listing

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _resolve_owner(
        self, data: Mapping[str, Any], violations: list[Violation]
    ) -> Account | None:
        """Load the referenced owner and check it, recording violations.

        Skipped when the owner was not supplied or is already invalid.
        """
        if "owner" not in data or any(v.field == "owner" for v in violations):
            return None

        owner = self._accounts.get_account(owner_reference(data["owner"]))
        problems = self._accounts.check_account(owner)
        if problems:
            logger.warning(
                "listing.invalid_owner",
                owner_id=owner.pk,
                fields=sorted({p.field for p in problems}),
            )
            violations.append(
                Violation(
                    field="owner",
                    kind=ErrorKind.INVALID_REFERENCE,
                    message=MESSAGES[ErrorKind.INVALID_REFERENCE],
                )
            )
        return owner

    @staticmethod
    def _reject(violations: list[Violation], **context: Any) -> None:
        logger.warning(
            "listing.validation_failed",
            fields=sorted({v.field for v in violations}),
            **context,
        )
        raise ValidationFailed(violations)
