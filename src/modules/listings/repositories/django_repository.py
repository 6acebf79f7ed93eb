"""Django ORM implementation of the Listing repository.

Missing rows come back as ``None``; the Service Layer decides how to
report them.  Owners are always fetched with the listing, since every
rendered view includes them.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from django.core.exceptions import ValidationError
from django.db import models, transaction

from modules.listings.models import Listing
from modules.listings.repositories.interfaces import IListingRepository


class ListingDjangoRepository(IListingRepository):
    """Concrete Listing repository backed by Django ORM."""

    def get_by_id(self, id: int | str) -> Optional[Listing]:
        """Retrieve a listing by primary key.

        Returns ``None`` for non-existent or malformed IDs.
        """
        try:
            return Listing.objects.select_related("owner").filter(pk=id).first()
        except (ValueError, TypeError, ValidationError):
            return None

    def list(self, filters: Optional[Dict[str, Any]] = None) -> models.QuerySet[Listing]:
        """List listings with optional Django ORM look-ups.

        Examples of valid filters::

            {"is_published": True}
            {"title__icontains": "brie", "price__lt": 20}
        """
        queryset = Listing.objects.select_related("owner")
        if filters:
            queryset = queryset.filter(**filters)
        return queryset

    @transaction.atomic
    def save(self, entity: Listing) -> Listing:
        entity.save()
        return entity
