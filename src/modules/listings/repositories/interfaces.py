"""Listing repository interface."""

from __future__ import annotations

from typing import TYPE_CHECKING

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.listings.models import Listing


class IListingRepository(IRepository["Listing"]):
    """Repository contract for the Listing aggregate.

    ``list`` returns listings with their owner pre-loaded.
    """
