"""Listing repositories package."""

from modules.listings.repositories.django_repository import ListingDjangoRepository
from modules.listings.repositories.interfaces import IListingRepository

__all__ = ["IListingRepository", "ListingDjangoRepository"]
