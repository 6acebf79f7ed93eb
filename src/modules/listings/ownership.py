"""Keeps ``Listing.owner`` and an account's listing collection in step.

The account side is an explicit in-memory list attached to the account
instance, loaded from the database the first time a persisted account is
touched.  Both functions work on unsaved entities as well.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from modules.accounts.models import Account
    from modules.listings.models import Listing

_COLLECTION_ATTR = "_owned_listings"


def owned_listings(account: Account) -> list[Listing]:
    """The account's listing collection."""
    collection = getattr(account, _COLLECTION_ATTR, None)
    if collection is None:
        collection = list(account.listings.all()) if account.pk is not None else []
        setattr(account, _COLLECTION_ATTR, collection)
    return collection


def add_listing(account: Account, listing: Listing) -> bool:
    """Attach ``listing`` to ``account``.

    Returns ``False`` (and changes nothing) if it was already attached.
    """
    collection = owned_listings(account)
    if listing in collection:
        return False
    collection.append(listing)
    listing.owner = account
    return True


def remove_listing(account: Account, listing: Listing) -> bool:
    """Detach ``listing`` from ``account``.

    The owner is cleared only if it still points at ``account``; a
    reassignment made elsewhere is left alone.
    """
    collection = owned_listings(account)
    if listing not in collection:
        return False
    collection.remove(listing)
    if listing.owner == account:
        listing.owner = None
    return True


def transfer_listing(listing: Listing, new_owner: Account) -> None:
    """Move ``listing`` from its current owner to ``new_owner``."""
    previous = listing.owner
    if previous is not None:
        if previous == new_owner:
            return
        remove_listing(previous, listing)
    add_listing(new_owner, listing)
