"""Listing DRF serializer for API output.

Fields, external names and derived values all come from ``LISTING_POLICY``;
the view (``read`` for collections, ``item-read`` for single items) is
chosen by the ViewSet.
"""

from __future__ import annotations

from modules.core.serializers import PolicySerializer
from modules.listings.policy import LISTING_POLICY


class ListingSerializer(PolicySerializer):
    policy = LISTING_POLICY
