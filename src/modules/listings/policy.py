"""Field visibility for the Listing resource.

| field            | read | item-read | write |
|------------------|------|-----------|-------|
| id               | yes  | yes       |       |
| title            | yes  | yes       | yes   |
| shortDescription | yes  | yes       |       |
| description      |      |           | yes   |
| price            | yes  | yes       | yes   |
| createdAtAgo     | yes  | yes       |       |
| owner            | yes  | yes       | yes   |

``description`` on input and ``shortDescription`` on output are separate
fields backed by the same stored text.  ``isPublished`` and ``createdAt``
never cross the boundary.  ``owner`` is the account id in ``read`` and the
embedded account (its ``item-read`` fields) in ``item-read``.
"""

from __future__ import annotations

from modules.accounts.policy import ACCOUNT_POLICY
from modules.core.policy import FieldRule, SerializationPolicy, View
from modules.listings.derived import to_line_breaks

READ, ITEM_READ, WRITE = View.READ, View.ITEM_READ, View.WRITE

LISTING_POLICY = SerializationPolicy(
    "listing",
    [
        FieldRule("id", "id", frozenset({READ, ITEM_READ})),
        FieldRule("title", "title", frozenset({READ, ITEM_READ, WRITE})),
        FieldRule("shortDescription", "short_description", frozenset({READ, ITEM_READ})),
        FieldRule("description", "description", frozenset({WRITE}), transform=to_line_breaks),
        FieldRule("price", "price", frozenset({READ, ITEM_READ, WRITE})),
        FieldRule("createdAtAgo", "created_at_ago", frozenset({READ, ITEM_READ})),
        FieldRule(
            "owner",
            "owner",
            frozenset({READ, ITEM_READ, WRITE}),
            nested=ACCOUNT_POLICY,
            embed=frozenset({ITEM_READ}),
        ),
    ],
)
