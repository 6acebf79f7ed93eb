"""Field visibility for the Account resource.

The password is accepted (and hashed on the way in) but never rendered;
roles and the listing collection never cross this surface.  Only ``id``
and ``username`` take part in ``item-read``, which is the view used when
an account is embedded in a single-listing response.
"""

from __future__ import annotations

from modules.accounts.credentials import hash_password
from modules.core.policy import FieldRule, Operation, SerializationPolicy, View

READ, ITEM_READ, WRITE = View.READ, View.ITEM_READ, View.WRITE

ACCOUNT_POLICY = SerializationPolicy(
    "account",
    [
        FieldRule("id", "id", frozenset({READ, ITEM_READ})),
        FieldRule("email", "email", frozenset({READ, WRITE})),
        FieldRule("username", "username", frozenset({READ, ITEM_READ, WRITE})),
        FieldRule("password", "password", frozenset({WRITE}), transform=hash_password),
    ],
    operations={
        Operation.LIST: (None, READ),
        Operation.CREATE: (WRITE, READ),
        Operation.GET_ITEM: (None, READ),
        Operation.UPDATE: (WRITE, READ),
    },
)
