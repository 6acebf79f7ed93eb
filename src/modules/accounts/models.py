"""Account model: the owner of listings and holder of credentials.

- ``email`` and ``username`` are unique.
- ``password`` only ever holds a hash (see ``credentials.hash_password``).
- ``roles`` stores the explicitly granted roles; the baseline role is
  added on read by ``get_roles()`` and never written back.
- ``listings`` is the inverse side of ``Listing.owner``; keep both sides in
  sync through ``modules.listings.ownership``.
"""

from __future__ import annotations

from django.db import models

from modules.accounts.credentials import hash_password, normalize_roles


EMAIL_MAX_LENGTH = 180
USERNAME_MAX_LENGTH = 255


class Account(models.Model):
    email = models.EmailField(max_length=EMAIL_MAX_LENGTH, unique=True)
    username = models.CharField(max_length=USERNAME_MAX_LENGTH, unique=True)
    password = models.CharField(max_length=255)
    roles = models.JSONField(default=list, blank=True)

    class Meta:
        db_table = "accounts"
        ordering = ["id"]

    def get_roles(self) -> list[str]:
        return normalize_roles(self.roles)

    def set_password(self, raw: str) -> None:
        self.password = hash_password(raw)

    def __str__(self) -> str:
        return self.username
