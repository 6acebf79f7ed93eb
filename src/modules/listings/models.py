"""Listing model: a cheese offered for sale by an Account.

- ``title`` 2–50 characters, ``price`` a positive integer no larger than
  ``PRICE_MAX`` (positivity is also enforced by a database check constraint).
- ``description`` is stored with newlines already turned into ``<br>``.
- ``created_at`` is set once, when the instance is constructed.
- ``is_published`` defaults to ``False`` and is not writable through the API.
- ``owner`` may be cleared in memory by the ownership manager, but a row
  without owner cannot be persisted.
"""

from __future__ import annotations

from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.utils import timezone

from modules.listings.derived import created_at_ago, short_description, to_line_breaks

# Upper bound of a 32-bit INTEGER column on every supported backend.
PRICE_MAX = 2_147_483_647


class Listing(models.Model):
    title = models.CharField(max_length=255, blank=True, default="")
    description = models.TextField(blank=True, default="")
    price = models.IntegerField(
        validators=[MinValueValidator(1), MaxValueValidator(PRICE_MAX)]
    )
    created_at = models.DateTimeField(default=timezone.now, editable=False)
    is_published = models.BooleanField(default=False)
    owner = models.ForeignKey(
        "accounts.Account",
        on_delete=models.PROTECT,
        related_name="listings",
        null=True,
    )

    class Meta:
        db_table = "listings"
        ordering = ["id"]
        indexes = [
            models.Index(fields=["is_published"], name="listings_published_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(price__gt=0),
                name="listings_price_positive",
            ),
            models.CheckConstraint(
                condition=models.Q(owner__isnull=False),
                name="listings_owner_required",
            ),
        ]

    # ------------------------------------------------------------------
    # Mutators
    # ------------------------------------------------------------------

    def set_text_description(self, text: str) -> None:
        """Store a raw, multi-line description."""
        self.description = to_line_breaks(text)

    # ------------------------------------------------------------------
    # Derived fields
    # ------------------------------------------------------------------

    @property
    def short_description(self) -> str | None:
        return short_description(self.description)

    @property
    def created_at_ago(self) -> str:
        return created_at_ago(self.created_at)

    def __str__(self) -> str:
        return self.title
