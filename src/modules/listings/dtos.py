"""Listing DTOs for the Service Layer.

Pydantic v2 models validating the fields accepted by ``LISTING_POLICY``
(``description`` arrives already converted to ``<br>`` markup).  pydantic
reports every failing field of the payload in one ``ValidationError``.

- ``CreateListingDTO``: title, description, price and owner required.
- ``UpdateListingDTO``: partial; only supplied fields are validated, and an
  explicit ``null`` counts as blank.
"""

from __future__ import annotations

import re
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from modules.core.validation import at_most, length_between, not_blank, positive
from modules.listings.models import PRICE_MAX

TITLE_MIN_LENGTH = 2
TITLE_MAX_LENGTH = 50

_ACCOUNT_PATH = re.compile(r"/accounts/(\d+)/?$")


def owner_reference(value: Any) -> Any:
    """Accept an owner as an id (``3``, ``"3"``) or a resource path
    (``"/api/v1/accounts/3/"``)."""
    if isinstance(value, str):
        match = _ACCOUNT_PATH.search(value)
        if match:
            return int(match.group(1))
    return value


# ---------------------------------------------------------------------------
# Input DTOs
# ---------------------------------------------------------------------------


class CreateListingDTO(BaseModel):
    """Immutable DTO for listing creation requests.

    Validates:
    - ``title``: not blank, 2–50 characters.
    - ``description``: not blank.
    - ``price``: present, greater than zero and no larger than ``PRICE_MAX``.
    - ``owner``: present; an id or account path.
    """

    model_config = ConfigDict(frozen=True)

    title: str
    description: str
    price: int
    owner: int

    @field_validator("title", "description", "price", mode="before")
    @classmethod
    def must_not_be_blank(cls, v: Any) -> Any:
        return not_blank(v)

    @field_validator("owner", mode="before")
    @classmethod
    def owner_must_be_given(cls, v: Any) -> Any:
        return owner_reference(not_blank(v))

    @field_validator("title")
    @classmethod
    def title_length(cls, v: str) -> str:
        return length_between(v, TITLE_MIN_LENGTH, TITLE_MAX_LENGTH)

    @field_validator("price")
    @classmethod
    def price_must_be_positive(cls, v: int) -> int:
        return at_most(positive(v), PRICE_MAX)


class UpdateListingDTO(BaseModel):
    """Immutable DTO for listing update requests.

    All fields are optional; only supplied fields are validated and applied.
    """

    model_config = ConfigDict(frozen=True)

    title: str | None = None
    description: str | None = None
    price: int | None = None
    owner: int | None = None

    @field_validator("title", "description", "price", mode="before")
    @classmethod
    def must_not_be_blank(cls, v: Any) -> Any:
        return not_blank(v)

    @field_validator("owner", mode="before")
    @classmethod
    def owner_must_be_given(cls, v: Any) -> Any:
        return owner_reference(not_blank(v))

    @field_validator("title")
    @classmethod
    def title_length(cls, v: str) -> str:
        return length_between(v, TITLE_MIN_LENGTH, TITLE_MAX_LENGTH)

    @field_validator("price")
    @classmethod
    def price_must_be_positive(cls, v: int) -> int:
        return at_most(positive(v), PRICE_MAX)
