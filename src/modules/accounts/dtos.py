"""Account DTOs for the Service Layer.

Pydantic v2 models validating the fields accepted by ``ACCOUNT_POLICY``.
Every failing field is reported at once; the service converts the
pydantic error into ``Violation`` records.

- ``CreateAccountDTO``: all three fields required.
- ``UpdateAccountDTO``: partial; only supplied fields are validated.

``email`` and ``username`` are bounded by their column lengths.  ``email``
is normalized by ``EmailStr`` (lower-cased domain), so uniqueness must be
checked against the validated value.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, EmailStr, field_validator

from modules.accounts.models import EMAIL_MAX_LENGTH, USERNAME_MAX_LENGTH
from modules.core.validation import length_between, not_blank


class CreateAccountDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    email: EmailStr
    username: str
    password: str

    @field_validator("email", "username", "password", mode="before")
    @classmethod
    def must_not_be_blank(cls, v: Any) -> Any:
        return not_blank(v)

    @field_validator("email")
    @classmethod
    def email_length(cls, v: str) -> str:
        return length_between(v, 1, EMAIL_MAX_LENGTH)

    @field_validator("username")
    @classmethod
    def username_length(cls, v: str) -> str:
        return length_between(v, 1, USERNAME_MAX_LENGTH)


class UpdateAccountDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    email: EmailStr | None = None
    username: str | None = None
    password: str | None = None

    @field_validator("email", "username", "password", mode="before")
    @classmethod
    def must_not_be_blank(cls, v: Any) -> Any:
        return not_blank(v)

    @field_validator("email")
    @classmethod
    def email_length(cls, v: str) -> str:
        return length_between(v, 1, EMAIL_MAX_LENGTH)

    @field_validator("username")
    @classmethod
    def username_length(cls, v: str) -> str:
        return length_between(v, 1, USERNAME_MAX_LENGTH)
