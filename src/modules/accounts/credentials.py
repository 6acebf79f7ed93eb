"""Credential capability of an Account.

Authentication itself is handled outside this service.  What it needs from
an account is captured by the plain ``Credentials`` record and the free
functions below; nothing here depends on a user base class.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable

from django.contrib.auth.hashers import check_password, make_password

if TYPE_CHECKING:
    from modules.accounts.models import Account

BASELINE_ROLE = "ROLE_USER"


@dataclass(frozen=True)
class Credentials:
    identifier: str
    credential_hash: str
    roles: tuple[str, ...]


def normalize_roles(roles: Iterable[str] | None) -> list[str]:
    """Stored roles plus the baseline role, de-duplicated in order."""
    normalized: list[str] = []
    for role in [*(roles or []), BASELINE_ROLE]:
        if role not in normalized:
            normalized.append(role)
    return normalized


def hash_password(raw: str) -> str:
    # Blank input stays blank so validation can reject it.
    if not raw:
        return raw
    return make_password(raw)


def verify_password(account: Account, raw: str) -> bool:
    return bool(account.password) and check_password(raw, account.password)


def credentials_for(account: Account) -> Credentials:
    """Build the record consumed by the authentication collaborator."""
    return Credentials(
        identifier=str(account.email),
        credential_hash=account.password,
        roles=tuple(normalize_roles(account.roles)),
    )
