"""Account repository interface.

Extends ``IRepository[Account]`` with the look-ups behind the email and
username uniqueness rules.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.accounts.models import Account


class IAccountRepository(IRepository["Account"]):
    """Repository contract for the Account aggregate."""

    @abstractmethod
    def get_by_email(self, email: str) -> Optional[Account]:
        """Retrieve an account by email address."""

    @abstractmethod
    def get_by_username(self, username: str) -> Optional[Account]:
        """Retrieve an account by username."""
