"""Django ORM implementation of the Account repository.

Missing rows come back as ``None``; the Service Layer decides how to
report them.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from django.core.exceptions import ValidationError
from django.db import models, transaction

from modules.accounts.models import Account
from modules.accounts.repositories.interfaces import IAccountRepository


class AccountDjangoRepository(IAccountRepository):
    """Concrete Account repository backed by Django ORM."""

    def get_by_id(self, id: int | str) -> Optional[Account]:
        """Retrieve an account by primary key.

        Returns ``None`` for non-existent or malformed IDs.
        """
        try:
            return Account.objects.filter(pk=id).first()
        except (ValueError, TypeError, ValidationError):
            return None

    def list(self, filters: Optional[Dict[str, Any]] = None) -> models.QuerySet[Account]:
        queryset = Account.objects.all()
        if filters:
            queryset = queryset.filter(**filters)
        return queryset

    @transaction.atomic
    def save(self, entity: Account) -> Account:
        entity.save()
        return entity

    def get_by_email(self, email: str) -> Optional[Account]:
        return Account.objects.filter(email=email).first()

    def get_by_username(self, username: str) -> Optional[Account]:
        return Account.objects.filter(username=username).first()
