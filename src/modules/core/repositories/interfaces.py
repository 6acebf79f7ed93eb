"""Generic repository interface.

``IRepository[T]`` is the contract every resource repository extends.
Services depend on it, never on the Django ORM directly, so they can be
unit-tested against a ``MagicMock``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, Optional, TypeVar

from django.db import models

T = TypeVar("T", bound=models.Model)


class IRepository(ABC, Generic[T]):
    """Base repository contract for an entity ``T`` keyed by integer id."""

    @abstractmethod
    def get_by_id(self, id: int | str) -> Optional[T]:
        """Retrieve an entity by its primary key, or ``None``."""

    @abstractmethod
    def list(self, filters: Optional[Dict[str, Any]] = None) -> models.QuerySet[T]:
        """Return a QuerySet of entities matching optional ORM look-ups."""

    @abstractmethod
    def save(self, entity: T) -> T:
        """Persist (create or update) an entity."""
