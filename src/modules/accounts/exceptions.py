"""Account domain exceptions.

Raised by the Service Layer; the API layer (Views) translates them into
HTTP responses.
"""

from __future__ import annotations

from modules.core.exceptions import NotFoundError


class AccountNotFound(NotFoundError):
    """The requested or referenced account does not exist."""
