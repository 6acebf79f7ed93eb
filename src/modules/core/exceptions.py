"""Standardised error envelope for the API.

Every error leaves the service as::

    {"type": "<category>", "errors": [{"code": ..., "detail": ..., "field"?: ...}]}

Domain exceptions are translated by the views through the helpers below;
DRF's own exceptions (parse errors, 404, 405) go through
``api_exception_handler``, registered as ``EXCEPTION_HANDLER``.
"""

from __future__ import annotations

from typing import Any

import structlog
from django.http import Http404
from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from modules.core.validation import ValidationFailed

logger = structlog.get_logger(__name__)


class NotFoundError(Exception):
    """A referenced entity does not exist."""


def validation_error_response(exc: ValidationFailed) -> Response:
    return Response(
        {
            "type": "validation_error",
            "errors": [violation.as_dict() for violation in exc.violations],
        },
        status=status.HTTP_400_BAD_REQUEST,
    )


def not_found_response(exc: NotFoundError | str) -> Response:
    return Response(
        {"type": "not_found", "errors": [{"code": "NotFound", "detail": str(exc)}]},
        status=status.HTTP_404_NOT_FOUND,
    )


def _flatten(detail: Any, field: str | None = None) -> list[dict[str, Any]]:
    if isinstance(detail, dict):
        errors: list[dict[str, Any]] = []
        for key, value in detail.items():
            errors.extend(_flatten(value, None if key == "detail" else key))
        return errors
    if isinstance(detail, list):
        errors = []
        for item in detail:
            errors.extend(_flatten(item, field))
        return errors
    error = {
        "code": getattr(detail, "code", "error"),
        "detail": str(detail),
    }
    if field is not None:
        error["field"] = field
    return [error]


def api_exception_handler(exc: Exception, context: dict[str, Any]) -> Response | None:
    """Wrap DRF's default handler in the ``{type, errors}`` envelope."""
    if isinstance(exc, ValidationFailed):
        return validation_error_response(exc)
    if isinstance(exc, NotFoundError):
        return not_found_response(exc)

    response = exception_handler(exc, context)
    if response is None:
        return None

    if isinstance(exc, exceptions.ValidationError):
        error_type = "validation_error"
    elif isinstance(exc, exceptions.ParseError):
        error_type = "parse_error"
    elif isinstance(exc, (exceptions.NotFound, Http404)):
        error_type = "not_found"
    else:
        error_type = "client_error" if response.status_code < 500 else "server_error"

    logger.info(
        "api.error",
        error_type=error_type,
        status_code=response.status_code,
    )
    response.data = {"type": error_type, "errors": _flatten(response.data)}
    return response
