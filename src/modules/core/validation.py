"""Field-level validation primitives shared by every resource.

Checks are written as plain functions raising ``PydanticCustomError`` so
they can be called from pydantic field validators: pydantic then collects
every failing field of a payload in a single ``ValidationError``, which
``violations_from_pydantic`` turns into ``Violation`` records.  Services add
the checks that need the database (uniqueness, references) to the same list
before raising ``ValidationFailed``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Callable, Iterable

from pydantic import ValidationError as PydanticValidationError
from pydantic_core import PydanticCustomError


class ErrorKind(StrEnum):
    NOT_BLANK = "NotBlank"
    LENGTH_EXCEEDED = "LengthExceeded"
    NOT_POSITIVE = "NotPositive"
    DUPLICATE_VALUE = "DuplicateValue"
    INVALID_REFERENCE = "InvalidReference"
    INVALID_FORMAT = "InvalidFormat"


MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.NOT_BLANK: "This value should not be blank.",
    ErrorKind.NOT_POSITIVE: "This value should be positive.",
    ErrorKind.DUPLICATE_VALUE: "This value is already used.",
    ErrorKind.INVALID_REFERENCE: "The referenced resource is not valid.",
    ErrorKind.INVALID_FORMAT: "This value is not valid.",
}


@dataclass(frozen=True)
class Violation:
    """A single failed constraint on one field."""

    field: str
    kind: ErrorKind
    message: str

    def as_dict(self) -> dict[str, str]:
        return {"field": self.field, "code": str(self.kind), "detail": self.message}


class ValidationFailed(Exception):
    """Raised with every violation found in one submitted payload."""

    def __init__(self, violations: Iterable[Violation]) -> None:
        self.violations: list[Violation] = list(violations)
        super().__init__(
            "; ".join(f"{v.field}: {v.kind}" for v in self.violations)
            or "Validation failed."
        )

    def fields(self) -> set[str]:
        return {v.field for v in self.violations}


# ---------------------------------------------------------------------------
# Checks (usable inside pydantic validators)
# ---------------------------------------------------------------------------


def fail(kind: ErrorKind, message: str | None = None) -> PydanticCustomError:
    return PydanticCustomError(str(kind), message or MESSAGES[kind])


def not_blank(value: Any) -> Any:
    if value is None or (isinstance(value, str) and value == ""):
        raise fail(ErrorKind.NOT_BLANK)
    return value


def length_between(value: str, minimum: int, maximum: int) -> str:
    if len(value) < minimum:
        raise fail(
            ErrorKind.LENGTH_EXCEEDED,
            f"This value is too short. It should have {minimum} characters or more.",
        )
    if len(value) > maximum:
        raise fail(
            ErrorKind.LENGTH_EXCEEDED,
            f"This value is too long. It should have {maximum} characters or less.",
        )
    return value


def positive(value: int) -> int:
    if value <= 0:
        raise fail(ErrorKind.NOT_POSITIVE)
    return value


def at_most(value: int, maximum: int) -> int:
    if value > maximum:
        raise fail(
            ErrorKind.INVALID_FORMAT,
            f"This value should be less than or equal to {maximum}.",
        )
    return value


# ---------------------------------------------------------------------------
# Conversion
# ---------------------------------------------------------------------------

_PYDANTIC_KINDS: dict[str, ErrorKind] = {
    "missing": ErrorKind.NOT_BLANK,
    "value_error": ErrorKind.INVALID_FORMAT,
}


def violations_from_pydantic(
    exc: PydanticValidationError,
    rename: Callable[[str], str] | None = None,
) -> list[Violation]:
    """Translate a pydantic ``ValidationError`` into ``Violation`` records.

    Custom errors raised by the checks above carry the ``ErrorKind`` as
    their type; ``missing`` maps to ``NotBlank`` and every other pydantic
    error (wrong type, malformed email) to ``InvalidFormat``.
    """
    violations: list[Violation] = []
    for error in exc.errors():
        loc = error.get("loc") or ("__all__",)
        name = str(loc[0])
        if rename is not None:
            name = rename(name)
        error_type = error["type"]
        try:
            kind = ErrorKind(error_type)
            message = error["msg"]
        except ValueError:
            kind = _PYDANTIC_KINDS.get(error_type, ErrorKind.INVALID_FORMAT)
            message = MESSAGES[kind] if kind is ErrorKind.NOT_BLANK else error["msg"]
        violations.append(Violation(field=name, kind=kind, message=message))
    return violations
