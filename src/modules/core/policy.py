"""Serialization policy: which fields cross the API boundary, and how.

Every resource declares one ``SerializationPolicy``: a central table of
``FieldRule`` rows, each naming the external field, the internal attribute
it reads from or writes to, and the views in which it is exposed.  The DRF
serializers query this table instead of declaring fields themselves.

- Output: ``render()`` returns only the fields marked for the requested view.
- Input: ``accept()`` keeps only the fields marked for the ``write`` view,
  applies their transforms and maps them onto attribute names.  Any other
  submitted key is dropped without error.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, Callable, Iterable, Mapping

import structlog

logger = structlog.get_logger(__name__)


class View(StrEnum):
    READ = "read"
    ITEM_READ = "item-read"
    WRITE = "write"


class Operation(StrEnum):
    LIST = "list"
    CREATE = "create"
    GET_ITEM = "get-item"
    UPDATE = "update"


INPUT_VIEWS = frozenset({View.WRITE})

# operation -> (input view, output view)
DEFAULT_OPERATIONS: dict[Operation, tuple[View | None, View]] = {
    Operation.LIST: (None, View.READ),
    Operation.CREATE: (View.WRITE, View.ITEM_READ),
    Operation.GET_ITEM: (None, View.ITEM_READ),
    Operation.UPDATE: (View.WRITE, View.ITEM_READ),
}


@dataclass(frozen=True)
class FieldRule:
    """One row of the policy table.

    ``nested`` marks a relation: it is rendered as the related entity's
    identifier, or embedded through the nested policy when the requested
    view is listed in ``embed``.
    """

    name: str
    attribute: str
    views: frozenset[View] = frozenset()
    transform: Callable[[Any], Any] | None = None
    nested: SerializationPolicy | None = None
    embed: frozenset[View] = field(default_factory=frozenset)

    @property
    def writable(self) -> bool:
        return bool(self.views & INPUT_VIEWS)

    def exposed_in(self, view: View) -> bool:
        return view in self.views


class SerializationPolicy:
    """Field × view table for one resource."""

    def __init__(
        self,
        resource: str,
        rules: Iterable[FieldRule],
        *,
        identifier: str = "id",
        operations: Mapping[Operation, tuple[View | None, View]] | None = None,
    ) -> None:
        self.resource = resource
        self.rules: tuple[FieldRule, ...] = tuple(rules)
        self.identifier = identifier
        self.operations = dict(operations or DEFAULT_OPERATIONS)
        self._check_unique_names()

    def _check_unique_names(self) -> None:
        seen: set[tuple[str, View]] = set()
        for rule in self.rules:
            for view in rule.views:
                key = (rule.name, view)
                if key in seen:
                    raise ValueError(
                        f"{self.resource}: field '{rule.name}' declared twice "
                        f"for view '{view}'."
                    )
                seen.add(key)

    # ------------------------------------------------------------------
    # Table queries
    # ------------------------------------------------------------------

    def fields_for(self, view: View) -> list[FieldRule]:
        """Rules exposed in ``view``, in declaration order."""
        return [rule for rule in self.rules if rule.exposed_in(view)]

    def field_names(self, view: View) -> list[str]:
        return [rule.name for rule in self.fields_for(view)]

    def views_for(self, operation: Operation) -> tuple[View | None, View]:
        """Return the ``(input view, output view)`` pair of an operation."""
        return self.operations[Operation(operation)]

    def output_view(self, operation: Operation) -> View:
        return self.views_for(operation)[1]

    def input_view(self, operation: Operation) -> View | None:
        return self.views_for(operation)[0]

    def external_name(self, attribute: str, view: View = View.WRITE) -> str:
        """Map an internal attribute back to its external name in ``view``."""
        for rule in self.fields_for(view):
            if rule.attribute == attribute:
                return rule.name
        return attribute

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def identify(self, entity: Any) -> Any:
        return getattr(entity, self.identifier, None)

    def render(
        self,
        entity: Any,
        view: View,
        properties: Iterable[str] | None = None,
    ) -> dict[str, Any]:
        """Render ``entity`` with the fields of ``view``.

        ``properties`` restricts the output to a caller-selected subset;
        the identifier is always kept and unknown names are ignored.
        """
        selected = set(properties) if properties is not None else None
        data: dict[str, Any] = {}
        for rule in self.fields_for(view):
            if selected is not None and rule.name not in selected:
                if rule.attribute != self.identifier:
                    continue
            data[rule.name] = self._present(rule, entity, view)
        return data

    def _present(self, rule: FieldRule, entity: Any, view: View) -> Any:
        value = getattr(entity, rule.attribute)
        if rule.nested is None or value is None:
            return value
        if view in rule.embed:
            return rule.nested.render(value, view)
        return rule.nested.identify(value)

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def accept(
        self, payload: Mapping[str, Any], view: View = View.WRITE
    ) -> dict[str, Any]:
        """Keep the writable fields of ``payload``, keyed by attribute.

        String values pass through the rule's transform.  Fields outside
        ``view`` are ignored.
        """
        if view not in INPUT_VIEWS:
            raise ValueError(f"'{view}' is not an input view.")

        accepted: dict[str, Any] = {}
        known: set[str] = set()
        for rule in self.fields_for(view):
            known.add(rule.name)
            if rule.name not in payload:
                continue
            value = payload[rule.name]
            if rule.transform is not None and isinstance(value, str):
                value = rule.transform(value)
            accepted[rule.attribute] = value

        ignored = sorted(set(payload) - known)
        if ignored:
            logger.debug(
                "policy.fields_ignored",
                resource=self.resource,
                view=str(view),
                fields=ignored,
            )
        return accepted
