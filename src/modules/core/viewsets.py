"""ViewSet plumbing shared by policy-driven resources.

Maps DRF actions onto policy operations so the serializer renders the
right view, and reads the caller's property selection from the query
string (``?properties[]=title&properties[]=price`` or
``?properties=title,price``).
"""

from __future__ import annotations

from typing import Any, ClassVar, Mapping

from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response

from modules.core.policy import Operation, SerializationPolicy

ACTION_OPERATIONS: dict[str, Operation] = {
    "list": Operation.LIST,
    "retrieve": Operation.GET_ITEM,
    "create": Operation.CREATE,
    "update": Operation.UPDATE,
    "partial_update": Operation.UPDATE,
}


def requested_properties(request: Request | None) -> list[str] | None:
    if request is None:
        return None
    raw = request.query_params.getlist("properties[]") + request.query_params.getlist(
        "properties"
    )
    if not raw:
        return None
    return [name.strip() for value in raw for name in value.split(",") if name.strip()]


class PolicyViewSetMixin:
    policy: ClassVar[SerializationPolicy]

    def get_serializer_context(self) -> dict[str, Any]:
        context = super().get_serializer_context()
        operation = ACTION_OPERATIONS.get(getattr(self, "action", None) or "")
        if operation is not None:
            context["policy_view"] = self.policy.output_view(operation)
        properties = requested_properties(context.get("request"))
        if properties is not None:
            context["properties"] = properties
        return context

    def respond(self, instance: Any, status_code: int = status.HTTP_200_OK) -> Response:
        serializer = self.get_serializer(instance)
        return Response(serializer.data, status=status_code)

    @staticmethod
    def payload_error(data: Any) -> Response | None:
        """Return a 400 response unless the request body is a JSON object."""
        if isinstance(data, Mapping):
            return None
        return Response(
            {
                "type": "validation_error",
                "errors": [
                    {"code": "InvalidFormat", "detail": "Expected a JSON object."}
                ],
            },
            status=status.HTTP_400_BAD_REQUEST,
        )
