"""DRF serializer driven by a ``SerializationPolicy``.

Subclasses only name their policy.  The view in effect comes from the
serializer context (``policy_view``), so the same serializer class renders
a collection, a single item, or the response to a write.  ``properties``
in the context narrows the output further.

Input never goes through the serializer: services hand the raw payload to
``SerializationPolicy.accept``.
"""

from __future__ import annotations

from typing import Any, ClassVar

from rest_framework import serializers

from modules.core.policy import SerializationPolicy, View


class PolicySerializer(serializers.BaseSerializer):
    policy: ClassVar[SerializationPolicy]

    def to_representation(self, instance: Any) -> dict[str, Any]:
        view = View(self.context.get("policy_view", View.READ))
        return self.policy.render(
            instance,
            view,
            properties=self.context.get("properties"),
        )
