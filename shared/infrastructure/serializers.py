"""Serializer helpers shared by the update endpoints."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore


class FullUpdateRequiredMixin:
    """
    Require ``full_update_fields`` on PUT.

    Update serializers declare every field optional so PATCH can send any
    subset; a full update (``partial=False``) must still carry these.
    """

    full_update_fields: tuple[str, ...] = ()

    def validate(self, attrs):  # type: ignore
        attrs = super().validate(attrs)
        if not self.partial:
            missing = [name for name in self.full_update_fields if attrs.get(name) in (None, "")]
            if missing:
                raise serializers.ValidationError({name: ["This field is required."] for name in missing})
        return attrs
