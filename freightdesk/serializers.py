"""Serializer helpers shared by the domain apps."""

from rest_framework import serializers


class StrictFieldsMixin:
    """
    Reject payload keys that the serializer does not declare.
    DRF silently drops unknown keys by default, which hides typos in
    weight and rate fields.
    """

    def to_internal_value(self, data):
        if hasattr(data, "keys"):
            unknown = sorted(set(data.keys()) - set(self.fields))
            if unknown:
                raise serializers.ValidationError(
                    {name: ["Unknown field."] for name in unknown}
                )
        return super().to_internal_value(data)
