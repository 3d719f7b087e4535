"""Shipment serializers."""

from rest_framework import serializers

from freightdesk.serializers import StrictFieldsMixin
from apps.masters.validators import validate_pincode
from apps.rates.models import Mode
from .models import Shipment, ShipmentBox


class BoxSerializer(StrictFieldsMixin, serializers.Serializer):
    """One line of identical pieces as entered by the operator."""
    number_of_pieces        = serializers.IntegerField(min_value=1)
    length_cm               = serializers.FloatField(min_value=0)
    breadth_cm              = serializers.FloatField(min_value=0)
    height_cm               = serializers.FloatField(min_value=0)
    actual_weight_per_piece = serializers.FloatField(min_value=0, default=0)


class ShipmentBoxSerializer(serializers.ModelSerializer):
    class Meta:
        model  = ShipmentBox
        fields = [
            "position", "number_of_pieces", "length_cm", "breadth_cm", "height_cm",
            "actual_weight_per_piece", "volumetric_weight_per_piece", "total_volumetric_weight",
        ]


class ShipmentWriteSerializer(StrictFieldsMixin, serializers.ModelSerializer):
    """
    Input for create and update. The four aggregate weights and ``oda`` are
    not writable; they are derived by ShipmentService.
    """
    pin_code           = serializers.CharField(validators=[validate_pincode])
    total_box          = serializers.IntegerField(min_value=0, required=False, allow_null=True)
    vendor_boxes       = BoxSerializer(many=True, required=False)
    wfl_boxes          = BoxSerializer(many=True, required=False)
    wfl_same_as_vendor = serializers.BooleanField(required=False, default=False, write_only=True)

    class Meta:
        model  = Shipment
        fields = [
            "client", "vendor", "zone", "wfl_number", "vendor_awb_number", "mode",
            "invoice_number", "invoice_value", "consignor_from_location", "consignee",
            "destination", "pin_code", "total_box", "shipment_date",
            "vendor_boxes", "wfl_boxes", "wfl_same_as_vendor",
        ]

    def validate(self, data):
        if data.get("wfl_same_as_vendor") and "wfl_boxes" in data:
            raise serializers.ValidationError(
                {"wfl_boxes": "Omit WFL boxes when wfl_same_as_vendor is set."}
            )
        return data


class ShipmentDetailSerializer(serializers.ModelSerializer):
    client_code  = serializers.CharField(source="client.client_code", read_only=True)
    vendor_code  = serializers.CharField(source="vendor.vendor_code", read_only=True)
    zone_name    = serializers.CharField(source="zone.name", read_only=True, default=None)
    created_by   = serializers.CharField(source="created_by.email", read_only=True, default=None)
    vendor_boxes = serializers.SerializerMethodField()
    wfl_boxes    = serializers.SerializerMethodField()

    class Meta:
        model  = Shipment
        fields = [
            "id", "client", "client_code", "vendor", "vendor_code", "zone", "zone_name",
            "wfl_number", "vendor_awb_number", "mode", "invoice_number", "invoice_value",
            "consignor_from_location", "consignee", "destination", "pin_code", "oda",
            "total_box", "actual_weight", "actual_volumetric_weight",
            "wfl_weight", "wfl_volumetric_weight", "shipment_date",
            "vendor_boxes", "wfl_boxes", "created_by", "created_at", "updated_at",
        ]

    def _boxes(self, obj, kind):
        # Uses the prefetched box list when the view provides one
        boxes = [box for box in obj.boxes.all() if box.kind == kind]
        boxes.sort(key=lambda box: box.position)
        return ShipmentBoxSerializer(boxes, many=True).data

    def get_vendor_boxes(self, obj):
        return self._boxes(obj, ShipmentBox.Kind.VENDOR)

    def get_wfl_boxes(self, obj):
        return self._boxes(obj, ShipmentBox.Kind.WFL)


class WeightCalculateSerializer(serializers.Serializer):
    mode       = serializers.ChoiceField(choices=Mode.choices)
    cft_factor = serializers.FloatField(min_value=0, default=1.0)
    boxes      = BoxSerializer(many=True, allow_empty=True)
