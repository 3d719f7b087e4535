"""Bill serializers."""

from rest_framework import serializers

from freightdesk.serializers import StrictFieldsMixin
from .models import Bill, BillLine


class BillLineSerializer(serializers.ModelSerializer):
    wfl_number        = serializers.CharField(source="shipment.wfl_number", read_only=True)
    vendor_awb_number = serializers.CharField(source="shipment.vendor_awb_number", read_only=True)
    shipment_date     = serializers.DateField(source="shipment.shipment_date", read_only=True)
    zone_name         = serializers.CharField(source="zone.name", read_only=True)

    class Meta:
        model  = BillLine
        fields = [
            "shipment", "wfl_number", "vendor_awb_number", "shipment_date", "zone", "zone_name",
            "mode", "chargeable_weight", "rate_per_kg", "freight", "fuel", "fov",
            "docket", "oda", "other", "amount",
        ]


class BillSerializer(serializers.ModelSerializer):
    client_code = serializers.CharField(source="client.client_code", read_only=True)
    client_name = serializers.CharField(source="client.client_name", read_only=True)
    created_by  = serializers.CharField(source="created_by.email", read_only=True, default=None)

    class Meta:
        model  = Bill
        fields = [
            "id", "client", "client_code", "client_name", "period_start", "period_end",
            "total_amount", "shipment_count", "created_by", "created_at",
        ]
        read_only_fields = fields


class BillDetailSerializer(BillSerializer):
    lines = BillLineSerializer(many=True, read_only=True)

    class Meta(BillSerializer.Meta):
        fields = BillSerializer.Meta.fields + ["lines"]
        read_only_fields = fields


class BillRequestSerializer(StrictFieldsMixin, serializers.Serializer):
    client       = serializers.UUIDField()
    period_start = serializers.DateField()
    period_end   = serializers.DateField()


class MonthlyBillRunSerializer(StrictFieldsMixin, serializers.Serializer):
    year  = serializers.IntegerField(min_value=2000, max_value=2100)
    month = serializers.IntegerField(min_value=1, max_value=12)
