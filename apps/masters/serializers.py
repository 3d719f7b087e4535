"""Master-data serializers."""

from rest_framework import serializers

from freightdesk.serializers import StrictFieldsMixin
from .models import Client, Vendor, VendorPincode
from .validators import validate_pincode, validate_gstin, validate_phone


class ClientSerializer(StrictFieldsMixin, serializers.ModelSerializer):
    contact_number = serializers.CharField(required=False, allow_blank=True, validators=[validate_phone])
    pin_code       = serializers.CharField(required=False, allow_blank=True, max_length=6)
    gst_number     = serializers.CharField(required=False, allow_blank=True, validators=[validate_gstin])
    created_by     = serializers.CharField(source="created_by.email", read_only=True, default=None)

    class Meta:
        model  = Client
        fields = ["id", "client_code", "client_name", "contact_number", "email_id",
                  "address", "pin_code", "gst_number", "created_by", "created_at", "updated_at"]
        read_only_fields = ["id", "created_at", "updated_at"]

    def validate_pin_code(self, value):
        if value:
            validate_pincode(value)
        return value

    def validate_gst_number(self, value):
        return value.upper()


class VendorSerializer(StrictFieldsMixin, serializers.ModelSerializer):
    contact_number = serializers.CharField(required=False, allow_blank=True, validators=[validate_phone])
    pincode        = serializers.CharField(required=False, allow_blank=True, max_length=6)
    gst_number     = serializers.CharField(required=False, allow_blank=True, validators=[validate_gstin])
    pincode_count  = serializers.IntegerField(source="pincodes.count", read_only=True)

    class Meta:
        model  = Vendor
        fields = ["id", "vendor_code", "name", "contact_number", "email", "address",
                  "pincode", "gst_number", "pincode_count", "created_at", "updated_at"]
        read_only_fields = ["id", "created_at", "updated_at"]

    def validate_pincode(self, value):
        if value:
            validate_pincode(value)
        return value

    def validate_gst_number(self, value):
        return value.upper()


class VendorPincodeSerializer(serializers.ModelSerializer):
    pincode = serializers.CharField(validators=[validate_pincode])

    class Meta:
        model  = VendorPincode
        fields = ["pincode", "oda"]


class VendorPincodeUploadSerializer(serializers.Serializer):
    pincodes = VendorPincodeSerializer(many=True, allow_empty=False)

    def validate_pincodes(self, rows):
        seen = set()
        for row in rows:
            if row["pincode"] in seen:
                raise serializers.ValidationError(f"Duplicate pincode {row['pincode']} in upload.")
            seen.add(row["pincode"])
        return rows
