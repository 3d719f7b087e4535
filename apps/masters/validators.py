"""Field validators for Indian master data (pincode, GSTIN, phone)."""

import re
from rest_framework import serializers

PINCODE_PATTERN = re.compile(r"^[1-9]\d{5}$")
GSTIN_PATTERN   = re.compile(r"^\d{2}[A-Z]{5}\d{4}[A-Z][1-9A-Z]Z[0-9A-Z]$")
IN_PHONE_PATTERN = re.compile(r"^(\+?91|0)?[6-9]\d{9}$")


def validate_pincode(value):
    if not PINCODE_PATTERN.match(value or ""):
        raise serializers.ValidationError("Enter a valid 6-digit pincode.")


def validate_gstin(value):
    if value and not GSTIN_PATTERN.match(value.upper()):
        raise serializers.ValidationError("Enter a valid 15-character GSTIN.")


def validate_phone(value):
    if value and not IN_PHONE_PATTERN.match(value.replace(" ", "")):
        raise serializers.ValidationError("Enter a valid 10-digit Indian phone number.")
