"""Rate master serializers."""

from decimal import Decimal

from django.db import IntegrityError, transaction
from rest_framework import serializers

from freightdesk.serializers import StrictFieldsMixin
from .models import Zone, ClientRate, ClientZoneRate, Mode


class ZoneSerializer(serializers.ModelSerializer):
    class Meta:
        model  = Zone
        fields = ["id", "name", "created_at"]
        read_only_fields = ["id", "created_at"]

    def validate_name(self, value):
        return value.strip()


class ClientZoneRateSerializer(serializers.ModelSerializer):
    zone_name = serializers.CharField(source="zone.name", read_only=True)

    class Meta:
        model  = ClientZoneRate
        fields = ["zone", "zone_name", "rate_per_kg"]


class ClientRateSerializer(StrictFieldsMixin, serializers.ModelSerializer):
    """
    A rate master with its zone rates. On update, a submitted ``zone_rates``
    list replaces the existing rows wholesale.
    """
    zone_rates  = ClientZoneRateSerializer(many=True, required=False)
    client_code = serializers.CharField(source="client.client_code", read_only=True)

    class Meta:
        model  = ClientRate
        fields = [
            "id", "client", "client_code", "mode", "cft",
            "minimum_weight", "minimum_freight", "docket_charges",
            "fuel_pct", "fov_pct", "oda_charge", "other_charges",
            "zone_rates", "created_at", "updated_at",
        ]
        read_only_fields = ["id", "created_at", "updated_at"]

    def validate_zone_rates(self, rows):
        zones = [row["zone"].pk for row in rows]
        if len(zones) != len(set(zones)):
            raise serializers.ValidationError("Each zone may appear only once.")
        return rows

    def validate(self, data):
        client = data.get("client", getattr(self.instance, "client", None))
        mode   = data.get("mode",   getattr(self.instance, "mode", None))
        clash = ClientRate.objects.filter(client=client, mode=mode)
        if self.instance is not None:
            clash = clash.exclude(pk=self.instance.pk)
        if clash.exists():
            raise serializers.ValidationError(
                {"mode": f"Client already has a '{mode}' rate master."}
            )
        return data

    def create(self, validated_data):
        zone_rates = validated_data.pop("zone_rates", [])
        try:
            with transaction.atomic():
                client_rate = ClientRate.objects.create(**validated_data)
                self._write_zone_rates(client_rate, zone_rates)
        except IntegrityError as exc:
            # A concurrent request created the same (client, mode) first
            raise serializers.ValidationError(
                {"mode": f"Client already has a '{validated_data.get('mode')}' rate master."}
            ) from exc
        return client_rate

    @transaction.atomic
    def update(self, instance, validated_data):
        zone_rates = validated_data.pop("zone_rates", None)
        instance = super().update(instance, validated_data)
        if zone_rates is not None:
            instance.zone_rates.all().delete()
            self._write_zone_rates(instance, zone_rates)
        return instance

    def _write_zone_rates(self, client_rate, rows):
        ClientZoneRate.objects.bulk_create([
            ClientZoneRate(client_rate=client_rate, zone=row["zone"], rate_per_kg=row["rate_per_kg"])
            for row in rows
        ])


class RateCalculateSerializer(serializers.Serializer):
    client            = serializers.UUIDField()
    mode              = serializers.ChoiceField(choices=Mode.choices)
    zone              = serializers.PrimaryKeyRelatedField(queryset=Zone.objects.all())
    actual_weight     = serializers.FloatField(min_value=0)
    volumetric_weight = serializers.FloatField(min_value=0, default=0)
    invoice_value     = serializers.DecimalField(max_digits=12, decimal_places=2,
                                                 min_value=Decimal("0"), default=Decimal("0"))
    is_oda            = serializers.BooleanField(default=False)
