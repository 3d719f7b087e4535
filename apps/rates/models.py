"""
Rate master models.

A ClientRate holds the fixed charges a client pays for one transport mode;
its ClientZoneRate rows hold the per-kg rate for each zone the client ships to.
"""

from decimal import Decimal

from django.db import models
from django.core.validators import MinValueValidator, MaxValueValidator


class Mode(models.TextChoices):
    AIR     = "air",     "Air"
    SURFACE = "surface", "Surface"
    EXPRESS = "express", "Express"


class Zone(models.Model):
    """Rating region, independent of vendor routing (e.g. "Zone A", "North East")."""
    name       = models.CharField(max_length=80, unique=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["name"]

    def __str__(self):
        return self.name


def _money(**kwargs):
    return models.DecimalField(max_digits=10, decimal_places=2, default=Decimal("0"),
                               validators=[MinValueValidator(0)], **kwargs)


def _percent(**kwargs):
    return models.DecimalField(max_digits=5, decimal_places=2, default=Decimal("0"),
                               validators=[MinValueValidator(0), MaxValueValidator(100)], **kwargs)


class ClientRate(models.Model):
    client          = models.ForeignKey("masters.Client", on_delete=models.CASCADE, related_name="rates")
    mode            = models.CharField(max_length=10, choices=Mode.choices)
    cft             = models.DecimalField(max_digits=8, decimal_places=3, default=Decimal("1"),
                                          validators=[MinValueValidator(0)])
    minimum_weight  = models.DecimalField(max_digits=10, decimal_places=3, default=Decimal("0"),
                                          validators=[MinValueValidator(0)])
    minimum_freight = _money()
    docket_charges  = _money()
    fuel_pct        = _percent()
    fov_pct         = _percent()
    oda_charge      = _money()
    other_charges   = _money()
    created_at      = models.DateTimeField(auto_now_add=True)
    updated_at      = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["client", "mode"]
        constraints = [
            models.UniqueConstraint(fields=["client", "mode"], name="uniq_client_rate_mode"),
        ]

    def __str__(self):
        return f"{self.client.client_code} / {self.mode}"


class ClientZoneRate(models.Model):
    client_rate = models.ForeignKey(ClientRate, on_delete=models.CASCADE, related_name="zone_rates")
    zone        = models.ForeignKey(Zone, on_delete=models.PROTECT, related_name="client_rates")
    rate_per_kg = models.DecimalField(max_digits=10, decimal_places=2,
                                      validators=[MinValueValidator(0)])

    class Meta:
        ordering = ["zone__name"]
        constraints = [
            models.UniqueConstraint(fields=["client_rate", "zone"], name="uniq_client_zone_rate"),
        ]

    def __str__(self):
        return f"{self.client_rate} / {self.zone.name}: {self.rate_per_kg}/kg"
