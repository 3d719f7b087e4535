"""
Shipment models.

A Shipment is weighed twice: once from the vendor's box list and once from
our own (WFL) re-weighing. Both box lists live in ShipmentBox, told apart by
``kind``. The four aggregate weight fields on Shipment are always derived
from the boxes by the service layer.
"""

import uuid
from django.db import models
from django.conf import settings
from django.core.validators import MinValueValidator
from django.utils import timezone

from apps.masters.models import VendorPincode
from apps.rates.models import Mode


class Shipment(models.Model):
    id                      = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    created_by              = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL,
                                                null=True, blank=True, related_name="shipments_entered")

    client                  = models.ForeignKey("masters.Client", on_delete=models.PROTECT, related_name="shipments")
    vendor                  = models.ForeignKey("masters.Vendor", on_delete=models.PROTECT, related_name="shipments")
    zone                    = models.ForeignKey("rates.Zone", on_delete=models.PROTECT, null=True, blank=True,
                                                related_name="shipments")

    wfl_number              = models.CharField(max_length=40, blank=True, db_index=True)
    vendor_awb_number       = models.CharField(max_length=40, blank=True, db_index=True)
    mode                    = models.CharField(max_length=10, choices=Mode.choices)
    invoice_number          = models.CharField(max_length=40, blank=True)
    invoice_value           = models.DecimalField(max_digits=12, decimal_places=2, default=0,
                                                  validators=[MinValueValidator(0)])
    consignor_from_location = models.CharField(max_length=150, blank=True)
    consignee               = models.CharField(max_length=150, blank=True)
    destination             = models.CharField(max_length=150, blank=True)
    pin_code                = models.CharField(max_length=6)
    oda                     = models.CharField(max_length=6, choices=VendorPincode.Oda.choices,
                                               default=VendorPincode.Oda.NORMAL)
    total_box               = models.PositiveIntegerField(default=0)

    # Derived from boxes; never written from request data
    actual_weight            = models.FloatField(default=0)
    actual_volumetric_weight = models.FloatField(default=0)
    wfl_weight               = models.FloatField(default=0)
    wfl_volumetric_weight    = models.FloatField(default=0)

    shipment_date           = models.DateField(default=timezone.localdate)
    created_at              = models.DateTimeField(auto_now_add=True)
    updated_at              = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-shipment_date", "-created_at"]
        indexes  = [
            models.Index(fields=["client", "shipment_date"], name="shipment_client_date_idx"),
            models.Index(fields=["created_by"], name="shipment_created_by_idx"),
        ]

    def __str__(self):
        return self.wfl_number or self.vendor_awb_number or str(self.id)

    @property
    def is_oda(self):
        return self.oda == VendorPincode.Oda.ODA


class ShipmentBox(models.Model):
    class Kind(models.TextChoices):
        VENDOR = "VENDOR", "Vendor"
        WFL    = "WFL",    "WFL"

    shipment                    = models.ForeignKey(Shipment, on_delete=models.CASCADE, related_name="boxes")
    kind                        = models.CharField(max_length=6, choices=Kind.choices)
    position                    = models.PositiveIntegerField(default=0)
    number_of_pieces            = models.PositiveIntegerField(default=1)
    length_cm                   = models.FloatField(validators=[MinValueValidator(0)])
    breadth_cm                  = models.FloatField(validators=[MinValueValidator(0)])
    height_cm                   = models.FloatField(validators=[MinValueValidator(0)])
    actual_weight_per_piece     = models.FloatField(default=0, validators=[MinValueValidator(0)])
    volumetric_weight_per_piece = models.FloatField(default=0)
    total_volumetric_weight     = models.FloatField(default=0)

    class Meta:
        ordering = ["kind", "position"]

    def __str__(self):
        return f"{self.shipment} {self.kind} #{self.position}"
