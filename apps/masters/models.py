"""
Master data: clients (consignors we bill), vendors (carriers we hand
shipments to) and the pincodes each vendor can serve.
"""

import uuid
from django.db import models
from django.conf import settings


class Client(models.Model):
    id             = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    client_code    = models.CharField(max_length=20, unique=True)
    client_name    = models.CharField(max_length=150)
    contact_number = models.CharField(max_length=15, blank=True)
    email_id       = models.EmailField(blank=True)
    address        = models.TextField(blank=True)
    pin_code       = models.CharField(max_length=6, blank=True)
    gst_number     = models.CharField(max_length=15, blank=True)
    created_by     = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL,
                                       null=True, blank=True, related_name="clients_created")
    created_at     = models.DateTimeField(auto_now_add=True)
    updated_at     = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.client_code} - {self.client_name}"


class Vendor(models.Model):
    id             = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    vendor_code    = models.CharField(max_length=20, unique=True)
    name           = models.CharField(max_length=150)
    contact_number = models.CharField(max_length=15, blank=True)
    email          = models.EmailField(blank=True)
    address        = models.TextField(blank=True)
    pincode        = models.CharField(max_length=6, blank=True)
    gst_number     = models.CharField(max_length=15, blank=True)
    created_at     = models.DateTimeField(auto_now_add=True)
    updated_at     = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.vendor_code} - {self.name}"


class VendorPincode(models.Model):
    """A destination pincode a vendor delivers to, and whether it is out-of-delivery-area."""

    class Oda(models.TextChoices):
        NORMAL = "NORMAL", "Normal"
        ODA    = "ODA",    "Out of Delivery Area"

    vendor  = models.ForeignKey(Vendor, on_delete=models.CASCADE, related_name="pincodes")
    pincode = models.CharField(max_length=6)
    oda     = models.CharField(max_length=6, choices=Oda.choices, default=Oda.NORMAL)

    class Meta:
        ordering = ["pincode"]
        constraints = [
            models.UniqueConstraint(fields=["vendor", "pincode"], name="uniq_vendor_pincode"),
        ]

    def __str__(self):
        return f"{self.vendor.vendor_code}:{self.pincode} ({self.oda})"
