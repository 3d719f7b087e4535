"""
Bills. A Bill is written once, with its lines, and never changed afterwards;
there is at most one bill per (client, period) and a shipment is billed once.
"""

from django.db import models
from django.conf import settings


class Bill(models.Model):
    client         = models.ForeignKey("masters.Client", on_delete=models.PROTECT, related_name="bills")
    period_start   = models.DateField()
    period_end     = models.DateField()
    total_amount   = models.DecimalField(max_digits=14, decimal_places=2)
    shipment_count = models.PositiveIntegerField(default=0)
    created_by     = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL,
                                       null=True, blank=True, related_name="bills_generated")
    created_at     = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-period_end", "-created_at"]
        constraints = [
            models.UniqueConstraint(fields=["client", "period_start", "period_end"],
                                    name="uniq_bill_client_period"),
        ]

    def __str__(self):
        return f"{self.client.client_code} {self.period_start}..{self.period_end}: {self.total_amount}"


class BillLine(models.Model):
    """Charge breakdown for one shipment on a bill."""
    bill              = models.ForeignKey(Bill, on_delete=models.CASCADE, related_name="lines")
    shipment          = models.ForeignKey("shipments.Shipment", on_delete=models.PROTECT, related_name="bill_lines")
    zone              = models.ForeignKey("rates.Zone", on_delete=models.PROTECT, related_name="bill_lines")
    mode              = models.CharField(max_length=10)
    chargeable_weight = models.DecimalField(max_digits=12, decimal_places=3)
    rate_per_kg       = models.DecimalField(max_digits=10, decimal_places=2)
    freight           = models.DecimalField(max_digits=12, decimal_places=2)
    fuel              = models.DecimalField(max_digits=12, decimal_places=2)
    fov               = models.DecimalField(max_digits=12, decimal_places=2)
    docket            = models.DecimalField(max_digits=12, decimal_places=2)
    oda               = models.DecimalField(max_digits=12, decimal_places=2)
    other             = models.DecimalField(max_digits=12, decimal_places=2)
    amount            = models.DecimalField(max_digits=12, decimal_places=2)

    class Meta:
        ordering = ["id"]
        constraints = [
            models.UniqueConstraint(fields=["shipment"], name="uniq_bill_line_shipment"),
        ]

    def __str__(self):
        return f"{self.bill_id}/{self.shipment_id}: {self.amount}"
