"""
Management command: seed rating zones, optionally with a demo client,
vendor and rate master to try the API against.

Usage:
    python manage.py seed_initial_data
    python manage.py seed_initial_data --demo
"""

from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import transaction

from apps.masters.models import Client, Vendor, VendorPincode
from apps.rates.models import Zone, ClientRate, ClientZoneRate, Mode


ZONES = [
    "Zone A",        # within city
    "Zone B",        # within state
    "Zone C",        # metro to metro
    "Zone D",        # rest of India
    "Zone E",        # special destinations
    "North East",
    "J&K",
]

DEMO_RATES = {
    "Zone A": "18.00",
    "Zone B": "24.00",
    "Zone C": "32.00",
    "Zone D": "38.00",
    "Zone E": "45.00",
    "North East": "55.00",
    "J&K": "55.00",
}

DEMO_PINCODES = [
    ("110001", VendorPincode.Oda.NORMAL),
    ("400001", VendorPincode.Oda.NORMAL),
    ("560001", VendorPincode.Oda.NORMAL),
    ("793001", VendorPincode.Oda.ODA),
    ("190001", VendorPincode.Oda.ODA),
]


class Command(BaseCommand):
    help = "Seed rating zones (and, with --demo, a sample client, vendor and rate master)"

    def add_arguments(self, parser):
        parser.add_argument("--demo", action="store_true",
                            help="Also create a demo client, vendor, pincodes and surface rates")

    @transaction.atomic
    def handle(self, *args, **options):
        created_zones = 0
        for name in ZONES:
            _, created = Zone.objects.get_or_create(name=name)
            if created:
                created_zones += 1
        self.stdout.write(self.style.SUCCESS(f"Seeded {created_zones} zones."))

        if options["demo"]:
            self._seed_demo()

    def _seed_demo(self):
        client, _ = Client.objects.get_or_create(
            client_code="DEMO01",
            defaults={"client_name": "Demo Traders", "pin_code": "110001"},
        )
        vendor, _ = Vendor.objects.get_or_create(
            vendor_code="DEMOV1",
            defaults={"name": "Demo Express Carriers"},
        )
        for pincode, oda in DEMO_PINCODES:
            VendorPincode.objects.get_or_create(vendor=vendor, pincode=pincode, defaults={"oda": oda})

        rate, _ = ClientRate.objects.get_or_create(
            client=client, mode=Mode.SURFACE,
            defaults={
                "cft":             Decimal("6"),
                "minimum_weight":  Decimal("20"),
                "minimum_freight": Decimal("350"),
                "docket_charges":  Decimal("100"),
                "fuel_pct":        Decimal("10"),
                "fov_pct":         Decimal("0.2"),
                "oda_charge":      Decimal("500"),
            },
        )
        for zone in Zone.objects.filter(name__in=DEMO_RATES):
            ClientZoneRate.objects.get_or_create(
                client_rate=rate, zone=zone,
                defaults={"rate_per_kg": Decimal(DEMO_RATES[zone.name])},
            )
        self.stdout.write(self.style.SUCCESS(
            f"Demo client {client.client_code}, vendor {vendor.vendor_code} and surface rates ready."
        ))
