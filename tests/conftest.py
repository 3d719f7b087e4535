"""Shared fixtures: operators, masters, a surface rate master and a shipment factory."""

from datetime import date
from decimal import Decimal

import pytest


@pytest.fixture
def api_client():
    from rest_framework.test import APIClient
    return APIClient()


@pytest.fixture
def make_operator(db):
    from django.contrib.auth import get_user_model
    Operator = get_user_model()

    def _make(email, role="DATA_ENTRY", **kwargs):
        return Operator.objects.create_user(
            email=email, password="Test@1234",
            name=kwargs.get("name", "Test Operator"), role=role,
        )
    return _make


@pytest.fixture
def operator(make_operator):
    return make_operator("entry@freightdesk.local", name="Data Entry Dee")


@pytest.fixture
def admin(make_operator):
    return make_operator("admin@freightdesk.local", role="ADMIN", name="Admin Asha")


@pytest.fixture
def auth_client(api_client, operator):
    api_client.force_authenticate(user=operator)
    return api_client


@pytest.fixture
def admin_client(api_client, admin):
    api_client.force_authenticate(user=admin)
    return api_client


@pytest.fixture
def acme(db):
    from apps.masters.models import Client
    return Client.objects.create(client_code="ACME01", client_name="Acme Traders", pin_code="110001")


@pytest.fixture
def vendor(db):
    from apps.masters.models import Vendor, VendorPincode
    vendor = Vendor.objects.create(vendor_code="BLUE01", name="Blue Line Couriers")
    VendorPincode.objects.create(vendor=vendor, pincode="110001", oda=VendorPincode.Oda.NORMAL)
    VendorPincode.objects.create(vendor=vendor, pincode="793001", oda=VendorPincode.Oda.ODA)
    return vendor


@pytest.fixture
def zone_a(db):
    from apps.rates.models import Zone
    return Zone.objects.create(name="Zone A")


@pytest.fixture
def surface_rate(acme, zone_a):
    """
    Surface rate for ACME: CFT 6, 10 kg minimum, 300 minimum freight,
    20/kg in Zone A, 10% fuel, 0.5% FOV, 100 docket, 500 ODA, 25 other.
    """
    from apps.rates.models import ClientRate, ClientZoneRate
    rate = ClientRate.objects.create(
        client=acme, mode="surface",
        cft=Decimal("6"),
        minimum_weight=Decimal("10"),
        minimum_freight=Decimal("300.00"),
        docket_charges=Decimal("100.00"),
        fuel_pct=Decimal("10.00"),
        fov_pct=Decimal("0.50"),
        oda_charge=Decimal("500.00"),
        other_charges=Decimal("25.00"),
    )
    ClientZoneRate.objects.create(client_rate=rate, zone=zone_a, rate_per_kg=Decimal("20.00"))
    return rate


# Two 50×40×30 cm pieces of 5 kg each
STANDARD_BOX = {
    "number_of_pieces": 2, "length_cm": 50, "breadth_cm": 40, "height_cm": 30,
    "actual_weight_per_piece": 5.0,
}


@pytest.fixture
def make_shipment(operator, acme, vendor, zone_a):
    """Create a shipment through ShipmentService with WFL boxes copied from vendor boxes."""
    from apps.shipments.service import ShipmentService

    def _make(client=None, mode="surface", zone=zone_a, pin_code="110001",
              shipment_date=date(2026, 9, 10), boxes=None, **extra):
        data = {
            "client": client or acme, "vendor": vendor, "zone": zone,
            "mode": mode, "pin_code": pin_code, "shipment_date": shipment_date,
            "invoice_value": Decimal("10000.00"),
        }
        data.update(extra)
        return ShipmentService().create_shipment(
            operator, data,
            vendor_boxes=boxes if boxes is not None else [STANDARD_BOX],
            wfl_same_as_vendor=True,
        )
    return _make
