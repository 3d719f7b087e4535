"""
FreightDesk Engine Tests
=========================
Covers: Dimensional weight | Box aggregation | Shipment validation |
        Rate resolution | Charge formula | Billing

Run:
    pytest tests/ -v
"""

from datetime import date
from decimal import Decimal
from unittest.mock import patch

import pytest
from django.db import DatabaseError, IntegrityError, transaction

from freightdesk.errors import (
    BillAlreadyExists, InvalidBillingPeriod, InvalidClient, InvalidPincodeForVendor,
    NoRateMasterForClientMode, NoShipmentsInPeriod, NoZoneRate, PersistenceFailure,
    ShipmentAlreadyBilled, UnratedShipments,
)

SEPT_START = date(2026, 9, 1)
SEPT_END   = date(2026, 9, 30)


# ═══════════════════════════════════════════════════════════════════════════════
# UNIT TESTS: Dimensional Weight
# ═══════════════════════════════════════════════════════════════════════════════

class TestVolumetricWeight:

    def setup_method(self):
        from apps.shipments.weights import volumetric_weight_per_piece
        self.vw = volumetric_weight_per_piece

    def test_surface_divisor(self):
        assert self.vw(50, 40, 30, "surface") == pytest.approx(60000 / 27000)

    def test_air_divisor(self):
        assert self.vw(50, 40, 30, "air") == pytest.approx(12.0)

    def test_cft_factor_scales_linearly(self):
        assert self.vw(50, 40, 30, "surface", 6) == pytest.approx(13.3333333)
        assert self.vw(50, 40, 30, "air", 2.5) == pytest.approx(30.0)

    def test_express_has_no_volumetric_weight(self):
        assert self.vw(50, 40, 30, "express", 6) == 0.0

    def test_unknown_mode_falls_back_to_zero(self):
        assert self.vw(50, 40, 30, "rail") == 0.0

    def test_zero_dimension(self):
        assert self.vw(0, 40, 30, "air") == 0.0


class TestBoxAggregator:

    def _boxes(self):
        from apps.shipments.weights import BoxInput
        return [
            BoxInput(number_of_pieces=2, length_cm=50, breadth_cm=40, height_cm=30, actual_weight_per_piece=5.0),
            BoxInput(number_of_pieces=1, length_cm=100, breadth_cm=50, height_cm=50, actual_weight_per_piece=20.0),
        ]

    def test_totals(self):
        from apps.shipments.weights import aggregate_boxes
        summary = aggregate_boxes(self._boxes(), "air")
        assert summary.total_pieces == 3
        assert summary.total_actual_weight == pytest.approx(30.0)
        assert summary.total_volumetric_weight == pytest.approx(74.0)

    def test_per_box_weights_keep_input_order(self):
        from apps.shipments.weights import aggregate_boxes
        boxes = self._boxes()
        summary = aggregate_boxes(boxes, "air")
        assert [w.box for w in summary.boxes] == boxes
        first, second = summary.boxes
        assert first.volumetric_weight_per_piece == pytest.approx(12.0)
        assert first.total_volumetric_weight == pytest.approx(24.0)
        assert second.total_volumetric_weight == pytest.approx(50.0)

    def test_box_total_is_per_piece_times_pieces(self):
        from apps.shipments.weights import aggregate_boxes
        for weighed in aggregate_boxes(self._boxes(), "surface", 6).boxes:
            assert weighed.total_volumetric_weight == pytest.approx(
                weighed.volumetric_weight_per_piece * weighed.box.number_of_pieces
            )

    def test_empty_input(self):
        from apps.shipments.weights import aggregate_boxes
        summary = aggregate_boxes([], "surface")
        assert summary.boxes == []
        assert summary.total_pieces == 0
        assert summary.total_actual_weight == 0.0
        assert summary.total_volumetric_weight == 0.0


# ═══════════════════════════════════════════════════════════════════════════════
# UNIT TESTS: Charge formula
# ═══════════════════════════════════════════════════════════════════════════════

def _quote(**overrides):
    from apps.rates.service import RateQuote
    values = dict(
        client_rate_id=1, zone_id=1,
        rate_per_kg=Decimal("20.00"), minimum_weight=Decimal("10.000"),
        minimum_freight=Decimal("300.00"), docket_charges=Decimal("100.00"),
        fuel_pct=Decimal("10.00"), fov_pct=Decimal("0.50"),
        oda_charge=Decimal("500.00"), other_charges=Decimal("25.00"),
        cft=Decimal("6.000"),
    )
    values.update(overrides)
    return RateQuote(**values)


class TestChargeCalculator:

    def setup_method(self):
        from apps.rates.service import ChargeCalculator
        self.calc = ChargeCalculator()

    def test_volumetric_weight_wins(self):
        charges = self.calc.calculate(_quote(), actual_weight=30.0, volumetric_weight=74.0,
                                      invoice_value=Decimal("10000"))
        assert charges.chargeable_weight == Decimal("74.000")
        assert charges.freight == Decimal("1480.00")
        assert charges.fuel    == Decimal("148.00")
        assert charges.fov     == Decimal("50.00")
        assert charges.docket  == Decimal("100.00")
        assert charges.oda     == Decimal("0.00")
        assert charges.other   == Decimal("25.00")
        assert charges.total   == Decimal("1803.00")

    def test_minimum_weight_and_freight_and_oda(self):
        charges = self.calc.calculate(_quote(), actual_weight=5.0, volumetric_weight=2.0, is_oda=True)
        # 10 kg minimum × 20 = 200 < 300 minimum freight
        assert charges.chargeable_weight == Decimal("10")
        assert charges.freight == Decimal("300.00")
        assert charges.fuel    == Decimal("30.00")
        assert charges.fov     == Decimal("0.00")
        assert charges.oda     == Decimal("500.00")
        assert charges.total   == Decimal("955.00")

    def test_rounds_half_up_to_paise(self):
        quote = _quote(rate_per_kg=Decimal("20.01"), minimum_weight=Decimal("0"),
                       minimum_freight=Decimal("0"), fuel_pct=Decimal("0"),
                       docket_charges=Decimal("0"), other_charges=Decimal("0"))
        charges = self.calc.calculate(quote, actual_weight=1.5, volumetric_weight=0)
        assert charges.freight == Decimal("30.02")   # 30.015
        assert charges.total   == Decimal("30.02")

    def test_as_dict_lists_every_component(self):
        charges = self.calc.calculate(_quote(), actual_weight=30.0, volumetric_weight=74.0)
        assert set(charges.as_dict()) == {
            "chargeable_weight", "rate_per_kg", "freight", "fuel", "fov",
            "docket", "oda", "other", "total",
        }


# ═══════════════════════════════════════════════════════════════════════════════
# DB TESTS: Rate resolution
# ═══════════════════════════════════════════════════════════════════════════════

@pytest.mark.django_db
class TestResolveRate:

    def test_resolves_zone_rate_and_fixed_charges(self, acme, zone_a, surface_rate):
        from apps.rates.service import resolve_rate
        quote = resolve_rate(acme.pk, "surface", zone_a.pk)
        assert quote.rate_per_kg == Decimal("20.00")
        assert quote.minimum_freight == Decimal("300.00")
        assert quote.cft == Decimal("6")
        assert quote.client_rate_id == surface_rate.pk

    def test_no_rate_master_for_mode(self, acme, zone_a, surface_rate):
        from apps.rates.service import resolve_rate
        with pytest.raises(NoRateMasterForClientMode):
            resolve_rate(acme.pk, "air", zone_a.pk)

    def test_no_zone_rate(self, acme, surface_rate):
        from apps.rates.models import Zone
        from apps.rates.service import resolve_rate
        zone_b = Zone.objects.create(name="Zone B")
        with pytest.raises(NoZoneRate):
            resolve_rate(acme.pk, "surface", zone_b.pk)

    def test_missing_zone_is_no_zone_rate(self, acme, surface_rate):
        from apps.rates.service import resolve_rate
        with pytest.raises(NoZoneRate):
            resolve_rate(acme.pk, "surface", None)

    def test_repeated_lookup_gives_equal_quotes(self, acme, zone_a, surface_rate):
        from apps.rates.service import resolve_rate
        first  = resolve_rate(acme.pk, "surface", zone_a.pk)
        second = resolve_rate(acme.pk, "surface", zone_a.pk)
        assert first == second


# ═══════════════════════════════════════════════════════════════════════════════
# DB TESTS: Shipment validation
# ═══════════════════════════════════════════════════════════════════════════════

@pytest.mark.django_db
class TestShipmentValidator:

    def setup_method(self):
        from apps.shipments.service import ShipmentValidator
        self.validator = ShipmentValidator()

    def test_normal_pincode_with_rate_master_cft(self, acme, vendor, surface_rate):
        result = self.validator.validate(vendor.pk, "110001", acme.pk, "surface")
        assert result.oda == "NORMAL"
        assert result.cft_factor == 6.0

    def test_oda_pincode(self, acme, vendor):
        result = self.validator.validate(vendor.pk, "793001", acme.pk, "surface")
        assert result.oda == "ODA"

    def test_cft_defaults_to_one_without_rate_for_mode(self, acme, vendor, surface_rate):
        result = self.validator.validate(vendor.pk, "110001", acme.pk, "air")
        assert result.cft_factor == 1.0

    def test_unserviceable_pincode_rejected(self, acme, vendor):
        with pytest.raises(InvalidPincodeForVendor):
            self.validator.validate(vendor.pk, "560001", acme.pk, "surface")

    def test_unknown_client_rejected(self, vendor):
        import uuid
        with pytest.raises(InvalidClient):
            self.validator.validate(vendor.pk, "110001", uuid.uuid4(), "surface")

    def test_identical_inputs_identical_results(self, acme, vendor, surface_rate):
        first  = self.validator.validate(vendor.pk, "110001", acme.pk, "surface")
        second = self.validator.validate(vendor.pk, "110001", acme.pk, "surface")
        assert first == second


# ═══════════════════════════════════════════════════════════════════════════════
# DB TESTS: Shipment service
# ═══════════════════════════════════════════════════════════════════════════════

@pytest.mark.django_db
class TestShipmentService:

    def test_create_weighs_boxes_with_rate_master_cft(self, make_shipment, surface_rate):
        shipment = make_shipment()
        # 2 × (50·40·30·6 / 27000)
        assert shipment.actual_volumetric_weight == pytest.approx(26.6666667)
        assert shipment.actual_weight == pytest.approx(10.0)
        assert shipment.wfl_volumetric_weight == pytest.approx(26.6666667)
        assert shipment.wfl_weight == pytest.approx(10.0)
        assert shipment.oda == "NORMAL"
        assert shipment.total_box == 1
        assert shipment.boxes.filter(kind="VENDOR").count() == 1
        assert shipment.boxes.filter(kind="WFL").count() == 1

    def test_boxes_read_back_match_aggregation_in_order(self, make_shipment, surface_rate):
        from apps.shipments.weights import BoxInput, aggregate_boxes
        rows = [
            {"number_of_pieces": 2, "length_cm": 50, "breadth_cm": 40, "height_cm": 30, "actual_weight_per_piece": 5.0},
            {"number_of_pieces": 1, "length_cm": 100, "breadth_cm": 50, "height_cm": 50, "actual_weight_per_piece": 20.0},
            {"number_of_pieces": 4, "length_cm": 25.5, "breadth_cm": 20, "height_cm": 10, "actual_weight_per_piece": 1.5},
        ]
        shipment = make_shipment(boxes=rows)
        expected = aggregate_boxes([BoxInput(**row) for row in rows], "surface", 6.0)

        stored = list(shipment.boxes.filter(kind="VENDOR").order_by("position"))
        assert len(stored) == len(expected.boxes) == 3
        for box, weighed in zip(stored, expected.boxes):
            assert box.number_of_pieces == weighed.box.number_of_pieces
            assert box.length_cm == weighed.box.length_cm
            assert box.breadth_cm == weighed.box.breadth_cm
            assert box.height_cm == weighed.box.height_cm
            assert box.actual_weight_per_piece == weighed.box.actual_weight_per_piece
            assert box.volumetric_weight_per_piece == pytest.approx(weighed.volumetric_weight_per_piece)
            assert box.total_volumetric_weight == pytest.approx(weighed.total_volumetric_weight)
        assert shipment.actual_weight == pytest.approx(expected.total_actual_weight)
        assert shipment.actual_volumetric_weight == pytest.approx(expected.total_volumetric_weight)
        assert shipment.total_box == 3

    def test_create_stamps_oda(self, make_shipment):
        shipment = make_shipment(pin_code="793001")
        assert shipment.oda == "ODA"
        assert shipment.is_oda

    def test_invalid_pincode_writes_nothing(self, make_shipment):
        from apps.shipments.models import Shipment, ShipmentBox
        with pytest.raises(InvalidPincodeForVendor):
            make_shipment(pin_code="560001")
        assert Shipment.objects.count() == 0
        assert ShipmentBox.objects.count() == 0

    def test_box_insert_failure_rolls_back_shipment(self, make_shipment):
        from apps.shipments.models import Shipment, ShipmentBox
        with patch.object(ShipmentBox.objects, "bulk_create", side_effect=DatabaseError("disk full")):
            with pytest.raises(PersistenceFailure):
                make_shipment()
        assert Shipment.objects.count() == 0

    def test_update_replaces_boxes_wholesale(self, make_shipment):
        from apps.shipments.service import ShipmentService
        shipment = make_shipment(mode="air")
        new_boxes = [
            {"number_of_pieces": 1, "length_cm": 10, "breadth_cm": 10, "height_cm": 10, "actual_weight_per_piece": 1.0},
            {"number_of_pieces": 3, "length_cm": 20, "breadth_cm": 10, "height_cm": 10, "actual_weight_per_piece": 2.0},
        ]
        ShipmentService().update_shipment(shipment, {}, vendor_boxes=new_boxes)

        vendor_boxes = list(shipment.boxes.filter(kind="VENDOR").order_by("position"))
        assert [b.number_of_pieces for b in vendor_boxes] == [1, 3]
        assert shipment.actual_weight == pytest.approx(7.0)
        assert shipment.actual_volumetric_weight == pytest.approx(0.2 + 3 * 0.4)
        # WFL boxes were not submitted, so they are kept
        assert shipment.boxes.filter(kind="WFL").count() == 1
        assert shipment.wfl_volumetric_weight == pytest.approx(24.0)

    def test_update_with_empty_list_clears_boxes(self, make_shipment):
        from apps.shipments.service import ShipmentService
        shipment = make_shipment()
        ShipmentService().update_shipment(shipment, {}, vendor_boxes=[], wfl_boxes=[])
        assert shipment.boxes.count() == 0
        assert shipment.actual_weight == 0.0
        assert shipment.wfl_volumetric_weight == 0.0

    def test_mode_change_reweighs_kept_boxes(self, make_shipment, surface_rate):
        from apps.shipments.service import ShipmentService
        shipment = make_shipment()
        ShipmentService().update_shipment(shipment, {"mode": "express"})
        assert shipment.actual_volumetric_weight == 0.0
        assert shipment.actual_weight == pytest.approx(10.0)


# ═══════════════════════════════════════════════════════════════════════════════
# DB TESTS: Billing
# ═══════════════════════════════════════════════════════════════════════════════

@pytest.mark.django_db
class TestBillingService:

    def setup_method(self):
        from apps.billing.service import BillingService
        self.service = BillingService()

    def test_generate_applies_full_formula(self, acme, admin, surface_rate, make_shipment):
        make_shipment()
        bill = self.service.generate_bill(acme.pk, SEPT_START, SEPT_END, created_by=admin)
        # chargeable 26.667 kg × 20 = 533.34; fuel 53.33; FOV 50; docket 100; other 25
        assert bill.total_amount == Decimal("761.67")
        assert bill.shipment_count == 1
        line = bill.lines.get()
        assert line.chargeable_weight == Decimal("26.667")
        assert line.freight == Decimal("533.34")
        assert line.amount == Decimal("761.67")
        assert bill.created_by == admin

    def test_period_is_inclusive(self, acme, surface_rate, make_shipment):
        make_shipment(shipment_date=SEPT_START)
        make_shipment(shipment_date=SEPT_END)
        make_shipment(shipment_date=date(2026, 10, 1))
        bill = self.service.generate_bill(acme.pk, SEPT_START, SEPT_END)
        assert bill.shipment_count == 2
        assert bill.total_amount == Decimal("1523.34")

    def test_no_shipments_in_period(self, acme, surface_rate, make_shipment):
        from apps.billing.models import Bill
        make_shipment(shipment_date=date(2026, 8, 31))
        with pytest.raises(NoShipmentsInPeriod):
            self.service.generate_bill(acme.pk, SEPT_START, SEPT_END)
        assert Bill.objects.count() == 0

    def test_unrated_shipment_fails_whole_bill(self, acme, surface_rate, make_shipment):
        from apps.billing.models import Bill
        make_shipment()
        air = make_shipment(mode="air")
        unzoned = make_shipment(zone=None)

        with pytest.raises(UnratedShipments) as excinfo:
            self.service.generate_bill(acme.pk, SEPT_START, SEPT_END)

        reasons = {f["shipment"]: f["reason"] for f in excinfo.value.failures}
        assert reasons == {
            str(air.pk):     "no_rate_master_for_client_mode",
            str(unzoned.pk): "no_zone_rate",
        }
        assert Bill.objects.count() == 0

    def test_duplicate_period_rejected(self, acme, surface_rate, make_shipment):
        make_shipment()
        self.service.generate_bill(acme.pk, SEPT_START, SEPT_END)
        with pytest.raises(BillAlreadyExists):
            self.service.generate_bill(acme.pk, SEPT_START, SEPT_END)

    def test_concurrent_insert_maps_to_bill_already_exists(self, acme, surface_rate, make_shipment):
        from apps.billing.models import Bill
        make_shipment()
        # Pre-check sees no bill, the insert loses the race, the re-check finds the winner
        with patch.object(self.service, "_bill_exists", side_effect=[False, True]), \
             patch.object(Bill.objects, "create", side_effect=IntegrityError("unique")):
            with pytest.raises(BillAlreadyExists):
                self.service.generate_bill(acme.pk, SEPT_START, SEPT_END)

    def test_overlapping_period_does_not_rebill_shipment(self, acme, surface_rate, make_shipment):
        from apps.billing.models import BillLine
        shipment = make_shipment(shipment_date=date(2026, 9, 20))
        self.service.generate_bill(acme.pk, SEPT_START, SEPT_END)
        with pytest.raises(NoShipmentsInPeriod):
            self.service.generate_bill(acme.pk, date(2026, 9, 15), date(2026, 10, 15))
        assert BillLine.objects.filter(shipment=shipment).count() == 1

    def test_overlapping_period_bills_only_new_shipments(self, acme, surface_rate, make_shipment):
        make_shipment(shipment_date=date(2026, 9, 20))
        october = make_shipment(shipment_date=date(2026, 10, 5))
        self.service.generate_bill(acme.pk, SEPT_START, SEPT_END)
        bill = self.service.generate_bill(acme.pk, date(2026, 9, 15), date(2026, 10, 15))
        assert [line.shipment_id for line in bill.lines.all()] == [october.pk]
        assert bill.total_amount == Decimal("761.67")

    def test_preview_skips_billed_shipments(self, acme, surface_rate, make_shipment):
        make_shipment(shipment_date=date(2026, 9, 20))
        make_shipment(shipment_date=date(2026, 10, 5))
        self.service.generate_bill(acme.pk, SEPT_START, SEPT_END)
        preview = self.service.preview_bill(acme.pk, SEPT_START, date(2026, 10, 31))
        assert preview.shipment_count == 1

    def test_shipment_billed_by_concurrent_bill(self, acme, surface_rate, make_shipment):
        from apps.billing.models import Bill, BillLine
        make_shipment()
        with patch.object(BillLine.objects, "bulk_create", side_effect=IntegrityError("unique shipment")):
            with pytest.raises(ShipmentAlreadyBilled):
                self.service.generate_bill(acme.pk, SEPT_START, SEPT_END)
        assert Bill.objects.count() == 0

    def test_shipment_unique_across_bills(self, acme, surface_rate, make_shipment):
        from apps.billing.models import Bill, BillLine
        shipment = make_shipment()
        bill = self.service.generate_bill(acme.pk, SEPT_START, SEPT_END)
        other = Bill.objects.create(client=acme, period_start=date(2026, 9, 15),
                                    period_end=date(2026, 10, 15), total_amount=Decimal("0"))
        line = bill.lines.get()
        line.pk = None
        line.bill = other
        with pytest.raises(IntegrityError), transaction.atomic():
            line.save()
        assert BillLine.objects.filter(shipment=shipment).count() == 1

    def test_other_database_errors_are_persistence_failures(self, acme, surface_rate, make_shipment):
        from apps.billing.models import Bill, BillLine
        make_shipment()
        with patch.object(BillLine.objects, "bulk_create", side_effect=DatabaseError("gone")):
            with pytest.raises(PersistenceFailure):
                self.service.generate_bill(acme.pk, SEPT_START, SEPT_END)
        assert Bill.objects.count() == 0

    def test_inverted_period(self, acme):
        with pytest.raises(InvalidBillingPeriod):
            self.service.generate_bill(acme.pk, SEPT_END, SEPT_START)

    def test_unknown_client(self, db):
        import uuid
        with pytest.raises(InvalidClient):
            self.service.generate_bill(uuid.uuid4(), SEPT_START, SEPT_END)

    def test_preview_persists_nothing(self, acme, surface_rate, make_shipment):
        from apps.billing.models import Bill
        make_shipment()
        preview = self.service.preview_bill(acme.pk, SEPT_START, SEPT_END)
        assert preview.total_amount == Decimal("761.67")
        assert preview.shipment_count == 1
        assert Bill.objects.count() == 0


@pytest.mark.django_db
class TestMonthlyBillingTask:

    def test_bills_each_client_and_skips_already_billed(self, acme, surface_rate, make_shipment):
        from apps.masters.models import Client
        from apps.billing.tasks import generate_monthly_bills

        unrated_client = Client.objects.create(client_code="NORATE", client_name="No Rate Co")
        make_shipment()
        make_shipment(client=unrated_client)

        first = generate_monthly_bills(2026, 9)
        assert len(first["generated"]) == 1
        assert first["skipped"] == []
        assert first["failed"] == [{"client": str(unrated_client.pk), "reason": "unrated_shipments"}]

        second = generate_monthly_bills(2026, 9)
        assert second["generated"] == []
        assert second["skipped"] == [str(acme.pk)]

    def test_skips_client_whose_shipments_are_on_other_bills(self, acme, surface_rate, make_shipment):
        from apps.billing.service import BillingService
        from apps.billing.tasks import generate_monthly_bills
        make_shipment(shipment_date=date(2026, 9, 20))
        BillingService().generate_bill(acme.pk, date(2026, 9, 15), date(2026, 9, 25))

        result = generate_monthly_bills(2026, 9)
        assert result == {"generated": [], "skipped": [str(acme.pk)], "failed": []}

    def test_month_bounds(self, acme, surface_rate, make_shipment):
        from apps.billing.models import Bill
        from apps.billing.tasks import generate_monthly_bills
        make_shipment(shipment_date=date(2026, 2, 28))
        generate_monthly_bills(2026, 2)
        bill = Bill.objects.get()
        assert bill.period_start == date(2026, 2, 1)
        assert bill.period_end == date(2026, 2, 28)
