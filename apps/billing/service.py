"""
BillingService: rate every shipment a client sent in a period and write the bill.

    preview_bill   →  BillPreview (nothing persisted)
    generate_bill  →  Bill + BillLines, one transaction

Each shipment is rated by (client, shipment.mode, shipment.zone) and charged
on its WFL weights with the full charge formula. Shipments already on a bill
are left out, so overlapping periods never bill a shipment twice. A bill is
all or nothing: if any shipment cannot be rated, no bill is written and
UnratedShipments lists every shipment that failed.
"""

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import List

from django.db import DatabaseError, IntegrityError, transaction

from apps.masters.models import Client
from apps.rates.service import resolve_rate, ChargeCalculator, ChargeBreakdown, RateQuote
from apps.shipments.models import Shipment
from freightdesk.errors import (
    BillAlreadyExists, InvalidBillingPeriod, InvalidClient, NoRateMasterForClientMode,
    NoShipmentsInPeriod, NoZoneRate, PersistenceFailure, ShipmentAlreadyBilled, UnratedShipments,
)
from .models import Bill, BillLine

logger = logging.getLogger("freightdesk.billing")


@dataclass(frozen=True)
class RatedShipment:
    shipment: Shipment
    quote:    RateQuote
    charges:  ChargeBreakdown


@dataclass(frozen=True)
class BillPreview:
    client:       Client
    period_start: object
    period_end:   object
    lines:        List[RatedShipment] = field(default_factory=list)
    total_amount: Decimal = Decimal("0.00")

    @property
    def shipment_count(self):
        return len(self.lines)


class BillingService:
    """
    Bill generation for one client and an inclusive date range.
    The charge calculator is injected so tests can swap it.
    """

    def __init__(self, calculator=None):
        self.calculator = calculator or ChargeCalculator()

    # ── preview (read-only) ───────────────────────────────────────────────────
    def preview_bill(self, client_id, period_start, period_end) -> BillPreview:
        if period_start > period_end:
            raise InvalidBillingPeriod()

        client = Client.objects.filter(pk=client_id).first()
        if client is None:
            raise InvalidClient()

        shipments = list(
            Shipment.objects
            .filter(client=client, shipment_date__range=(period_start, period_end),
                    bill_lines__isnull=True)
            .select_related("zone")
            .order_by("shipment_date", "created_at")
        )
        if not shipments:
            raise NoShipmentsInPeriod(
                f"Client {client.client_code} has no unbilled shipments between {period_start} and {period_end}."
            )

        lines, failures = [], []
        for shipment in shipments:
            try:
                lines.append(self._rate(shipment))
            except (NoRateMasterForClientMode, NoZoneRate) as exc:
                failures.append({
                    "shipment":   str(shipment.pk),
                    "wfl_number": shipment.wfl_number,
                    "mode":       shipment.mode,
                    "zone":       shipment.zone.name if shipment.zone else "",
                    "reason":     exc.default_code,
                    "detail":     str(exc.detail),
                })

        if failures:
            logger.warning("Bill for %s %s..%s blocked: %d of %d shipments unrated",
                           client.client_code, period_start, period_end, len(failures), len(shipments))
            raise UnratedShipments(failures)

        total = sum((line.charges.total for line in lines), Decimal("0.00"))
        return BillPreview(client=client, period_start=period_start, period_end=period_end,
                           lines=lines, total_amount=total)

    # ── generate (persists) ───────────────────────────────────────────────────
    def generate_bill(self, client_id, period_start, period_end, created_by=None) -> Bill:
        if period_start > period_end:
            raise InvalidBillingPeriod()
        if self._bill_exists(client_id, period_start, period_end):
            raise BillAlreadyExists()

        preview = self.preview_bill(client_id, period_start, period_end)

        try:
            with transaction.atomic():
                bill = Bill.objects.create(
                    client=preview.client,
                    period_start=period_start,
                    period_end=period_end,
                    total_amount=preview.total_amount,
                    shipment_count=preview.shipment_count,
                    created_by=created_by,
                )
                BillLine.objects.bulk_create([
                    BillLine(
                        bill=bill,
                        shipment=line.shipment,
                        zone_id=line.quote.zone_id,
                        mode=line.shipment.mode,
                        chargeable_weight=line.charges.chargeable_weight,
                        rate_per_kg=line.charges.rate_per_kg,
                        freight=line.charges.freight,
                        fuel=line.charges.fuel,
                        fov=line.charges.fov,
                        docket=line.charges.docket,
                        oda=line.charges.oda,
                        other=line.charges.other,
                        amount=line.charges.total,
                    )
                    for line in preview.lines
                ])
        except IntegrityError as exc:
            # Lost a race: either the same period or an overlapping bill took a shipment
            if self._bill_exists(client_id, period_start, period_end):
                logger.info("Bill for %s %s..%s already written: %s",
                            preview.client.client_code, period_start, period_end, exc)
                raise BillAlreadyExists() from exc
            logger.info("Bill for %s %s..%s lost shipments to another bill: %s",
                        preview.client.client_code, period_start, period_end, exc)
            raise ShipmentAlreadyBilled() from exc
        except DatabaseError as exc:
            logger.error("Bill write failed for %s: %s", preview.client.client_code, exc)
            raise PersistenceFailure() from exc

        logger.info("Bill %s generated for %s: %d shipments, total %s",
                    bill.pk, preview.client.client_code, bill.shipment_count, bill.total_amount)
        return bill

    def _bill_exists(self, client_id, period_start, period_end) -> bool:
        return Bill.objects.filter(client_id=client_id, period_start=period_start,
                                   period_end=period_end).exists()

    def _rate(self, shipment) -> RatedShipment:
        quote = resolve_rate(shipment.client_id, shipment.mode, shipment.zone_id)
        charges = self.calculator.calculate(
            quote,
            actual_weight=shipment.wfl_weight,
            volumetric_weight=shipment.wfl_volumetric_weight,
            invoice_value=shipment.invoice_value,
            is_oda=shipment.is_oda,
        )
        return RatedShipment(shipment=shipment, quote=quote, charges=charges)
