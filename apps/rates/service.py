"""
Rate resolution and the freight charge formula.

    resolve_rate(client, mode, zone)  →  RateQuote
    ChargeCalculator.calculate(quote, weights, invoice value, ODA)  →  ChargeBreakdown

Both are read-only. Weights arrive as floats (box arithmetic) and are
converted to Decimal once, here; every money value is Decimal.
"""

import logging
from dataclasses import dataclass, asdict
from decimal import Decimal, ROUND_HALF_UP

from .models import ClientRate, ClientZoneRate
from freightdesk.errors import NoRateMasterForClientMode, NoZoneRate

logger = logging.getLogger("freightdesk.rates")

TWO_PLACES   = Decimal("0.01")
THREE_PLACES = Decimal("0.001")
HUNDRED      = Decimal("100")


def _money(value) -> Decimal:
    return Decimal(value).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def to_kg(value) -> Decimal:
    """Float kilograms → Decimal rounded to grams."""
    return Decimal(str(value or 0)).quantize(THREE_PLACES, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class RateQuote:
    client_rate_id:  int
    zone_id:         int
    rate_per_kg:     Decimal
    minimum_weight:  Decimal
    minimum_freight: Decimal
    docket_charges:  Decimal
    fuel_pct:        Decimal
    fov_pct:         Decimal
    oda_charge:      Decimal
    other_charges:   Decimal
    cft:             Decimal


def resolve_rate(client_id, mode, zone_id) -> RateQuote:
    """
    Find the rate master for (client, mode) and its per-kg rate for ``zone_id``.

    Raises NoRateMasterForClientMode if the client has no rate for the mode,
    NoZoneRate if that rate has no entry for the zone (or zone is None).
    """
    client_rate = ClientRate.objects.filter(client_id=client_id, mode=mode).first()
    if client_rate is None:
        raise NoRateMasterForClientMode(f"No rate master for client {client_id} in mode '{mode}'.")

    zone_rate = None
    if zone_id is not None:
        zone_rate = ClientZoneRate.objects.filter(client_rate=client_rate, zone_id=zone_id).first()
    if zone_rate is None:
        raise NoZoneRate(f"No per-kg rate for zone {zone_id} in client rate {client_rate.pk} ({mode}).")

    return RateQuote(
        client_rate_id  = client_rate.pk,
        zone_id         = zone_id,
        rate_per_kg     = zone_rate.rate_per_kg,
        minimum_weight  = client_rate.minimum_weight,
        minimum_freight = client_rate.minimum_freight,
        docket_charges  = client_rate.docket_charges,
        fuel_pct        = client_rate.fuel_pct,
        fov_pct         = client_rate.fov_pct,
        oda_charge      = client_rate.oda_charge,
        other_charges   = client_rate.other_charges,
        cft             = client_rate.cft,
    )


@dataclass(frozen=True)
class ChargeBreakdown:
    chargeable_weight: Decimal
    rate_per_kg:       Decimal
    freight:           Decimal
    fuel:              Decimal
    fov:               Decimal
    docket:            Decimal
    oda:               Decimal
    other:             Decimal
    total:             Decimal

    def as_dict(self) -> dict:
        return asdict(self)


class ChargeCalculator:
    """
    Full freight formula for one shipment.

    chargeable weight = max(actual, volumetric, rate minimum weight)
    freight           = max(chargeable weight × rate/kg, minimum freight)
    fuel              = freight × fuel %
    FOV               = invoice value × FOV %
    ODA               = flat ODA charge, only for ODA pincodes
    total             = freight + fuel + FOV + docket + ODA + other
    """

    def calculate(self, quote: RateQuote, actual_weight, volumetric_weight,
                  invoice_value=Decimal("0"), is_oda=False) -> ChargeBreakdown:
        chargeable = max(to_kg(actual_weight), to_kg(volumetric_weight), quote.minimum_weight)

        freight = _money(max(chargeable * quote.rate_per_kg, quote.minimum_freight))
        fuel    = _money(freight * quote.fuel_pct / HUNDRED)
        fov     = _money(Decimal(invoice_value or 0) * quote.fov_pct / HUNDRED)
        docket  = _money(quote.docket_charges)
        oda     = _money(quote.oda_charge if is_oda else 0)
        other   = _money(quote.other_charges)

        return ChargeBreakdown(
            chargeable_weight = chargeable,
            rate_per_kg       = quote.rate_per_kg,
            freight           = freight,
            fuel              = fuel,
            fov               = fov,
            docket            = docket,
            oda               = oda,
            other             = other,
            total             = freight + fuel + fov + docket + oda + other,
        )
