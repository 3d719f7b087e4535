"""
Shipment validation and persistence.

    ShipmentValidator.validate  →  ODA flag + CFT factor (read-only)
    ShipmentService.create_shipment / update_shipment  →  shipment + boxes, one transaction

Aggregate weights are never taken from the caller: every write re-weighs the
vendor and WFL box lists with weights.aggregate_boxes and stores the totals.
"""

import logging
from dataclasses import dataclass

from django.db import DatabaseError, transaction

from apps.masters.models import Client
from apps.masters.service import vendor_pincode_oda
from apps.rates.models import ClientRate
from freightdesk.errors import InvalidClient, PersistenceFailure
from .models import Shipment, ShipmentBox
from .weights import BoxInput, aggregate_boxes

logger = logging.getLogger("freightdesk.shipments")

BOX_FIELDS = ("number_of_pieces", "length_cm", "breadth_cm", "height_cm", "actual_weight_per_piece")


@dataclass(frozen=True)
class ValidationResult:
    oda:        str
    cft_factor: float


class ShipmentValidator:
    """
    Checks the vendor serves the destination pincode and the client exists,
    and resolves the CFT factor from the client's rate master for the mode
    (1 when the client has no rate master for it).
    """

    def validate(self, vendor_id, pincode, client_id, mode) -> ValidationResult:
        oda = vendor_pincode_oda(vendor_id, pincode)

        if not Client.objects.filter(pk=client_id).exists():
            raise InvalidClient()

        cft = (
            ClientRate.objects
            .filter(client_id=client_id, mode=mode)
            .values_list("cft", flat=True)
            .first()
        )
        return ValidationResult(oda=oda, cft_factor=float(cft) if cft is not None else 1.0)


def _box_inputs(rows):
    return [BoxInput(**{name: row[name] for name in BOX_FIELDS}) for row in rows]


def _current_box_rows(shipment, kind):
    return list(shipment.boxes.filter(kind=kind).order_by("position").values(*BOX_FIELDS))


class ShipmentService:
    """
    Create and update shipments with their boxes.
    The validator is injected so tests can swap it.
    """

    def __init__(self, validator=None):
        self.validator = validator or ShipmentValidator()

    # ── create ────────────────────────────────────────────────────────────────
    def create_shipment(self, created_by, data: dict, vendor_boxes, wfl_boxes=None,
                        wfl_same_as_vendor=False) -> Shipment:
        """
        ``data`` holds the scalar shipment fields with ``client``/``vendor``/``zone``
        as model instances; box lists are dicts keyed by BOX_FIELDS.
        """
        data = dict(data)
        vendor_boxes = list(vendor_boxes or [])
        wfl_boxes = list(vendor_boxes if wfl_same_as_vendor else (wfl_boxes or []))

        result = self.validator.validate(
            data["vendor"].pk, data["pin_code"], data["client"].pk, data["mode"],
        )
        data["oda"] = result.oda
        if data.get("total_box") is None:
            data["total_box"] = len(vendor_boxes)

        try:
            with transaction.atomic():
                shipment = Shipment(created_by=created_by, **data)
                self._apply_weights(shipment, vendor_boxes, wfl_boxes, result.cft_factor)
                shipment.save()
                self._write_boxes(shipment, vendor_boxes, wfl_boxes, result.cft_factor)
        except DatabaseError as exc:
            logger.error("Shipment create failed: %s", exc)
            raise PersistenceFailure() from exc

        logger.info("Shipment %s created (%d vendor / %d WFL boxes, oda=%s)",
                    shipment, len(vendor_boxes), len(wfl_boxes), shipment.oda)
        return shipment

    # ── update ────────────────────────────────────────────────────────────────
    def update_shipment(self, shipment: Shipment, data: dict, vendor_boxes=None,
                        wfl_boxes=None, wfl_same_as_vendor=False) -> Shipment:
        """
        Apply ``data`` and replace the box lists. A list passed as None keeps the
        current boxes of that kind; any other list, empty included, becomes the
        new box set. Weights are recomputed either way since mode or client
        (and so the CFT factor) may have changed.
        """
        for name, value in data.items():
            setattr(shipment, name, value)

        if vendor_boxes is None:
            vendor_boxes = _current_box_rows(shipment, ShipmentBox.Kind.VENDOR)
        vendor_boxes = list(vendor_boxes)
        if wfl_same_as_vendor:
            wfl_boxes = vendor_boxes
        elif wfl_boxes is None:
            wfl_boxes = _current_box_rows(shipment, ShipmentBox.Kind.WFL)
        wfl_boxes = list(wfl_boxes)

        result = self.validator.validate(
            shipment.vendor_id, shipment.pin_code, shipment.client_id, shipment.mode,
        )
        shipment.oda = result.oda
        if shipment.total_box is None:
            shipment.total_box = len(vendor_boxes)

        try:
            with transaction.atomic():
                self._apply_weights(shipment, vendor_boxes, wfl_boxes, result.cft_factor)
                shipment.save()
                shipment.boxes.all().delete()
                self._write_boxes(shipment, vendor_boxes, wfl_boxes, result.cft_factor)
        except DatabaseError as exc:
            logger.error("Shipment %s update failed: %s", shipment.pk, exc)
            raise PersistenceFailure() from exc

        logger.info("Shipment %s updated (%d vendor / %d WFL boxes)",
                    shipment, len(vendor_boxes), len(wfl_boxes))
        return shipment

    # ── helpers ───────────────────────────────────────────────────────────────
    def _apply_weights(self, shipment, vendor_boxes, wfl_boxes, cft_factor):
        vendor = aggregate_boxes(_box_inputs(vendor_boxes), shipment.mode, cft_factor)
        wfl    = aggregate_boxes(_box_inputs(wfl_boxes), shipment.mode, cft_factor)
        shipment.actual_weight            = vendor.total_actual_weight
        shipment.actual_volumetric_weight = vendor.total_volumetric_weight
        shipment.wfl_weight               = wfl.total_actual_weight
        shipment.wfl_volumetric_weight    = wfl.total_volumetric_weight

    def _write_boxes(self, shipment, vendor_boxes, wfl_boxes, cft_factor):
        rows = []
        for kind, boxes in ((ShipmentBox.Kind.VENDOR, vendor_boxes), (ShipmentBox.Kind.WFL, wfl_boxes)):
            summary = aggregate_boxes(_box_inputs(boxes), shipment.mode, cft_factor)
            for position, weighed in enumerate(summary.boxes):
                box = weighed.box
                rows.append(ShipmentBox(
                    shipment=shipment,
                    kind=kind,
                    position=position,
                    number_of_pieces=box.number_of_pieces,
                    length_cm=box.length_cm,
                    breadth_cm=box.breadth_cm,
                    height_cm=box.height_cm,
                    actual_weight_per_piece=box.actual_weight_per_piece,
                    volumetric_weight_per_piece=weighed.volumetric_weight_per_piece,
                    total_volumetric_weight=weighed.total_volumetric_weight,
                ))
        ShipmentBox.objects.bulk_create(rows)
