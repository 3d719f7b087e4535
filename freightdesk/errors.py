"""
Domain error kinds.

Services raise these; DRF renders them with the status code below, so views
do not need their own try/except blocks. No error is retried automatically.
"""

from rest_framework import status
from rest_framework.exceptions import APIException


class FreightDeskError(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Request could not be processed."
    default_code = "freightdesk_error"


# ── Validation class (4xx) ────────────────────────────────────────────────────
class InvalidPincodeForVendor(FreightDeskError):
    default_detail = "Invalid pincode for the selected vendor."
    default_code = "invalid_pincode_for_vendor"


class InvalidClient(FreightDeskError):
    default_detail = "Invalid client selected."
    default_code = "invalid_client"


class InvalidBillingPeriod(FreightDeskError):
    default_detail = "period_start must be on or before period_end."
    default_code = "invalid_billing_period"


class NoRateMasterForClientMode(FreightDeskError):
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    default_detail = "No rate master exists for this client and mode."
    default_code = "no_rate_master_for_client_mode"


class NoZoneRate(FreightDeskError):
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    default_detail = "No per-kg rate exists for this zone."
    default_code = "no_zone_rate"


class NoShipmentsInPeriod(FreightDeskError):
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    default_detail = "Client has no shipments in the billing period."
    default_code = "no_shipments_in_period"


class UnratedShipments(FreightDeskError):
    """
    Raised when one or more shipments of a bill run cannot be rated.
    ``detail`` carries one entry per shipment so the operator can fix the
    rate master and retry.
    """
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    default_detail = "Some shipments in the period have no applicable rate."
    default_code = "unrated_shipments"

    def __init__(self, failures):
        self.failures = failures
        super().__init__(detail={
            "error": self.default_detail,
            "shipments": failures,
        })


# ── Conflicts (409) ───────────────────────────────────────────────────────────
class BillAlreadyExists(FreightDeskError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "A bill already exists for this client and period."
    default_code = "bill_already_exists"


class ShipmentAlreadyBilled(FreightDeskError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "A shipment in this period was billed by another bill."
    default_code = "shipment_already_billed"


class MasterInUse(FreightDeskError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Record is referenced by other records and cannot be deleted."
    default_code = "master_in_use"


# ── Infrastructure (5xx) ──────────────────────────────────────────────────────
class PersistenceFailure(FreightDeskError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_detail = "The data store rejected the operation."
    default_code = "persistence_failure"
