"""Master-data lookups used by shipment validation."""

import logging

from freightdesk.errors import InvalidPincodeForVendor
from .models import VendorPincode

logger = logging.getLogger("freightdesk.masters")


def vendor_pincode_oda(vendor_id, pincode) -> str:
    """
    Return the ODA category of ``pincode`` for ``vendor_id``.
    Raises InvalidPincodeForVendor when the vendor does not serve it.
    """
    oda = (
        VendorPincode.objects
        .filter(vendor_id=vendor_id, pincode=pincode)
        .values_list("oda", flat=True)
        .first()
    )
    if oda is None:
        logger.info("Pincode %s not serviceable by vendor %s", pincode, vendor_id)
        raise InvalidPincodeForVendor()
    return oda
