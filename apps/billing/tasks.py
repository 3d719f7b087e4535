"""Celery tasks for scheduled billing."""

import calendar
import logging
from datetime import date

from celery import shared_task

logger = logging.getLogger("freightdesk.tasks")


@shared_task
def generate_monthly_bills(year: int, month: int) -> dict:
    """
    Bill every client that shipped during the calendar month.
    Clients already billed for the month, or whose shipments are all on
    other bills, are skipped. A client whose bill cannot be generated is
    logged and left for an operator, and the run carries on.
    """
    from apps.billing.models import Bill
    from apps.billing.service import BillingService
    from apps.shipments.models import Shipment
    from freightdesk.errors import FreightDeskError

    period_start = date(year, month, 1)
    period_end   = date(year, month, calendar.monthrange(year, month)[1])

    in_month = Shipment.objects.filter(shipment_date__range=(period_start, period_end))
    client_ids = in_month.order_by().values_list("client_id", flat=True).distinct()
    with_unbilled = set(
        in_month.filter(bill_lines__isnull=True).values_list("client_id", flat=True)
    )
    already_billed = set(
        Bill.objects
        .filter(period_start=period_start, period_end=period_end)
        .values_list("client_id", flat=True)
    )

    service = BillingService()
    generated, skipped, failed = [], [], []
    for client_id in client_ids:
        if client_id in already_billed or client_id not in with_unbilled:
            skipped.append(str(client_id))
            continue
        try:
            bill = service.generate_bill(client_id, period_start, period_end)
        except FreightDeskError as exc:
            logger.warning("Monthly bill for client %s (%s) failed: %s",
                           client_id, period_start.strftime("%Y-%m"), exc.detail)
            failed.append({"client": str(client_id), "reason": exc.default_code})
            continue
        generated.append(bill.pk)

    logger.info("Monthly billing %s: %d generated, %d skipped, %d failed",
                period_start.strftime("%Y-%m"), len(generated), len(skipped), len(failed))
    return {"generated": generated, "skipped": skipped, "failed": failed}
