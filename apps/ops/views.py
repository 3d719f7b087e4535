"""
Operations views:
  - Deep health check (DB, cache, disk)
  - Admin dashboard summary
"""

import os
import logging
from decimal import Decimal

from django.core.cache import cache
from django.db import connection
from django.db.models import Count, Sum
from django.utils import timezone
from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated, AllowAny
from drf_spectacular.utils import extend_schema

from apps.authentication.permissions import IsAdminOperator

logger = logging.getLogger("freightdesk.ops")


# ── GET /api/health/deep/ ─────────────────────────────────────────────────────
@extend_schema(tags=["Ops"], summary="Deep health check: DB, cache, disk")
class DeepHealthView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []

    def get(self, request):
        checks = {}

        # Database
        try:
            with connection.cursor() as cur:
                cur.execute("SELECT 1")
            checks["database"] = "ok"
        except Exception as exc:
            logger.error("Health check: database unreachable: %s", exc)
            checks["database"] = f"error: {exc}"

        # Cache (Redis in production)
        try:
            cache.set("healthcheck", "1", 5)
            checks["cache"] = "ok" if cache.get("healthcheck") == "1" else "miss"
        except Exception as exc:
            logger.error("Health check: cache unreachable: %s", exc)
            checks["cache"] = f"error: {exc}"

        # Disk
        try:
            stat  = os.statvfs("/")
            free_gb = (stat.f_bavail * stat.f_frsize) / (1024 ** 3)
            checks["disk_free_gb"] = round(free_gb, 2)
            checks["disk"] = "ok" if free_gb > 1 else "low"
        except (AttributeError, OSError) as exc:
            checks["disk"] = f"error: {exc}"

        overall = "ok" if all(v == "ok" or isinstance(v, float)
                              for v in checks.values()) else "degraded"
        return Response({"status": overall, "checks": checks})


# ── GET /api/admin/dashboard/summary/ ────────────────────────────────────────
@extend_schema(tags=["Admin"], summary="Back-office overview: masters, this month's shipments, billing")
class DashboardSummaryView(APIView):
    permission_classes = [IsAuthenticated, IsAdminOperator]

    def get(self, request):
        from apps.masters.models import Client, Vendor
        from apps.shipments.models import Shipment
        from apps.billing.models import Bill

        month_start = timezone.localdate().replace(day=1)
        this_month = Shipment.objects.filter(shipment_date__gte=month_start)

        by_mode = dict(
            this_month.values_list("mode").annotate(c=Count("id")).order_by()
        )
        unzoned = this_month.filter(zone__isnull=True).count()
        billed = Bill.objects.aggregate(n=Count("id"), t=Sum("total_amount"))

        return Response({
            "clients":                   Client.objects.count(),
            "vendors":                   Vendor.objects.count(),
            "shipments_this_month":      this_month.count(),
            "shipments_by_mode":         by_mode,
            "shipments_without_zone":    unzoned,
            "bills":                     billed["n"],
            "billed_amount":             str(billed["t"] or Decimal("0.00")),
        })
