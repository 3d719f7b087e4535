"""Bill API views."""

import logging

from rest_framework import generics, status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView
from drf_spectacular.utils import extend_schema

from apps.authentication.permissions import IsAdminOperator
from .models import Bill
from .service import BillingService
from .tasks import generate_monthly_bills
from . import serializers as sz

logger = logging.getLogger("freightdesk.billing")
billing_service = BillingService()


# ── GET /api/bills/ ───────────────────────────────────────────────────────────
@extend_schema(tags=["Billing"], summary="List generated bills")
class BillListView(generics.ListAPIView):
    serializer_class = sz.BillSerializer
    permission_classes = [IsAuthenticated]
    filterset_fields = {
        "client":       ["exact"],
        "period_start": ["exact", "gte"],
        "period_end":   ["exact", "lte"],
    }
    ordering_fields = ["period_end", "total_amount", "created_at"]

    def get_queryset(self):
        return Bill.objects.select_related("client", "created_by")


# ── GET /api/bills/{id}/ ──────────────────────────────────────────────────────
@extend_schema(tags=["Billing"], summary="Retrieve a bill with its per-shipment lines")
class BillDetailView(generics.RetrieveAPIView):
    serializer_class = sz.BillDetailSerializer
    permission_classes = [IsAuthenticated]

    def get_queryset(self):
        return (
            Bill.objects
            .select_related("client", "created_by")
            .prefetch_related("lines__shipment", "lines__zone")
        )


# ── POST /api/bills/generate/ ─────────────────────────────────────────────────
@extend_schema(tags=["Billing"], summary="Generate the bill for a client and period (Admin only)")
class BillGenerateView(APIView):
    permission_classes = [IsAuthenticated, IsAdminOperator]

    def post(self, request):
        ser = sz.BillRequestSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        d = ser.validated_data

        bill = billing_service.generate_bill(
            d["client"], d["period_start"], d["period_end"], created_by=request.user,
        )
        bill = BillDetailView().get_queryset().get(pk=bill.pk)
        return Response(sz.BillDetailSerializer(bill).data, status=status.HTTP_201_CREATED)


# ── POST /api/bills/preview/ ──────────────────────────────────────────────────
@extend_schema(tags=["Billing"], summary="Compute a bill without saving it")
class BillPreviewView(APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request):
        ser = sz.BillRequestSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        d = ser.validated_data

        preview = billing_service.preview_bill(d["client"], d["period_start"], d["period_end"])
        return Response({
            "client":         str(preview.client.pk),
            "client_code":    preview.client.client_code,
            "period_start":   preview.period_start,
            "period_end":     preview.period_end,
            "shipment_count": preview.shipment_count,
            "total_amount":   preview.total_amount,
            "lines": [
                {
                    "shipment":   str(line.shipment.pk),
                    "wfl_number": line.shipment.wfl_number,
                    "mode":       line.shipment.mode,
                    "zone":       line.quote.zone_id,
                    **line.charges.as_dict(),
                }
                for line in preview.lines
            ],
        })


# ── POST /api/bills/monthly-run/ ──────────────────────────────────────────────
@extend_schema(tags=["Billing"], summary="Queue bill generation for every client in a month (Admin only)")
class MonthlyBillRunView(APIView):
    permission_classes = [IsAuthenticated, IsAdminOperator]

    def post(self, request):
        ser = sz.MonthlyBillRunSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        d = ser.validated_data

        result = generate_monthly_bills.delay(d["year"], d["month"])
        logger.info("Monthly bill run %04d-%02d queued by %s as %s",
                    d["year"], d["month"], request.user.email, result.id)
        return Response({"task_id": result.id, "year": d["year"], "month": d["month"]},
                        status=status.HTTP_202_ACCEPTED)
