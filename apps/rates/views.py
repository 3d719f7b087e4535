"""Zone and rate master API views, plus the rate calculator."""

import logging

from rest_framework import generics
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView
from drf_spectacular.utils import extend_schema

from apps.authentication.permissions import IsAdminForDelete
from apps.masters.views import ProtectedDestroyMixin
from .models import Zone, ClientRate
from .service import resolve_rate, ChargeCalculator
from . import serializers as sz

logger = logging.getLogger("freightdesk.rates")


@extend_schema(tags=["Rates"], summary="List or create zones")
class ZoneListCreateView(generics.ListCreateAPIView):
    queryset = Zone.objects.all()
    serializer_class = sz.ZoneSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = None
    search_fields = ["name"]


@extend_schema(tags=["Rates"], summary="Rename or delete a zone")
class ZoneDetailView(ProtectedDestroyMixin, generics.RetrieveUpdateDestroyAPIView):
    queryset = Zone.objects.all()
    serializer_class = sz.ZoneSerializer
    permission_classes = [IsAuthenticated, IsAdminForDelete]


@extend_schema(tags=["Rates"], summary="List or create client rate masters")
class ClientRateListCreateView(generics.ListCreateAPIView):
    serializer_class = sz.ClientRateSerializer
    permission_classes = [IsAuthenticated]
    filterset_fields = ["client", "mode"]

    def get_queryset(self):
        return (
            ClientRate.objects
            .select_related("client")
            .prefetch_related("zone_rates__zone")
        )

    def perform_create(self, serializer):
        rate = serializer.save()
        logger.info("Rate master %s created with %d zone rates",
                    rate, rate.zone_rates.count())


@extend_schema(tags=["Rates"], summary="Retrieve, update or delete a client rate master")
class ClientRateDetailView(generics.RetrieveUpdateDestroyAPIView):
    serializer_class = sz.ClientRateSerializer
    permission_classes = [IsAuthenticated, IsAdminForDelete]

    def get_queryset(self):
        return (
            ClientRate.objects
            .select_related("client")
            .prefetch_related("zone_rates__zone")
        )


# ── POST /api/rates/calculate/ ────────────────────────────────────────────────
@extend_schema(tags=["Rates"], summary="Quote the freight charges for a hypothetical shipment")
class RateCalculateView(APIView):
    permission_classes = [IsAuthenticated]
    calculator = ChargeCalculator()

    def post(self, request):
        ser = sz.RateCalculateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        d = ser.validated_data

        quote = resolve_rate(d["client"], d["mode"], d["zone"].pk)
        charges = self.calculator.calculate(
            quote,
            actual_weight=d["actual_weight"],
            volumetric_weight=d["volumetric_weight"],
            invoice_value=d["invoice_value"],
            is_oda=d["is_oda"],
        )
        return Response(charges.as_dict())
