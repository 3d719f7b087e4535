"""Shipment API views."""

import logging
from dataclasses import asdict

from rest_framework import generics, status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView
from drf_spectacular.utils import extend_schema

from apps.masters.views import ProtectedDestroyMixin
from .models import Shipment
from .service import ShipmentService
from .weights import BoxInput, aggregate_boxes
from . import serializers as sz

logger = logging.getLogger("freightdesk.shipments")
shipment_service = ShipmentService()


def _split_boxes(validated_data):
    """Separate the box lists from the scalar shipment fields."""
    data = dict(validated_data)
    vendor_boxes = data.pop("vendor_boxes", None)
    wfl_boxes = data.pop("wfl_boxes", None)
    same = data.pop("wfl_same_as_vendor", False)
    return data, vendor_boxes, wfl_boxes, same


def _shipments():
    return (
        Shipment.objects
        .select_related("client", "vendor", "zone", "created_by")
        .prefetch_related("boxes")
    )


# ── GET/POST /api/shipments/ ──────────────────────────────────────────────────
@extend_schema(tags=["Shipments"], summary="List shipments or enter a new one")
class ShipmentListCreateView(generics.ListCreateAPIView):
    permission_classes = [IsAuthenticated]
    filterset_fields = {
        "client":        ["exact"],
        "vendor":        ["exact"],
        "zone":          ["exact"],
        "mode":          ["exact"],
        "oda":           ["exact"],
        "created_by":    ["exact"],
        "shipment_date": ["gte", "lte"],
    }
    search_fields = ["wfl_number", "vendor_awb_number", "invoice_number", "consignee"]
    ordering_fields = ["shipment_date", "created_at", "wfl_number"]

    def get_queryset(self):
        qs = _shipments()
        if self.request.query_params.get("mine") == "true":
            qs = qs.filter(created_by=self.request.user)
        return qs

    def get_serializer_class(self):
        if self.request.method == "POST":
            return sz.ShipmentWriteSerializer
        return sz.ShipmentDetailSerializer

    def create(self, request, *args, **kwargs):
        ser = sz.ShipmentWriteSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        data, vendor_boxes, wfl_boxes, same = _split_boxes(ser.validated_data)

        shipment = shipment_service.create_shipment(
            created_by=request.user, data=data,
            vendor_boxes=vendor_boxes, wfl_boxes=wfl_boxes, wfl_same_as_vendor=same,
        )
        out = sz.ShipmentDetailSerializer(_shipments().get(pk=shipment.pk))
        return Response(out.data, status=status.HTTP_201_CREATED)


# ── GET/PUT/PATCH/DELETE /api/shipments/{id}/ ─────────────────────────────────
@extend_schema(tags=["Shipments"], summary="Retrieve, update or delete a shipment")
class ShipmentDetailView(ProtectedDestroyMixin, generics.RetrieveUpdateDestroyAPIView):
    permission_classes = [IsAuthenticated]

    def get_queryset(self):
        return _shipments()

    def get_serializer_class(self):
        if self.request.method in ("PUT", "PATCH"):
            return sz.ShipmentWriteSerializer
        return sz.ShipmentDetailSerializer

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop("partial", False)
        shipment = self.get_object()
        ser = sz.ShipmentWriteSerializer(shipment, data=request.data, partial=partial)
        ser.is_valid(raise_exception=True)
        data, vendor_boxes, wfl_boxes, same = _split_boxes(ser.validated_data)

        shipment_service.update_shipment(
            shipment, data,
            vendor_boxes=vendor_boxes, wfl_boxes=wfl_boxes, wfl_same_as_vendor=same,
        )
        out = sz.ShipmentDetailSerializer(_shipments().get(pk=shipment.pk))
        return Response(out.data)


# ── POST /api/weights/calculate/ ──────────────────────────────────────────────
@extend_schema(tags=["Shipments"], summary="Weigh a box list without saving anything")
class WeightCalculateView(APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request):
        ser = sz.WeightCalculateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        d = ser.validated_data

        summary = aggregate_boxes(
            [BoxInput(**box) for box in d["boxes"]], d["mode"], d["cft_factor"],
        )
        return Response({
            "mode":                    d["mode"],
            "cft_factor":              d["cft_factor"],
            "total_pieces":            summary.total_pieces,
            "total_actual_weight":     summary.total_actual_weight,
            "total_volumetric_weight": summary.total_volumetric_weight,
            "boxes": [
                {
                    **asdict(box.box),
                    "volumetric_weight_per_piece": box.volumetric_weight_per_piece,
                    "total_volumetric_weight":     box.total_volumetric_weight,
                    "total_actual_weight":         box.total_actual_weight,
                }
                for box in summary.boxes
            ],
        })
