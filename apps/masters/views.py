"""Client / vendor master API views."""

import logging

from django.db import transaction
from django.db.models import ProtectedError
from django.shortcuts import get_object_or_404
from rest_framework import generics, status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView
from drf_spectacular.utils import extend_schema

from apps.authentication.permissions import IsAdminForDelete
from freightdesk.errors import MasterInUse
from .models import Client, Vendor, VendorPincode
from .service import vendor_pincode_oda
from . import serializers as sz

logger = logging.getLogger("freightdesk.masters")


class ProtectedDestroyMixin:
    """Turn a PROTECT foreign-key violation into a 409 instead of a 500."""

    def perform_destroy(self, instance):
        try:
            instance.delete()
        except ProtectedError as exc:
            logger.info("Refused to delete %r: still referenced", instance)
            raise MasterInUse(
                f"{instance} is referenced by {len(exc.protected_objects)} record(s)."
            ) from exc


# ── Clients ───────────────────────────────────────────────────────────────────
@extend_schema(tags=["Masters"], summary="List or create clients")
class ClientListCreateView(generics.ListCreateAPIView):
    queryset = Client.objects.select_related("created_by")
    serializer_class = sz.ClientSerializer
    permission_classes = [IsAuthenticated]
    search_fields = ["client_code", "client_name", "gst_number"]
    ordering_fields = ["client_code", "client_name", "created_at"]

    def perform_create(self, serializer):
        client = serializer.save(created_by=self.request.user)
        logger.info("Client %s created by %s", client.client_code, self.request.user.email)


@extend_schema(tags=["Masters"], summary="Retrieve, update or delete a client")
class ClientDetailView(ProtectedDestroyMixin, generics.RetrieveUpdateDestroyAPIView):
    queryset = Client.objects.select_related("created_by")
    serializer_class = sz.ClientSerializer
    permission_classes = [IsAuthenticated, IsAdminForDelete]


# ── Vendors ───────────────────────────────────────────────────────────────────
@extend_schema(tags=["Masters"], summary="List or create vendors")
class VendorListCreateView(generics.ListCreateAPIView):
    queryset = Vendor.objects.all()
    serializer_class = sz.VendorSerializer
    permission_classes = [IsAuthenticated]
    search_fields = ["vendor_code", "name"]
    ordering_fields = ["vendor_code", "name", "created_at"]


@extend_schema(tags=["Masters"], summary="Retrieve, update or delete a vendor")
class VendorDetailView(ProtectedDestroyMixin, generics.RetrieveUpdateDestroyAPIView):
    queryset = Vendor.objects.all()
    serializer_class = sz.VendorSerializer
    permission_classes = [IsAuthenticated, IsAdminForDelete]


# ── Vendor pincodes ───────────────────────────────────────────────────────────
@extend_schema(tags=["Masters"], summary="List or upsert the pincodes a vendor serves")
class VendorPincodeView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request, vendor_id):
        vendor = get_object_or_404(Vendor, pk=vendor_id)
        rows = VendorPincode.objects.filter(vendor=vendor)
        return Response(sz.VendorPincodeSerializer(rows, many=True).data)

    def post(self, request, vendor_id):
        vendor = get_object_or_404(Vendor, pk=vendor_id)
        ser = sz.VendorPincodeUploadSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        created = updated = 0
        with transaction.atomic():
            for row in ser.validated_data["pincodes"]:
                _, was_created = VendorPincode.objects.update_or_create(
                    vendor=vendor, pincode=row["pincode"],
                    defaults={"oda": row["oda"]},
                )
                if was_created:
                    created += 1
                else:
                    updated += 1

        logger.info("Vendor %s pincodes: %d created, %d updated",
                    vendor.vendor_code, created, updated)
        return Response({"created": created, "updated": updated}, status=status.HTTP_200_OK)


@extend_schema(tags=["Masters"], summary="Remove a pincode from a vendor")
class VendorPincodeDeleteView(APIView):
    permission_classes = [IsAuthenticated, IsAdminForDelete]

    def delete(self, request, vendor_id, pincode):
        row = get_object_or_404(VendorPincode, vendor_id=vendor_id, pincode=pincode)
        row.delete()
        return Response(status=status.HTTP_204_NO_CONTENT)


# ── GET /api/validate-pincode/{vendor}/{pincode}/ ─────────────────────────────
@extend_schema(tags=["Masters"], summary="Check a vendor serves a pincode and return its ODA status")
class ValidatePincodeView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request, vendor_id, pincode):
        oda = vendor_pincode_oda(vendor_id, pincode)
        return Response({"vendor_id": str(vendor_id), "pincode": pincode, "oda": oda})
