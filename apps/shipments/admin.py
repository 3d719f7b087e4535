from django.contrib import admin
from .models import Shipment, ShipmentBox


class ShipmentBoxInline(admin.TabularInline):
    model = ShipmentBox
    extra = 0
    readonly_fields = ("volumetric_weight_per_piece", "total_volumetric_weight")


@admin.register(Shipment)
class ShipmentAdmin(admin.ModelAdmin):
    list_display  = ("wfl_number", "vendor_awb_number", "client", "vendor", "mode", "oda",
                     "wfl_weight", "wfl_volumetric_weight", "shipment_date")
    list_filter   = ("mode", "oda", "zone")
    search_fields = ("wfl_number", "vendor_awb_number", "client__client_code", "consignee")
    readonly_fields = ("id", "oda", "actual_weight", "actual_volumetric_weight",
                       "wfl_weight", "wfl_volumetric_weight", "created_at", "updated_at")
    ordering      = ("-shipment_date",)
    inlines       = [ShipmentBoxInline]
