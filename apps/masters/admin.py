from django.contrib import admin
from .models import Client, Vendor, VendorPincode


@admin.register(Client)
class ClientAdmin(admin.ModelAdmin):
    list_display  = ("client_code", "client_name", "contact_number", "gst_number", "created_at")
    search_fields = ("client_code", "client_name", "gst_number")
    readonly_fields = ("id", "created_at", "updated_at")


class VendorPincodeInline(admin.TabularInline):
    model = VendorPincode
    extra = 0


@admin.register(Vendor)
class VendorAdmin(admin.ModelAdmin):
    list_display  = ("vendor_code", "name", "contact_number", "gst_number", "created_at")
    search_fields = ("vendor_code", "name")
    inlines       = [VendorPincodeInline]


@admin.register(VendorPincode)
class VendorPincodeAdmin(admin.ModelAdmin):
    list_display  = ("vendor", "pincode", "oda")
    list_filter   = ("oda",)
    search_fields = ("pincode", "vendor__name", "vendor__vendor_code")
