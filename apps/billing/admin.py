from django.contrib import admin
from .models import Bill, BillLine


class BillLineInline(admin.TabularInline):
    model = BillLine
    extra = 0
    can_delete = False

    def has_add_permission(self, request, obj=None):
        return False

    def get_readonly_fields(self, request, obj=None):
        return [f.name for f in BillLine._meta.fields]


@admin.register(Bill)
class BillAdmin(admin.ModelAdmin):
    list_display  = ("client", "period_start", "period_end", "shipment_count", "total_amount", "created_at")
    list_filter   = ("period_end",)
    search_fields = ("client__client_code", "client__client_name")
    inlines       = [BillLineInline]

    def has_change_permission(self, request, obj=None):
        return False
