from django.contrib import admin
from .models import Zone, ClientRate, ClientZoneRate


@admin.register(Zone)
class ZoneAdmin(admin.ModelAdmin):
    list_display  = ("name", "created_at")
    search_fields = ("name",)


class ClientZoneRateInline(admin.TabularInline):
    model = ClientZoneRate
    extra = 0


@admin.register(ClientRate)
class ClientRateAdmin(admin.ModelAdmin):
    list_display  = ("client", "mode", "cft", "minimum_weight", "minimum_freight", "fuel_pct", "fov_pct")
    list_filter   = ("mode",)
    search_fields = ("client__client_code", "client__client_name")
    inlines       = [ClientZoneRateInline]
