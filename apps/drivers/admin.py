from django.contrib import admin
from .models import DriverEnrollment, DriverLocation, Waypoint


@admin.register(Waypoint)
class WaypointAdmin(admin.ModelAdmin):
    list_display  = ("code", "city", "latitude", "longitude", "radius_m", "origin")
    list_filter   = ("origin",)
    search_fields = ("code", "city")


@admin.register(DriverEnrollment)
class DriverEnrollmentAdmin(admin.ModelAdmin):
    list_display    = ("full_name", "tax_id", "origin", "destination", "identification_key", "created_at")
    list_filter     = ("destination", "origin")
    search_fields   = ("full_name", "tax_id", "identification_key")
    readonly_fields = ("identification_key", "created_at", "updated_at")


@admin.register(DriverLocation)
class DriverLocationAdmin(admin.ModelAdmin):
    list_display    = ("enrollment", "latitude", "longitude", "recorded_at", "received_at")
    search_fields   = ("enrollment__identification_key", "enrollment__tax_id")
    readonly_fields = ("received_at",)
