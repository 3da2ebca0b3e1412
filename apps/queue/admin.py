from django.contrib import admin

from .models import QueueEntry, QueueEvent


class QueueEventInline(admin.TabularInline):
    model           = QueueEvent
    extra           = 0
    readonly_fields = ["kind", "from_status", "to_status", "note", "occurred_at"]
    can_delete      = False


@admin.register(QueueEntry)
class QueueEntryAdmin(admin.ModelAdmin):
    list_display    = ["driver_name", "tax_id", "destination", "status", "dock", "arrived_at", "wait_seconds"]
    list_filter     = ["status", "destination"]
    search_fields   = ["driver_name", "tax_id", "identification_key"]
    readonly_fields = ["id", "arrived_at", "unload_started_at", "unload_finished_at",
                       "wait_seconds", "unload_seconds", "dock_notified_at"]
    inlines         = [QueueEventInline]
