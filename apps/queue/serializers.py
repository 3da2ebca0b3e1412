"""Queue serializers. Writes go through QueueManager; these shape input and output only."""

from django.utils import timezone
from rest_framework import serializers

from .models import QueueEntry, QueueEvent
from .timers import phase_elapsed


class QueueEventSerializer(serializers.ModelSerializer):
    class Meta:
        model  = QueueEvent
        fields = ["kind", "from_status", "to_status", "note", "occurred_at"]


class QueueEntrySerializer(serializers.ModelSerializer):
    elapsed_seconds = serializers.SerializerMethodField()

    class Meta:
        model  = QueueEntry
        fields = [
            "id", "tax_id", "driver_name", "identification_key", "origin", "destination",
            "status", "arrived_at", "unload_started_at", "unload_finished_at",
            "wait_seconds", "unload_seconds", "elapsed_seconds",
            "dock", "dock_notified_at", "cage_count", "pallet_count", "sleeve_count",
        ]
        read_only_fields = fields

    def get_elapsed_seconds(self, obj):
        now = self.context.get("now") or timezone.now()
        return phase_elapsed(obj, now)


class QueueEntryDetailSerializer(QueueEntrySerializer):
    events = QueueEventSerializer(many=True, read_only=True)

    class Meta(QueueEntrySerializer.Meta):
        fields = QueueEntrySerializer.Meta.fields + ["events"]
        read_only_fields = fields


class AdmitSerializer(serializers.Serializer):
    tax_id = serializers.CharField(max_length=20)


class DockSerializer(serializers.Serializer):
    dock = serializers.CharField(max_length=20)


class StartUnloadingSerializer(serializers.Serializer):
    dock = serializers.CharField(max_length=20, required=False, allow_null=True)
