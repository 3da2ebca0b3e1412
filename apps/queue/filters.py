import django_filters

from .models import QueueEntry


class QueueEntryFilter(django_filters.FilterSet):
    status      = django_filters.ChoiceFilter(choices=QueueEntry.Status.choices)
    destination = django_filters.CharFilter(field_name="destination")
    facility    = django_filters.CharFilter(field_name="origin")
    tax_id      = django_filters.CharFilter(field_name="tax_id")

    class Meta:
        model  = QueueEntry
        fields = ["status", "destination", "facility", "tax_id"]
