"""
Unloading queue models.
A QueueEntry is one pass of a driver through waiting → unloading → finished.
Transitions are enforced by apps.queue.service.QueueManager; the conditional
unique constraint keeps a driver to a single active entry even under races.
"""

import uuid
from django.db import models
from django.db.models import Q


class QueueEntryQuerySet(models.QuerySet):
    def active(self):
        return self.filter(status__in=QueueEntry.ACTIVE_STATUSES)


class QueueEntry(models.Model):

    class Status(models.TextChoices):
        WAITING   = "waiting",   "Waiting"
        UNLOADING = "unloading", "Unloading"
        FINISHED  = "finished",  "Finished"

    ACTIVE_STATUSES = (Status.WAITING, Status.UNLOADING)

    id                 = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    # Copied from the enrollment at admission time
    tax_id             = models.CharField(max_length=20, db_index=True)
    driver_name        = models.CharField(max_length=120)
    identification_key = models.CharField(max_length=200)
    origin             = models.CharField(max_length=40, blank=True)
    destination        = models.CharField(max_length=20)

    status             = models.CharField(max_length=10, choices=Status.choices, default=Status.WAITING)
    arrived_at         = models.DateTimeField()
    unload_started_at  = models.DateTimeField(null=True, blank=True)
    unload_finished_at = models.DateTimeField(null=True, blank=True)

    # Frozen at each transition, whole seconds
    wait_seconds       = models.PositiveIntegerField(default=0)
    unload_seconds     = models.PositiveIntegerField(default=0)

    dock               = models.CharField(max_length=20, null=True, blank=True)
    dock_notified_at   = models.DateTimeField(null=True, blank=True)

    # Returned load, recorded when unloading finishes
    cage_count         = models.PositiveIntegerField(null=True, blank=True)
    pallet_count       = models.PositiveIntegerField(null=True, blank=True)
    sleeve_count       = models.PositiveIntegerField(null=True, blank=True)

    updated_at         = models.DateTimeField(auto_now=True)

    objects = QueueEntryQuerySet.as_manager()

    class Meta:
        ordering    = ["-arrived_at"]
        verbose_name_plural = "queue entries"
        constraints = [
            models.UniqueConstraint(
                fields=["tax_id"],
                condition=Q(status__in=["waiting", "unloading"]),
                name="uq_active_entry_per_driver",
            ),
        ]
        indexes = [
            models.Index(fields=["status"],                name="queue_status_idx"),
            models.Index(fields=["destination", "status"], name="queue_dest_status_idx"),
            models.Index(fields=["arrived_at"],            name="queue_arrived_idx"),
        ]

    def __str__(self):
        return f"{self.driver_name} [{self.status}]"

    @property
    def is_active(self) -> bool:
        return self.status in self.ACTIVE_STATUSES


class QueueEvent(models.Model):
    """Immutable audit trail for every change to an entry."""

    class Kind(models.TextChoices):
        ADMITTED           = "admitted",           "Admitted"
        DOCK_ASSIGNED      = "dock_assigned",      "Dock assigned"
        UNLOADING_STARTED  = "unloading_started",  "Unloading started"
        UNLOADING_FINISHED = "unloading_finished", "Unloading finished"

    entry       = models.ForeignKey(QueueEntry, on_delete=models.CASCADE, related_name="events")
    kind        = models.CharField(max_length=20, choices=Kind.choices)
    from_status = models.CharField(max_length=10, blank=True)
    to_status   = models.CharField(max_length=10)
    note        = models.CharField(max_length=255, blank=True)
    occurred_at = models.DateTimeField()

    class Meta:
        ordering = ["occurred_at", "id"]
