"""
QueueManager — the unloading queue state machine.

Flow:  admit  →  (assign_dock)*  →  start_unloading  →  finish_unloading
       waiting                      unloading            finished

Every write runs in its own transaction on a locked row; notifications are
published once the transaction block has returned, so a failed publish can
never roll back a transition.
"""

import logging
import uuid
from datetime import timedelta

from django.conf import settings
from django.db import IntegrityError, transaction
from django.utils import timezone

from apps.drivers.exceptions import DriverNotFound
from apps.drivers.service import DriverRegistry, normalize_tax_id
from apps.notifications.service import NotificationService
from apps.queue.exceptions import AlreadyQueued, EntryNotFound, InvalidTransition, UnknownDriver
from apps.queue.filters import QueueEntryFilter
from apps.queue.models import QueueEntry, QueueEvent
from apps.queue.timers import elapsed_seconds
from yardline.exceptions import InvalidInput

logger = logging.getLogger("yardline.queue")

DOCK_MAX_LENGTH = 20
COUNT_MAX       = 2147483647   # PositiveIntegerField upper bound
COUNT_FIELDS    = ("cage_count", "pallet_count", "sleeve_count")


def clean_dock(value) -> str:
    if value is None:
        raise InvalidInput({"dock": ["Dock is required."]})
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        raise InvalidInput({"dock": ["Dock must be a string."]})
    dock = str(value).strip()
    if not dock:
        raise InvalidInput({"dock": ["Dock may not be blank."]})
    if len(dock) > DOCK_MAX_LENGTH:
        raise InvalidInput({"dock": [f"Dock may have at most {DOCK_MAX_LENGTH} characters."]})
    return dock


def _as_uuid(entry_id):
    try:
        return uuid.UUID(str(entry_id))
    except ValueError:
        raise EntryNotFound(entry_id=str(entry_id)) from None


def clean_count(value):
    """Accept ints and ASCII digit strings (form posts); None for anything else or out of range."""
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not (value.isascii() and value.isdecimal()):
            return None
        value = int(value)
    if isinstance(value, int) and 0 <= value <= COUNT_MAX:
        return value
    return None


class QueueManager:
    """
    Unified queue orchestration.
    Dependencies are injected so they can be swapped in tests.
    """

    def __init__(self, notification_service=None, registry=None, clock=None):
        self.notifier = notification_service or NotificationService()
        self.registry = registry or DriverRegistry()
        self.clock    = clock or timezone.now

    # ── admit ─────────────────────────────────────────────────────────────────
    def admit(self, tax_id: str) -> QueueEntry:
        """
        Put an enrolled driver into the waiting queue.
        The enrollment row lock serializes admissions per driver; the partial
        unique constraint catches anything that slips past it (e.g. SQLite).
        """
        tax_id = normalize_tax_id(tax_id)
        try:
            with transaction.atomic():
                try:
                    enrollment = self.registry.lookup(tax_id, for_update=True)
                except DriverNotFound:
                    raise UnknownDriver(tax_id=tax_id) from None

                if QueueEntry.objects.active().filter(tax_id=tax_id).exists():
                    raise AlreadyQueued(tax_id=tax_id)

                now   = self.clock()
                entry = QueueEntry.objects.create(
                    tax_id             = enrollment.tax_id,
                    driver_name        = enrollment.full_name,
                    identification_key = enrollment.identification_key,
                    origin             = enrollment.origin,
                    destination        = enrollment.destination,
                    status             = QueueEntry.Status.WAITING,
                    arrived_at         = now,
                )
                self._record(entry, QueueEvent.Kind.ADMITTED, "", now, "Driver arrived")
        except IntegrityError as exc:
            raise AlreadyQueued(tax_id=tax_id) from exc

        logger.info("Driver %s admitted as entry %s", tax_id, entry.id)
        self.notifier.broadcast_queue_changed()
        return entry

    # ── dock ──────────────────────────────────────────────────────────────────
    def assign_dock(self, entry_id, dock) -> QueueEntry:
        """Point the driver at a dock. Status is left alone."""
        dock = clean_dock(dock)
        with transaction.atomic():
            entry = self._locked(entry_id)
            now   = self.clock()
            entry.dock             = dock
            entry.dock_notified_at = now
            entry.save(update_fields=["dock", "dock_notified_at", "updated_at"])
            self._record(entry, QueueEvent.Kind.DOCK_ASSIGNED, entry.status, now, f"Dock {dock}")

        response_seconds = settings.DOCK_RESPONSE_SECONDS
        deadline         = now + timedelta(seconds=response_seconds)
        logger.info("Entry %s sent to dock %s", entry.id, dock)
        self.notifier.notify_driver(entry.id, {
            "queue_entry_id":    str(entry.id),
            "dock":              dock,
            "response_deadline": deadline.isoformat(),
            "response_seconds":  response_seconds,
        })
        self.notifier.broadcast_queue_changed()
        return entry

    # ── start ─────────────────────────────────────────────────────────────────
    def start_unloading(self, entry_id, dock=None) -> QueueEntry:
        if dock is not None:
            dock = clean_dock(dock)
        with transaction.atomic():
            entry = self._locked(entry_id)
            if entry.status != QueueEntry.Status.WAITING:
                raise InvalidTransition(entry.status, "start unloading")

            now = self.clock()
            entry.status            = QueueEntry.Status.UNLOADING
            entry.unload_started_at = now
            entry.wait_seconds      = elapsed_seconds(now, entry.arrived_at)
            fields = ["status", "unload_started_at", "wait_seconds", "updated_at"]
            if dock is not None:
                entry.dock = dock
                fields.append("dock")
                if entry.dock_notified_at is None:
                    entry.dock_notified_at = now
                    fields.append("dock_notified_at")
            entry.save(update_fields=fields)
            self._record(
                entry, QueueEvent.Kind.UNLOADING_STARTED, QueueEntry.Status.WAITING, now,
                f"Waited {entry.wait_seconds}s",
            )

        logger.info("Entry %s unloading after %ds", entry.id, entry.wait_seconds)
        self.notifier.broadcast_queue_changed()
        return entry

    # ── finish ────────────────────────────────────────────────────────────────
    def finish_unloading(self, entry_id, cage_count, pallet_count, sleeve_count) -> QueueEntry:
        raw    = dict(zip(COUNT_FIELDS, (cage_count, pallet_count, sleeve_count)))
        counts = {name: clean_count(value) for name, value in raw.items()}

        with transaction.atomic():
            entry = self._locked(entry_id)
            # Status first: a finished entry reports the transition, not the payload
            if entry.status != QueueEntry.Status.UNLOADING:
                raise InvalidTransition(entry.status, "finish unloading")

            bad = {name: ["Must be a non-negative integer."] for name, v in counts.items() if v is None}
            if bad:
                raise InvalidInput(bad)

            now = self.clock()
            entry.status             = QueueEntry.Status.FINISHED
            entry.unload_finished_at = now
            entry.unload_seconds     = elapsed_seconds(now, entry.unload_started_at)
            for name, value in counts.items():
                setattr(entry, name, value)
            entry.save(update_fields=[
                "status", "unload_finished_at", "unload_seconds", *COUNT_FIELDS, "updated_at",
            ])
            self._record(
                entry, QueueEvent.Kind.UNLOADING_FINISHED, QueueEntry.Status.UNLOADING, now,
                "cages={cage_count} pallets={pallet_count} sleeves={sleeve_count}".format(**counts),
            )

        logger.info("Entry %s finished after %ds unloading", entry.id, entry.unload_seconds)
        self.notifier.broadcast_queue_changed()
        return entry

    # ── reads ─────────────────────────────────────────────────────────────────
    def get(self, entry_id) -> QueueEntry:
        entry = QueueEntry.objects.filter(pk=_as_uuid(entry_id)).first()
        if entry is None:
            raise EntryNotFound(entry_id=str(entry_id))
        return entry

    def list_entries(self, filters=None) -> list:
        """Newest arrivals first, capped at QUEUE_LIST_LIMIT."""
        qs = QueueEntry.objects.order_by("-arrived_at")
        if filters:
            filterset = QueueEntryFilter(filters, queryset=qs)
            if not filterset.is_valid():
                raise InvalidInput({k: [str(m) for m in v] for k, v in filterset.errors.items()})
            qs = filterset.qs
        return list(qs[: settings.QUEUE_LIST_LIMIT])

    # ── helpers ───────────────────────────────────────────────────────────────
    def _locked(self, entry_id) -> QueueEntry:
        entry = QueueEntry.objects.select_for_update().filter(pk=_as_uuid(entry_id)).first()
        if entry is None:
            raise EntryNotFound(entry_id=str(entry_id))
        return entry

    def _record(self, entry, kind, from_status, now, note=""):
        QueueEvent.objects.create(
            entry=entry, kind=kind, from_status=from_status,
            to_status=entry.status, note=note, occurred_at=now,
        )
