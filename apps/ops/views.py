"""
Operations views:
  - Deep health check (database, cache, channel layer)
  - Queue dashboard summary
"""

import logging

from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer
from django.core.cache import cache
from django.db import connection
from django.db.models import Avg, Count
from rest_framework.views import APIView
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from apps.queue.models import QueueEntry

logger = logging.getLogger("yardline.ops")


# ── GET /api/health/deep/ ─────────────────────────────────────────────────────
@extend_schema(tags=["Ops"], summary="Deep health check — database, cache, channel layer")
class DeepHealthView(APIView):
    throttle_classes = []

    def get(self, request):
        checks = {}

        # Database
        try:
            with connection.cursor() as cur:
                cur.execute("SELECT 1")
            checks["database"] = "ok"
        except Exception as exc:
            logger.error("Health check: database unreachable: %s", exc)
            checks["database"] = f"error: {exc}"

        # Cache (Redis in production)
        try:
            cache.set("healthcheck", "1", 5)
            checks["cache"] = "ok" if cache.get("healthcheck") == "1" else "miss"
        except Exception as exc:
            logger.error("Health check: cache unreachable: %s", exc)
            checks["cache"] = f"error: {exc}"

        # Channel layer carries every notification
        try:
            layer = get_channel_layer()
            if layer is None:
                checks["channel_layer"] = "not configured"
            else:
                async_to_sync(layer.group_send)("healthcheck", {"type": "health.ping"})
                checks["channel_layer"] = "ok"
        except Exception as exc:
            logger.error("Health check: channel layer unreachable: %s", exc)
            checks["channel_layer"] = f"error: {exc}"

        overall = "ok" if all(v == "ok" for v in checks.values()) else "degraded"
        return Response({"status": overall, "checks": checks})


# ── GET /api/ops/dashboard/ ───────────────────────────────────────────────────
@extend_schema(tags=["Ops"], summary="Yard overview — queue size, docks in use, average times")
class DashboardSummaryView(APIView):

    def get(self, request):
        by_status = dict(
            QueueEntry.objects.values_list("status").annotate(c=Count("id")).order_by()
        )
        finished = QueueEntry.objects.filter(status=QueueEntry.Status.FINISHED).aggregate(
            avg_wait=Avg("wait_seconds"), avg_unload=Avg("unload_seconds"),
        )
        waiting_by_destination = dict(
            QueueEntry.objects.filter(status=QueueEntry.Status.WAITING)
            .values_list("destination").annotate(c=Count("id")).order_by()
        )
        docks_in_use = sorted(
            QueueEntry.objects.filter(status=QueueEntry.Status.UNLOADING)
            .exclude(dock__isnull=True).values_list("dock", flat=True).distinct()
        )

        return Response({
            "entries_by_status":      {s: by_status.get(s, 0) for s in QueueEntry.Status.values},
            "waiting_by_destination": waiting_by_destination,
            "docks_in_use":           docks_in_use,
            "avg_wait_seconds":       round(finished["avg_wait"] or 0),
            "avg_unload_seconds":     round(finished["avg_unload"] or 0),
        })
