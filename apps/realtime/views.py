"""Realtime handshake and client configuration."""

import logging
from django.conf import settings
from rest_framework.response import Response
from rest_framework.views import APIView
from drf_spectacular.utils import extend_schema, OpenApiParameter

from apps.drivers.serializers import WaypointSerializer
from apps.drivers.views import registry
from apps.queue.views import queue_manager
from yardline.exceptions import InvalidInput
from .tokens import SubscriptionToken, CHANNELS_CLAIM

logger = logging.getLogger("yardline.realtime")


# ── GET /api/realtime/token/ ──────────────────────────────────────────────────
@extend_schema(
    tags=["Realtime"],
    summary="Issue a short-lived WebSocket subscription token",
    parameters=[
        OpenApiParameter("client_id", str, required=True),
        OpenApiParameter("entry_id", str, description="Also grant this entry's driver channel"),
    ],
)
class RealtimeTokenView(APIView):

    def get(self, request):
        client_id = request.query_params.get("client_id", "").strip()
        if not client_id:
            raise InvalidInput({"client_id": ["This field is required."]})

        entry_id = request.query_params.get("entry_id")
        if entry_id:
            entry_id = queue_manager.get(entry_id).id

        token = SubscriptionToken.issue(client_id, entry_id)
        logger.info("Subscription token issued to %s for %s", client_id, token[CHANNELS_CLAIM])
        return Response({
            "token":      str(token),
            "expires_in": int(token.lifetime.total_seconds()),
            "channels":   token[CHANNELS_CLAIM],
        })


# ── GET /api/config/ ──────────────────────────────────────────────────────────
@extend_schema(tags=["Realtime"], summary="Client configuration: destinations and timers")
class ClientConfigView(APIView):

    def get(self, request):
        return Response({
            "destinations":             WaypointSerializer(registry.waypoints(), many=True).data,
            "dock_response_seconds":    settings.DOCK_RESPONSE_SECONDS,
            "refresh_interval_seconds": settings.QUEUE_REFRESH_SECONDS,
        })
