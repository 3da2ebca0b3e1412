"""Queue API views."""

import logging
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView
from drf_spectacular.utils import extend_schema, OpenApiParameter

from yardline.exceptions import InvalidInput
from .service import QueueManager
from . import serializers as sz

logger = logging.getLogger("yardline.queue")
queue_manager = QueueManager()


def json_object(request) -> dict:
    if not isinstance(request.data, dict):
        raise InvalidInput({"non_field_errors": ["Expected a JSON object."]})
    return request.data


# ── POST /api/queue/  ·  GET /api/queue/ ──────────────────────────────────────
@extend_schema(tags=["Queue"])
class QueueListCreateView(APIView):

    @extend_schema(
        summary="List queue entries, newest arrival first",
        parameters=[
            OpenApiParameter("status", str),
            OpenApiParameter("destination", str),
            OpenApiParameter("facility", str),
            OpenApiParameter("tax_id", str),
        ],
        responses=sz.QueueEntrySerializer(many=True),
    )
    def get(self, request):
        entries = queue_manager.list_entries(request.query_params)
        data = sz.QueueEntrySerializer(entries, many=True).data
        return Response({"count": len(data), "results": data})

    @extend_schema(summary="Admit an enrolled driver to the queue",
                   request=sz.AdmitSerializer, responses={201: sz.QueueEntrySerializer})
    def post(self, request):
        ser = sz.AdmitSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        entry = queue_manager.admit(ser.validated_data["tax_id"])
        return Response(sz.QueueEntrySerializer(entry).data, status=status.HTTP_201_CREATED)


# ── GET /api/queue/{id}/ ──────────────────────────────────────────────────────
@extend_schema(tags=["Queue"], summary="Queue entry with its transition history",
               responses=sz.QueueEntryDetailSerializer)
class QueueEntryDetailView(APIView):

    def get(self, request, entry_id):
        entry = queue_manager.get(entry_id)
        return Response(sz.QueueEntryDetailSerializer(entry).data)


# ── PUT /api/queue/{id}/dock/ ─────────────────────────────────────────────────
@extend_schema(tags=["Queue"], summary="Assign a dock and notify the driver",
               request=sz.DockSerializer, responses=sz.QueueEntrySerializer)
class AssignDockView(APIView):

    def put(self, request, entry_id):
        ser = sz.DockSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        entry = queue_manager.assign_dock(entry_id, ser.validated_data["dock"])
        return Response(sz.QueueEntrySerializer(entry).data)


# ── PUT /api/queue/{id}/start/ ────────────────────────────────────────────────
@extend_schema(tags=["Queue"], summary="Start unloading a waiting entry",
               request=sz.StartUnloadingSerializer, responses=sz.QueueEntrySerializer)
class StartUnloadingView(APIView):

    def put(self, request, entry_id):
        ser = sz.StartUnloadingSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        entry = queue_manager.start_unloading(entry_id, dock=ser.validated_data.get("dock"))
        return Response(sz.QueueEntrySerializer(entry).data)


# ── PUT /api/queue/{id}/finish/ ───────────────────────────────────────────────
@extend_schema(tags=["Queue"], summary="Finish unloading and record the returned load",
               responses=sz.QueueEntrySerializer)
class FinishUnloadingView(APIView):

    def put(self, request, entry_id):
        # counts are checked by the manager, after the status check
        body = json_object(request)
        entry = queue_manager.finish_unloading(
            entry_id,
            cage_count   = body.get("cage_count"),
            pallet_count = body.get("pallet_count"),
            sleeve_count = body.get("sleeve_count"),
        )
        return Response(sz.QueueEntrySerializer(entry).data)
