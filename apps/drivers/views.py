"""Driver registry API views."""

import logging
from rest_framework import generics, status
from rest_framework.filters import SearchFilter
from rest_framework.response import Response
from rest_framework.views import APIView
from drf_spectacular.utils import extend_schema

from .service import DriverRegistry
from . import serializers as sz

logger = logging.getLogger("yardline.drivers")
registry = DriverRegistry()


# ── GET/POST /api/drivers/ ────────────────────────────────────────────────────
@extend_schema(tags=["Drivers"], summary="List enrollments or register a driver")
class DriverListCreateView(generics.ListCreateAPIView):
    serializer_class = sz.DriverEnrollmentSerializer
    filter_backends  = [SearchFilter]
    search_fields    = ["full_name", "tax_id", "identification_key"]

    def get_queryset(self):
        return registry.enrollments()

    def create(self, request, *args, **kwargs):
        serializer = sz.DriverRegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        enrollment = registry.register(**serializer.validated_data)
        out = sz.DriverEnrollmentSerializer(enrollment)
        return Response(out.data, status=status.HTTP_201_CREATED)


# ── GET /api/drivers/{tax_id}/ ────────────────────────────────────────────────
@extend_schema(tags=["Drivers"], summary="Look up an enrollment by tax id")
class DriverDetailView(APIView):

    def get(self, request, tax_id):
        enrollment = registry.lookup(tax_id)
        return Response(sz.DriverEnrollmentSerializer(enrollment).data)


# ── GET /api/waypoints/ ───────────────────────────────────────────────────────
@extend_schema(tags=["Drivers"], summary="Destination waypoints (XPT)")
class WaypointListView(generics.ListAPIView):
    serializer_class = sz.WaypointSerializer
    pagination_class = None

    def get_queryset(self):
        return registry.waypoints()


# ── POST /api/locations/ ──────────────────────────────────────────────────────
@extend_schema(tags=["Drivers"], summary="Record a GPS ping from a driver",
               request=sz.LocationPingSerializer, responses={201: sz.DriverLocationSerializer})
class LocationCreateView(APIView):

    def post(self, request):
        ser = sz.LocationPingSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        d = ser.validated_data
        location = registry.record_location(
            driver      = d["driver"],
            latitude    = d["latitude"],
            longitude   = d["longitude"],
            recorded_at = d.get("timestamp"),
        )
        waypoint = registry.destination_waypoint(location.enrollment)
        out = sz.DriverLocationSerializer(location, context={"waypoint": waypoint})
        return Response(out.data, status=status.HTTP_201_CREATED)


# ── GET /api/locations/{driver}/ ──────────────────────────────────────────────
@extend_schema(tags=["Drivers"], summary="Latest GPS pings for a driver, newest first",
               responses=sz.DriverLocationSerializer(many=True))
class LocationHistoryView(APIView):

    def get(self, request, driver):
        enrollment = registry.resolve(driver)
        pings = registry.locations(enrollment.identification_key)
        data = sz.DriverLocationSerializer(
            pings, many=True, context={"waypoint": registry.destination_waypoint(enrollment)},
        ).data
        return Response({"count": len(data), "results": data})
