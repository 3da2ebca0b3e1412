"""Driver registry serializers."""

import re

from rest_framework import serializers

from .geo import distance_m, within_waypoint
from .models import DriverEnrollment, DriverLocation, Waypoint
from .service import normalize_tax_id

TAX_ID_PATTERN = re.compile(r"^[0-9A-Za-z]{3,20}$")
PHONE_PATTERN  = re.compile(r"^\+?[\d\s()-]{8,20}$")


def validate_tax_id(value):
    if not TAX_ID_PATTERN.match(normalize_tax_id(value)):
        raise serializers.ValidationError("Tax id must be 3-20 letters or digits.")


def validate_phone(value):
    if not PHONE_PATTERN.match(value):
        raise serializers.ValidationError("Enter a valid phone number.")


class WaypointSerializer(serializers.ModelSerializer):
    class Meta:
        model  = Waypoint
        fields = ["id", "city", "code", "latitude", "longitude", "radius_m", "origin"]


class DriverEnrollmentSerializer(serializers.ModelSerializer):
    class Meta:
        model  = DriverEnrollment
        fields = [
            "id", "full_name", "tax_id", "phone", "email",
            "origin", "destination", "identification_key", "created_at",
        ]
        read_only_fields = fields


class DriverRegisterSerializer(serializers.Serializer):
    full_name   = serializers.CharField(max_length=120)
    tax_id      = serializers.CharField(max_length=20, validators=[validate_tax_id])
    phone       = serializers.CharField(max_length=20, validators=[validate_phone])
    email       = serializers.EmailField()
    origin      = serializers.CharField(max_length=40)
    destination = serializers.CharField(max_length=20)

    def validate_destination(self, value):
        if not Waypoint.objects.filter(code=value).exists():
            raise serializers.ValidationError(f"Unknown destination waypoint {value!r}.")
        return value


class LocationPingSerializer(serializers.Serializer):
    driver    = serializers.CharField(max_length=200, help_text="Identification key or tax id")
    latitude  = serializers.FloatField(min_value=-90, max_value=90)
    longitude = serializers.FloatField(min_value=-180, max_value=180)
    timestamp = serializers.DateTimeField(required=False, allow_null=True)


class DriverLocationSerializer(serializers.ModelSerializer):
    """Ping plus its position relative to the driver's destination waypoint (context `waypoint`)."""
    driver                    = serializers.CharField(source="enrollment.identification_key", read_only=True)
    distance_to_destination_m = serializers.SerializerMethodField()
    at_destination            = serializers.SerializerMethodField()

    class Meta:
        model  = DriverLocation
        fields = [
            "id", "driver", "latitude", "longitude", "recorded_at", "received_at",
            "distance_to_destination_m", "at_destination",
        ]
        read_only_fields = fields

    def _distance(self, obj):
        waypoint = self.context.get("waypoint")
        if waypoint is None:
            return None
        return distance_m(waypoint.latitude, waypoint.longitude, obj.latitude, obj.longitude)

    def get_distance_to_destination_m(self, obj):
        distance = self._distance(obj)
        return None if distance is None else round(distance)

    def get_at_destination(self, obj):
        waypoint = self.context.get("waypoint")
        if waypoint is None:
            return None
        return within_waypoint(waypoint, obj.latitude, obj.longitude)
