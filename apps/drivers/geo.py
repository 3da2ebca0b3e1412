"""Great-circle distance and waypoint geofence checks."""

import math

EARTH_RADIUS_M = 6_371_000


def distance_m(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Haversine distance between two points, in metres."""
    lat1_rad  = math.radians(lat1)
    lat2_rad  = math.radians(lat2)
    delta_lat = math.radians(lat2 - lat1)
    delta_lon = math.radians(lon2 - lon1)

    a = (math.sin(delta_lat / 2) ** 2 +
         math.cos(lat1_rad) * math.cos(lat2_rad) *
         math.sin(delta_lon / 2) ** 2)
    return EARTH_RADIUS_M * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def within_waypoint(waypoint, latitude: float, longitude: float) -> bool:
    return distance_m(waypoint.latitude, waypoint.longitude, latitude, longitude) <= waypoint.radius_m
