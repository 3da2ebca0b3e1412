"""
Driver registry models.
A DriverEnrollment authorizes one physical driver to enter the unloading queue.
Waypoints (XPTs) are the destination reference table; DriverLocation holds
the GPS pings drivers send on the way.
"""

from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models


class Waypoint(models.Model):
    """Destination waypoint (XPT) with a geofence radius in metres."""
    city       = models.CharField(max_length=80)
    code       = models.CharField(max_length=20, unique=True)
    latitude   = models.FloatField()
    longitude  = models.FloatField()
    radius_m   = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    origin     = models.CharField(max_length=40, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["city"]

    def __str__(self):
        return f"{self.code} ({self.city})"


class DriverEnrollment(models.Model):
    """Registration record. Read-only once created."""
    full_name          = models.CharField(max_length=120)
    tax_id             = models.CharField(max_length=20, unique=True)
    phone              = models.CharField(max_length=20)
    email              = models.EmailField()
    origin             = models.CharField(max_length=40)
    destination        = models.CharField(max_length=20)
    # slug of name/origin/destination, suffixed _1, _2 ... on collision
    identification_key = models.CharField(max_length=200, unique=True)
    created_at         = models.DateTimeField(auto_now_add=True)
    updated_at         = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["full_name"]
        indexes  = [
            models.Index(fields=["destination"], name="enroll_destination_idx"),
        ]

    def __str__(self):
        return f"{self.full_name} [{self.tax_id}]"


class DriverLocation(models.Model):
    """One GPS ping. Append-only."""
    enrollment  = models.ForeignKey(DriverEnrollment, on_delete=models.CASCADE, related_name="locations")
    latitude    = models.FloatField(validators=[MinValueValidator(-90), MaxValueValidator(90)])
    longitude   = models.FloatField(validators=[MinValueValidator(-180), MaxValueValidator(180)])
    recorded_at = models.DateTimeField()          # device time, falls back to receipt time
    received_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-recorded_at"]
        indexes  = [
            models.Index(fields=["enrollment", "-recorded_at"], name="location_driver_time_idx"),
        ]

    def __str__(self):
        return f"{self.enrollment_id} @ {self.latitude:.5f},{self.longitude:.5f}"
