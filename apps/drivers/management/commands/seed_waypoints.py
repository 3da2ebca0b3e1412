"""
Management command: seed the destination waypoints (XPTs).

Usage:
    python manage.py seed_waypoints
"""

from django.core.management.base import BaseCommand
from apps.drivers.models import Waypoint


WAYPOINTS = [
    # city,                 code,    lat,       lng,       radius_m, origin
    ("São Paulo",           "XSP1",  -23.5505,  -46.6333,  500,      "CAJAMAR"),
    ("Guarulhos",           "XGR1",  -23.4543,  -46.5337,  400,      "CAJAMAR"),
    ("Campinas",            "XCP1",  -22.9056,  -47.0608,  400,      "CAJAMAR"),
    ("Rio de Janeiro",      "XRJ1",  -22.9068,  -43.1729,  600,      "CAJAMAR"),
    ("Belo Horizonte",      "XBH1",  -19.9167,  -43.9345,  500,      "BETIM"),
    ("Contagem",            "XCT1",  -19.9321,  -44.0539,  350,      "BETIM"),
    ("Curitiba",            "XCB1",  -25.4284,  -49.2733,  450,      "ARAUCARIA"),
    ("Porto Alegre",        "XPA1",  -30.0346,  -51.2177,  450,      "GRAVATAI"),
    ("Salvador",            "XSV1",  -12.9777,  -38.5016,  500,      "LAURO"),
    ("Recife",              "XRC1",   -8.0476,  -34.8770,  500,      "CABO"),
]


class Command(BaseCommand):
    help = "Seed destination waypoints (XPT)"

    def handle(self, *args, **options):
        created_count = 0
        for city, code, lat, lng, radius, origin in WAYPOINTS:
            _, created = Waypoint.objects.get_or_create(
                code=code,
                defaults={
                    "city":      city,
                    "latitude":  lat,
                    "longitude": lng,
                    "radius_m":  radius,
                    "origin":    origin,
                },
            )
            if created:
                created_count += 1

        self.stdout.write(self.style.SUCCESS(f"Seeded {created_count} waypoints."))
