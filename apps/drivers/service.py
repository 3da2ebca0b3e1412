"""
DriverRegistry — enrollment, lookup and location history.

Enrollment and location pings are the only writes. Tax id uniqueness is
checked up front and backed by the unique index, and the identification key
is disambiguated with a numeric suffix until it is free.
"""

import logging
import re

from django.db import IntegrityError, transaction
from django.utils import timezone

from apps.drivers.exceptions import DriverNotFound, DuplicateTaxId
from apps.drivers.models import DriverEnrollment, DriverLocation, Waypoint

logger = logging.getLogger("yardline.drivers")

KEY_ATTEMPTS           = 5
LOCATION_HISTORY_LIMIT = 100


def identification_key_base(full_name: str, origin: str, destination: str) -> str:
    """`Ana Souza`, `SP1`, `XRJ2` → `Ana_Souza_SP1_XRJ2`."""
    return re.sub(r"\s+", "_", f"{full_name.strip()}_{origin.strip()}_{destination.strip()}")


def normalize_tax_id(value: str) -> str:
    """Strip the punctuation tax ids are usually typed with (`123.456.789-09`)."""
    return re.sub(r"[\s./-]", "", value or "")


class DriverRegistry:

    def register(
        self,
        full_name: str,
        tax_id: str,
        phone: str,
        email: str,
        origin: str,
        destination: str,
    ) -> DriverEnrollment:
        tax_id = normalize_tax_id(tax_id)
        if DriverEnrollment.objects.filter(tax_id=tax_id).exists():
            raise DuplicateTaxId(tax_id=tax_id)

        base = identification_key_base(full_name, origin, destination)
        for _ in range(KEY_ATTEMPTS):
            key = self._free_identification_key(base)
            try:
                with transaction.atomic():
                    enrollment = DriverEnrollment.objects.create(
                        full_name          = full_name.strip(),
                        tax_id             = tax_id,
                        phone              = phone,
                        email              = email,
                        origin             = origin.strip(),
                        destination        = destination.strip(),
                        identification_key = key,
                    )
            except IntegrityError as exc:
                # Lost a race: either the tax id or the key was taken meanwhile
                if DriverEnrollment.objects.filter(tax_id=tax_id).exists():
                    raise DuplicateTaxId(tax_id=tax_id) from exc
                logger.warning("Identification key %s taken concurrently, retrying", key)
                continue
            logger.info("Driver %s enrolled as %s", tax_id, key)
            return enrollment

        raise IntegrityError(f"Could not allocate an identification key for {base}")

    def lookup(self, tax_id: str, for_update: bool = False) -> DriverEnrollment:
        """Return the enrollment for `tax_id`; lock the row when `for_update`."""
        qs = DriverEnrollment.objects.all()
        if for_update:
            qs = qs.select_for_update()
        enrollment = qs.filter(tax_id=normalize_tax_id(tax_id)).first()
        if enrollment is None:
            raise DriverNotFound(tax_id=tax_id)
        return enrollment

    def resolve(self, driver: str) -> DriverEnrollment:
        """Find a driver by identification key, falling back to tax id."""
        driver = (driver or "").strip()
        enrollment = None
        if driver:
            enrollment = (
                DriverEnrollment.objects.filter(identification_key=driver).first()
                or DriverEnrollment.objects.filter(tax_id=normalize_tax_id(driver)).first()
            )
        if enrollment is None:
            raise DriverNotFound(driver=driver)
        return enrollment

    def destination_waypoint(self, enrollment: DriverEnrollment):
        return Waypoint.objects.filter(code=enrollment.destination).first()

    # ── location pings ────────────────────────────────────────────────────────
    def record_location(self, driver: str, latitude: float, longitude: float, recorded_at=None) -> DriverLocation:
        enrollment = self.resolve(driver)
        location = DriverLocation.objects.create(
            enrollment  = enrollment,
            latitude    = latitude,
            longitude   = longitude,
            recorded_at = recorded_at or timezone.now(),
        )
        logger.debug("Location from %s: %.5f,%.5f", enrollment.identification_key, latitude, longitude)
        return location

    def locations(self, driver: str) -> list:
        """Newest pings first, at most LOCATION_HISTORY_LIMIT."""
        enrollment = self.resolve(driver)
        return list(enrollment.locations.order_by("-recorded_at", "-id")[:LOCATION_HISTORY_LIMIT])

    def enrollments(self):
        return DriverEnrollment.objects.all()

    def waypoints(self):
        return Waypoint.objects.all()

    def _free_identification_key(self, base: str) -> str:
        key, suffix = base, 1
        while DriverEnrollment.objects.filter(identification_key=key).exists():
            key = f"{base}_{suffix}"
            suffix += 1
        return key
