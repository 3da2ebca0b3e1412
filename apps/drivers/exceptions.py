"""Driver registry errors."""

from rest_framework import status

from yardline.exceptions import DomainError


class DuplicateTaxId(DomainError):
    status_code    = status.HTTP_409_CONFLICT
    default_detail = "A driver with this tax id is already enrolled."
    default_code   = "duplicate_tax_id"


class DriverNotFound(DomainError):
    status_code    = status.HTTP_404_NOT_FOUND
    default_detail = "Driver not found."
    default_code   = "not_found"
