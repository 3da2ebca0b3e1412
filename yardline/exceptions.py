"""
Domain error base classes and the DRF boundary handler.

Services raise DomainError subclasses; api_exception_handler turns every error
into a structured body: {"error": <code>, "detail": <message>, ...extra}.
Anything that is not an APIException (database outages included) is logged
and answered with a generic 500.
"""

import logging

from rest_framework import status
from rest_framework.exceptions import APIException, ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger("yardline.errors")


class DomainError(APIException):
    """An expected business-rule failure, surfaced to the caller as-is."""

    status_code    = status.HTTP_400_BAD_REQUEST
    default_detail = "Request could not be processed."
    default_code   = "domain_error"

    def __init__(self, detail=None, **extra):
        super().__init__(detail)
        self.extra = extra

    def as_dict(self) -> dict:
        return {"error": self.default_code, "detail": str(self.detail), **self.extra}


class InvalidInput(DomainError):
    """Malformed fields; `fields` maps each field name to its message."""

    default_detail = "Invalid input."
    default_code   = "invalid_input"

    def __init__(self, fields: dict, detail=None):
        super().__init__(detail, fields=fields)
        self.fields = fields


def api_exception_handler(exc, context):
    response = exception_handler(exc, context)
    view = context.get("view")
    view_name = view.__class__.__name__ if view is not None else "unknown"

    if response is None:
        logger.error("Unhandled error in %s: %s", view_name, exc, exc_info=exc)
        return Response(
            {"error": "internal_error", "detail": "Internal server error."},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    if isinstance(exc, DomainError):
        logger.info("%s rejected: %s %s", view_name, exc.default_code, exc.extra)
        response.data = exc.as_dict()
    elif isinstance(exc, ValidationError):
        response.data = {
            "error":  InvalidInput.default_code,
            "detail": InvalidInput.default_detail,
            "fields": response.data,
        }
    elif isinstance(response.data, dict) and "detail" in response.data:
        code = getattr(exc, "default_code", None)
        if response.status_code == status.HTTP_404_NOT_FOUND:
            code = "not_found"
        response.data = {"error": code or "error", "detail": str(response.data["detail"])}
    return response
