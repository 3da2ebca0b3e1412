"""Queue state machine errors."""

from rest_framework import status

from yardline.exceptions import DomainError


class UnknownDriver(DomainError):
    status_code    = status.HTTP_404_NOT_FOUND
    default_detail = "No enrollment for this tax id."
    default_code   = "unknown_driver"


class AlreadyQueued(DomainError):
    status_code    = status.HTTP_409_CONFLICT
    default_detail = "Driver already has an active queue entry."
    default_code   = "already_queued"


class EntryNotFound(DomainError):
    status_code    = status.HTTP_404_NOT_FOUND
    default_detail = "Queue entry not found."
    default_code   = "not_found"


class InvalidTransition(DomainError):
    """Wrong state for the requested step; carries the entry's actual status."""
    default_detail = "Transition not allowed from the current status."
    default_code   = "invalid_transition"

    def __init__(self, current_status: str, action: str):
        super().__init__(
            f"Cannot {action} an entry that is {current_status}.",
            current_status=current_status,
        )
        self.current_status = current_status
