"""Typed failures raised by the booking engine and the slot store.

Nothing here knows about HTTP; ``routes/errors.py`` maps each kind to a
status code and the JSON envelope.
"""


class BookingError(Exception):
    """Base class for every failure the service layer reports."""

    default_message = "Booking operation failed"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFound(BookingError):
    default_message = "Resource not found"


class ValidationFailed(BookingError):
    """Field-level validation failure. ``errors`` maps field -> messages."""

    default_message = "Validation failed"

    def __init__(self, errors: dict[str, list[str]], message: str | None = None):
        self.errors = errors
        super().__init__(message)


class Conflict(BookingError):
    default_message = "Request conflicts with current state"


class SlotUnavailable(Conflict):
    default_message = "Court is not available for the selected time slot"


class PriceComputationError(BookingError):
    default_message = "Unable to compute booking price"


class InvalidTimeFormat(PriceComputationError):
    default_message = "Invalid time format. Use HH:MM or HH:MM:SS"


class StorageFailure(BookingError):
    default_message = "Storage failure"
