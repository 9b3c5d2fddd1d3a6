from flask import current_app
from werkzeug.exceptions import HTTPException

from services.errors import (
    BookingError,
    Conflict,
    NotFound,
    PriceComputationError,
    StorageFailure,
    ValidationFailed,
)
from utils.responses import fail

# most specific first: SlotUnavailable is a Conflict, InvalidTimeFormat a PriceComputationError
STATUS_BY_ERROR = (
    (NotFound, 404),
    (ValidationFailed, 422),
    (Conflict, 409),
    (PriceComputationError, 422),
    (StorageFailure, 500),
)


def status_for(exc: BookingError) -> int:
    for cls, status in STATUS_BY_ERROR:
        if isinstance(exc, cls):
            return status
    return 500


def register_error_handlers(app):
    @app.errorhandler(BookingError)
    def _booking_error(exc):
        status = status_for(exc)
        if isinstance(exc, ValidationFailed):
            return fail(exc.message, status, error=type(exc).__name__, errors=exc.errors)
        if status >= 500:
            current_app.logger.error("%s: %s", type(exc).__name__, exc.message, exc_info=exc)
        return fail(exc.message, status, error=type(exc).__name__)

    @app.errorhandler(HTTPException)
    def _http_error(exc):
        return fail(exc.description or exc.name, exc.code or 500, error=exc.name)

    @app.errorhandler(Exception)
    def _unexpected_error(exc):
        current_app.logger.exception("Unhandled error")
        return fail("Internal server error", 500, error=type(exc).__name__)
