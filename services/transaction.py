import logging
from contextlib import contextmanager

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from models import db
from services.errors import BookingError, StorageFailure

_LOGGER = logging.getLogger(__name__)


@contextmanager
def atomic(on_integrity_error: BookingError | None = None):
    """
    Run the block as one unit of work on the current session.

    Commits on success. Any failure rolls the whole session back; database
    errors surface as ``StorageFailure`` unless the caller supplies the error
    a constraint violation means in its context.
    """
    try:
        yield db.session
        db.session.commit()
    except IntegrityError as exc:
        db.session.rollback()
        if on_integrity_error is not None:
            raise on_integrity_error from exc
        _LOGGER.warning("Integrity error rolled back: %s", exc.orig)
        raise StorageFailure("Database constraint violated") from exc
    except SQLAlchemyError as exc:
        db.session.rollback()
        _LOGGER.error("Transaction rolled back: %s", exc)
        raise StorageFailure(f"Database error: {exc.__class__.__name__}") from exc
    except Exception:
        db.session.rollback()
        raise
