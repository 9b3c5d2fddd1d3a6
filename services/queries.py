"""Read paths. Every listing is a plain function parameterized by its filters."""

from sqlalchemy.orm import contains_eager

from models.booking import Booking
from models.court import COURT_ACTIVE, Court
from models.schedule import SCHEDULE_AVAILABLE, Schedule
from services.errors import NotFound

DEFAULT_LIST_LIMIT = 200


# ---------- courts ----------
def list_courts(status=COURT_ACTIVE):
    q = Court.query
    if status:
        q = q.filter(Court.status == status)
    return q.order_by(Court.id.asc()).all()


# ---------- schedules ----------
def _schedules(court_id=None, day=None, status=None):
    q = Schedule.query.join(Schedule.court).options(contains_eager(Schedule.court))
    if court_id:
        q = q.filter(Schedule.court_id == court_id)
    if day:
        q = q.filter(Schedule.date == day)
    if status:
        q = q.filter(Schedule.status == status)
    return q


def list_schedules(court_id=None, day=None, status=None):
    return (
        _schedules(court_id, day, status)
        .order_by(Schedule.date.asc(), Schedule.start_time.asc(), Schedule.id.asc())
        .all()
    )


def list_available_schedules(court_id=None, day=None):
    return list_schedules(court_id=court_id, day=day, status=SCHEDULE_AVAILABLE)


def get_schedule(schedule_id: int) -> Schedule:
    schedule = _schedules().filter(Schedule.id == schedule_id).first()
    if schedule is None:
        raise NotFound("Schedule not found")
    return schedule


# ---------- bookings ----------
def _bookings(court_id=None, day=None):
    q = (
        Booking.query
        .join(Booking.schedule)
        .join(Schedule.court)
        .options(contains_eager(Booking.schedule).contains_eager(Schedule.court))
    )
    if court_id:
        q = q.filter(Schedule.court_id == court_id)
    if day:
        q = q.filter(Schedule.date == day)
    return q


def list_bookings(court_id=None, day=None):
    """Bookings by slot: latest play date first, earliest start within a day."""
    return (
        _bookings(court_id, day)
        .order_by(Schedule.date.desc(), Schedule.start_time.asc(), Booking.id.asc())
        .all()
    )


def list_recent_bookings(court_id=None, day=None, limit=DEFAULT_LIST_LIMIT):
    """Bookings by creation time, newest first."""
    return (
        _bookings(court_id, day)
        .order_by(Booking.created_at.desc(), Booking.id.desc())
        .limit(limit)
        .all()
    )


def get_booking(booking_id: int) -> Booking:
    booking = _bookings().filter(Booking.id == booking_id).first()
    if booking is None:
        raise NotFound("Booking not found")
    return booking
