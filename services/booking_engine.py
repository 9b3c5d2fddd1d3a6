"""
Booking engine: reserve-and-create, cancel, customer-field updates and the
read-only availability check.

Every mutation runs in one transaction on the request's session. The slot
is claimed with a conditional UPDATE (see ``slots.reserve_schedule``), so two
concurrent creates against one schedule cannot both commit; the unique
constraint on ``bookings.schedule_id`` backs this up at the storage layer.
"""

import logging
from datetime import date
from decimal import ROUND_HALF_UP, Decimal

from flask import current_app

from models import db
from models.booking import Booking
from models.court import COURT_ACTIVE
from models.schedule import SCHEDULE_AVAILABLE, SCHEDULE_BOOKED, Schedule
from services.errors import NotFound, PriceComputationError, SlotUnavailable, ValidationFailed
from services.queries import get_booking
from services.schemas import (
    BookingCreate,
    BookingUpdate,
    RangeAvailabilityQuery,
    ScheduleAvailabilityQuery,
    changed_fields,
    parse_payload,
)
from services.slots import get_court, get_schedule, release_schedule, reserve_schedule
from services.timerange import duration_hours, ranges_overlap
from services.transaction import atomic

_LOGGER = logging.getLogger(__name__)

CENT = Decimal("0.01")

# set once at creation; updates naming them are refused
IMMUTABLE_BOOKING_FIELDS = ("schedule_id", "total_price")


def compute_price(schedule: Schedule) -> Decimal:
    """Slot duration x court hourly price, rounded to cents."""
    court = schedule.court
    if court is None or court.price_per_hour is None:
        raise PriceComputationError("Court price is not available for this schedule")

    # InvalidTimeFormat propagates; there is no default duration
    hours = duration_hours(schedule.start_time, schedule.end_time)
    return (hours * Decimal(court.price_per_hour)).quantize(CENT, rounding=ROUND_HALF_UP)


def _reject_past_slot(schedule: Schedule) -> None:
    if not current_app.config.get("BOOKING_REJECT_PAST_SLOTS", True):
        return
    if schedule.date < date.today():
        raise ValidationFailed({"schedule_id": ["Cannot book a schedule in the past"]})


def create_booking(payload) -> Booking:
    """
    Reserve the schedule and create its booking as one unit.

    Raises ``ValidationFailed``, ``NotFound``, ``SlotUnavailable``,
    ``PriceComputationError`` (``InvalidTimeFormat`` for malformed slot
    times) or ``StorageFailure``. On any failure nothing is persisted.
    """
    data = parse_payload(BookingCreate, payload)

    with atomic(on_integrity_error=SlotUnavailable()):
        schedule = get_schedule(data.schedule_id)
        if schedule.status != SCHEDULE_AVAILABLE:
            raise SlotUnavailable()
        if schedule.court.status != COURT_ACTIVE:
            raise SlotUnavailable("Court is not accepting bookings")
        _reject_past_slot(schedule)

        total_price = compute_price(schedule)

        reserve_schedule(schedule.id)
        booking = Booking(
            schedule_id=schedule.id,
            customer_name=data.customer_name,
            customer_phone=data.customer_phone,
            customer_email=data.customer_email,
            total_price=total_price,
            notes=data.notes,
        )
        db.session.add(booking)
        db.session.flush()
        booking_id = booking.id

    _LOGGER.info("Booking %s created for schedule %s", booking_id, data.schedule_id)
    return get_booking(booking_id)


def cancel_booking(booking_id: int) -> None:
    """Free the schedule and delete the booking, both or neither."""
    with atomic():
        booking = db.session.get(Booking, booking_id)
        if booking is None:
            raise NotFound("Booking not found")
        schedule_id = booking.schedule_id

        release_schedule(schedule_id)
        db.session.delete(booking)

    _LOGGER.info("Booking %s cancelled, schedule %s released", booking_id, schedule_id)


def update_booking(booking_id: int, payload) -> Booking:
    """Change customer-facing fields only; the slot and price never move."""
    if isinstance(payload, dict):
        locked = [field for field in IMMUTABLE_BOOKING_FIELDS if field in payload]
        if locked:
            raise ValidationFailed({field: ["cannot be changed after booking"] for field in locked})

    changes = changed_fields(
        parse_payload(BookingUpdate, payload), nullable=("customer_email", "notes")
    )

    with atomic():
        booking = db.session.get(Booking, booking_id)
        if booking is None:
            raise NotFound("Booking not found")
        for field, value in changes.items():
            setattr(booking, field, value)

    return get_booking(booking_id)


def check_availability(payload) -> dict:
    """
    Read-only availability check.

    ``{"schedule_id": ...}`` checks one slot's status. Otherwise
    ``court_id``/``date``/``start_time``/``end_time`` is checked for overlap
    against the court's booked schedules that day.
    """
    if isinstance(payload, dict) and "schedule_id" in payload:
        query = parse_payload(ScheduleAvailabilityQuery, payload)
        schedule = get_schedule(query.schedule_id)
        available = schedule.status == SCHEDULE_AVAILABLE and schedule.court.status == COURT_ACTIVE
        return {"available": available, "schedule_id": schedule.id, "status": schedule.status}

    query = parse_payload(RangeAvailabilityQuery, payload)
    court = get_court(query.court_id)
    booked = Schedule.query.filter_by(court_id=court.id, date=query.date, status=SCHEDULE_BOOKED).all()
    conflicts = [
        s.id for s in booked if ranges_overlap(query.start_time, query.end_time, s.start_time, s.end_time)
    ]
    return {
        "available": court.status == COURT_ACTIVE and not conflicts,
        "conflicting_schedule_ids": conflicts,
    }
