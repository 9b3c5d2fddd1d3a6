"""
Slot store: courts and schedules, plus the two conditional status
transitions the booking engine uses as its mutual-exclusion primitive.
"""

import logging

from sqlalchemy import delete, update

from models import db
from models.court import COURT_ACTIVE, Court
from models.schedule import SCHEDULE_AVAILABLE, SCHEDULE_BOOKED, Schedule
from services.errors import Conflict, InvalidTimeFormat, NotFound, SlotUnavailable, ValidationFailed
from services.schemas import CourtCreate, CourtUpdate, ScheduleCreate, ScheduleUpdate, changed_fields, parse_payload
from services.timerange import ranges_overlap, validate_slot_range
from services.transaction import atomic

_LOGGER = logging.getLogger(__name__)


# ---------- courts ----------
def get_court(court_id: int) -> Court:
    court = db.session.get(Court, court_id)
    if court is None:
        raise NotFound("Court not found")
    return court


def create_court(payload) -> Court:
    data = parse_payload(CourtCreate, payload)
    court = Court(**data.model_dump())
    with atomic():
        db.session.add(court)
    _LOGGER.info("Court %s created", court.id)
    return court


def update_court(court_id: int, payload) -> Court:
    changes = changed_fields(parse_payload(CourtUpdate, payload), nullable=("description",))
    with atomic():
        court = get_court(court_id)
        for field, value in changes.items():
            setattr(court, field, value)
    return court


def delete_court(court_id: int) -> None:
    """Restrict-on-delete: a court that still owns schedules stays."""
    blocked = Conflict("Court has schedules and cannot be deleted")
    with atomic(on_integrity_error=blocked):
        court = get_court(court_id)
        if Schedule.query.filter_by(court_id=court.id).first() is not None:
            raise blocked
        db.session.delete(court)
    _LOGGER.info("Court %s deleted", court_id)


# ---------- schedules ----------
def get_schedule(schedule_id: int) -> Schedule:
    schedule = db.session.get(Schedule, schedule_id)
    if schedule is None:
        raise NotFound("Schedule not found")
    return schedule


def overlapping_schedule(court_id, day, start_time, end_time, exclude_id=None):
    """First schedule of the court on ``day`` whose range meets the given one, or None."""
    q = Schedule.query.filter(Schedule.court_id == court_id, Schedule.date == day)
    if exclude_id is not None:
        q = q.filter(Schedule.id != exclude_id)

    for other in q.order_by(Schedule.id.asc()).all():
        try:
            clash = ranges_overlap(start_time, end_time, other.start_time, other.end_time)
        except InvalidTimeFormat:
            _LOGGER.warning("Schedule %s has malformed times, skipped in overlap check", other.id)
            continue
        if clash:
            return other
    return None


def _ensure_no_overlap(court_id, day, start_time, end_time, exclude_id=None):
    other = overlapping_schedule(court_id, day, start_time, end_time, exclude_id)
    if other is not None:
        raise Conflict(f"Schedule overlaps schedule {other.id} on the same court")


def create_schedule(payload) -> Schedule:
    data = parse_payload(ScheduleCreate, payload)
    with atomic(on_integrity_error=Conflict("Schedule already exists for that court and time")):
        court = get_court(data.court_id)
        if court.status != COURT_ACTIVE:
            raise Conflict("Court is inactive")
        _ensure_no_overlap(court.id, data.date, data.start_time, data.end_time)

        schedule = Schedule(
            court_id=court.id,
            date=data.date,
            start_time=data.start_time,
            end_time=data.end_time,
            status=SCHEDULE_AVAILABLE,
        )
        db.session.add(schedule)
    _LOGGER.info("Schedule %s created for court %s", schedule.id, schedule.court_id)
    return schedule


def update_schedule(schedule_id: int, payload) -> Schedule:
    """
    Edit an available schedule. Booked schedules are locked until their
    booking is cancelled, and status only moves through bookings.
    """
    changes = changed_fields(parse_payload(ScheduleUpdate, payload))
    if changes.pop("status", SCHEDULE_AVAILABLE) != SCHEDULE_AVAILABLE:
        raise Conflict("Schedules become booked only through a booking")

    locked = Conflict("Booked schedules cannot be changed; cancel the booking first")
    with atomic(on_integrity_error=Conflict("Schedule already exists for that court and time")):
        schedule = get_schedule(schedule_id)
        if schedule.status != SCHEDULE_AVAILABLE:
            raise locked
        if not changes:
            return schedule

        court_id = changes.get("court_id", schedule.court_id)
        day = changes.get("date", schedule.date)
        start_time = changes.get("start_time", schedule.start_time)
        end_time = changes.get("end_time", schedule.end_time)

        if "court_id" in changes and get_court(court_id).status != COURT_ACTIVE:
            raise Conflict("Court is inactive")
        try:
            validate_slot_range(start_time, end_time)
        except InvalidTimeFormat as exc:
            raise ValidationFailed({"start_time": [exc.message]}) from exc
        except ValueError as exc:
            raise ValidationFailed({"end_time": [str(exc)]}) from exc
        _ensure_no_overlap(court_id, day, start_time, end_time, exclude_id=schedule.id)

        # conditional on status so a booking that lands meanwhile keeps its slot
        result = db.session.execute(
            update(Schedule)
            .where(Schedule.id == schedule.id, Schedule.status == SCHEDULE_AVAILABLE)
            .values(**changes)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            raise locked
        db.session.expire(schedule)
    return schedule


def delete_schedule(schedule_id: int) -> None:
    locked = Conflict("Booked schedules cannot be deleted; cancel the booking first")
    with atomic(on_integrity_error=locked):
        get_schedule(schedule_id)
        result = db.session.execute(
            delete(Schedule)
            .where(Schedule.id == schedule_id, Schedule.status == SCHEDULE_AVAILABLE)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            raise locked
    _LOGGER.info("Schedule %s deleted", schedule_id)


# ---------- status transitions ----------
def reserve_schedule(schedule_id: int) -> None:
    """
    available -> booked, as a single conditional UPDATE.

    Must run inside the caller's transaction. Exactly one concurrent caller
    sees rowcount == 1; everyone else gets ``SlotUnavailable``.
    """
    result = db.session.execute(
        update(Schedule)
        .where(Schedule.id == schedule_id, Schedule.status == SCHEDULE_AVAILABLE)
        .values(status=SCHEDULE_BOOKED)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount != 1:
        raise SlotUnavailable()


def release_schedule(schedule_id: int) -> None:
    """booked -> available. Raises ``Conflict`` when the slot is not booked."""
    result = db.session.execute(
        update(Schedule)
        .where(Schedule.id == schedule_id, Schedule.status == SCHEDULE_BOOKED)
        .values(status=SCHEDULE_AVAILABLE)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount != 1:
        raise Conflict("Schedule is not reserved; cancellation aborted")
