from datetime import datetime, timedelta

import pytest

from models import db
from services import booking_engine, queries
from services.errors import NotFound


@pytest.fixture()
def four_bookings(make_court, make_schedule, tomorrow, customer):
    court_a = make_court(name="Court A")
    court_b = make_court(name="Court B", price="40000")
    later = tomorrow + timedelta(days=1)

    slots = {
        "a_day1_0900": make_schedule(court=court_a, start="09:00", end="11:00", day=tomorrow),
        "b_day1_0700": make_schedule(court=court_b, start="07:00", end="08:00", day=tomorrow),
        "a_day2_1400": make_schedule(court=court_a, start="14:00", end="16:00", day=later),
        "b_day2_0800": make_schedule(court=court_b, start="08:00", end="10:00", day=later),
    }
    created_at = {
        "a_day1_0900": datetime(2026, 1, 1, 10, 0),
        "b_day1_0700": datetime(2026, 1, 3, 10, 0),
        "a_day2_1400": datetime(2026, 1, 2, 10, 0),
        "b_day2_0800": datetime(2026, 1, 4, 10, 0),
    }

    bookings = {}
    for key, schedule in slots.items():
        booking = booking_engine.create_booking({"schedule_id": schedule.id, **customer, "customer_name": key})
        booking.created_at = created_at[key]
        bookings[key] = booking
    db.session.commit()
    return {"court_a": court_a, "court_b": court_b, "later": later, "bookings": bookings}


def _names(rows):
    return [b.customer_name for b in rows]


def test_bookings_by_slot_order_latest_day_first_then_start_time(four_bookings):
    assert _names(queries.list_bookings()) == [
        "b_day2_0800",
        "a_day2_1400",
        "b_day1_0700",
        "a_day1_0900",
    ]


def test_recent_bookings_order_by_creation_time_desc(four_bookings):
    assert _names(queries.list_recent_bookings()) == [
        "b_day2_0800",
        "b_day1_0700",
        "a_day2_1400",
        "a_day1_0900",
    ]


def test_recent_bookings_respects_limit(four_bookings):
    assert _names(queries.list_recent_bookings(limit=2)) == ["b_day2_0800", "b_day1_0700"]


def test_booking_filters(four_bookings):
    court_a = four_bookings["court_a"]

    assert _names(queries.list_bookings(court_id=court_a.id)) == ["a_day2_1400", "a_day1_0900"]
    assert _names(queries.list_bookings(day=four_bookings["later"])) == ["b_day2_0800", "a_day2_1400"]
    assert _names(queries.list_bookings(court_id=court_a.id, day=four_bookings["later"])) == ["a_day2_1400"]


def test_bookings_come_with_schedule_and_court(four_bookings):
    booking = queries.get_booking(four_bookings["bookings"]["b_day2_0800"].id)

    assert booking.schedule.start_time == "08:00"
    assert booking.schedule.court.name == "Court B"


def test_get_booking_missing(app):
    with pytest.raises(NotFound):
        queries.get_booking(1)


def test_schedules_listing_and_available_variant(make_court, make_schedule, tomorrow):
    court = make_court()
    late = make_schedule(court=court, start="16:00", end="18:00")
    early = make_schedule(court=court, start="08:00", end="10:00", status="booked")
    next_day = make_schedule(court=court, start="06:00", end="07:00", day=tomorrow + timedelta(days=1))

    assert [s.id for s in queries.list_schedules()] == [early.id, late.id, next_day.id]
    assert [s.id for s in queries.list_available_schedules()] == [late.id, next_day.id]
    assert [s.id for s in queries.list_schedules(status="booked")] == [early.id]
    assert [s.id for s in queries.list_available_schedules(day=tomorrow)] == [late.id]


def test_courts_listing_defaults_to_active(make_court):
    active = make_court(name="Court A")
    inactive = make_court(name="Court Z", status="inactive")

    assert [c.id for c in queries.list_courts()] == [active.id]
    assert [c.id for c in queries.list_courts(status=None)] == [active.id, inactive.id]
