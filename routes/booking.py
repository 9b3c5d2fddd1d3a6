from flask import Blueprint, current_app, request

from services import booking_engine, queries
from services.errors import SlotUnavailable
from utils.audit import log_event
from utils.params import date_arg
from utils.responses import ok
from utils.serialize import booking_to_dict

booking_bp = Blueprint("booking", __name__, url_prefix="/v1/bookings")


# ---------- listings ----------
@booking_bp.get("")
def list_bookings():
    # ordered by slot: play date desc, start time asc
    rows = queries.list_bookings(
        court_id=request.args.get("court_id", type=int),
        day=date_arg(),
    )
    return ok("Bookings retrieved successfully", [booking_to_dict(b) for b in rows])


@booking_bp.get("/recent")
def list_recent_bookings():
    rows = queries.list_recent_bookings(
        court_id=request.args.get("court_id", type=int),
        day=date_arg(),
        limit=current_app.config.get("BOOKING_LIST_LIMIT", queries.DEFAULT_LIST_LIMIT),
    )
    return ok("Recent bookings retrieved successfully", [booking_to_dict(b) for b in rows])


@booking_bp.get("/<int:booking_id>")
def show_booking(booking_id: int):
    booking = queries.get_booking(booking_id)
    return ok("Booking retrieved successfully", booking_to_dict(booking))


# ---------- book a schedule (DOUBLE-BOOKING SAFE) ----------
@booking_bp.post("")
def create_booking():
    data = request.get_json(silent=True) or {}

    try:
        booking = booking_engine.create_booking(data)
    except SlotUnavailable:
        schedule_id = data.get("schedule_id") if isinstance(data, dict) else None
        log_event("BOOKING_FAIL_ALREADY_BOOKED", entity="schedule", entity_id=schedule_id)
        raise

    out = booking_to_dict(booking)
    log_event("BOOKING_CREATE", entity="booking", entity_id=out["id"], metadata={"schedule_id": out["schedule_id"]})
    return ok("Booking created successfully", out, 201)


@booking_bp.put("/<int:booking_id>")
def update_booking(booking_id: int):
    data = request.get_json(silent=True) or {}
    booking = booking_engine.update_booking(booking_id, data)
    out = booking_to_dict(booking)

    log_event("BOOKING_UPDATE", entity="booking", entity_id=booking_id, metadata={"fields": sorted(data)})
    return ok("Booking updated successfully", out)


# ---------- cancel: frees the schedule ----------
@booking_bp.delete("/<int:booking_id>")
def cancel_booking(booking_id: int):
    booking_engine.cancel_booking(booking_id)

    log_event("BOOKING_CANCEL", entity="booking", entity_id=booking_id)
    return ok("Booking cancelled successfully")


@booking_bp.post("/check-availability")
def check_availability():
    data = request.get_json(silent=True) or {}
    result = booking_engine.check_availability(data)
    return ok("Availability checked successfully", result)
