from flask import Blueprint, request

from models.schedule import SCHEDULE_STATUSES
from services import queries, slots
from utils.audit import log_event
from utils.params import choice_arg, date_arg
from utils.responses import ok
from utils.serialize import schedule_to_dict

schedule_bp = Blueprint("schedule", __name__, url_prefix="/v1")


@schedule_bp.get("/schedules")
def list_schedules():
    rows = queries.list_schedules(
        court_id=request.args.get("court_id", type=int),
        day=date_arg(),
        status=choice_arg("status", SCHEDULE_STATUSES),
    )
    return ok("Schedules retrieved successfully", [schedule_to_dict(s) for s in rows])


@schedule_bp.get("/schedules-available")
def list_available_schedules():
    rows = queries.list_available_schedules(
        court_id=request.args.get("court_id", type=int),
        day=date_arg(),
    )
    return ok("Available schedules retrieved successfully", [schedule_to_dict(s) for s in rows])


@schedule_bp.get("/schedules/<int:schedule_id>")
def show_schedule(schedule_id: int):
    schedule = queries.get_schedule(schedule_id)
    return ok("Schedule retrieved successfully", schedule_to_dict(schedule))


@schedule_bp.post("/schedules")
def create_schedule():
    data = request.get_json(silent=True) or {}
    schedule = slots.create_schedule(data)
    out = schedule_to_dict(queries.get_schedule(schedule.id))

    log_event("SCHEDULE_CREATE", entity="schedule", entity_id=out["id"], metadata={"court_id": out["court_id"]})
    return ok("Schedule created successfully", out, 201)


@schedule_bp.put("/schedules/<int:schedule_id>")
def update_schedule(schedule_id: int):
    data = request.get_json(silent=True) or {}
    slots.update_schedule(schedule_id, data)
    out = schedule_to_dict(queries.get_schedule(schedule_id))

    log_event("SCHEDULE_UPDATE", entity="schedule", entity_id=schedule_id, metadata={"fields": sorted(data)})
    return ok("Schedule updated successfully", out)


@schedule_bp.delete("/schedules/<int:schedule_id>")
def delete_schedule(schedule_id: int):
    slots.delete_schedule(schedule_id)

    log_event("SCHEDULE_DELETE", entity="schedule", entity_id=schedule_id)
    return ok("Schedule deleted successfully")
