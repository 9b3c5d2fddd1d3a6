from flask import Blueprint, request

from models.court import COURT_ACTIVE, COURT_STATUSES
from services import queries, slots
from utils.audit import log_event
from utils.params import choice_arg
from utils.responses import ok
from utils.serialize import court_to_dict

court_bp = Blueprint("court", __name__, url_prefix="/v1/courts")


@court_bp.get("")
def list_courts():
    # ?status=all lists every court; default is active only
    status = choice_arg("status", COURT_STATUSES + ("all",), default=COURT_ACTIVE)
    courts = queries.list_courts(status=None if status == "all" else status)
    return ok("Courts retrieved successfully", [court_to_dict(c) for c in courts])


@court_bp.get("/<int:court_id>")
def show_court(court_id: int):
    court = slots.get_court(court_id)
    return ok("Court retrieved successfully", court_to_dict(court))


@court_bp.post("")
def create_court():
    data = request.get_json(silent=True) or {}
    court = slots.create_court(data)
    out = court_to_dict(court)

    log_event("COURT_CREATE", entity="court", entity_id=court.id)
    return ok("Court created successfully", out, 201)


@court_bp.put("/<int:court_id>")
def update_court(court_id: int):
    data = request.get_json(silent=True) or {}
    court = slots.update_court(court_id, data)
    out = court_to_dict(court)

    log_event("COURT_UPDATE", entity="court", entity_id=court_id, metadata={"fields": sorted(data)})
    return ok("Court updated successfully", out)


@court_bp.delete("/<int:court_id>")
def delete_court(court_id: int):
    slots.delete_court(court_id)

    log_event("COURT_DELETE", entity="court", entity_id=court_id)
    return ok("Court deleted successfully")
