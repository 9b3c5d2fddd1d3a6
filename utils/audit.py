import json
import logging

from flask import has_request_context, request
from sqlalchemy.exc import SQLAlchemyError

from models import db
from models.audit_log import AuditLog

_LOGGER = logging.getLogger(__name__)


def _client():
    if not has_request_context():
        return None, None
    user_agent = request.headers.get("User-Agent", "")
    return request.headers.get("X-Forwarded-For", request.remote_addr), user_agent[:255] or None


def log_event(action: str, entity=None, entity_id=None, metadata=None) -> bool:
    """
    Record a court, schedule or booking event that has already been decided.

    The row goes in its own transaction after the change it describes. A
    failed write is rolled back and logged, and the caller's response stands.
    """
    ip, user_agent = _client()
    row = AuditLog(
        action=action,
        entity=entity,
        entity_id=str(entity_id) if entity_id is not None else None,
        ip=ip,
        user_agent=user_agent,
        metadata_json=json.dumps(metadata) if metadata else None,
    )

    try:
        db.session.add(row)
        db.session.commit()
    except SQLAlchemyError as exc:
        db.session.rollback()
        _LOGGER.warning("Audit row %s %s=%s not written: %s", action, entity, entity_id, exc)
        return False

    _LOGGER.info("%s %s=%s", action, entity, entity_id)
    return True
