from datetime import date, timedelta
from decimal import Decimal

from flask import current_app

from models import db
from models.court import COURT_ACTIVE, Court
from models.schedule import SCHEDULE_AVAILABLE, Schedule
from services.slots import overlapping_schedule

DEFAULT_COURTS = [
    {
        "name": "Court A",
        "description": "Premium badminton court with wooden flooring",
        "price_per_hour": Decimal("50000"),
    },
    {
        "name": "Court B",
        "description": "Standard badminton court with full facilities",
        "price_per_hour": Decimal("40000"),
    },
    {
        "name": "Court C",
        "description": "Budget badminton court for practice",
        "price_per_hour": Decimal("30000"),
    },
]


def seed_courts() -> int:
    existing = {c.name for c in Court.query.all()}
    created = 0
    for row in DEFAULT_COURTS:
        if row["name"] not in existing:
            db.session.add(Court(status=COURT_ACTIVE, **row))
            created += 1
    db.session.commit()
    return created


def seed_schedules(days_ahead=None, start=None) -> int:
    """
    Recurring daily slots (``SEED_DAILY_SLOTS``) for every active court.

    A slot is skipped when the court already has a schedule meeting its
    range that day, so reruns and hand-made schedules are left alone.
    """
    if days_ahead is None:
        days_ahead = current_app.config.get("SEED_DAYS_AHEAD", 7)
    daily_slots = current_app.config["SEED_DAILY_SLOTS"]
    start = start or date.today()

    created = 0
    for court in Court.query.filter_by(status=COURT_ACTIVE).all():
        for offset in range(days_ahead):
            day = start + timedelta(days=offset)
            for start_time, end_time in daily_slots:
                if overlapping_schedule(court.id, day, start_time, end_time) is not None:
                    continue
                db.session.add(Schedule(
                    court_id=court.id,
                    date=day,
                    start_time=start_time,
                    end_time=end_time,
                    status=SCHEDULE_AVAILABLE,
                ))
                # autoflush puts it in view of the next overlap query
                created += 1
    db.session.commit()
    return created
