from datetime import datetime
from models.db import db

COURT_ACTIVE = "active"
COURT_INACTIVE = "inactive"
COURT_STATUSES = (COURT_ACTIVE, COURT_INACTIVE)


class Court(db.Model):
    __tablename__ = "courts"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=True)
    price_per_hour = db.Column(db.Numeric(10, 2), nullable=False)

    status = db.Column(db.String(20), nullable=False, default=COURT_ACTIVE, index=True)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    schedules = db.relationship("Schedule", back_populates="court", passive_deletes="all")

    __table_args__ = (
        db.CheckConstraint("price_per_hour >= 0", name="ck_courts_price_non_negative"),
    )
