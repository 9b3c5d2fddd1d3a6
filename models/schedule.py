from datetime import datetime
from models.db import db

SCHEDULE_AVAILABLE = "available"
SCHEDULE_BOOKED = "booked"
SCHEDULE_STATUSES = (SCHEDULE_AVAILABLE, SCHEDULE_BOOKED)


class Schedule(db.Model):
    __tablename__ = "schedules"

    id = db.Column(db.Integer, primary_key=True)

    court_id = db.Column(
        db.Integer, db.ForeignKey("courts.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    date = db.Column(db.Date, nullable=False, index=True)
    # time-of-day stored as normalized text ("HH:MM" or "HH:MM:SS")
    start_time = db.Column(db.String(8), nullable=False)
    end_time = db.Column(db.String(8), nullable=False)

    status = db.Column(db.String(20), nullable=False, default=SCHEDULE_AVAILABLE, index=True)
    # status values: available, booked

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    court = db.relationship("Court", back_populates="schedules")
    booking = db.relationship("Booking", back_populates="schedule", uselist=False, passive_deletes="all")

    __table_args__ = (
        # Prevent duplicate slot times for same court and day
        db.UniqueConstraint("court_id", "date", "start_time", "end_time", name="uq_court_schedule"),
    )
