from datetime import datetime
from models.db import db

class Booking(db.Model):
    __tablename__ = "bookings"

    id = db.Column(db.Integer, primary_key=True)

    schedule_id = db.Column(
        db.Integer, db.ForeignKey("schedules.id", ondelete="RESTRICT"), nullable=False, index=True
    )

    customer_name = db.Column(db.String(255), nullable=False)
    customer_phone = db.Column(db.String(20), nullable=False)
    customer_email = db.Column(db.String(255), nullable=True)

    # fixed at creation, never recomputed from the court's current price
    total_price = db.Column(db.Numeric(10, 2), nullable=False)
    notes = db.Column(db.Text, nullable=True)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False, index=True)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    schedule = db.relationship("Schedule", back_populates="booking")

    __table_args__ = (
        # Hard business-rule: only one booking can exist per schedule (prevents double booking)
        db.UniqueConstraint("schedule_id", name="uq_booking_schedule_once"),
    )
