from .db import db
from .audit_log import AuditLog
from .court import Court
from .schedule import Schedule
from .booking import Booking
