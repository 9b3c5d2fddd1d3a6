"""Request validators handed to the service layer by the route handlers."""

from datetime import date as Date
from decimal import Decimal
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, ValidationError, field_validator

from models.court import COURT_STATUSES
from models.schedule import SCHEDULE_AVAILABLE, SCHEDULE_STATUSES
from services.errors import InvalidTimeFormat, ValidationFailed
from services.timerange import normalize_time_of_day, validate_slot_range

CourtStatus = Literal[COURT_STATUSES]
ScheduleStatus = Literal[SCHEDULE_STATUSES]

NAME_MAX_LENGTH = 255
PHONE_MAX_LENGTH = 20


class _Payload(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")


class _TimeRangePayload(_Payload):
    @field_validator("start_time", "end_time", check_fields=False)
    @classmethod
    def normalize_times(cls, value):
        if value is None:
            return value
        try:
            return normalize_time_of_day(value)
        except InvalidTimeFormat as exc:
            raise ValueError(exc.message) from exc


class _SlotRangePayload(_TimeRangePayload):
    @field_validator("end_time", check_fields=False)
    @classmethod
    def end_after_start(cls, value, info):
        start_time = info.data.get("start_time")
        if value is None or start_time is None:
            return value
        try:
            validate_slot_range(start_time, value)
        except InvalidTimeFormat:
            # reported by normalize_times
            return value
        return value


# ---------- courts ----------
class CourtCreate(_Payload):
    name: str = Field(min_length=1, max_length=NAME_MAX_LENGTH)
    description: Optional[str] = None
    price_per_hour: Decimal = Field(ge=0, max_digits=10, decimal_places=2)
    status: CourtStatus = "active"


class CourtUpdate(_Payload):
    name: Optional[str] = Field(default=None, min_length=1, max_length=NAME_MAX_LENGTH)
    description: Optional[str] = None
    price_per_hour: Optional[Decimal] = Field(default=None, ge=0, max_digits=10, decimal_places=2)
    status: Optional[CourtStatus] = None


# ---------- schedules ----------
class ScheduleCreate(_SlotRangePayload):
    court_id: int = Field(gt=0)
    date: Date
    start_time: str
    end_time: str
    # booked is only reachable through a booking
    status: Literal[SCHEDULE_AVAILABLE] = SCHEDULE_AVAILABLE


class ScheduleUpdate(_TimeRangePayload):
    court_id: Optional[int] = Field(default=None, gt=0)
    date: Optional[Date] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    status: Optional[ScheduleStatus] = None


# ---------- bookings ----------
class _CustomerFields(_Payload):
    @field_validator("customer_email", mode="before", check_fields=False)
    @classmethod
    def blank_email_is_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


class BookingCreate(_CustomerFields):
    schedule_id: int = Field(gt=0)
    customer_name: str = Field(min_length=1, max_length=NAME_MAX_LENGTH)
    customer_phone: str = Field(min_length=1, max_length=PHONE_MAX_LENGTH)
    customer_email: Optional[EmailStr] = None
    notes: Optional[str] = None


class BookingUpdate(_CustomerFields):
    customer_name: Optional[str] = Field(default=None, min_length=1, max_length=NAME_MAX_LENGTH)
    customer_phone: Optional[str] = Field(default=None, min_length=1, max_length=PHONE_MAX_LENGTH)
    customer_email: Optional[EmailStr] = None
    notes: Optional[str] = None


# ---------- availability ----------
class ScheduleAvailabilityQuery(_Payload):
    schedule_id: int = Field(gt=0)


class RangeAvailabilityQuery(_SlotRangePayload):
    court_id: int = Field(gt=0)
    date: Date
    start_time: str
    end_time: str


def field_errors(exc: ValidationError) -> dict[str, list[str]]:
    errors: dict[str, list[str]] = {}
    for err in exc.errors():
        field = ".".join(str(part) for part in err["loc"]) or "__root__"
        ctx_error = (err.get("ctx") or {}).get("error")
        message = str(ctx_error) if ctx_error is not None else err["msg"]
        errors.setdefault(field, []).append(message)
    return errors


def parse_payload(schema, data):
    """Validate ``data`` against ``schema`` or raise ``ValidationFailed``."""
    if isinstance(data, schema):
        return data
    try:
        return schema.model_validate(data)
    except ValidationError as exc:
        raise ValidationFailed(field_errors(exc)) from exc


def changed_fields(data: BaseModel, nullable=()) -> dict:
    """Fields the client actually sent, refusing nulls for required columns."""
    changes = data.model_dump(exclude_unset=True)
    nulls = sorted(field for field, value in changes.items() if value is None and field not in nullable)
    if nulls:
        raise ValidationFailed({field: ["may not be null"] for field in nulls})
    return changes
