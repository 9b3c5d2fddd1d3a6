from datetime import date

from flask import request

from services.errors import ValidationFailed


def date_arg(name: str = "date"):
    """Optional ``YYYY-MM-DD`` query parameter."""
    value = (request.args.get(name) or "").strip()
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise ValidationFailed({name: ["Invalid date. Use YYYY-MM-DD"]}) from None


def choice_arg(name: str, choices, default=None):
    value = (request.args.get(name) or "").strip().lower()
    if not value:
        return default
    if value not in choices:
        raise ValidationFailed({name: [f"must be one of: {', '.join(choices)}"]})
    return value
