def _iso(value):
    return value.isoformat() if value else None


def _money(value):
    return f"{value:.2f}" if value is not None else None


def court_to_dict(c):
    return {
        "id": c.id,
        "name": c.name,
        "description": c.description,
        "price_per_hour": _money(c.price_per_hour),
        "status": c.status,
        "created_at": _iso(c.created_at),
        "updated_at": _iso(c.updated_at),
    }


def schedule_to_dict(s, include_court=True):
    out = {
        "id": s.id,
        "court_id": s.court_id,
        "date": _iso(s.date),
        "start_time": s.start_time,
        "end_time": s.end_time,
        "status": s.status,
        "created_at": _iso(s.created_at),
        "updated_at": _iso(s.updated_at),
    }
    if include_court:
        out["court"] = court_to_dict(s.court) if s.court else None
    return out


def booking_to_dict(b):
    return {
        "id": b.id,
        "schedule_id": b.schedule_id,
        "customer_name": b.customer_name,
        "customer_phone": b.customer_phone,
        "customer_email": b.customer_email,
        "total_price": _money(b.total_price),
        "notes": b.notes,
        "created_at": _iso(b.created_at),
        "updated_at": _iso(b.updated_at),
        "schedule": schedule_to_dict(b.schedule) if b.schedule else None,
    }
