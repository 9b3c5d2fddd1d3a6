from datetime import time
from decimal import Decimal

import pytest

from services.errors import InvalidTimeFormat, PriceComputationError
from services.timerange import (
    duration_hours,
    normalize_time_of_day,
    parse_time_of_day,
    ranges_overlap,
    validate_slot_range,
)


def test_parse_accepts_both_forms():
    assert parse_time_of_day("09:00") == time(9, 0)
    assert parse_time_of_day("09:30:15") == time(9, 30, 15)
    assert parse_time_of_day(time(7, 45)) == time(7, 45)


@pytest.mark.parametrize("value", ["25:99", "9am", "", "12:00:00:00", "9:5", "9:05", "09:5", "09:05:7", None, 900])
def test_parse_rejects_malformed_values(value):
    with pytest.raises(InvalidTimeFormat):
        parse_time_of_day(value)


def test_invalid_time_format_is_a_price_computation_error():
    assert issubclass(InvalidTimeFormat, PriceComputationError)


def test_normalize_drops_zero_seconds():
    assert normalize_time_of_day(" 09:05 ") == "09:05"
    assert normalize_time_of_day("09:05:00") == "09:05"
    assert normalize_time_of_day("09:05:30") == "09:05:30"


def test_duration_in_hours():
    assert duration_hours("09:00", "11:00") == Decimal(2)
    assert duration_hours("09:00:00", "10:30:00") == Decimal("1.5")
    assert duration_hours("08:00", "08:15") == Decimal("0.25")


def test_duration_wraps_past_midnight():
    assert duration_hours("22:00", "01:00") == Decimal(3)


def test_duration_without_overnight_rejects_reversed_range():
    with pytest.raises(ValueError):
        duration_hours("22:00", "01:00", overnight=False)


def test_duration_never_falls_back_to_default():
    with pytest.raises(InvalidTimeFormat):
        duration_hours("25:99", "11:00")


def test_slot_validity_and_pricing_disagree_on_reversed_ranges():
    # Pricing reads 22:00-01:00 as an overnight slot, slot validity refuses it.
    assert duration_hours("22:00", "01:00") == Decimal(3)
    with pytest.raises(ValueError):
        validate_slot_range("22:00", "01:00")


def test_slot_validity_rejects_empty_range():
    with pytest.raises(ValueError):
        validate_slot_range("10:00", "10:00")
    validate_slot_range("10:00", "10:01")


def test_ranges_overlap_is_half_open():
    assert ranges_overlap("09:00", "11:00", "10:00", "12:00")
    assert ranges_overlap("09:00", "12:00", "10:00", "11:00")
    assert not ranges_overlap("08:00", "10:00", "10:00", "12:00")
