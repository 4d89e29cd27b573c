import pytest
from pydantic import ValidationError

from studio_admin.schemas.opening_hours import WeekHours
from studio_admin.services.opening_hours import (
    WEEKDAYS,
    has_validation_errors,
    normalize_week_hours,
    validate_opening_hours,
)
from studio_admin.services.opening_hours.validation import (
    MSG_CLOSE_BEFORE_OPEN,
    MSG_INVALID_FORMAT,
    MSG_TIMES_REQUIRED,
)

from conftest import make_week


def test_default_week_is_valid():
    assert validate_opening_hours(make_week()) == {}


def test_all_days_closed_is_valid():
    week = make_week(**{day: None for day in WEEKDAYS})
    assert validate_opening_hours(week) == {}


@pytest.mark.parametrize("open_time,close_time", [("09:00", None), (None, "21:00"), (None, None)])
def test_missing_time_on_open_day(open_time, close_time):
    week = make_week(monday={"is_open": True, "open_time": open_time, "close_time": close_time})
    assert validate_opening_hours(week) == {"monday": MSG_TIMES_REQUIRED}


@pytest.mark.parametrize(
    "bad",
    ["9:00", "09:0", "0900", "ab:cd", "09:00:00", " 09:00", "09:00\n", "٠٩:٠٠"],
)
def test_invalid_time_format(bad):
    week = make_week(tuesday=(bad, "21:00"))
    assert validate_opening_hours(week) == {"tuesday": MSG_INVALID_FORMAT}


def test_close_equal_to_open_is_rejected():
    week = make_week(monday=("09:00", "09:00"))
    assert validate_opening_hours(week)["monday"] == MSG_CLOSE_BEFORE_OPEN


def test_close_before_open_is_rejected():
    week = make_week(monday=("21:00", "09:00"))
    assert validate_opening_hours(week)["monday"] == MSG_CLOSE_BEFORE_OPEN


def test_one_slot_window_is_accepted():
    week = make_week(monday=("12:00", "12:30"))
    assert validate_opening_hours(week) == {}


def test_near_midnight_close_is_accepted():
    week = make_week(friday=("09:00", "23:45"))
    assert "friday" not in validate_opening_hours(week)


def test_closed_days_are_not_validated():
    week = make_week(sunday={"is_open": False, "open_time": "garbage", "close_time": "01:00"})
    assert validate_opening_hours(week) == {}


def test_multiple_invalid_days_reported_separately():
    week = make_week(
        monday=("21:00", "09:00"),
        wednesday=("9am", "5pm"),
        friday={"is_open": True, "open_time": None, "close_time": "18:00"},
    )
    errors = validate_opening_hours(week)
    assert errors == {
        "monday": MSG_CLOSE_BEFORE_OPEN,
        "wednesday": MSG_INVALID_FORMAT,
        "friday": MSG_TIMES_REQUIRED,
    }


def test_validation_does_not_mutate_input():
    week = make_week(monday=("21:00", "09:00"))
    before = week.model_dump()
    validate_opening_hours(week)
    assert week.model_dump() == before


def test_has_validation_errors():
    assert has_validation_errors({}) is False
    assert has_validation_errors({"monday": MSG_TIMES_REQUIRED}) is True


def test_normalize_clears_closed_day_times_only():
    week = make_week(sunday={"is_open": False, "open_time": "10:00", "close_time": "12:00"})
    normalized = normalize_week_hours(week)

    assert normalized.sunday.open_time is None
    assert normalized.sunday.close_time is None
    assert normalized.monday.open_time == "09:00"
    # original untouched
    assert week.sunday.open_time == "10:00"


def test_partial_week_is_rejected():
    data = make_week().model_dump()
    del data["sunday"]
    with pytest.raises(ValidationError):
        WeekHours.model_validate(data)
