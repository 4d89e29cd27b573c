from datetime import date, timedelta

import pytest

from studio_admin.services.opening_hours import (
    WEEKDAYS,
    HoursConfig,
    calculate_day_slots,
    slots_per_day,
    total_weekly_slots,
)
from studio_admin.services.opening_hours.config import to_db_timestamp

from conftest import TZ, local, make_week


def test_full_day_slots():
    assert slots_per_day(make_week(monday=("09:00", "21:00")))["monday"] == 24


def test_half_hour_opening():
    assert slots_per_day(make_week(monday=("10:30", "14:00")))["monday"] == 7


def test_partial_slot_is_dropped():
    assert slots_per_day(make_week(monday=("09:00", "10:20")))["monday"] == 2


def test_single_slot():
    assert slots_per_day(make_week(monday=("12:00", "12:30")))["monday"] == 1


def test_closed_day_has_no_slots():
    assert slots_per_day(make_week())["sunday"] == 0


def test_default_week_total():
    # 5 x 24 (09-21) + 16 (10-18) + 0
    assert total_weekly_slots(make_week()) == 136


def test_all_closed_week_total_is_zero():
    week = make_week(**{day: None for day in WEEKDAYS})
    assert total_weekly_slots(week) == 0
    assert set(slots_per_day(week).values()) == {0}


def test_malformed_input_counts_zero_without_raising():
    week = make_week(
        monday=("nine", "21:00"),
        tuesday=("21:00", "09:00"),
        wednesday={"is_open": True, "open_time": None, "close_time": "18:00"},
    )
    counts = slots_per_day(week)
    assert counts["monday"] == 0
    assert counts["tuesday"] == 0
    assert counts["wednesday"] == 0
    assert counts["thursday"] == 24


def test_other_slot_step():
    config = HoursConfig(slot_step_minutes=60)
    assert slots_per_day(make_week(), config)["monday"] == 12


def test_invalid_slot_step_rejected():
    with pytest.raises(ValueError):
        HoursConfig(slot_step_minutes=20)


def test_day_slots_for_date():
    week = make_week(monday=("05:00", "13:00"))
    slots = calculate_day_slots(week, date(2025, 1, 13), TZ)

    assert len(slots) == 16
    assert slots[0] == (local(2025, 1, 13, 5, 0), local(2025, 1, 13, 5, 30))
    assert slots[-1][1] == local(2025, 1, 13, 13, 0)


def test_day_slots_from_midnight():
    week = make_week(monday=("00:00", "06:00"))
    slots = calculate_day_slots(week, date(2025, 1, 13), TZ)
    assert len(slots) == 12
    assert slots[0][0].strftime("%H:%M") == "00:00"


def test_day_slots_closed_day():
    assert calculate_day_slots(make_week(), date(2025, 1, 19), TZ) == []


def test_day_slots_use_weekday_of_date():
    week = make_week(saturday=("10:00", "18:00"))
    slots = calculate_day_slots(week, date(2025, 1, 18), TZ)
    assert len(slots) == 16
    assert slots[0][0].strftime("%H:%M") == "10:00"


def test_day_slots_keep_local_times_across_dst():
    # 2025-03-30: Europe/Brussels springs forward at 02:00
    week = make_week(sunday=("09:00", "12:00"))
    slots = calculate_day_slots(week, date(2025, 3, 30), TZ)
    assert [s.strftime("%H:%M") for s, _ in slots] == ["09:00", "09:30", "10:00", "10:30", "11:00", "11:30"]
    assert slots[0][1] - slots[0][0] == timedelta(minutes=30)


def test_day_slots_skip_starts_inside_spring_forward_gap():
    # 02:00-03:00 does not exist in Europe/Brussels on 2025-03-30
    week = make_week(sunday=("01:00", "04:00"))
    slots = calculate_day_slots(week, date(2025, 3, 30), TZ)

    assert [s.strftime("%H:%M") for s, _ in slots] == ["01:00", "01:30", "03:00", "03:30"]
    assert slots_per_day(week)["sunday"] == 6


def test_db_timestamp_is_fixed_width_utc():
    assert to_db_timestamp(local(2025, 1, 13, 9, 0, 15, 999)) == "2025-01-13T08:00:15+00:00"


def test_db_timestamp_rejects_naive():
    from datetime import datetime
    with pytest.raises(ValueError):
        to_db_timestamp(datetime(2025, 1, 13, 9, 0))
