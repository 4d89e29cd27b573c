# backend/studio_admin/schemas/opening_hours.py
"""
Pydantic schemas for opening hours.

WeekHours requires all seven weekday keys; partial weeks fail to parse.
Time strings are NOT checked here: malformed values must reach the
validator so they can be reported per weekday.
"""

from datetime import date, datetime
from typing import Optional
from pydantic import BaseModel

from .settings import VersionedSettingRead


class DayHours(BaseModel):
    is_open: bool
    open_time: Optional[str] = None   # "HH:MM"
    close_time: Optional[str] = None  # "HH:MM"

    model_config = {"from_attributes": True}


class WeekHours(BaseModel):
    monday: DayHours
    tuesday: DayHours
    wednesday: DayHours
    thursday: DayHours
    friday: DayHours
    saturday: DayHours
    sunday: DayHours

    model_config = {"from_attributes": True, "extra": "forbid"}


class SessionConflict(BaseModel):
    """A booked session that falls outside proposed opening hours."""
    session_id: int
    date: str  # local ISO date of the session start
    start_time: str
    end_time: str
    member_name: Optional[str] = None
    machine_number: int = 0
    reason: str

    model_config = {"from_attributes": True}


class ValidationResponse(BaseModel):
    errors: dict[str, str]
    is_valid: bool


class SlotsPreviewResponse(BaseModel):
    slots_per_day: dict[str, int]
    total_weekly_slots: int
    slot_step_minutes: int


class ConflictCheckRequest(BaseModel):
    hours: WeekHours
    effective_date: date


class OpeningHoursSaveRequest(BaseModel):
    hours: WeekHours
    effective_date: Optional[date] = None  # None = effective immediately
    acknowledge_conflicts: bool = False
    created_by: Optional[str] = None


class OpeningHoursForDateResponse(BaseModel):
    """Hours in effect on a date plus the next scheduled change."""
    target_date: date
    hours: WeekHours
    effective_from: Optional[date] = None
    is_default: bool
    scheduled: Optional[VersionedSettingRead] = None


class TimeSlot(BaseModel):
    start: datetime
    end: datetime


class SlotsDayResponse(BaseModel):
    target_date: date
    slot_step_minutes: int
    slots: list[TimeSlot]
