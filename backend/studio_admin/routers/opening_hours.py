# backend/studio_admin/routers/opening_hours.py
"""
Opening hours API endpoints.

Read-only checks (validate / preview / conflicts) never write anything;
POST /opening_hours runs the full validate → conflicts → save sequence.
"""

from datetime import date
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from ..config import settings
from ..database import get_db
from ..redis_client import redis_client
from ..schemas.opening_hours import (
    ConflictCheckRequest,
    OpeningHoursForDateResponse,
    OpeningHoursSaveRequest,
    SessionConflict,
    SlotsDayResponse,
    SlotsPreviewResponse,
    TimeSlot,
    ValidationResponse,
    WeekHours,
)
from ..schemas.settings import VersionedSettingRead
from ..services.opening_hours import (
    DEFAULT_OPENING_HOURS,
    OPENING_HOURS_KEY,
    SettingsVersionStore,
    calculate_day_slots,
    detect_conflicts,
    get_hours_config,
    get_opening_hours_for,
    has_validation_errors,
    save_opening_hours,
    slots_per_day,
    total_weekly_slots,
    validate_opening_hours,
)
from ..services.opening_hours.store import decode_value

router = APIRouter(prefix="/opening_hours", tags=["opening_hours"])


@router.get("/", response_model=OpeningHoursForDateResponse)
def get_opening_hours(
    target_date: date | None = Query(None, alias="date"),
    db: Session = Depends(get_db),
):
    """Hours in effect on a date (default today) and the next scheduled change."""
    target_date = target_date or settings.studio_today()
    store = SettingsVersionStore(db)

    active = store.active(OPENING_HOURS_KEY, target_date)
    scheduled = store.scheduled(OPENING_HOURS_KEY, target_date)

    if active:
        hours = WeekHours.model_validate(decode_value(active))
    else:
        hours = WeekHours.model_validate(DEFAULT_OPENING_HOURS)

    return OpeningHoursForDateResponse(
        target_date=target_date,
        hours=hours,
        effective_from=active.effective_from if active else None,
        is_default=active is None,
        scheduled=VersionedSettingRead.model_validate(scheduled) if scheduled else None,
    )


@router.get("/slots", response_model=SlotsDayResponse)
def get_day_slots(
    target_date: date = Query(..., alias="date"),
    db: Session = Depends(get_db),
):
    """Bookable slots of one date under the hours in effect that day."""
    config = get_hours_config()
    hours = get_opening_hours_for(db, target_date, redis_client)
    slots = calculate_day_slots(hours, target_date, settings.studio_tz, config)

    return SlotsDayResponse(
        target_date=target_date,
        slot_step_minutes=config.slot_step_minutes,
        slots=[TimeSlot(start=start, end=end) for start, end in slots],
    )


@router.post("/validate", response_model=ValidationResponse)
def validate_hours(data: WeekHours):
    errors = validate_opening_hours(data)
    return ValidationResponse(errors=errors, is_valid=not has_validation_errors(errors))


@router.post("/preview", response_model=SlotsPreviewResponse)
def preview_slots(data: WeekHours):
    """Slot capacity of a draft week. Send validated drafts only."""
    config = get_hours_config()
    return SlotsPreviewResponse(
        slots_per_day=slots_per_day(data, config),
        total_weekly_slots=total_weekly_slots(data, config),
        slot_step_minutes=config.slot_step_minutes,
    )


@router.post("/conflicts", response_model=list[SessionConflict])
def check_conflicts(data: ConflictCheckRequest, db: Session = Depends(get_db)):
    return detect_conflicts(db, data.hours, data.effective_date, settings.studio_tz)


@router.post("/", response_model=VersionedSettingRead)
def save_hours(data: OpeningHoursSaveRequest, db: Session = Depends(get_db)):
    outcome = save_opening_hours(
        db,
        data.hours,
        data.effective_date,
        settings.studio_tz,
        created_by=data.created_by,
        acknowledge_conflicts=data.acknowledge_conflicts,
        redis=redis_client,
    )

    if outcome.errors:
        raise HTTPException(
            status_code=422,
            detail={"errors": outcome.errors},
        )
    if not outcome.saved:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail={"conflicts": [c.model_dump() for c in outcome.conflicts]},
        )

    return outcome.setting
