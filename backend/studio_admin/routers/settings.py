# backend/studio_admin/routers/settings.py
# Versioned key/value settings. PUT = upsert by (key, effective_from), no DELETE.

from datetime import date
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from ..config import settings
from ..database import get_db
from ..schemas.settings import SettingSaveRequest, VersionedSettingRead
from ..services.opening_hours import OPENING_HOURS_KEY, SettingsVersionStore

router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("/{key}/active", response_model=VersionedSettingRead)
def get_active_setting(
    key: str,
    reference_date: date | None = Query(None),
    db: Session = Depends(get_db),
):
    obj = SettingsVersionStore(db).active(key, reference_date or settings.studio_today())
    if not obj:
        raise HTTPException(status_code=404, detail="Not found")
    return obj


@router.get("/{key}/scheduled", response_model=VersionedSettingRead)
def get_scheduled_setting(
    key: str,
    reference_date: date | None = Query(None),
    db: Session = Depends(get_db),
):
    obj = SettingsVersionStore(db).scheduled(key, reference_date or settings.studio_today())
    if not obj:
        raise HTTPException(status_code=404, detail="Not found")
    return obj


@router.get("/{key}/history", response_model=list[VersionedSettingRead])
def list_setting_history(key: str, db: Session = Depends(get_db)):
    return SettingsVersionStore(db).history(key)


@router.put("/{key}", response_model=VersionedSettingRead)
def save_setting(
    key: str,
    data: SettingSaveRequest,
    db: Session = Depends(get_db),
):
    # Opening hours must go through validation and conflict checks
    if key == OPENING_HOURS_KEY:
        raise HTTPException(
            status_code=400,
            detail="Use POST /opening_hours to change opening hours",
        )

    obj = SettingsVersionStore(db).save(
        key,
        data.value,
        data.effective_from,
        created_by=data.created_by,
    )
    return obj
