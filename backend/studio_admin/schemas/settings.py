# backend/studio_admin/schemas/settings.py

import json
from datetime import date
from typing import Any, Optional
from pydantic import BaseModel, field_validator


class VersionedSettingRead(BaseModel):
    id: int
    setting_key: str
    setting_value: Any
    effective_from: Optional[date] = None
    is_active: bool
    created_by: Optional[str] = None
    created_at: str
    updated_at: str

    model_config = {"from_attributes": True}

    @field_validator("setting_value", mode="before")
    @classmethod
    def _decode_value(cls, value):
        # Stored as JSON text
        if isinstance(value, str):
            return json.loads(value)
        return value


class SettingSaveRequest(BaseModel):
    value: Any
    effective_from: Optional[date] = None
    created_by: Optional[str] = None
