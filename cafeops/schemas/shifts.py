from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, field_validator

from cafeops.core.converters import normalize_time


class ShiftRead(BaseModel):
    id: int
    employee_name: str
    date: date
    start_time: str
    end_time: str
    position: Optional[str] = None
    notes: Optional[str] = None
    is_understaffed: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ShiftWrite(BaseModel):
    """Body for both create and full update."""
    employee_name: str
    date: date
    start_time: str
    end_time: str
    position: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("employee_name")
    @classmethod
    def _strip_required(cls, v: str) -> str:
        v = (v or "").strip()
        if not v:
            raise ValueError("field is required")
        return v

    @field_validator("start_time", "end_time")
    @classmethod
    def _time_of_day(cls, v: str) -> str:
        return normalize_time(v)

    @field_validator("position", "notes")
    @classmethod
    def _strip_nullable(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip()
        return v or None


class ShiftUnderstaffedOut(BaseModel):
    id: int
    is_understaffed: bool


class UnderstaffedDay(BaseModel):
    date: date
    shift_count: int
    is_flagged: bool


class ShiftTextParseRequest(BaseModel):
    text: str


class ShiftDraft(BaseModel):
    employee_name: Optional[str] = None
    date: Optional[str] = None  # ISO date
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    notes: Optional[str] = None
