from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, StrictBool, field_validator

from cafeops.db.notice import DEFAULT_PRIORITY, PRIORITIES

Priority = Literal["high", "normal", "low"]


class NoticeRead(BaseModel):
    id: int
    title: str
    content: str
    priority: Priority
    is_read: bool
    author: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class NoticeWrite(BaseModel):
    """Body for create and full update. Unknown priorities fall back to normal."""
    title: str
    content: str
    priority: Priority = DEFAULT_PRIORITY
    author: Optional[str] = None

    @field_validator("title", "content")
    @classmethod
    def _strip_required(cls, v: str) -> str:
        v = (v or "").strip()
        if not v:
            raise ValueError("field is required")
        return v

    @field_validator("priority", mode="before")
    @classmethod
    def _coerce_priority(cls, v):
        return v if v in PRIORITIES else DEFAULT_PRIORITY

    @field_validator("author")
    @classmethod
    def _strip_nullable(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip()
        return v or None


class NoticeReadStatusUpdate(BaseModel):
    is_read: StrictBool


class UnreadCount(BaseModel):
    count: int


class MarkAllReadOut(BaseModel):
    message: str
    updated_count: int
