from datetime import date

from pydantic import BaseModel


class DailyFlagRead(BaseModel):
    date: date
    is_flagged: bool


class DailyFlagUpsert(BaseModel):
    date: date
    is_flagged: bool
