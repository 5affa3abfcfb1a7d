import calendar
import re
from datetime import date
from typing import Tuple

_MONTH_RE = re.compile(r"^(\d{4})-(\d{2})$")
_TIME_RE = re.compile(r"^(\d{1,2}):(\d{2})$")


def month_bounds(month: str) -> Tuple[date, date]:
    """Return the first and last day of a "YYYY-MM" month."""
    m = _MONTH_RE.match((month or "").strip())
    if not m:
        raise ValueError("month must be in YYYY-MM format")
    year, mon = int(m.group(1)), int(m.group(2))
    if not 1 <= mon <= 12:
        raise ValueError("month must be in YYYY-MM format")
    last_day = calendar.monthrange(year, mon)[1]
    return date(year, mon, 1), date(year, mon, last_day)


def normalize_time(value: str) -> str:
    """Normalize "H:MM" / "HH:MM" input to zero-padded "HH:MM"."""
    m = _TIME_RE.match((value or "").strip())
    if not m:
        raise ValueError("time must be in HH:MM format")
    hour, minute = int(m.group(1)), int(m.group(2))
    if hour > 23 or minute > 59:
        raise ValueError("time must be in HH:MM format")
    return f"{hour:02d}:{minute:02d}"
