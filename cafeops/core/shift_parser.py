"""
Free-text shift entry ("AI input" box in the clients).

This is a fixed pattern matcher, not a model. Rules run in order and each one
removes the text it matched before the next rule looks:

1. date        "10/25", "10月25日", "2024/10/25"  -> date (year from the text, else `today`)
2. time range  "10:00-17:00", "9~17", "10時から17時まで", "9:30 to 18"
                                                  -> start_time / end_time ("HH:MM")
3. name        first whitespace-separated token   -> employee_name
4. notes       whatever is left                   -> notes

Keys are only present in the result when the text supplied them.
"""

import re
from datetime import date
from typing import Dict, Optional

DATE_RE = re.compile(
    r"(?<!\d)(?:(\d{4})\s*(?:/|年)\s*)?"
    r"(\d{1,2})\s*(?:/|月)\s*(\d{1,2})(?!\d)日?"
)
TIME_RANGE_RE = re.compile(
    r"(\d{1,2})(?::(\d{2}))?時?"
    r"\s*(?:-|~|〜|～|から|to)\s*"
    r"(\d{1,2})(?::(\d{2}))?時?(?:まで)?"
)


def _cut(text: str, match: "re.Match[str]") -> str:
    return f"{text[:match.start()]} {text[match.end():]}"


def _hhmm(hour: str, minute: Optional[str]) -> Optional[str]:
    h, m = int(hour), int(minute or 0)
    if h > 23 or m > 59:
        return None
    return f"{h:02d}:{m:02d}"


def _extract_date(text: str, year: int):
    # first real calendar date wins; 13/40 and friends are left in the text
    for m in DATE_RE.finditer(text):
        try:
            found = date(int(m.group(1) or year), int(m.group(2)), int(m.group(3)))
        except ValueError:
            continue
        return found.isoformat(), _cut(text, m)
    return None, text


def _extract_time_range(text: str):
    m = TIME_RANGE_RE.search(text)
    if not m:
        return None, None, text
    start = _hhmm(m.group(1), m.group(2))
    end = _hhmm(m.group(3), m.group(4))
    if start is None or end is None:
        return None, None, text
    return start, end, _cut(text, m)


def parse_shift_text(text: str, today: Optional[date] = None) -> Dict[str, str]:
    """Turn one line of free text into a partial shift record."""
    today = today or date.today()
    parsed: Dict[str, str] = {}
    remaining = text or ""

    shift_date, remaining = _extract_date(remaining, today.year)
    if shift_date:
        parsed["date"] = shift_date

    start, end, remaining = _extract_time_range(remaining)
    if start:
        parsed["start_time"] = start
        parsed["end_time"] = end

    tokens = remaining.split()
    if tokens:
        parsed["employee_name"] = tokens[0]
        notes = " ".join(tokens[1:])
        if notes:
            parsed["notes"] = notes

    return parsed
