"""Free-text weekly course schedule parsing ("Mon/Wed 10:00 AM")."""

from __future__ import annotations

import logging
import re
from datetime import date, datetime, time, timedelta
from typing import NamedTuple, Optional

from timehub_engine.clock import resolve
from timehub_engine.config import settings
from timehub_engine.schema import CalendarOccurrence
from timehub_engine.weeks import sunday_week_start

logger = logging.getLogger(__name__)

NO_SCHEDULE = "TBA"

_TIME_RE = re.compile(r"(\d{1,2})(?::(\d{2}))?\s*(am|pm)?")
_WORD_RE = re.compile(r"[a-z]+")
_MERIDIEM_RE = re.compile(r"\b(am|pm)\b")

# Whole words only, so "Monroe Hall" or "Satellite campus" name no day.
_DAY_NAMES = {
    0: re.compile(r"\bsun(day)?s?\b"),
    1: re.compile(r"\bmon(day)?s?\b"),
    2: re.compile(r"\btue(s|sday)?s?\b"),
    3: re.compile(r"\bwed(nesday)?s?\b"),
    4: re.compile(r"\bthu(r|rs|rsday)?s?\b"),
    5: re.compile(r"\bfri(day)?s?\b"),
    6: re.compile(r"\bsat(urday)?s?\b"),
}
# "th" must be tried before "t" so that "tth" reads as Tue + Thu.
_SHORT_CODES = (("th", 4), ("m", 1), ("t", 2), ("w", 3), ("f", 5))


class ParsedSchedule(NamedTuple):
    weekdays: tuple[int, ...]
    hour: int
    minute: int


def _meridiem(match: re.Match, lower: str) -> Optional[str]:
    if match.group(3):
        return match.group(3)
    # A range such as "10:00 - 11:30 am" carries its marker after the end time.
    standalone = _MERIDIEM_RE.search(lower)
    return standalone.group(1) if standalone else None


def _split_short_codes(word: str) -> Optional[list[int]]:
    days = []
    pos = 0
    while pos < len(word):
        for code, day in _SHORT_CODES:
            if word.startswith(code, pos):
                days.append(day)
                pos += len(code)
                break
        else:
            return None
    return days


def _active_weekdays(lower: str) -> list[int]:
    days = {day for day, pattern in _DAY_NAMES.items() if pattern.search(lower)}
    if days:
        return sorted(days)

    for word in _WORD_RE.findall(lower):
        codes = _split_short_codes(word)
        if codes:
            days.update(codes)
    return sorted(days)


def parse_schedule_text(text: Optional[str]) -> Optional[ParsedSchedule]:
    """Extract weekdays and a 24-hour start time, or ``None`` if there is no usable schedule.

    Weekdays use 0=Sunday..6=Saturday. Three-letter day names win over the
    single-letter codes (m/t/w/th/f), which are only scanned when no name is
    present. A time without am/pm is read as a 24-hour clock.
    """

    if not text or text.strip().upper() == NO_SCHEDULE:
        return None

    lower = text.lower()
    match = _TIME_RE.search(lower)
    if not match:
        logger.warning(f"No time found in schedule {text!r}")
        return None

    hour = int(match.group(1))
    minute = int(match.group(2)) if match.group(2) else 0
    meridiem = _meridiem(match, lower)

    if minute > 59 or hour > 23 or (meridiem and not 1 <= hour <= 12):
        logger.warning(f"Invalid clock time in schedule {text!r}")
        return None

    if meridiem == "pm" and hour < 12:
        hour += 12
    elif meridiem == "am" and hour == 12:
        hour = 0

    weekdays = _active_weekdays(lower)
    if not weekdays:
        logger.warning(f"No weekdays found in schedule {text!r}")
        return None

    return ParsedSchedule(tuple(weekdays), hour, minute)


def course_blocks(
    parsed: ParsedSchedule,
    course_name: str,
    course_color: str,
    course_id: str,
    week_start: date,
    tag_week: bool = False,
) -> list[CalendarOccurrence]:
    """Lay a parsed schedule onto the Sunday-based week opening on ``week_start``.

    With ``tag_week`` the week's start date is appended to each id so blocks
    of different weeks never collide.
    """

    blocks = []
    for weekday in parsed.weekdays:
        start = datetime.combine(week_start + timedelta(days=weekday), time(parsed.hour, parsed.minute))
        block_id = f"course_{course_id}_{weekday}"
        if tag_week:
            block_id += f"_{week_start.isoformat()}"
        blocks.append(
            CalendarOccurrence(
                id=block_id,
                title=course_name,
                start=start,
                end=start + timedelta(minutes=settings.COURSE_BLOCK_MIN),
                type="Course",
                color=course_color,
                meta={"course_id": course_id},
            )
        )
    return blocks


def parse_course_schedule(
    schedule_text: Optional[str],
    course_name: str,
    course_color: str,
    course_id: str,
    week_of: date | datetime | None = None,
    clock=None,
) -> list[CalendarOccurrence]:
    """Course blocks for the week containing ``week_of`` (default: the clock's today).

    Empty, "TBA" or unparseable text yields no blocks; this never raises.
    """

    parsed = parse_schedule_text(schedule_text)
    if parsed is None:
        return []

    anchor = week_of if week_of is not None else resolve(clock).now()
    return course_blocks(parsed, course_name, course_color, course_id, sunday_week_start(anchor))
