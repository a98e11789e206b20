"""
Date-time and duration parsing for task keyword tokens.

Supported date-time tokens (case-insensitive):
    _12jan2025            → 12 Jan 2025, midnight
    _12jan2025_10:23pm    → 12 Jan 2025, 22:23
    _12jan2025_9am        → 12 Jan 2025, 09:00
    _10:30am / _9pm       → that time today

Supported duration tokens:
    _for_2h, _for_10m, _for_1.5h, _for_1h30m

Every date-time is returned bound to the local timezone.
"""

import re
from datetime import date, datetime, timedelta
from typing import Callable, Optional

from dateutil import tz

from destined.parsers.errors import ParseFailure

DATE_FORMAT = "%d%b%Y"
DATE_TIME_FORMAT = "%d%b%Y_%I:%M%p"
DATE_HOUR_FORMAT = "%d%b%Y_%I%p"
TIME_FORMAT = "%I:%M%p"
HOUR_FORMAT = "%I%p"

DURATION_FORMAT = "_for_<number><h|m>"

_UNIT_SECONDS = {
    "h": 3600,
    "m": 60,
}

_NUMBER = re.compile(r"\d+(?:\.\d*)?|\.\d+")


def local_now() -> datetime:
    """Current wall-clock time in the local timezone."""
    return datetime.now(tz.tzlocal())


def localize(naive: datetime) -> datetime:
    """
    Bind a naive wall-clock value to the local timezone.

    Ambiguous times (clocks going back) resolve to the earlier instant.
    Nonexistent times (clocks going forward) move forward to the first
    valid instant after the gap.
    """
    aware = naive.replace(tzinfo=tz.tzlocal(), fold=0)
    return tz.resolve_imaginary(aware)


def _anchor_today(text: str, fmt: str, today: date) -> datetime:
    return datetime.combine(today, datetime.strptime(text, fmt).time())


def parse_date_time(
    token: str,
    now: Optional[Callable[[], datetime]] = None,
) -> datetime:
    """
    Parse a date, time-of-day, or date+time token into a local datetime.

    Formats are tried in a fixed order and the first match wins. Time-only
    tokens are anchored to today's date as reported by ``now``.

    Args:
        token: Keyword token, with or without its leading underscore
        now: Wall-clock source, defaults to ``local_now``

    Returns:
        Timezone-aware datetime in the local zone

    Raises:
        ParseFailure: if no format matches
    """
    cleaned = token.strip().lstrip("_").lower()
    clock = now or local_now

    if ":" in cleaned:
        attempts = ((DATE_TIME_FORMAT, False), (TIME_FORMAT, True))
    elif cleaned.endswith(("am", "pm")):
        attempts = ((DATE_HOUR_FORMAT, False), (HOUR_FORMAT, True))
    else:
        attempts = ((DATE_FORMAT, False),)

    error = None
    for fmt, time_only in attempts:
        try:
            if time_only:
                naive = _anchor_today(cleaned, fmt, clock().date())
            else:
                naive = datetime.strptime(cleaned, fmt)
        except ValueError as e:
            error = e
            continue
        return localize(naive)

    raise ParseFailure(token, fmt, str(error))


def parse_duration(token: str) -> timedelta:
    """
    Parse a ``_for_<number><unit>`` token into a timedelta.

    Units are ``h`` (hours) and ``m`` (minutes). Magnitudes may be
    fractional and several groups may follow each other ("1h30m").
    The total is truncated to whole seconds.
    Nothing may sit between a magnitude and its unit ("2xh" is rejected).

    Raises:
        ParseFailure: on an empty body, a malformed separator, a missing
            magnitude, or a unit other than h/m
    """
    cleaned = token.strip().lower()
    if cleaned.startswith("_for"):
        cleaned = cleaned[len("_for"):]
    if not cleaned:
        raise ParseFailure(token, DURATION_FORMAT, "duration must not be empty")

    parts = cleaned.split("_")
    if len(parts) != 2 or parts[0] or not parts[1]:
        raise ParseFailure(token, DURATION_FORMAT, "expected '_for_<number><unit>'")

    body = parts[1]
    total = 0.0
    pos = 0
    while pos < len(body):
        m = _NUMBER.match(body, pos)
        if not m:
            raise ParseFailure(token, DURATION_FORMAT, "duration must have a number")
        magnitude = float(m.group())
        pos = m.end()

        unit = body[pos:pos + 1]
        if unit not in _UNIT_SECONDS:
            raise ParseFailure(token, DURATION_FORMAT, "duration must have a unit 'h' or 'm'")
        total += magnitude * _UNIT_SECONDS[unit]
        pos += 1

    return timedelta(seconds=int(total))
