"""Formatting helpers for dashboard responses.

Functions:
- format_duration(seconds) -> "1h 20m" / "45m"
- note_preview(content) -> first 100 chars plus "..." when truncated
- format_distance(moment, now) -> "about 1 hour ago", "3 days ago", ...
- parse_limit(raw, default) -> positive int or default
"""

from __future__ import annotations

import math
import re
from datetime import datetime, timezone

PREVIEW_LENGTH = 100
ELLIPSIS = "..."

MINUTES_IN_DAY = 1440
MINUTES_IN_ALMOST_TWO_DAYS = 2520
MINUTES_IN_MONTH = 43200
MINUTES_IN_TWO_MONTHS = 86400

LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def format_duration(seconds: int) -> str:
    """Format a duration in seconds as hours and minutes.

    Seconds below a full minute are dropped.

    Examples:
        4800 -> "1h 20m"
        2700 -> "45m"
        0 -> "0m"
    """
    hours = seconds // 3600
    minutes = (seconds % 3600) // 60
    if hours > 0:
        return f"{hours}h {minutes}m"
    return f"{minutes}m"


def note_preview(content: str, length: int = PREVIEW_LENGTH) -> str:
    """First `length` characters of a note, with an ellipsis if cut."""
    if len(content) <= length:
        return content
    return content[:length] + ELLIPSIS


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}" if count == 1 else f"{count} {unit}s"


def _as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def _full_months_between(earlier: datetime, later: datetime) -> int:
    months = (later.year - earlier.year) * 12 + (later.month - earlier.month)
    if (later.day, later.time()) < (earlier.day, earlier.time()):
        months -= 1
    return max(months, 0)


def _distance_phrase(earlier: datetime, later: datetime) -> str:
    seconds = int((later - earlier).total_seconds())
    minutes = _round_half_up(seconds / 60)

    if minutes < 2:
        return "less than a minute" if minutes == 0 else "1 minute"
    if minutes < 45:
        return _plural(minutes, "minute")
    if minutes < 90:
        return "about 1 hour"
    if minutes < MINUTES_IN_DAY:
        return "about " + _plural(_round_half_up(minutes / 60), "hour")
    if minutes < MINUTES_IN_ALMOST_TWO_DAYS:
        return "1 day"
    if minutes < MINUTES_IN_MONTH:
        return _plural(_round_half_up(minutes / MINUTES_IN_DAY), "day")
    if minutes < MINUTES_IN_TWO_MONTHS:
        return "about " + _plural(_round_half_up(minutes / MINUTES_IN_MONTH), "month")

    months = _full_months_between(earlier, later)
    if months < 12:
        return _plural(_round_half_up(minutes / MINUTES_IN_MONTH), "month")

    years = months // 12
    remainder = months % 12
    if remainder < 3:
        return "about " + _plural(years, "year")
    if remainder < 9:
        return "over " + _plural(years, "year")
    return "almost " + _plural(years + 1, "year")


def format_distance(moment: datetime, now: datetime | None = None) -> str:
    """Describe how far `moment` is from `now` in words.

    Past moments get an "ago" suffix, future ones an "in" prefix.

    Args:
        moment: The timestamp to describe
        now: Reference time (defaults to the current UTC time)

    Returns:
        Phrase like "5 minutes ago" or "in about 2 hours"
    """
    moment = _as_utc(moment)
    now = _as_utc(now or datetime.now(timezone.utc))

    if moment > now:
        return "in " + _distance_phrase(now, moment)
    return _distance_phrase(moment, now) + " ago"


def parse_limit(raw: str | None, default: int) -> int:
    """Parse a `limit` query value.

    A leading integer is honoured ("3abc" -> 3). Missing, non-numeric and
    non-positive values fall back to `default`.
    """
    if raw is None:
        return default
    match = LEADING_INT.match(raw)
    if not match:
        return default
    value = int(match.group(1))
    return value if value > 0 else default
