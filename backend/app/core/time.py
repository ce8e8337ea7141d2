"""Time utilities for timezone-aware UTC datetimes and ledger time windows."""

from dataclasses import dataclass
from datetime import UTC, date, datetime, time, timedelta
from enum import Enum

from backend.app.core.errors import ValidationError


def utc_now() -> datetime:
    """Return a timezone-aware UTC datetime for defaults and onupdate hooks."""
    return datetime.now(UTC)


def as_utc(value: datetime | None) -> datetime | None:
    """Convert to UTC; naive values are taken to be UTC already."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


class TimeRange(str, Enum):
    LAST_7_DAYS = "7days"
    LAST_30_DAYS = "30days"
    LAST_90_DAYS = "90days"
    CURRENT_MONTH = "currMonth"
    PREVIOUS_MONTH = "prevMonth"


_RELATIVE_DAYS = {
    TimeRange.LAST_7_DAYS: 7,
    TimeRange.LAST_30_DAYS: 30,
    TimeRange.LAST_90_DAYS: 90,
}


@dataclass(frozen=True)
class TimeWindow:
    """Inclusive lower bound, exclusive upper bound; either side may be open."""

    start: datetime | None = None
    end: datetime | None = None


def _month_start(year: int, month: int, tzinfo) -> datetime:
    # Normalise month overflow/underflow into the year
    year += (month - 1) // 12
    month = (month - 1) % 12 + 1
    return datetime(year, month, 1, tzinfo=tzinfo)


def resolve_time_window(
    time_range: TimeRange | str | None,
    *,
    now: datetime,
    start_date: date | None = None,
    end_date: date | None = None,
) -> TimeWindow:
    """Map a named range or an explicit date pair to a concrete window.

    Relative ranges are rolling 24-hour periods counted back from ``now``.
    Month ranges cover whole calendar months in ``now``'s timezone. A named
    range takes precedence over the explicit pair, and the pair only applies
    when both ends are given; ``end_date`` is inclusive of the whole day.
    """
    if time_range:
        try:
            token = TimeRange(time_range)
        except ValueError as exc:
            raise ValidationError(f"Unknown time range: {time_range}") from exc
        if token in _RELATIVE_DAYS:
            return TimeWindow(start=now - timedelta(days=_RELATIVE_DAYS[token]))
        if token is TimeRange.CURRENT_MONTH:
            start = _month_start(now.year, now.month, now.tzinfo)
            return TimeWindow(start=start, end=_month_start(now.year, now.month + 1, now.tzinfo))
        start = _month_start(now.year, now.month - 1, now.tzinfo)
        return TimeWindow(start=start, end=_month_start(now.year, now.month, now.tzinfo))

    if start_date and end_date:
        tzinfo = now.tzinfo
        return TimeWindow(
            start=datetime.combine(start_date, time.min, tzinfo=tzinfo),
            end=datetime.combine(end_date + timedelta(days=1), time.min, tzinfo=tzinfo),
        )

    return TimeWindow()
