"""
Date range resolution for stats queries.

Raw ``startAt``/``endAt`` values are epoch milliseconds. They are turned into
aware UTC datetimes, a unit is picked for the span and both ends are snapped
to unit boundaries in the caller's timezone. ``end_date`` is inclusive: it is
the last microsecond of its bucket.
"""
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Tuple
from zoneinfo import ZoneInfo

UNITS = ["minute", "hour", "day", "month", "year"]

COMPARE_PREVIOUS = "prev"
COMPARE_YEAR_OVER_YEAR = "yoy"
COMPARE_YESTERDAY = "yesterday"

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
RESOLUTION = timedelta(microseconds=1)

BUCKET_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass
class DateRange:
    start_date: datetime
    end_date: datetime
    unit: str


def parse_timestamp(value: int) -> datetime:
    """Convert epoch milliseconds to an aware UTC datetime"""
    return EPOCH + timedelta(milliseconds=value)


def _month_diff(start: datetime, end: datetime) -> int:
    return (end.year - start.year) * 12 + end.month - start.month


def get_minimum_unit(start_date: datetime, end_date: datetime) -> str:
    """Smallest unit that keeps the number of buckets for the span reasonable"""
    span = end_date - start_date

    if span <= timedelta(minutes=60):
        return "minute"
    if span <= timedelta(hours=48):
        return "hour"
    if span <= timedelta(days=90):
        return "day"
    if _month_diff(start_date, end_date) <= 24:
        return "month"
    return "year"


def get_allowed_units(start_date: datetime, end_date: datetime) -> list:
    min_unit = get_minimum_unit(start_date, end_date)
    # Year buckets are never forced; a month breakdown stays allowed.
    index = UNITS.index("month" if min_unit == "year" else min_unit)
    return UNITS[index:]


def start_of_unit(value: datetime, unit: str) -> datetime:
    """Truncate ``value`` (in its own timezone) to the start of its bucket"""
    if unit == "minute":
        return value.replace(second=0, microsecond=0)
    if unit == "hour":
        return value.replace(minute=0, second=0, microsecond=0)
    if unit == "day":
        return value.replace(hour=0, minute=0, second=0, microsecond=0)
    if unit == "month":
        return value.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    if unit == "year":
        return value.replace(month=1, day=1, hour=0, minute=0, second=0, microsecond=0)
    raise ValueError(f"Unknown unit: {unit}")


def _next_bucket(start: datetime, unit: str) -> datetime:
    if unit == "minute":
        return (start.astimezone(timezone.utc) + timedelta(minutes=1)).astimezone(start.tzinfo)
    if unit == "hour":
        return (start.astimezone(timezone.utc) + timedelta(hours=1)).astimezone(start.tzinfo)
    if unit == "day":
        return start + timedelta(days=1)
    if unit == "month":
        if start.month == 12:
            return start.replace(year=start.year + 1, month=1)
        return start.replace(month=start.month + 1)
    if unit == "year":
        return start.replace(year=start.year + 1)
    raise ValueError(f"Unknown unit: {unit}")


def end_of_unit(value: datetime, unit: str) -> datetime:
    """Last microsecond of the bucket containing ``value``"""
    return _next_bucket(start_of_unit(value, unit), unit) - RESOLUTION


def get_request_date_range(query) -> DateRange:
    """
    Resolve the primary range of a stats request.

    ``query`` needs ``start_at``, ``end_at``, ``unit`` and ``timezone``.
    The requested unit is kept when it is allowed for the span, otherwise
    the minimum unit is used.
    """
    start = parse_timestamp(query.start_at)
    end = parse_timestamp(query.end_at)

    if query.unit in get_allowed_units(start, end):
        unit = query.unit
    else:
        unit = get_minimum_unit(start, end)

    tz = ZoneInfo(query.timezone)

    start_date = start_of_unit(start.astimezone(tz), unit).astimezone(timezone.utc)
    end_date = end_of_unit(end.astimezone(tz), unit).astimezone(timezone.utc)

    return DateRange(start_date=start_date, end_date=end_date, unit=unit)


def _sub_years(value: datetime, years: int) -> datetime:
    try:
        return value.replace(year=value.year - years)
    except ValueError:
        # Feb 29 -> Feb 28
        return value.replace(year=value.year - years, day=28)


def get_compare_date(compare: str, start_date: datetime, end_date: datetime) -> Tuple[datetime, datetime]:
    """
    Derive the comparison window from an already resolved primary window.

    prev: the window of the same length immediately before the primary one.
    yoy: the same window one year earlier.
    yesterday: the primary window shifted back by one day.
    """
    if compare == COMPARE_PREVIOUS:
        period = end_date - start_date + RESOLUTION
        return start_date - period, end_date - period

    if compare == COMPARE_YEAR_OVER_YEAR:
        return _sub_years(start_date, 1), _sub_years(end_date, 1)

    if compare == COMPARE_YESTERDAY:
        return start_date - timedelta(days=1), end_date - timedelta(days=1)

    raise ValueError(f"Unknown compare value: {compare}")


def bucket_label(value: datetime, unit: str, tz: str) -> str:
    """Format the local start of the bucket containing ``value`` (UTC)"""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return start_of_unit(value.astimezone(ZoneInfo(tz)), unit).strftime(BUCKET_FORMAT)


def to_utc_naive(value: datetime) -> datetime:
    """Storage form of a datetime: naive UTC"""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def from_utc_naive(value: datetime) -> datetime:
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)
