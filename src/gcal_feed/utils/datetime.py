from datetime import datetime, date, time, timezone
from typing import Union

import tzlocal

RFC3339_UTC_FORMAT = "%Y-%m-%dT%H:%M:%SZ"
DAY_FORMAT = "%Y-%m-%d"


def current_datetime_local_timezone() -> datetime:
    """
    Returns the current date and time in the local timezone.

    Returns:
        A datetime object representing the current date and time.
    """
    return datetime.now(tzlocal.get_localzone())


def convert_datetime_to_utc(date_time: Union[datetime, date]) -> datetime:
    """
    Converts a datetime to an aware UTC datetime.

    Naive datetimes are taken to be in the local timezone. Plain dates are
    taken to be midnight UTC of that day.

    Args:
        date_time: The datetime or date to be converted.

    Returns:
        A timezone-aware datetime in UTC.
    """
    if not isinstance(date_time, datetime):
        return datetime.combine(date_time, time.min, tzinfo=timezone.utc)
    if date_time.tzinfo is None:
        date_time = date_time.replace(tzinfo=tzlocal.get_localzone())
    return date_time.astimezone(timezone.utc)


def format_rfc3339_utc(date_time: Union[datetime, date]) -> str:
    """
    Formats a datetime as an RFC 3339 UTC timestamp with a trailing 'Z'.

    Args:
        date_time: The datetime or date to format.

    Returns:
        A string such as '2006-03-28T16:00:00Z'.
    """
    return convert_datetime_to_utc(date_time).strftime(RFC3339_UTC_FORMAT)


def format_day(date_time: Union[datetime, date]) -> str:
    """Formats a date, or a datetime after UTC conversion, as YYYY-MM-DD."""
    if not isinstance(date_time, datetime):
        return date_time.strftime(DAY_FORMAT)
    return convert_datetime_to_utc(date_time).strftime(DAY_FORMAT)


def is_day_value(value: str) -> bool:
    """True if the timestamp string carries only a date."""
    return bool(value) and "T" not in value


def parse_timestamp(value: str) -> datetime:
    """
    Parses a feed timestamp into an aware UTC datetime.

    Accepts full timestamps ('2006-03-28T16:00:00.000Z', '...+01:00') and
    day-only values ('2006-03-28'), which become midnight UTC.

    Args:
        value: The timestamp string from the feed.

    Returns:
        A timezone-aware datetime in UTC.

    Raises:
        ValueError: If the string is not a recognisable timestamp.
    """
    value = value.strip()
    if is_day_value(value):
        day = datetime.strptime(value, DAY_FORMAT)
        return day.replace(tzinfo=timezone.utc)
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)
