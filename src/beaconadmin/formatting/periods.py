"""Reporting period display.

Reports are supposed to cover whole UTC days. A period whose ends both sit
on a day boundary (within two minutes) shows dates only; a single-day
period shows just its first date.
"""

from datetime import UTC, datetime, timedelta

from beaconadmin.errors import DecodeError

_SLACK = timedelta(minutes=2)
_ONE_DAY_MAX = timedelta(seconds=24 * (3600 + 2 * 60))


def as_utc(value: datetime | str | float | int) -> datetime:
    """Normalize a datetime, RFC 3339 string or unix timestamp to aware UTC."""
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value)
        except ValueError:
            msg = f"invalid timestamp {value!r}"
            raise DecodeError(msg) from None
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value.astimezone(UTC)
    return datetime.fromtimestamp(value, UTC)


def _date_str(dt: datetime) -> str:
    return f"{dt.year}-{dt.month}-{dt.day}"


def is_day_change(dt: datetime) -> bool:
    """Whether *dt* is within two minutes of a UTC midnight."""
    return _date_str(dt - _SLACK) != _date_str(dt + _SLACK)


def format_period(start: datetime | str | float, end: datetime | str | float) -> str:
    """Render a reporting period, e.g. ``"2024-3-1"`` or ``"2024-3-1 06:00 - 2024-3-2"``."""
    begin = as_utc(start).replace(microsecond=0)
    finish = as_utc(end).replace(microsecond=0)
    begin_day_change = is_day_change(begin)
    end_day_change = is_day_change(finish)
    begin_str = _date_str(begin)
    end_str = _date_str(finish)

    if begin_day_change and end_day_change and abs(begin - finish) < _ONE_DAY_MAX:
        return begin_str
    if not begin_day_change:
        begin_str += f" {begin:%H:%M}"
    if not end_day_change:
        end_str += f" {finish:%H:%M}"
    return f"{begin_str} - {end_str}"


def period_title(start: datetime | str | float, end: datetime | str | float) -> str:
    """Exact UTC instants of a period, for a tooltip."""
    begin = as_utc(start).replace(microsecond=0)
    finish = as_utc(end).replace(microsecond=0)
    return f"{begin.isoformat()} - {finish.isoformat()}"
