"""Decisions on when to send alerts about projects running out of time."""

from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime, timedelta, timezone
from typing import Dict, NamedTuple, Union

from projectdb.alert_records import AlertIgnored, OotLastAlert

# Days before (positive) or after (negative) the project end date on which
# each alert mode fires.
_MODE_DAYS: Dict[str, int] = {
    "p4w": 28,
    "p2w": 14,
    "p1w": 7,
    "now": 0,
    "g2m": -60,
}

# At most one alert within this period, whatever the mode.
MIN_ALERT_INTERVAL = timedelta(days=3)


class ExpiryOffset(NamedTuple):
    """How far the project end lies from the alert, as shown in the message."""

    days: int
    months: int


_EXPIRY_OFFSETS: Dict[str, ExpiryOffset] = {
    "p4w": ExpiryOffset(days=28, months=0),
    "p2w": ExpiryOffset(days=14, months=0),
    "p1w": ExpiryOffset(days=7, months=0),
    "now": ExpiryOffset(days=0, months=0),
    "g2m": ExpiryOffset(days=0, months=-2),
}


def _format_date(value: date) -> str:
    return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"


def _as_date(value: Union[date, datetime]) -> date:
    return value.date() if isinstance(value, datetime) else value


def _aware(value: datetime) -> datetime:
    return value.replace(tzinfo=timezone.utc) if value.tzinfo is None else value


def oot_alert_dates(now: Union[date, datetime]) -> Dict[str, str]:
    """Project end dates, as ``YYYY-MM-DD``, that each alert mode looks for."""
    today = _as_date(now)
    return {
        mode: _format_date(today + timedelta(days=days))
        for mode, days in _MODE_DAYS.items()
    }


def expiry_offset(mode: str) -> ExpiryOffset:
    """Days and months until expiry reported by an alert in ``mode``.

    Raises AlertIgnored for an unknown mode.
    """
    try:
        return _EXPIRY_OFFSETS[mode]
    except KeyError:
        raise AlertIgnored(f"ignore unknown alert mode {mode}") from None


def matches_alert_mode(
    end: Union[date, datetime], mode: str, now: Union[date, datetime]
) -> bool:
    """True if a project ending on ``end`` is to be alerted in ``mode`` today."""
    target = oot_alert_dates(now).get(mode)
    return target is not None and _format_date(_as_date(end)) == target


def check_oot_alert(last_alert: OotLastAlert, now: datetime) -> OotLastAlert:
    """Decide whether an out-of-time alert may be sent at ``now``.

    Returns the record to store once the alert has been sent. Raises
    AlertIgnored if an alert went out within the last three days; its
    ``last_alert`` attribute holds the unchanged previous record.
    """
    now = _aware(now)
    previous = _aware(last_alert.timestamp)
    if now > previous + MIN_ALERT_INTERVAL:
        return OotLastAlert(timestamp=now)
    err = AlertIgnored(f"last alert has been sent on {_format_date(previous)}")
    err.last_alert = replace(last_alert)
    raise err