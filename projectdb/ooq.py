"""Decisions on when to send out-of-quota alerts for project storage."""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timedelta, timezone

from projectdb.alert_records import AlertIgnored, OoqLastAlert


def ooq_alert_frequency(usage: int) -> timedelta:
    """Minimum time between two alerts at ``usage`` percent; zero means never."""
    if 90 <= usage < 95:
        return timedelta(days=14)
    if 95 <= usage < 99:
        return timedelta(days=7)
    if usage >= 99:
        return timedelta(days=2)
    return timedelta(0)


def usage_ratio(quota_gb: int, usage_mb: int) -> int:
    """Storage usage in whole percent of the quota."""
    if quota_gb == 0:
        return 100 if usage_mb > 0 else 0
    return 100 * usage_mb // (quota_gb << 10)


def _ignored(message: str, last_alert: OoqLastAlert, ratio: int) -> AlertIgnored:
    err = AlertIgnored(message)
    err.last_alert = replace(last_alert, usage_percent_last_check=ratio)
    return err


def check_ooq_alert(
    last_alert: OoqLastAlert, quota_gb: int, usage_mb: int, now: datetime
) -> OoqLastAlert:
    """Decide whether an out-of-quota alert is due.

    Returns the record to store once the alert has been sent. Raises
    AlertIgnored when no alert is due; its ``last_alert`` attribute holds the
    previous record updated with the usage seen at this check.
    """
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    ratio = usage_ratio(quota_gb, usage_mb)

    duration = ooq_alert_frequency(ratio)
    if not duration:
        raise _ignored(
            f"usage ({ratio}%) below the ooq threshold.", last_alert, ratio
        )

    min_usage = min(last_alert.usage_percent, last_alert.usage_percent_last_check)
    if ratio < min_usage:
        raise _ignored(
            f"usage ({ratio}%) below the usage ({min_usage}%) at the last alert/check.",
            last_alert,
            ratio,
        )

    previous = last_alert.timestamp
    if previous.tzinfo is None:
        previous = previous.replace(tzinfo=timezone.utc)
    following = previous + duration
    if now < following:
        raise _ignored(
            f"{now} not reaching next alert {following}.", last_alert, ratio
        )

    return OoqLastAlert(
        timestamp=now, usage_percent=ratio, usage_percent_last_check=ratio
    )