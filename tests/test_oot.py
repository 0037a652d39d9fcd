from datetime import date, datetime, timedelta, timezone

import pytest

from projectdb.alert_records import AlertIgnored, OotLastAlert
from projectdb.oot import (
    check_oot_alert,
    expiry_offset,
    matches_alert_mode,
    oot_alert_dates,
)

NOW = datetime(2024, 3, 10, 12, 30, tzinfo=timezone.utc)


def test_alert_dates_modes():
    assert set(oot_alert_dates(NOW)) == {"p4w", "p2w", "p1w", "now", "g2m"}


@pytest.mark.parametrize(
    "mode, days", [("p4w", 28), ("p2w", 14), ("p1w", 7), ("now", 0), ("g2m", -60)]
)
def test_alert_dates_offsets(mode, days):
    dates = oot_alert_dates(NOW)
    assert date.fromisoformat(dates[mode]) - NOW.date() == timedelta(days=days)


def test_alert_dates_accepts_plain_date():
    assert oot_alert_dates(NOW.date()) == oot_alert_dates(NOW)


def test_alert_dates_now_is_today():
    assert oot_alert_dates(NOW)["now"] == NOW.date().isoformat()


@pytest.mark.parametrize(
    "mode, expected",
    [("p4w", (28, 0)), ("p2w", (14, 0)), ("p1w", (7, 0)), ("now", (0, 0)), ("g2m", (0, -2))],
)
def test_expiry_offset(mode, expected):
    assert tuple(expiry_offset(mode)) == expected


def test_expiry_offset_fields():
    offset = expiry_offset("g2m")
    assert offset.months == -2
    assert offset.days == 0


def test_expiry_offset_unknown_mode():
    with pytest.raises(AlertIgnored) as info:
        expiry_offset("p3w")
    assert info.value.message == "ignore unknown alert mode p3w"


def test_matches_alert_mode():
    end = NOW + timedelta(days=28)
    assert matches_alert_mode(end, "p4w", NOW) is True
    assert matches_alert_mode(end, "p2w", NOW) is False


def test_matches_grace_period_and_date_input():
    end = (NOW - timedelta(days=60)).date()
    assert matches_alert_mode(end, "g2m", NOW) is True
    assert matches_alert_mode(end, "now", NOW) is False


def test_matches_unknown_mode_is_false():
    assert matches_alert_mode(NOW, "weekly", NOW) is False


def test_check_first_alert_is_sent():
    result = check_oot_alert(OotLastAlert(), NOW)
    assert result == OotLastAlert(timestamp=NOW)


def test_check_recent_alert_is_ignored():
    last = OotLastAlert(timestamp=NOW - timedelta(days=1))
    with pytest.raises(AlertIgnored) as info:
        check_oot_alert(last, NOW)
    expected_day = (NOW - timedelta(days=1)).date().isoformat()
    assert info.value.message == f"last alert has been sent on {expected_day}"
    assert info.value.last_alert == last


def test_check_exactly_three_days_is_ignored():
    last = OotLastAlert(timestamp=NOW - timedelta(days=3))
    with pytest.raises(AlertIgnored):
        check_oot_alert(last, NOW)


def test_check_after_three_days_is_sent():
    last = OotLastAlert(timestamp=NOW - timedelta(days=3, seconds=1))
    assert check_oot_alert(last, NOW).timestamp == NOW


def test_check_naive_now_taken_as_utc():
    naive = NOW.replace(tzinfo=None)
    assert check_oot_alert(OotLastAlert(), naive).timestamp == NOW


def test_check_result_round_trips_through_json():
    result = check_oot_alert(OotLastAlert(), NOW)
    assert OotLastAlert.from_json(result.to_json()) == result