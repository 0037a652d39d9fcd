from datetime import datetime, timedelta, timezone

import pytest

from projectdb.models import (
    Project,
    ProjectKind,
    ProjectOwner,
    ProjectQuota,
    ProjectStatus,
    User,
    UserFunction,
    UserStatus,
    format_datetime,
    parse_datetime,
)

USER_DATA = {
    "username": "jdoe",
    "firstName": "John",
    "middleName": "van",
    "lastName": "Doe",
    "email": "jdoe@example.com",
    "status": "CheckedIn",
    "function": "PrincipalInvestigator",
}

PROJECT_DATA = {
    "number": "3010000.01",
    "title": "Brain study",
    "kind": "Research",
    "owner": {
        "username": "jdoe",
        "displayName": "John Doe",
        "email": "jdoe@example.com",
    },
    "status": "Active",
    "start": "2023-01-01T00:00:00Z",
    "end": "2025-06-30T12:30:00+02:00",
}


def test_parse_datetime_utc():
    assert parse_datetime("2024-01-02T03:04:05Z") == datetime(
        2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc
    )


def test_parse_datetime_offset():
    value = parse_datetime("2024-01-02T03:04:05+02:00")
    assert value.utcoffset() == timedelta(hours=2)
    assert value.astimezone(timezone.utc).hour == 1


def test_parse_datetime_truncates_nanoseconds():
    value = parse_datetime("2024-01-02T03:04:05.123456789Z")
    assert value.microsecond == 123456


def test_parse_datetime_none():
    assert parse_datetime(None) is None


@pytest.mark.parametrize(
    "text", ["", "2024-01-02", "2024-01-02T03:04:05", "2024-13-02T03:04:05Z", "garbage"]
)
def test_parse_datetime_invalid(text):
    with pytest.raises(ValueError):
        parse_datetime(text)


def test_format_datetime_utc_uses_z():
    value = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
    assert format_datetime(value) == "2024-01-02T03:04:05Z"


def test_format_datetime_trims_fraction():
    value = datetime(2024, 1, 2, 3, 4, 5, 500000, tzinfo=timezone.utc)
    assert format_datetime(value) == "2024-01-02T03:04:05.5Z"


def test_format_datetime_negative_offset():
    value = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone(-timedelta(hours=5, minutes=30)))
    assert format_datetime(value).endswith("-05:30")


def test_format_datetime_none():
    assert format_datetime(None) is None


@pytest.mark.parametrize(
    "text",
    ["2024-01-02T03:04:05Z", "2024-01-02T03:04:05.25+01:00", "1999-12-31T23:59:59.000001Z"],
)
def test_datetime_round_trip(text):
    assert format_datetime(parse_datetime(text)) == text


def test_user_from_dict():
    user = User.from_dict(USER_DATA)
    assert user.username == "jdoe"
    assert user.first_name == "John"
    assert user.middle_name == "van"
    assert user.last_name == "Doe"
    assert user.email == "jdoe@example.com"
    assert user.status is UserStatus.CHECKED_IN
    assert user.function is UserFunction.PRINCIPAL_INVESTIGATOR


def test_user_round_trip():
    assert User.from_dict(USER_DATA).to_dict() == USER_DATA


def test_user_missing_fields_default():
    user = User.from_dict({"username": "x"})
    assert user == User(username="x")
    assert user.status is None


def test_user_null_is_empty():
    assert User.from_dict(None) == User()


def test_user_unknown_status_rejected():
    with pytest.raises(ValueError):
        User.from_dict({"status": "Gone"})


def test_project_owner_from_dict():
    owner = ProjectOwner.from_dict(PROJECT_DATA["owner"])
    assert owner == ProjectOwner("jdoe", "John Doe", "jdoe@example.com")


def test_project_from_dict():
    project = Project.from_dict(PROJECT_DATA)
    assert project.number == "3010000.01"
    assert project.kind is ProjectKind.RESEARCH
    assert project.status is ProjectStatus.ACTIVE
    assert project.owner.display_name == "John Doe"
    assert project.start == datetime(2023, 1, 1, tzinfo=timezone.utc)
    assert project.end.utcoffset() == timedelta(hours=2)


def test_project_round_trip():
    assert Project.from_dict(PROJECT_DATA).to_dict() == PROJECT_DATA


def test_project_missing_dates():
    project = Project.from_dict({"number": "3010000.02"})
    assert project.start is None and project.end is None
    assert project.to_dict()["start"] is None


def test_project_quota_from_dict():
    quota = ProjectQuota.from_dict(
        {"overrulingQuotaGiB": 100, "storage": {"quotaGiB": 50, "usageMiB": 2048}}
    )
    assert quota == ProjectQuota(overruling_quota_gib=100, quota_gib=50, usage_mib=2048)


def test_project_quota_null_storage():
    quota = ProjectQuota.from_dict({"overrulingQuotaGiB": None, "storage": None})
    assert quota == ProjectQuota(0, 0, 0)


def test_enum_values_match_wire_strings():
    assert UserStatus("CheckedOutExtended") is UserStatus.CHECKED_OUT_EXTENDED
    assert UserFunction("PhdStudent") is UserFunction.PHD_STUDENT
    assert ProjectKind("Dataset") is ProjectKind.DATASET