"""Records for projects, users and storage quota returned by the project database."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, Mapping, Optional, Type, TypeVar


class BookingEventStatus(str, Enum):
    """Status of a lab booking event."""

    TENTATIVE = "Tentative"
    CONFIRMED = "Confirmed"
    REJECTED = "Rejected"
    CANCEL_REQUESTED = "CancelRequested"
    CANCELED_IN_TIME = "CanceledInTime"
    CANCELED_NOT_IN_TIME = "CanceledNotInTime"


class ProjectKind(str, Enum):
    """Kind of a project."""

    RESEARCH = "Research"
    DATASET = "Dataset"


class ProjectStatus(str, Enum):
    """Whether a project is active."""

    ACTIVE = "Active"
    INACTIVE = "Inactive"


class UserFunction(str, Enum):
    """Position of a user within the organisation."""

    TRAINEE = "Trainee"
    PHD_STUDENT = "PhdStudent"
    POSTDOCTORAL_RESEARCHER = "PostdoctoralResearcher"
    PRINCIPAL_INVESTIGATOR = "PrincipalInvestigator"
    RESEARCH_STAFF = "ResearchStaff"
    RESEARCH_ASSISTANT = "ResearchAssistant"
    OTHER_RESEARCHER = "OtherResearcher"
    STAFF_SCIENTIST = "StaffScientist"
    SUPPORTING_STAFF = "SupportingStaff"
    SENIOR_RESEARCHER = "SeniorResearcher"
    RESEARCH_FELLOW = "ResearchFellow"
    STUDENT_ASSISTANT = "StudentAssistant"
    UNKNOWN = "Unknown"


class UserStatus(str, Enum):
    """Check-in state of a user."""

    TENTATIVE = "Tentative"
    CHECKED_IN = "CheckedIn"
    CHECKED_OUT = "CheckedOut"
    CHECKED_OUT_EXTENDED = "CheckedOutExtended"


_RFC3339 = re.compile(
    r"^(\d{4})-(\d{2})-(\d{2})[Tt](\d{2}):(\d{2}):(\d{2})"
    r"(?:\.(\d+))?"
    r"([Zz]|[+-]\d{2}:\d{2})$"
)

_E = TypeVar("_E", bound=Enum)


def parse_datetime(value: Optional[str]) -> Optional[datetime]:
    """Parse an RFC 3339 timestamp into an aware datetime; None stays None.

    Fractions finer than a microsecond are truncated.
    """
    if value is None:
        return None
    match = _RFC3339.match(value)
    if match is None:
        raise ValueError(f"invalid RFC 3339 timestamp: {value!r}")
    year, month, day, hour, minute, second, fraction, offset = match.groups()
    micro = int((fraction or "")[:6].ljust(6, "0"))
    if offset in ("Z", "z"):
        tz = timezone.utc
    else:
        sign = -1 if offset[0] == "-" else 1
        hours, minutes = int(offset[1:3]), int(offset[4:6])
        if hours > 23 or minutes > 59:
            raise ValueError(f"invalid time zone offset in {value!r}")
        tz = timezone(sign * timedelta(hours=hours, minutes=minutes))
    return datetime(
        int(year), int(month), int(day),
        int(hour), int(minute), int(second), micro, tzinfo=tz,
    )


def format_datetime(value: Optional[datetime]) -> Optional[str]:
    """Format a datetime as RFC 3339, trimming trailing fraction zeros.

    A naive datetime is taken to be in UTC; a zero offset is written as "Z".
    """
    if value is None:
        return None
    text = value.strftime("%Y-%m-%dT%H:%M:%S")
    if value.microsecond:
        text += "." + f"{value.microsecond:06d}".rstrip("0")
    offset = value.utcoffset()
    if not offset:
        return text + "Z"
    total = int(offset.total_seconds())
    sign = "-" if total < 0 else "+"
    hours, rest = divmod(abs(total), 3600)
    return f"{text}{sign}{hours:02d}:{rest // 60:02d}"


def _enum(cls: Type[_E], value: Any) -> Optional[_E]:
    if value is None or value == "":
        return None
    return cls(value)


def _enum_value(member: Optional[Enum]) -> Optional[str]:
    return None if member is None else member.value


def _text(data: Mapping[str, Any], key: str) -> str:
    return data.get(key) or ""


def _int(data: Mapping[str, Any], key: str) -> int:
    return int(data.get(key) or 0)


@dataclass(frozen=True)
class User:
    """A user registered in the project database."""

    username: str = ""
    first_name: str = ""
    middle_name: str = ""
    last_name: str = ""
    email: str = ""
    status: Optional[UserStatus] = None
    function: Optional[UserFunction] = None

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "User":
        data = data or {}
        return cls(
            username=_text(data, "username"),
            first_name=_text(data, "firstName"),
            middle_name=_text(data, "middleName"),
            last_name=_text(data, "lastName"),
            email=_text(data, "email"),
            status=_enum(UserStatus, data.get("status")),
            function=_enum(UserFunction, data.get("function")),
        )

    def to_dict(self) -> dict:
        return {
            "username": self.username,
            "firstName": self.first_name,
            "middleName": self.middle_name,
            "lastName": self.last_name,
            "email": self.email,
            "status": _enum_value(self.status),
            "function": _enum_value(self.function),
        }


@dataclass(frozen=True)
class ProjectOwner:
    """The owner of a project as reported with project metadata."""

    username: str = ""
    display_name: str = ""
    email: str = ""

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "ProjectOwner":
        data = data or {}
        return cls(
            username=_text(data, "username"),
            display_name=_text(data, "displayName"),
            email=_text(data, "email"),
        )


@dataclass(frozen=True)
class Project:
    """Metadata of a project."""

    number: str = ""
    title: str = ""
    kind: Optional[ProjectKind] = None
    owner: ProjectOwner = ProjectOwner()
    status: Optional[ProjectStatus] = None
    start: Optional[datetime] = None
    end: Optional[datetime] = None

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "Project":
        data = data or {}
        return cls(
            number=_text(data, "number"),
            title=_text(data, "title"),
            kind=_enum(ProjectKind, data.get("kind")),
            owner=ProjectOwner.from_dict(data.get("owner")),
            status=_enum(ProjectStatus, data.get("status")),
            start=parse_datetime(data.get("start")),
            end=parse_datetime(data.get("end")),
        )

    def to_dict(self) -> dict:
        return {
            "number": self.number,
            "title": self.title,
            "kind": _enum_value(self.kind),
            "owner": {
                "username": self.owner.username,
                "displayName": self.owner.display_name,
                "email": self.owner.email,
            },
            "status": _enum_value(self.status),
            "start": format_datetime(self.start),
            "end": format_datetime(self.end),
        }


@dataclass(frozen=True)
class ProjectQuota:
    """Storage quota and usage of a project."""

    overruling_quota_gib: int = 0
    quota_gib: int = 0
    usage_mib: int = 0

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "ProjectQuota":
        data = data or {}
        storage = data.get("storage") or {}
        return cls(
            overruling_quota_gib=_int(data, "overrulingQuotaGiB"),
            quota_gib=_int(storage, "quotaGiB"),
            usage_mib=_int(storage, "usageMiB"),
        )