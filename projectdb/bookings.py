"""Lab, booking and booking-event records returned by the project database."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Mapping, Optional, Tuple, Union

from projectdb.models import (
    BookingEventStatus,
    User,
    format_datetime,
    parse_datetime,
)


def _text(data: Mapping[str, Any], key: str) -> str:
    return data.get(key) or ""


@dataclass(frozen=True)
class Modality:
    """An experimental modality, such as a scanner type."""

    id: str = ""
    name: str = ""
    short_name: str = ""

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "Modality":
        data = data or {}
        return cls(
            id=_text(data, "id"),
            name=_text(data, "name"),
            short_name=_text(data, "shortName"),
        )


@dataclass(frozen=True)
class Lab:
    """A lab with the modalities it offers."""

    id: str = ""
    name: str = ""
    bookable: bool = False
    modalities: Tuple[Modality, ...] = ()

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "Lab":
        data = data or {}
        return cls(
            id=_text(data, "id"),
            name=_text(data, "name"),
            bookable=bool(data.get("bookable")),
            modalities=tuple(
                Modality.from_dict(m) for m in data.get("modalities") or ()
            ),
        )


@dataclass(frozen=True)
class GroupMember:
    """Membership of a user in a group."""

    group_id: str = ""
    group_name: str = ""
    primary: bool = False

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "GroupMember":
        data = data or {}
        group = data.get("group") or {}
        return cls(
            group_id=_text(group, "id"),
            group_name=_text(group, "name"),
            primary=bool(data.get("primary")),
        )


@dataclass(frozen=True)
class BookingProject:
    """The project a booking is made for."""

    number: str = ""
    title: str = ""
    funding_source: str = ""
    owner_username: str = ""
    owner_groups: Tuple[GroupMember, ...] = ()

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "BookingProject":
        data = data or {}
        funding = data.get("fundingSource") or {}
        owner = data.get("owner") or {}
        return cls(
            number=_text(data, "number"),
            title=_text(data, "title"),
            funding_source=_text(funding, "number"),
            owner_username=_text(owner, "username"),
            owner_groups=tuple(
                GroupMember.from_dict(g) for g in owner.get("groups") or ()
            ),
        )


@dataclass(frozen=True)
class Booking:
    """A booking: the experiment modality, the project and the booker."""

    modality: Modality = field(default_factory=Modality)
    project: BookingProject = field(default_factory=BookingProject)
    owner: User = field(default_factory=User)

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "Booking":
        data = data or {}
        experiment = data.get("experiment") or {}
        return cls(
            modality=Modality.from_dict(experiment.get("modality")),
            project=BookingProject.from_dict(data.get("project")),
            owner=User.from_dict(data.get("owner")),
        )


@dataclass(frozen=True)
class LabResource:
    """A lab booked as a resource."""

    id: str = ""
    name: str = ""

    @property
    def typename(self) -> str:
        return "Lab"


@dataclass(frozen=True)
class RoomResource:
    """A room booked as a resource."""

    id: str = ""
    number: str = ""

    @property
    def typename(self) -> str:
        return "Room"


Resource = Union[LabResource, RoomResource]


def parse_resource(data: Optional[Mapping[str, Any]]) -> Optional[Resource]:
    """Build a lab or room resource from its GraphQL form, keyed on ``__typename``."""
    if data is None:
        return None
    typename = data.get("__typename") or ""
    if typename == "Lab":
        return LabResource(id=_text(data, "id"), name=_text(data, "name"))
    if typename == "Room":
        return RoomResource(id=_text(data, "id"), number=_text(data, "number"))
    if typename == "":
        raise ValueError("response was missing Resource.__typename")
    raise ValueError(f'unexpected concrete type for Resource: "{typename}"')


def resource_to_dict(resource: Optional[Resource]) -> Optional[dict]:
    """Return the GraphQL form of a resource, including ``__typename``."""
    if resource is None:
        return None
    if isinstance(resource, LabResource):
        return {"__typename": "Lab", "id": resource.id, "name": resource.name}
    if isinstance(resource, RoomResource):
        return {"__typename": "Room", "id": resource.id, "number": resource.number}
    raise TypeError(
        f'unexpected concrete type for Resource: "{type(resource).__name__}"'
    )


def _booking_to_dict(booking: Booking) -> dict:
    project = booking.project
    return {
        "experiment": {
            "modality": {
                "id": booking.modality.id,
                "name": booking.modality.name,
                "shortName": booking.modality.short_name,
            }
        },
        "project": {
            "number": project.number,
            "title": project.title,
            "fundingSource": {"number": project.funding_source},
            "owner": {
                "username": project.owner_username,
                "groups": [
                    {
                        "group": {"id": g.group_id, "name": g.group_name},
                        "primary": g.primary,
                    }
                    for g in project.owner_groups
                ],
            },
        },
        "owner": booking.owner.to_dict(),
    }


@dataclass(frozen=True)
class BookingEvent:
    """A single booked time slot on a resource."""

    start: Optional[datetime] = None
    end: Optional[datetime] = None
    status: Optional[BookingEventStatus] = None
    subject: str = ""
    session: str = ""
    booking: Booking = field(default_factory=Booking)
    resource: Optional[Resource] = None

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "BookingEvent":
        data = data or {}
        status = data.get("status")
        try:
            resource = parse_resource(data.get("resource"))
        except ValueError as err:
            raise ValueError(
                f"unable to unmarshal BookingEvent.resource: {err}"
            ) from err
        return cls(
            start=parse_datetime(data.get("start")),
            end=parse_datetime(data.get("end")),
            status=BookingEventStatus(status) if status else None,
            subject=_text(data, "subject"),
            session=_text(data, "session"),
            booking=Booking.from_dict(data.get("booking")),
            resource=resource,
        )

    def to_dict(self) -> dict:
        try:
            resource = resource_to_dict(self.resource)
        except TypeError as err:
            raise TypeError(f"unable to marshal BookingEvent.resource: {err}") from err
        return {
            "start": format_datetime(self.start),
            "end": format_datetime(self.end),
            "status": None if self.status is None else self.status.value,
            "subject": self.subject,
            "session": self.session,
            "booking": _booking_to_dict(self.booking),
            "resource": resource,
        }