"""Records of the last alert sent for a project, as kept in the alert history."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Mapping, Union

from projectdb.models import parse_datetime

# The zero timestamp: no alert has been sent yet.
ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)


class AlertIgnored(Exception):
    """Raised when an alert is deliberately not sent."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


def _format_timestamp(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    text = (
        f"{value.year:04d}-{value.month:02d}-{value.day:02d}"
        f"T{value.hour:02d}:{value.minute:02d}:{value.second:02d}"
    )
    if value.microsecond:
        text += "." + f"{value.microsecond:06d}".rstrip("0")
    offset = value.utcoffset()
    if not offset:
        return text + "Z"
    total = int(offset.total_seconds())
    sign = "-" if total < 0 else "+"
    hours, rest = divmod(abs(total), 3600)
    return f"{text}{sign}{hours:02d}:{rest // 60:02d}"


def _load(data: Union[str, bytes]) -> Mapping[str, Any]:
    try:
        obj = json.loads(data)
    except ValueError as err:
        raise ValueError(f"invalid alert record: {err}") from err
    if not isinstance(obj, dict):
        raise ValueError("invalid alert record: not a JSON object")
    return obj


def _timestamp(obj: Mapping[str, Any]) -> datetime:
    return parse_datetime(obj.get("timestamp")) or ZERO_TIME


@dataclass(frozen=True)
class OoqLastAlert:
    """The last out-of-quota alert and the usage seen at the last check."""

    timestamp: datetime = field(default=ZERO_TIME)
    usage_percent: int = 0
    usage_percent_last_check: int = 0

    @classmethod
    def from_json(cls, data: Union[str, bytes]) -> "OoqLastAlert":
        obj = _load(data)
        return cls(
            timestamp=_timestamp(obj),
            usage_percent=int(obj.get("usagePercent") or 0),
            usage_percent_last_check=int(obj.get("usagePercentLastCheck") or 0),
        )

    def to_json(self) -> str:
        return json.dumps(
            {
                "timestamp": _format_timestamp(self.timestamp),
                "usagePercent": self.usage_percent,
                "usagePercentLastCheck": self.usage_percent_last_check,
            },
            separators=(",", ":"),
        )


@dataclass(frozen=True)
class OotLastAlert:
    """The last alert about a project running out of time."""

    timestamp: datetime = field(default=ZERO_TIME)

    @classmethod
    def from_json(cls, data: Union[str, bytes]) -> "OotLastAlert":
        return cls(timestamp=_timestamp(_load(data)))

    def to_json(self) -> str:
        return json.dumps(
            {"timestamp": _format_timestamp(self.timestamp)},
            separators=(",", ":"),
        )