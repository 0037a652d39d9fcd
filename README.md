# projectdb

Typed records for the data a project database returns over GraphQL
(projects, users, storage quota, labs and booking events). The package also
holds the rules that decide when to send alerts about project storage
running out of quota (ooq) and about projects running out of time (oot).
It uses only the standard library.

## Installation

```
pip install .
```

To install with the test dependencies:

```
pip install ".[test]"
```

## Records

`projectdb.models` holds frozen dataclasses. Each is built from the
camelCase dictionaries of a GraphQL response with `from_dict`:

- `User`: `username`, `first_name`, `middle_name`, `last_name`, `email`,
  `status` (`UserStatus`) and `function` (`UserFunction`). It also has
  `to_dict`.
- `Project`: `number`, `title`, `kind` (`ProjectKind`), `owner`
  (`ProjectOwner`), `status` (`ProjectStatus`), and `start` and `end` as
  aware datetimes. It also has `to_dict`.
- `ProjectQuota`: `overruling_quota_gib`, `quota_gib` and `usage_mib`.

If a field is missing, a string field becomes `""`, a number becomes `0`,
and an enum or a timestamp becomes `None`.

`parse_datetime` reads an RFC 3339 timestamp, and raises `ValueError` if
the timestamp is malformed. `format_datetime` writes one. Trailing zeros of
the fraction are trimmed, a zero offset is written as `Z`, and a naive
datetime is taken to be UTC.

```python
from projectdb.models import Project, ProjectStatus

project = Project.from_dict({
    "number": "3010000.01",
    "title": "Example study",
    "kind": "Research",
    "owner": {"username": "alice", "displayName": "Alice", "email": "alice@example.com"},
    "status": "Active",
    "start": "2024-01-01T00:00:00Z",
    "end": "2025-01-01T00:00:00Z",
})
assert project.status is ProjectStatus.ACTIVE
```

`projectdb.bookings` describes labs and booking events: `Modality`, `Lab`,
`GroupMember`, `BookingProject`, `Booking` and `BookingEvent`. A booking
event's resource is either a `LabResource` or a `RoomResource`.
`parse_resource` picks between the two by `__typename`. It raises
`ValueError` when the type name is missing or unknown. `resource_to_dict`
gives the GraphQL form back. `BookingEvent.from_dict` and
`BookingEvent.to_dict` convert a whole event in either direction.

## Alert rules

`projectdb.ooq` decides whether an out-of-quota alert is due.

`usage_ratio(quota_gb, usage_mb)` gives the usage in whole percent. With a
zero quota it gives 100 if anything is stored and 0 if nothing is.

`ooq_alert_frequency(usage)` gives the shortest time allowed between two
alerts:

- below 90%: never (a zero `timedelta`)
- from 90% up to 95%: 14 days
- from 95% up to 99%: 7 days
- from 99%: 2 days

`check_ooq_alert(last_alert, quota_gb, usage_mb, now)` returns the new
`OoqLastAlert` to store once the alert has been sent. It raises
`AlertIgnored` in three cases: the usage is below the threshold, the usage
has dropped below the usage seen at the last alert or check, or the waiting
time has not yet passed. The exception's `last_alert` attribute holds the
previous record, updated with the usage seen at this check, so the caller
can still store it.

```python
from datetime import datetime, timezone

from projectdb.alert_records import AlertIgnored, OoqLastAlert
from projectdb.ooq import check_ooq_alert

now = datetime(2024, 3, 1, tzinfo=timezone.utc)
try:
    record = check_ooq_alert(OoqLastAlert(), quota_gb=100, usage_mb=96 * 1024, now=now)
except AlertIgnored as exc:
    record = exc.last_alert
stored = record.to_json()
```

`projectdb.oot` handles alerts about projects running out of time.
`oot_alert_dates(now)` maps each mode to the project end date, written as
`YYYY-MM-DD`, that the mode looks for:

| mode  | project end date     |
|-------|----------------------|
| `p4w` | 28 days from now     |
| `p2w` | 14 days from now     |
| `p1w` | 7 days from now      |
| `now` | today                |
| `g2m` | 60 days ago (grace)  |

`matches_alert_mode(end, mode, now)` tells whether a project with the given
end date is alerted in that mode today. `expiry_offset(mode)` gives the
days and months until expiry that an alert message reports, as an
`ExpiryOffset`. It raises `AlertIgnored` for an unknown mode.
`check_oot_alert(last_alert, now)` allows an alert only when more than
three days have passed since the last one. Otherwise it raises
`AlertIgnored`.

## Alert history records

`projectdb.alert_records` defines `OoqLastAlert` (`timestamp`,
`usage_percent`, `usage_percent_last_check`) and `OotLastAlert`
(`timestamp`). Both convert to and from compact JSON with `to_json` and
`from_json`. A missing timestamp reads as `ZERO_TIME`, which means that no
alert has been sent yet. `from_json` raises `ValueError` for anything that
is not a JSON object.

## What this package does not do

- It does not connect to the project database. There is no GraphQL client,
  no OAuth2 token handling and no query functions. The records are built
  from response data that you fetch yourself.
- It does not send e-mail and does not keep an alert history store. It
  decides whether an alert is due and produces the records to keep. Sending
  the alert and storing the records are left to the caller.
- It has no command-line tool.