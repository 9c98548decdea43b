"""Student records and their public response shape."""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

_ZERO_TIME = "0001-01-01T00:00:00Z"

_TIME_RE = re.compile(
    r"^(\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2})(?:\.(\d+))?(Z|[+-]\d{2}:\d{2})$"
)


def _format_time(value: datetime | None) -> str:
    """Format a timestamp as RFC 3339 with trailing fractional zeros trimmed."""
    if value is None:
        return _ZERO_TIME
    text = (
        f"{value.year:04d}-{value.month:02d}-{value.day:02d}"
        f"T{value.hour:02d}:{value.minute:02d}:{value.second:02d}"
    )
    fraction = f"{value.microsecond:06d}".rstrip("0")
    if fraction:
        text += "." + fraction
    offset = value.utcoffset()
    if not offset:
        return text + "Z"
    sign = "-" if offset < timedelta(0) else "+"
    minutes = abs(int(offset.total_seconds())) // 60
    return f"{text}{sign}{minutes // 60:02d}:{minutes % 60:02d}"


def _parse_time(text: str) -> datetime:
    """Parse an RFC 3339 timestamp; digits beyond microseconds are dropped."""
    match = _TIME_RE.match(text)
    if match is None:
        raise ValueError(f"invalid timestamp {text!r}")
    base = datetime.fromisoformat(match[1])
    micro = int((match[2] or "0")[:6].ljust(6, "0"))
    zone = match[3]
    if zone == "Z":
        tz = timezone.utc
    else:
        sign = -1 if zone[0] == "-" else 1
        hours, minutes = int(zone[1:3]), int(zone[4:6])
        tz = timezone(sign * timedelta(hours=hours, minutes=minutes))
    return base.replace(microsecond=micro, tzinfo=tz)


def _lookup(data: Mapping[str, Any], key: str) -> Any:
    """Find a key exactly, or else case-insensitively, as JSON binding does."""
    if key in data:
        return data[key]
    lowered = key.lower()
    for name, value in data.items():
        if isinstance(name, str) and name.lower() == lowered:
            return value
    return None


def _coerce(key: str, value: Any, kind: type) -> Any:
    if kind is datetime:
        if not isinstance(value, str):
            raise TypeError(f"field {key!r} must be a timestamp string")
        return _parse_time(value)
    if kind is int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"field {key!r} must be an integer")
        return value
    if not isinstance(value, kind):
        raise TypeError(f"field {key!r} must be of type {kind.__name__}")
    return value


_STUDENT_FIELDS = (
    ("ID", "id", int),
    ("CreatedAt", "created_at", datetime),
    ("UpdatedAt", "updated_at", datetime),
    ("DeletedAt", "deleted_at", datetime),
    ("name", "name", str),
    ("cpf", "cpf", str),
    ("email", "email", str),
    ("age", "age", int),
    ("registration", "active", bool),
)


@dataclass
class Student:
    """A stored student; an id of 0 means not yet saved."""

    id: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None
    deleted_at: datetime | None = None
    name: str = ""
    cpf: str = ""
    email: str = ""
    age: int = 0
    active: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Student:
        """Bind a decoded JSON object; missing or null fields keep defaults.

        Raises TypeError for values of the wrong kind and ValueError for
        malformed timestamps or a negative id.
        """
        if not isinstance(data, Mapping):
            raise TypeError("student must be a JSON object")
        values: dict[str, Any] = {}
        for key, attr, kind in _STUDENT_FIELDS:
            raw = _lookup(data, key)
            if raw is not None:
                values[attr] = _coerce(key, raw, kind)
        if values.get("id", 0) < 0:
            raise ValueError("field 'ID' must not be negative")
        return cls(**values)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON shape of the stored record."""
        return {
            "ID": self.id,
            "CreatedAt": _format_time(self.created_at),
            "UpdatedAt": _format_time(self.updated_at),
            "DeletedAt": None if self.deleted_at is None else _format_time(self.deleted_at),
            "name": self.name,
            "cpf": self.cpf,
            "email": self.email,
            "age": self.age,
            "registration": self.active,
        }


@dataclass
class StudentResponse:
    """The public view of a student returned by listings."""

    id: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None
    deleted_at: datetime | None = None
    name: str = ""
    cpf: str = ""
    email: str = ""
    age: int = 0
    active: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON shape of the response."""
        return {
            "id": self.id,
            "createdAt": _format_time(self.created_at),
            "updateAt": _format_time(self.updated_at),
            "deletedAt": _format_time(self.deleted_at),
            "name": self.name,
            "cpf": self.cpf,
            "email": self.email,
            "age": self.age,
            "registration": self.active,
        }


def new_response(students: Iterable[Student]) -> list[StudentResponse]:
    """Convert stored students to responses; the deletion time is not carried over."""
    return [
        StudentResponse(
            id=student.id,
            created_at=student.created_at,
            updated_at=student.updated_at,
            name=student.name,
            email=student.email,
            age=student.age,
            cpf=student.cpf,
            active=student.active,
        )
        for student in students
    ]