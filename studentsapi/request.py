"""The body accepted when a student is created."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any


class ValidationError(ValueError):
    """A required request field is missing or not usable."""


def _required(param: str, kind: str) -> ValidationError:
    return ValidationError(f"param '{param}' of type '{kind}' is required")


def _lookup(data: Mapping[str, Any], key: str) -> Any:
    if key in data:
        return data[key]
    for name, value in data.items():
        if isinstance(name, str) and name.lower() == key:
            return value
    return None


@dataclass
class StudentRequest:
    """Fields of a new student; ``active`` stays None unless given explicitly."""

    name: str = ""
    cpf: str = ""
    email: str = ""
    age: int = 0
    active: bool | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> StudentRequest:
        """Bind a decoded JSON object, raising TypeError on values of the wrong kind."""
        if not isinstance(data, Mapping):
            raise TypeError("request body must be a JSON object")
        values: dict[str, Any] = {}
        for key in ("name", "cpf", "email"):
            raw = _lookup(data, key)
            if raw is not None:
                if not isinstance(raw, str):
                    raise TypeError(f"field {key!r} must be a string")
                values[key] = raw
        age = _lookup(data, "age")
        if age is not None:
            if isinstance(age, bool) or not isinstance(age, int):
                raise TypeError("field 'age' must be an integer")
            values["age"] = age
        active = _lookup(data, "active")
        if active is not None:
            if not isinstance(active, bool):
                raise TypeError("field 'active' must be a boolean")
            values["active"] = active
        return cls(**values)

    def validate(self) -> None:
        """Raise ValidationError naming the first field that is missing."""
        if not self.name:
            raise _required("name", "string")
        if not self.email:
            raise _required("email", "string")
        if not self.cpf:
            raise _required("cpf", "string")
        if self.age <= 0:
            raise _required("age", "int")
        if self.active is None:
            raise _required("active", "bool")