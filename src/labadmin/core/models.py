"""
Data models for lab administration.

Defines the Lab record, the create/edit form, and the dialog mode variant.
"""

import re
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping, Optional, Union

DEFAULT_CAPACITY = 30

# Fields a client may write; id and timestamps belong to the store
WRITABLE_FIELDS = (
    "name",
    "building",
    "capacity",
    "has_projector",
    "has_ac",
    "is_available",
)

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_capacity(value: Any) -> int:
    """
    Parse a capacity input the way a numeric form field submits it.

    Takes the leading integer of the text. Missing, non-numeric and zero
    values fall back to DEFAULT_CAPACITY.

    Args:
        value: Raw form value (string, int, or None)

    Returns:
        Parsed capacity
    """
    if value is None or isinstance(value, bool):
        return DEFAULT_CAPACITY

    match = _LEADING_INT.match(str(value))
    if not match:
        return DEFAULT_CAPACITY

    return int(match.group(1)) or DEFAULT_CAPACITY


def is_checked(value: Any) -> bool:
    """Return True if a checkbox/switch value is in the "on" state."""
    return value is True or value == "on"


def parse_flag(value: Any) -> bool:
    """Return True for JSON true or the string "true" in any case."""
    return value is True or (isinstance(value, str) and value.lower() == "true")


@dataclass
class Lab:
    """Lab room record, owned by the store."""

    id: str = ""
    name: str = ""
    building: str = ""
    capacity: int = DEFAULT_CAPACITY
    has_projector: bool = True
    has_ac: bool = True
    is_available: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Lab":
        """Create Lab from a store row or JSON object."""
        available = data.get("is_available")
        return cls(
            id=str(data["id"]),
            name=data["name"],
            building=data["building"],
            capacity=data.get("capacity") or DEFAULT_CAPACITY,
            has_projector=bool(data.get("has_projector")),
            has_ac=bool(data.get("has_ac")),
            is_available=True if available is None else bool(available),
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert Lab to a JSON-serializable dict."""
        return {
            "id": self.id,
            "name": self.name,
            "building": self.building,
            "capacity": self.capacity,
            "has_projector": self.has_projector,
            "has_ac": self.has_ac,
            "is_available": self.is_available,
        }

    @property
    def facilities(self) -> list[str]:
        """Facility badge labels."""
        badges = []
        if self.has_projector:
            badges.append("Projector")
        if self.has_ac:
            badges.append("AC")
        return badges

    @property
    def status_label(self) -> str:
        return "Available" if self.is_available else "In Use"


@dataclass
class LabForm:
    """Values submitted from the create/edit dialog."""

    name: str = ""
    building: str = ""
    capacity: int = DEFAULT_CAPACITY
    has_projector: bool = True
    has_ac: bool = True

    @classmethod
    def from_form(cls, form: Mapping[str, Any]) -> "LabForm":
        """
        Build a LabForm from submitted form values.

        Switches are only true when their control was "on"; an unchecked
        switch is absent from the submission.

        Args:
            form: Mapping of field name to raw submitted value

        Returns:
            Parsed LabForm
        """
        return cls(
            name=str(form.get("name") or "").strip(),
            building=str(form.get("building") or "").strip(),
            capacity=parse_capacity(form.get("capacity")),
            has_projector=is_checked(form.get("has_projector")),
            has_ac=is_checked(form.get("has_ac")),
        )

    @classmethod
    def from_lab(cls, lab: Lab) -> "LabForm":
        """Form pre-populated with an existing lab's values."""
        return cls(
            name=lab.name,
            building=lab.building,
            capacity=lab.capacity or DEFAULT_CAPACITY,
            has_projector=lab.has_projector,
            has_ac=lab.has_ac,
        )

    def to_record(self) -> dict[str, Any]:
        """Field values to send to the store."""
        return {
            "name": self.name,
            "building": self.building,
            "capacity": self.capacity,
            "has_projector": self.has_projector,
            "has_ac": self.has_ac,
        }


@dataclass(frozen=True)
class CreateMode:
    """Dialog adds a new lab."""


@dataclass(frozen=True)
class EditMode:
    """Dialog edits an existing lab."""

    lab: Lab


Mode = Union[CreateMode, EditMode]
