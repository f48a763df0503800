"""Coffee catalog entities and their HTTP representations."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Mapping, Sequence

_INT_MIN = -(2**63)
_INT_MAX = 2**63 - 1


def _coerce(key: str, value: Any, kind: type) -> Any:
    if kind is str and isinstance(value, str):
        return value
    if isinstance(value, bool):
        raise ValueError(f"field {key!r} must be of type {kind.__name__}")
    if kind is int and isinstance(value, int) and _INT_MIN <= value <= _INT_MAX:
        return value
    if kind is float and isinstance(value, (int, float)):
        try:
            return float(value)
        except OverflowError as error:
            raise ValueError(f"field {key!r} is out of range") from error
    raise ValueError(f"field {key!r} must be of type {kind.__name__}")


def _payload_fields(payload: Any, spec: Mapping[str, tuple[str, type]]) -> dict[str, Any]:
    """Pick the known fields of a decoded JSON object.

    ``spec`` maps JSON names to (attribute, type). Keys match without regard
    to case, unknown keys and null values are ignored, and a value of the
    wrong type raises ValueError.
    """
    if payload is None:
        return {}
    if not isinstance(payload, Mapping):
        raise ValueError("request body must be a JSON object")
    lookup = {json_name.lower(): entry for json_name, entry in spec.items()}
    values: dict[str, Any] = {}
    for key, value in payload.items():
        entry = lookup.get(str(key).lower())
        if entry is None or value is None:
            continue
        attribute, kind = entry
        values[attribute] = _coerce(str(key), value, kind)
    return values


@dataclass
class Coffee:
    """A coffee bean or product in the catalog."""

    id: str
    name: str
    brand: str
    type: str
    flavor_notes: str
    created_at: datetime


@dataclass(frozen=True)
class CoffeeListFilter:
    """Optional filters for listing coffees."""

    search: str = ""
    type: str = ""
    page: int = 0
    limit: int = 0


@dataclass(frozen=True)
class CreateCoffeeRequest:
    """Validated input for creating a coffee."""

    name: str = ""
    brand: str = ""
    type: str = ""
    flavor_notes: str = ""


@dataclass(frozen=True)
class ListCoffeesRequest:
    """Validated query parameters for listing coffees."""

    search: str = ""
    type: str = ""
    page: int = 0
    limit: int = 0


_CREATE_COFFEE_FIELDS = {
    "name": ("name", str),
    "brand": ("brand", str),
    "type": ("type", str),
    "flavor_notes": ("flavor_notes", str),
}


@dataclass(frozen=True)
class CreateCoffee:
    """Body of POST /api/coffees."""

    name: str = ""
    brand: str = ""
    type: str = ""
    flavor_notes: str = ""

    @classmethod
    def from_payload(cls, payload: Any) -> CreateCoffee:
        """Build from a decoded JSON value; raise ValueError on a wrong shape."""
        return cls(**_payload_fields(payload, _CREATE_COFFEE_FIELDS))


@dataclass(frozen=True)
class CoffeeResponse:
    """Representation of a single coffee."""

    id: str
    name: str
    brand: str
    type: str
    flavor_notes: str
    created_at: datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "brand": self.brand,
            "type": self.type,
            "flavor_notes": self.flavor_notes,
            "created_at": self.created_at,
        }


@dataclass(frozen=True)
class CoffeeListItem:
    """Summarized coffee for list responses."""

    id: str
    name: str
    brand: str
    type: str

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "brand": self.brand, "type": self.type}


@dataclass(frozen=True)
class CoffeeListEnvelope:
    """A page of coffees with the total count."""

    items: Sequence[CoffeeListItem] = field(default_factory=tuple)
    total: int = 0
    page: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "items": [item.to_dict() for item in self.items],
            "total": self.total,
            "page": self.page,
        }