"""API-side representation of a todo item and its JSON binding."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any


class ValidationError(ValueError):
    """Raised when a request body cannot be bound to a todo."""


def _bind_string(data: Mapping[str, Any], field: str) -> str:
    value = data.get(field)
    if value is None:
        value = ""
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be a string")
    if not value:
        raise ValidationError(f"{field} is required")
    return value


def _bind_id(data: Mapping[str, Any]) -> int:
    value = data.get("id")
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError("id must be an integer")
    if not -(2**63) <= value < 2**63:
        raise ValidationError("id is out of range")
    return value


@dataclass
class Todo:
    """A todo as exchanged with API clients."""

    id: int = 0
    name: str = ""
    description: str = ""

    @classmethod
    def from_json(cls, data: str | bytes | bytearray | Mapping[str, Any]) -> "Todo":
        """Bind a JSON document (raw text or already decoded) to a todo.

        ``name`` and ``description`` are required and must be non-empty;
        ``id`` defaults to 0. Unknown keys are ignored.
        """
        if isinstance(data, (str, bytes, bytearray)):
            try:
                data = json.loads(data)
            except ValueError as exc:
                raise ValidationError(f"invalid JSON: {exc}") from exc
        if not isinstance(data, Mapping):
            raise ValidationError("expected a JSON object")
        return cls(
            id=_bind_id(data),
            name=_bind_string(data, "name"),
            description=_bind_string(data, "description"),
        )

    def to_json(self) -> dict[str, Any]:
        """Return the todo as a JSON-ready dictionary."""
        return {"id": self.id, "name": self.name, "description": self.description}