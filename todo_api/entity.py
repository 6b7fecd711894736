"""Storage-side representation of a todo item."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class TodoEntity:
    """A todo as it is stored in the database."""

    id: int = 0
    name: str = ""
    description: str = ""