"""Records kept by the action service."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any


@dataclass
class ActionCategory:
    id: int = 0
    name: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"ID": self.id, "Name": self.name}


@dataclass
class DayAction:
    id: int = 0
    date: date = date.min
    category_id: int = 0
    hours: float = 0.0
    category: ActionCategory = field(default_factory=ActionCategory)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON shape sent to clients; the day is a UTC midnight timestamp."""
        return {
            "ID": self.id,
            "Date": f"{self.date.isoformat()}T00:00:00Z",
            "CategoryID": self.category_id,
            "Hours": self.hours,
            "Category": self.category.to_dict(),
        }