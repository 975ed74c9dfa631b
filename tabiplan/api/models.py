"""Shared data structures for itinerary re-planning.

The store, the import parser and the prompt builder all exchange these
objects, so they live apart from any of them to keep imports one-way.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from tabiplan.api.errors import ValidationError


@dataclass
class ItineraryItem:
    """A single timed activity on the day's plan."""

    id: str  # opaque, stable for the item's lifetime
    time: str  # "HH:MM", zero padded
    activity: str
    url: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "time": self.time,
            "activity": self.activity,
            "url": self.url,
        }


class SuggestionMode(str, Enum):
    """What kind of answer the user wants back."""

    SCHEDULE = "schedule"  # one alternative plan
    SPOTS = "spots"  # up to five replacement spots

    @classmethod
    def parse(cls, value) -> "SuggestionMode":
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise ValidationError(
                "invalid-mode",
                f"Unknown suggestion mode: {value!r}",
            ) from None


@dataclass(frozen=True)
class SuggestionRequest:
    """Everything needed for one call to the text-generation service."""

    itinerary: Tuple[ItineraryItem, ...]
    itinerary_text: str
    problem: str
    constraints: str
    mode: SuggestionMode

    def to_dict(self) -> dict:
        return {
            "itinerary": [item.to_dict() for item in self.itinerary],
            "itinerary_text": self.itinerary_text,
            "problem": self.problem,
            "constraints": self.constraints,
            "mode": self.mode.value,
        }
