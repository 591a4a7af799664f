"""
Data model (TimelineEvent)
==========================

Every logged moment is one `TimelineEvent`. We keep it immutable
(`frozen=True`) so that:
- an edit always produces a *new* record (with a recomputed display date), and
- the list held by the timeline can be re-sorted without aliasing surprises.

The JSON shape (camelCase keys) is what gets persisted and exported, so files
stay interchangeable with the browser version of the timeline.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import date as _date
from typing import Any, Dict, Mapping

SCORE_MIN = -8
SCORE_MAX = 8


def today_iso() -> str:
    return _date.today().isoformat()


def derive_display_date(date: str, month_only: bool) -> str:
    """Return the render-ready date: `YYYY-MM` for month-only events, else the full date."""
    return date[:7] if month_only else date


@dataclass(frozen=True)
class TimelineEvent:
    """One logged relationship event."""
    id: int
    description: str
    score: int
    date: str
    month_only: bool = False
    display_date: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "description": self.description,
            "score": self.score,
            "date": self.date,
            "monthOnly": self.month_only,
            "displayDate": self.display_date,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TimelineEvent":
        """Decode one JSON object.

        Imported values are kept as parsed. Files may lack `monthOnly`/`displayDate`;
        the flag defaults to False and the display date is derived when missing.
        """
        date = str(data["date"])
        month_only = data.get("monthOnly", False)
        display = data.get("displayDate") or derive_display_date(date, month_only)
        return cls(
            id=data["id"],
            description=data["description"],
            score=data["score"],
            date=date,
            month_only=month_only,
            display_date=str(display),
        )


@dataclass
class EventDraft:
    """Mutable form state for the add/edit flow."""
    description: str = ""
    score: int = 0
    date: str = field(default_factory=today_iso)
    month_only: bool = False

    @classmethod
    def from_event(cls, event: TimelineEvent) -> "EventDraft":
        return cls(
            description=event.description or "",
            score=event.score,
            date=event.date,
            month_only=event.month_only,
        )
