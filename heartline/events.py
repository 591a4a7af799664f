"""
Event transforms
================

Small pure functions used by the timeline and the CLI:

- score -> colour token / display string
- chronological sort (returns a new list, never mutates)
- event construction for the create and edit flows
- shape/range validation of imported JSON
- export helpers (pretty JSON text, default export filename)
- id factories (clock-based by default, counter for tests)

Nothing in here performs I/O.
"""

from __future__ import annotations
from datetime import date as _date
from numbers import Real
from typing import Any, Callable, List, Mapping, Optional, Sequence, Tuple, Union
import itertools
import json
import time

from .models import (
    SCORE_MAX,
    SCORE_MIN,
    EventDraft,
    TimelineEvent,
    derive_display_date,
)

REQUIRED_FIELDS = ("id", "description", "score", "date")

# Colour tokens and the hex values the chart/list use for them.
SCORE_COLORS = {
    "strong-positive": "#10b981",
    "mild-positive": "#84cc16",
    "neutral": "#6b7280",
    "mild-negative": "#f59e0b",
    "strong-negative": "#ef4444",
}

EventLike = Union[TimelineEvent, Mapping[str, Any]]
IdFactory = Callable[[], int]


def score_color(score: int) -> str:
    if score > 4:
        return "strong-positive"
    if score > 0:
        return "mild-positive"
    if score == 0:
        return "neutral"
    if score > -4:
        return "mild-negative"
    return "strong-negative"


def score_hex(score: int) -> str:
    return SCORE_COLORS[score_color(score)]


def format_score(score: int) -> str:
    return f"+{score}" if score > 0 else str(score)


# -----------------------------
# Sorting
# -----------------------------

def _date_of(event: EventLike) -> Any:
    if isinstance(event, TimelineEvent):
        return event.date
    return event["date"]


def parse_day(value: str) -> _date:
    """Parse `YYYY-MM-DD` (or `YYYY-MM`, pinned to the 1st) into a date.

    Longer ISO timestamps are truncated to their day part.
    """
    s = str(value).strip()
    if len(s) == 7:
        s += "-01"
    return _date.fromisoformat(s[:10])


def date_sort_key(event: EventLike) -> Tuple[int, int, str]:
    """Chronological key. Unparseable dates sort after every valid one."""
    raw = _date_of(event)
    try:
        return (0, parse_day(raw).toordinal(), "")
    except (TypeError, ValueError):
        return (1, 0, str(raw))


def sort_by_date(events: Sequence[EventLike]) -> List[EventLike]:
    """Return a new list in ascending date order.

    The sort is stable: events sharing a date keep their prior relative order.
    """
    return sorted(events, key=date_sort_key)


# -----------------------------
# Construction (create vs edit)
# -----------------------------

class ClockIdFactory:
    """Millisecond-clock ids, strictly increasing even within one millisecond."""

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock
        self._last = 0

    def __call__(self) -> int:
        candidate = int(self._clock() * 1000)
        if candidate <= self._last:
            candidate = self._last + 1
        self._last = candidate
        return candidate


class CounterIdFactory:
    """Deterministic ids: start, start+1, ..."""

    def __init__(self, start: int = 1) -> None:
        self._it = itertools.count(start)

    def __call__(self) -> int:
        return next(self._it)


_default_ids = ClockIdFactory()


def build_event(
    draft: EventDraft,
    editing_index: Optional[int],
    existing: Sequence[EventLike],
    id_factory: Optional[IdFactory] = None,
) -> TimelineEvent:
    """Build the record to store for a submitted draft.

    `editing_index=None` means create: a fresh id is minted. Otherwise the id of
    `existing[editing_index]` is kept. The display date is always re-derived.
    Raises IndexError when `editing_index` does not point into `existing`.
    """
    if editing_index is None:
        new_id = (id_factory or _default_ids)()
    else:
        if not 0 <= editing_index < len(existing):
            raise IndexError(
                f"editing index {editing_index} out of range for {len(existing)} events"
            )
        target = existing[editing_index]
        new_id = target.id if isinstance(target, TimelineEvent) else target["id"]

    return TimelineEvent(
        id=new_id,
        description=draft.description,
        score=draft.score,
        date=draft.date,
        month_only=draft.month_only,
        display_date=derive_display_date(draft.date, draft.month_only),
    )


# -----------------------------
# Import validation
# -----------------------------

def _is_number(x: Any) -> bool:
    return isinstance(x, Real) and not isinstance(x, bool)


def validate_import_payload(payload: Any) -> bool:
    """True only for a list of objects carrying id/description/score/date
    with a numeric score in [-8, 8]."""
    if not isinstance(payload, list):
        return False
    for item in payload:
        if not isinstance(item, Mapping):
            return False
        if any(k not in item for k in REQUIRED_FIELDS):
            return False
        score = item["score"]
        if not _is_number(score) or not (SCORE_MIN <= score <= SCORE_MAX):
            return False
    return True


# -----------------------------
# Export helpers
# -----------------------------

def _as_dict(event: EventLike) -> Any:
    return event.to_dict() if isinstance(event, TimelineEvent) else dict(event)


def events_to_json(events: Sequence[EventLike]) -> str:
    """Pretty JSON (2-space indent) of the whole collection."""
    return json.dumps([_as_dict(e) for e in events], ensure_ascii=False, indent=2)


def export_filename(today: Optional[_date] = None) -> str:
    today = today or _date.today()
    return f"relationship-timeline-{today.isoformat()}.json"
