"""
Timeline controller
===================

This is the heart of the project. The timeline works like a tiny offline
journal:

1) Open the store -> list of TimelineEvent records (kept sorted by date)
2) Hold a *draft* (the add/edit form) and an optional editing index
3) Submit / delete / import update the list, re-sort it, and save it in full
4) Export, copy and chart operations read the current list

All mutations happen one command at a time, so there is no locking.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import date as _date
from pathlib import Path
from typing import Callable, List, Optional, Tuple
import json
import logging
import os
import time

from .events import (
    ClockIdFactory,
    IdFactory,
    build_event,
    events_to_json,
    export_filename,
    sort_by_date,
    validate_import_payload,
)
from .models import EventDraft, TimelineEvent
from .store import EventStore

log = logging.getLogger(__name__)

LANGUAGES = ("en", "hu")
LINE_STYLES = ("monotone", "linear")
COPIED_FLASH_SECONDS = 2.0

TABLE_COLUMNS = ["id", "date", "displayDate", "monthOnly", "score", "description"]


class ImportRejected(ValueError):
    """The imported text was not JSON or did not have the expected shape."""


@dataclass
class Timeline:
    """The in-memory collection plus the add/edit form state.

    `store` is saved after every mutation with the full collection.
    """
    store: EventStore
    events: List[TimelineEvent] = field(default_factory=list)
    id_factory: IdFactory = field(default_factory=ClockIdFactory)
    language: str = "en"
    line_style: str = "monotone"
    draft: EventDraft = field(default_factory=EventDraft)
    editing_index: Optional[int] = None
    clock: Callable[[], float] = time.monotonic
    _copied_at: Optional[float] = field(default=None, init=False)

    @classmethod
    def open(cls, store: EventStore, **kwargs) -> "Timeline":
        """Load events and language preference from `store`."""
        saved = store.load()
        tl = cls(store=store, events=list(saved or []), **kwargs)
        lang = store.load_language()
        if lang in LANGUAGES:
            tl.language = lang
        return tl

    def _persist(self) -> None:
        self.store.save(self.events)

    # ---------------- Add / edit / delete ----------------
    @property
    def editing(self) -> bool:
        return self.editing_index is not None

    def submit(self, draft: Optional[EventDraft] = None) -> TimelineEvent:
        """Create (or, in edit mode, replace) an event from the draft."""
        draft = draft or self.draft
        event = build_event(draft, self.editing_index, self.events, self.id_factory)
        updated = list(self.events)
        if self.editing_index is not None:
            updated[self.editing_index] = event
            log.info("updated event id=%s", event.id)
        else:
            updated.append(event)
            log.info("added event id=%s", event.id)
        self.events = sort_by_date(updated)
        self._persist()
        self.cancel_edit()
        return event

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self.events):
            raise IndexError(f"event index {index} out of range for {len(self.events)} events")

    def begin_edit(self, index: int) -> EventDraft:
        self._check_index(index)
        event = self.events[index]
        self.draft = EventDraft.from_event(event)
        self.editing_index = index
        return self.draft

    def cancel_edit(self) -> None:
        self.draft = EventDraft()
        self.editing_index = None

    def delete(self, index: int) -> TimelineEvent:
        self._check_index(index)
        removed = self.events[index]
        self.events = [e for i, e in enumerate(self.events) if i != index]
        if self.editing_index is not None:
            # the edited row's position shifts or vanishes
            self.cancel_edit()
        self._persist()
        log.info("deleted event id=%s", removed.id)
        return removed

    # ---------------- Import ----------------
    def import_text(self, text: str) -> int:
        """Replace the collection with the events in `text`.

        On bad JSON or a failed shape check, raises ImportRejected and leaves
        the current collection untouched.
        """
        try:
            payload = json.loads(text)
        except json.JSONDecodeError as e:
            raise ImportRejected(f"not valid JSON: {e}") from e
        if not validate_import_payload(payload):
            raise ImportRejected("expected a list of events with id, description, score (-8..8) and date")
        imported = [TimelineEvent.from_dict(item) for item in payload]
        self.events = sort_by_date(imported)
        self.cancel_edit()
        self._persist()
        log.info("imported %d events", len(self.events))
        return len(self.events)

    def import_file(self, path: os.PathLike) -> int:
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()
        return self.import_text(text)

    # ---------------- Export / copy ----------------
    def json_text(self) -> str:
        return events_to_json(self.events)

    def export_json(self, target: os.PathLike = ".", today: Optional[_date] = None) -> Path:
        """Write the pretty JSON. A directory target gets the dated default filename."""
        p = Path(target)
        if p.is_dir():
            p = p / export_filename(today)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(self.json_text() + "\n", encoding="utf-8")
        return p

    def _frame(self):
        import pandas as pd
        return pd.DataFrame([e.to_dict() for e in self.events], columns=TABLE_COLUMNS)

    def export_csv(self, path: os.PathLike) -> Path:
        p = Path(path)
        self._frame().to_csv(p, index=False, encoding="utf-8")
        return p

    def export_xlsx(self, path: os.PathLike) -> Path:
        p = Path(path)
        self._frame().to_excel(p, index=False, engine="openpyxl")
        return p

    def copy_json(self, clipboard: Callable[[str], None]) -> str:
        text = self.json_text()
        clipboard(text)
        self._copied_at = self.clock()
        return text

    @property
    def copied(self) -> bool:
        """True for a short moment after copy_json()."""
        if self._copied_at is None:
            return False
        return self.clock() - self._copied_at < COPIED_FLASH_SECONDS

    # ---------------- Preferences / chart ----------------
    def toggle_language(self) -> str:
        self.language = "hu" if self.language == "en" else "en"
        self.store.save_language(self.language)
        return self.language

    def toggle_line_style(self) -> str:
        self.line_style = "linear" if self.line_style == "monotone" else "monotone"
        return self.line_style

    def chart_points(self) -> List[Tuple[str, int, str]]:
        return [(e.display_date, e.score, e.description) for e in self.events]
