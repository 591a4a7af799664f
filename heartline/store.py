"""
Local store (key-value slots on disk)
=====================================

The timeline persists into a small directory that behaves like a key-value
store: each key is one JSON file.

- `relationshipEvents.json` holds the full event collection (list of objects)
- `appLanguage.json` holds the UI language ("en" / "hu")

The store does no validation. It reads and writes whole values only; every
save rewrites the full collection.
"""

from __future__ import annotations
from pathlib import Path
from typing import Any, List, Optional, Sequence
import json
import logging
import os
import tempfile

from .models import TimelineEvent

log = logging.getLogger(__name__)

EVENTS_KEY = "relationshipEvents"
LANGUAGE_KEY = "appLanguage"
HOME_ENV = "HEARTLINE_HOME"


def default_root() -> Path:
    """Data directory: $HEARTLINE_HOME, else ~/.heartline."""
    env = os.environ.get(HOME_ENV)
    if env:
        return Path(env).expanduser()
    return Path.home() / ".heartline"


class EventStore:
    """File-backed slots. Load once on startup, save after each mutation."""

    def __init__(self, root: Optional[os.PathLike] = None) -> None:
        self.root = Path(root) if root is not None else default_root()

    def _path(self, key: str) -> Path:
        return self.root / f"{key}.json"

    def _read(self, key: str) -> Any:
        p = self._path(key)
        if not p.exists():
            log.debug("slot %s absent at %s", key, p)
            return None
        with open(p, "r", encoding="utf-8") as f:
            return json.load(f)

    def _write(self, key: str, value: Any) -> None:
        self.root.mkdir(parents=True, exist_ok=True)
        p = self._path(key)
        # write to a sibling temp file then replace, so a crash never leaves half a file
        fd, tmp = tempfile.mkstemp(prefix=f".{key}.", suffix=".tmp", dir=str(self.root))
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(value, f, ensure_ascii=False)
            os.replace(tmp, p)
        except BaseException:
            if os.path.exists(tmp):
                os.unlink(tmp)
            raise
        log.debug("saved slot %s", key)

    # ---------------- events ----------------
    def load(self) -> Optional[List[TimelineEvent]]:
        """Return the saved events, or None when nothing was saved yet."""
        raw = self._read(EVENTS_KEY)
        if raw is None:
            return None
        events = [TimelineEvent.from_dict(item) for item in raw]
        log.info("loaded %d events from %s", len(events), self.root)
        return events

    def save(self, events: Sequence[TimelineEvent]) -> None:
        self._write(EVENTS_KEY, [e.to_dict() for e in events])

    # ---------------- language ----------------
    def load_language(self) -> Optional[str]:
        value = self._read(LANGUAGE_KEY)
        return str(value) if value is not None else None

    def save_language(self, language: str) -> None:
        self._write(LANGUAGE_KEY, language)
