"""
Tests for the Timeline controller and the file-backed store
"""

import json
from datetime import date

import pytest

from heartline.events import CounterIdFactory
from heartline.models import EventDraft, TimelineEvent
from heartline.store import EVENTS_KEY, HOME_ENV, EventStore, default_root
from heartline.timeline import COPIED_FLASH_SECONDS, ImportRejected, Timeline


class FakeClock:
    def __init__(self):
        self.now = 100.0

    def __call__(self):
        return self.now


@pytest.fixture
def store(tmp_path):
    return EventStore(tmp_path / "data")


@pytest.fixture
def timeline(store):
    return Timeline.open(store, id_factory=CounterIdFactory(start=1))


def _saved(store):
    with open(store.root / f"{EVENTS_KEY}.json", encoding="utf-8") as f:
        return json.load(f)


class TestStore:
    def test_absent_slots(self, store):
        assert store.load() is None
        assert store.load_language() is None

    def test_round_trip(self, store):
        e = TimelineEvent(id=5, description="x", score=-1, date="2024-02-01", month_only=True, display_date="2024-02")
        store.save([e])
        assert store.load() == [e]

    def test_language_slot(self, store):
        store.save_language("hu")
        assert store.load_language() == "hu"

    def test_default_root_from_env(self, monkeypatch, tmp_path):
        monkeypatch.setenv(HOME_ENV, str(tmp_path / "home"))
        assert default_root() == tmp_path / "home"

    def test_no_temp_files_left(self, store):
        store.save([])
        assert sorted(p.name for p in store.root.iterdir()) == [f"{EVENTS_KEY}.json"]


class TestSubmit:
    def test_add_keeps_order_and_persists(self, timeline, store):
        timeline.submit(EventDraft(description="Later", score=2, date="2024-05-01"))
        timeline.submit(EventDraft(description="Earlier", score=-2, date="2024-01-01"))

        assert [e.description for e in timeline.events] == ["Earlier", "Later"]
        assert [e["description"] for e in _saved(store)] == ["Earlier", "Later"]
        assert [e.id for e in timeline.events] == [2, 1]

    def test_submit_resets_draft(self, timeline):
        timeline.draft.description = "Walk"
        timeline.draft.score = 4
        timeline.submit()
        assert timeline.draft.description == ""
        assert timeline.draft.score == 0
        assert timeline.draft.date == date.today().isoformat()
        assert timeline.events[0].description == "Walk"

    def test_edit_replaces_and_resorts(self, timeline, store):
        timeline.submit(EventDraft(description="A", score=1, date="2024-01-01"))
        timeline.submit(EventDraft(description="B", score=2, date="2024-02-01"))

        draft = timeline.begin_edit(0)
        assert timeline.editing
        assert draft.description == "A"
        draft.description = "A moved"
        draft.date = "2024-03-01"
        timeline.submit()

        assert not timeline.editing
        assert [e.description for e in timeline.events] == ["B", "A moved"]
        assert timeline.events[1].id == 1
        assert len(_saved(store)) == 2

    def test_edit_recomputes_display_date(self, timeline):
        timeline.submit(EventDraft(description="A", score=1, date="2024-01-20"))
        timeline.begin_edit(0).month_only = True
        e = timeline.submit()
        assert e.display_date == "2024-01"

    def test_cancel_edit(self, timeline):
        timeline.submit(EventDraft(description="A", score=1, date="2024-01-01"))
        timeline.begin_edit(0)
        timeline.cancel_edit()
        assert timeline.editing_index is None
        assert timeline.draft.description == ""


class TestDelete:
    def test_delete_persists(self, timeline, store):
        timeline.submit(EventDraft(description="A", score=1, date="2024-01-01"))
        timeline.submit(EventDraft(description="B", score=1, date="2024-02-01"))
        removed = timeline.delete(0)
        assert removed.description == "A"
        assert [e["description"] for e in _saved(store)] == ["B"]

    def test_delete_out_of_range(self, timeline):
        with pytest.raises(IndexError):
            timeline.delete(0)

    def test_negative_index_rejected(self, timeline, store):
        timeline.submit(EventDraft(description="A", score=1, date="2024-01-01"))
        timeline.submit(EventDraft(description="B", score=1, date="2024-02-01"))
        with pytest.raises(IndexError):
            timeline.delete(-1)
        assert [e.description for e in timeline.events] == ["A", "B"]
        assert len(_saved(store)) == 2

    def test_begin_edit_rejects_bad_index(self, timeline):
        timeline.submit(EventDraft(description="A", score=1, date="2024-01-01"))
        for index in (-1, 1):
            with pytest.raises(IndexError):
                timeline.begin_edit(index)
        assert timeline.editing_index is None
        timeline.submit(EventDraft(description="B", score=2, date="2024-02-01"))
        assert len(timeline.events) == 2


class TestImport:
    def test_import_into_empty_collection(self, timeline, store):
        text = json.dumps([{
            "id": 2, "description": "Imported", "score": -3,
            "date": "2024-06-01", "displayDate": "2024-06-01", "monthOnly": False,
        }])
        assert timeline.import_text(text) == 1
        saved = _saved(store)
        assert len(saved) == 1
        assert saved[0]["description"] == "Imported"
        assert timeline.events[0].id == 2

    def test_import_replaces_and_sorts(self, timeline):
        timeline.submit(EventDraft(description="Old", score=1, date="2020-01-01"))
        text = json.dumps([
            {"id": 10, "description": "June", "score": 1, "date": "2024-06-01"},
            {"id": 11, "description": "Jan", "score": 1, "date": "2024-01-01", "monthOnly": True},
        ])
        timeline.import_text(text)
        assert [e.description for e in timeline.events] == ["Jan", "June"]
        assert timeline.events[0].display_date == "2024-01"
        assert timeline.events[1].display_date == "2024-06-01"

    @pytest.mark.parametrize("text", [
        "not json",
        "{}",
        '[{"id": 1, "description": "x", "score": 9, "date": "2024-01-01"}]',
        '[{"description": "x", "score": 1, "date": "2024-01-01"}]',
    ])
    def test_rejected_import_leaves_collection(self, timeline, store, text):
        timeline.submit(EventDraft(description="Keep", score=1, date="2024-01-01"))
        with pytest.raises(ImportRejected):
            timeline.import_text(text)
        assert [e.description for e in timeline.events] == ["Keep"]
        assert [e["description"] for e in _saved(store)] == ["Keep"]

    def test_import_file(self, timeline, tmp_path):
        p = tmp_path / "in.json"
        p.write_text('[{"id": 1, "description": "x", "score": 0, "date": "2024-01-01"}]', encoding="utf-8")
        assert timeline.import_file(p) == 1

    def test_import_keeps_values_as_parsed(self, timeline):
        text = json.dumps([{"id": 1, "description": None, "score": 0, "date": "2024-01-01", "monthOnly": "false"}])
        timeline.import_text(text)
        e = timeline.events[0]
        assert e.description is None
        assert e.month_only == "false"
        assert timeline.begin_edit(0).description == ""

    def test_import_cancels_edit(self, timeline):
        timeline.submit(EventDraft(description="A", score=1, date="2024-01-01"))
        timeline.begin_edit(0)
        timeline.import_text("[]")
        assert timeline.editing_index is None
        assert timeline.events == []


class TestExportAndCopy:
    def test_export_json_to_directory(self, timeline, tmp_path):
        timeline.submit(EventDraft(description="A", score=1, date="2024-01-01"))
        out = timeline.export_json(tmp_path, today=date(2024, 6, 1))
        assert out.name == "relationship-timeline-2024-06-01.json"
        assert json.loads(out.read_text(encoding="utf-8"))[0]["description"] == "A"

    def test_export_then_import_elsewhere(self, timeline, tmp_path):
        timeline.submit(EventDraft(description="A", score=-5, date="2024-01-01", month_only=True))
        out = timeline.export_json(tmp_path / "x.json")

        other = Timeline.open(EventStore(tmp_path / "other"))
        other.import_file(out)
        assert other.events == timeline.events

    def test_export_csv(self, timeline, tmp_path):
        import pandas as pd

        timeline.submit(EventDraft(description="A", score=3, date="2024-01-01"))
        out = timeline.export_csv(tmp_path / "out.csv")
        df = pd.read_csv(out)
        assert list(df.columns) == ["id", "date", "displayDate", "monthOnly", "score", "description"]
        assert df.loc[0, "score"] == 3

    def test_copy_flag_clears(self, store):
        clock = FakeClock()
        tl = Timeline.open(store, clock=clock)
        copied = []
        text = tl.copy_json(copied.append)
        assert copied == [text]
        assert tl.copied
        clock.now += COPIED_FLASH_SECONDS + 0.1
        assert not tl.copied


class TestPreferences:
    def test_language_persisted(self, timeline, store):
        assert timeline.language == "en"
        assert timeline.toggle_language() == "hu"
        assert Timeline.open(store).language == "hu"

    def test_unknown_saved_language_ignored(self, store):
        store.save_language("de")
        assert Timeline.open(store).language == "en"

    def test_line_style_toggle(self, timeline):
        assert timeline.toggle_line_style() == "linear"
        assert timeline.toggle_line_style() == "monotone"

    def test_chart_points(self, timeline):
        timeline.submit(EventDraft(description="A", score=2, date="2024-01-09", month_only=True))
        assert timeline.chart_points() == [("2024-01", 2, "A")]

    def test_reopen_loads_events(self, timeline, store):
        timeline.submit(EventDraft(description="A", score=2, date="2024-01-09"))
        assert Timeline.open(store).events == timeline.events
