"""
Heartline Command Line Interface (CLI)
======================================

The interactive terminal program you run like:

    python -m heartline.cli --data-dir "~/my-timeline"

It provides:
- Argument parsing (argparse)
- A REPL loop (Read-Eval-Print Loop) for commands
- Mapping user commands to Timeline methods (add, edit, delete, import, export)

Events are numbered from 1 in the list view. Every change is saved to the
data directory immediately.
"""

from __future__ import annotations
import argparse, logging, shlex
from typing import Callable, Optional

from .events import format_score, parse_day, score_color
from .i18n import score_guide, t
from .models import SCORE_MAX, SCORE_MIN, EventDraft
from .store import EventStore
from .timeline import ImportRejected, Timeline

HELP = """
Commands:
  help
  list
  guide

  add "<description>" <score> <YYYY-MM-DD | YYYY-MM>
  edit <n>
  set description "<text>"
  set score <-8..8>
  set date <YYYY-MM-DD | YYYY-MM>
  set month on|off
  draft
  save
  cancel
  delete <n>

  import "<path.json>"
  export json ["<dir or path.json>"]
  export csv "<path.csv>"
  export xlsx "<path.xlsx>"
  json
  copy

  chart "<out.png>"
  style
  print "<out.docx>"
  lang
  quit

A YYYY-MM date marks the event as month-only (stored as the 1st of the month).
"""


def parse_score(text: str) -> int:
    try:
        score = int(text)
    except ValueError:
        raise ValueError(f"score must be an integer, got {text!r}") from None
    if not SCORE_MIN <= score <= SCORE_MAX:
        raise ValueError(f"score must be between {SCORE_MIN} and {SCORE_MAX}")
    return score


def parse_date_input(text: str):
    """Return (iso_date, month_only) for a YYYY-MM-DD or YYYY-MM input."""
    s = text.strip()
    try:
        day = parse_day(s)
    except ValueError:
        raise ValueError(f"date must be YYYY-MM-DD or YYYY-MM, got {text!r}") from None
    if len(s) == 7:
        return day.isoformat(), True
    if len(s) != 10:
        raise ValueError(f"date must be YYYY-MM-DD or YYYY-MM, got {text!r}")
    return day.isoformat(), False


def _index(timeline: Timeline, text: str) -> int:
    n = int(text)
    if not 1 <= n <= len(timeline.events):
        raise ValueError(f"no event #{n} (have {len(timeline.events)})")
    return n - 1


def _require_description(draft: EventDraft) -> None:
    if not draft.description.strip():
        raise ValueError("description must not be empty")


def system_clipboard(text: str) -> None:
    """Copy `text` to the desktop clipboard through Tk."""
    import tkinter
    root = tkinter.Tk()
    root.withdraw()
    try:
        root.clipboard_clear()
        root.clipboard_append(text)
        root.update()
    finally:
        root.destroy()


def print_events(timeline: Timeline) -> None:
    lang = timeline.language
    if not timeline.events:
        print(t(lang, "no_events"))
        return
    print(f"{t(lang, 'events')} ({len(timeline.events)})")
    for i, e in enumerate(timeline.events, start=1):
        marker = "*" if timeline.editing_index == i - 1 else " "
        print(f"{marker}{i:>3}. {e.display_date:<10} {format_score(e.score):>3} [{score_color(e.score)}] {e.description}")


def print_draft(timeline: Timeline) -> None:
    lang = timeline.language
    d = timeline.draft
    head = t(lang, "edit_event") if timeline.editing else t(lang, "add_event")
    shown = d.date[:7] if d.month_only else d.date
    gran = t(lang, "month_only") if d.month_only else t(lang, "specific_day")
    print(f"{head}: {d.description!r} | {t(lang, 'satisfaction_score')} {format_score(d.score)} | {shown} ({gran})")


def main(argv=None):
    """Entry point for the Heartline CLI.

    1) Open the store
    2) Load events and language
    3) Start an interactive REPL
    """
    ap = argparse.ArgumentParser(prog="heartline")
    ap.add_argument("--data-dir", default=None, help="Directory holding the saved timeline (default: $HEARTLINE_HOME or ~/.heartline)")
    ap.add_argument("--verbose", action="store_true", help="Log debug output")
    args = ap.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    store = EventStore(args.data_dir)
    try:
        timeline = Timeline.open(store)
    except (ValueError, TypeError, KeyError, OSError) as e:
        # leave the saved file as it is so it can be repaired by hand
        print(f"Error: could not load the timeline from {store.root}: {e}")
        return 1
    print(f"{t(timeline.language, 'title')}: {len(timeline.events)} events. Type 'help' for commands.")
    while True:
        try:
            line = input("heartline> ")
        except EOFError:
            break
        line = line.strip()
        if not line:
            continue
        if line.lower() in ("quit", "exit"):
            break
        try:
            handle(timeline, line)
        except Exception as e:
            print(f"Error: {e}")
    return 0


def handle(
    timeline: Timeline,
    line: str,
    *,
    confirm: Callable[[str], str] = input,
    clipboard: Optional[Callable[[str], None]] = None,
) -> None:
    """Handle one CLI command line."""
    parts = shlex.split(line)
    cmd = parts[0].lower()
    lang = timeline.language

    if cmd == "help":
        print(HELP)
        return

    if cmd in ("list", "show"):
        print_events(timeline)
        return

    if cmd == "guide":
        print(t(lang, "score_guide_title"))
        for g in score_guide(lang):
            print(f"  {g}")
        return

    if cmd == "add":
        if len(parts) != 4:
            raise ValueError('usage: add "<description>" <score> <date>')
        if timeline.editing:
            raise ValueError("an edit is in progress; use 'save' or 'cancel' first")
        date, month_only = parse_date_input(parts[3])
        draft = EventDraft(description=parts[1], score=parse_score(parts[2]), date=date, month_only=month_only)
        _require_description(draft)
        e = timeline.submit(draft)
        print(f"Added {e.display_date} {format_score(e.score)} {e.description}")
        return

    if cmd == "edit":
        if len(parts) != 2:
            raise ValueError("usage: edit <n>")
        timeline.begin_edit(_index(timeline, parts[1]))
        print_draft(timeline)
        return

    if cmd == "set":
        if len(parts) < 3:
            raise ValueError("usage: set description|score|date|month <value>")
        what, value = parts[1].lower(), " ".join(parts[2:])
        d = timeline.draft
        if what == "description":
            d.description = value
        elif what == "score":
            d.score = parse_score(value)
        elif what == "date":
            d.date, d.month_only = parse_date_input(value)
        elif what == "month":
            if value.lower() not in ("on", "off"):
                raise ValueError("usage: set month on|off")
            d.month_only = value.lower() == "on"
        else:
            raise ValueError("set field must be: description, score, date, month")
        print_draft(timeline)
        return

    if cmd == "draft":
        print_draft(timeline)
        return

    if cmd == "save":
        _require_description(timeline.draft)
        was_editing = timeline.editing
        e = timeline.submit()
        print(f"{t(lang, 'update') if was_editing else t(lang, 'save')}: {e.display_date} {format_score(e.score)} {e.description}")
        return

    if cmd == "cancel":
        timeline.cancel_edit()
        print(t(lang, "cancel"))
        return

    if cmd == "delete":
        if len(parts) != 2:
            raise ValueError("usage: delete <n>")
        idx = _index(timeline, parts[1])
        answer = confirm(f"{t(lang, 'delete_confirm')} [y/N] ")
        if answer.strip().lower() not in ("y", "yes", "i", "igen"):
            print("Kept.")
            return
        e = timeline.delete(idx)
        print(f"{t(lang, 'delete')}: {e.description}")
        return

    if cmd == "import":
        if len(parts) < 2:
            raise ValueError('usage: import "<path.json>"')
        try:
            n = timeline.import_file(parts[1])
        except (ImportRejected, OSError, UnicodeDecodeError):
            print(t(lang, "import_error"))
            return
        print(f"{t(lang, 'import_success')} ({n})")
        return

    if cmd == "export":
        if len(parts) < 2:
            raise ValueError('usage: export json ["<path>"] | export csv "<path>" | export xlsx "<path>"')
        fmt = parts[1].lower()
        if fmt == "json":
            out = timeline.export_json(parts[2] if len(parts) >= 3 else ".")
        elif fmt == "csv" and len(parts) >= 3:
            out = timeline.export_csv(parts[2])
        elif fmt == "xlsx" and len(parts) >= 3:
            out = timeline.export_xlsx(parts[2])
        else:
            raise ValueError('usage: export json ["<path>"] | export csv "<path>" | export xlsx "<path>"')
        print(f"{t(lang, 'export_data')}: {out}")
        return

    if cmd == "json":
        print(timeline.json_text())
        return

    if cmd == "copy":
        timeline.copy_json(clipboard or system_clipboard)
        print(t(lang, "copied"))
        return

    if cmd == "chart":
        from .chart import render_chart
        if len(parts) < 2:
            raise ValueError('usage: chart "<out.png>"')
        render_chart(timeline.events, parts[1], line_style=timeline.line_style, language=lang)
        print(f"Chart written to {parts[1]}")
        return

    if cmd == "style":
        style = timeline.toggle_line_style()
        label = t(lang, "curved") if style == "monotone" else t(lang, "straight")
        print(f"{t(lang, 'line_style')}: {label}")
        return

    if cmd == "print":
        from .report import ReportConfig, generate_docx_report
        if len(parts) < 2:
            raise ValueError('usage: print "<out.docx>"')
        cfg = ReportConfig(language=lang, line_style=timeline.line_style)
        generate_docx_report(timeline.events, parts[1], config=cfg)
        print(f"Report written to {parts[1]}")
        return

    if cmd == "lang":
        new = timeline.toggle_language()
        print(f"{new.upper()}: {t(new, 'title')}")
        return

    print("Unknown command. Type 'help'.")


if __name__ == "__main__":
    raise SystemExit(main())
