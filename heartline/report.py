from __future__ import annotations

"""
Printable report
----------------
The "print" action: writes a DOCX document with the timeline chart, the
event table and the score guide, ready to print or share.

Report dependencies (python-docx, matplotlib) are imported lazily so the rest
of the tool works without them.
"""

from dataclasses import dataclass
from typing import Optional, Sequence
import os
import tempfile

from .chart import render_chart
from .events import format_score
from .i18n import score_guide, t
from .models import TimelineEvent


@dataclass
class ReportConfig:
    """Knobs for the printable report."""
    title: Optional[str] = None  # defaults to the translated app title
    language: str = "en"
    line_style: str = "monotone"
    include_chart: bool = True
    include_score_guide: bool = True


def generate_docx_report(
    events: Sequence[TimelineEvent],
    out_path: str,
    *,
    config: Optional[ReportConfig] = None,
) -> str:
    config = config or ReportConfig()

    try:
        from docx import Document
        from docx.shared import Pt, Inches
        from docx.enum.text import WD_ALIGN_PARAGRAPH
    except ImportError as e:
        raise ImportError(
            "Missing dependency: python-docx.\n"
            "Install it with: python -m pip install python-docx"
        ) from e

    if not events:
        raise ValueError("No events to report on (the timeline is empty).")

    lang = config.language
    doc = Document()
    style = doc.styles["Normal"]
    style.font.name = "Calibri"
    style.font.size = Pt(11)

    p = doc.add_paragraph()
    r = p.add_run(config.title or t(lang, "title"))
    r.bold = True
    r.font.size = Pt(22)
    p.alignment = WD_ALIGN_PARAGRAPH.CENTER

    def _kv(key: str, value: str) -> None:
        para = doc.add_paragraph()
        run = para.add_run(f"{key}: ")
        run.bold = True
        para.add_run(value)

    _kv(t(lang, "events"), str(len(events)))
    _kv(t(lang, "date"), f"{events[0].display_date} .. {events[-1].display_date}")

    if config.include_chart:
        doc.add_heading(t(lang, "timeline"), level=1)
        tmpdir = tempfile.mkdtemp(prefix="heartline_report_")
        chart_path = os.path.join(tmpdir, "timeline.png")
        render_chart(events, chart_path, line_style=config.line_style, language=lang)
        doc.add_picture(chart_path, width=Inches(6.5))

    doc.add_heading(t(lang, "events"), level=1)
    table = doc.add_table(rows=1, cols=3)
    head = table.rows[0].cells
    head[0].text = t(lang, "date")
    head[1].text = t(lang, "satisfaction_score")
    head[2].text = t(lang, "event_description")
    for e in events:
        row = table.add_row().cells
        row[0].text = e.display_date
        row[1].text = format_score(e.score)
        row[2].text = e.description

    if config.include_score_guide:
        doc.add_heading(t(lang, "score_guide_title"), level=1)
        for line in score_guide(lang):
            doc.add_paragraph(line, style="List Bullet")

    from . import __version__
    from datetime import datetime as _dt
    doc.add_paragraph("")
    doc.add_paragraph(f"Heartline {__version__}, {_dt.now().isoformat(timespec='seconds')}")

    os.makedirs(os.path.dirname(out_path) or ".", exist_ok=True)
    doc.save(out_path)
    return out_path
