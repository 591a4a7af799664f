"""
Timeline chart
--------------
Draws the satisfaction score of every event, in chronological order, as a
line chart (PNG via matplotlib).

- x axis: display dates (month-only events show `YYYY-MM`), evenly spaced
- y axis: fixed [-8, 8] domain with ticks every 2, dashed zero line
- points are coloured by score band, the line itself is pink
- "monotone" draws a smooth curve that never overshoots between points,
  "linear" draws straight segments
"""

from __future__ import annotations
from typing import List, Optional, Sequence, Tuple

from .events import score_hex
from .i18n import t
from .models import SCORE_MAX, SCORE_MIN, TimelineEvent

LINE_COLOR = "#ec4899"
GRID_COLOR = "#e5e7eb"
AXIS_COLOR = "#6b7280"
ZERO_LINE_COLOR = "#9ca3af"


def monotone_curve(xs, ys, samples: int = 16):
    """Monotone cubic (Fritsch-Carlson) interpolation of the points.

    Returns dense (x, y) numpy arrays. Between two points the curve stays
    within their y range, so the chart never shows scores beyond the data.
    """
    import numpy as np

    x = np.asarray(xs, dtype=float)
    y = np.asarray(ys, dtype=float)
    n = len(x)
    if n < 2:
        return x.copy(), y.copy()

    h = np.diff(x)
    delta = np.diff(y) / h

    m = np.empty(n)
    m[0] = delta[0]
    m[-1] = delta[-1]
    for i in range(1, n - 1):
        if delta[i - 1] * delta[i] <= 0:
            m[i] = 0.0
        else:
            w1 = 2 * h[i] + h[i - 1]
            w2 = h[i] + 2 * h[i - 1]
            m[i] = (w1 + w2) / (w1 / delta[i - 1] + w2 / delta[i])

    out_x: List[float] = []
    out_y: List[float] = []
    for i in range(n - 1):
        s = np.linspace(0.0, 1.0, samples, endpoint=(i == n - 2))
        h00 = 2 * s**3 - 3 * s**2 + 1
        h10 = s**3 - 2 * s**2 + s
        h01 = -2 * s**3 + 3 * s**2
        h11 = s**3 - s**2
        seg_y = h00 * y[i] + h10 * h[i] * m[i] + h01 * y[i + 1] + h11 * h[i] * m[i + 1]
        out_x.extend(x[i] + s * h[i])
        out_y.extend(seg_y)
    return np.array(out_x), np.array(out_y)


def chart_series(events: Sequence[TimelineEvent]) -> Tuple[List[str], List[int], List[str]]:
    labels = [e.display_date for e in events]
    scores = [e.score for e in events]
    colors = [score_hex(e.score) for e in events]
    return labels, scores, colors


def render_chart(
    events: Sequence[TimelineEvent],
    out_path: str,
    *,
    line_style: str = "monotone",
    language: str = "en",
    title: Optional[str] = None,
) -> str:
    """Render the timeline chart to `out_path` (PNG) and return the path."""
    try:
        import matplotlib
        matplotlib.use("Agg")
        import matplotlib.pyplot as plt
        import numpy as np
    except ImportError as e:
        raise ImportError(
            "Missing dependency: matplotlib (and numpy).\n"
            "Install with: python -m pip install matplotlib numpy"
        ) from e

    if not events:
        raise ValueError("No events to chart.")
    if line_style not in ("monotone", "linear"):
        raise ValueError("line_style must be 'monotone' or 'linear'")

    labels, scores, colors = chart_series(events)
    xs = np.arange(len(labels), dtype=float)

    fig, ax = plt.subplots(figsize=(10, 5))
    ax.grid(True, linestyle="--", color=GRID_COLOR)
    ax.axhline(0, color=ZERO_LINE_COLOR, linestyle=(0, (5, 5)), linewidth=1)

    if line_style == "monotone":
        cx, cy = monotone_curve(xs, scores)
    else:
        cx, cy = xs, np.asarray(scores, dtype=float)
    ax.plot(cx, cy, color=LINE_COLOR, linewidth=3, label=t(language, "satisfaction_level"), zorder=2)
    ax.scatter(xs, scores, c=colors, edgecolors=LINE_COLOR, linewidths=2, s=72, zorder=3)

    ax.set_ylim(SCORE_MIN, SCORE_MAX)
    ax.set_yticks(list(range(SCORE_MIN, SCORE_MAX + 1, 2)))
    ax.set_xticks(xs)
    ax.set_xticklabels(labels, rotation=45, ha="right")
    ax.tick_params(colors=AXIS_COLOR)
    ax.set_title(title or t(language, "timeline"))
    ax.legend(loc="upper left")

    fig.tight_layout()
    fig.savefig(out_path, dpi=150)
    plt.close(fig)
    return out_path
