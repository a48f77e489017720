"""Chart.js payloads for the profile dashboard charts.

Each builder is a pure function of already-aggregated data and returns a
fresh payload, so rendering the same data twice yields equal payloads and
never touches the inputs.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Final, TypedDict

from analysis.dto import PassFailCount, ProfileSummary, ProjectXPEntry, XPSeriesPoint
from analysis.formatting import format_count, format_date

from .colors import contrast_text_color

XP_CHART_ID: Final[str] = "xpChart"
PROJECT_CHART_ID: Final[str] = "xpBars"
PASS_FAIL_CHART_ID: Final[str] = "skillsChart"

LINE_COLOR = "#4CAF50"
BAR_COLOR = "#4CAF50"
BAR_HOVER_COLOR = "#388e3c"
PASS_COLOR = "#4CAF50"
FAIL_COLOR = "#F44336"

POINT_RADIUS = 5
POINT_HOVER_RADIUS = 8
LINE_REVEAL_MS = 2000
PIE_SWEEP_MS = 1000
LABEL_ROTATION_DEGREES = 45


class ChartDataset(TypedDict, total=False):
    """A Chart.js dataset payload."""

    label: str
    data: list[Any]
    borderColor: str | list[str]
    backgroundColor: str | list[str]
    hoverBackgroundColor: str | list[str]
    borderWidth: int
    pointRadius: int
    pointHoverRadius: int
    pointBackgroundColor: str
    fill: bool
    tension: float


class ChartData(TypedDict):
    """Chart.js labels + datasets."""

    labels: list[str]
    datasets: list[ChartDataset]


class ChartMeta(TypedDict, total=False):
    """Drawing hints consumed by the browser script, not by Chart.js."""

    container: str
    title: str
    ariaLabel: str
    empty: bool
    emptyMessage: str
    tooltips: list[list[str]]
    animation: dict[str, object]
    sliceLabels: list[str]
    sliceLabelColors: list[str]


class ChartPayload(TypedDict):
    """A complete chart description for one DOM container."""

    type: str
    data: ChartData
    options: dict[str, Any]
    meta: ChartMeta


def render_xp_line_chart(series: Sequence[XPSeriesPoint]) -> ChartPayload:
    """Build the cumulative XP-over-time line chart.

    Args:
        series: Cumulative XP points in transaction order.

    Returns:
        Line chart payload with a time x-axis spanning the first to last date,
        a linear y-axis from 0 to the highest total, one marker per point,
        and a left-to-right reveal animation.
    """

    meta: ChartMeta = {
        "container": XP_CHART_ID,
        "title": "XP progress line chart over dates",
        "ariaLabel": "Line chart showing total XP progress over time",
        "empty": not series,
        "emptyMessage": "No XP earned yet.",
        "tooltips": [
            [f"Date: {format_date(point.date)}", f"Total XP: {format_count(point.total)}"]
            for point in series
        ],
        "animation": {"style": "reveal", "durationMs": LINE_REVEAL_MS},
    }
    dataset: ChartDataset = {
        "label": "Total XP",
        "data": [{"x": point.date.isoformat(), "y": point.total} for point in series],
        "borderColor": LINE_COLOR,
        "backgroundColor": LINE_COLOR,
        "pointBackgroundColor": LINE_COLOR,
        "borderWidth": 2,
        "pointRadius": POINT_RADIUS,
        "pointHoverRadius": POINT_HOVER_RADIUS,
        "fill": False,
        "tension": 0.0,
    }

    x_scale: dict[str, Any] = {"type": "time", "time": {"tooltipFormat": "yyyy-MM-dd"}}
    y_scale: dict[str, Any] = {"type": "linear", "min": 0, "title": {"display": True, "text": "Total XP"}}
    if series:
        dates = [point.date for point in series]
        x_scale["min"] = min(dates).isoformat()
        x_scale["max"] = max(dates).isoformat()
        y_scale["max"] = max(point.total for point in series)

    return {
        "type": "line",
        "data": {"labels": [], "datasets": [dataset]},
        "options": {
            "responsive": True,
            "maintainAspectRatio": False,
            "scales": {"x": x_scale, "y": y_scale},
            "plugins": {"legend": {"display": False}},
        },
        "meta": meta,
    }


def render_project_xp_bar_chart(entries: Sequence[ProjectXPEntry]) -> ChartPayload:
    """Build the per-project XP bar chart.

    Args:
        entries: Per-project totals in display order.

    Returns:
        Responsive bar chart payload with rotated project labels, one bar per
        project, and a darker fill on hover.
    """

    meta: ChartMeta = {
        "container": PROJECT_CHART_ID,
        "title": "XP earned per project",
        "ariaLabel": "Bar chart showing XP earned per project",
        "empty": not entries,
        "emptyMessage": "No project XP yet.",
        "tooltips": [
            [
                entry.project_name,
                f"Date: {format_date(entry.last_date)}",
                f"XP: {format_count(entry.total_xp)}",
            ]
            for entry in entries
        ],
    }
    dataset: ChartDataset = {
        "label": "XP",
        "data": [entry.total_xp for entry in entries],
        "backgroundColor": BAR_COLOR,
        "hoverBackgroundColor": BAR_HOVER_COLOR,
        "borderWidth": 0,
    }

    y_scale: dict[str, Any] = {"type": "linear", "beginAtZero": True, "min": 0}
    if entries:
        y_scale["max"] = max(entry.total_xp for entry in entries)

    return {
        "type": "bar",
        "data": {"labels": [entry.project_name for entry in entries], "datasets": [dataset]},
        "options": {
            "responsive": True,
            "maintainAspectRatio": False,
            "scales": {
                "x": {
                    "type": "category",
                    "ticks": {
                        "autoSkip": False,
                        "maxRotation": LABEL_ROTATION_DEGREES,
                        "minRotation": LABEL_ROTATION_DEGREES,
                    },
                },
                "y": y_scale,
            },
            "plugins": {"legend": {"display": False}},
        },
        "meta": meta,
    }


def render_pass_fail_pie_chart(counts: PassFailCount) -> ChartPayload:
    """Build the pass/fail pie chart.

    Args:
        counts: Pass/fail partition of progress records.

    Returns:
        Pie chart payload with two wedges, a rotate-in animation, per-wedge
        labels in a contrasting text color, and a legend below the chart.
    """

    labels = ["Pass", "Fail"]
    values = [counts.pass_count, counts.fail_count]
    fills = [PASS_COLOR, FAIL_COLOR]
    meta: ChartMeta = {
        "container": PASS_FAIL_CHART_ID,
        "title": "Project pass/fail ratio",
        "ariaLabel": "Pie chart showing passed and failed projects",
        "empty": counts.total == 0,
        "emptyMessage": "No graded projects yet.",
        "tooltips": [[f"{label}: {format_count(value)}"] for label, value in zip(labels, values)],
        "animation": {"style": "sweep", "durationMs": PIE_SWEEP_MS},
        "sliceLabels": [f"{label}: {format_count(value)}" for label, value in zip(labels, values)],
        "sliceLabelColors": [contrast_text_color(fill) for fill in fills],
    }
    dataset: ChartDataset = {
        "label": "Projects",
        "data": values,
        "backgroundColor": fills,
        "borderColor": "#ffffff",
        "borderWidth": 1,
    }
    return {
        "type": "pie",
        "data": {"labels": labels, "datasets": [dataset]},
        "options": {
            "responsive": True,
            "maintainAspectRatio": False,
            "animation": {"animateRotate": True, "animateScale": False, "duration": PIE_SWEEP_MS},
            "plugins": {"legend": {"display": True, "position": "bottom"}},
        },
        "meta": meta,
    }


def render_profile_charts(summary: ProfileSummary) -> dict[str, ChartPayload]:
    """Render all dashboard charts keyed by their DOM container id."""

    return {
        XP_CHART_ID: render_xp_line_chart(summary.xp_series),
        PROJECT_CHART_ID: render_project_xp_bar_chart(summary.project_totals),
        PASS_FAIL_CHART_ID: render_pass_fail_pie_chart(summary.pass_fail),
    }
