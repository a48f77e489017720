"""Unit tests for dashboard chart payloads."""

from __future__ import annotations

import copy
import json
from datetime import datetime, timezone

import pytest

from analysis.aggregations import project_totals, xp_series
from analysis.dto import PassFailCount, ProfileSummary, Transaction
from core.charting.colors import contrast_text_color, hex_to_rgb, perceived_brightness
from core.charting.render import (
    BAR_HOVER_COLOR,
    FAIL_COLOR,
    PASS_COLOR,
    PASS_FAIL_CHART_ID,
    PROJECT_CHART_ID,
    XP_CHART_ID,
    render_pass_fail_pie_chart,
    render_profile_charts,
    render_project_xp_bar_chart,
    render_xp_line_chart,
)

pytestmark = pytest.mark.unit

TRANSACTIONS = (
    Transaction(amount=1200, created_at=datetime(2024, 1, 10, tzinfo=timezone.utc), object_name="A"),
    Transaction(amount=50, created_at=datetime(2024, 2, 3, tzinfo=timezone.utc), object_name="B"),
    Transaction(amount=25, created_at=datetime(2024, 3, 21, tzinfo=timezone.utc), object_name="A"),
)


def test_line_chart_spans_dates_and_totals() -> None:
    """The time axis covers first..last date and the XP axis 0..max total."""

    payload = render_xp_line_chart(xp_series(TRANSACTIONS))

    assert payload["type"] == "line"
    scales = payload["options"]["scales"]
    assert scales["x"]["type"] == "time"
    assert scales["x"]["min"] == "2024-01-10T00:00:00+00:00"
    assert scales["x"]["max"] == "2024-03-21T00:00:00+00:00"
    assert scales["y"]["min"] == 0
    assert scales["y"]["max"] == 1275

    dataset = payload["data"]["datasets"][0]
    assert [point["y"] for point in dataset["data"]] == [1200, 1250, 1275]
    assert dataset["pointHoverRadius"] > dataset["pointRadius"]
    assert payload["meta"]["container"] == XP_CHART_ID
    assert payload["meta"]["animation"] == {"style": "reveal", "durationMs": 2000}
    assert payload["meta"]["tooltips"][0] == ["Date: 2024-01-10", "Total XP: 1,200"]


def test_bar_chart_has_one_bar_per_project_with_rotated_labels() -> None:
    """Bars follow the aggregated project order and darken on hover."""

    payload = render_project_xp_bar_chart(project_totals(TRANSACTIONS))

    assert payload["type"] == "bar"
    assert payload["data"]["labels"] == ["A", "B"]
    dataset = payload["data"]["datasets"][0]
    assert dataset["data"] == [1225, 50]
    assert dataset["hoverBackgroundColor"] == BAR_HOVER_COLOR
    ticks = payload["options"]["scales"]["x"]["ticks"]
    assert ticks["maxRotation"] == ticks["minRotation"] == 45
    assert payload["options"]["responsive"] is True
    assert payload["meta"]["tooltips"][0] == ["A", "Date: 2024-03-21", "XP: 1,225"]
    assert payload["meta"]["container"] == PROJECT_CHART_ID


def test_pie_chart_labels_wedges_with_contrasting_text() -> None:
    """Each wedge gets a count label in a readable text color."""

    payload = render_pass_fail_pie_chart(PassFailCount(pass_count=7, fail_count=2))

    assert payload["type"] == "pie"
    assert payload["data"]["labels"] == ["Pass", "Fail"]
    assert payload["data"]["datasets"][0]["data"] == [7, 2]
    assert payload["options"]["plugins"]["legend"]["position"] == "bottom"
    assert payload["options"]["animation"]["animateRotate"] is True
    meta = payload["meta"]
    assert meta["container"] == PASS_FAIL_CHART_ID
    assert meta["sliceLabels"] == ["Pass: 7", "Fail: 2"]
    assert meta["sliceLabelColors"] == [contrast_text_color(PASS_COLOR), contrast_text_color(FAIL_COLOR)]
    assert not meta["empty"]


def test_empty_inputs_produce_empty_state_payloads() -> None:
    """Charts without data are flagged empty instead of drawing broken axes."""

    assert render_xp_line_chart(())["meta"]["empty"] is True
    assert "max" not in render_xp_line_chart(())["options"]["scales"]["x"]
    assert render_project_xp_bar_chart(())["meta"]["empty"] is True
    assert render_pass_fail_pie_chart(PassFailCount(0, 0))["meta"]["empty"] is True


def test_rendering_is_repeatable_and_does_not_mutate_inputs() -> None:
    """Rendering twice gives equal payloads and leaves the inputs untouched."""

    series = list(xp_series(TRANSACTIONS))
    snapshot = copy.deepcopy(series)

    first = render_xp_line_chart(series)
    second = render_xp_line_chart(series)

    assert first == second
    assert first is not second
    assert series == snapshot


def test_profile_charts_are_keyed_by_container_and_json_serializable() -> None:
    """All three payloads are produced and can be embedded as JSON."""

    summary = ProfileSummary(
        login="alice",
        total_xp=1275,
        xp_series=xp_series(TRANSACTIONS),
        project_totals=project_totals(TRANSACTIONS),
        pass_fail=PassFailCount(pass_count=1, fail_count=1),
        completed_projects=("A",),
    )
    charts = render_profile_charts(summary)

    assert set(charts) == {"xpChart", "xpBars", "skillsChart"}
    json.dumps(charts)


@pytest.mark.parametrize(
    ("fill", "expected"),
    [
        ("#ffffff", "#000000"),
        ("#000000", "#ffffff"),
        ("#FFEB3B", "#000000"),
        ("#4CAF50", "#ffffff"),
        ("#F44336", "#ffffff"),
    ],
)
def test_contrast_text_color_uses_brightness_threshold(fill: str, expected: str) -> None:
    """Bright fills get dark text and dark fills get white text."""

    assert contrast_text_color(fill) == expected


def test_perceived_brightness_weights_channels() -> None:
    """Brightness uses the 0.299/0.587/0.114 channel weights."""

    assert hex_to_rgb("#4CAF50") == (76, 175, 80)
    assert hex_to_rgb("#abc") == (0xAA, 0xBB, 0xCC)
    assert perceived_brightness("#4CAF50") == pytest.approx(76 * 0.299 + 175 * 0.587 + 80 * 0.114)
    with pytest.raises(ValueError):
        hex_to_rgb("green")
