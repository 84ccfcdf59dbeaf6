"""Tests for weight history parsing and the weight service."""

import asyncio

import httpx

from mfp_bridge.errors import SessionExpiredError
from mfp_bridge.parsers.weight import parse_weight_history
from mfp_bridge.services.weight import WeightService
from tests.conftest import FakeMfpClient

WEIGHT_HTML = """
<html><body>
<div class="summary">
  <span class="current-weight">180.5 lbs</span>
  <span class="goal-weight">170 lbs</span>
  <span class="start-weight">195 lbs</span>
</div>
<table class="weight-table">
  <tr><th>Date</th><th>Weight (lbs)</th></tr>
  <tr><td>2024-01-10</td><td>180.5</td></tr>
  <tr><td>01/05/2024</td><td>182.0</td></tr>
  <tr><td>Dec 28, 2023</td><td>184.2</td></tr>
  <tr><td>2023-12-20</td><td></td></tr>
</table>
</body></html>
"""

METRIC_HTML = """
<html><body>
<ul class="weight-entries">
  <li><span class="date">2024-02-02</span><span class="weight">81.4</span></li>
  <li><span class="date">2024-02-01</span><span class="weight">81.9</span></li>
</ul>
<span class="unit-label">kg</span>
</body></html>
"""


def test_parse_weight_history_normalizes_dates() -> None:
    history = parse_weight_history(WEIGHT_HTML)

    assert [entry.date for entry in history.entries] == [
        "2024-01-10",
        "2024-01-05",
        "2023-12-28",
    ]
    assert [entry.weight for entry in history.entries] == [180.5, 182.0, 184.2]
    assert history.unit == "lb"
    assert all(entry.unit == "lb" for entry in history.entries)


def test_summary_weights_come_from_page() -> None:
    history = parse_weight_history(WEIGHT_HTML)

    assert history.current == 180.5
    assert history.goal == 170
    assert history.start_weight == 195


def test_limit_caps_entries() -> None:
    history = parse_weight_history(WEIGHT_HTML, limit=2)

    assert len(history.entries) == 2


def test_date_range_filters_entries() -> None:
    history = parse_weight_history(
        WEIGHT_HTML, start_date="2024-01-01", end_date="2024-01-06"
    )

    assert [entry.date for entry in history.entries] == ["2024-01-05"]


def test_metric_list_layout_and_derived_weights() -> None:
    history = parse_weight_history(METRIC_HTML)

    assert history.unit == "kg"
    assert [entry.weight for entry in history.entries] == [81.4, 81.9]
    assert history.current == 81.4
    assert history.start_weight == 81.9
    assert history.goal is None


def test_weight_service_reads_progress_report() -> None:
    client = FakeMfpClient(pages={"/reports/results/progress/default": METRIC_HTML})

    history = asyncio.run(WeightService(client).get_weight_history(limit=1))

    assert client.requests == ["/reports/results/progress/default"]
    assert len(history.entries) == 1


def test_weight_service_returns_empty_history_on_failure() -> None:
    client = FakeMfpClient(
        pages={"/reports/results/progress/default": SessionExpiredError()}
    )

    history = asyncio.run(WeightService(client).get_weight_history())

    assert history.entries == []
    assert history.unit == "lb"
    assert history.current is None


def test_weight_service_tolerates_network_errors() -> None:
    client = FakeMfpClient(
        pages={"/reports/results/progress/default": httpx.ConnectError("down")}
    )

    history = asyncio.run(WeightService(client).get_weight_history())

    assert history.entries == []
