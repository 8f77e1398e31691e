# tests/unit/test_core/test_metrics.py

import logging
import math
import numpy as np
import pytest
from leaderboard.core import metrics as metrics_module
from leaderboard.core.metrics import MetricsRecord, compute_metrics, compute_all_metrics

ZEROED = {
    "total_return": 0.0,
    "max_drawdown": 0.0,
    "sharpe_ratio": 0.0,
    "sortino_ratio": 0.0,
    "calmar_ratio": 0.0,
    "current_value": 0.0,
    "starting_value": 0.0,
}


def points(*values):
    return [
        {"timestamp": f"2024-03-01T00:{i:02d}:00Z", "value": v}
        for i, v in enumerate(values)
    ]


def assert_all_finite(record: MetricsRecord):
    for name, value in record.to_dict().items():
        if name != "entity_id":
            assert math.isfinite(value), name


def test_empty_series_returns_zeroed_record():
    record = compute_metrics("A", [])
    assert record.to_dict() == {"entity_id": "A", **ZEROED}


def test_missing_series_returns_zeroed_record():
    assert compute_metrics("A", None) == MetricsRecord(entity_id="A")


def test_single_point_short_circuit():
    record = compute_metrics("A", points(100))
    assert record.current_value == 100
    assert record.starting_value == 100
    assert record.total_return == 0
    assert record.sharpe_ratio == 0
    assert record.calmar_ratio == 0


@pytest.mark.parametrize("value", ["abc", "100", True, None, float("nan")])
def test_single_invalid_point_reports_zero_values(value):
    record = compute_metrics("A", points(value))
    assert record.to_dict() == {"entity_id": "A", **ZEROED}


def test_one_clean_value_after_sanitizing():
    record = compute_metrics("A", points("bad", 100, float("nan")))
    assert record.current_value == 100
    assert record.starting_value == 100
    assert record.max_drawdown == 0


def test_no_clean_values():
    record = compute_metrics("A", points(None, "x", float("inf")))
    assert record.to_dict() == {"entity_id": "A", **ZEROED}


def test_steady_growth_has_no_drawdown():
    record = compute_metrics("alpha", points(100, 110, 120, 130))

    assert record.entity_id == "alpha"
    assert record.starting_value == 100
    assert record.current_value == 130
    assert record.total_return == pytest.approx(30.0)
    assert record.max_drawdown == 0
    assert record.calmar_ratio == 0  # zero drawdown is guarded, not infinite
    assert record.sharpe_ratio > 0
    assert record.sortino_ratio == 0  # no negative returns


def test_drawdown_then_recovery():
    record = compute_metrics("beta", points(100, 80, 100))

    assert record.max_drawdown == pytest.approx(20.0)
    assert record.total_return == pytest.approx(0.0)
    assert record.calmar_ratio == pytest.approx(0.0)
    # returns are -0.2 and +0.25
    expected_sortino = (0.025 * 252) / (0.2 * math.sqrt(252))
    assert record.sortino_ratio == pytest.approx(expected_sortino)


def test_invalid_values_are_filtered():
    record = compute_metrics("gamma", points(100, float("nan"), "bad", 150))
    clean = compute_metrics("gamma", points(100, 150))

    assert record.total_return == pytest.approx(50.0)
    assert record == clean


def test_calmar_uses_total_return_and_drawdown():
    record = compute_metrics("delta", points(100, 120, 90, 110))
    assert record.total_return == pytest.approx(10.0)
    assert record.max_drawdown == pytest.approx(25.0)
    assert record.calmar_ratio == pytest.approx(0.4)


def test_zero_starting_value():
    record = compute_metrics("zero", points(0, 50, 100))
    assert record.total_return == 0
    assert record.starting_value == 0
    assert record.current_value == 100
    assert_all_finite(record)


def test_unbounded_drawdown_is_zeroed():
    # Falling below a zero peak gives an infinite drawdown upstream.
    record = compute_metrics("neg", points(0, -5))
    assert record.max_drawdown == 0
    assert_all_finite(record)


def test_extreme_values_stay_finite():
    record = compute_metrics("huge", points(1e308, -1e308, 1e308, 1e-308))
    assert_all_finite(record)


def test_idempotent():
    series = points(100, 101.5, 99.25, 103, 98, 104.75)
    assert compute_metrics("A", series) == compute_metrics("A", series)


@pytest.mark.parametrize("series", [42, "abc", [None, 1, 2], np.array([1.0, 2.0]), {"value": 1}])
def test_malformed_input_never_raises(series):
    record = compute_metrics("odd", series)
    assert record.entity_id == "odd"
    assert_all_finite(record)


def test_unexpected_failure_is_logged_and_zeroed(monkeypatch, caplog):
    def boom(values):
        raise RuntimeError("boom")

    monkeypatch.setattr(metrics_module, "calculate_returns", boom)

    with caplog.at_level(logging.WARNING, logger="leaderboard"):
        record = compute_metrics("A", points(100, 110))

    assert record.to_dict() == {"entity_id": "A", **ZEROED}
    assert "team A" in caplog.text


def test_record_replaces_non_finite_fields():
    record = MetricsRecord(entity_id="A", sharpe_ratio=float("nan"), total_return=float("inf"))
    assert record.sharpe_ratio == 0
    assert record.total_return == 0


def test_compute_all_metrics_preserves_order():
    teams = {
        "zeta": points(100, 90, 95),
        "alpha": points(100, 110),
        "mid": [],
    }
    results = compute_all_metrics(teams)

    assert list(results) == ["zeta", "alpha", "mid"]
    assert results["alpha"].total_return == pytest.approx(10.0)
    assert results["mid"] == MetricsRecord(entity_id="mid")


def test_compute_all_metrics_thread_pool_matches_sequential():
    teams = {f"team-{i}": points(100, 100 + i, 95, 100 + 2 * i) for i in range(8)}
    assert compute_all_metrics(teams, max_workers=4) == compute_all_metrics(teams)


def test_compute_all_metrics_isolates_bad_team():
    teams = {"good": points(100, 120), "bad": 42}
    results = compute_all_metrics(teams, max_workers=2)
    assert results["good"].total_return == pytest.approx(20.0)
    assert results["bad"] == MetricsRecord(entity_id="bad")


def test_compute_all_metrics_rejects_non_mapping():
    assert compute_all_metrics([("a", points(1, 2))]) == {}
