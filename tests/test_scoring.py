from __future__ import annotations

from dataclasses import replace

import numpy as np
import pytest

from urbanplan_app.constants import HEALTH_WEIGHTS
from urbanplan_app.models import DEFAULT_HEALTH_METRICS, HealthMetrics
from urbanplan_app.scoring import (
    clamp_value,
    health_index,
    health_label,
    health_recommendations,
    history_trend,
    synthetic_history,
)


def test_weights_sum_to_one():
    assert sum(HEALTH_WEIGHTS.values()) == pytest.approx(1.0)


def test_reference_metrics_score_62():
    assert health_index(DEFAULT_HEALTH_METRICS) == 62


def test_extremes_map_to_bounds():
    assert health_index(HealthMetrics(*([0] * 8))) == 0
    assert health_index(HealthMetrics(*([100] * 8))) == 100


def test_out_of_range_metric_is_rejected():
    with pytest.raises(ValueError, match="vegetation"):
        health_index(replace(DEFAULT_HEALTH_METRICS, vegetation=120))


@pytest.mark.parametrize(
    "score, label",
    [
        (95, "Excellent"),
        (90, "Excellent"),
        (85, "Very Good"),
        (70, "Good"),
        (62, "Fair"),
        (50, "Poor"),
        (40, "Very Poor"),
        (39, "Critical"),
    ],
)
def test_health_labels(score, label):
    assert health_label(score) == label


def test_recommendation_bands():
    assert health_recommendations(85)[0] == "Maintain current initiatives"
    assert health_recommendations(62)[0] == "Increase green space coverage"
    assert health_recommendations(45)[0] == "Urgent: Reduce air pollution"
    assert health_recommendations(10)[0] == "CRITICAL: Immediate action required"


def test_synthetic_history_is_seeded_and_clamped():
    first = synthetic_history(98, np.random.default_rng(1))
    second = synthetic_history(98, np.random.default_rng(1))

    assert first == second
    assert len(first) == 12
    assert all(0 <= value <= 100 for value in first)
    assert all(88 <= value <= 100 for value in first)


@pytest.mark.parametrize(
    "history, trend",
    [
        ([50, 50, 50, 60, 60, 60], "up"),
        ([60, 60, 60, 50, 50, 50], "down"),
        ([50, 50, 50, 54, 54, 54], "stable"),
        ([50, 50], "stable"),
    ],
)
def test_history_trend(history, trend):
    assert history_trend(history) == trend


def test_clamp_value():
    assert clamp_value(120, 0, 100) == 100
    assert clamp_value(-5, 0, 100) == 0
    assert clamp_value(42, 0, 100) == 42
