from __future__ import annotations

import pytest

from urbanplan_app.models import CityBaseline, ImpactMetrics
from urbanplan_app.simulator import (
    AIR_QUALITY_FLOOR,
    CITY_BASELINES,
    SCENARIOS,
    TEMPERATURE_FLOOR,
    ScenarioNotFound,
    baseline_for,
    parse_cost,
    project_metrics,
    simulate,
)


def test_green_roofs_in_mumbai():
    result = simulate("green-roofs", "Mumbai, Maharashtra")

    temperature = result.before_after["temperature"]
    assert (temperature.before, temperature.after) == (42.5, 39.3)
    assert result.before_after["green_space"].after == 36
    assert result.before_after["air_quality"].after == 183
    assert result.before_after["engagement"].after == 100

    cost = result.cost_benefit
    assert cost.total_cost_value == 2_500_000
    assert cost.annual_savings == pytest.approx(450_000)
    assert cost.annual_savings_display == "$0.5M"
    assert cost.payback_years == 6
    assert cost.roi_percent == 18

    impact = result.environmental_impact
    assert (impact.co2_reduction, impact.energy_savings, impact.flood_risk_reduction) == (930, 1540, 61)


def test_default_savings_rate_applies_to_other_scenarios():
    cost = simulate("urban-forest", "Delhi, NCT").cost_benefit

    assert cost.roi_display == "12%"
    assert cost.payback_display == "9 years"


def test_recommendations_include_city_specific_advice():
    result = simulate("cool-pavements", "Delhi, NCT")

    assert len(result.recommendations) == 7
    assert result.recommendations[0] == "Implement in phases to manage costs and minimize disruption"
    assert "Address air quality concerns as priority" in result.recommendations


def test_plan_and_risks_are_always_present():
    result = simulate("community-cooling", "Kolkata, West Bengal")

    assert [phase.phase for phase in result.implementation_plan] == [
        "Phase 1: Planning & Design",
        "Phase 2: Pilot Implementation",
        "Phase 3: Full Rollout",
    ]
    assert len(result.risks.high) == len(result.risks.medium) == len(result.risks.low) == 3


@pytest.mark.parametrize("scenario", SCENARIOS, ids=lambda s: s.id)
@pytest.mark.parametrize("city", list(CITY_BASELINES))
def test_simulation_clamps_hold_for_every_combination(scenario, city):
    after = {key: change.after for key, change in simulate(scenario.id, city).before_after.items()}

    assert after["temperature"] >= TEMPERATURE_FLOOR
    assert after["air_quality"] >= AIR_QUALITY_FLOOR
    assert after["green_space"] <= 100
    assert after["engagement"] <= 100


def test_extreme_impacts_hit_the_bounds():
    baseline = CityBaseline(temperature=22, green_space=95, air_quality=60, engagement=90)
    impact = ImpactMetrics(10, 20, 40, 30)

    after = {key: change.after for key, change in project_metrics(baseline, impact).items()}

    assert after == {"temperature": 20, "green_space": 100, "air_quality": 50, "engagement": 100}


def test_unknown_city_uses_default_baseline():
    assert baseline_for("Austin, TX") == CITY_BASELINES["Mumbai, Maharashtra"]


def test_unknown_scenario_raises():
    with pytest.raises(ScenarioNotFound):
        simulate("sky-gardens", "Mumbai, Maharashtra")


@pytest.mark.parametrize(
    "text, dollars",
    [("$2.5M", 2_500_000), ("$750K", 750_000), ("$1,200,000", 1_200_000), ("$1B", 1_000_000_000)],
)
def test_parse_cost(text, dollars):
    assert parse_cost(text) == dollars


def test_parse_cost_rejects_garbage():
    with pytest.raises(ValueError):
        parse_cost("two million")
