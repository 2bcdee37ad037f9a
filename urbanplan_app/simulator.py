"""Scenario simulation for city-scale climate interventions."""

from __future__ import annotations

import logging
import math
import re
from typing import Dict, Tuple

from .constants import DEFAULT_CITY
from .models import (
    CityBaseline,
    CostBenefit,
    EnvironmentalImpact,
    ImpactMetrics,
    ImplementationPhase,
    MetricChange,
    RiskAssessment,
    Scenario,
    SimulationResult,
)
from .scoring import clamp_value

logger = logging.getLogger(__name__)

# Post-intervention bounds.
TEMPERATURE_FLOOR = 20.0
AIR_QUALITY_FLOOR = 50.0
PERCENT_CAP = 100.0

# Environmental impact coefficients per °C of cooling and % of added green space.
_CO2_PER_DEGREE = 150
_CO2_PER_GREEN = 25
_ENERGY_PER_DEGREE = 200
_ENERGY_PER_GREEN = 50
_FLOOD_PER_GREEN = 2.5
_FLOOD_PER_DEGREE = 5

_SAVINGS_RATES = {
    "green-roofs": 0.18,
    "transit": 0.22,
    "flood": 0.15,
}
_DEFAULT_SAVINGS_RATE = 0.12

_COST_SUFFIXES = {"": 1, "K": 1_000, "M": 1_000_000, "B": 1_000_000_000}
_COST_PATTERN = re.compile(r"^\s*\$?\s*([0-9][0-9,]*(?:\.[0-9]+)?)\s*([KMB]?)\s*$", re.IGNORECASE)


class ScenarioNotFound(KeyError):
    """Raised when a scenario id is not in the catalog."""


SCENARIOS: Tuple[Scenario, ...] = (
    Scenario(
        id="green-roofs",
        name="Green Roof Initiative",
        description="Implementation of green roofs on commercial and residential buildings",
        interventions=(
            "Install green roofs on 50% of commercial buildings",
            "Retrofit residential buildings with rooftop gardens",
            "Implement stormwater management systems",
            "Create green roof maintenance programs",
        ),
        estimated_cost="$2.5M",
        timeline="18 months",
        impact=ImpactMetrics(3.2, 18, 15, 78),
        status="draft",
    ),
    Scenario(
        id="urban-forest",
        name="Urban Forest Expansion",
        description="Strategic tree planting and forest corridor development",
        interventions=(
            "Plant 10,000 native trees across the city",
            "Create 5 new forest corridors connecting existing parks",
            "Implement tree canopy monitoring system",
            "Establish community tree adoption programs",
        ),
        estimated_cost="$1.8M",
        timeline="24 months",
        impact=ImpactMetrics(4.2, 32, 22, 88),
        status="completed",
    ),
    Scenario(
        id="cool-pavements",
        name="Cool Pavement Program",
        description="Replacement of traditional asphalt with reflective materials",
        interventions=(
            "Replace asphalt in high-traffic areas with cool pavements",
            "Implement permeable pavement in parking lots",
            "Install reflective coatings on existing roads",
            "Create cool pavement maintenance protocols",
        ),
        estimated_cost="$3.2M",
        timeline="30 months",
        impact=ImpactMetrics(2.5, 8, 12, 65),
        status="recommended",
    ),
    Scenario(
        id="community-cooling",
        name="Community Cooling Centers",
        description="Network of accessible cooling centers and heat shelters",
        interventions=(
            "Establish 15 cooling centers in high-heat areas",
            "Install misting stations in public spaces",
            "Create heat emergency response protocols",
            "Develop community heat awareness programs",
        ),
        estimated_cost="$1.2M",
        timeline="12 months",
        impact=ImpactMetrics(1.2, 5, 8, 92),
        status="simulating",
    ),
)

CITY_BASELINES: Dict[str, CityBaseline] = {
    "Mumbai, Maharashtra": CityBaseline(temperature=42.5, green_space=18, air_quality=198, engagement=72),
    "Delhi, NCT": CityBaseline(temperature=45.2, green_space=15, air_quality=285, engagement=68),
    "Bangalore, Karnataka": CityBaseline(temperature=38.8, green_space=28, air_quality=156, engagement=75),
    "Chennai, Tamil Nadu": CityBaseline(temperature=41.3, green_space=22, air_quality=178, engagement=70),
    "Kolkata, West Bengal": CityBaseline(temperature=40.1, green_space=25, air_quality=201, engagement=73),
}

_BASE_RECOMMENDATIONS = (
    "Implement in phases to manage costs and minimize disruption",
    "Focus on high-impact areas first based on current data",
    "Engage community stakeholders early in the planning process",
    "Monitor progress with key performance indicators",
)

_CITY_RECOMMENDATIONS: Dict[str, Tuple[str, ...]] = {
    "Mumbai, Maharashtra": (
        "Consider coastal flooding risks in implementation",
        "Leverage existing green space initiatives",
        "Coordinate with monsoon season planning",
    ),
    "Delhi, NCT": (
        "Address air quality concerns as priority",
        "Consider winter implementation timing",
        "Coordinate with existing pollution control measures",
    ),
    "Bangalore, Karnataka": (
        "Build on existing tech ecosystem partnerships",
        "Consider IT corridor specific needs",
        "Leverage startup community engagement",
    ),
    "Chennai, Tamil Nadu": (
        "Consider cyclone and flood risks",
        "Coordinate with water management systems",
        "Leverage coastal ecosystem benefits",
    ),
    "Kolkata, West Bengal": (
        "Consider monsoon season impacts",
        "Leverage cultural heritage in design",
        "Coordinate with existing urban renewal projects",
    ),
}

IMPLEMENTATION_PLAN: Tuple[ImplementationPhase, ...] = (
    ImplementationPhase(
        phase="Phase 1: Planning & Design",
        duration="3-4 months",
        activities=(
            "Stakeholder engagement and consultation",
            "Detailed feasibility studies",
            "Design and engineering planning",
            "Regulatory approvals and permits",
        ),
    ),
    ImplementationPhase(
        phase="Phase 2: Pilot Implementation",
        duration="6-8 months",
        activities=(
            "Pilot project in selected area",
            "Community feedback collection",
            "Performance monitoring",
            "Process refinement",
        ),
    ),
    ImplementationPhase(
        phase="Phase 3: Full Rollout",
        duration="12-18 months",
        activities=(
            "Large-scale implementation",
            "Continuous monitoring",
            "Community engagement",
            "Performance optimization",
        ),
    ),
)


def get_scenario(scenario_id: str) -> Scenario:
    for scenario in SCENARIOS:
        if scenario.id == scenario_id:
            return scenario
    raise ScenarioNotFound(scenario_id)


def baseline_for(city: str) -> CityBaseline:
    baseline = CITY_BASELINES.get(city)
    if baseline is None:
        logger.debug("No baseline for %r; using %s", city, DEFAULT_CITY)
        baseline = CITY_BASELINES[DEFAULT_CITY]
    return baseline


def parse_cost(cost: str) -> float:
    """Parse display costs such as ``"$2.5M"`` or ``"$750,000"`` into dollars."""

    match = _COST_PATTERN.match(cost)
    if not match:
        raise ValueError(f"Unrecognised cost format: {cost!r}")
    amount = float(match.group(1).replace(",", ""))
    return amount * _COST_SUFFIXES[match.group(2).upper()]


def savings_rate(scenario_id: str) -> float:
    return _SAVINGS_RATES.get(scenario_id, _DEFAULT_SAVINGS_RATE)


def cost_benefit(scenario: Scenario) -> CostBenefit:
    cost = parse_cost(scenario.estimated_cost)
    rate = savings_rate(scenario.id)
    annual = cost * rate
    return CostBenefit(
        total_cost=scenario.estimated_cost,
        total_cost_value=cost,
        annual_savings=annual,
        payback_years=math.ceil(cost / annual) if annual else 0,
        roi_percent=int(round(rate * 100)),
    )


def environmental_impact(impact: ImpactMetrics) -> EnvironmentalImpact:
    cooling = impact.temperature_reduction
    greening = impact.green_space_increase
    return EnvironmentalImpact(
        co2_reduction=int(round(cooling * _CO2_PER_DEGREE + greening * _CO2_PER_GREEN)),
        energy_savings=int(round(cooling * _ENERGY_PER_DEGREE + greening * _ENERGY_PER_GREEN)),
        flood_risk_reduction=int(round(greening * _FLOOD_PER_GREEN + cooling * _FLOOD_PER_DEGREE)),
    )


def scenario_recommendations(city: str) -> Tuple[str, ...]:
    return _BASE_RECOMMENDATIONS + _CITY_RECOMMENDATIONS.get(city, ())


def risk_assessment(scenario: Scenario) -> RiskAssessment:
    return RiskAssessment(
        high=(
            "Budget overruns due to unforeseen site conditions",
            "Community resistance to change",
            "Regulatory delays and permit issues",
        ),
        medium=(
            "Weather-related implementation delays",
            "Supply chain disruptions",
            "Technical challenges during implementation",
        ),
        low=(
            "Minor design adjustments needed",
            "Temporary service disruptions",
            "Learning curve for maintenance staff",
        ),
    )


def project_metrics(baseline: CityBaseline, impact: ImpactMetrics) -> Dict[str, MetricChange]:
    """Apply intervention deltas to a baseline with metric-specific bounds."""

    return {
        "temperature": MetricChange(
            before=baseline.temperature,
            after=round(
                max(baseline.temperature - impact.temperature_reduction, TEMPERATURE_FLOOR), 2
            ),
        ),
        "green_space": MetricChange(
            before=baseline.green_space,
            after=clamp_value(baseline.green_space + impact.green_space_increase, 0.0, PERCENT_CAP),
        ),
        "air_quality": MetricChange(
            before=baseline.air_quality,
            after=max(baseline.air_quality - impact.air_quality_improvement, AIR_QUALITY_FLOOR),
        ),
        "engagement": MetricChange(
            before=baseline.engagement,
            after=clamp_value(baseline.engagement + impact.community_engagement, 0.0, PERCENT_CAP),
        ),
    }


def simulate(scenario_id: str, city: str = DEFAULT_CITY) -> SimulationResult:
    """Project a scenario's before/after metrics and cost-benefit for a city."""

    scenario = get_scenario(scenario_id)
    result = SimulationResult(
        scenario_id=scenario.id,
        scenario_name=scenario.name,
        city=city,
        before_after=project_metrics(baseline_for(city), scenario.impact),
        cost_benefit=cost_benefit(scenario),
        environmental_impact=environmental_impact(scenario.impact),
        recommendations=scenario_recommendations(city),
        implementation_plan=IMPLEMENTATION_PLAN,
        risks=risk_assessment(scenario),
    )
    logger.debug("Simulated %s for %s", scenario.id, city)
    return result


__all__ = [
    "ScenarioNotFound",
    "SCENARIOS",
    "CITY_BASELINES",
    "IMPLEMENTATION_PLAN",
    "TEMPERATURE_FLOOR",
    "AIR_QUALITY_FLOOR",
    "PERCENT_CAP",
    "get_scenario",
    "baseline_for",
    "parse_cost",
    "savings_rate",
    "cost_benefit",
    "environmental_impact",
    "scenario_recommendations",
    "risk_assessment",
    "project_metrics",
    "simulate",
]
