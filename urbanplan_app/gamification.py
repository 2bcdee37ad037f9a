"""City builder game: spend a budget on interventions and complete missions."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Dict, Tuple

logger = logging.getLogger(__name__)

STARTING_BUDGET = 1_000_000


class InterventionNotFound(KeyError):
    """Raised when an intervention id is not in the catalog."""


class InsufficientBudget(ValueError):
    """Raised when the remaining budget cannot cover an intervention."""


@dataclass(frozen=True)
class Intervention:
    id: str
    name: str
    kind: str
    cost: int
    impact: Dict[str, float]
    description: str
    color: str


@dataclass(frozen=True)
class Mission:
    id: str
    title: str
    description: str
    metric: str
    target: float
    reward: int
    lower_is_better: bool

    def is_met(self, value: float) -> bool:
        return value <= self.target if self.lower_is_better else value >= self.target


@dataclass(frozen=True)
class CityState:
    aqi: float
    temperature: float
    vegetation: float
    health: float
    budget: int


@dataclass(frozen=True)
class GameState:
    city: CityState
    applied: Tuple[str, ...] = ()
    completed_missions: Tuple[str, ...] = ()

    def mission_progress(self) -> Dict[str, float]:
        return {mission.id: getattr(self.city, mission.metric) for mission in MISSIONS}


INTERVENTIONS: Tuple[Intervention, ...] = (
    Intervention(
        id="tree-planting",
        name="Plant Trees",
        kind="tree",
        cost=50_000,
        impact={"aqi": -15, "temperature": -2, "vegetation": 5, "health": 8},
        description="Plant 1000 trees in urban areas",
        color="#22c55e",
    ),
    Intervention(
        id="urban-park",
        name="Create Urban Park",
        kind="park",
        cost=200_000,
        impact={"aqi": -25, "temperature": -4, "vegetation": 15, "health": 15},
        description="Build a 5-acre urban park with green infrastructure",
        color="#10b981",
    ),
    Intervention(
        id="electric-transport",
        name="Electric Transport",
        kind="transport",
        cost=300_000,
        impact={"aqi": -30, "temperature": -1, "vegetation": 0, "health": 12},
        description="Deploy electric buses and charging stations",
        color="#3b82f6",
    ),
    Intervention(
        id="green-building",
        name="Green Building",
        kind="building",
        cost=150_000,
        impact={"aqi": -10, "temperature": -3, "vegetation": 8, "health": 6},
        description="Retrofit buildings with green roofs and walls",
        color="#8b5cf6",
    ),
    Intervention(
        id="solar-farm",
        name="Solar Farm",
        kind="solar",
        cost=400_000,
        impact={"aqi": -20, "temperature": -2, "vegetation": 0, "health": 10},
        description="Install solar panels on rooftops and open spaces",
        color="#f59e0b",
    ),
)

MISSIONS: Tuple[Mission, ...] = (
    Mission(
        id="reduce-pollution",
        title="Clean Air Challenge",
        description="Reduce AQI below 150 in downtown area",
        metric="aqi",
        target=150,
        reward=50_000,
        lower_is_better=True,
    ),
    Mission(
        id="increase-greenery",
        title="Green City Mission",
        description="Increase vegetation coverage to 30%",
        metric="vegetation",
        target=30,
        reward=75_000,
        lower_is_better=False,
    ),
    Mission(
        id="cool-city",
        title="Cool City Initiative",
        description="Reduce average temperature below 38°C",
        metric="temperature",
        target=38,
        reward=100_000,
        lower_is_better=True,
    ),
)


def new_game() -> GameState:
    return GameState(
        city=CityState(aqi=198, temperature=42, vegetation=18, health=65, budget=STARTING_BUDGET)
    )


def get_intervention(intervention_id: str) -> Intervention:
    for intervention in INTERVENTIONS:
        if intervention.id == intervention_id:
            return intervention
    raise InterventionNotFound(intervention_id)


def _apply_impact(city: CityState, intervention: Intervention) -> CityState:
    impact = intervention.impact
    return CityState(
        aqi=max(0, city.aqi + impact["aqi"]),
        temperature=max(20, city.temperature + impact["temperature"]),
        vegetation=min(100, city.vegetation + impact["vegetation"]),
        health=min(100, city.health + impact["health"]),
        budget=city.budget - intervention.cost,
    )


def apply_intervention(state: GameState, intervention_id: str) -> GameState:
    """Return the state after buying ``intervention_id``.

    Missions newly met by the resulting city pay their reward once.
    """

    intervention = get_intervention(intervention_id)
    if state.city.budget < intervention.cost:
        raise InsufficientBudget(
            f"{intervention.name} costs ${intervention.cost:,} but only "
            f"${state.city.budget:,} remains"
        )

    city = _apply_impact(state.city, intervention)
    completed = list(state.completed_missions)
    for mission in MISSIONS:
        if mission.id in completed or not mission.is_met(getattr(city, mission.metric)):
            continue
        completed.append(mission.id)
        city = replace(city, budget=city.budget + mission.reward)
        logger.info("Mission %s completed; awarded $%s", mission.id, f"{mission.reward:,}")

    return GameState(
        city=city,
        applied=state.applied + (intervention.id,),
        completed_missions=tuple(completed),
    )


__all__ = [
    "STARTING_BUDGET",
    "InterventionNotFound",
    "InsufficientBudget",
    "Intervention",
    "Mission",
    "CityState",
    "GameState",
    "INTERVENTIONS",
    "MISSIONS",
    "new_game",
    "get_intervention",
    "apply_intervention",
]
