"""Data models and mock dashboard readings for the app."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Optional, Tuple, Union

from .constants import DATA_SOURCES

AnswerValue = Union[int, float, str]


@dataclass(frozen=True)
class SurveyQuestion:
    id: str
    type: str  # multiple-choice | rating | text | location
    question: str
    category: str
    required: bool = True
    options: Tuple[str, ...] = ()


@dataclass(frozen=True)
class SurveyAnswer:
    question_id: str
    category: str
    value: AnswerValue

    @property
    def is_numeric(self) -> bool:
        return isinstance(self.value, (int, float)) and not isinstance(self.value, bool)


@dataclass(frozen=True)
class SurveyResponse:
    id: str
    timestamp: datetime
    answers: Tuple[SurveyAnswer, ...]
    location: str
    user_type: str = "Resident"

    @property
    def responses(self) -> Dict[str, AnswerValue]:
        return {answer.question_id: answer.value for answer in self.answers}

    def answers_for(self, category: str) -> Tuple[SurveyAnswer, ...]:
        return tuple(answer for answer in self.answers if answer.category == category)


@dataclass(frozen=True)
class CategoryAnalysis:
    category: str
    score: float
    trend: str
    insights: Tuple[str, ...]
    recommendations: Tuple[str, ...]
    priority: str
    survey_count: int = 0
    answer_count: int = 0


@dataclass(frozen=True)
class ImpactMetrics:
    temperature_reduction: float
    green_space_increase: float
    air_quality_improvement: float
    community_engagement: float


@dataclass(frozen=True)
class Scenario:
    id: str
    name: str
    description: str
    interventions: Tuple[str, ...]
    estimated_cost: str
    timeline: str
    impact: ImpactMetrics
    status: str = "draft"


@dataclass(frozen=True)
class CityBaseline:
    temperature: float  # °C
    green_space: float  # % coverage
    air_quality: float  # AQI
    engagement: float  # % participation


@dataclass(frozen=True)
class MetricChange:
    before: float
    after: float

    @property
    def delta(self) -> float:
        return round(self.after - self.before, 2)


@dataclass(frozen=True)
class CostBenefit:
    total_cost: str
    total_cost_value: float
    annual_savings: float
    payback_years: int
    roi_percent: int

    @property
    def annual_savings_display(self) -> str:
        return f"${self.annual_savings / 1_000_000:.1f}M"

    @property
    def payback_display(self) -> str:
        return f"{self.payback_years} years"

    @property
    def roi_display(self) -> str:
        return f"{self.roi_percent}%"


@dataclass(frozen=True)
class EnvironmentalImpact:
    co2_reduction: int  # tons / year
    energy_savings: int  # MWh / year
    flood_risk_reduction: int  # %


@dataclass(frozen=True)
class ImplementationPhase:
    phase: str
    duration: str
    activities: Tuple[str, ...]


@dataclass(frozen=True)
class RiskAssessment:
    high: Tuple[str, ...]
    medium: Tuple[str, ...]
    low: Tuple[str, ...]


@dataclass(frozen=True)
class SimulationResult:
    scenario_id: str
    scenario_name: str
    city: str
    before_after: Dict[str, MetricChange]
    cost_benefit: CostBenefit
    environmental_impact: EnvironmentalImpact
    recommendations: Tuple[str, ...]
    implementation_plan: Tuple[ImplementationPhase, ...]
    risks: RiskAssessment


@dataclass(frozen=True)
class HealthMetrics:
    air_quality: float
    temperature: float
    vegetation: float
    water_quality: float
    waste_management: float
    public_health: float
    transport_efficiency: float
    energy_consumption: float

    def as_dict(self) -> Dict[str, float]:
        return {
            "air_quality": self.air_quality,
            "temperature": self.temperature,
            "vegetation": self.vegetation,
            "water_quality": self.water_quality,
            "waste_management": self.waste_management,
            "public_health": self.public_health,
            "transport_efficiency": self.transport_efficiency,
            "energy_consumption": self.energy_consumption,
        }


DEFAULT_HEALTH_METRICS = HealthMetrics(
    air_quality=65,
    temperature=58,
    vegetation=45,
    water_quality=72,
    waste_management=68,
    public_health=75,
    transport_efficiency=60,
    energy_consumption=55,
)


@dataclass(frozen=True)
class ReportDocument:
    title: str
    generated_at: datetime
    location: str
    total_surveys: int
    average_score: float
    key_findings: Tuple[str, ...]
    recommendations: Tuple[str, ...]
    categories: Tuple[CategoryAnalysis, ...]


@dataclass(frozen=True)
class DataSource:
    name: str
    description: str
    url: str
    last_updated: str
    processing_time: str
    dataset: str
    units: str
    uncertainty: Optional[str] = None

    @classmethod
    def from_key(cls, key: str, **overrides: str) -> "DataSource":
        values = dict(DATA_SOURCES[key])
        values.update(overrides)
        return cls(**values)


@dataclass(frozen=True)
class MetricReading:
    title: str
    value: str
    unit: str
    change: str
    change_type: str  # increase | decrease | neutral
    description: str
    source: DataSource
    timestamp: str
    uncertainty: Optional[str] = None
    trend: str = "stable"
    priority: str = "medium"


def dashboard_metrics(timestamp: str) -> Tuple[MetricReading, ...]:
    """Return the mocked headline metric cards shown on the dashboard."""

    return (
        MetricReading(
            title="Surface Temperature",
            value="42",
            unit="°C",
            change="+3.2°C",
            change_type="increase",
            description="Average surface temperature from ECOSTRESS data",
            source=DataSource.from_key("ecostress"),
            timestamp=timestamp,
            uncertainty="1.5°C",
            trend="up",
            priority="high",
        ),
        MetricReading(
            title="Urban Heat Index",
            value="0.85",
            unit="scale 0-1",
            change="+0.05",
            change_type="increase",
            description="Normalized heat index (0.85 = 42°C equivalent)",
            source=DataSource.from_key("ecostress"),
            timestamp=timestamp,
            uncertainty="0.02",
            trend="up",
            priority="high",
        ),
        MetricReading(
            title="Green Space Coverage",
            value="18",
            unit="%",
            change="-2.1%",
            change_type="decrease",
            description="Percentage of urban area with vegetation",
            source=DataSource.from_key("landsat"),
            timestamp=timestamp,
            uncertainty="2%",
            trend="down",
            priority="critical",
        ),
        MetricReading(
            title="Community Engagement",
            value="92",
            unit="%",
            change="+7%",
            change_type="increase",
            description="Resident participation in planning",
            source=DataSource.from_key(
                "viirs", name="Local Surveys", dataset="Community Engagement Data"
            ),
            timestamp=timestamp,
            trend="up",
            priority="low",
        ),
    )


__all__ = [
    "AnswerValue",
    "SurveyQuestion",
    "SurveyAnswer",
    "SurveyResponse",
    "CategoryAnalysis",
    "ImpactMetrics",
    "Scenario",
    "CityBaseline",
    "MetricChange",
    "CostBenefit",
    "EnvironmentalImpact",
    "ImplementationPhase",
    "RiskAssessment",
    "SimulationResult",
    "HealthMetrics",
    "DEFAULT_HEALTH_METRICS",
    "ReportDocument",
    "DataSource",
    "MetricReading",
    "dashboard_metrics",
]
