"""
Domain types for the suitability engine.

Every entity is an immutable snapshot built fresh for one analysis run:
inputs (soil, weather, field, preferences, catalog entries) are never
patched after creation, and results are recomputed rather than updated.
"""

from dataclasses import dataclass, field, asdict
from enum import Enum


class SoilTexture(str, Enum):
    SANDY = "sandy"
    LOAMY = "loamy"
    CLAY = "clay"


class Drainage(str, Enum):
    POOR = "poor"
    MODERATE = "moderate"
    GOOD = "good"
    EXCELLENT = "excellent"


class Demand(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Trend(str, Enum):
    DECLINING = "declining"
    STABLE = "stable"
    GROWING = "growing"


class Experience(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    EXPERT = "expert"


class LaborAvailability(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class RiskLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


# ---------------------------------------------------------------------------
# Inputs
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ValueRange:
    min: float
    max: float

    def contains(self, value: float) -> bool:
        return self.min <= value <= self.max

    def deviation(self, value: float) -> float:
        """Distance from value to the nearest bound; 0.0 inside the range."""
        if self.contains(value):
            return 0.0
        return min(abs(value - self.min), abs(value - self.max))


@dataclass(frozen=True)
class SoilProfile:
    ph: float
    nitrogen: float
    phosphorus: float
    potassium: float
    organic_matter: float
    moisture: float
    temperature: float
    salinity: float
    texture: SoilTexture
    drainage: Drainage = Drainage.GOOD


@dataclass(frozen=True)
class WeatherProfile:
    average_temperature: float
    min_temperature: float
    max_temperature: float
    rainfall: float
    humidity: float
    sunlight_hours: float
    wind_speed: float
    frost_days: float
    growing_season: float


@dataclass(frozen=True)
class OptimalConditions:
    temperature: ValueRange
    rainfall: ValueRange
    ph: ValueRange
    soil_types: frozenset[SoilTexture]


@dataclass(frozen=True)
class MarketData:
    avg_price: float
    demand: Demand
    trend: Trend


@dataclass(frozen=True)
class CropDefinition:
    id: str
    name: str
    varieties: tuple[str, ...]
    optimal_conditions: OptimalConditions
    market_data: MarketData
    growth_duration: int
    water_requirement: float
    nitrogen_fixing: bool = False
    organic_matter_responsive: bool = False
    pest_resistant: bool = False
    intensive_management: bool = False
    agronomic_notes: tuple[str, ...] = ()

    @property
    def primary_variety(self) -> str | None:
        return self.varieties[0] if self.varieties else None


@dataclass(frozen=True)
class Preferences:
    focus_on_profit: bool = True
    focus_on_sustainability: bool = False
    focus_on_risk_reduction: bool = False
    farming_experience: Experience = Experience.INTERMEDIATE
    has_irrigation: bool = False
    labor_availability: LaborAvailability = LaborAvailability.MEDIUM
    budget: float = 50_000.0
    preferred_crops: frozenset[str] = frozenset()
    avoid_crops: frozenset[str] = frozenset()


@dataclass(frozen=True)
class FieldContext:
    field_id: str
    area: float
    soil_texture: SoilTexture
    name: str | None = None


# ---------------------------------------------------------------------------
# Outputs
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class FactorScores:
    soil: float
    weather: float
    market: float
    sustainability: float

    def as_dict(self) -> dict[str, float]:
        return {
            "soil": self.soil,
            "weather": self.weather,
            "market": self.market,
            "sustainability": self.sustainability,
        }


@dataclass(frozen=True)
class CropSuitability:
    crop_id: str
    crop_name: str
    variety: str | None
    suitability_score: float
    confidence: float
    factors: FactorScores
    expected_yield: float
    expected_revenue: float
    expected_costs: float
    expected_profit: float
    profit_margin_pct: float
    roi_pct: float
    risk_level: RiskLevel
    water_requirement: float
    fertilizer_requirement: float
    labor_requirement: float
    growth_duration: int
    planting_window: str
    harvest_window: str
    advantages: tuple[str, ...] = field(default_factory=tuple)
    challenges: tuple[str, ...] = field(default_factory=tuple)
    recommendations: tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        """Plain-JSON view (enums as values, tuples as lists)."""
        d = asdict(self)
        d["risk_level"] = self.risk_level.value
        for key in ("advantages", "challenges", "recommendations"):
            d[key] = list(d[key])
        return d


# ---------------------------------------------------------------------------
# UI-owned flow (consumed by app.py; the engine never reads it)
# ---------------------------------------------------------------------------

class ViewState(str, Enum):
    SETUP = "setup"
    ANALYZING = "analyzing"
    RESULTS = "results"
    DETAILS = "details"


VIEW_TRANSITIONS: dict[ViewState, frozenset[ViewState]] = {
    ViewState.SETUP:     frozenset({ViewState.ANALYZING}),
    ViewState.ANALYZING: frozenset({ViewState.RESULTS}),
    ViewState.RESULTS:   frozenset({ViewState.DETAILS, ViewState.SETUP}),
    ViewState.DETAILS:   frozenset({ViewState.RESULTS}),
}


def can_transition(src: ViewState, dst: ViewState) -> bool:
    return dst in VIEW_TRANSITIONS.get(src, frozenset())
