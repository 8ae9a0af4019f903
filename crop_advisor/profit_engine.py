"""
Profit engine: project yield, revenue, cost, profit, and input needs per crop.

Area is in hectares, yield in tons, money in the catalog's currency.

Yield adjustment:
    condition_multiplier = YIELD_BASE_FACTOR + YIELD_CONDITION_FACTOR × (soil + weather) / 200
    expected_yield       = base_yield_per_ha × area × condition_multiplier

    This means:
      - soil = weather = 100 → 125% of the base yield
      - soil = weather = 0   → 75% of the base yield (minimum conservative estimate)

Cost adjustment:
    costs = base_cost_per_ha × area
            × IRRIGATION_COST_FACTOR  (irrigation available: equipment / operating overhead)
            × LOW_LABOR_COST_FACTOR   (labour availability is low)
"""

from dataclasses import dataclass

import numpy as np

from crop_advisor.config import (
    YIELD_BASE_FACTOR,
    YIELD_CONDITION_FACTOR,
    IRRIGATION_COST_FACTOR,
    LOW_LABOR_COST_FACTOR,
    NITROGEN_REFERENCE_PPM,
)
from crop_advisor.crop_catalog import CropProfile
from crop_advisor.models import (
    CropDefinition,
    FactorScores,
    LaborAvailability,
    Preferences,
    SoilProfile,
)


@dataclass(frozen=True)
class EconomicProjection:
    expected_yield: float
    expected_revenue: float
    expected_costs: float
    expected_profit: float
    profit_margin_pct: float
    roi_pct: float
    fertilizer_requirement: float
    labor_requirement: float


def condition_multiplier(soil_score: float, weather_score: float) -> float:
    """Yield multiplier in [0.75, 1.25] from the soil and weather factor scores."""
    m = YIELD_BASE_FACTOR + YIELD_CONDITION_FACTOR * ((soil_score + weather_score) / 200.0)
    return float(np.clip(m, YIELD_BASE_FACTOR, YIELD_BASE_FACTOR + YIELD_CONDITION_FACTOR))


def expected_costs(profile: CropProfile, area: float, preferences: Preferences) -> float:
    total = profile.base_cost_per_ha * area
    if preferences.has_irrigation:
        total *= IRRIGATION_COST_FACTOR
    if preferences.labor_availability == LaborAvailability.LOW:
        total *= LOW_LABOR_COST_FACTOR
    return total


def safe_pct(numerator: float, denominator: float) -> float:
    """numerator / denominator × 100, or 0.0 when the denominator is zero."""
    if denominator == 0:
        return 0.0
    return numerator / denominator * 100.0


def fertilizer_requirement(profile: CropProfile, soil: SoilProfile) -> float:
    """kg/ha: base dose scaled up on nitrogen-poor soil, down on rich soil, never negative."""
    adjustment = 1.0 - soil.nitrogen / NITROGEN_REFERENCE_PPM
    return max(0.0, profile.base_fertilizer_per_ha * (1.0 + adjustment))


def labor_requirement(profile: CropProfile, area: float) -> float:
    return profile.base_labor_per_ha * area


def project_economics(
    crop: CropDefinition,
    profile: CropProfile,
    area: float,
    factors: FactorScores,
    soil: SoilProfile,
    preferences: Preferences,
) -> EconomicProjection:
    """
    Compute economic output for a single crop on one field.

    Parameters
    ----------
    crop : CropDefinition
        Catalog entry (supplies the market price).
    profile : CropProfile
        Per-hectare constants for the crop (or the default profile).
    area : float
        Field area in hectares.
    factors : FactorScores
        Soil and weather scores drive the yield multiplier.
    soil : SoilProfile
        Nitrogen level drives the fertilizer requirement.
    preferences : Preferences
        Irrigation and labour availability drive the cost multipliers.

    Returns
    -------
    EconomicProjection (unrounded; rounding is a presentation concern).
    """
    yield_t = profile.base_yield_per_ha * area * condition_multiplier(factors.soil, factors.weather)
    revenue = yield_t * crop.market_data.avg_price
    costs = expected_costs(profile, area, preferences)
    profit = revenue - costs

    return EconomicProjection(
        expected_yield=yield_t,
        expected_revenue=revenue,
        expected_costs=costs,
        expected_profit=profit,
        profit_margin_pct=safe_pct(profit, revenue),
        roi_pct=safe_pct(profit, costs),
        fertilizer_requirement=fertilizer_requirement(profile, soil),
        labor_requirement=labor_requirement(profile, area),
    )
