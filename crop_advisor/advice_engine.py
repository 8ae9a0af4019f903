"""
Rule-based advice: advantages, challenges, and actionable recommendations
for one crop on one field.

Rules are evaluated independently and in a fixed order, so the output is
reproducible.  No rule raises; when nothing fires the list is empty.
"""

from dataclasses import dataclass

from crop_advisor.config import (
    ADVICE_EXCELLENT_SCORE,
    ADVICE_SUBOPTIMAL_SCORE,
    ADVICE_WATER_EFFICIENT_MM,
    ADVICE_HIGH_WATER_MM,
    ADVICE_LOW_NITROGEN_PPM,
    ADVICE_IRRIGATION_WATER_MM,
)
from crop_advisor.models import (
    CropDefinition,
    Demand,
    Preferences,
    SoilProfile,
    Trend,
)

EXCELLENT_CONDITIONS = "Excellent growing conditions"
HIGH_YIELD_POTENTIAL = "High yield potential"
STRONG_DEMAND        = "Strong market demand"
POSITIVE_TREND       = "Positive price trend"
WATER_EFFICIENT      = "Water efficient crop"
PREFERRED_CROP       = "Matches your preferred crops"

SUBOPTIMAL_CONDITIONS = "Suboptimal growing conditions"
LIMITED_DEMAND        = "Limited market demand"
HIGH_WATER            = "High water requirements"
INTENSIVE_MANAGEMENT  = "Requires intensive management"

RAISE_PH           = "Consider lime application to raise soil pH"
APPLY_NITROGEN     = "Apply nitrogen fertilizer before planting"
INSTALL_IRRIGATION = "Consider installing irrigation system"


@dataclass(frozen=True)
class Advice:
    advantages: tuple[str, ...]
    challenges: tuple[str, ...]
    recommendations: tuple[str, ...]


def get_advantages(crop: CropDefinition, score: float, preferences: Preferences | None = None) -> list[str]:
    advantages = []
    if score > ADVICE_EXCELLENT_SCORE:
        advantages.append(EXCELLENT_CONDITIONS)
        advantages.append(HIGH_YIELD_POTENTIAL)
    if crop.market_data.demand == Demand.HIGH:
        advantages.append(STRONG_DEMAND)
    if crop.market_data.trend == Trend.GROWING:
        advantages.append(POSITIVE_TREND)
    if crop.water_requirement < ADVICE_WATER_EFFICIENT_MM:
        advantages.append(WATER_EFFICIENT)
    if preferences is not None and crop.id in preferences.preferred_crops:
        advantages.append(PREFERRED_CROP)
    return advantages


def get_challenges(crop: CropDefinition, score: float) -> list[str]:
    challenges = []
    if score < ADVICE_SUBOPTIMAL_SCORE:
        challenges.append(SUBOPTIMAL_CONDITIONS)
    if crop.market_data.demand == Demand.LOW:
        challenges.append(LIMITED_DEMAND)
    if crop.water_requirement > ADVICE_HIGH_WATER_MM:
        challenges.append(HIGH_WATER)
    if crop.intensive_management:
        challenges.append(INTENSIVE_MANAGEMENT)
    return challenges


def get_recommendations(crop: CropDefinition, soil: SoilProfile, preferences: Preferences) -> list[str]:
    """Soil and resource fixes first, then the crop's own agronomic notes."""
    recommendations = []
    if soil.ph < crop.optimal_conditions.ph.min:
        recommendations.append(RAISE_PH)
    if soil.nitrogen < ADVICE_LOW_NITROGEN_PPM:
        recommendations.append(APPLY_NITROGEN)
    if not preferences.has_irrigation and crop.water_requirement > ADVICE_IRRIGATION_WATER_MM:
        recommendations.append(INSTALL_IRRIGATION)
    recommendations.extend(crop.agronomic_notes)
    return recommendations


def generate_advice(
    crop: CropDefinition,
    score: float,
    soil: SoilProfile,
    preferences: Preferences,
) -> Advice:
    return Advice(
        advantages=tuple(get_advantages(crop, score, preferences)),
        challenges=tuple(get_challenges(crop, score)),
        recommendations=tuple(get_recommendations(crop, soil, preferences)),
    )
