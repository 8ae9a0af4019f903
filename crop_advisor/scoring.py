"""
Factor scorers: soil, weather, market, sustainability.

Each scorer maps (crop, context) -> score in [0, 100] and depends on no
other scorer's output.  Range terms follow one pattern: full points when
the observed value sits inside the crop's optimal range, otherwise full
points minus penalty × distance to the nearest bound, floored at zero.
Totals are clamped to [0, 100] even when the terms already fit.
"""

import numpy as np

from crop_advisor.config import (
    SCORE_MIN,
    SCORE_MAX,
    SOIL_PH_POINTS,
    SOIL_PH_PENALTY,
    SOIL_TEXTURE_MATCH_POINTS,
    SOIL_TEXTURE_MISS_POINTS,
    SOIL_NITROGEN_CAP,
    SOIL_NITROGEN_DIVISOR,
    SOIL_ORGANIC_CAP,
    SOIL_ORGANIC_FACTOR,
    WEATHER_TEMP_POINTS,
    WEATHER_TEMP_PENALTY,
    WEATHER_RAIN_POINTS,
    WEATHER_RAIN_PENALTY,
    WEATHER_SEASON_POINTS,
    MARKET_DEMAND_POINTS,
    MARKET_TREND_POINTS,
    MARKET_PRICE_CAP,
    MARKET_PRICE_DIVISOR,
    SUSTAINABILITY_BASE,
    WATER_EFFICIENT_MM,
    WATER_MODERATE_MM,
    WATER_EFFICIENT_BONUS,
    WATER_MODERATE_BONUS,
    NITROGEN_FIXING_BONUS,
    ORGANIC_MATTER_BONUS,
    HIGH_ORGANIC_MATTER_PCT,
    PEST_RESISTANCE_BONUS,
)
from crop_advisor.models import (
    CropDefinition,
    FactorScores,
    SoilProfile,
    ValueRange,
    WeatherProfile,
)


def clamp_score(value: float) -> float:
    """Clip to [SCORE_MIN, SCORE_MAX]; NaN collapses to SCORE_MIN."""
    if np.isnan(value):
        return SCORE_MIN
    return float(np.clip(value, SCORE_MIN, SCORE_MAX))


def range_points(value: float, optimal: ValueRange, points: float, penalty: float) -> float:
    """Full points inside the range, linear penalty per unit of deviation outside it."""
    if optimal.contains(value):
        return points
    return max(0.0, points - optimal.deviation(value) * penalty)


def score_soil(crop: CropDefinition, soil: SoilProfile) -> float:
    oc = crop.optimal_conditions
    score = range_points(soil.ph, oc.ph, SOIL_PH_POINTS, SOIL_PH_PENALTY)

    if soil.texture in oc.soil_types:
        score += SOIL_TEXTURE_MATCH_POINTS
    else:
        score += SOIL_TEXTURE_MISS_POINTS

    # Nutrients: negative lab readings contribute nothing
    score += min(SOIL_NITROGEN_CAP, max(0.0, soil.nitrogen) / SOIL_NITROGEN_DIVISOR)
    score += min(SOIL_ORGANIC_CAP, max(0.0, soil.organic_matter) * SOIL_ORGANIC_FACTOR)
    return clamp_score(score)


def season_fraction(growing_season: float, growth_duration: float) -> float:
    """Share of the crop's growth duration the local season can cover, in [0, 1]."""
    if growth_duration <= 0:
        return 1.0
    return float(np.clip(growing_season / growth_duration, 0.0, 1.0))


def score_weather(crop: CropDefinition, weather: WeatherProfile) -> float:
    oc = crop.optimal_conditions
    score = range_points(weather.average_temperature, oc.temperature,
                         WEATHER_TEMP_POINTS, WEATHER_TEMP_PENALTY)
    score += range_points(weather.rainfall, oc.rainfall,
                          WEATHER_RAIN_POINTS, WEATHER_RAIN_PENALTY)
    score += WEATHER_SEASON_POINTS * season_fraction(weather.growing_season, crop.growth_duration)
    return clamp_score(score)


def score_market(crop: CropDefinition) -> float:
    md = crop.market_data
    score = MARKET_DEMAND_POINTS[md.demand.value]
    score += MARKET_TREND_POINTS[md.trend.value]
    score += min(MARKET_PRICE_CAP, max(0.0, md.avg_price) / MARKET_PRICE_DIVISOR)
    return clamp_score(score)


def score_sustainability(crop: CropDefinition, soil: SoilProfile) -> float:
    score = SUSTAINABILITY_BASE

    if crop.water_requirement < WATER_EFFICIENT_MM:
        score += WATER_EFFICIENT_BONUS
    elif crop.water_requirement < WATER_MODERATE_MM:
        score += WATER_MODERATE_BONUS

    if crop.nitrogen_fixing:
        score += NITROGEN_FIXING_BONUS
    if crop.organic_matter_responsive and soil.organic_matter > HIGH_ORGANIC_MATTER_PCT:
        score += ORGANIC_MATTER_BONUS
    if crop.pest_resistant:
        score += PEST_RESISTANCE_BONUS
    return clamp_score(score)


def score_factors(crop: CropDefinition, soil: SoilProfile, weather: WeatherProfile) -> FactorScores:
    """Run all four scorers for one crop."""
    return FactorScores(
        soil=score_soil(crop, soil),
        weather=score_weather(crop, weather),
        market=score_market(crop),
        sustainability=score_sustainability(crop, soil),
    )
