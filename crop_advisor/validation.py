"""
Request validation: refuse to analyse without a selected field, and resolve
the soil / weather snapshot the scorers will see.

Callers pass soil and weather explicitly when they have measurements; the
sample profiles in config.DEFAULT_SOIL / DEFAULT_WEATHER are only used to
fill in what the caller left out.
"""

import logging
import math
from dataclasses import dataclass, field as dc_field, replace

from crop_advisor.config import DEFAULT_SOIL, DEFAULT_WEATHER
from crop_advisor.models import (
    Drainage,
    Experience,
    FieldContext,
    LaborAvailability,
    Preferences,
    SoilProfile,
    SoilTexture,
    WeatherProfile,
)

log = logging.getLogger(__name__)


class ValidationError(ValueError):
    """The request cannot be analysed; no scorer has been run."""


@dataclass(frozen=True)
class RecommendationRequest:
    field: FieldContext | None
    preferences: Preferences = dc_field(default_factory=Preferences)
    soil: SoilProfile | None = None
    weather: WeatherProfile | None = None


def build_field(d: dict) -> FieldContext:
    """FieldContext from a plain dict (config.SAMPLE_FIELDS entries, form state)."""
    return FieldContext(
        field_id=str(d.get("field_id") or ""),
        area=d.get("area", 0.0),
        soil_texture=SoilTexture(d.get("soil_texture", SoilTexture.LOAMY.value)),
        name=d.get("name"),
    )


def build_preferences(d: dict) -> Preferences:
    """Preferences from a plain dict; unknown keys are ignored, missing ones take defaults."""
    kwargs = {}
    for key in ("focus_on_profit", "focus_on_sustainability", "focus_on_risk_reduction", "has_irrigation"):
        if key in d:
            kwargs[key] = bool(d[key])
    if "farming_experience" in d:
        kwargs["farming_experience"] = Experience(d["farming_experience"])
    if "labor_availability" in d:
        kwargs["labor_availability"] = LaborAvailability(d["labor_availability"])
    if "budget" in d:
        kwargs["budget"] = float(d["budget"])
    for key in ("preferred_crops", "avoid_crops"):
        if key in d:
            kwargs[key] = frozenset(d[key])
    return Preferences(**kwargs)


def default_soil(texture: SoilTexture) -> SoilProfile:
    """Sample soil snapshot with the field's texture."""
    values = dict(DEFAULT_SOIL)
    return SoilProfile(
        ph=float(values["ph"]),
        nitrogen=float(values["nitrogen"]),
        phosphorus=float(values["phosphorus"]),
        potassium=float(values["potassium"]),
        organic_matter=float(values["organic_matter"]),
        moisture=float(values["moisture"]),
        temperature=float(values["temperature"]),
        salinity=float(values["salinity"]),
        texture=SoilTexture(texture),
        drainage=Drainage(values["drainage"]),
    )


def default_weather() -> WeatherProfile:
    return WeatherProfile(**{k: float(v) for k, v in DEFAULT_WEATHER.items()})


def resolve_profiles(
    field_ctx: FieldContext,
    soil: SoilProfile | None = None,
    weather: WeatherProfile | None = None,
) -> tuple[SoilProfile, WeatherProfile]:
    """
    Explicit profiles win; missing ones fall back to the sample defaults.
    The field's stored texture always overrides the soil profile's texture.
    """
    texture = SoilTexture(field_ctx.soil_texture)
    if soil is None:
        soil = default_soil(texture)
    elif soil.texture != texture:
        log.info(
            "Soil profile texture '%s' differs from field %s texture '%s'; using the field's.",
            soil.texture.value, field_ctx.field_id, texture.value,
        )
        soil = replace(soil, texture=texture)
    if weather is None:
        weather = default_weather()
    return soil, weather


def validate_request(request: RecommendationRequest) -> tuple[SoilProfile, WeatherProfile]:
    """
    Check the request and return the (soil, weather) pair to score against.
    Raises ValidationError before any scoring happens.
    """
    field_ctx = request.field
    if field_ctx is None or not str(field_ctx.field_id or "").strip():
        raise ValidationError("field required")

    try:
        area = float(field_ctx.area)
    except (TypeError, ValueError):
        raise ValidationError(f"field {field_ctx.field_id}: area must be a number") from None
    if not math.isfinite(area) or area <= 0:
        raise ValidationError(f"field {field_ctx.field_id}: area must be positive (got {field_ctx.area})")

    try:
        return resolve_profiles(field_ctx, request.soil, request.weather)
    except ValueError as exc:
        raise ValidationError(f"field {field_ctx.field_id}: {exc}") from exc
