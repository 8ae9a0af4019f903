"""Shared fixtures: reference soil / weather snapshots, catalog, and requests."""

import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from crop_advisor.crop_catalog import default_catalog
from crop_advisor.models import (
    CropDefinition,
    Demand,
    Drainage,
    FieldContext,
    MarketData,
    OptimalConditions,
    Preferences,
    SoilProfile,
    SoilTexture,
    Trend,
    ValueRange,
    WeatherProfile,
)
from crop_advisor.validation import RecommendationRequest


def make_soil(**overrides) -> SoilProfile:
    values = dict(
        ph=6.5, nitrogen=45.0, phosphorus=25.0, potassium=180.0, organic_matter=3.2,
        moisture=22.0, temperature=18.0, salinity=0.8,
        texture=SoilTexture.LOAMY, drainage=Drainage.GOOD,
    )
    values.update(overrides)
    return SoilProfile(**values)


def make_weather(**overrides) -> WeatherProfile:
    values = dict(
        average_temperature=22.0, min_temperature=8.0, max_temperature=32.0,
        rainfall=650.0, humidity=65.0, sunlight_hours=8.0, wind_speed=12.0,
        frost_days=15.0, growing_season=180.0,
    )
    values.update(overrides)
    return WeatherProfile(**values)


def make_crop(crop_id="test", name=None, demand="medium", trend="stable", price=200.0,
              water=500.0, soils=("loamy",), ph=(6.0, 7.0), temp=(15, 30),
              rain=(400, 800), duration=100, **traits) -> CropDefinition:
    return CropDefinition(
        id=crop_id,
        name=name or crop_id.capitalize(),
        varieties=(f"{crop_id} common",),
        optimal_conditions=OptimalConditions(
            temperature=ValueRange(*temp),
            rainfall=ValueRange(*rain),
            ph=ValueRange(*ph),
            soil_types=frozenset(SoilTexture(s) for s in soils),
        ),
        market_data=MarketData(avg_price=price, demand=Demand(demand), trend=Trend(trend)),
        growth_duration=duration,
        water_requirement=water,
        **traits,
    )


def make_request(field_id="1", area=25.5, texture=SoilTexture.LOAMY, soil=None, weather=None, **prefs):
    return RecommendationRequest(
        field=FieldContext(field_id=field_id, area=area, soil_texture=texture, name="Field A - North"),
        preferences=Preferences(**prefs),
        soil=soil,
        weather=weather,
    )


@pytest.fixture
def soil():
    return make_soil()


@pytest.fixture
def weather():
    return make_weather()


@pytest.fixture
def catalog():
    return default_catalog()


@pytest.fixture
def corn(catalog):
    return catalog.get("corn")
