"""
Factor scorer tests: point budgets, penalties, clamping, and monotonicity.
Run from project root: python -m pytest tests/test_scoring.py -v
"""

import numpy as np
import pytest

from conftest import make_crop, make_soil, make_weather
from crop_advisor.models import SoilTexture
from crop_advisor.scoring import (
    clamp_score,
    score_factors,
    score_market,
    score_soil,
    score_sustainability,
    score_weather,
    season_fraction,
)


def test_corn_reference_soil_score(corn, soil):
    """pH in range (30) + texture match (25) + N 45/2 (22.5) + OM 3.2×5 (16)."""
    assert score_soil(corn, soil) == pytest.approx(93.5)


def test_corn_reference_weather_score(corn, weather):
    """Temperature and rainfall in range, season longer than growth duration."""
    assert score_weather(corn, weather) == pytest.approx(100.0)


def test_soil_ph_penalty_uses_nearest_bound(corn):
    # corn pH 6.0–6.8; 5.5 is 0.5 below → 30 - 5
    assert score_soil(corn, make_soil(ph=5.5)) == pytest.approx(88.5)
    # 7.3 is 0.5 above → same penalty
    assert score_soil(corn, make_soil(ph=7.3)) == pytest.approx(88.5)
    # far outside: pH term floors at zero
    assert score_soil(corn, make_soil(ph=1.0)) == pytest.approx(63.5)


def test_soil_texture_mismatch_gets_partial_credit(corn):
    assert score_soil(corn, make_soil(texture=SoilTexture.CLAY)) == pytest.approx(78.5)


def test_soil_nutrient_terms_are_capped(corn):
    rich = make_soil(nitrogen=500.0, organic_matter=12.0)
    assert score_soil(corn, rich) == pytest.approx(100.0)


def test_weather_penalties(corn):
    hot_dry_short = make_weather(average_temperature=40.0, rainfall=300.0, growing_season=60.0)
    # temp: 40 - 5×2 = 30; rain: 35 - 200/20 = 25; season: 25 × 60/120 = 12.5
    assert score_weather(corn, hot_dry_short) == pytest.approx(67.5)


def test_season_fraction_edges():
    assert season_fraction(180, 120) == 1.0
    assert season_fraction(60, 120) == pytest.approx(0.5)
    assert season_fraction(-10, 120) == 0.0
    assert season_fraction(100, 0) == 1.0


def test_market_scores(catalog):
    assert score_market(catalog.get("corn")) == pytest.approx(40 + 20 + 3.6)
    assert score_market(catalog.get("wheat")) == pytest.approx(25 + 30 + 4.4)
    assert score_market(catalog.get("tomatoes")) == pytest.approx(40 + 20 + 24)


def test_market_price_term_capped_and_low_demand():
    crop = make_crop(demand="low", trend="declining", price=10_000)
    assert score_market(crop) == pytest.approx(10 + 5 + 30)


def test_sustainability_scores(catalog, soil):
    assert score_sustainability(catalog.get("corn"), soil) == pytest.approx(60)      # OM > 3 bonus
    assert score_sustainability(catalog.get("soybeans"), soil) == pytest.approx(80)  # water + N-fixing
    assert score_sustainability(catalog.get("potatoes"), soil) == pytest.approx(80)  # water + pest resistance
    assert score_sustainability(catalog.get("tomatoes"), soil) == pytest.approx(60)
    assert score_sustainability(catalog.get("wheat"), soil) == pytest.approx(60)


def test_sustainability_organic_bonus_needs_high_organic_matter(corn):
    assert score_sustainability(corn, make_soil(organic_matter=2.0)) == pytest.approx(50)


def test_sustainability_clamped_to_100():
    crop = make_crop(water=100, nitrogen_fixing=True, organic_matter_responsive=True, pest_resistant=True)
    assert score_sustainability(crop, make_soil(organic_matter=5.0)) == 100.0


def test_clamp_score():
    assert clamp_score(-5) == 0.0
    assert clamp_score(150) == 100.0
    assert clamp_score(float("nan")) == 0.0
    assert clamp_score(42.5) == 42.5


def test_all_factor_scores_in_bounds_for_random_profiles(catalog):
    """Sampled soils / weather (including out-of-range values) never leave [0, 100]."""
    rng = np.random.default_rng(42)
    textures = list(SoilTexture)
    for _ in range(200):
        soil = make_soil(
            ph=float(rng.uniform(2, 11)),
            nitrogen=float(rng.uniform(-20, 400)),
            organic_matter=float(rng.uniform(-1, 15)),
            texture=textures[int(rng.integers(len(textures)))],
        )
        weather = make_weather(
            average_temperature=float(rng.normal(20, 15)),
            rainfall=float(rng.uniform(0, 3000)),
            growing_season=float(rng.uniform(-30, 400)),
        )
        for crop in catalog:
            f = score_factors(crop, soil, weather)
            for value in f.as_dict().values():
                assert 0.0 <= value <= 100.0


def test_soil_score_monotone_in_nitrogen(catalog):
    levels = np.linspace(0, 300, 61)
    for crop in catalog:
        scores = [score_soil(crop, make_soil(nitrogen=float(n))) for n in levels]
        assert all(b >= a for a, b in zip(scores, scores[1:])), crop.id
