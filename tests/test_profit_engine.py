"""
Economic projection tests: yield multiplier, cost adjustments, guarded percentages.
"""

import pytest

from conftest import make_crop, make_soil
from crop_advisor.crop_catalog import CropProfile
from crop_advisor.models import FactorScores, LaborAvailability, Preferences
from crop_advisor.profit_engine import (
    condition_multiplier,
    expected_costs,
    fertilizer_requirement,
    labor_requirement,
    project_economics,
    safe_pct,
)

CORN_PROFILE = CropProfile(9.5, 1200, 180, 12, "April - May", "August - September")


def test_condition_multiplier_range():
    assert condition_multiplier(0, 0) == pytest.approx(0.75)
    assert condition_multiplier(100, 100) == pytest.approx(1.25)
    assert condition_multiplier(93.5, 100) == pytest.approx(0.75 + 0.5 * 193.5 / 200)


def test_costs_base_irrigation_and_low_labor():
    base = 1200 * 10
    assert expected_costs(CORN_PROFILE, 10, Preferences()) == pytest.approx(base)
    assert expected_costs(CORN_PROFILE, 10, Preferences(has_irrigation=True)) == pytest.approx(base * 1.15)
    low = Preferences(labor_availability=LaborAvailability.LOW)
    assert expected_costs(CORN_PROFILE, 10, low) == pytest.approx(base * 1.25)
    both = Preferences(has_irrigation=True, labor_availability=LaborAvailability.LOW)
    assert expected_costs(CORN_PROFILE, 10, both) == pytest.approx(base * 1.15 * 1.25)


def test_safe_pct_guards_zero_denominator():
    assert safe_pct(50, 0) == 0.0
    assert safe_pct(25, 100) == pytest.approx(25.0)


def test_fertilizer_scales_with_nitrogen_and_never_negative():
    assert fertilizer_requirement(CORN_PROFILE, make_soil(nitrogen=45)) == pytest.approx(180 * 1.55)
    assert fertilizer_requirement(CORN_PROFILE, make_soil(nitrogen=100)) == pytest.approx(180)
    assert fertilizer_requirement(CORN_PROFILE, make_soil(nitrogen=500)) == 0.0


def test_labor_requirement():
    assert labor_requirement(CORN_PROFILE, 25.5) == pytest.approx(306)


def test_project_economics_for_corn(corn):
    factors = FactorScores(soil=93.5, weather=100, market=63.6, sustainability=60)
    econ = project_economics(corn, CORN_PROFILE, 25.5, factors, make_soil(), Preferences())

    yield_t = 9.5 * 25.5 * (0.75 + 0.5 * 193.5 / 200)
    assert econ.expected_yield == pytest.approx(yield_t)
    assert econ.expected_revenue == pytest.approx(yield_t * 180)
    assert econ.expected_costs == pytest.approx(1200 * 25.5)
    assert econ.expected_profit == pytest.approx(econ.expected_revenue - econ.expected_costs)
    assert econ.profit_margin_pct == pytest.approx(econ.expected_profit / econ.expected_revenue * 100)
    assert econ.roi_pct == pytest.approx(econ.expected_profit / econ.expected_costs * 100)


def test_zero_price_reports_zero_margin():
    crop = make_crop(price=0.0)
    factors = FactorScores(soil=50, weather=50, market=20, sustainability=50)
    econ = project_economics(crop, CORN_PROFILE, 5, factors, make_soil(), Preferences())
    assert econ.expected_revenue == 0.0
    assert econ.profit_margin_pct == 0.0
    assert econ.expected_profit == pytest.approx(-1200 * 5)
