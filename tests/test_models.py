"""
Domain type tests: ranges, serialisation, and the UI view flow.
"""

import dataclasses

import pytest

from conftest import make_request
from crop_advisor.models import (
    SoilTexture,
    ValueRange,
    ViewState,
    can_transition,
)
from crop_advisor.predictor import recommend_crops


def test_value_range():
    r = ValueRange(6.0, 6.8)
    assert r.contains(6.0) and r.contains(6.8)
    assert not r.contains(5.9)
    assert r.deviation(6.4) == 0.0
    assert r.deviation(5.5) == pytest.approx(0.5)
    assert r.deviation(7.8) == pytest.approx(1.0)


def test_entities_are_immutable():
    result = recommend_crops(make_request())[0]
    with pytest.raises(dataclasses.FrozenInstanceError):
        result.suitability_score = 0


def test_to_dict_is_plain():
    d = recommend_crops(make_request())[0].to_dict()
    assert d["crop_id"] == "soybeans"
    assert d["risk_level"] == "low"
    assert isinstance(d["factors"], dict)
    assert isinstance(d["advantages"], list)


def test_soil_texture_is_string_enum():
    assert SoilTexture("clay") is SoilTexture.CLAY
    assert SoilTexture.CLAY == "clay"


@pytest.mark.parametrize(
    "src, dst, allowed",
    [
        (ViewState.SETUP, ViewState.ANALYZING, True),
        (ViewState.ANALYZING, ViewState.RESULTS, True),
        (ViewState.RESULTS, ViewState.DETAILS, True),
        (ViewState.DETAILS, ViewState.RESULTS, True),
        (ViewState.RESULTS, ViewState.SETUP, True),
        (ViewState.SETUP, ViewState.RESULTS, False),
        (ViewState.DETAILS, ViewState.SETUP, False),
        (ViewState.ANALYZING, ViewState.SETUP, False),
    ],
)
def test_view_transitions(src, dst, allowed):
    assert can_transition(src, dst) is allowed
