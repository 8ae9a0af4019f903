"""
Risk classification tests.
"""

import pytest

from crop_advisor.models import RiskLevel, Trend
from crop_advisor.risk_engine import classify_risk, risk_colour


@pytest.mark.parametrize(
    "score, trend, expected",
    [
        (90, Trend.GROWING, RiskLevel.LOW),
        (90, Trend.STABLE, RiskLevel.MEDIUM),
        (90, Trend.DECLINING, RiskLevel.HIGH),
        (80, Trend.GROWING, RiskLevel.MEDIUM),   # threshold is strict
        (70, Trend.GROWING, RiskLevel.MEDIUM),
        (60, Trend.STABLE, RiskLevel.HIGH),      # threshold is strict
        (30, Trend.GROWING, RiskLevel.HIGH),
    ],
)
def test_classify_risk(score, trend, expected):
    assert classify_risk(score, trend) == expected


def test_risk_colours():
    assert risk_colour(RiskLevel.LOW) == "green"
    assert risk_colour(RiskLevel.HIGH) == "red"
