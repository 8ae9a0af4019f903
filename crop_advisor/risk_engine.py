"""
Risk engine: coarse low / medium / high classification of a recommendation.

Risk label rules (scores strictly greater than the threshold):
    score > 80 and price trend growing       → low
    score > 60 and price trend not declining → medium
    anything else                            → high
"""

from crop_advisor.config import RISK_LOW_SCORE, RISK_MEDIUM_SCORE
from crop_advisor.models import RiskLevel, Trend

# Display colours for shells that render the label
RISK_COLOURS = {RiskLevel.LOW: "green", RiskLevel.MEDIUM: "orange", RiskLevel.HIGH: "red"}


def classify_risk(suitability_score: float, trend: Trend) -> RiskLevel:
    if suitability_score > RISK_LOW_SCORE and trend == Trend.GROWING:
        return RiskLevel.LOW
    if suitability_score > RISK_MEDIUM_SCORE and trend != Trend.DECLINING:
        return RiskLevel.MEDIUM
    return RiskLevel.HIGH


def risk_colour(level: RiskLevel) -> str:
    return RISK_COLOURS.get(level, "grey")
