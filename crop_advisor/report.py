"""
Tabular views of a ranked result list for download / CLI display.
"""

import pandas as pd

from crop_advisor.models import CropSuitability, RiskLevel

REPORT_COLUMNS = [
    "Rank", "Crop", "Variety", "Suitability (%)", "Confidence (%)",
    "Soil", "Weather", "Market", "Sustainability",
    "Expected Yield (t)", "Revenue", "Costs", "Profit", "Margin (%)",
    "Risk Level", "Planting Window", "Harvest Window",
]


def results_to_frame(results: list[CropSuitability]) -> pd.DataFrame:
    """One row per crop, in the order given (rank 1 = first)."""
    rows = []
    for rank, c in enumerate(results, 1):
        rows.append({
            "Rank":               rank,
            "Crop":               c.crop_name,
            "Variety":            c.variety or "",
            "Suitability (%)":    c.suitability_score,
            "Confidence (%)":     c.confidence,
            "Soil":               c.factors.soil,
            "Weather":            c.factors.weather,
            "Market":             c.factors.market,
            "Sustainability":     c.factors.sustainability,
            "Expected Yield (t)": c.expected_yield,
            "Revenue":            c.expected_revenue,
            "Costs":              c.expected_costs,
            "Profit":             c.expected_profit,
            "Margin (%)":         c.profit_margin_pct,
            "Risk Level":         c.risk_level.value.capitalize(),
            "Planting Window":    c.planting_window,
            "Harvest Window":     c.harvest_window,
        })
    return pd.DataFrame(rows, columns=REPORT_COLUMNS)


def summarize_results(results: list[CropSuitability]) -> dict:
    """Headline numbers for a ranked list; an empty list gives a zeroed summary."""
    risk_counts = {level.value: 0 for level in RiskLevel}
    if not results:
        return {
            "top_crop": None,
            "n_crops": 0,
            "best_score": 0.0,
            "mean_score": 0.0,
            "total_profit": 0.0,
            "risk_counts": risk_counts,
        }
    df = results_to_frame(results)
    for c in results:
        risk_counts[c.risk_level.value] += 1
    return {
        "top_crop": results[0].crop_name,
        "n_crops": len(results),
        "best_score": float(df["Suitability (%)"].max()),
        "mean_score": round(float(df["Suitability (%)"].mean()), 2),
        "total_profit": round(float(df["Profit"].sum()), 2),
        "risk_counts": risk_counts,
    }
