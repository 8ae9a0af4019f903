"""
Prediction module: score every catalog crop against one field and expose
recommend_crops().

Returns the full catalog ranked by suitability, each entry with:
  - four factor scores (soil, weather, market, sustainability)
  - overall suitability score and confidence
  - economic projection (yield, revenue, cost, profit, margin)
  - risk level
  - advantages / challenges / recommendations

The computation is synchronous and holds no state between calls: identical
inputs give identical output.  submit_analysis() wraps it in a future for
callers that want to show progress or abort a long batch.
"""

import logging
import threading
from concurrent.futures import Executor, Future, ThreadPoolExecutor

from crop_advisor.advice_engine import generate_advice
from crop_advisor.config import (
    FACTOR_WEIGHTS,
    CONFIDENCE_BASE,
    CONFIDENCE_FACTOR,
    CONFIDENCE_CAP,
    SCORE_DECIMALS,
)
from crop_advisor.crop_catalog import CropCatalog, default_catalog
from crop_advisor.models import (
    CropDefinition,
    CropSuitability,
    FactorScores,
    Preferences,
    SoilProfile,
    WeatherProfile,
)
from crop_advisor.profit_engine import project_economics
from crop_advisor.risk_engine import classify_risk
from crop_advisor.scoring import clamp_score, score_factors
from crop_advisor.validation import RecommendationRequest, validate_request

log = logging.getLogger(__name__)

if abs(sum(FACTOR_WEIGHTS.values()) - 1.0) > 1e-9:
    raise ValueError(f"FACTOR_WEIGHTS must sum to 1.0, got {sum(FACTOR_WEIGHTS.values())}")


class AnalysisCancelled(RuntimeError):
    """The analysis was cancelled; partial results were discarded."""


class CancellationToken:
    """Cooperative cancellation flag, checked between per-crop iterations."""

    def __init__(self):
        self._event = threading.Event()

    def cancel(self):
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()


# ---------------------------------------------------------------------------
# Aggregation helpers
# ---------------------------------------------------------------------------

def overall_score(factors: FactorScores) -> float:
    """Fixed affine combination of the four factor scores."""
    values = factors.as_dict()
    return clamp_score(sum(FACTOR_WEIGHTS[name] * values[name] for name in FACTOR_WEIGHTS))


def confidence_for(score: float) -> float:
    return min(CONFIDENCE_CAP, CONFIDENCE_BASE + score * CONFIDENCE_FACTOR)


def rank_by_suitability(results: list[CropSuitability]) -> list[CropSuitability]:
    """
    Sort by suitability_score descending.
    sorted() is stable, so equal scores keep catalog order.
    """
    return sorted(results, key=lambda r: r.suitability_score, reverse=True)


def _r(value: float) -> float:
    return round(float(value), SCORE_DECIMALS)


def _rounded_factors(factors: FactorScores) -> FactorScores:
    return FactorScores(
        soil=_r(factors.soil),
        weather=_r(factors.weather),
        market=_r(factors.market),
        sustainability=_r(factors.sustainability),
    )


# ---------------------------------------------------------------------------
# Per-crop evaluation
# ---------------------------------------------------------------------------

def evaluate_crop(
    crop: CropDefinition,
    catalog: CropCatalog,
    area: float,
    soil: SoilProfile,
    weather: WeatherProfile,
    preferences: Preferences,
) -> CropSuitability:
    """Score, project, classify and advise one crop."""
    factors = _rounded_factors(score_factors(crop, soil, weather))
    score = _r(overall_score(factors))
    profile = catalog.profile_for(crop.id)

    econ = project_economics(crop, profile, area, factors, soil, preferences)
    revenue = _r(econ.expected_revenue)
    costs = _r(econ.expected_costs)

    # Thresholds compare against the rounded score the caller sees
    risk = classify_risk(score, crop.market_data.trend)
    advice = generate_advice(crop, score, soil, preferences)

    log.debug(
        "%s: soil=%.1f weather=%.1f market=%.1f sustainability=%.1f → %.2f (%s)",
        crop.id, factors.soil, factors.weather, factors.market, factors.sustainability,
        score, risk.value,
    )

    return CropSuitability(
        crop_id=crop.id,
        crop_name=crop.name,
        variety=crop.primary_variety,
        suitability_score=score,
        confidence=_r(confidence_for(score)),
        factors=factors,
        expected_yield=_r(econ.expected_yield),
        expected_revenue=revenue,
        expected_costs=costs,
        expected_profit=_r(revenue - costs),
        profit_margin_pct=round(econ.profit_margin_pct, 1),
        roi_pct=round(econ.roi_pct, 1),
        risk_level=risk,
        water_requirement=crop.water_requirement,
        fertilizer_requirement=_r(econ.fertilizer_requirement),
        labor_requirement=_r(econ.labor_requirement),
        growth_duration=crop.growth_duration,
        planting_window=profile.planting_window,
        harvest_window=profile.harvest_window,
        advantages=advice.advantages,
        challenges=advice.challenges,
        recommendations=advice.recommendations,
    )


# ---------------------------------------------------------------------------
# Main prediction API
# ---------------------------------------------------------------------------

def recommend_crops(
    request: RecommendationRequest,
    catalog: CropCatalog | None = None,
    cancel_token: CancellationToken | None = None,
) -> list[CropSuitability]:
    """
    Rank every crop in the catalog for the requested field.

    Parameters
    ----------
    request : RecommendationRequest
        Field, preferences, and optional soil / weather snapshots.
    catalog : CropCatalog or None
        Crops to rank; defaults to the embedded reference catalog.
    cancel_token : CancellationToken or None
        Checked before each crop; when set the run stops and raises.

    Returns
    -------
    list[CropSuitability] sorted by suitability_score descending
    (ties in catalog order).

    Raises
    ------
    ValidationError  if no field is selected or its area is invalid.
    AnalysisCancelled  if cancel_token is set mid-run.
    """
    soil, weather = validate_request(request)
    catalog = catalog if catalog is not None else default_catalog()
    field_ctx = request.field
    prefs = request.preferences
    area = float(field_ctx.area)

    if prefs.avoid_crops:
        catalog = catalog.without(prefs.avoid_crops)

    log.info("Analysing field %s (%.2f ha, %s) against %d crops",
             field_ctx.field_id, area, soil.texture.value, len(catalog))

    results = []
    for crop in catalog:
        if cancel_token is not None and cancel_token.cancelled:
            log.warning("Analysis of field %s cancelled after %d/%d crops; discarding partial results.",
                        field_ctx.field_id, len(results), len(catalog))
            raise AnalysisCancelled(f"analysis of field {field_ctx.field_id} cancelled")
        results.append(evaluate_crop(crop, catalog, area, soil, weather, prefs))

    ranked = rank_by_suitability(results)
    if ranked:
        log.info("Top crop for field %s: %s (%.2f)",
                 field_ctx.field_id, ranked[0].crop_name, ranked[0].suitability_score)
    return ranked


class AnalysisTask:
    """Handle for a background analysis: a future plus its cancellation token."""

    def __init__(self, future: Future, token: CancellationToken):
        self._future = future
        self._token = token

    @property
    def future(self) -> Future:
        return self._future

    def cancel(self) -> bool:
        """Request cancellation; returns True if the run never started."""
        self._token.cancel()
        return self._future.cancel()

    def cancelled(self) -> bool:
        return self._token.cancelled

    def done(self) -> bool:
        return self._future.done()

    def result(self, timeout: float | None = None) -> list[CropSuitability]:
        return self._future.result(timeout)


def submit_analysis(
    request: RecommendationRequest,
    catalog: CropCatalog | None = None,
    executor: Executor | None = None,
) -> AnalysisTask:
    """
    Run recommend_crops() on an executor and return a cancellable handle.
    Without an executor a single-use worker thread is created.
    """
    token = CancellationToken()
    if executor is not None:
        future = executor.submit(recommend_crops, request, catalog, token)
    else:
        own = ThreadPoolExecutor(max_workers=1, thread_name_prefix="crop-analysis")
        future = own.submit(recommend_crops, request, catalog, token)
        own.shutdown(wait=False)
    return AnalysisTask(future, token)
