"""
Crop Suitability Advisor — core package.
"""

from crop_advisor.crop_catalog import CropCatalog, default_catalog, load_catalog_csv
from crop_advisor.predictor import (
    AnalysisCancelled,
    CancellationToken,
    recommend_crops,
    submit_analysis,
)
from crop_advisor.validation import RecommendationRequest, ValidationError

__all__ = [
    "CropCatalog",
    "default_catalog",
    "load_catalog_csv",
    "AnalysisCancelled",
    "CancellationToken",
    "recommend_crops",
    "submit_analysis",
    "RecommendationRequest",
    "ValidationError",
]
