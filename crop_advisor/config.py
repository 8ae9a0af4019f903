"""
Configuration and constants for the Crop Suitability Advisor.
Centralizes paths, scoring points, factor weights, risk/advice thresholds,
economic multipliers, fallback constants, and default sample field data.
"""

from pathlib import Path

# ---------------------------------------------------------------------------
# Base paths (project root = parent of 'crop_advisor')
# ---------------------------------------------------------------------------
PROJECT_ROOT = Path(__file__).resolve().parent.parent
DATA_DIR = PROJECT_ROOT / "data"
REPORTS_DIR = PROJECT_ROOT / "reports"

CATALOG_FNAME = "crop_catalog.csv"   # optional: overrides the embedded catalog in the CLI / app
REPORT_FNAME  = "crop_recommendations.csv"

# ---------------------------------------------------------------------------
# Score bounds
# ---------------------------------------------------------------------------
SCORE_MIN = 0.0
SCORE_MAX = 100.0
SCORE_DECIMALS = 2

# ---------------------------------------------------------------------------
# Soil scorer: pH 30 + texture 25 + nitrogen 25 + organic matter 20
# ---------------------------------------------------------------------------
SOIL_PH_POINTS            = 30.0
SOIL_PH_PENALTY           = 10.0   # points lost per pH unit outside the optimal range
SOIL_TEXTURE_MATCH_POINTS = 25.0
SOIL_TEXTURE_MISS_POINTS  = 10.0   # partial credit, never zero
SOIL_NITROGEN_CAP         = 25.0
SOIL_NITROGEN_DIVISOR     = 2.0
SOIL_ORGANIC_CAP          = 20.0
SOIL_ORGANIC_FACTOR       = 5.0

# ---------------------------------------------------------------------------
# Weather scorer: temperature 40 + rainfall 35 + growing season 25
# ---------------------------------------------------------------------------
WEATHER_TEMP_POINTS     = 40.0
WEATHER_TEMP_PENALTY    = 2.0      # points per °C outside range
WEATHER_RAIN_POINTS     = 35.0
WEATHER_RAIN_PENALTY    = 1 / 20   # points per mm outside range
WEATHER_SEASON_POINTS   = 25.0

# ---------------------------------------------------------------------------
# Market scorer: demand + trend + price level
# ---------------------------------------------------------------------------
MARKET_DEMAND_POINTS = {"high": 40.0, "medium": 25.0, "low": 10.0}
MARKET_TREND_POINTS  = {"growing": 30.0, "stable": 20.0, "declining": 5.0}
MARKET_PRICE_CAP     = 30.0
MARKET_PRICE_DIVISOR = 50.0

# ---------------------------------------------------------------------------
# Sustainability scorer
# ---------------------------------------------------------------------------
SUSTAINABILITY_BASE             = 50.0
WATER_EFFICIENT_MM              = 400.0   # +20 below this
WATER_MODERATE_MM               = 600.0   # +10 below this
WATER_EFFICIENT_BONUS           = 20.0
WATER_MODERATE_BONUS            = 10.0
NITROGEN_FIXING_BONUS           = 20.0
ORGANIC_MATTER_BONUS            = 10.0
HIGH_ORGANIC_MATTER_PCT         = 3.0
PEST_RESISTANCE_BONUS           = 10.0

# ---------------------------------------------------------------------------
# Aggregation: overall = Σ weight × factor; weights must sum to 1.0
# ---------------------------------------------------------------------------
FACTOR_WEIGHTS: dict[str, float] = {
    "soil":           0.30,
    "weather":        0.30,
    "market":         0.25,
    "sustainability": 0.15,
}
CONFIDENCE_BASE   = 70.0
CONFIDENCE_FACTOR = 0.25
CONFIDENCE_CAP    = 95.0

# ---------------------------------------------------------------------------
# Risk classification thresholds (strictly greater than)
# ---------------------------------------------------------------------------
RISK_LOW_SCORE    = 80.0
RISK_MEDIUM_SCORE = 60.0

# ---------------------------------------------------------------------------
# Advice thresholds
# ---------------------------------------------------------------------------
ADVICE_EXCELLENT_SCORE     = 80.0    # advantages when score is above
ADVICE_SUBOPTIMAL_SCORE    = 60.0    # challenge when score is below
ADVICE_WATER_EFFICIENT_MM  = 500.0
ADVICE_HIGH_WATER_MM       = 600.0
ADVICE_LOW_NITROGEN_PPM    = 40.0
ADVICE_IRRIGATION_WATER_MM = 500.0

# ---------------------------------------------------------------------------
# Economic projection
# effective yield = base × area × (YIELD_BASE_FACTOR + YIELD_CONDITION_FACTOR × (soil+weather)/200)
# ---------------------------------------------------------------------------
YIELD_BASE_FACTOR      = 0.75
YIELD_CONDITION_FACTOR = 0.50
IRRIGATION_COST_FACTOR = 1.15   # equipment / operating overhead when irrigation is available
LOW_LABOR_COST_FACTOR  = 1.25   # hired labour premium
NITROGEN_REFERENCE_PPM = 100.0  # fertilizer adjustment = 1 - N / reference

# ---------------------------------------------------------------------------
# Fallbacks for crops missing from the per-crop constant table
# ---------------------------------------------------------------------------
DEFAULT_BASE_YIELD_T_PER_HA   = 5.0
DEFAULT_BASE_COST_PER_HA      = 1000.0
DEFAULT_FERTILIZER_KG_PER_HA  = 100.0
DEFAULT_LABOR_H_PER_HA        = 15.0
DEFAULT_PLANTING_WINDOW       = "Spring"
DEFAULT_HARVEST_WINDOW        = "Fall"

# ---------------------------------------------------------------------------
# Default sample soil / weather (used only when the caller supplies none)
# ---------------------------------------------------------------------------
DEFAULT_SOIL: dict[str, float | str] = {
    "ph": 6.5, "nitrogen": 45.0, "phosphorus": 25.0, "potassium": 180.0,
    "organic_matter": 3.2, "moisture": 22.0, "temperature": 18.0,
    "salinity": 0.8, "drainage": "good",
}
DEFAULT_WEATHER: dict[str, float] = {
    "average_temperature": 22.0, "min_temperature": 8.0, "max_temperature": 32.0,
    "rainfall": 650.0, "humidity": 65.0, "sunlight_hours": 8.0,
    "wind_speed": 12.0, "frost_days": 15.0, "growing_season": 180.0,
}

# ---------------------------------------------------------------------------
# Sample fields for the demo shells (app.py, run_analysis.py)
# ---------------------------------------------------------------------------
SAMPLE_FIELDS: list[dict] = [
    {"field_id": "1", "name": "Field A - North", "area": 25.5, "soil_texture": "loamy"},
    {"field_id": "2", "name": "Field B - South", "area": 18.2, "soil_texture": "sandy"},
    {"field_id": "3", "name": "Field C - East",  "area": 32.1, "soil_texture": "clay"},
]

DEFAULT_PREFERENCES: dict = {
    "focus_on_profit": True,
    "focus_on_sustainability": False,
    "focus_on_risk_reduction": False,
    "farming_experience": "intermediate",
    "has_irrigation": False,
    "labor_availability": "medium",
    "budget": 50_000.0,
}


def ensure_dirs():
    DATA_DIR.mkdir(parents=True, exist_ok=True)
    REPORTS_DIR.mkdir(parents=True, exist_ok=True)
