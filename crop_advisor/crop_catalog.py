"""
Crop catalog: reference crop definitions plus the per-crop constant table
(base yield, cost, fertilizer, labour, planting/harvest windows).

The catalog is an immutable configuration object injected into the engine,
so tests can rank synthetic catalogs and regional deployments can load
their own from CSV.  Per-crop constants are keyed by the stable crop id;
an id missing from the table falls back to DEFAULT_CROP_PROFILE rather
than aborting the rest of the batch.

CSV schema (one row per crop, list fields separated by '|'):
    id, name, varieties, temp_min, temp_max, rain_min, rain_max,
    ph_min, ph_max, soil_types, avg_price, demand, trend,
    growth_duration, water_requirement
  optional trait columns (true/false):
    nitrogen_fixing, organic_matter_responsive, pest_resistant,
    intensive_management
  optional text column:
    agronomic_notes
  optional constant-table columns (row gets no profile if any is blank):
    base_yield_per_ha, base_cost_per_ha, base_fertilizer_per_ha,
    base_labor_per_ha, planting_window, harvest_window
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping

import pandas as pd

from crop_advisor.config import (
    DEFAULT_BASE_YIELD_T_PER_HA,
    DEFAULT_BASE_COST_PER_HA,
    DEFAULT_FERTILIZER_KG_PER_HA,
    DEFAULT_LABOR_H_PER_HA,
    DEFAULT_PLANTING_WINDOW,
    DEFAULT_HARVEST_WINDOW,
)
from crop_advisor.models import (
    CropDefinition,
    Demand,
    MarketData,
    OptimalConditions,
    SoilTexture,
    Trend,
    ValueRange,
)

log = logging.getLogger(__name__)

LIST_SEP = "|"

REQUIRED_COLUMNS = [
    "id", "name", "varieties",
    "temp_min", "temp_max", "rain_min", "rain_max", "ph_min", "ph_max",
    "soil_types", "avg_price", "demand", "trend",
    "growth_duration", "water_requirement",
]
TRAIT_COLUMNS = [
    "nitrogen_fixing", "organic_matter_responsive", "pest_resistant", "intensive_management",
]
PROFILE_NUMERIC_COLUMNS = [
    "base_yield_per_ha", "base_cost_per_ha", "base_fertilizer_per_ha", "base_labor_per_ha",
]


class CatalogError(ValueError):
    """Raised when a catalog file or definition is malformed."""


@dataclass(frozen=True)
class CropProfile:
    """Per-hectare constants used by the economic projector."""
    base_yield_per_ha: float        # tons / ha
    base_cost_per_ha: float         # currency / ha
    base_fertilizer_per_ha: float   # kg / ha
    base_labor_per_ha: float        # hours / ha
    planting_window: str = DEFAULT_PLANTING_WINDOW
    harvest_window: str = DEFAULT_HARVEST_WINDOW


DEFAULT_CROP_PROFILE = CropProfile(
    base_yield_per_ha=DEFAULT_BASE_YIELD_T_PER_HA,
    base_cost_per_ha=DEFAULT_BASE_COST_PER_HA,
    base_fertilizer_per_ha=DEFAULT_FERTILIZER_KG_PER_HA,
    base_labor_per_ha=DEFAULT_LABOR_H_PER_HA,
)


class CropCatalog:
    """Ordered, read-only set of crop definitions with their constant table."""

    def __init__(
        self,
        crops: Iterable[CropDefinition],
        profiles: Mapping[str, CropProfile] | None = None,
    ):
        crops = tuple(crops)
        seen: set[str] = set()
        for crop in crops:
            if crop.id in seen:
                raise CatalogError(f"Duplicate crop id '{crop.id}' in catalog")
            seen.add(crop.id)
        self._crops = crops
        self._by_id = MappingProxyType({c.id: c for c in crops})
        self._profiles = MappingProxyType(dict(profiles or {}))

    def __iter__(self) -> Iterator[CropDefinition]:
        return iter(self._crops)

    def __len__(self) -> int:
        return len(self._crops)

    def __contains__(self, crop_id: object) -> bool:
        return crop_id in self._by_id

    def __repr__(self) -> str:
        return f"CropCatalog({[c.id for c in self._crops]!r})"

    @property
    def crops(self) -> tuple[CropDefinition, ...]:
        return self._crops

    @property
    def profiles(self) -> Mapping[str, CropProfile]:
        return self._profiles

    def get(self, crop_id: str) -> CropDefinition | None:
        return self._by_id.get(crop_id)

    def profile_for(self, crop_id: str) -> CropProfile:
        """Constant-table entry for a crop, or the documented defaults if it has none."""
        profile = self._profiles.get(crop_id)
        if profile is None:
            log.warning("No constant-table entry for crop '%s'; using default profile.", crop_id)
            return DEFAULT_CROP_PROFILE
        return profile

    def without(self, crop_ids: Iterable[str]) -> "CropCatalog":
        """New catalog excluding the given ids (order of the rest preserved)."""
        drop = set(crop_ids)
        return CropCatalog(
            (c for c in self._crops if c.id not in drop),
            {k: v for k, v in self._profiles.items() if k not in drop},
        )


# ---------------------------------------------------------------------------
# Embedded reference catalog
# ---------------------------------------------------------------------------

def _crop(
    crop_id, name, varieties, temp, rain, ph, soils, price, demand, trend,
    duration, water, **traits,
) -> CropDefinition:
    for label, (lo, hi) in (("temperature", temp), ("rainfall", rain), ("ph", ph)):
        if lo > hi:
            raise ValueError(f"{label} range is inverted (min {lo} > max {hi})")
    if not soils:
        raise ValueError("soil_types must list at least one texture")
    return CropDefinition(
        id=crop_id,
        name=name,
        varieties=tuple(varieties),
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


REFERENCE_CROPS: tuple[CropDefinition, ...] = (
    _crop("corn", "Corn", ["Sweet Corn", "Field Corn", "Popcorn"],
          (15, 35), (500, 1000), (6.0, 6.8), ["loamy", "sandy"],
          180, "high", "stable", 120, 600,
          organic_matter_responsive=True),
    _crop("wheat", "Wheat", ["Winter Wheat", "Spring Wheat", "Durum"],
          (10, 25), (300, 700), (6.0, 7.5), ["loamy", "clay"],
          220, "medium", "growing", 180, 450),
    _crop("soybeans", "Soybeans", ["Edamame", "Oil Soybeans", "Food Grade"],
          (18, 30), (450, 800), (6.0, 7.0), ["loamy", "sandy"],
          350, "high", "growing", 100, 500,
          nitrogen_fixing=True),
    _crop("tomatoes", "Tomatoes", ["Cherry", "Beefsteak", "Roma"],
          (18, 29), (400, 600), (6.0, 6.8), ["loamy"],
          1200, "high", "stable", 80, 400,
          intensive_management=True,
          agronomic_notes=(
              "Use disease-resistant varieties",
              "Implement integrated pest management",
          )),
    _crop("potatoes", "Potatoes", ["Russet", "Red", "Fingerling"],
          (15, 20), (400, 600), (5.0, 6.5), ["sandy", "loamy"],
          300, "medium", "stable", 90, 350,
          pest_resistant=True),
)

REFERENCE_PROFILES: dict[str, CropProfile] = {
    "corn":     CropProfile(9.5, 1200, 180, 12, "April - May", "August - September"),
    "wheat":    CropProfile(3.2, 800, 120, 8, "September - October", "June - July"),
    "soybeans": CropProfile(2.8, 900, 60, 10, "May - June", "September - October"),
    "tomatoes": CropProfile(45.0, 3500, 200, 45, "March - April", "July - August"),
    "potatoes": CropProfile(35.0, 2200, 150, 25, "March - April", "June - July"),
}


def default_catalog() -> CropCatalog:
    """The five-crop reference catalog."""
    return CropCatalog(REFERENCE_CROPS, REFERENCE_PROFILES)


# ---------------------------------------------------------------------------
# CSV import / export
# ---------------------------------------------------------------------------

def _split(value) -> tuple[str, ...]:
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return ()
    return tuple(p.strip() for p in str(value).split(LIST_SEP) if p.strip())


def _as_bool(value) -> bool:
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return False
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes", "y")
    return bool(value)


def _row_to_crop(row: pd.Series) -> CropDefinition:
    blank = [col for col in REQUIRED_COLUMNS if pd.isna(row[col]) or not str(row[col]).strip()]
    if blank:
        raise ValueError(f"blank required cells {blank}")
    traits = {col: _as_bool(row.get(col)) for col in TRAIT_COLUMNS}
    return _crop(
        str(row["id"]).strip(),
        str(row["name"]).strip(),
        _split(row["varieties"]),
        (float(row["temp_min"]), float(row["temp_max"])),
        (float(row["rain_min"]), float(row["rain_max"])),
        (float(row["ph_min"]), float(row["ph_max"])),
        _split(row["soil_types"]),
        float(row["avg_price"]),
        str(row["demand"]).strip().lower(),
        str(row["trend"]).strip().lower(),
        int(row["growth_duration"]),
        float(row["water_requirement"]),
        agronomic_notes=_split(row.get("agronomic_notes")),
        **traits,
    )


def _row_to_profile(row: pd.Series) -> CropProfile | None:
    values = [row.get(col) for col in PROFILE_NUMERIC_COLUMNS]
    if any(v is None or pd.isna(v) for v in values):
        return None
    planting = row.get("planting_window")
    harvest = row.get("harvest_window")
    return CropProfile(
        *(float(v) for v in values),
        planting_window=DEFAULT_PLANTING_WINDOW if planting is None or pd.isna(planting) else str(planting),
        harvest_window=DEFAULT_HARVEST_WINDOW if harvest is None or pd.isna(harvest) else str(harvest),
    )


def load_catalog_csv(path: Path | str) -> CropCatalog:
    """
    Build a catalog from a CSV file (schema in the module docstring).
    Row order becomes catalog order, which is also the ranking tie-break order.
    """
    path = Path(path)
    try:
        df = pd.read_csv(path, dtype={"id": str})
    except (OSError, pd.errors.EmptyDataError, pd.errors.ParserError) as exc:
        raise CatalogError(f"{path.name}: cannot read catalog: {exc}") from exc
    df.columns = [c.strip() for c in df.columns]

    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise CatalogError(f"{path.name}: missing required columns {missing}")

    crops: list[CropDefinition] = []
    profiles: dict[str, CropProfile] = {}
    for i, row in df.iterrows():
        try:
            crop = _row_to_crop(row)
            profile = _row_to_profile(row)
        except (TypeError, ValueError) as exc:
            raise CatalogError(f"{path.name}: row {i + 1} ({row.get('id')!r}) is invalid: {exc}") from exc
        crops.append(crop)
        if profile is not None:
            profiles[crop.id] = profile

    log.info("Loaded %d crops (%d with constant-table entries) from %s", len(crops), len(profiles), path)
    return CropCatalog(crops, profiles)


def catalog_to_frame(catalog: CropCatalog) -> pd.DataFrame:
    """Flatten a catalog into the CSV schema accepted by load_catalog_csv()."""
    rows = []
    for crop in catalog:
        oc = crop.optimal_conditions
        row = {
            "id":                crop.id,
            "name":              crop.name,
            "varieties":         LIST_SEP.join(crop.varieties),
            "temp_min":          oc.temperature.min,
            "temp_max":          oc.temperature.max,
            "rain_min":          oc.rainfall.min,
            "rain_max":          oc.rainfall.max,
            "ph_min":            oc.ph.min,
            "ph_max":            oc.ph.max,
            "soil_types":        LIST_SEP.join(sorted(s.value for s in oc.soil_types)),
            "avg_price":         crop.market_data.avg_price,
            "demand":            crop.market_data.demand.value,
            "trend":             crop.market_data.trend.value,
            "growth_duration":   crop.growth_duration,
            "water_requirement": crop.water_requirement,
            "agronomic_notes":   LIST_SEP.join(crop.agronomic_notes),
        }
        for col in TRAIT_COLUMNS:
            row[col] = getattr(crop, col)
        profile = catalog.profiles.get(crop.id)
        if profile is not None:
            row.update({
                "base_yield_per_ha":      profile.base_yield_per_ha,
                "base_cost_per_ha":       profile.base_cost_per_ha,
                "base_fertilizer_per_ha": profile.base_fertilizer_per_ha,
                "base_labor_per_ha":      profile.base_labor_per_ha,
                "planting_window":        profile.planting_window,
                "harvest_window":         profile.harvest_window,
            })
        rows.append(row)
    return pd.DataFrame(rows)
