"""
One-command analysis: build a field request → rank the crop catalog → print / save the table.
Run from project root:
    python run_analysis.py --field-id 1
    python run_analysis.py --field-id north --area 12 --texture clay --irrigation --labor low
    python run_analysis.py --field-id 1 --catalog data/crop_catalog.csv --csv
"""

import argparse
import logging
import sys
from pathlib import Path

# Ensure project root is on path
PROJECT_ROOT = Path(__file__).resolve().parent
sys.path.insert(0, str(PROJECT_ROOT))

from crop_advisor.config import DEFAULT_PREFERENCES, REPORTS_DIR, REPORT_FNAME, SAMPLE_FIELDS
from crop_advisor.crop_catalog import CatalogError, default_catalog, load_catalog_csv
from crop_advisor.predictor import recommend_crops
from crop_advisor.report import results_to_frame, summarize_results
from crop_advisor.validation import RecommendationRequest, ValidationError, build_field, build_preferences


def _field_dict(args) -> dict:
    """Start from the matching sample field (if any) and apply command-line overrides."""
    base = next((dict(f) for f in SAMPLE_FIELDS if f["field_id"] == args.field_id), {})
    base["field_id"] = args.field_id
    if args.area is not None:
        base["area"] = args.area
    if args.texture is not None:
        base["soil_texture"] = args.texture
    return base


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Rank crops for a field by suitability.")
    parser.add_argument("--field-id",   default="", help="Field identifier (sample fields: 1, 2, 3)")
    parser.add_argument("--area",       type=float, default=None, help="Field area in hectares")
    parser.add_argument("--texture",    choices=["sandy", "loamy", "clay"], default=None, help="Soil texture")
    parser.add_argument("--irrigation", action="store_true", help="Irrigation system available")
    parser.add_argument("--labor",      choices=["low", "medium", "high"], default=None, help="Labour availability")
    parser.add_argument("--avoid",      nargs="*", default=[], help="Crop ids to leave out")
    parser.add_argument("--prefer",     nargs="*", default=[], help="Preferred crop ids")
    parser.add_argument("--catalog",    type=Path, default=None, help="Catalog CSV (defaults to the embedded catalog)")
    parser.add_argument("--csv",        type=Path, nargs="?", const=REPORTS_DIR / REPORT_FNAME, default=None,
                        help="Write the ranked table to CSV (default path: reports/crop_recommendations.csv)")
    parser.add_argument("--top",        type=int, default=None, help="Show only the top N crops")
    parser.add_argument("--verbose",    action="store_true", help="Debug logging")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )

    prefs = dict(DEFAULT_PREFERENCES)
    prefs["has_irrigation"] = args.irrigation
    if args.labor:
        prefs["labor_availability"] = args.labor
    prefs["avoid_crops"] = args.avoid
    prefs["preferred_crops"] = args.prefer

    try:
        catalog = load_catalog_csv(args.catalog) if args.catalog else default_catalog()
        request = RecommendationRequest(
            field=build_field(_field_dict(args)),
            preferences=build_preferences(prefs),
        )
        results = recommend_crops(request, catalog)
    except (ValidationError, CatalogError) as exc:
        print(f"ERROR: {exc}")
        return 1

    print("Crop Suitability Advisor")
    print("=" * 50)
    summary = summarize_results(results)
    print(f"Field {request.field.field_id}: {request.field.area} ha, {request.field.soil_texture.value} soil")
    print(f"Crops ranked: {summary['n_crops']} | best: {summary['top_crop']} ({summary['best_score']})")

    df = results_to_frame(results)
    if args.top:
        df = df.head(args.top)
    print()
    print(df[["Rank", "Crop", "Suitability (%)", "Confidence (%)", "Profit", "Margin (%)", "Risk Level"]]
          .to_string(index=False))

    for c in results[: args.top or len(results)]:
        print(f"\n{c.crop_name} ({c.variety})")
        for label, items in (("+", c.advantages), ("-", c.challenges), (">", c.recommendations)):
            for item in items:
                print(f"  {label} {item}")

    if args.csv:
        out = args.csv
        out.parent.mkdir(parents=True, exist_ok=True)
        results_to_frame(results).to_csv(out, index=False)
        print(f"\nSaved to: {out}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
