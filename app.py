"""
Streamlit UI — Crop Suitability Advisor.
Setup: field + preferences → "Analyze". Results: catalog ranked by suitability.
Details: one crop's projections and advice.
Run with: streamlit run app.py
"""

import logging
import sys
from pathlib import Path

import streamlit as st

PROJECT_ROOT = Path(__file__).resolve().parent
sys.path.insert(0, str(PROJECT_ROOT))

from crop_advisor.config import (
    CATALOG_FNAME,
    DATA_DIR,
    DEFAULT_PREFERENCES,
    REPORT_FNAME,
    SAMPLE_FIELDS,
    ensure_dirs,
)
from crop_advisor.crop_catalog import CatalogError, default_catalog, load_catalog_csv
from crop_advisor.models import ViewState, can_transition
from crop_advisor.predictor import recommend_crops
from crop_advisor.report import results_to_frame
from crop_advisor.risk_engine import risk_colour
from crop_advisor.validation import (
    RecommendationRequest,
    ValidationError,
    build_field,
    build_preferences,
    validate_request,
)

log = logging.getLogger(__name__)


@st.cache_resource
def get_catalog():
    """data/crop_catalog.csv when present, else the embedded reference catalog."""
    path = DATA_DIR / CATALOG_FNAME
    if path.exists():
        try:
            return load_catalog_csv(path)
        except CatalogError as exc:
            log.warning("Ignoring %s: %s", path, exc)
    return default_catalog()


def go(view: ViewState):
    current = st.session_state.get("view", ViewState.SETUP)
    if not can_transition(current, view):
        log.warning("Ignoring view change %s → %s", current.value, view.value)
        return
    st.session_state["view"] = view


# ---------------------------------------------------------------------------
# Views
# ---------------------------------------------------------------------------

def render_setup():
    st.header("Select field and preferences")

    labels = {f"{f['name']} ({f['area']} ha)": f for f in SAMPLE_FIELDS}
    choice = st.selectbox("Field", ["— Select Field —"] + list(labels))
    field_dict = labels.get(choice, {"field_id": ""})

    col1, col2 = st.columns(2)
    with col1:
        focus_profit = st.checkbox("Focus on profitability", value=DEFAULT_PREFERENCES["focus_on_profit"])
        focus_sust = st.checkbox("Focus on sustainability", value=DEFAULT_PREFERENCES["focus_on_sustainability"])
        focus_risk = st.checkbox("Focus on risk reduction", value=DEFAULT_PREFERENCES["focus_on_risk_reduction"])
        irrigation = st.checkbox("Irrigation system available", value=DEFAULT_PREFERENCES["has_irrigation"])
    with col2:
        experience = st.selectbox("Farming experience", ["beginner", "intermediate", "expert"], index=1)
        labor = st.selectbox("Labor availability", ["low", "medium", "high"], index=1)
        budget = st.number_input("Budget", min_value=0.0, value=float(DEFAULT_PREFERENCES["budget"]), step=1000.0)

    if st.button("Analyze", type="primary", use_container_width=True):
        prefs = build_preferences({
            "focus_on_profit": focus_profit,
            "focus_on_sustainability": focus_sust,
            "focus_on_risk_reduction": focus_risk,
            "farming_experience": experience,
            "has_irrigation": irrigation,
            "labor_availability": labor,
            "budget": budget,
        })
        request = RecommendationRequest(field=build_field(field_dict), preferences=prefs)
        try:
            validate_request(request)
        except ValidationError as exc:
            st.error("Please select a field first." if str(exc) == "field required" else str(exc))
            return
        go(ViewState.ANALYZING)
        with st.spinner("Scoring crops..."):
            st.session_state["results"] = recommend_crops(request, get_catalog())
            st.session_state["field"] = request.field
        go(ViewState.RESULTS)
        st.rerun()


def render_results():
    results = st.session_state.get("results", [])
    field_ctx = st.session_state.get("field")
    st.header("Recommended crops")
    if field_ctx is not None:
        st.caption(f"{field_ctx.name or field_ctx.field_id} • {field_ctx.area} ha • {field_ctx.soil_texture.value} soil")

    if st.button("New Analysis"):
        go(ViewState.SETUP)
        st.rerun()

    for i, c in enumerate(results):
        with st.container(border=True):
            c1, c2, c3, c4 = st.columns(4)
            c1.metric(c.crop_name, f"{c.suitability_score:.0f}%", help=f"{c.confidence:.0f}% confidence")
            c2.metric("Expected yield", f"{c.expected_yield:,.1f} t")
            c3.metric("Expected profit", f"{c.expected_profit:,.0f}")
            c4.markdown(f"Risk: :{risk_colour(c.risk_level)}[{c.risk_level.value.capitalize()}]")
            st.caption(
                f"Soil {c.factors.soil:.0f}% • Weather {c.factors.weather:.0f}% • "
                f"Market {c.factors.market:.0f}% • Sustainability {c.factors.sustainability:.0f}%"
            )
            if st.button("View Details", key=f"details_{c.crop_id}"):
                st.session_state["selected"] = i
                go(ViewState.DETAILS)
                st.rerun()

    if results:
        df = results_to_frame(results)
        st.download_button(
            label="Download CSV",
            data=df.to_csv(index=False).encode("utf-8"),
            file_name=REPORT_FNAME,
            mime="text/csv",
        )


def render_details():
    results = st.session_state.get("results", [])
    idx = st.session_state.get("selected", 0)
    if not results or idx >= len(results):
        go(ViewState.RESULTS)
        st.rerun()
        return
    c = results[idx]

    st.header(c.crop_name)
    st.caption(c.variety or "")
    if st.button("Back to Results"):
        go(ViewState.RESULTS)
        st.rerun()

    col1, col2 = st.columns(2)
    with col1:
        st.markdown("**Growing information**")
        st.markdown(f"- Growth duration: {c.growth_duration} days")
        st.markdown(f"- Planting window: {c.planting_window}")
        st.markdown(f"- Harvest window: {c.harvest_window}")
        st.markdown(f"- Water requirement: {c.water_requirement:.0f} mm")
    with col2:
        st.markdown("**Resource requirements**")
        st.markdown(f"- Fertilizer: {c.fertilizer_requirement:.0f} kg/ha")
        st.markdown(f"- Labor: {c.labor_requirement:.0f} hours")
        st.markdown(f"- Revenue: {c.expected_revenue:,.0f} • Costs: {c.expected_costs:,.0f}")
        st.markdown(f"- Margin: {c.profit_margin_pct}% • ROI: {c.roi_pct}%")

    for title, items, show in (
        ("Advantages", c.advantages, st.success),
        ("Challenges", c.challenges, st.warning),
        ("Recommendations", c.recommendations, st.info),
    ):
        if items:
            st.subheader(title)
            for item in items:
                show(item)


# ---------------------------------------------------------------------------
# Main app
# ---------------------------------------------------------------------------

def main():
    st.set_page_config(page_title="Crop Suitability Advisor", page_icon="🌱", layout="wide")
    ensure_dirs()
    st.title("🌱 Crop Suitability Advisor")
    st.caption("Ranks crops for a field by soil, weather, market and sustainability fit")

    view = st.session_state.setdefault("view", ViewState.SETUP)
    if view == ViewState.RESULTS:
        render_results()
    elif view == ViewState.DETAILS:
        render_details()
    else:
        render_setup()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
    main()
