import logging
from contextlib import contextmanager
from typing import Any, Dict, List, Optional

import pandas as pd
import pydeck as pdk
import streamlit as st

from esg_core.charts import feature_importance_chart, industry_risk_chart
from esg_core.filters import ALL_INDUSTRIES
from esg_core.samples import EHEI_FORMULA, EHEI_PROVENANCE, SYNTHETIC_DATA_NOTE
from esg_core.state import AppState
from esg_core.views import available_industries, companies_export_frame, compute_dashboard, filter_companies

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

UPLOADS = [
    ("portfolio", "portfolio_aggregation_by_industry.csv"),
    ("features", "model_feature_importance.csv"),
    ("companies", "esg_casualty_companies.csv"),
]


# ---------- UI / layout helpers ----------
def inject_base_styles():
    if st.session_state.get("_base_css_injected"):
        return
    st.markdown(
        """
        <style>
        .card {border: 1px solid #e5e7eb;border-radius: 16px;padding: 16px;background: #ffffff;
               box-shadow: 0 8px 24px rgba(0,0,0,0.08); margin-bottom: 12px;}
        .card-title {font-weight: 600;font-size: 1.05rem;color: #0f172a;margin-bottom: 4px;}
        .card-caption {color: #334155;font-size: 0.9rem;margin-bottom: 8px;}
        </style>
        """,
        unsafe_allow_html=True,
    )
    st.session_state["_base_css_injected"] = True


@contextmanager
def card(title: str, caption: Optional[str] = None):
    container = st.container()
    container.markdown(
        f"""
        <div class="card">
          <div class="card-title">{title}</div>
          <div class="card-caption">{caption or ""}</div>
        """,
        unsafe_allow_html=True,
    )
    body = container.container()
    with body:
        yield body
    container.markdown("</div>", unsafe_allow_html=True)


def get_state() -> AppState:
    if "app_state" not in st.session_state:
        st.session_state["app_state"] = AppState.from_samples()
    return st.session_state["app_state"]


def handle_upload(state: AppState, kind: str, uploaded) -> None:
    # Streamlit hands back the same file on every rerun; only apply it once.
    seen_key = f"_uploaded_{kind}"
    if uploaded is None or st.session_state.get(seen_key) == uploaded.file_id:
        return
    st.session_state[seen_key] = uploaded.file_id
    ticket = state.begin_upload(kind)
    try:
        applied = state.apply_upload(kind, uploaded.getvalue(), ticket)
    except Exception:
        logger.exception("upload failed: %s", uploaded.name)
        st.warning(f"Could not read {uploaded.name}; keeping the current {kind} data.")
        return
    if not applied:
        st.info(f"{uploaded.name} had no usable rows; keeping the current {kind} data.")


# ---------- Page sections ----------
def render_kpi_tiles(kpis: Dict[str, Any]):
    cols = st.columns(3)
    cols[0].metric("Total Companies", f"{kpis['total_companies']:,}")
    cols[1].metric("% High Risk", f"{kpis['high_risk_pct']:.1f}%")
    cols[2].metric("Avg EHEI", f"{kpis['avg_hazard_index']:.2f}")


def render_map(map_payload: Dict[str, Any]):
    markers: List[Dict[str, Any]] = map_payload["markers"]
    if not markers:
        st.info("No companies with coordinates or a recognised region code for this filter.")
        return
    view = pdk.ViewState(**map_payload["view_state"])
    layer = pdk.Layer(
        "ScatterplotLayer",
        data=pd.DataFrame(markers),
        get_position="[lon, lat]",
        get_radius="radius",
        radius_units="pixels",
        get_fill_color="rgb",
        opacity=0.7,
        stroked=True,
        get_line_color="rgb",
        line_width_min_pixels=1,
        pickable=True,
    )
    tooltip = {
        "html": "<b>{company}</b><br/>Industry: {industry}<br/>EHEI: {ehei}<br/>Placement: {placement}",
        "style": {"backgroundColor": "#0f172a", "color": "white"},
    }
    try:
        st.pydeck_chart(pdk.Deck(layers=[layer], initial_view_state=view, tooltip=tooltip, map_style="light"), use_container_width=True)
    except Exception:
        logger.exception("map render failed")
        st.warning("Map could not be rendered; the rest of the dashboard is unaffected.")
        return
    if map_payload["unplaced"]:
        st.caption(f"{map_payload['unplaced']} company(ies) without coordinates or a known region are not shown.")


def render_top_companies(rows: List[Dict[str, Any]]):
    if not rows:
        st.info("No companies for this filter.")
        return
    df = pd.DataFrame(rows).rename(
        columns={"company": "Company", "industry": "Industry", "ehei": "EHEI", "high_risk": "High Risk?", "region": "Region"}
    )
    df["EHEI"] = df["EHEI"].map(lambda v: f"{v:.2f}")
    st.dataframe(df[["Company", "Industry", "EHEI", "High Risk?", "Region"]], hide_index=True, use_container_width=True)


# ---------- UI setup ----------
st.set_page_config(page_title="ESG–Casualty Risk Dashboard", layout="wide")
inject_base_styles()
st.title("ESG–Casualty Risk Dashboard")
st.caption(
    "Interactive portfolio view with map, industry slicer, KPIs, and model explainers. "
    "Upload the CSVs to replace sample data."
)

state = get_state()

with st.sidebar:
    st.markdown("### Upload data (optional)")
    for kind, label in UPLOADS:
        handle_upload(state, kind, st.file_uploader(label, type=["csv"], key=f"upload_{kind}"))

    st.markdown("---")
    st.markdown("### Industry slicer")
    industries = available_industries(state.companies)
    current = state.industry_filter if state.industry_filter in industries else ALL_INDUSTRIES
    state.set_industry_filter(st.selectbox("Filter by Industry", options=industries, index=industries.index(current)))

payload = compute_dashboard(state)

with card(
    "About this dashboard",
    "Translates ESG and hazard signals into casualty portfolio insights: where liability exposure "
    "concentrates by industry, geography, and company.",
):
    render_kpi_tiles(payload["kpis"])

with card(
    "Interactive Map: High-Risk Areas & Companies",
    "Markers are sized/colored by EHEI; companies lacking coordinates are placed at country centroids "
    "when a valid GEO code is present.",
):
    render_map(payload["map"])

chart_cols = st.columns(2)
with chart_cols[0]:
    with card("High-Risk % by Industry", "Portfolio share of companies flagged as High casualty risk."):
        if payload["industry_bars"]:
            st.altair_chart(industry_risk_chart(payload["industry_bars"]), use_container_width=True)
        else:
            st.info("No portfolio rows for this industry.")
with chart_cols[1]:
    with card("Feature Importances", "Model drivers contributing most to High-risk classification."):
        st.altair_chart(feature_importance_chart(payload["features"]), use_container_width=True)

with card("Top Companies by EHEI", "Companies with the highest hazard exposure index after ESG mitigation."):
    render_top_companies(payload["top_companies"])
    export_df = companies_export_frame(filter_companies(state.companies, state.industry_filter))
    if not export_df.empty:
        st.download_button(
            "Export CSV",
            data=export_df.to_csv(index=False).encode("utf-8"),
            file_name="companies_filtered.csv",
            mime="text/csv",
        )

with card("EHEI Formula & Data Notes", "How the hazard exposure index is constructed and where the demo data comes from."):
    st.code(EHEI_FORMULA, language=None)
    st.markdown(f"**Where is this from?** {EHEI_PROVENANCE}")
    st.markdown(f"**Synthetic data source:** {SYNTHETIC_DATA_NOTE}")

st.caption("ESG–Casualty Risk Dashboard · Demo build for presentation.")
