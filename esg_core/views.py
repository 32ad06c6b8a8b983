from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Mapping, Sequence, Tuple

import pandas as pd

from esg_core.data import records_frame, round_half_up
from esg_core.filters import ALL_INDUSTRIES, DEFAULT_TOP_N, DashboardFilters, HazardBands
from esg_core.geo import (
    REGION_CENTROIDS,
    color_for_hazard,
    hex_to_rgb,
    map_view_state,
    marker_label,
    marker_radius,
    resolve_point,
)
from esg_core.models import CompanyRecord, FeatureImportanceRecord, MapPoint, PortfolioAggregateRecord
from esg_core.samples import SAMPLE_PORTFOLIO

if TYPE_CHECKING:
    from esg_core.state import AppState


COMPANY_EXPORT_COLUMNS = ["id", "name", "industry", "hazard_index", "is_high_risk", "region_code", "lat", "lon"]


@dataclass(frozen=True)
class Kpis:
    total_companies: int = 0
    high_risk_pct: float = 0.0
    avg_hazard_index: float = 0.0


def filter_companies(companies: Iterable[CompanyRecord], industry: str = ALL_INDUSTRIES) -> List[CompanyRecord]:
    if industry == ALL_INDUSTRIES:
        return list(companies)
    return [c for c in companies if c.industry == industry]


def filter_portfolio(
    portfolio: Iterable[PortfolioAggregateRecord], industry: str = ALL_INDUSTRIES
) -> List[PortfolioAggregateRecord]:
    if industry == ALL_INDUSTRIES:
        return list(portfolio)
    return [p for p in portfolio if p.industry == industry]


def compute_kpis(rows: Sequence[CompanyRecord]) -> Kpis:
    total = len(rows)
    if not total:
        return Kpis()
    high = sum(1 for c in rows if c.is_high_risk)
    mean = sum(c.hazard_index for c in rows) / total
    return Kpis(
        total_companies=total,
        high_risk_pct=round_half_up(high / total * 100, 1) or 0.0,
        avg_hazard_index=round_half_up(mean, 2) or 0.0,
    )


def top_companies(rows: Iterable[CompanyRecord], n: int = DEFAULT_TOP_N) -> List[CompanyRecord]:
    # sorted() is stable, so equal scores keep their upload order.
    return sorted(rows, key=lambda c: c.hazard_index, reverse=True)[:n]


def map_points(
    rows: Iterable[CompanyRecord],
    centroids: Mapping[str, Tuple[float, float]] = REGION_CENTROIDS,
) -> List[MapPoint]:
    points = []
    for company in rows:
        point = resolve_point(company, centroids)
        if point is not None:
            points.append(point)
    return points


def available_industries(
    companies: Iterable[CompanyRecord],
    sample_portfolio: Iterable[PortfolioAggregateRecord] = SAMPLE_PORTFOLIO,
) -> List[str]:
    names = [p.industry for p in sample_portfolio] + [c.industry for c in companies]
    return [ALL_INDUSTRIES] + list(dict.fromkeys(names))


# ---------------- Presentation payloads ----------------
def industry_risk_bars(portfolio: Iterable[PortfolioAggregateRecord]) -> List[Dict[str, Any]]:
    return [{"industry": p.industry, "count_pct": int(round_half_up(p.high_risk_fraction * 100) or 0)} for p in portfolio]


def feature_ranking(features: Iterable[FeatureImportanceRecord]) -> List[Dict[str, Any]]:
    ranked = sorted(features, key=lambda f: f.importance, reverse=True)
    return [{"name": f.name, "importance": f.importance} for f in ranked]


def company_table(rows: Iterable[CompanyRecord]) -> List[Dict[str, Any]]:
    return [
        {
            "id": c.id,
            "company": c.name,
            "industry": c.industry,
            "ehei": c.hazard_index,
            "high_risk": "Yes" if c.is_high_risk else "No",
            "region": c.region_code,
        }
        for c in rows
    ]


def map_markers(points: Iterable[MapPoint], bands: HazardBands = HazardBands()) -> List[Dict[str, Any]]:
    markers = []
    for p in points:
        c = p.company
        color = color_for_hazard(c.hazard_index, bands)
        markers.append(
            {
                "id": c.id,
                "company": c.name,
                "industry": c.industry,
                "ehei": c.hazard_index,
                "high_risk": c.is_high_risk,
                "lat": p.lat,
                "lon": p.lon,
                "placement": p.placement,
                "color": color,
                "rgb": hex_to_rgb(color),
                "radius": marker_radius(c.hazard_index),
                "label": marker_label(c),
            }
        )
    return markers


def companies_export_frame(rows: Iterable[CompanyRecord]) -> pd.DataFrame:
    return records_frame(rows, COMPANY_EXPORT_COLUMNS)


def compute_dashboard(state: "AppState") -> Dict[str, Any]:
    filters: DashboardFilters = state.filters
    rows = filter_companies(state.companies, filters.industry)
    points = map_points(rows)
    return {
        "filters": asdict(filters),
        "industries": available_industries(state.companies),
        "kpis": asdict(compute_kpis(rows)),
        "industry_bars": industry_risk_bars(filter_portfolio(state.portfolio, filters.industry)),
        "features": feature_ranking(state.features),
        "top_companies": company_table(top_companies(rows, filters.top_n)),
        "map": {
            "markers": map_markers(points, filters.bands),
            "view_state": map_view_state(points),
            "unplaced": len(rows) - len(points),
        },
    }
