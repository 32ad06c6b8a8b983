from __future__ import annotations

import math
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from esg_core.filters import HazardBands
from esg_core.models import CompanyRecord, MapPoint


DEFAULT_CENTER: Tuple[float, float] = (50.0, 10.0)
DEFAULT_ZOOM = 4.0
MIN_MARKER_RADIUS = 6

# ISO-2 region -> (lat, lon). UK is kept next to GB for older exports.
REGION_CENTROIDS: Mapping[str, Tuple[float, float]] = MappingProxyType({
    "AT": (47.5162, 14.5501), "BE": (50.5039, 4.4699), "BG": (42.7339, 25.4858),
    "CH": (46.8182, 8.2275), "CY": (35.1264, 33.4299), "CZ": (49.8175, 15.4730),
    "DE": (51.1657, 10.4515), "DK": (56.2639, 9.5018), "EE": (58.5953, 25.0136),
    "ES": (40.4637, -3.7492), "FI": (61.9241, 25.7482), "FR": (46.2276, 2.2137),
    "GB": (55.3781, -3.4360), "UK": (55.3781, -3.4360), "GR": (39.0742, 21.8243),
    "HR": (45.1000, 15.2000), "HU": (47.1625, 19.5033), "IE": (53.1424, -7.6921),
    "IS": (64.9631, -19.0208), "IT": (41.8719, 12.5674), "LT": (55.1694, 23.8813),
    "LU": (49.8153, 6.1296), "LV": (56.8796, 24.6032), "MT": (35.9375, 14.3754),
    "NL": (52.1326, 5.2913), "NO": (60.4720, 8.4689), "PL": (51.9194, 19.1451),
    "PT": (39.3999, -8.2245), "RO": (45.9432, 24.9668), "SE": (60.1282, 18.6435),
    "SI": (46.1512, 14.9955), "SK": (48.6690, 19.6990),
})

HAZARD_COLORS = {
    "high": "#ef4444",
    "elevated": "#f59e0b",
    "moderate": "#eab308",
    "low": "#22c55e",
}


def _is_finite(value: Optional[float]) -> bool:
    return value is not None and math.isfinite(value)


def resolve_point(
    company: CompanyRecord,
    centroids: Mapping[str, Tuple[float, float]] = REGION_CENTROIDS,
) -> Optional[MapPoint]:
    """Place a company on the map.

    Explicit coordinates win; otherwise fall back to the centroid of its region code
    (exact, case-sensitive lookup). Returns None when neither is available.
    """
    if _is_finite(company.lat) and _is_finite(company.lon):
        return MapPoint(company=company, lat=float(company.lat), lon=float(company.lon), placement="exact")  # type: ignore[arg-type]
    if company.region_code and company.region_code in centroids:
        lat, lon = centroids[company.region_code]
        return MapPoint(company=company, lat=lat, lon=lon, placement="centroid")
    return None


def hazard_band(hazard_index: float, bands: HazardBands = HazardBands()) -> str:
    if hazard_index >= bands.high:
        return "high"
    if hazard_index >= bands.elevated:
        return "elevated"
    if hazard_index >= bands.moderate:
        return "moderate"
    return "low"


def color_for_hazard(hazard_index: float, bands: HazardBands = HazardBands()) -> str:
    return HAZARD_COLORS[hazard_band(hazard_index, bands)]


def hex_to_rgb(color: str) -> List[int]:
    s = color.lstrip("#")
    return [int(s[i : i + 2], 16) for i in (0, 2, 4)]


def marker_radius(hazard_index: float) -> int:
    return max(MIN_MARKER_RADIUS, int(round(12 * hazard_index)))


def marker_label(company: CompanyRecord) -> str:
    return (
        f"{company.name}\n"
        f"Industry: {company.industry}\n"
        f"EHEI: {company.hazard_index:.2f}\n"
        f"High Risk: {'Yes' if company.is_high_risk else 'No'}"
    )


def map_view_state(points: Sequence[MapPoint]) -> Dict[str, float]:
    if not points:
        return {"latitude": DEFAULT_CENTER[0], "longitude": DEFAULT_CENTER[1], "zoom": DEFAULT_ZOOM}
    lat = sum(p.lat for p in points) / len(points)
    lon = sum(p.lon for p in points) / len(points)
    return {"latitude": lat, "longitude": lon, "zoom": DEFAULT_ZOOM}
