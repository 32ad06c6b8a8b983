"""
Unit tests for map placement and marker styling.
"""

import math

import pytest

from esg_core.filters import HazardBands
from esg_core.geo import (
    DEFAULT_CENTER,
    REGION_CENTROIDS,
    color_for_hazard,
    hex_to_rgb,
    map_view_state,
    marker_label,
    marker_radius,
    resolve_point,
)


class TestResolvePoint:
    """Test suite for resolve_point."""

    def test_exact_coordinates(self, make_company):
        """Explicit coordinates are used as-is."""
        point = resolve_point(make_company(lat=48.85, lon=2.35, region_code="FR"))
        assert point.placement == "exact"
        assert (point.lat, point.lon) == (48.85, 2.35)

    def test_exact_wins_over_unknown_region(self, make_company):
        """Explicit coordinates win regardless of region code."""
        point = resolve_point(make_company(lat=10.0, lon=20.0, region_code="ZZ"))
        assert point.placement == "exact"
        assert (point.lat, point.lon) == (10.0, 20.0)

    def test_zero_coordinates_are_real(self, make_company):
        """(0, 0) is a valid explicit coordinate."""
        point = resolve_point(make_company(lat=0.0, lon=0.0, region_code="FR"))
        assert point.placement == "exact"
        assert (point.lat, point.lon) == (0.0, 0.0)

    @pytest.mark.parametrize("code", ["FR", "UK", "GB", "DE"])
    def test_centroid_fallback(self, make_company, code):
        """Absent coordinates fall back to the region centroid."""
        point = resolve_point(make_company(region_code=code))
        assert point.placement == "centroid"
        assert (point.lat, point.lon) == REGION_CENTROIDS[code]

    def test_uk_and_gb_alias(self):
        """Legacy and current UK codes share a centroid."""
        assert REGION_CENTROIDS["UK"] == REGION_CENTROIDS["GB"]

    def test_partial_coordinates_use_centroid(self, make_company):
        """Only one coordinate present is not enough for an exact placement."""
        point = resolve_point(make_company(lat=48.0, lon=None, region_code="FR"))
        assert point.placement == "centroid"

    def test_non_finite_coordinates_use_centroid(self, make_company):
        """NaN coordinates are treated as missing."""
        point = resolve_point(make_company(lat=math.nan, lon=2.0, region_code="IT"))
        assert point.placement == "centroid"

    def test_unknown_region(self, make_company):
        """Unknown region codes produce no point."""
        assert resolve_point(make_company(region_code="ZZ")) is None

    def test_case_sensitive_lookup(self, make_company):
        """Region lookup is exact-match only."""
        assert resolve_point(make_company(region_code="fr")) is None

    def test_no_region(self, make_company):
        """No coordinates and no region means no point."""
        assert resolve_point(make_company()) is None

    def test_custom_table(self, make_company):
        """A caller-supplied table is honoured."""
        point = resolve_point(make_company(region_code="XX"), {"XX": (1.0, 2.0)})
        assert (point.lat, point.lon, point.placement) == (1.0, 2.0, "centroid")

    def test_table_is_read_only(self):
        """The built-in centroid table cannot be mutated."""
        with pytest.raises(TypeError):
            REGION_CENTROIDS["ZZ"] = (0.0, 0.0)


class TestMarkerStyling:
    """Test suite for marker colours, sizes and labels."""

    @pytest.mark.parametrize("hazard,color", [
        (0.86, "#ef4444"), (0.75, "#ef4444"), (0.68, "#f59e0b"),
        (0.6, "#f59e0b"), (0.5, "#eab308"), (0.3, "#22c55e"),
    ])
    def test_color_bands(self, hazard, color):
        """Colours follow the EHEI bands."""
        assert color_for_hazard(hazard) == color

    def test_custom_bands(self):
        """Bands are configurable."""
        assert color_for_hazard(0.5, HazardBands(high=0.5)) == "#ef4444"

    def test_hex_to_rgb(self):
        """Hex colours convert to RGB triples."""
        assert hex_to_rgb("#ef4444") == [239, 68, 68]

    def test_radius(self):
        """Radius scales with EHEI with a floor of 6 pixels."""
        assert marker_radius(0.2) == 6
        assert marker_radius(0.86) == 10
        assert marker_radius(1.0) == 12

    def test_label(self, make_company):
        """Popup label carries name, industry, EHEI and risk flag."""
        label = marker_label(make_company(name="Alpha", industry="Energy", hazard_index=0.5, is_high_risk=True))
        assert "Alpha" in label
        assert "Industry: Energy" in label
        assert "EHEI: 0.50" in label
        assert "High Risk: Yes" in label


class TestMapViewState:
    """Test suite for map_view_state."""

    def test_default_center(self):
        """No points centre on Europe."""
        view = map_view_state([])
        assert (view["latitude"], view["longitude"]) == DEFAULT_CENTER

    def test_mean_center(self, make_company):
        """Points are centred on their mean coordinate."""
        points = [
            resolve_point(make_company(lat=10.0, lon=20.0)),
            resolve_point(make_company(lat=20.0, lon=40.0)),
        ]
        view = map_view_state(points)
        assert view["latitude"] == pytest.approx(15.0)
        assert view["longitude"] == pytest.approx(30.0)
