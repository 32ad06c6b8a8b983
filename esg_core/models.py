from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional


Placement = Literal["exact", "centroid"]


@dataclass(frozen=True)
class CompanyRecord:
    id: str
    name: str
    industry: str
    hazard_index: float
    is_high_risk: bool
    region_code: str
    lat: Optional[float] = None
    lon: Optional[float] = None


@dataclass(frozen=True)
class PortfolioAggregateRecord:
    industry: str
    company_count: int
    avg_hazard_index: float
    high_risk_fraction: float


@dataclass(frozen=True)
class FeatureImportanceRecord:
    name: str
    importance: float


@dataclass(frozen=True)
class MapPoint:
    """A company placed on the map, either at its own coordinates or its region centroid."""

    company: CompanyRecord
    lat: float
    lon: float
    placement: Placement
