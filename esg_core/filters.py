from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional

ALL_INDUSTRIES = "All"
DEFAULT_TOP_N = 10


@dataclass(frozen=True)
class HazardBands:
    high: float = 0.75
    elevated: float = 0.6
    moderate: float = 0.45


@dataclass(frozen=True)
class DashboardFilters:
    industry: str = ALL_INDUSTRIES
    top_n: int = DEFAULT_TOP_N
    bands: HazardBands = field(default_factory=HazardBands)

    @property
    def is_all(self) -> bool:
        return self.industry == ALL_INDUSTRIES


def normalize_filters(raw: dict, *, available_industries: Optional[Iterable[str]] = None) -> DashboardFilters:
    industry = raw.get("industry")
    industry = ALL_INDUSTRIES if industry is None else str(industry)
    if available_industries is not None and industry not in set(available_industries):
        industry = ALL_INDUSTRIES

    top_n = raw.get("top_n", DEFAULT_TOP_N)
    try:
        top_n = int(top_n)
    except Exception:
        top_n = DEFAULT_TOP_N
    top_n = max(1, min(200, top_n))

    b = raw.get("bands") or {}
    bands = HazardBands(
        high=float(b.get("high", 0.75)),
        elevated=float(b.get("elevated", 0.6)),
        moderate=float(b.get("moderate", 0.45)),
    )
    return DashboardFilters(industry=industry, top_n=top_n, bands=bands)
