"""Session-owned dashboard state.

Holds the three uploaded collections and the active industry filter. Every
dataset replacement goes through :meth:`AppState.commit`, which keeps the
previous collection when an upload yields no usable rows and ignores uploads
that were started before the most recent committed one.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Literal, Mapping, Optional, Sequence, Tuple, Union

from esg_core.data import normalize_company_rows, normalize_feature_rows, normalize_portfolio_rows
from esg_core.filters import ALL_INDUSTRIES, DEFAULT_TOP_N, DashboardFilters, HazardBands, normalize_filters
from esg_core.models import CompanyRecord, FeatureImportanceRecord, PortfolioAggregateRecord
from esg_core.parser import decode_upload, parse_csv
from esg_core.samples import SAMPLE_COMPANIES, SAMPLE_FEATURES, SAMPLE_PORTFOLIO


logger = logging.getLogger(__name__)

DatasetKind = Literal["portfolio", "features", "companies"]

DATASET_KINDS: Tuple[str, ...] = ("portfolio", "features", "companies")

NORMALIZERS: Dict[str, Callable[[Iterable[Mapping[str, str]]], List[object]]] = {
    "portfolio": normalize_portfolio_rows,
    "features": normalize_feature_rows,
    "companies": normalize_company_rows,
}


def _check_kind(kind: str) -> None:
    if kind not in DATASET_KINDS:
        raise ValueError(f"Unknown dataset kind: {kind!r}")


@dataclass
class AppState:
    companies: Tuple[CompanyRecord, ...] = SAMPLE_COMPANIES
    portfolio: Tuple[PortfolioAggregateRecord, ...] = SAMPLE_PORTFOLIO
    features: Tuple[FeatureImportanceRecord, ...] = SAMPLE_FEATURES
    industry_filter: str = ALL_INDUSTRIES
    top_n: int = DEFAULT_TOP_N
    bands: HazardBands = field(default_factory=HazardBands)
    _issued: Dict[str, int] = field(default_factory=lambda: {k: 0 for k in DATASET_KINDS}, repr=False)
    _committed: Dict[str, int] = field(default_factory=lambda: {k: 0 for k in DATASET_KINDS}, repr=False)

    @classmethod
    def from_samples(cls) -> "AppState":
        return cls()

    @property
    def filters(self) -> DashboardFilters:
        return DashboardFilters(industry=self.industry_filter, top_n=self.top_n, bands=self.bands)

    def set_industry_filter(self, industry: Optional[str]) -> None:
        self.industry_filter = ALL_INDUSTRIES if industry is None else str(industry)

    def update_filters(self, raw: dict, *, available_industries: Optional[Iterable[str]] = None) -> DashboardFilters:
        filt = normalize_filters(raw, available_industries=available_industries)
        self.industry_filter = filt.industry
        self.top_n = filt.top_n
        self.bands = filt.bands
        return filt

    def begin_upload(self, kind: DatasetKind) -> int:
        """Reserve a ticket for an upload; later tickets supersede earlier ones."""
        _check_kind(kind)
        self._issued[kind] += 1
        return self._issued[kind]

    def commit(self, kind: DatasetKind, records: Sequence[object], ticket: Optional[int] = None) -> bool:
        _check_kind(kind)
        if ticket is None:
            ticket = self.begin_upload(kind)
        if ticket < self._committed[kind]:
            logger.info("Ignoring stale %s upload (ticket %d < %d)", kind, ticket, self._committed[kind])
            return False
        if not records:
            logger.info("Ignoring %s upload: no usable rows", kind)
            return False
        setattr(self, kind, tuple(records))
        self._committed[kind] = ticket
        logger.info("Loaded %d %s row(s)", len(records), kind)
        return True

    def apply_upload(self, kind: DatasetKind, payload: Union[bytes, str], ticket: Optional[int] = None) -> bool:
        _check_kind(kind)
        if ticket is None:
            ticket = self.begin_upload(kind)
        rows = parse_csv(decode_upload(payload))
        records = NORMALIZERS[kind](rows)
        return self.commit(kind, records, ticket)
