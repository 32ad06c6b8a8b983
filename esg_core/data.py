from __future__ import annotations

import logging
import math
from dataclasses import asdict
from decimal import ROUND_HALF_UP, Decimal
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Sequence, TypeVar

import pandas as pd

from esg_core.models import CompanyRecord, FeatureImportanceRecord, PortfolioAggregateRecord


logger = logging.getLogger(__name__)

T = TypeVar("T")

# Target attribute -> header spellings, first non-empty wins.
PORTFOLIO_COLUMNS: Dict[str, Sequence[str]] = {
    "industry": ("industry",),
    "company_count": ("companies",),
    "avg_hazard_index": ("avg_EHEI", "avg_ehei"),
    "high_risk_fraction": ("pct_high_risk", "percent_high_risk"),
}

FEATURE_COLUMNS: Dict[str, Sequence[str]] = {
    "name": ("feature",),
    "importance": ("importance",),
}

COMPANY_COLUMNS: Dict[str, Sequence[str]] = {
    "id": ("company_id", "id"),
    "name": ("company",),
    "industry": ("industry",),
    "hazard_index": ("EHEI", "ehei"),
    "is_high_risk": ("is_high_risk", "high"),
    "region_code": ("geo", "region"),
    "lat": ("lat", "latitude"),
    "lon": ("lon", "longitude"),
}

TRUE_TOKENS = {"1", "true", "yes", "y"}


def coerce_number(value: object, default: float = 0.0) -> float:
    """Coerce to a finite float; anything else becomes ``default``."""
    if value is None:
        return default
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return default
    try:
        out = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return default
    if math.isnan(out) or math.isinf(out):
        return default
    return out


def coerce_int(value: object, default: int = 0) -> int:
    return int(coerce_number(value, float(default)))


def coerce_flag(value: object) -> bool:
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    s = str(value).strip().lower()
    if s in TRUE_TOKENS:
        return True
    return coerce_number(s) == 1


def first_value(raw: Mapping[str, str], keys: Iterable[str]) -> str:
    for key in keys:
        value = raw.get(key)
        if value:
            return value
    return ""


def has_any_key(raw: Mapping[str, str], keys: Iterable[str]) -> bool:
    return any(key in raw for key in keys)


def optional_coordinate(raw: Mapping[str, str], keys: Sequence[str]) -> Optional[float]:
    # No header at all means "not supplied"; a blank value under a present header is a real 0.
    if not has_any_key(raw, keys):
        return None
    return coerce_number(first_value(raw, keys))


def round_half_up(value: object, ndigits: int = 0) -> Optional[float]:
    if value is None or pd.isna(value):
        return None
    q = Decimal(10) ** -ndigits
    return float(Decimal(str(value)).quantize(q, rounding=ROUND_HALF_UP))


# ---------------- Row normalizers ----------------
def normalize_portfolio_row(raw: Mapping[str, str]) -> Optional[PortfolioAggregateRecord]:
    industry = first_value(raw, PORTFOLIO_COLUMNS["industry"])
    if not industry:
        return None
    return PortfolioAggregateRecord(
        industry=industry,
        company_count=max(0, coerce_int(first_value(raw, PORTFOLIO_COLUMNS["company_count"]))),
        avg_hazard_index=coerce_number(first_value(raw, PORTFOLIO_COLUMNS["avg_hazard_index"])),
        high_risk_fraction=coerce_number(first_value(raw, PORTFOLIO_COLUMNS["high_risk_fraction"])),
    )


def normalize_feature_row(raw: Mapping[str, str]) -> Optional[FeatureImportanceRecord]:
    name = first_value(raw, FEATURE_COLUMNS["name"])
    if not name:
        return None
    return FeatureImportanceRecord(name=name, importance=coerce_number(first_value(raw, FEATURE_COLUMNS["importance"])))


def normalize_company_row(raw: Mapping[str, str]) -> Optional[CompanyRecord]:
    name = first_value(raw, COMPANY_COLUMNS["name"])
    if not name:
        return None
    return CompanyRecord(
        id=first_value(raw, COMPANY_COLUMNS["id"]),
        name=name,
        industry=first_value(raw, COMPANY_COLUMNS["industry"]),
        hazard_index=coerce_number(first_value(raw, COMPANY_COLUMNS["hazard_index"])),
        is_high_risk=coerce_flag(first_value(raw, COMPANY_COLUMNS["is_high_risk"])),
        region_code=first_value(raw, COMPANY_COLUMNS["region_code"]),
        lat=optional_coordinate(raw, COMPANY_COLUMNS["lat"]),
        lon=optional_coordinate(raw, COMPANY_COLUMNS["lon"]),
    )


def _normalize_rows(
    rows: Iterable[Mapping[str, str]],
    normalize_row: Callable[[Mapping[str, str]], Optional[T]],
    label: str,
) -> List[T]:
    out: List[T] = []
    dropped = 0
    for raw in rows:
        record = normalize_row(raw)
        if record is None:
            dropped += 1
            continue
        out.append(record)
    if dropped:
        logger.debug("%s: dropped %d row(s) missing the required field", label, dropped)
    return out


def normalize_portfolio_rows(rows: Iterable[Mapping[str, str]]) -> List[PortfolioAggregateRecord]:
    return _normalize_rows(rows, normalize_portfolio_row, "portfolio")


def normalize_feature_rows(rows: Iterable[Mapping[str, str]]) -> List[FeatureImportanceRecord]:
    return _normalize_rows(rows, normalize_feature_row, "features")


def normalize_company_rows(rows: Iterable[Mapping[str, str]]) -> List[CompanyRecord]:
    return _normalize_rows(rows, normalize_company_row, "companies")


# ---------------- Frames ----------------
def records_frame(records: Iterable[object], columns: Optional[Sequence[str]] = None) -> pd.DataFrame:
    """Turn dataclass records into a DataFrame (empty frame keeps ``columns`` when given)."""
    rows = [asdict(r) for r in records]  # type: ignore[call-overload]
    if not rows:
        return pd.DataFrame(columns=list(columns or []))
    df = pd.DataFrame(rows)
    if columns:
        df = df[[c for c in columns if c in df.columns]]
    return df
