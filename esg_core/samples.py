"""Built-in sample data shown until the user uploads their own CSV exports."""

from __future__ import annotations

from typing import Tuple

from esg_core.models import CompanyRecord, FeatureImportanceRecord, PortfolioAggregateRecord


SAMPLE_PORTFOLIO: Tuple[PortfolioAggregateRecord, ...] = (
    PortfolioAggregateRecord("Chemicals", 38, 0.72, 0.44),
    PortfolioAggregateRecord("Construction", 36, 0.64, 0.39),
    PortfolioAggregateRecord("Energy", 42, 0.61, 0.33),
    PortfolioAggregateRecord("Pharmaceuticals", 33, 0.49, 0.22),
    PortfolioAggregateRecord("Consumer Goods", 39, 0.41, 0.18),
)

SAMPLE_FEATURES: Tuple[FeatureImportanceRecord, ...] = (
    FeatureImportanceRecord("climate_risk", 0.26),
    FeatureImportanceRecord("worker_incidents_per_1k", 0.21),
    FeatureImportanceRecord("hazardous_material_exposure", 0.18),
    FeatureImportanceRecord("compliance_fines_musd", 0.13),
    FeatureImportanceRecord("revenue_usd_m", 0.09),
    FeatureImportanceRecord("G_score", 0.07),
    FeatureImportanceRecord("S_score", 0.04),
    FeatureImportanceRecord("E_score", 0.02),
)

SAMPLE_COMPANIES: Tuple[CompanyRecord, ...] = (
    CompanyRecord("C0001", "Company_0001", "Chemicals", 0.86, True, "FR", 48.85, 2.35),
    CompanyRecord("C0002", "Company_0002", "Construction", 0.74, True, "UK", 51.51, -0.13),
    CompanyRecord("C0003", "Company_0003", "Energy", 0.68, True, "DE", 52.52, 13.4),
    CompanyRecord("C0004", "Company_0004", "Pharmaceuticals", 0.41, False, "IE", 53.35, -6.26),
    CompanyRecord("C0005", "Company_0005", "Consumer Goods", 0.37, False, "ES", 40.42, -3.7),
    CompanyRecord("C0006", "Company_0006", "Chemicals", 0.79, True, "IT", 45.46, 9.19),
    CompanyRecord("C0007", "Company_0007", "Energy", 0.63, True, "PL", 52.23, 21.01),
    CompanyRecord("C0008", "Company_0008", "Construction", 0.58, False, "SE", 59.33, 18.07),
)

EHEI_FORMULA = (
    "EHEI = 0.40·ClimateRisk + 0.25·WorkerIncidents + 0.20·ComplianceFines + 0.15·HazardExposure\n"
    "EHEI = EHEI × (1 − 0.6·ESG_Mitigation);   ESG_Mitigation = 0.35·E + 0.35·S + 0.30·G (scaled 0–1)"
)

EHEI_PROVENANCE = (
    "The EHEI is a prototype metric designed for this demo, grounded in casualty-liability drivers "
    "(climate/physical hazards, worker safety, regulatory/compliance, and product/hazard exposure), "
    "with ESG acting as a mitigation factor. It is not copied from a single publication; it is a "
    "transparent, explainable construct intended for model product exploration."
)

SYNTHETIC_DATA_NOTE = (
    "Generated programmatically for 300 companies across 8 industries and 5 regions using "
    "domain-informed assumptions (e.g., higher incidents in Construction, higher hazardous exposure "
    "in Chemicals). Replace with your real CSV exports to switch the dashboard to actual data."
)
