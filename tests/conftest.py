"""
Pytest configuration and shared fixtures.
"""

import logging

import pytest

from esg_core.models import CompanyRecord
from esg_core.state import AppState


@pytest.fixture(autouse=True)
def setup_logging():
    """Configure logging for tests."""
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


@pytest.fixture
def state():
    """Fresh dashboard state seeded with the built-in samples."""
    return AppState.from_samples()


@pytest.fixture
def make_company():
    """Factory for company records with sensible defaults."""
    def _make(name="Acme", industry="Energy", hazard_index=0.5, is_high_risk=False,
              region_code="", lat=None, lon=None, id=""):
        return CompanyRecord(
            id=id,
            name=name,
            industry=industry,
            hazard_index=hazard_index,
            is_high_risk=is_high_risk,
            region_code=region_code,
            lat=lat,
            lon=lon,
        )
    return _make


@pytest.fixture
def companies_csv():
    """Companies upload mixing explicit coordinates, centroid fallback and unknown regions."""
    return (
        "company_id,company,industry,EHEI,is_high_risk,geo,lat,lon\n"
        "X1,Alpha,Chemicals,0.81,1,FR,48.85,2.35\n"
        "X2,Beta,Energy,0.55,0,DE,,\n"
        "X3,Gamma,Energy,0.30,0,ZZ,,\n"
    )
