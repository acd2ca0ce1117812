"""Pytest fixtures for testing"""

import pytest
from pathlib import Path
from fastapi.testclient import TestClient
from payment_calculator.api.main import create_app
from payment_calculator.api.dependencies import get_rate_overrides_path
from payment_calculator.domain.models import ComplianceFlags, TransactionProfile


@pytest.fixture
def overrides_path(tmp_path: Path) -> Path:
    """Per-test location for persisted rate overrides"""
    return tmp_path / "rates.json"


@pytest.fixture
def client(overrides_path: Path) -> TestClient:
    """Create FastAPI test client with an isolated rate overrides file"""
    app = create_app()
    app.dependency_overrides[get_rate_overrides_path] = lambda: overrides_path
    return TestClient(app)


@pytest.fixture
def uk_saas_profile() -> TransactionProfile:
    """Small UK SaaS merchant: 100 sales of 50, a third each EU/US/UK"""
    return TransactionProfile(
        unit_amount=50,
        monthly_volume=100,
        european_share_pct=33,
        us_share_pct=33,
        subscription_share_pct=0,
        subscription_unit_amount=30,
    )


@pytest.fixture
def eu_vat_only() -> ComplianceFlags:
    """Only EU VAT OSS registration in force"""
    return ComplianceFlags(eu_vat_oss_required=True)
