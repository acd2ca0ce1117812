"""Integration tests for API endpoints"""

import pytest
from dataclasses import asdict
from fastapi.testclient import TestClient

from payment_calculator.domain.curve import sweep


@pytest.fixture
def compare_body():
    """Reference UK SaaS mix with EU VAT only"""
    return {
        "profile": {
            "one_off_unit_amount": 50,
            "monthly_volume": 100,
            "european_share_pct": 33,
            "us_share_pct": 33,
            "subscription_share_pct": 0,
            "subscription_unit_amount": 30,
        },
        "flags": {"eu_vat_oss_required": True},
    }


def test_health_endpoint(client: TestClient):
    """Test health check endpoint"""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_request_id_header(client: TestClient):
    """Test caller request IDs are echoed back"""
    response = client.get("/health", headers={"X-Request-ID": "req-123"})
    assert response.headers["X-Request-ID"] == "req-123"


def test_compare_endpoint(client: TestClient, compare_body):
    """Test POST /v1/compare with explicit flags"""
    response = client.post("/v1/compare", json=compare_body)

    assert response.status_code == 200
    data = response.json()
    assert data["flags_derived"] is False
    assert data["flags"]["eu_vat_oss_required"] is True
    assert data["direct"]["currency"] == "GBP"
    assert data["direct"]["components"]["base_processing_fees"] == pytest.approx(32.3)
    assert data["direct"]["total_monthly_cost"] == pytest.approx(410.041667)
    assert data["direct"]["one_time_registration_cost"] == pytest.approx(200)
    assert data["mor"]["currency"] == "USD"
    assert data["mor"]["total_monthly_cost"] == pytest.approx(441.916667)
    assert data["mor_converted"]["currency"] == "GBP"
    assert data["mor_converted"]["total_monthly_cost"] == pytest.approx(441.916667 * 0.79)
    assert data["comparison"]["cheaper_strategy"] == "merchant_of_record"
    assert data["comparison"]["recommended_strategy"] == "direct"


def test_compare_endpoint_derives_flags(client: TestClient, compare_body):
    """Test flags come from the threshold policy when omitted"""
    del compare_body["flags"]
    compare_body["profile"]["monthly_volume"] = 1000

    response = client.post("/v1/compare", json=compare_body)

    assert response.status_code == 200
    data = response.json()
    assert data["flags_derived"] is True
    # 330 US sales: sales tax in one state, EU share above 1%
    assert data["flags"] == {
        "eu_vat_oss_required": True,
        "uk_vat_required": False,
        "us_sales_tax_required": True,
        "nexus_count": 1,
    }


def test_compare_endpoint_chargebacks_and_overrides(client: TestClient, compare_body):
    """Test manual chargeback option and per-request rate overrides"""
    compare_body["include_chargeback_fee"] = True
    compare_body["rate_overrides"] = {"direct": {"chargeback_fee": 20}}

    response = client.post("/v1/compare", json=compare_body)

    assert response.status_code == 200
    data = response.json()
    assert data["include_chargeback_fee"] is True
    assert data["direct"]["components"]["chargeback_fees"] == pytest.approx(100 * 0.006 * 20)


def test_compare_endpoint_rejects_shares_over_100(client: TestClient, compare_body):
    """Test EU + US above 100% is a 422"""
    compare_body["profile"]["european_share_pct"] = 70

    response = client.post("/v1/compare", json=compare_body)

    assert response.status_code == 422


def test_compare_endpoint_rejects_unknown_rate(client: TestClient, compare_body):
    """Test unknown override fields are a 422"""
    compare_body["rate_overrides"] = {"direct": {"base_rate": 0.01}}

    response = client.post("/v1/compare", json=compare_body)

    assert response.status_code == 422


def test_curve_endpoint(client: TestClient):
    """Test POST /v1/curve with defaults"""
    response = client.post("/v1/curve", json={"flags": {"eu_vat_oss_required": True}})

    assert response.status_code == 200
    data = response.json()
    assert len(data["points"]) == 50
    assert data["points"][-1]["turnover_level"] == pytest.approx(100_000)
    assert data["break_even_turnover"] is not None


def test_curve_endpoint_step_limit(client: TestClient):
    """Test oversize sweeps are refused"""
    response = client.post("/v1/curve", json={"steps": 100_000})

    assert response.status_code == 422


def test_rates_endpoint_defaults(client: TestClient):
    """Test GET /v1/rates returns the default table"""
    response = client.get("/v1/rates")

    assert response.status_code == 200
    assert response.json()["assumptions"]["usd_to_gbp_rate"] == 0.79


def test_put_rates_persists_and_applies(client: TestClient, compare_body):
    """Test saved overrides are used by later evaluations"""
    response = client.put("/v1/rates", json={"direct": {"tax_service_rate": 0.01}})

    assert response.status_code == 200
    assert response.json()["direct"]["tax_service_rate"] == 0.01

    data = client.post("/v1/compare", json=compare_body).json()
    assert data["direct"]["components"]["tax_service_fee"] == pytest.approx(50.0)


def test_put_rates_rejects_unknown_group(client: TestClient):
    """Test invalid overrides are not persisted"""
    response = client.put("/v1/rates", json={"stripe": {"baseRate": 0.01}})

    assert response.status_code == 422
    assert client.get("/v1/rates").json()["direct"]["domestic_rate"] == 0.015


def test_metrics_endpoint(client: TestClient, compare_body):
    """Test Prometheus metrics endpoint"""
    client.post("/v1/compare", json=compare_body)

    response = client.get("/metrics")
    assert response.status_code == 200
    assert "payment_calculator_recommendation_total" in response.text


def test_rates_endpoint_ignores_stale_overrides_file(client: TestClient, overrides_path):
    """Test a persisted file with unknown fields leaves the defaults in use"""
    overrides_path.write_text('{"direct": {"removed_field": 1}}')

    response = client.get("/v1/rates")

    assert response.status_code == 200
    assert response.json()["direct"]["domestic_rate"] == 0.015


def test_put_rates_replaces_malformed_overrides_file(client: TestClient, overrides_path):
    """Test saving over a file whose group is not an object"""
    overrides_path.write_text('{"direct": 5}')

    response = client.put("/v1/rates", json={"direct": {"tax_service_rate": 0.01}})

    assert response.status_code == 200
    assert response.json()["direct"]["tax_service_rate"] == 0.01
    assert response.json()["direct"]["domestic_rate"] == 0.015


def test_compare_endpoint_blends_subscription_amount(client: TestClient, compare_body):
    """Test the profile amount is weighted across subscriptions and one-off sales"""
    compare_body["profile"]["subscription_share_pct"] = 20

    response = client.post("/v1/compare", json=compare_body)

    assert response.status_code == 200
    # 100 * (0.2 * 30 + 0.8 * 50)
    assert response.json()["direct"]["monthly_turnover"] == pytest.approx(4600)


def test_curve_endpoint_blends_subscription_amount(client: TestClient, eu_vat_only):
    """Test the sweep runs at the blended average amount"""
    response = client.post(
        "/v1/curve",
        json={
            "flags": {"eu_vat_oss_required": True},
            "subscription_share_pct": 50,
            "subscription_unit_amount": 30,
            "one_off_unit_amount": 50,
            "max_turnover": 10_000,
            "steps": 5,
        },
    )

    assert response.status_code == 200
    expected = sweep(eu_vat_only, 50, 30, 30, 25, 10_000, 40, steps=5)
    assert response.json()["points"] == [pytest.approx(asdict(point)) for point in expected]
