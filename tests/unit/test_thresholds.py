"""Unit tests for the tax threshold policy"""

import pytest
from payment_calculator.domain.models import ComplianceFlags, TransactionProfile
from payment_calculator.domain.thresholds import derive_compliance_flags


def make_profile(volume, european=0, us=0, amount=50):
    return TransactionProfile(
        unit_amount=amount,
        monthly_volume=volume,
        european_share_pct=european,
        us_share_pct=us,
    )


@pytest.mark.parametrize(
    "european_share_pct, expected",
    [(0, False), (0.5, False), (1, True), (30, True)],
)
def test_eu_vat_oss_from_one_percent_of_mix(european_share_pct, expected):
    """Test EU VAT OSS switches on at 1% European share"""
    flags = derive_compliance_flags(make_profile(100, european=european_share_pct))
    assert flags.eu_vat_oss_required is expected


def test_uk_vat_threshold_on_domestic_sales_value():
    """Test UK VAT uses domestic sales value against 85,000"""
    # 1700 * 50 = 85,000 all domestic
    assert derive_compliance_flags(make_profile(1700)).uk_vat_required is True
    # 2000 * 50 = 100,000 but only 45% domestic = 45,000
    assert derive_compliance_flags(make_profile(2000, european=30, us=25)).uk_vat_required is False
    assert derive_compliance_flags(make_profile(1000)).uk_vat_required is False


def test_us_sales_tax_needs_more_than_200_sales():
    """Test exactly 200 US sales stays below the threshold"""
    flags = derive_compliance_flags(make_profile(400, us=50))

    assert flags.us_sales_tax_required is False
    assert flags.nexus_count == 1


def test_us_nexus_count():
    """Test one nexus per 200 US sales, minimum 1"""
    quarter = derive_compliance_flags(make_profile(1000, us=25))  # 250 US sales
    half = derive_compliance_flags(make_profile(1000, us=50))  # 500 US sales

    assert quarter.us_sales_tax_required is True
    assert quarter.nexus_count == 1
    assert half.us_sales_tax_required is True
    assert half.nexus_count == 2


def test_no_sales_gives_minimum_nexus():
    """Test nexus count never drops below 1"""
    flags = derive_compliance_flags(make_profile(0, european=30, us=25))

    assert flags == ComplianceFlags(eu_vat_oss_required=True, nexus_count=1)


def test_derivation_is_idempotent():
    """Test re-deriving on the same profile yields the same flags"""
    profile = make_profile(3000, european=20, us=40)

    first = derive_compliance_flags(profile)
    second = derive_compliance_flags(profile)

    assert first == second
