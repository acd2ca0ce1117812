"""Cost engine - itemized monthly costs for direct processing and merchant of record"""

from payment_calculator.domain.models import (
    ComplianceFlags,
    Currency,
    DirectCostBreakdown,
    ManualFlags,
    MorCostBreakdown,
    Strategy,
    StrategyComparison,
    TransactionProfile,
)
from payment_calculator.domain.rates import DEFAULT_RATE_TABLE, RateTable

MONTHS_PER_YEAR = 12


def _bucket_fee(volume: float, unit_amount: float, fixed_fee: float, rate: float) -> float:
    """Per-transaction fixed fee plus percentage of the bucket's revenue"""
    return volume * fixed_fee + (volume * unit_amount) * rate


def evaluate_direct_strategy(
    profile: TransactionProfile,
    flags: ComplianceFlags,
    rates: RateTable = DEFAULT_RATE_TABLE,
    manual: ManualFlags = ManualFlags(),
) -> DirectCostBreakdown:
    """
    Monthly cost of taking card payments directly and handling tax yourself.

    Volume is split into four region buckets:
    - European: volume * european share
    - US: volume * US share
    - Domestic (UK): whatever is left
    - Rest of world: volume minus the three above (always 0 with this split,
      kept so it is itemized alongside US under non_european_fees)

    Subscription surcharge, tax service fee, disputes and the accountant fee
    apply on top of the regional fees. Compliance fees follow the flags as
    given; no threshold logic happens here. Chargebacks are only costed when
    the merchant opts in through ManualFlags.

    All amounts are GBP per month. total_annual_cost is 12 months of
    total_monthly_cost; one-time registration fees are reported separately.
    """
    direct = rates.direct
    accountancy = rates.accountancy
    assumptions = rates.assumptions

    volume = profile.monthly_volume
    amount = profile.unit_amount
    monthly_turnover = profile.monthly_turnover

    # Region buckets
    european_volume = volume * (profile.european_share_pct / 100)
    us_volume = volume * (profile.us_share_pct / 100)
    domestic_volume = volume - european_volume - us_volume
    rest_of_world_volume = volume - domestic_volume - european_volume - us_volume

    base_processing_fees = _bucket_fee(
        domestic_volume, amount, direct.domestic_fixed_fee, direct.domestic_rate
    )
    european_fees = _bucket_fee(
        european_volume, amount, direct.european_fixed_fee, direct.european_rate
    )
    non_european_fees = _bucket_fee(
        us_volume, amount, direct.non_european_fixed_fee, direct.non_european_rate
    ) + _bucket_fee(
        rest_of_world_volume, amount, direct.non_european_fixed_fee, direct.non_european_rate
    )

    # Subscriptions pay a surcharge on top of their regional fee
    subscription_revenue = (
        volume * (profile.subscription_share_pct / 100)
    ) * profile.subscription_unit_amount
    subscription_surcharge = subscription_revenue * direct.subscription_surcharge_rate

    tax_service_fee = monthly_turnover * direct.tax_service_rate

    tax_compliance_fees = 0.0
    one_time_registration_cost = 0.0
    if flags.eu_vat_oss_required:
        tax_compliance_fees += accountancy.monthly_eu_vat_fee
        one_time_registration_cost += accountancy.eu_vat_oss_registration_fee
    if flags.uk_vat_required:
        tax_compliance_fees += accountancy.monthly_uk_vat_fee
        one_time_registration_cost += accountancy.uk_vat_registration_fee
    if flags.us_sales_tax_required:
        tax_compliance_fees += accountancy.monthly_us_sales_tax_fee * flags.nexus_count
        one_time_registration_cost += accountancy.us_sales_tax_registration_fee

    estimated_chargebacks = (
        volume * assumptions.chargeback_rate if manual.include_chargeback_fee else 0.0
    )
    chargeback_fees = estimated_chargebacks * direct.chargeback_fee
    dispute_fees = volume * assumptions.dispute_rate * direct.dispute_fee

    accountant_fee = accountancy.base_annual_accountant_fee / MONTHS_PER_YEAR

    components = {
        "base_processing_fees": base_processing_fees,
        "european_fees": european_fees,
        "non_european_fees": non_european_fees,
        "subscription_surcharge": subscription_surcharge,
        "tax_service_fee": tax_service_fee,
        "tax_compliance_fees": tax_compliance_fees,
        "chargeback_fees": chargeback_fees,
        "dispute_fees": dispute_fees,
        "accountant_fee": accountant_fee,
    }
    total_monthly_cost = sum(components[name] for name in DirectCostBreakdown.COMPONENTS)
    total_annual_cost = total_monthly_cost * MONTHS_PER_YEAR
    annual_turnover = monthly_turnover * MONTHS_PER_YEAR

    return DirectCostBreakdown(
        **components,
        total_monthly_cost=total_monthly_cost,
        total_annual_cost=total_annual_cost,
        monthly_turnover=monthly_turnover,
        annual_turnover=annual_turnover,
        monthly_profit=monthly_turnover - total_monthly_cost,
        annual_profit=annual_turnover - total_annual_cost,
        annual_compliance_cost=tax_compliance_fees * MONTHS_PER_YEAR,
        one_time_registration_cost=one_time_registration_cost,
    )


def evaluate_mor_strategy(
    profile: TransactionProfile,
    rates: RateTable = DEFAULT_RATE_TABLE,
) -> MorCostBreakdown:
    """
    Monthly cost of selling through a merchant of record.

    Only two buckets: US (domestic to the MoR) and international. The platform
    fee absorbs tax compliance, chargebacks and disputes, so none of those
    appear here. Amounts stay in USD; converting to GBP is left to the caller.
    """
    mor = rates.mor

    volume = profile.monthly_volume
    monthly_turnover = profile.monthly_turnover

    us_volume = volume * (profile.us_share_pct / 100)
    international_volume = volume - us_volume
    international_revenue = international_volume * profile.unit_amount

    platform_fee = monthly_turnover * mor.platform_fee_rate + volume * mor.platform_fixed_fee
    international_fees = international_revenue * mor.international_fee_rate

    subscription_revenue = (
        volume * (profile.subscription_share_pct / 100)
    ) * profile.subscription_unit_amount
    subscription_surcharge = subscription_revenue * mor.subscription_surcharge_rate

    payout_fee = monthly_turnover * mor.payout_fee_rate
    accountant_fee = rates.accountancy.base_annual_accountant_fee / MONTHS_PER_YEAR

    components = {
        "platform_fee": platform_fee,
        "international_fees": international_fees,
        "subscription_surcharge": subscription_surcharge,
        "payout_fee": payout_fee,
        "accountant_fee": accountant_fee,
    }
    total_monthly_cost = sum(components[name] for name in MorCostBreakdown.COMPONENTS)
    total_annual_cost = total_monthly_cost * MONTHS_PER_YEAR
    annual_turnover = monthly_turnover * MONTHS_PER_YEAR

    return MorCostBreakdown(
        **components,
        total_monthly_cost=total_monthly_cost,
        total_annual_cost=total_annual_cost,
        monthly_turnover=monthly_turnover,
        annual_turnover=annual_turnover,
        monthly_profit=monthly_turnover - total_monthly_cost,
        annual_profit=annual_turnover - total_annual_cost,
    )


def compare_strategies(
    direct: DirectCostBreakdown,
    mor: MorCostBreakdown,
    rates: RateTable = DEFAULT_RATE_TABLE,
) -> StrategyComparison:
    """
    Compare both strategies in GBP.

    The cheaper strategy is picked on monthly cost; the recommendation is
    picked on annual profit, which can differ when turnover is also converted.
    """
    if mor.currency == Currency.USD:
        mor = mor.converted(rates.assumptions.usd_to_gbp_rate)

    direct_cost = direct.total_monthly_cost
    mor_cost = mor.total_monthly_cost

    cheaper = Strategy.DIRECT if direct_cost < mor_cost else Strategy.MERCHANT_OF_RECORD
    savings = abs(direct_cost - mor_cost)
    larger_cost = max(direct_cost, mor_cost)
    savings_pct = (savings / larger_cost) * 100 if larger_cost > 0 else 0.0

    profit_difference = mor.annual_profit - direct.annual_profit
    recommended = Strategy.MERCHANT_OF_RECORD if profit_difference > 0 else Strategy.DIRECT

    return StrategyComparison(
        direct_monthly_cost=direct_cost,
        mor_monthly_cost=mor_cost,
        cheaper_strategy=cheaper,
        monthly_savings=savings,
        savings_pct=savings_pct,
        annual_profit_difference=profit_difference,
        recommended_strategy=recommended,
    )
