"""Fee rates, fixed fees and business assumptions consumed by the cost engine"""

from dataclasses import asdict, dataclass, field, fields, replace
from typing import Any, Dict, Mapping

from payment_calculator.domain.exceptions import InvalidRateTableError


@dataclass(frozen=True)
class AccountancyRates:
    """Accounting and tax compliance costs, in GBP"""

    base_annual_accountant_fee: float = 500.0
    monthly_eu_vat_fee: float = 200.0  # EU VAT OSS compliance + quarterly filing
    monthly_uk_vat_fee: float = 120.0  # UK VAT compliance + quarterly filing
    monthly_us_sales_tax_fee: float = 160.0  # per registered state
    eu_vat_oss_registration_fee: float = 200.0  # one-time
    uk_vat_registration_fee: float = 0.0  # one-time, free in the UK
    us_sales_tax_registration_fee: float = 250.0  # one-time


@dataclass(frozen=True)
class DirectRates:
    """Direct card processor rates (UK account), in GBP"""

    domestic_rate: float = 0.015
    domestic_fixed_fee: float = 0.20
    european_rate: float = 0.025
    european_fixed_fee: float = 0.20
    non_european_rate: float = 0.0325
    non_european_fixed_fee: float = 0.20
    subscription_surcharge_rate: float = 0.007
    tax_service_rate: float = 0.005
    chargeback_fee: float = 15.0
    dispute_fee: float = 15.0


@dataclass(frozen=True)
class MorRates:
    """Merchant-of-record platform rates, in USD"""

    platform_fee_rate: float = 0.05
    platform_fixed_fee: float = 0.50
    international_fee_rate: float = 0.015  # transactions outside the US
    subscription_surcharge_rate: float = 0.005
    payout_fee_rate: float = 0.01


@dataclass(frozen=True)
class Assumptions:
    """Modelling assumptions shared by both strategies"""

    chargeback_rate: float = 0.006
    dispute_rate: float = 0.002
    usd_to_gbp_rate: float = 0.79


@dataclass(frozen=True)
class RateTable:
    """Complete configuration for one evaluation"""

    accountancy: AccountancyRates = field(default_factory=AccountancyRates)
    direct: DirectRates = field(default_factory=DirectRates)
    mor: MorRates = field(default_factory=MorRates)
    assumptions: Assumptions = field(default_factory=Assumptions)


DEFAULT_RATE_TABLE = RateTable()


def merge_rate_table(base: RateTable, overrides: Mapping[str, Mapping[str, Any]] | None) -> RateTable:
    """
    Shallow-merge a partial {group: {field: value}} mapping over a rate table.

    Fields not named keep the value from base. Unknown groups or fields and
    non-numeric or negative values raise InvalidRateTableError.
    """
    if not overrides:
        return base

    groups = {f.name for f in fields(base)}
    merged = {}
    for group, values in overrides.items():
        if group not in groups:
            raise InvalidRateTableError(f"Unknown rate group: {group}")
        if not isinstance(values, Mapping):
            raise InvalidRateTableError(f"Rate group {group} must be an object")

        current = getattr(base, group)
        known = {f.name for f in fields(current)}
        changes: Dict[str, float] = {}
        for name, value in values.items():
            if name not in known:
                raise InvalidRateTableError(f"Unknown rate field: {group}.{name}")
            # bool is an int subclass but never a valid rate
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise InvalidRateTableError(f"Rate {group}.{name} must be a number, got {value!r}")
            if value < 0:
                raise InvalidRateTableError(f"Rate {group}.{name} must be >= 0, got {value}")
            changes[name] = float(value)

        merged[group] = replace(current, **changes)

    return replace(base, **merged)


def rate_table_to_dict(table: RateTable) -> Dict[str, Dict[str, float]]:
    """Nested JSON-ready representation mirroring the override shape"""
    return asdict(table)
