"""Domain models - immutable dataclasses for transaction mixes and cost outputs"""

from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import ClassVar, Dict, Tuple

from payment_calculator.domain.exceptions import InvalidProfileError


class Currency(str, Enum):
    """Currency an amount is denominated in"""

    GBP = "GBP"
    USD = "USD"


class Strategy(str, Enum):
    """Payment-processing strategy being costed"""

    DIRECT = "direct"
    MERCHANT_OF_RECORD = "merchant_of_record"


@dataclass(frozen=True)
class TransactionProfile:
    """
    Monthly transaction mix for a merchant.

    Shares are whole-number percentages (0-100). The remainder after the
    European and US shares is domestic (UK) volume.
    """

    unit_amount: float  # blended amount per transaction
    monthly_volume: float
    european_share_pct: float
    us_share_pct: float
    subscription_share_pct: float = 0.0
    subscription_unit_amount: float = 0.0

    def __post_init__(self) -> None:
        if self.monthly_volume < 0:
            raise InvalidProfileError(f"monthly_volume must be >= 0, got {self.monthly_volume}")
        if self.unit_amount < 0 or self.subscription_unit_amount < 0:
            raise InvalidProfileError("Transaction amounts must be >= 0")
        for name in ("european_share_pct", "us_share_pct", "subscription_share_pct"):
            value = getattr(self, name)
            if not 0 <= value <= 100:
                raise InvalidProfileError(f"{name} must be within [0, 100], got {value}")
        if self.european_share_pct + self.us_share_pct > 100:
            raise InvalidProfileError(
                "european_share_pct + us_share_pct must not exceed 100, "
                f"got {self.european_share_pct + self.us_share_pct}"
            )

    @property
    def domestic_share_pct(self) -> float:
        return 100 - self.european_share_pct - self.us_share_pct

    @property
    def monthly_turnover(self) -> float:
        return self.unit_amount * self.monthly_volume


@dataclass(frozen=True)
class ComplianceFlags:
    """Tax obligations derived from the transaction mix"""

    eu_vat_oss_required: bool = False
    uk_vat_required: bool = False
    us_sales_tax_required: bool = False
    nexus_count: int = 1  # only used when us_sales_tax_required


@dataclass(frozen=True)
class ManualFlags:
    """Options only ever set by explicit user choice"""

    include_chargeback_fee: bool = False


def _margin_pct(profit: float, turnover: float) -> float:
    return (profit / turnover) * 100 if turnover else 0.0


@dataclass(frozen=True)
class DirectCostBreakdown:
    """Monthly cost of processing directly, in GBP"""

    COMPONENTS: ClassVar[Tuple[str, ...]] = (
        "base_processing_fees",
        "european_fees",
        "non_european_fees",
        "subscription_surcharge",
        "tax_service_fee",
        "tax_compliance_fees",
        "chargeback_fees",
        "dispute_fees",
        "accountant_fee",
    )

    base_processing_fees: float  # domestic bucket
    european_fees: float
    non_european_fees: float  # US + rest of world
    subscription_surcharge: float
    tax_service_fee: float
    tax_compliance_fees: float
    chargeback_fees: float
    dispute_fees: float
    accountant_fee: float
    total_monthly_cost: float
    total_annual_cost: float
    monthly_turnover: float
    annual_turnover: float
    monthly_profit: float
    annual_profit: float
    annual_compliance_cost: float
    one_time_registration_cost: float  # reported only, not in total_annual_cost
    currency: Currency = Currency.GBP

    def components(self) -> Dict[str, float]:
        """Itemized monthly fees, which sum to total_monthly_cost"""
        return {name: getattr(self, name) for name in self.COMPONENTS}

    @property
    def profit_margin_pct(self) -> float:
        return _margin_pct(self.monthly_profit, self.monthly_turnover)


@dataclass(frozen=True)
class MorCostBreakdown:
    """Monthly cost of selling through a merchant of record, in USD unless converted"""

    COMPONENTS: ClassVar[Tuple[str, ...]] = (
        "platform_fee",
        "international_fees",
        "subscription_surcharge",
        "payout_fee",
        "accountant_fee",
    )

    platform_fee: float
    international_fees: float
    subscription_surcharge: float
    payout_fee: float
    accountant_fee: float
    total_monthly_cost: float
    total_annual_cost: float
    monthly_turnover: float
    annual_turnover: float
    monthly_profit: float
    annual_profit: float
    currency: Currency = Currency.USD

    def components(self) -> Dict[str, float]:
        """Itemized monthly fees, which sum to total_monthly_cost"""
        return {name: getattr(self, name) for name in self.COMPONENTS}

    @property
    def profit_margin_pct(self) -> float:
        return _margin_pct(self.monthly_profit, self.monthly_turnover)

    def converted(self, fx_rate: float, currency: Currency = Currency.GBP) -> "MorCostBreakdown":
        """Return a copy with every amount multiplied by fx_rate and tagged with currency"""
        amounts = {
            f.name: getattr(self, f.name) * fx_rate
            for f in fields(self)
            if f.name != "currency"
        }
        return replace(self, currency=currency, **amounts)


@dataclass(frozen=True)
class CurvePoint:
    """One sample of the cost comparison chart, all amounts in GBP"""

    turnover_level: float
    direct_monthly_cost: float
    mor_monthly_cost: float
    direct_monthly_profit: float
    mor_monthly_profit: float


@dataclass(frozen=True)
class StrategyComparison:
    """Side-by-side result of both strategies in the common currency (GBP)"""

    direct_monthly_cost: float
    mor_monthly_cost: float
    cheaper_strategy: Strategy
    monthly_savings: float
    savings_pct: float
    annual_profit_difference: float  # MoR minus direct
    recommended_strategy: Strategy
