"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, Field
from typing import Dict, List, Optional

RateOverridesSchema = Dict[str, Dict[str, float]]


class ProfileSchema(BaseModel):
    """Monthly transaction mix"""

    one_off_unit_amount: float = Field(..., ge=0, description="Amount per one-off sale (GBP)")
    monthly_volume: float = Field(..., ge=0, description="Transactions per month")
    european_share_pct: float = Field(..., ge=0, le=100)
    us_share_pct: float = Field(..., ge=0, le=100)
    subscription_share_pct: float = Field(0, ge=0, le=100)
    subscription_unit_amount: float = Field(0, ge=0)


class ComplianceFlagsSchema(BaseModel):
    """Tax registrations in force"""

    eu_vat_oss_required: bool = False
    uk_vat_required: bool = False
    us_sales_tax_required: bool = False
    nexus_count: int = Field(1, ge=1)


class CompareRequest(BaseModel):
    """Request body for POST /v1/compare"""

    profile: ProfileSchema
    flags: Optional[ComplianceFlagsSchema] = Field(
        None, description="Omit to derive flags from the profile"
    )
    include_chargeback_fee: bool = False
    rate_overrides: Optional[RateOverridesSchema] = None


class DirectBreakdownSchema(BaseModel):
    """Direct processing costs (GBP)"""

    currency: str
    components: Dict[str, float]
    total_monthly_cost: float
    total_annual_cost: float
    monthly_turnover: float
    annual_turnover: float
    monthly_profit: float
    annual_profit: float
    profit_margin_pct: float
    annual_compliance_cost: float
    one_time_registration_cost: float


class MorBreakdownSchema(BaseModel):
    """Merchant-of-record costs"""

    currency: str
    components: Dict[str, float]
    total_monthly_cost: float
    total_annual_cost: float
    monthly_turnover: float
    annual_turnover: float
    monthly_profit: float
    annual_profit: float
    profit_margin_pct: float


class ComparisonSchema(BaseModel):
    """Both strategies side by side in GBP"""

    direct_monthly_cost: float
    mor_monthly_cost: float
    cheaper_strategy: str
    monthly_savings: float
    savings_pct: float
    annual_profit_difference: float
    recommended_strategy: str


class CompareResponse(BaseModel):
    """Response for POST /v1/compare"""

    flags: ComplianceFlagsSchema
    flags_derived: bool
    include_chargeback_fee: bool
    direct: DirectBreakdownSchema
    mor: MorBreakdownSchema
    mor_converted: MorBreakdownSchema
    comparison: ComparisonSchema


class CurveRequest(BaseModel):
    """Request body for POST /v1/curve"""

    flags: Optional[ComplianceFlagsSchema] = Field(
        None, description="Omit to derive flags at every turnover level"
    )
    include_chargeback_fee: bool = False
    subscription_share_pct: float = Field(0, ge=0, le=100)
    subscription_unit_amount: float = Field(30, ge=0)
    european_share_pct: float = Field(30, ge=0, le=100)
    us_share_pct: float = Field(25, ge=0, le=100)
    max_turnover: Optional[float] = Field(None, gt=0)
    one_off_unit_amount: float = Field(50, gt=0, description="Amount per one-off sale (GBP)")
    steps: Optional[int] = Field(None, ge=1)
    rate_overrides: Optional[RateOverridesSchema] = None


class CurvePointSchema(BaseModel):
    """Single chart sample, GBP"""

    turnover_level: float
    direct_monthly_cost: float
    mor_monthly_cost: float
    direct_monthly_profit: float
    mor_monthly_profit: float


class CurveResponse(BaseModel):
    """Response for POST /v1/curve"""

    points: List[CurvePointSchema]
    break_even_turnover: Optional[float] = None
