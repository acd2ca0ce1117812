"""POST /v1/compare - cost both strategies for one transaction mix"""

import time
import logging
from dataclasses import asdict
from fastapi import APIRouter, Depends, HTTPException, Request

from payment_calculator.api.v1.schemas import (
    CompareRequest,
    CompareResponse,
    ComparisonSchema,
    ComplianceFlagsSchema,
    DirectBreakdownSchema,
    MorBreakdownSchema,
)
from payment_calculator.api.dependencies import get_rate_table, get_request_id
from payment_calculator.domain.costs import (
    compare_strategies,
    evaluate_direct_strategy,
    evaluate_mor_strategy,
)
from payment_calculator.domain.exceptions import DomainException
from payment_calculator.domain.models import (
    ComplianceFlags,
    DirectCostBreakdown,
    ManualFlags,
    MorCostBreakdown,
)
from payment_calculator.domain.profiles import build_profile
from payment_calculator.domain.rates import RateTable, merge_rate_table
from payment_calculator.domain.thresholds import derive_compliance_flags
from payment_calculator.infrastructure.observability.metrics import record_comparison
from payment_calculator.infrastructure.observability.logging import log_comparison

router = APIRouter()


def direct_breakdown_schema(breakdown: DirectCostBreakdown) -> DirectBreakdownSchema:
    return DirectBreakdownSchema(
        currency=breakdown.currency.value,
        components=breakdown.components(),
        total_monthly_cost=breakdown.total_monthly_cost,
        total_annual_cost=breakdown.total_annual_cost,
        monthly_turnover=breakdown.monthly_turnover,
        annual_turnover=breakdown.annual_turnover,
        monthly_profit=breakdown.monthly_profit,
        annual_profit=breakdown.annual_profit,
        profit_margin_pct=breakdown.profit_margin_pct,
        annual_compliance_cost=breakdown.annual_compliance_cost,
        one_time_registration_cost=breakdown.one_time_registration_cost,
    )


def mor_breakdown_schema(breakdown: MorCostBreakdown) -> MorBreakdownSchema:
    return MorBreakdownSchema(
        currency=breakdown.currency.value,
        components=breakdown.components(),
        total_monthly_cost=breakdown.total_monthly_cost,
        total_annual_cost=breakdown.total_annual_cost,
        monthly_turnover=breakdown.monthly_turnover,
        annual_turnover=breakdown.annual_turnover,
        monthly_profit=breakdown.monthly_profit,
        annual_profit=breakdown.annual_profit,
        profit_margin_pct=breakdown.profit_margin_pct,
    )


@router.post("/compare", response_model=CompareResponse)
def compare(
    request_body: CompareRequest,
    request: Request,
    base_rates: RateTable = Depends(get_rate_table),
):
    """
    Cost a transaction mix under both strategies.

    Flow:
    1. Merge request rate overrides over the configured table
    2. Derive compliance flags unless the caller supplied them
    3. Evaluate direct and MoR costs
    4. Compare in GBP and recommend a strategy
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        rates = merge_rate_table(base_rates, request_body.rate_overrides)
        profile = build_profile(**request_body.profile.model_dump())

        flags_derived = request_body.flags is None
        if flags_derived:
            flags = derive_compliance_flags(profile)
        else:
            flags = ComplianceFlags(**request_body.flags.model_dump())
        manual = ManualFlags(include_chargeback_fee=request_body.include_chargeback_fee)

        direct = evaluate_direct_strategy(profile, flags, rates, manual)
        mor = evaluate_mor_strategy(profile, rates)
        comparison = compare_strategies(direct, mor, rates)

    except DomainException as e:
        logging.warning(f"Invalid comparison input: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    duration_ms = (time.time() - start_time) * 1000
    record_comparison(comparison.recommended_strategy.value)
    log_comparison(
        request_id,
        direct.monthly_turnover,
        comparison.recommended_strategy.value,
        comparison.annual_profit_difference,
        duration_ms,
    )

    comparison_fields = asdict(comparison)
    comparison_fields["cheaper_strategy"] = comparison.cheaper_strategy.value
    comparison_fields["recommended_strategy"] = comparison.recommended_strategy.value

    return CompareResponse(
        flags=ComplianceFlagsSchema(**asdict(flags)),
        flags_derived=flags_derived,
        include_chargeback_fee=manual.include_chargeback_fee,
        direct=direct_breakdown_schema(direct),
        mor=mor_breakdown_schema(mor),
        mor_converted=mor_breakdown_schema(mor.converted(rates.assumptions.usd_to_gbp_rate)),
        comparison=ComparisonSchema(**comparison_fields),
    )
