"""POST /v1/curve - cost comparison series across a turnover range"""

import time
import logging
from dataclasses import asdict
from fastapi import APIRouter, Depends, HTTPException, Request

from payment_calculator.api.v1.schemas import CurvePointSchema, CurveRequest, CurveResponse
from payment_calculator.api.dependencies import get_rate_table, get_request_id
from payment_calculator.config import settings
from payment_calculator.domain.curve import find_break_even, sweep
from payment_calculator.domain.exceptions import DomainException
from payment_calculator.domain.models import ComplianceFlags, ManualFlags
from payment_calculator.domain.profiles import blended_average_amount
from payment_calculator.domain.rates import RateTable, merge_rate_table
from payment_calculator.infrastructure.observability.metrics import record_sweep
from payment_calculator.infrastructure.observability.logging import log_sweep

router = APIRouter()


@router.post("/curve", response_model=CurveResponse)
def generate_curve(
    request_body: CurveRequest,
    request: Request,
    base_rates: RateTable = Depends(get_rate_table),
):
    """
    Sample both strategies from max_turnover / steps up to max_turnover.

    Returns the chart points (GBP) and the first break-even turnover, if any.
    """
    start_time = time.time()
    request_id = get_request_id(request)

    steps = request_body.steps or settings.default_sweep_steps
    if steps > settings.max_sweep_steps:
        raise HTTPException(
            status_code=422,
            detail=f"steps must be <= {settings.max_sweep_steps}",
        )

    try:
        rates = merge_rate_table(base_rates, request_body.rate_overrides)
        flags = (
            ComplianceFlags(**request_body.flags.model_dump())
            if request_body.flags is not None
            else None
        )
        points = sweep(
            flags,
            request_body.subscription_share_pct,
            request_body.subscription_unit_amount,
            request_body.european_share_pct,
            request_body.us_share_pct,
            request_body.max_turnover or settings.default_max_turnover,
            blended_average_amount(
                request_body.subscription_share_pct,
                request_body.subscription_unit_amount,
                request_body.one_off_unit_amount,
            ),
            steps=steps,
            rates=rates,
            manual=ManualFlags(include_chargeback_fee=request_body.include_chargeback_fee),
        )
        break_even = find_break_even(points)

    except DomainException as e:
        logging.warning(f"Invalid curve input: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    duration_ms = (time.time() - start_time) * 1000
    record_sweep(len(points), break_even)
    log_sweep(request_id, len(points), break_even, duration_ms)

    return CurveResponse(
        points=[CurvePointSchema(**asdict(point)) for point in points],
        break_even_turnover=break_even,
    )
