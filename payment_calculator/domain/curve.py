"""Curve generator - samples both strategies across a turnover range"""

import math
from typing import List, Optional, Sequence

from payment_calculator.domain.costs import evaluate_direct_strategy, evaluate_mor_strategy
from payment_calculator.domain.exceptions import InvalidSweepError
from payment_calculator.domain.models import (
    ComplianceFlags,
    CurvePoint,
    ManualFlags,
    TransactionProfile,
)
from payment_calculator.domain.rates import DEFAULT_RATE_TABLE, RateTable
from payment_calculator.domain.thresholds import derive_compliance_flags

DEFAULT_STEPS = 50


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def sweep(
    flags: Optional[ComplianceFlags],
    subscription_share_pct: float,
    subscription_unit_amount: float,
    european_share_pct: float,
    us_share_pct: float,
    max_turnover: float,
    average_transaction_amount: float,
    steps: int = DEFAULT_STEPS,
    rates: RateTable = DEFAULT_RATE_TABLE,
    manual: ManualFlags = ManualFlags(),
) -> List[CurvePoint]:
    """
    Evaluate both strategies at `steps` evenly spaced monthly turnovers.

    Samples run from max_turnover / steps up to max_turnover; the zero
    turnover sample is skipped. Each sample implies a transaction count of
    round(turnover / average_transaction_amount). MoR cost and profit are
    converted to GBP with the rate table's FX assumption.

    If flags is None the threshold policy is applied to every sample,
    otherwise the same flags are used throughout.

    Raises:
        InvalidSweepError: steps < 1, or non-positive turnover / amount
    """
    if steps < 1:
        raise InvalidSweepError(f"steps must be >= 1, got {steps}")
    if max_turnover <= 0:
        raise InvalidSweepError(f"max_turnover must be > 0, got {max_turnover}")
    if average_transaction_amount <= 0:
        raise InvalidSweepError(
            f"average_transaction_amount must be > 0, got {average_transaction_amount}"
        )

    fx_rate = rates.assumptions.usd_to_gbp_rate
    step_size = max_turnover / steps
    points = []

    for i in range(1, steps + 1):
        turnover = step_size * i
        profile = TransactionProfile(
            unit_amount=average_transaction_amount,
            monthly_volume=_round_half_up(turnover / average_transaction_amount),
            european_share_pct=european_share_pct,
            us_share_pct=us_share_pct,
            subscription_share_pct=subscription_share_pct,
            subscription_unit_amount=subscription_unit_amount,
        )
        point_flags = flags if flags is not None else derive_compliance_flags(profile)

        direct = evaluate_direct_strategy(profile, point_flags, rates, manual)
        mor = evaluate_mor_strategy(profile, rates)

        points.append(
            CurvePoint(
                turnover_level=turnover,
                direct_monthly_cost=direct.total_monthly_cost,
                mor_monthly_cost=mor.total_monthly_cost * fx_rate,
                direct_monthly_profit=direct.monthly_profit,
                mor_monthly_profit=mor.monthly_profit * fx_rate,
            )
        )

    return points


def find_break_even(points: Sequence[CurvePoint]) -> Optional[float]:
    """
    Turnover at the first crossing of the two cost curves.

    Scans consecutive pairs and returns the lower turnover of the first pair
    where direct minus MoR cost changes sign (touching zero counts). Costs
    are not monotonic once compliance fees switch on, so later crossings
    are ignored. Returns None when the curves never cross.
    """
    for current, following in zip(points, points[1:]):
        gap_now = current.direct_monthly_cost - current.mor_monthly_cost
        gap_next = following.direct_monthly_cost - following.mor_monthly_cost
        if (gap_now >= 0 and gap_next <= 0) or (gap_now <= 0 and gap_next >= 0):
            return current.turnover_level
    return None
