"""Helpers for building transaction profiles from a sales mix"""

from payment_calculator.domain.models import TransactionProfile


def blended_average_amount(
    subscription_share_pct: float,
    subscription_unit_amount: float,
    one_off_unit_amount: float,
) -> float:
    """
    Average amount per transaction across subscriptions and one-off sales.

    Example:
        20% subscriptions at 30, 80% one-off at 50 -> 0.2 * 30 + 0.8 * 50 = 46
    """
    subscription_portion = (subscription_share_pct / 100) * subscription_unit_amount
    one_off_portion = ((100 - subscription_share_pct) / 100) * one_off_unit_amount
    return subscription_portion + one_off_portion


def build_profile(
    monthly_volume: float,
    one_off_unit_amount: float,
    european_share_pct: float,
    us_share_pct: float,
    subscription_share_pct: float = 0.0,
    subscription_unit_amount: float = 0.0,
) -> TransactionProfile:
    """Build a profile whose unit_amount is the blended average of the sales mix"""
    return TransactionProfile(
        unit_amount=blended_average_amount(
            subscription_share_pct, subscription_unit_amount, one_off_unit_amount
        ),
        monthly_volume=monthly_volume,
        european_share_pct=european_share_pct,
        us_share_pct=us_share_pct,
        subscription_share_pct=subscription_share_pct,
        subscription_unit_amount=subscription_unit_amount,
    )
