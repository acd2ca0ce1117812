"""GET/PUT /v1/rates - effective rate table and persisted overrides"""

import logging
from pathlib import Path
from typing import Dict, Optional
from fastapi import APIRouter, Depends, HTTPException

from payment_calculator.api.v1.schemas import RateOverridesSchema
from payment_calculator.api.dependencies import get_rate_overrides_path, get_rate_table
from payment_calculator.domain.exceptions import InvalidRateTableError
from payment_calculator.domain.rates import RateTable, rate_table_to_dict
from payment_calculator.infrastructure.rate_store import (
    load_rate_overrides,
    load_rate_table,
    save_rate_overrides,
)

router = APIRouter()


@router.get("/rates")
def get_rates(rates: RateTable = Depends(get_rate_table)) -> Dict[str, Dict[str, float]]:
    """Rate table used for evaluations: defaults with persisted overrides applied"""
    return rate_table_to_dict(rates)


@router.put("/rates")
def put_rates(
    overrides: RateOverridesSchema,
    path: Optional[Path] = Depends(get_rate_overrides_path),
) -> Dict[str, Dict[str, float]]:
    """
    Merge overrides into the persisted override file.

    Groups are merged shallowly: fields sent replace stored ones, others are kept.
    """
    if path is None:
        raise HTTPException(status_code=409, detail="Rate overrides file is not configured")

    stored = load_rate_overrides(path)
    for group, values in overrides.items():
        stored[group] = {**stored.get(group, {}), **values}

    try:
        save_rate_overrides(path, stored)
    except InvalidRateTableError as e:
        logging.warning(f"Rejected rate overrides: {e}")
        raise HTTPException(status_code=422, detail=str(e))

    return rate_table_to_dict(load_rate_table(path))
