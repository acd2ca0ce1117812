"""Dependency injection for FastAPI endpoints"""

from pathlib import Path
from typing import Optional

from fastapi import Depends, Request

from payment_calculator.config import settings
from payment_calculator.domain.rates import RateTable
from payment_calculator.infrastructure.rate_store import load_rate_table


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_rate_overrides_path() -> Optional[Path]:
    """Location of persisted rate overrides, if configured"""
    return settings.rate_overrides_file


def get_rate_table(path: Optional[Path] = Depends(get_rate_overrides_path)) -> RateTable:
    """Provide the effective rate table (defaults plus persisted overrides)"""
    return load_rate_table(path)
