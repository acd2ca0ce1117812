"""Rate override persistence - user-edited rates kept as a flat JSON file"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Mapping

from payment_calculator.domain.exceptions import InvalidRateTableError
from payment_calculator.domain.rates import DEFAULT_RATE_TABLE, RateTable, merge_rate_table

logger = logging.getLogger(__name__)

RateOverrides = Dict[str, Dict[str, Any]]


def load_rate_overrides(path: Path | None) -> RateOverrides:
    """
    Read {group: {field: value}} overrides from disk.

    A missing path or file means no overrides. Unreadable JSON, or content
    that does not fit the rate table (stale fields, non-object groups), is
    logged and treated as no overrides so the defaults stay usable.
    """
    if path is None or not path.exists():
        return {}

    try:
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        logger.warning("Rate overrides file %s is not valid JSON, using defaults: %s", path, e)
        return {}

    if not isinstance(data, dict):
        logger.warning("Rate overrides file %s must hold a JSON object, using defaults", path)
        return {}

    try:
        merge_rate_table(DEFAULT_RATE_TABLE, data)
    except InvalidRateTableError as e:
        logger.warning("Rate overrides file %s does not match the rate table, using defaults: %s", path, e)
        return {}

    logger.info("Loaded rate overrides from %s", path, extra={"groups": sorted(data)})
    return data


def save_rate_overrides(path: Path, overrides: Mapping[str, Mapping[str, Any]]) -> None:
    """
    Write overrides atomically (temp file + rename).

    Overrides are validated against the default table first so a bad file is
    never written.
    """
    merge_rate_table(DEFAULT_RATE_TABLE, overrides)

    path.parent.mkdir(parents=True, exist_ok=True)
    temp_fd, temp_path = tempfile.mkstemp(suffix=".json.tmp", dir=str(path.parent), text=True)
    try:
        with os.fdopen(temp_fd, "w", encoding="utf-8") as f:
            json.dump(overrides, f, indent=2, sort_keys=True)
            f.flush()
            os.fsync(f.fileno())
        os.replace(temp_path, path)
    except OSError:
        Path(temp_path).unlink(missing_ok=True)
        raise

    logger.info("Saved rate overrides to %s", path)


def load_rate_table(path: Path | None) -> RateTable:
    """Default rate table with any persisted overrides applied"""
    return merge_rate_table(DEFAULT_RATE_TABLE, load_rate_overrides(path))
