"""
Shipping Data

Zone and rate snapshots, reference configuration, and validation.

Structure:
    - reference/: Static configuration and default snapshots (JSON)
    - schema.py: Snapshot column layout and document conversion
    - validation.py: Write-time configuration rules
"""

import json
import polars as pl
from pathlib import Path

from .schema import ZONE_SCHEMA, RATE_SCHEMA, zone_row, rate_row, to_frame
from .validation import (
    zone_errors,
    rate_errors,
    validate_zone_rows,
    validate_rate_rows,
)
from .reference import CURRENCY_DECIMALS, CENTS_PER_UNIT, ROUNDING_TOLERANCE


REFERENCE_DIR = Path(__file__).parent / "reference"


# =============================================================================
# SNAPSHOTS FROM RECORDS
# =============================================================================

def zones_from_records(records: list[dict], validate: bool = True) -> pl.DataFrame:
    """
    Build a zone snapshot from zone documents.

    Args:
        records: Zone documents (see schema.py for the expected keys)
        validate: If True, raise ConfigurationError on invalid zones

    Returns:
        DataFrame with ZONE_SCHEMA columns, in record order
    """
    rows = [zone_row(r) for r in records]
    if validate:
        validate_zone_rows(rows)
    return to_frame(rows, ZONE_SCHEMA)


def rates_from_records(
    records: list[dict],
    validate: bool = True,
    zone_ids: set[str] | None = None,
) -> pl.DataFrame:
    """
    Build a rate snapshot from rate documents.

    Args:
        records: Rate documents (see schema.py for the expected keys)
        validate: If True, raise ConfigurationError on invalid rates
        zone_ids: Known zone ids; when given, rates must reference one of them

    Returns:
        DataFrame with RATE_SCHEMA columns, in record order
    """
    rows = [rate_row(r) for r in records]
    if validate:
        validate_rate_rows(rows, zone_ids)
    return to_frame(rows, RATE_SCHEMA)


def validate_zone_records(records: list[dict]) -> list[str]:
    """Configuration problems in zone documents (empty list when valid)."""
    return zone_errors([zone_row(r) for r in records])


def validate_rate_records(records: list[dict], zone_ids: set[str] | None = None) -> list[str]:
    """Configuration problems in rate documents (empty list when valid)."""
    return rate_errors([rate_row(r) for r in records], zone_ids)


# =============================================================================
# REFERENCE LOADERS
# =============================================================================

def read_records(path: Path | str) -> list[dict]:
    """Read a JSON array of documents."""
    records = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(records, list):
        raise ValueError(f"{path}: expected a JSON array of documents")
    return records


def load_zones(path: Path | str | None = None) -> pl.DataFrame:
    """
    Load a zone snapshot from JSON.

    Args:
        path: JSON file of zone documents (default: reference/default_zones.json)

    Returns:
        DataFrame with ZONE_SCHEMA columns
    """
    return zones_from_records(read_records(path or REFERENCE_DIR / "default_zones.json"))


def load_rates(
    path: Path | str | None = None,
    zones: pl.DataFrame | None = None,
) -> pl.DataFrame:
    """
    Load a rate snapshot from JSON.

    Args:
        path: JSON file of rate documents (default: reference/default_rates.json)
        zones: Zone snapshot; when given, rates must reference its zones

    Returns:
        DataFrame with RATE_SCHEMA columns
    """
    zone_ids = set(zones["zone_id"].to_list()) if zones is not None else None
    return rates_from_records(
        read_records(path or REFERENCE_DIR / "default_rates.json"),
        zone_ids=zone_ids,
    )


__all__ = [
    # Snapshots
    "zones_from_records",
    "rates_from_records",
    "validate_zone_records",
    "validate_rate_records",
    # Reference loaders
    "read_records",
    "load_zones",
    "load_rates",
    "REFERENCE_DIR",
    # Schemas
    "ZONE_SCHEMA",
    "RATE_SCHEMA",
    # Currency config
    "CURRENCY_DECIMALS",
    "CENTS_PER_UNIT",
    "ROUNDING_TOLERANCE",
]
