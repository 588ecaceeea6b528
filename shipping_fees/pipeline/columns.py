"""
Column Schema Definitions

Documents the columns each pipeline stage adds or produces.
"""

import polars as pl

from ..data.schema import ZONE_SCHEMA, RATE_SCHEMA


# =============================================================================
# SNAPSHOT COLUMNS (from data.schema)
# =============================================================================

ZONE_COLS = list(ZONE_SCHEMA)
RATE_COLS = list(RATE_SCHEMA)


# =============================================================================
# RESOLUTION COLUMNS (added by resolve_zones)
# =============================================================================

RESOLVE_COLS = [
    "match_tier",           # "city", "country" or "region"
]


# =============================================================================
# EVALUATION COLUMNS (added by evaluate_rates)
# =============================================================================

EVALUATION_COLS = [
    "is_eligible",          # Active, conditions met, method could price it
    "cost_base",            # Cost from the pricing method
    "cost_city",            # City override cost (null if none)
    "cost_total",           # Override or base, rounded to cents (null if ineligible)
    "cost_cents",           # cost_total in integer cents (ranking key)
]


# =============================================================================
# OPTION COLUMNS (produced by assemble_options)
# =============================================================================

OPTION_SCHEMA = {
    "id": pl.Utf8,              # Rate id, or "zone_price:<zone_id>"
    "name": pl.Utf8,            # Rate name, or "<zone name> Standard"
    "description": pl.Utf8,
    "method": pl.Utf8,          # Rate method, or "zone_price"
    "cost": pl.Float64,         # Price, rounded to cents
    "cost_cents": pl.Int64,     # Ranking key
    "zone_id": pl.Utf8,
    "zone_name": pl.Utf8,
    "estimated_days": pl.Utf8,  # Display hint (null for zone prices)
}

OPTION_COLS = list(OPTION_SCHEMA)

# Keys of each option handed to UI callers
LISTING_KEYS = ["id", "name", "description", "method", "cost", "zone_name", "estimated_days"]


# =============================================================================
# METADATA COLUMNS
# =============================================================================

METADATA_COLS = [
    "calculator_version",   # Version stamp from shipping_fees/version.py
]
