"""
Rate Evaluation

Prices candidate rates for one order. Rate snapshot in, rate snapshot out,
with these columns appended:

    config_error    - Configuration problem (only present with skip_misconfigured=False)
    is_eligible     - Rate is active, passes its conditions and could be priced
    cost_base       - Cost from the rate's pricing method
    cost_city       - City override cost for the destination (null if none)
    cost_total      - Final cost: city override if present, else cost_base,
                      rounded to cents (null when ineligible)
    cost_cents      - cost_total as integer cents (ranking key)

ELIGIBILITY
-----------
A rate is ineligible when it is inactive or when any condition fails:

    subtotal < min_order_value
    subtotal > max_order_value      (if set)
    weight   < min_weight
    weight   > max_weight           (if set)

A weight_based rate whose ranges do not contain the weight is ineligible too.
City overrides replace the cost of eligible rates only, whatever the method
(free and percentage rates included).

MISCONFIGURED RATES
-------------------
A rate that cannot be evaluated (unknown method, missing cost, weight_based
without ranges, ...) is logged and dropped, so the remaining rates still price.
drop_misconfigured() does this ahead of rate selection; inactive rates are
never reported.
"""

import logging

import polars as pl

from ..data import rates_from_records, CENTS_PER_UNIT, ROUNDING_TOLERANCE
from ..errors import ConfigurationError
from ..methods import cost_expression, config_error_expression
from .catalog import match_city


logger = logging.getLogger(__name__)


# =============================================================================
# MAIN ENTRY POINT
# =============================================================================

def evaluate_rates(
    rates: pl.DataFrame,
    subtotal: float,
    weight: float,
    city: str | None = None,
    skip_misconfigured: bool = True,
) -> pl.DataFrame:
    """
    Evaluate every rate against an order.

    Args:
        rates: Rate snapshot (typically the candidate rates for the order)
        subtotal: Order subtotal
        weight: Order weight
        city: Destination city, for city overrides
        skip_misconfigured: If True, log and drop misconfigured rates;
            if False, keep them (ineligible) with a config_error column

    Returns:
        Rates with eligibility and cost columns (see module docstring)
    """
    df = _add_order_context(rates, subtotal, weight)
    df = _add_weight_ranges(df)
    df = match_city(df, city)
    df = _add_config_errors(df)

    if skip_misconfigured:
        df = _drop_misconfigured(df)

    df = _calculate_costs(df)
    df = _round_costs(df)

    df = df.drop([
        "order_subtotal", "order_weight",
        "_bracket_count", "_bad_bracket_count", "_bracket_cost",
        "city_match", "city_cost",
    ])
    if skip_misconfigured:
        df = df.drop("config_error")

    return df


def evaluate(
    rate: dict | pl.DataFrame,
    subtotal: float,
    weight: float,
    city: str | None = None,
) -> float | None:
    """
    Price a single rate for an order.

    Args:
        rate: Rate document (see data.schema) or single-row rate snapshot
        subtotal: Order subtotal
        weight: Order weight
        city: Destination city, for city overrides

    Returns:
        Cost (>= 0), or None if the rate is ineligible

    Raises:
        ConfigurationError: If the rate is misconfigured
    """
    if isinstance(rate, dict):
        rate = rates_from_records([rate], validate=False)
    if len(rate) != 1:
        raise ValueError(f"evaluate() expects a single rate, got {len(rate)}")

    row = evaluate_rates(rate, subtotal, weight, city, skip_misconfigured=False).row(0, named=True)

    if row["config_error"] is not None:
        raise ConfigurationError([f"{row['name'] or row['rate_id']}: {row['config_error']}"])
    return row["cost_total"]


# =============================================================================
# ORDER CONTEXT
# =============================================================================

def _add_order_context(rates: pl.DataFrame, subtotal: float, weight: float) -> pl.DataFrame:
    """Broadcast order subtotal and weight onto every rate."""
    return rates.with_columns([
        pl.lit(float(subtotal)).alias("order_subtotal"),
        pl.lit(float(weight)).alias("order_weight"),
    ])


def _add_weight_ranges(df: pl.DataFrame) -> pl.DataFrame:
    """
    Resolve weight ranges against the order weight.

    Ranges are scanned in listed order; the first one containing the weight
    (inclusive both ends) supplies _bracket_cost.
    """
    df = df.with_row_index("_row_id")

    in_range = (
        (pl.col("min_weight") <= pl.col("order_weight")) &
        (pl.col("order_weight") <= pl.col("max_weight"))
    )
    malformed = (
        (pl.col("min_weight") >= pl.col("max_weight")) |
        (pl.col("cost") < 0)
    )

    ranges = (
        df
        .select(["_row_id", "order_weight", "weight_ranges"])
        .explode("weight_ranges")
        .drop_nulls("weight_ranges")
        .unnest("weight_ranges")
        .group_by("_row_id")
        .agg([
            pl.len().alias("_bracket_count"),
            malformed.fill_null(False).sum().alias("_bad_bracket_count"),
            pl.col("cost").filter(in_range).first().alias("_bracket_cost"),
        ])
    )

    return (
        df
        .join(ranges, on="_row_id", how="left")
        .with_columns([
            pl.col("_bracket_count").fill_null(0),
            pl.col("_bad_bracket_count").fill_null(0),
        ])
        .sort("_row_id")
        .drop("_row_id")
    )


def drop_misconfigured(rates: pl.DataFrame, city: str | None = None) -> pl.DataFrame:
    """
    Log and remove rates that cannot be evaluated, before rate selection.

    Keeps a broken city-specific rate from displacing the general rate set.

    Args:
        rates: Rate snapshot
        city: Destination city, for the city cost checks

    Returns:
        Rates with the same columns, misconfigured active rates removed
    """
    df = _add_order_context(rates, 0.0, 0.0)
    df = _add_weight_ranges(df)
    df = match_city(df, city)
    df = _add_config_errors(df)
    return _drop_misconfigured(df).select(rates.columns)


def _add_config_errors(df: pl.DataFrame) -> pl.DataFrame:
    """First configuration problem per rate. Inactive rates are never reported."""
    return df.with_columns(
        pl.when(pl.col("is_active"))
        .then(config_error_expression())
        .otherwise(pl.lit(None, dtype=pl.Utf8))
        .alias("config_error")
    )


def _drop_misconfigured(df: pl.DataFrame) -> pl.DataFrame:
    """Log and remove rates with a configuration problem."""
    bad = df.filter(pl.col("config_error").is_not_null())

    if len(bad) > 0:
        errors = [
            f"{row['name'] or row['rate_id']} ({row['rate_id']}): {row['config_error']}"
            for row in bad.select(["rate_id", "name", "config_error"]).iter_rows(named=True)
        ]
        logger.warning("Skipping %d misconfigured rate(s). %s", len(bad), ConfigurationError(errors))

    return df.filter(pl.col("config_error").is_null())


# =============================================================================
# COSTS
# =============================================================================

def _eligibility() -> pl.Expr:
    """True when the rate is active and all order conditions hold."""
    # Only a null maximum is unbounded; a stored 0 is a real limit, so
    # documents that used 0 for "no limit" must be written with null instead
    return (
        pl.col("is_active") &
        (pl.col("order_subtotal") >= pl.col("min_order_value").fill_null(0.0)) &
        (pl.col("max_order_value").is_null() | (pl.col("order_subtotal") <= pl.col("max_order_value"))) &
        (pl.col("order_weight") >= pl.col("min_weight").fill_null(0.0)) &
        (pl.col("max_weight").is_null() | (pl.col("order_weight") <= pl.col("max_weight")))
    ).fill_null(False)


def _calculate_costs(df: pl.DataFrame) -> pl.DataFrame:
    """Apply eligibility, pricing method and city override."""
    df = df.with_columns([
        _eligibility().alias("_conditions_met"),
        cost_expression().alias("cost_base"),
        pl.col("city_cost").alias("cost_city"),
    ])

    df = df.with_columns(
        (
            pl.col("_conditions_met") &
            pl.col("cost_base").is_not_null() &
            pl.col("config_error").is_null()
        ).alias("is_eligible")
    )

    return df.with_columns(
        pl.when(pl.col("is_eligible"))
        .then(pl.coalesce(["cost_city", "cost_base"]))
        .otherwise(pl.lit(None, dtype=pl.Float64))
        .alias("cost_total")
    ).drop("_conditions_met")


def to_cents(amount: pl.Expr) -> pl.Expr:
    """Non-negative amount to integer cents, half cents rounded up."""
    return (amount * CENTS_PER_UNIT + 0.5 + ROUNDING_TOLERANCE).floor().cast(pl.Int64)


def _round_costs(df: pl.DataFrame) -> pl.DataFrame:
    """Round costs to cents and derive the integer ranking key."""
    return df.with_columns(
        to_cents(pl.col("cost_total")).alias("cost_cents")
    ).with_columns(
        (pl.col("cost_cents") / CENTS_PER_UNIT).alias("cost_total")
    )


__all__ = [
    "evaluate_rates",
    "evaluate",
    "drop_misconfigured",
    "to_cents",
]
