"""
Option Assembly

Turns evaluated rates into the ranked option list.

ZONE PRICES
-----------
A zone with a uniform zone_price contributes a synthetic option:

    id:     "zone_price:<zone_id>"
    name:   "<zone name> Standard"
    method: "zone_price"
    cost:   zone_price

It is left out when an eligible rate of the same zone already costs the
same or less, so the list never offers a floor that is not cheaper.

RANKING
-------
Options are sorted ascending on cost_cents. The sort is stable: equal costs
keep candidate-rate order, with zone prices after the rate options.
"""

import polars as pl

from ..data.reference import (
    CENTS_PER_UNIT,
    METHOD as ZONE_PRICE_METHOD,
    NAME_SUFFIX,
    DESCRIPTION,
    ID_PREFIX,
)
from .columns import OPTION_SCHEMA, OPTION_COLS
from .evaluate import to_cents


def rate_options(zones: pl.DataFrame, evaluated: pl.DataFrame) -> pl.DataFrame:
    """Options for eligible rates, in evaluation order."""
    zone_names = zones.select(["zone_id", pl.col("name").alias("zone_name")])

    return (
        evaluated
        .filter(pl.col("is_eligible"))
        .with_row_index("_row_id")
        .join(zone_names, on="zone_id", how="left")
        .sort("_row_id")
        .select([
            pl.col("rate_id").alias("id"),
            "name",
            "description",
            "method",
            pl.col("cost_total").alias("cost"),
            "cost_cents",
            "zone_id",
            "zone_name",
            "estimated_days",
        ])
        .cast(OPTION_SCHEMA)
    )


def zone_price_options(zones: pl.DataFrame, options: pl.DataFrame) -> pl.DataFrame:
    """
    Zone price options for zones without an equal-or-cheaper option.

    Args:
        zones: Resolved zones
        options: Rate options already on offer
    """
    cheapest = (
        options
        .group_by("zone_id")
        .agg(pl.col("cost_cents").min().alias("_cheapest_cents"))
    )

    return (
        zones
        .filter(pl.col("zone_price").is_not_null() & (pl.col("zone_price") >= 0))
        .with_row_index("_zone_idx")
        .with_columns(to_cents(pl.col("zone_price")).alias("cost_cents"))
        .with_columns((pl.col("cost_cents") / CENTS_PER_UNIT).alias("_price"))
        .join(cheapest, on="zone_id", how="left")
        .filter(
            pl.col("_cheapest_cents").is_null() |
            (pl.col("_cheapest_cents") > pl.col("cost_cents"))
        )
        .sort("_zone_idx")
        .select([
            pl.concat_str([pl.lit(ID_PREFIX), pl.col("zone_id")]).alias("id"),
            pl.concat_str([pl.col("name"), pl.lit(NAME_SUFFIX)], separator=" ").alias("name"),
            pl.lit(DESCRIPTION).alias("description"),
            pl.lit(ZONE_PRICE_METHOD).alias("method"),
            pl.col("_price").alias("cost"),
            "cost_cents",
            "zone_id",
            pl.col("name").alias("zone_name"),
            pl.lit(None, dtype=pl.Utf8).alias("estimated_days"),
        ])
        .cast(OPTION_SCHEMA)
    )


def assemble_options(zones: pl.DataFrame, evaluated: pl.DataFrame) -> pl.DataFrame:
    """
    Build the ranked option list.

    Args:
        zones: Resolved zones
        evaluated: Candidate rates from evaluate_rates

    Returns:
        DataFrame with OPTION_SCHEMA columns, cheapest first
    """
    options = rate_options(zones, evaluated)
    floors = zone_price_options(zones, options)

    return (
        pl.concat([options, floors], how="vertical")
        .sort("cost_cents", maintain_order=True)
        .select(OPTION_COLS)
    )


__all__ = [
    "rate_options",
    "zone_price_options",
    "assemble_options",
]
