"""
Rate Catalog

Selects the rates that compete for an order.

CITY-SPECIFIC RATES
-------------------
A rate may list cities, each with an optional cost. When the destination
city appears (case-insensitive) on any active rate of the resolved zones,
those city-specific rates replace the zone's general rate set entirely:
they become the only candidates, they are not merged with the rest.
"""

import logging

import polars as pl


logger = logging.getLogger(__name__)


def match_city(rates: pl.DataFrame, city: str | None) -> pl.DataFrame:
    """
    Flag rates that list the city.

    Adds:
        - city_match: True if any city entry name equals city (case-insensitive)
        - city_cost: Cost of the first matching entry (null if unpriced or no match)
    """
    if city is None:
        return rates.with_columns([
            pl.lit(False).alias("city_match"),
            pl.lit(None, dtype=pl.Float64).alias("city_cost"),
        ])

    df = rates.with_row_index("_row_id")

    matches = (
        df
        .select(["_row_id", "cities"])
        .explode("cities")
        .drop_nulls("cities")
        .unnest("cities")
        .filter(pl.col("name").str.to_lowercase() == city.lower())
        .group_by("_row_id", maintain_order=True)
        .agg(pl.col("cost").first().alias("city_cost"))
        .with_columns(pl.lit(True).alias("city_match"))
    )

    return (
        df
        .join(matches, on="_row_id", how="left")
        .with_columns(pl.col("city_match").fill_null(False))
        .sort("_row_id")
        .drop("_row_id")
    )


def rates_for_zones(rates: pl.DataFrame, zone_ids: list[str]) -> pl.DataFrame:
    """
    Active rates belonging to the given zones.

    Ordered by the zone's position in zone_ids, then snapshot order.
    """
    zone_ids = list(dict.fromkeys(zone_ids))
    zone_order = pl.DataFrame(
        {"zone_id": zone_ids, "_zone_idx": list(range(len(zone_ids)))},
        schema={"zone_id": pl.Utf8, "_zone_idx": pl.Int64},
    )

    return (
        rates
        .with_row_index("_row_id")
        .filter(pl.col("is_active"))
        .join(zone_order, on="zone_id", how="inner")
        .sort(["_zone_idx", "_row_id"])
        .drop(["_zone_idx", "_row_id"])
    )


def city_rates(
    rates: pl.DataFrame,
    city: str,
    zone_ids: list[str] | None = None,
) -> pl.DataFrame:
    """
    Active rates listing the city (case-insensitive), in snapshot order.

    Args:
        rates: Rate snapshot
        city: Destination city
        zone_ids: Restrict to these zones (None or empty = all zones)
    """
    df = match_city(rates, city).filter(pl.col("is_active") & pl.col("city_match"))
    if zone_ids:
        df = df.filter(pl.col("zone_id").is_in(list(zone_ids)))
    return df.drop(["city_match", "city_cost"])


def candidate_rates(
    rates: pl.DataFrame,
    zone_ids: list[str],
    city: str | None = None,
) -> pl.DataFrame:
    """
    Rates competing for an order shipped to the resolved zones.

    City-specific rates of those zones win outright when any exist;
    otherwise every active rate of the zones competes.
    """
    if not zone_ids:
        return rates.clear()

    if city is not None:
        specific = city_rates(rates, city, zone_ids)
        if len(specific) > 0:
            logger.debug("Using %d city-specific rate(s) for %r", len(specific), city)
            return specific

    return rates_for_zones(rates, zone_ids)


def configured_cities(rates: pl.DataFrame) -> list[str]:
    """Distinct city names configured on any rate, sorted."""
    return (
        rates
        .select(pl.col("cities").explode().struct.field("name"))
        .to_series()
        .drop_nulls()
        .unique()
        .sort()
        .to_list()
    )


__all__ = [
    "match_city",
    "rates_for_zones",
    "city_rates",
    "candidate_rates",
    "configured_cities",
]
