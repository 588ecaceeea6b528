"""
Shipping Fee Calculator

Snapshots in, options out. Zones and rates can come from any source (the
back-office document store, JSON reference files, manual creation) as long
as they follow the snapshot schemas in data/schema.py.

PIPELINE
--------
    1. resolve_zones      - zones covering the destination (city > country > region)
    2. drop_misconfigured - log and skip rates of those zones that cannot be priced
    3. candidate_rates    - city-specific rates of those zones, else all their rates
    4. evaluate_rates     - eligibility, method cost, city override
    5. assemble_options   - add zone prices, rank cheapest first

ENTRY POINTS
------------
    calculate_options()   - ranked options as a DataFrame
    list_options()        - ranked options as dicts, for UI selection
    quote_fee()           - cheapest cost, as a FeeQuote

The listing never fails: no zone means an empty list. The quote reports
NoZoneMatch / NoEligibleRate inside the FeeQuote instead of raising.

USAGE
-----
    from shipping_fees import Order, load_zones, load_rates, quote_fee

    zones = load_zones()
    rates = load_rates(zones=zones)
    quote = quote_fee(zones, rates, Order.of(subtotal=80, weight=2, country="US"))
    if quote.ok:
        print(quote.fee)
"""

import logging
from typing import NamedTuple

import polars as pl

from .errors import ShippingError, NoZoneMatch, NoEligibleRate
from .order import Order
from .pipeline import (
    resolve_zones,
    drop_misconfigured,
    candidate_rates,
    evaluate_rates,
    assemble_options,
)
from .pipeline.columns import OPTION_SCHEMA, LISTING_KEYS
from .version import VERSION


logger = logging.getLogger(__name__)


# =============================================================================
# RESULT TYPE
# =============================================================================

class FeeQuote(NamedTuple):
    """Outcome of a single-fee quote: a fee, or the reason there is none."""

    fee: float | None
    error: ShippingError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> float:
        """Return the fee, raising the carried error if there is none."""
        if self.error is not None:
            raise self.error
        return self.fee


# =============================================================================
# MAIN ENTRY POINTS
# =============================================================================

def calculate_options(zones: pl.DataFrame, rates: pl.DataFrame, order: Order) -> pl.DataFrame:
    """
    Calculate the ranked shipping options for an order.

    Args:
        zones: Zone snapshot
        rates: Rate snapshot
        order: Order context

    Returns:
        DataFrame with OPTION_SCHEMA columns plus calculator_version,
        cheapest first. Empty when no zone covers the destination.
    """
    _, options = _resolve(zones, rates, order)
    return _stamp_version(options)


def list_options(zones: pl.DataFrame, rates: pl.DataFrame, order: Order) -> list[dict]:
    """
    Ranked shipping options for UI selection.

    Each option has: id, name, description, method, cost, zone_name, estimated_days.
    """
    _, options = _resolve(zones, rates, order)
    return options.select(LISTING_KEYS).to_dicts()


def quote_fee(zones: pl.DataFrame, rates: pl.DataFrame, order: Order) -> FeeQuote:
    """
    Quote the cheapest shipping fee for an order.

    Returns:
        FeeQuote with the fee, or with NoZoneMatch when no zone covers the
        destination, or NoEligibleRate when zones matched but nothing priced
    """
    destination = order.destination
    resolved, options = _resolve(zones, rates, order)

    if len(resolved) == 0:
        logger.info("Cannot ship to %s: no zone matched", destination.describe())
        return FeeQuote(None, NoZoneMatch(destination))

    if len(options) == 0:
        zone_names = resolved["name"].to_list()
        logger.info("No applicable shipping method for %s in %s", destination.describe(), zone_names)
        return FeeQuote(None, NoEligibleRate(destination, zone_names))

    return FeeQuote(options["cost"][0])


# =============================================================================
# PIPELINE
# =============================================================================

def _resolve(
    zones: pl.DataFrame,
    rates: pl.DataFrame,
    order: Order,
) -> tuple[pl.DataFrame, pl.DataFrame]:
    """Run the pipeline, returning (resolved zones, ranked options)."""
    destination = order.destination

    resolved = resolve_zones(zones, destination)
    if len(resolved) == 0:
        return resolved, pl.DataFrame(schema=OPTION_SCHEMA)

    zone_ids = resolved["zone_id"].to_list()
    usable = drop_misconfigured(rates.filter(pl.col("zone_id").is_in(zone_ids)), destination.city)
    candidates = candidate_rates(usable, zone_ids, destination.city)
    evaluated = evaluate_rates(candidates, order.subtotal, order.weight, destination.city)

    return resolved, assemble_options(resolved, evaluated)


def _stamp_version(df: pl.DataFrame) -> pl.DataFrame:
    """Stamp calculator version on output."""
    return df.with_columns(pl.lit(VERSION).alias("calculator_version"))


__all__ = [
    "FeeQuote",
    "calculate_options",
    "list_options",
    "quote_fee",
]
