"""
Zone Resolution

Finds the active zones that cover a destination.

PRIORITY FALLBACK
-----------------
Tiers are tried in order and the first tier with any match wins. Matches
are never merged across tiers.

    1. city     - zone location_labels contain the city
    2. country  - zone location_labels contain the country
    3. region   - zone region_labels contain the region

City and country share the location_labels list. Matching is exact and
case-sensitive. A destination with no city, country or region matches
nothing, and an empty result means "cannot ship here", which callers
must keep apart from "no eligible rate".
"""

import logging
from typing import NamedTuple

import polars as pl

from ..order import Destination


logger = logging.getLogger(__name__)


# =============================================================================
# MATCH TIERS
# =============================================================================

class LocationTier(NamedTuple):
    name: str           # Tier tag written to match_tier
    field: str          # Destination field supplying the value
    labels_col: str     # Zone column holding the candidate labels


LOCATION_TIERS = [
    LocationTier("city", "city", "location_labels"),
    LocationTier("country", "country", "location_labels"),
    LocationTier("region", "region", "region_labels"),
]

# Address validation ignores cities
ADDRESS_TIERS = [t for t in LOCATION_TIERS if t.name != "city"]


# =============================================================================
# RESOLUTION
# =============================================================================

def zones_with_label(zones: pl.DataFrame, labels_col: str, value: str) -> pl.DataFrame:
    """Active zones whose labels_col list contains value."""
    return zones.filter(
        pl.col("is_active") & pl.col(labels_col).list.contains(value)
    )


def resolve_zones(
    zones: pl.DataFrame,
    destination: Destination,
    tiers: list[LocationTier] = LOCATION_TIERS,
) -> pl.DataFrame:
    """
    Resolve the zones covering a destination.

    Args:
        zones: Zone snapshot
        destination: Destination to match
        tiers: Match tiers in priority order

    Returns:
        Matching zones in snapshot order, with a match_tier column.
        Empty (same columns) when no tier matches.
    """
    for tier in tiers:
        value = getattr(destination, tier.field)
        if value is None:
            continue

        matched = zones_with_label(zones, tier.labels_col, value)
        if len(matched) > 0:
            logger.debug(
                "Resolved %d zone(s) for %s on %s tier",
                len(matched), destination.describe(), tier.name,
            )
            return matched.with_columns(pl.lit(tier.name).alias("match_tier"))

    logger.debug("No zones cover %s", destination.describe())
    return zones.clear().with_columns(pl.lit(None, dtype=pl.Utf8).alias("match_tier"))


def is_shippable(zones: pl.DataFrame, destination: Destination) -> bool:
    """
    Check whether an address can be shipped to.

    A country is required. The address is shippable when a zone covers the
    country, or failing that, the region.
    """
    if destination.country is None:
        return False
    return len(resolve_zones(zones, destination, ADDRESS_TIERS)) > 0


__all__ = [
    "LocationTier",
    "LOCATION_TIERS",
    "ADDRESS_TIERS",
    "zones_with_label",
    "resolve_zones",
    "is_shippable",
]
