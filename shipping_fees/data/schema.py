"""
Snapshot Schemas

Column layout of the zone and rate snapshots, and conversion from the
camelCase documents the back-office stores:

    Zone:  {id, name, description, locationLabels[], regionLabels[],
            zonePrice?, active, order}
    Rate:  {id, zoneId, name, description, method, baseCost?,
            weightBrackets[{minWeight, maxWeight, cost}]?,
            cityOverrides[{name, cost?}]?,
            conditions{minOrderValue, maxOrderValue, minWeight, maxWeight},
            estimatedDays?, active, order}

Rate conditions are flattened into columns. Missing minimums default to 0,
missing maximums stay null (unbounded).
"""

import polars as pl


# =============================================================================
# ZONE SNAPSHOT
# =============================================================================

ZONE_SCHEMA = {
    "zone_id": pl.Utf8,                     # Zone identity
    "name": pl.Utf8,                        # Display name (unique)
    "description": pl.Utf8,                 # Optional description
    "location_labels": pl.List(pl.Utf8),    # Country codes and city names
    "region_labels": pl.List(pl.Utf8),      # Region labels
    "zone_price": pl.Float64,               # Uniform zone price (null = none)
    "is_active": pl.Boolean,
    "order": pl.Int64,                      # Display order
}


# =============================================================================
# RATE SNAPSHOT
# =============================================================================

WEIGHT_RANGE = pl.Struct({
    "min_weight": pl.Float64,
    "max_weight": pl.Float64,
    "cost": pl.Float64,
})

CITY_COST = pl.Struct({
    "name": pl.Utf8,
    "cost": pl.Float64,                     # null = city-specific, no price override
})

RATE_SCHEMA = {
    "rate_id": pl.Utf8,                     # Rate identity
    "zone_id": pl.Utf8,                     # Owning zone
    "name": pl.Utf8,
    "description": pl.Utf8,
    "method": pl.Utf8,                      # flat_rate | weight_based | percentage | free
    "cost": pl.Float64,                     # Base cost (null allowed for free)
    "weight_ranges": pl.List(WEIGHT_RANGE), # Brackets for weight_based
    "cities": pl.List(CITY_COST),           # City overrides
    "min_order_value": pl.Float64,
    "max_order_value": pl.Float64,          # null = unbounded
    "min_weight": pl.Float64,
    "max_weight": pl.Float64,               # null = unbounded
    "estimated_days": pl.Utf8,              # Display hint
    "is_active": pl.Boolean,
    "order": pl.Int64,
}


# =============================================================================
# RECORD CONVERSION
# =============================================================================

def _text(value) -> str | None:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def _number(value) -> float | None:
    if value is None or value == "":
        return None
    return float(value)


def _labels(values) -> list[str]:
    return [label for label in (_text(v) for v in values or []) if label is not None]


def _record_id(record: dict) -> str | None:
    return _text(record.get("id", record.get("_id")))


def zone_row(record: dict) -> dict:
    """Convert a zone document to a snapshot row."""
    return {
        "zone_id": _record_id(record),
        "name": _text(record.get("name")),
        "description": _text(record.get("description")),
        "location_labels": _labels(record.get("locationLabels")),
        "region_labels": _labels(record.get("regionLabels")),
        "zone_price": _number(record.get("zonePrice")),
        "is_active": bool(record.get("active", True)),
        "order": int(record.get("order") or 0),
    }


def rate_row(record: dict) -> dict:
    """Convert a rate document to a snapshot row."""
    conditions = record.get("conditions") or {}
    return {
        "rate_id": _record_id(record),
        "zone_id": _text(record.get("zoneId")),
        "name": _text(record.get("name")),
        "description": _text(record.get("description")),
        "method": _text(record.get("method")),
        "cost": _number(record.get("baseCost")),
        "weight_ranges": [
            {
                "min_weight": _number(bracket.get("minWeight")),
                "max_weight": _number(bracket.get("maxWeight")),
                "cost": _number(bracket.get("cost")),
            }
            for bracket in record.get("weightBrackets") or []
        ],
        "cities": [
            {
                "name": _text(city.get("name")),
                "cost": _number(city.get("cost")),
            }
            for city in record.get("cityOverrides") or []
        ],
        "min_order_value": _number(conditions.get("minOrderValue")) or 0.0,
        "max_order_value": _number(conditions.get("maxOrderValue")),
        "min_weight": _number(conditions.get("minWeight")) or 0.0,
        "max_weight": _number(conditions.get("maxWeight")),
        "estimated_days": _text(record.get("estimatedDays")),
        "is_active": bool(record.get("active", True)),
        "order": int(record.get("order") or 0),
    }


def to_frame(rows: list[dict], schema: dict) -> pl.DataFrame:
    """Build a snapshot DataFrame with a fixed schema (empty input gives an empty frame)."""
    if not rows:
        return pl.DataFrame(schema=schema)
    return pl.DataFrame(rows, schema=schema)


__all__ = [
    "ZONE_SCHEMA",
    "RATE_SCHEMA",
    "WEIGHT_RANGE",
    "CITY_COST",
    "zone_row",
    "rate_row",
    "to_frame",
]
