"""
Snapshot Validation

Write-time rules for zone and rate rows. Every problem is collected and
reported together in a single ConfigurationError.

The evaluator re-checks the rules it depends on (see methods.config_checks)
and skips offending rates, so a snapshot that bypassed validation still
prices its valid rates.
"""

from ..errors import ConfigurationError
from ..methods import METHOD_NAMES, Free, get_method


def zone_errors(rows: list[dict]) -> list[str]:
    """Collect configuration problems in zone rows."""
    errors = []
    seen_ids = set()
    seen_names = set()

    for i, zone in enumerate(rows):
        label = zone["name"] or zone["zone_id"] or f"zone #{i}"

        if zone["zone_id"] is None:
            errors.append(f"{label}: zone id is required")
        elif zone["zone_id"] in seen_ids:
            errors.append(f"{label}: duplicate zone id '{zone['zone_id']}'")
        seen_ids.add(zone["zone_id"])

        if zone["name"] is None:
            errors.append(f"{label}: zone name is required")
        elif zone["name"] in seen_names:
            errors.append(f"{label}: zone name must be unique")
        seen_names.add(zone["name"])

        if zone["zone_price"] is not None and zone["zone_price"] < 0:
            errors.append(f"{label}: zone price cannot be negative")

    return errors


def rate_errors(rows: list[dict], zone_ids: set[str] | None = None) -> list[str]:
    """
    Collect configuration problems in rate rows.

    Args:
        rows: Rate snapshot rows
        zone_ids: Known zone ids; when given, rates must reference one of them
    """
    errors = []
    seen_ids = set()

    for i, rate in enumerate(rows):
        label = rate["name"] or rate["rate_id"] or f"rate #{i}"
        method = rate["method"]

        if rate["rate_id"] is None:
            errors.append(f"{label}: rate id is required")
        elif rate["rate_id"] in seen_ids:
            errors.append(f"{label}: duplicate rate id '{rate['rate_id']}'")
        seen_ids.add(rate["rate_id"])

        if rate["name"] is None:
            errors.append(f"{label}: rate name is required")

        if rate["zone_id"] is None:
            errors.append(f"{label}: shipping zone is required")
        elif zone_ids is not None and rate["zone_id"] not in zone_ids:
            errors.append(f"{label}: unknown shipping zone '{rate['zone_id']}'")

        if method not in METHOD_NAMES:
            errors.append(f"{label}: unknown shipping method '{method}'")

        if rate["cost"] is None:
            if method != Free.name:
                errors.append(f"{label}: cost is required for {method} rates")
        elif rate["cost"] < 0:
            errors.append(f"{label}: cost cannot be negative")

        if method in METHOD_NAMES and get_method(method).requires_brackets and not rate["weight_ranges"]:
            errors.append(f"{label}: weight ranges are required for weight-based shipping")

        for bracket in rate["weight_ranges"]:
            low, high, cost = bracket["min_weight"], bracket["max_weight"], bracket["cost"]
            if low is None or high is None or cost is None:
                errors.append(f"{label}: weight range needs min_weight, max_weight and cost")
                continue
            if low < 0 or cost < 0:
                errors.append(f"{label}: weight range values cannot be negative")
            if low >= high:
                errors.append(f"{label}: minimum weight must be less than maximum weight")

        for city in rate["cities"]:
            if city["name"] is None:
                errors.append(f"{label}: city override needs a name")
            if city["cost"] is not None and city["cost"] < 0:
                errors.append(f"{label}: city cost cannot be negative")

        for field in ("min_order_value", "max_order_value", "min_weight", "max_weight"):
            if rate[field] is not None and rate[field] < 0:
                errors.append(f"{label}: {field} cannot be negative")

    return errors


def validate_zone_rows(rows: list[dict]) -> None:
    """Raise ConfigurationError if any zone row is invalid."""
    errors = zone_errors(rows)
    if errors:
        raise ConfigurationError(errors)


def validate_rate_rows(rows: list[dict], zone_ids: set[str] | None = None) -> None:
    """Raise ConfigurationError if any rate row is invalid."""
    errors = rate_errors(rows, zone_ids)
    if errors:
        raise ConfigurationError(errors)


__all__ = [
    "zone_errors",
    "rate_errors",
    "validate_zone_rows",
    "validate_rate_rows",
]
