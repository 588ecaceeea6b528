"""
Shipping Errors

Error kinds raised or returned by the fee engine.

    ShippingError
    ├── NoZoneMatch         - no zone covers the destination ("cannot ship here")
    ├── NoEligibleRate      - zones matched, nothing priced ("no applicable shipping method")
    └── ConfigurationError  - malformed zone/rate data (also a ValueError)

The single-fee path hands NoZoneMatch / NoEligibleRate back inside a FeeQuote
instead of raising them. ConfigurationError is raised by write-time validation;
during evaluation the offending rate is logged and skipped instead.
"""


class ShippingError(Exception):
    """Base exception for all shipping fee errors."""
    pass


class NoZoneMatch(ShippingError):
    """No active zone covers the destination."""

    def __init__(self, destination):
        self.destination = destination
        super().__init__(f"No shipping zones found for {destination.describe()}")


class NoEligibleRate(ShippingError):
    """Zones matched, but no rate is eligible and no zone price exists."""

    def __init__(self, destination, zone_names: list[str]):
        self.destination = destination
        self.zone_names = zone_names
        super().__init__(
            f"No applicable shipping method for {destination.describe()} "
            f"(zones: {', '.join(zone_names)})"
        )


class ConfigurationError(ShippingError, ValueError):
    """Zone or rate data violates a configuration rule."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__("Shipping configuration errors:\n  " + "\n  ".join(errors))


__all__ = [
    "ShippingError",
    "NoZoneMatch",
    "NoEligibleRate",
    "ConfigurationError",
]
