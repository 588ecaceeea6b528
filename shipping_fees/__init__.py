"""
Shipping Fees

Shipping fee resolution for the store back-office: zone lookup, rate
eligibility and pricing, zone prices, option ranking.
"""

from .calculate_fees import FeeQuote, calculate_options, list_options, quote_fee
from .data import load_zones, load_rates, zones_from_records, rates_from_records
from .errors import ShippingError, NoZoneMatch, NoEligibleRate, ConfigurationError
from .order import Destination, Order
from .pipeline import configured_cities, evaluate, is_shippable, resolve_zones
from .version import VERSION

__all__ = [
    "FeeQuote",
    "calculate_options",
    "list_options",
    "quote_fee",
    "load_zones",
    "load_rates",
    "zones_from_records",
    "rates_from_records",
    "ShippingError",
    "NoZoneMatch",
    "NoEligibleRate",
    "ConfigurationError",
    "Destination",
    "Order",
    "configured_cities",
    "evaluate",
    "is_shippable",
    "resolve_zones",
    "VERSION",
]
