"""
Pipeline Package

Core resolution logic (snapshot-agnostic):
- resolve: Find the zones covering a destination
- catalog: Select the candidate rates for those zones
- evaluate: Check eligibility and price each rate
- assemble: Add zone prices and rank the options
"""

from .resolve import LOCATION_TIERS, resolve_zones, is_shippable
from .catalog import rates_for_zones, city_rates, candidate_rates, configured_cities
from .evaluate import evaluate_rates, evaluate, drop_misconfigured
from .assemble import assemble_options

__all__ = [
    "LOCATION_TIERS",
    "resolve_zones",
    "is_shippable",
    "rates_for_zones",
    "city_rates",
    "candidate_rates",
    "configured_cities",
    "evaluate_rates",
    "evaluate",
    "drop_misconfigured",
    "assemble_options",
]
