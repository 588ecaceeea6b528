"""
Flat Rate (flat_rate)

The rate's base cost, regardless of subtotal or weight.
"""

import polars as pl
from .base import PricingMethod


class FlatRate(PricingMethod):
    """Flat rate - charges the configured cost."""

    name = "flat_rate"

    @classmethod
    def cost(cls) -> pl.Expr:
        return pl.col("cost")
