"""
Percentage of Subtotal (percentage)

The rate's cost is a percentage: 5 means 5% of the order subtotal.
"""

import polars as pl
from .base import PricingMethod


class Percentage(PricingMethod):
    """Percentage - subtotal * cost / 100."""

    name = "percentage"

    @classmethod
    def cost(cls) -> pl.Expr:
        return pl.col("order_subtotal") * pl.col("cost") / 100
