"""
Free Shipping (free)

Always zero. The rate's cost may be left unset. Free rates are usually gated
by a minimum order value ("free shipping on orders over 50").
"""

import polars as pl
from .base import PricingMethod


class Free(PricingMethod):
    """Free - costs nothing once eligible."""

    name = "free"
    requires_cost = False

    @classmethod
    def cost(cls) -> pl.Expr:
        return pl.lit(0.0)
