"""
Weight Based (weight_based)

Priced from the rate's weight ranges:

    [{min_weight, max_weight, cost}, ...]

Ranges are scanned in listed order and the first one with
min_weight <= weight <= max_weight (inclusive both ends) wins. With
ranges [0, 1] -> 5 and [1, 5] -> 10, a weight of exactly 1 costs 5.
No matching range means the rate is ineligible for the order.

The evaluator resolves the matching range into _bracket_cost before
cost() is applied.
"""

import polars as pl
from .base import PricingMethod


class WeightBased(PricingMethod):
    """Weight based - cost of the first weight range containing the order weight."""

    name = "weight_based"
    requires_cost = False  # priced from weight ranges
    requires_brackets = True

    @classmethod
    def cost(cls) -> pl.Expr:
        return pl.col("_bracket_cost")

    @classmethod
    def config_checks(cls) -> list[tuple[pl.Expr, str]]:
        return super().config_checks() + [
            (
                pl.col("_bad_bracket_count") > 0,
                "weight ranges need min_weight < max_weight and a non-negative cost",
            ),
        ]
