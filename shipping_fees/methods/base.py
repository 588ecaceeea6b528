"""
Pricing Method Base Class

Shared base class for all rate pricing methods.

Methods are evaluated against a rate snapshot that the evaluator has widened
with the order context:

    order_subtotal  - Order subtotal (same value on every row)
    order_weight    - Order weight (same value on every row)
    _bracket_count      - Number of weight ranges configured on the rate
    _bad_bracket_count  - Weight ranges with min_weight >= max_weight or a negative cost
    _bracket_cost       - Cost of the first weight range containing order_weight
    city_cost           - Cost of the destination city entry (null if none)
"""

from abc import ABC
import polars as pl


class PricingMethod(ABC):
    """
    Base class for all pricing methods.

    Attributes:
        IDENTITY
            name            - Method tag stored on the rate (e.g., "flat_rate")

        CONFIGURATION
            requires_cost     - True if the rate's base cost must be set
            requires_brackets - True if the rate must carry weight ranges
    """

    # -------------------------------------------------------------------------
    # IDENTITY
    # -------------------------------------------------------------------------
    name: str

    # -------------------------------------------------------------------------
    # CONFIGURATION
    # -------------------------------------------------------------------------
    requires_cost: bool = True
    requires_brackets: bool = False

    # -------------------------------------------------------------------------
    # METHODS
    # -------------------------------------------------------------------------

    @classmethod
    def applies(cls) -> pl.Expr:
        """True for rates priced with this method."""
        return pl.col("method") == cls.name

    @classmethod
    def cost(cls) -> pl.Expr:
        """
        Polars expression for the base cost, before any city override.

        A null result marks the rate as ineligible for the order.
        """
        raise NotImplementedError(f"{cls.__name__} must define cost()")

    @classmethod
    def config_checks(cls) -> list[tuple[pl.Expr, str]]:
        """
        (condition, message) pairs flagging a misconfigured rate.

        Override to add method-specific checks; call super() to keep the
        base cost checks.
        """
        checks = [
            (pl.col("cost") < 0, f"{cls.name} rate cost cannot be negative"),
            (pl.col("city_cost") < 0, "city cost cannot be negative"),
        ]
        if cls.requires_cost:
            checks.append((pl.col("cost").is_null(), f"{cls.name} rate requires a cost"))
        if cls.requires_brackets:
            checks.append((pl.col("_bracket_count") == 0, f"{cls.name} rate requires at least one weight range"))
        return checks
