"""
Pricing Methods Package

Exports all pricing method classes and the combined expressions the
evaluator applies to a rate snapshot.

Every rate names exactly one method in its `method` column. Rates naming a
method that is not registered here are reported as misconfigured.
"""

import polars as pl

from .base import PricingMethod
from .flat_rate import FlatRate
from .weight_based import WeightBased
from .percentage import Percentage
from .free import Free


# All pricing methods
ALL = [FlatRate, WeightBased, Percentage, Free]

METHOD_NAMES = [m.name for m in ALL]


# =============================================================================
# HELPERS
# =============================================================================

def get_method(name: str) -> type[PricingMethod]:
    """
    Look up a pricing method by its tag.

    Raises:
        KeyError: If no method is registered under name
    """
    for method in ALL:
        if method.name == name:
            return method
    raise KeyError(f"Unknown shipping method '{name}' (expected one of {METHOD_NAMES})")


def cost_expression() -> pl.Expr:
    """
    Base cost for every rate, dispatched on the `method` column.

    Null for unknown methods and for rates a method cannot price.
    """
    expr = pl.lit(None, dtype=pl.Float64)
    for method in reversed(ALL):
        expr = (
            pl.when(method.applies())
            .then(method.cost().cast(pl.Float64))
            .otherwise(expr)
        )
    return expr


def config_error_expression() -> pl.Expr:
    """
    First configuration problem found on each rate, or null when the rate is usable.
    """
    problems = [
        pl.when(~pl.col("method").fill_null("").is_in(METHOD_NAMES))
        .then(pl.format("unknown shipping method '{}'", pl.col("method").fill_null("")))
    ]
    for method in ALL:
        for condition, message in method.config_checks():
            problems.append(
                pl.when(method.applies() & condition).then(pl.lit(message))
            )
    return pl.coalesce(problems)


# =============================================================================
# VALIDATION
# =============================================================================

def validate_methods() -> None:
    """
    Validate pricing method registration.

    Raises ValueError if any configuration issues are found.
    Called at import time to fail fast on configuration errors.
    """
    errors = []
    seen = set()

    for m in ALL:
        if not getattr(m, "name", None):
            errors.append(f"{m.__name__}: missing name")
            continue

        if m.name in seen:
            errors.append(f"{m.__name__}: duplicate method name '{m.name}'")
        seen.add(m.name)

        if m.cost.__func__ is PricingMethod.cost.__func__:
            errors.append(f"{m.__name__}: must override cost()")

    if errors:
        raise ValueError("Pricing method configuration errors:\n  " + "\n  ".join(errors))


# Run validation at import time
validate_methods()

__all__ = [
    # Base
    "PricingMethod",
    # Method classes
    "FlatRate",
    "WeightBased",
    "Percentage",
    "Free",
    # Lists
    "ALL",
    "METHOD_NAMES",
    # Helpers
    "get_method",
    "cost_expression",
    "config_error_expression",
]
