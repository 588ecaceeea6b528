"""
Reference Data

Static configuration and the default zone/rate snapshots.
"""

from .currency import CURRENCY_DECIMALS, CENTS_PER_UNIT, ROUNDING_TOLERANCE
from .zone_price import METHOD, NAME_SUFFIX, DESCRIPTION, ID_PREFIX

__all__ = [
    "CURRENCY_DECIMALS",
    "CENTS_PER_UNIT",
    "ROUNDING_TOLERANCE",
    "METHOD",
    "NAME_SUFFIX",
    "DESCRIPTION",
    "ID_PREFIX",
]
