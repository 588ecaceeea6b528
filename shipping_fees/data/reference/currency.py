"""
Currency Precision

Costs are rounded half-up to whole cents before ranking, and options are
ordered on the integer cent amount so equal prices compare equal.
"""

CURRENCY_DECIMALS = 2
CENTS_PER_UNIT = 10 ** CURRENCY_DECIMALS

# Added before flooring so binary float noise (1.005 * 100 == 100.4999...)
# still rounds the half cent up
ROUNDING_TOLERANCE = 1e-6
