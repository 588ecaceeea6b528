"""
Zone Price Options

A zone with a uniform zone price contributes a synthetic "<zone> Standard"
option, unless a rate from the same zone is already as cheap.
"""

METHOD = "zone_price"
NAME_SUFFIX = "Standard"
DESCRIPTION = "Zone base shipping"
ID_PREFIX = "zone_price:"
