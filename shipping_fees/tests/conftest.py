"""
Shared fixtures: builders for zone and rate documents.
"""

import pytest


@pytest.fixture
def make_zone():
    """Build a zone document with sensible defaults."""
    def _make_zone(zone_id, name=None, labels=(), regions=(), zone_price=None, active=True, order=0):
        return {
            "id": zone_id,
            "name": name or zone_id.title(),
            "locationLabels": list(labels),
            "regionLabels": list(regions),
            "zonePrice": zone_price,
            "active": active,
            "order": order,
        }
    return _make_zone


@pytest.fixture
def make_rate():
    """Build a rate document with sensible defaults (flat rate, no conditions)."""
    def _make_rate(
        rate_id,
        zone_id="z1",
        method="flat_rate",
        cost=10.0,
        brackets=None,
        cities=None,
        conditions=None,
        active=True,
        name=None,
        estimated_days=None,
    ):
        return {
            "id": rate_id,
            "zoneId": zone_id,
            "name": name or rate_id,
            "description": f"{rate_id} description",
            "method": method,
            "baseCost": cost,
            "weightBrackets": [
                {"minWeight": low, "maxWeight": high, "cost": price}
                for low, high, price in (brackets or [])
            ],
            "cityOverrides": [
                {"name": city, "cost": price} for city, price in (cities or [])
            ],
            "conditions": conditions or {},
            "estimatedDays": estimated_days,
            "active": active,
            "order": 0,
        }
    return _make_rate
