"""
Unit Tests for Zone Resolution and Rate Selection

Run with: pytest shipping_fees/tests/test_pipeline.py -v
"""

import pytest

from shipping_fees.data import zones_from_records, rates_from_records
from shipping_fees.order import Destination
from shipping_fees.pipeline import (
    resolve_zones,
    is_shippable,
    rates_for_zones,
    city_rates,
    candidate_rates,
    configured_cities,
)


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def zones(make_zone):
    """Zones covering a city, a country (twice), a region, plus an inactive one."""
    return zones_from_records([
        make_zone("z_city", name="Austin Metro", labels=["Austin"]),
        make_zone("z_us", name="Domestic", labels=["US"]),
        make_zone("z_tx", name="Texas", regions=["TX"]),
        make_zone("z_us2", name="Domestic Flat", labels=["US"], zone_price=7.5),
        make_zone("z_off", name="Retired", labels=["US", "BR"], active=False),
    ])


@pytest.fixture
def rates(make_rate):
    """Rates across three zones, with city-specific and inactive rates."""
    return rates_from_records([
        make_rate("r1", zone_id="z1"),
        make_rate("r2", zone_id="z2"),
        make_rate("r3", zone_id="z1", cities=[("Austin", 4.0)]),
        make_rate("r4", zone_id="z1", cities=[("Boston", 1.0)], active=False),
        make_rate("r5", zone_id="z3", cities=[("Dallas", None)]),
    ])


# =============================================================================
# ZONE RESOLUTION TESTS
# =============================================================================

class TestResolveZones:
    """Tests for the city > country > region fallback."""

    def test_city_tier_wins(self, zones):
        """A city match hides the country zones entirely."""
        df = resolve_zones(zones, Destination.of(city="Austin", country="US"))
        assert df["zone_id"].to_list() == ["z_city"]
        assert df["match_tier"].to_list() == ["city"]

    def test_country_tier(self, zones):
        """Unknown city falls back to country; all country zones, snapshot order."""
        df = resolve_zones(zones, Destination.of(city="Dallas", country="US"))
        assert df["zone_id"].to_list() == ["z_us", "z_us2"]
        assert set(df["match_tier"].to_list()) == {"country"}

    def test_region_tier(self, zones):
        """Region is the last resort."""
        df = resolve_zones(zones, Destination.of(country="NZ", region="TX"))
        assert df["zone_id"].to_list() == ["z_tx"]
        assert df["match_tier"][0] == "region"

    def test_inactive_zone_ignored(self, zones):
        """Inactive zones never match."""
        df = resolve_zones(zones, Destination.of(country="BR"))
        assert len(df) == 0

    def test_matching_is_case_sensitive(self, zones):
        """Zone labels match exactly."""
        df = resolve_zones(zones, Destination.of(city="austin"))
        assert len(df) == 0

    def test_empty_destination(self, zones):
        """A destination with no fields matches nothing."""
        df = resolve_zones(zones, Destination.of())
        assert len(df) == 0
        assert "match_tier" in df.columns

    def test_blank_fields_are_absent(self, zones):
        """Blank strings do not block the fallback to the next tier."""
        df = resolve_zones(zones, Destination.of(city="  ", country=" US "))
        assert df["zone_id"].to_list() == ["z_us", "z_us2"]


class TestIsShippable:
    """Tests for address validation."""

    def test_country_match(self, zones):
        assert is_shippable(zones, Destination.of(country="US"))

    def test_country_required(self, zones):
        """City alone is never enough."""
        assert not is_shippable(zones, Destination.of(city="Austin"))

    def test_region_fallback(self, zones):
        """Uncovered country still ships when the region is covered."""
        assert is_shippable(zones, Destination.of(country="NZ", region="TX"))

    def test_city_ignored(self, zones):
        """City zones do not make an address shippable."""
        assert not is_shippable(zones, Destination.of(city="Austin", country="NZ"))


# =============================================================================
# RATE SELECTION TESTS
# =============================================================================

class TestRatesForZones:
    """Tests for general rate selection."""

    def test_zone_order_then_snapshot_order(self, rates):
        """Rates follow the given zone order, then snapshot order."""
        df = rates_for_zones(rates, ["z2", "z1"])
        assert df["rate_id"].to_list() == ["r2", "r1", "r3"]

    def test_inactive_rates_excluded(self, rates):
        df = rates_for_zones(rates, ["z1"])
        assert "r4" not in df["rate_id"].to_list()


class TestCityRates:
    """Tests for city-specific rate lookup."""

    @pytest.fixture
    def city_snapshot(self, make_rate):
        return rates_from_records([
            make_rate("a", zone_id="z1", cities=[("Austin", 4.0)]),
            make_rate("general", zone_id="z1"),
            make_rate("b", zone_id="z2", cities=[("austin", None)]),
            make_rate("c", zone_id="z2", cities=[("Austin", 2.0)], active=False),
        ])

    def test_case_insensitive(self, city_snapshot):
        assert city_rates(city_snapshot, "AUSTIN")["rate_id"].to_list() == ["a", "b"]

    @pytest.mark.parametrize("zone_ids", [None, []])
    def test_no_zone_restriction(self, city_snapshot, zone_ids):
        """None or an empty list means every zone."""
        df = city_rates(city_snapshot, "Austin", zone_ids)
        assert df["rate_id"].to_list() == ["a", "b"]

    def test_restricted_to_zones(self, city_snapshot):
        df = city_rates(city_snapshot, "Austin", ["z2"])
        assert df["rate_id"].to_list() == ["b"]

    def test_unknown_city(self, city_snapshot):
        df = city_rates(city_snapshot, "Dallas")
        assert len(df) == 0
        assert df.columns == city_snapshot.columns


class TestCandidateRates:
    """Tests for city-specific replacement."""

    def test_city_rates_replace_general_set(self, rates):
        """A city-specific rate is the only candidate."""
        df = candidate_rates(rates, ["z1", "z2"], city="Austin")
        assert df["rate_id"].to_list() == ["r3"]

    def test_city_lookup_case_insensitive(self, rates):
        df = candidate_rates(rates, ["z1", "z2"], city="AUSTIN")
        assert df["rate_id"].to_list() == ["r3"]

    def test_unknown_city_uses_general_set(self, rates):
        df = candidate_rates(rates, ["z1", "z2"], city="Houston")
        assert df["rate_id"].to_list() == ["r1", "r3", "r2"]

    def test_city_rates_outside_zones_ignored(self, rates):
        """City rates of other zones do not replace the general set."""
        df = candidate_rates(rates, ["z1"], city="Dallas")
        assert df["rate_id"].to_list() == ["r1", "r3"]

    def test_inactive_city_rate_ignored(self, rates):
        """An inactive city-specific rate does not trigger replacement."""
        df = candidate_rates(rates, ["z1"], city="Boston")
        assert df["rate_id"].to_list() == ["r1", "r3"]

    def test_no_zones_no_candidates(self, rates):
        df = candidate_rates(rates, [], city="Austin")
        assert len(df) == 0
        assert df.columns == rates.columns


class TestConfiguredCities:
    """Tests for the configured city listing."""

    def test_distinct_sorted(self, rates):
        assert configured_cities(rates) == ["Austin", "Boston", "Dallas"]

    def test_no_cities(self, make_rate):
        rates = rates_from_records([make_rate("r1")])
        assert configured_cities(rates) == []
