"""
Unit Tests for Snapshots, Validation and Reference Data

Run with: pytest shipping_fees/tests/test_data.py -v
"""

import json

import pytest

from shipping_fees.data import (
    ZONE_SCHEMA,
    RATE_SCHEMA,
    zones_from_records,
    rates_from_records,
    validate_zone_records,
    validate_rate_records,
    read_records,
    load_zones,
    load_rates,
)
from shipping_fees.errors import ConfigurationError, ShippingError
from shipping_fees.methods import METHOD_NAMES, Free, get_method
from shipping_fees.order import Destination, Order


# =============================================================================
# ZONE SNAPSHOT TESTS
# =============================================================================

class TestZoneRecords:
    """Tests for zone document conversion and validation."""

    def test_schema(self, make_zone):
        df = zones_from_records([make_zone("z1", labels=["US"])])
        assert dict(df.schema) == ZONE_SCHEMA

    def test_labels_trimmed(self, make_zone):
        """Labels are stripped and blanks dropped."""
        df = zones_from_records([make_zone("z1", labels=[" US ", "", "CA"])])
        assert df["location_labels"][0].to_list() == ["US", "CA"]

    def test_mongo_style_id(self):
        df = zones_from_records([{"_id": "abc", "name": "Domestic", "locationLabels": ["US"]}])
        assert df["zone_id"].to_list() == ["abc"]
        assert df["is_active"].to_list() == [True]
        assert df["zone_price"][0] is None

    def test_empty(self):
        df = zones_from_records([])
        assert len(df) == 0
        assert df.columns == list(ZONE_SCHEMA)

    def test_duplicate_name(self, make_zone):
        with pytest.raises(ConfigurationError) as exc_info:
            zones_from_records([make_zone("a", name="Same"), make_zone("b", name="Same")])
        assert exc_info.value.errors == ["Same: zone name must be unique"]

    def test_negative_zone_price(self, make_zone):
        errors = validate_zone_records([make_zone("z1", zone_price=-1)])
        assert errors == ["Z1: zone price cannot be negative"]

    def test_validation_can_be_skipped(self, make_zone):
        df = zones_from_records([make_zone("z1", zone_price=-1)], validate=False)
        assert df["zone_price"][0] == -1.0


# =============================================================================
# RATE SNAPSHOT TESTS
# =============================================================================

class TestRateRecords:
    """Tests for rate document conversion and validation."""

    def test_schema(self, make_rate):
        df = rates_from_records([make_rate("r1")])
        assert dict(df.schema) == RATE_SCHEMA

    def test_conditions_flattened(self, make_rate):
        """Missing minimums become 0, missing maximums stay unbounded."""
        df = rates_from_records([make_rate("r1", conditions={"maxWeight": 30})])
        row = df.row(0, named=True)
        assert row["min_order_value"] == 0.0
        assert row["min_weight"] == 0.0
        assert row["max_order_value"] is None
        assert row["max_weight"] == 30.0

    def test_nested_lists(self, make_rate):
        df = rates_from_records([
            make_rate("r1", method="weight_based", cost=0, brackets=[(0, 1, 5)], cities=[("Austin", None)]),
        ])
        row = df.row(0, named=True)
        assert row["weight_ranges"] == [{"min_weight": 0.0, "max_weight": 1.0, "cost": 5.0}]
        assert row["cities"] == [{"name": "Austin", "cost": None}]

    def test_valid_rates(self, make_rate):
        records = [
            make_rate("a"),
            make_rate("b", method="free", cost=None),
            make_rate("c", method="percentage", cost=5),
            make_rate("d", method="weight_based", cost=0, brackets=[(0, 1, 5)]),
        ]
        assert validate_rate_records(records) == []

    def test_cost_required(self, make_rate):
        errors = validate_rate_records([make_rate("r1", cost=None)])
        assert errors == ["r1: cost is required for flat_rate rates"]

    def test_weight_based_needs_ranges(self, make_rate):
        errors = validate_rate_records([make_rate("r1", method="weight_based", cost=0)])
        assert errors == ["r1: weight ranges are required for weight-based shipping"]

    def test_weight_range_order(self, make_rate):
        errors = validate_rate_records([
            make_rate("r1", method="weight_based", cost=0, brackets=[(5, 1, 3)]),
        ])
        assert errors == ["r1: minimum weight must be less than maximum weight"]

    def test_unknown_method(self, make_rate):
        errors = validate_rate_records([make_rate("r1", method="teleport")])
        assert errors == ["r1: unknown shipping method 'teleport'"]

    def test_unknown_zone(self, make_rate):
        errors = validate_rate_records([make_rate("r1", zone_id="nowhere")], zone_ids={"z1"})
        assert errors == ["r1: unknown shipping zone 'nowhere'"]

    def test_negative_values(self, make_rate):
        errors = validate_rate_records([
            make_rate("r1", cost=-2, cities=[("Austin", -1)], conditions={"minOrderValue": -5}),
        ])
        assert errors == [
            "r1: cost cannot be negative",
            "r1: city cost cannot be negative",
            "r1: min_order_value cannot be negative",
        ]

    def test_all_errors_reported_together(self, make_rate):
        """Every problem is collected into one ConfigurationError."""
        with pytest.raises(ConfigurationError) as exc_info:
            rates_from_records([
                make_rate("r1", cost=None),
                make_rate("r2", method="teleport"),
            ])
        assert len(exc_info.value.errors) == 2
        assert "r1: cost is required" in str(exc_info.value)

    def test_configuration_error_types(self):
        """ConfigurationError is both a ShippingError and a ValueError."""
        error = ConfigurationError(["x"])
        assert isinstance(error, ShippingError)
        assert isinstance(error, ValueError)


# =============================================================================
# REFERENCE DATA TESTS
# =============================================================================

class TestReferenceData:
    """Tests for the bundled default snapshot and loaders."""

    def test_default_zones(self):
        zones = load_zones()
        assert zones["zone_id"].to_list() == ["domestic", "international"]
        assert zones["location_labels"][0].to_list() == ["US"]

    def test_default_rates(self):
        zones = load_zones()
        rates = load_rates(zones=zones)
        assert len(rates) == 4
        assert set(rates["method"].to_list()) <= set(METHOD_NAMES)

    def test_load_from_path(self, tmp_path, make_zone):
        path = tmp_path / "zones.json"
        path.write_text(json.dumps([make_zone("z1", labels=["US"])]))
        assert load_zones(path)["zone_id"].to_list() == ["z1"]

    def test_read_records_requires_array(self, tmp_path):
        path = tmp_path / "zones.json"
        path.write_text(json.dumps({"id": "z1"}))
        with pytest.raises(ValueError, match="expected a JSON array"):
            read_records(path)


# =============================================================================
# PRICING METHOD REGISTRY TESTS
# =============================================================================

class TestMethodRegistry:
    """Tests for pricing method lookup."""

    def test_registered_methods(self):
        assert METHOD_NAMES == ["flat_rate", "weight_based", "percentage", "free"]

    def test_get_method(self):
        assert get_method("free") is Free

    def test_unknown_method(self):
        with pytest.raises(KeyError):
            get_method("teleport")


# =============================================================================
# ORDER CONTEXT TESTS
# =============================================================================

class TestOrder:
    """Tests for destination and order construction."""

    def test_blank_fields_absent(self):
        destination = Destination.of(country=" US ", region="", city="   ")
        assert destination == Destination(country="US", region=None, city=None)

    def test_empty_destination(self):
        assert Destination.of().is_empty()
        assert Destination.of().describe() == "empty destination"

    def test_describe(self):
        assert Destination.of(city="Austin").describe() == "destination(city='Austin')"

    def test_defaults(self):
        order = Order.of(country="US")
        assert order.subtotal == 0.0
        assert order.weight == 0.0

    @pytest.mark.parametrize("field", ["subtotal", "weight"])
    def test_negative_rejected(self, field):
        with pytest.raises(ValueError, match=field):
            Order.of(**{field: -1})
