"""
Unit Tests for the Calculator Script

Run with: pytest shipping_fees/tests/test_calculator.py -v
"""

from shipping_fees.scripts.calculator import run_validate


class TestRunValidate:
    """Tests for --validate reporting."""

    def test_valid_snapshot(self, make_zone, make_rate, capsys):
        """Zone ids are matched after trimming, like the snapshot loader."""
        zones = [make_zone(" z1 ", name="Domestic", labels=["US"])]
        rates = [make_rate("r1", zone_id="z1")]

        assert run_validate(zones, rates) == 0
        assert "problems: 0" in capsys.readouterr().out

    def test_zone_without_id_is_not_a_known_zone(self, make_rate, capsys):
        """A zone missing its id is reported, and cannot be referenced."""
        zones = [{"name": "Domestic", "locationLabels": ["US"]}]
        rates = [make_rate("r1", zone_id="None")]

        assert run_validate(zones, rates) == 1
        out = capsys.readouterr().out
        assert "Domestic: zone id is required" in out
        assert "r1: unknown shipping zone 'None'" in out
