"""
Tests for the Flyover airport resolver.
"""

from unittest.mock import Mock, patch

from flyover.tracking.airports import AirportResolver


class TestAirportResolver:
    """Tests for AirportResolver class."""

    def test_known_code(self, resolver):
        assert resolver.resolve_country("IST") == "Istanbul"

    def test_lowercase_code(self, resolver):
        assert resolver.resolve_country("jfk") == "New York"

    def test_empty_code(self, resolver):
        assert resolver.resolve_country("") == "Unknown Country"
        assert resolver.resolve_country(None) == "Unknown Country"

    def test_lookup_returns_none(self):
        """A lookup that finds nothing degrades to the sentinel."""
        resolver = AirportResolver(lookup=lambda code: None)
        assert resolver.resolve_country("XXX") == "Unknown Country"

    def test_lookup_raises(self):
        """Lookup errors never propagate."""
        lookup = Mock(side_effect=RuntimeError("data unavailable"))
        resolver = AirportResolver(lookup=lookup)

        assert resolver.resolve_country("IST") == "Unknown Country"
        lookup.assert_called_once_with("IST")

    def test_record_without_city(self):
        resolver = AirportResolver(lookup=lambda code: {"iata": code, "city": ""})
        assert resolver.resolve_country("ZZZ") == "Unknown Country"

    def test_include_country(self):
        resolver = AirportResolver(
            lookup=lambda code: {"city": "Istanbul", "country": "TR"},
            include_country=True,
        )
        assert resolver.resolve_country("IST") == "Istanbul, TR"

    @patch("flyover.tracking.airports.airportsdata.load")
    def test_table_loaded_once(self, mock_load):
        mock_load.return_value = {"IST": {"city": "Istanbul"}}
        resolver = AirportResolver()

        assert resolver.resolve_country("IST") == "Istanbul"
        assert resolver.resolve_country("JFK") == "Unknown Country"
        mock_load.assert_called_once_with("IATA")
