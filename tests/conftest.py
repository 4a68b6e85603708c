"""
Shared fixtures for Flyover tests.
"""

import sys
from pathlib import Path

import pytest

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from flyover.config import Config
from flyover.tracking.airports import AirportResolver
from flyover.tracking.models import AircraftSnapshot, ReferenceLocation, Region

AIRPORTS = {
    "IST": {"iata": "IST", "city": "Istanbul", "country": "TR"},
    "JFK": {"iata": "JFK", "city": "New York", "country": "US"},
    "SAW": {"iata": "SAW", "city": "Istanbul", "country": "TR"},
}


class FakeSource:
    """Flight source returning one prepared batch per call."""

    def __init__(self, *batches, error=None):
        self.batches = list(batches)
        self.error = error
        self.regions = []

    def get_region_bounds(self, lat, lon, radius_m):
        return Region(north=lat + 1, south=lat - 1, west=lon - 1, east=lon + 1)

    def get_snapshots(self, region):
        self.regions.append(region)
        if self.error is not None:
            raise self.error
        if not self.batches:
            return []
        if len(self.batches) == 1:
            return list(self.batches[0])
        return list(self.batches.pop(0))


@pytest.fixture
def location():
    """Reference point about 4 km east of tk123 (17 km radius)."""
    return ReferenceLocation(latitude=40.0, longitude=29.05, radius_m=17000)


@pytest.fixture
def resolver():
    """Airport resolver backed by a small in-memory table."""
    return AirportResolver(lookup=AIRPORTS.get)


@pytest.fixture
def tk123():
    """Aircraft about 4 km west of the reference point, heading north."""
    return AircraftSnapshot(
        id="A1",
        latitude=40.0,
        longitude=29.0,
        altitude=3500,
        ground_speed=210,
        heading=10,
        registration="TC-JJA",
        number="TK123",
        callsign="TK123",
        airline_iata="TK",
        origin_airport_iata="IST",
        destination_airport_iata="JFK",
        aircraft_code="B77W",
    )


@pytest.fixture
def config():
    """Configuration with a fixed location and no environment overrides."""
    config = Config(use_env=False)
    config.set("location.latitude", 40.0)
    config.set("location.longitude", 29.05)
    config.set("tracking.interval_seconds", 5)
    return config
