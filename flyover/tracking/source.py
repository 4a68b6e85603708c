"""
Flyover Flight Source
Fetches live aircraft positions from the Flightradar24 public feed.
"""

import logging
from typing import Any, List, Optional

import requests

from ..config import Constants, Settings
from ..errors import FlightSourceError
from .constants import (
    FR24_FEED_URL,
    FR24_HEADERS,
    FR24_FEED_PARAMS,
    FEED_LATITUDE,
    FEED_LONGITUDE,
    FEED_HEADING,
    FEED_ALTITUDE,
    FEED_GROUND_SPEED,
    FEED_AIRCRAFT_CODE,
    FEED_REGISTRATION,
    FEED_ORIGIN_IATA,
    FEED_DESTINATION_IATA,
    FEED_NUMBER,
    FEED_CALLSIGN,
    FEED_MIN_LENGTH,
)
from .models import AircraftSnapshot, Region
from .utils import get_bounding_box

logger = logging.getLogger("flyover.tracking.source")


def _text(value: Any) -> Optional[str]:
    """Normalise feed strings: blanks and non-strings become None."""
    if not isinstance(value, str):
        return None
    value = value.strip()
    return value or None


def _number(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def parse_feed_entry(flight_id: str, entry: list) -> Optional[AircraftSnapshot]:
    """
    Parse one Flightradar24 feed entry into a snapshot.

    Args:
        flight_id: Feed key identifying the flight
        entry: Positional field list from the feed

    Returns:
        AircraftSnapshot, or None when the entry is too short to be a flight

    Feed entry format:
        [0] icao24 address      [1] latitude          [2] longitude
        [3] heading (deg)       [4] altitude (ft)     [5] ground speed (kt)
        [6] squawk              [7] radar             [8] aircraft code
        [9] registration        [10] timestamp        [11] origin IATA
        [12] destination IATA   [13] flight number    [14] on ground
        [15] vertical speed     [16] callsign         [17] -
        [18] airline ICAO
    """
    if not isinstance(entry, list) or len(entry) < FEED_MIN_LENGTH:
        return None

    number = _text(entry[FEED_NUMBER])

    return AircraftSnapshot(
        id=str(flight_id),
        latitude=_number(entry[FEED_LATITUDE]),
        longitude=_number(entry[FEED_LONGITUDE]),
        altitude=_number(entry[FEED_ALTITUDE]),
        ground_speed=_number(entry[FEED_GROUND_SPEED]),
        heading=_number(entry[FEED_HEADING]),
        registration=_text(entry[FEED_REGISTRATION]),
        number=number,
        callsign=_text(entry[FEED_CALLSIGN]),
        airline_iata=number[:2] if number and len(number) >= 2 else None,
        origin_airport_iata=_text(entry[FEED_ORIGIN_IATA]),
        destination_airport_iata=_text(entry[FEED_DESTINATION_IATA]),
        aircraft_code=_text(entry[FEED_AIRCRAFT_CODE]),
    )


class FlightRadarSource:
    """Reads aircraft snapshots for a region from the Flightradar24 feed."""

    def __init__(
        self,
        feed_url: str = FR24_FEED_URL,
        timeout: float = Settings.API_TIMEOUT_SECONDS,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the feed client.

        Args:
            feed_url: Feed endpoint
            timeout: HTTP timeout in seconds
            session: Optional requests session (a new one is created if None)
        """
        self.feed_url = feed_url
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update(FR24_HEADERS)
        self.rate_limit_count = 0

    def get_region_bounds(self, lat: float, lon: float, radius_m: float) -> Region:
        """
        Compute the search region around a point.

        Args:
            lat: Center latitude in degrees
            lon: Center longitude in degrees
            radius_m: Radius in meters

        Returns:
            Region enclosing the circle
        """
        lat_min, lon_min, lat_max, lon_max = get_bounding_box(
            lat, lon, radius_m / Constants.METERS_PER_KM
        )
        return Region(north=lat_max, south=lat_min, west=lon_min, east=lon_max)

    def get_snapshots(self, region: Region) -> List[AircraftSnapshot]:
        """
        Fetch current aircraft inside a region.

        Args:
            region: Search region

        Returns:
            Snapshots in feed order

        Raises:
            FlightSourceError: On network errors, HTTP errors or a malformed body
        """
        params = dict(FR24_FEED_PARAMS)
        params["bounds"] = region.to_bounds_param()

        try:
            response = self.session.get(
                self.feed_url, params=params, timeout=self.timeout
            )

            if response.status_code == 429:
                self.rate_limit_count += 1
                raise FlightSourceError(
                    f"Rate limited by Flightradar24 (429), hit #{self.rate_limit_count}"
                )

            response.raise_for_status()
            self.rate_limit_count = 0
            data = response.json()

        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else "?"
            raise FlightSourceError(f"HTTP Error {status}: {e}") from e

        except requests.exceptions.Timeout as e:
            raise FlightSourceError(
                f"Feed request timeout after {self.timeout}s"
            ) from e

        except requests.exceptions.RequestException as e:
            raise FlightSourceError(f"Error fetching feed: {e}") from e

        except ValueError as e:
            raise FlightSourceError(f"Error parsing feed response: {e}") from e

        if not isinstance(data, dict):
            raise FlightSourceError(
                f"Unexpected feed payload type: {type(data).__name__}"
            )

        snapshots = []
        for flight_id, entry in data.items():
            # Non-list values are feed metadata (full_count, version, stats)
            snapshot = parse_feed_entry(flight_id, entry)
            if snapshot is not None:
                snapshots.append(snapshot)

        logger.debug("Feed returned %d aircraft", len(snapshots))
        return snapshots

    def close(self) -> None:
        self.session.close()
