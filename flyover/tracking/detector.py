"""
Flyover Detection Cycle
One polling pass: fetch, filter by radius, deduplicate, enrich.
"""

import logging
from typing import List, Optional

from .airports import AirportResolver
from .constants import (
    UNKNOWN_FLIGHT,
    UNKNOWN_AIRCRAFT,
    UNKNOWN_REGISTRATION,
    UNKNOWN_AIRLINE,
    UNKNOWN_AIRPORT,
)
from .models import AircraftSnapshot, Detection, ReferenceLocation
from .seen import SeenSet
from .utils import haversine_distance, classify_direction, round_half_up

logger = logging.getLogger("flyover.tracking.detector")


class DetectionCycle:
    """Turns a feed snapshot into the list of newly observed aircraft."""

    def __init__(
        self,
        source,
        location: ReferenceLocation,
        seen: Optional[SeenSet] = None,
        resolver: Optional[AirportResolver] = None,
    ):
        """
        Initialize detection cycle.

        Args:
            source: Flight source providing get_region_bounds/get_snapshots
            location: Reference point and radius
            seen: Identifiers already notified (shared across cycles)
            resolver: Airport code resolver
        """
        self.source = source
        self.location = location
        self.seen = seen if seen is not None else SeenSet()
        self.resolver = resolver or AirportResolver()
        self.last_fetch_count = 0
        self.last_fetch_failed = False

    def fetch(self) -> Optional[List[AircraftSnapshot]]:
        """
        Fetch snapshots for the configured region.

        Returns:
            Snapshots, or None when the fetch failed
        """
        try:
            region = self.source.get_region_bounds(
                self.location.latitude, self.location.longitude, self.location.radius_m
            )
            snapshots = list(self.source.get_snapshots(region))
        except Exception as e:
            logger.error("❌ Error fetching flights: %s", e)
            return None

        return snapshots

    def distance_to(self, snapshot: AircraftSnapshot) -> float:
        """Distance in km from the reference point to a positioned snapshot."""
        return haversine_distance(
            snapshot.latitude,
            snapshot.longitude,
            self.location.latitude,
            self.location.longitude,
        )

    def build_detection(self, snapshot: AircraftSnapshot, distance: float) -> Detection:
        """
        Enrich an in-range snapshot for display.

        Args:
            snapshot: Aircraft snapshot with a position
            distance: Distance from the reference point in km

        Returns:
            Detection with placeholders for missing fields
        """
        return Detection(
            id=snapshot.id,
            callsign=snapshot.callsign or snapshot.number or UNKNOWN_FLIGHT,
            aircraft=snapshot.aircraft_code or UNKNOWN_AIRCRAFT,
            registration=snapshot.registration or UNKNOWN_REGISTRATION,
            airline=snapshot.airline_iata or UNKNOWN_AIRLINE,
            from_iata=snapshot.origin_airport_iata or UNKNOWN_AIRPORT,
            to_iata=snapshot.destination_airport_iata or UNKNOWN_AIRPORT,
            from_country=self.resolver.resolve_country(snapshot.origin_airport_iata),
            to_country=self.resolver.resolve_country(snapshot.destination_airport_iata),
            distance=round_half_up(distance),
            altitude=snapshot.altitude,
            speed=snapshot.ground_speed,
            direction=classify_direction(snapshot.heading),
        )

    def process_snapshots(self, snapshots: List[AircraftSnapshot]) -> List[Detection]:
        """
        Filter and enrich snapshots, marking each new aircraft as seen.

        Args:
            snapshots: Snapshots in feed order

        Returns:
            New detections in snapshot order
        """
        radius_km = self.location.radius_km
        detections = []

        for snapshot in snapshots:
            if not snapshot.has_position:
                continue

            distance = self.distance_to(snapshot)
            if distance > radius_km:
                continue

            if self.seen.has_seen(snapshot.id):
                self.seen.touch(snapshot.id)
                continue

            detections.append(self.build_detection(snapshot, distance))
            # Marked before any notification so a failed send is never repeated
            self.seen.mark_seen(snapshot.id)

        self.seen.expire()
        return detections

    def run(self) -> List[Detection]:
        """
        Run one detection cycle.

        Returns:
            New detections, empty when the fetch failed
        """
        snapshots = self.fetch()
        self.last_fetch_failed = snapshots is None
        if snapshots is None:
            self.last_fetch_count = 0
            return []

        self.last_fetch_count = len(snapshots)
        return self.process_snapshots(snapshots)
