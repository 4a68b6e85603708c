"""
Flyover Data Model
Per-cycle aircraft snapshots, detections and the fixed reference location.
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional

from ..config import Constants


@dataclass(frozen=True)
class ReferenceLocation:
    """Fixed observation point and alert radius."""

    latitude: float
    longitude: float
    radius_m: float

    @property
    def radius_km(self) -> float:
        return self.radius_m / Constants.METERS_PER_KM

    @classmethod
    def from_config(cls, config) -> "ReferenceLocation":
        return cls(
            latitude=config.home_latitude,
            longitude=config.home_longitude,
            radius_m=config.radius_meters,
        )


@dataclass(frozen=True)
class Region:
    """Rectangular search area handed to the flight feed."""

    north: float
    south: float
    west: float
    east: float

    def to_bounds_param(self) -> str:
        """Render as the feed's "north,south,west,east" bounds string."""
        return f"{self.north:.4f},{self.south:.4f},{self.west:.4f},{self.east:.4f}"


@dataclass(frozen=True)
class AircraftSnapshot:
    """One polling pass's reported state of an aircraft."""

    id: str
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    altitude: Optional[float] = None  # feet
    ground_speed: Optional[float] = None  # knots
    heading: Optional[float] = None  # degrees
    registration: Optional[str] = None
    number: Optional[str] = None
    callsign: Optional[str] = None
    airline_iata: Optional[str] = None
    origin_airport_iata: Optional[str] = None
    destination_airport_iata: Optional[str] = None
    aircraft_code: Optional[str] = None

    @property
    def has_position(self) -> bool:
        return self.latitude is not None and self.longitude is not None


@dataclass(frozen=True)
class Detection:
    """A newly observed in-range aircraft, enriched for display."""

    id: str
    callsign: str
    aircraft: str
    registration: str
    airline: str
    from_iata: str
    to_iata: str
    from_country: str
    to_country: str
    distance: int  # km, rounded
    altitude: Optional[float]
    speed: Optional[float]
    direction: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
