"""
Flyover Tracking Component

Polls the Flightradar24 feed and picks out aircraft that newly entered the
alert radius.

Main Classes:
    - FlightRadarSource: Live feed client
    - AirportResolver: IATA code to city lookup
    - SeenSet: Bounded record of notified aircraft
    - DetectionCycle: One fetch, filter and enrich pass
    - FlightWatcher: Scheduler running cycles until stopped

Example:
    >>> from flyover.tracking import FlightWatcher
    >>> watcher = FlightWatcher(config)
    >>> watcher.run()
"""

# Core tracking components
from .models import AircraftSnapshot, Detection, Region, ReferenceLocation
from .source import FlightRadarSource
from .airports import AirportResolver
from .seen import SeenSet
from .detector import DetectionCycle
from .watcher import FlightWatcher

# Utilities
from . import utils
from . import constants

__all__ = [
    # Data model
    "AircraftSnapshot",
    "Detection",
    "Region",
    "ReferenceLocation",
    # Main classes
    "FlightRadarSource",
    "AirportResolver",
    "SeenSet",
    "DetectionCycle",
    "FlightWatcher",
    # Modules
    "utils",
    "constants",
]
