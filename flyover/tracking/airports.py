"""
Flyover Airport Resolver
Maps IATA airport codes to display names using the airportsdata tables.
"""

import logging
from typing import Any, Callable, Dict, Optional

import airportsdata

from .constants import UNKNOWN_COUNTRY

logger = logging.getLogger("flyover.tracking.airports")

AirportLookup = Callable[[str], Optional[Dict[str, Any]]]


class AirportResolver:
    """
    Resolves airport codes to a city (optionally with country code).

    The airportsdata IATA table is loaded on first use. Any lookup failure
    degrades to "Unknown Country"; nothing is raised to the caller.

    Example:
        >>> resolver = AirportResolver()
        >>> resolver.resolve_country('IST')
        'Istanbul'
    """

    def __init__(
        self, lookup: Optional[AirportLookup] = None, include_country: bool = False
    ):
        """
        Initialize resolver.

        Args:
            lookup: Callable returning an airport record for a code, or None.
                    Defaults to the bundled airportsdata IATA table.
            include_country: Append the ISO country code to the city name
        """
        self._lookup = lookup
        self._airports: Optional[Dict[str, Dict[str, Any]]] = None
        self.include_country = include_country

    def _table_lookup(self, code: str) -> Optional[Dict[str, Any]]:
        if self._airports is None:
            self._airports = airportsdata.load("IATA")
            logger.debug("Loaded %d airports", len(self._airports))
        return self._airports.get(code)

    def lookup(self, code: str) -> Optional[Dict[str, Any]]:
        """Return the raw airport record for a code, or None."""
        if self._lookup is not None:
            return self._lookup(code)
        return self._table_lookup(code)

    def resolve_country(self, iata_code: Optional[str]) -> str:
        """
        Resolve an IATA code to a display name.

        Args:
            iata_code: Three-letter IATA code, may be empty or None

        Returns:
            City name, or "Unknown Country" when unresolvable
        """
        if not iata_code:
            return UNKNOWN_COUNTRY

        code = iata_code.strip().upper()
        try:
            airport = self.lookup(code)
        except Exception as e:
            logger.warning("Airport lookup failed for %s: %s", code, e)
            return UNKNOWN_COUNTRY

        if not airport or not airport.get("city"):
            logger.debug("No airport record for %s", code)
            return UNKNOWN_COUNTRY

        if self.include_country and airport.get("country"):
            return f"{airport['city']}, {airport['country']}"
        return airport["city"]
