"""
Flyover Tracking Constants
Constants used by the detection loop and the flight feed client.
"""

# Flightradar24 feed
FR24_FEED_URL = "https://data-cloud.flightradar24.com/zones/fcgi/feed.js"
FR24_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0 Safari/537.36"
    ),
    "Accept": "application/json",
    "Origin": "https://www.flightradar24.com",
    "Referer": "https://www.flightradar24.com/",
}
FR24_FEED_PARAMS = {
    "faa": "1",
    "satellite": "1",
    "mlat": "1",
    "flarm": "1",
    "adsb": "1",
    "gnd": "1",
    "air": "1",
    "vehicles": "1",
    "estimated": "1",
    "maxage": "14400",
    "gliders": "1",
    "stats": "1",
    "limit": "5000",
}

# Feed entry field positions
FEED_ICAO24 = 0
FEED_LATITUDE = 1
FEED_LONGITUDE = 2
FEED_HEADING = 3
FEED_ALTITUDE = 4
FEED_GROUND_SPEED = 5
FEED_AIRCRAFT_CODE = 8
FEED_REGISTRATION = 9
FEED_ORIGIN_IATA = 11
FEED_DESTINATION_IATA = 12
FEED_NUMBER = 13
FEED_CALLSIGN = 16
FEED_MIN_LENGTH = 17

# Compass labels, clockwise from north in 45 degree sectors
DIRECTIONS = [
    "North",
    "North-East",
    "East",
    "South-East",
    "South",
    "South-West",
    "West",
    "North-West",
]

# Placeholder values for missing snapshot fields
UNKNOWN_DIRECTION = "unknown direction"
UNKNOWN_COUNTRY = "Unknown Country"
UNKNOWN_FLIGHT = "Unknown Flight"
UNKNOWN_AIRCRAFT = "N/A"
UNKNOWN_REGISTRATION = "No Reg"
UNKNOWN_AIRLINE = "Unknown"
UNKNOWN_AIRPORT = "?"
