"""
Flyover - Aircraft Proximity Alerts

Watches the sky around a fixed location using live Flightradar24 data and
sends a Telegram message for every aircraft that comes within range.
New aircraft can optionally be read aloud with a generated summary.

Components:
    - tracking: Feed polling, proximity filtering and deduplication
    - alerts: Telegram notifications and spoken narration

Example:
    >>> from flyover import Config
    >>> from flyover.tracking import FlightWatcher
    >>> from flyover.alerts import TelegramNotifier
    >>> config = Config('config.yaml')
    >>> watcher = FlightWatcher(config, notifier=TelegramNotifier.from_config(config))
    >>> watcher.run()
"""

from . import errors
from . import config
from . import tracking
from . import alerts
from .config import Config

FLYOVER_VERSION = "v0.1.0"

__version__ = FLYOVER_VERSION
__license__ = "MIT"

__all__ = [
    "Config",
    "errors",
    "config",
    "tracking",
    "alerts",
]
