"""
Flyover Configuration Management

This module provides configuration management for the Flyover proximity
alert system. It includes physical constants, tuning settings, and runtime
configuration loaded from YAML files and the process environment.
"""

import logging
import os
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

from .errors import ConfigError

logger = logging.getLogger("flyover.config")

# =============================================================================
# Physical Constants
# =============================================================================


class Constants:
    """Physical constants representing real-world measurements."""

    EARTH_RADIUS_KM: float = 6371.0  # Mean earth radius for distance calculations
    KM_PER_DEGREE_LAT: float = 111.32  # Distance per degree latitude at equator
    METERS_PER_KM: float = 1000.0
    DEGREES_PER_DIRECTION: float = 45.0  # 8-point compass sector width


# =============================================================================
# Tracking & Alert Settings
# =============================================================================


class Settings:
    """Fixed defaults for polling, alerting and narration."""

    # --- Polling ---
    CHECK_INTERVAL_SECONDS: float = 5.0  # Delay between detection cycles
    MAX_RADIUS_METERS: int = 17000  # Alert radius around the reference point
    API_TIMEOUT_SECONDS: float = 10.0  # HTTP timeout for every outbound call

    # --- Deduplication ---
    SEEN_MAX_SIZE: int = 10000  # Oldest identifiers are evicted beyond this
    SEEN_FORGET_AFTER_SECONDS: Optional[float] = None  # None = never re-notify

    # --- Narration ---
    NARRATION_DELAY_SECONDS: float = 4.0  # Pause between narrated aircraft
    SPEECH_ENGINE: str = "espeak-ng"
    SPEECH_VOICE: Optional[str] = None  # Engine default voice
    SPEECH_RATE: float = 0.8  # Multiplier of the engine's base speed

    # --- Statistics ---
    STATS_EVERY_N_SCANS: int = 10

    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


# Environment variables that override YAML values, keyed by dot path.
ENV_OVERRIDES: Dict[str, str] = {
    "TELEGRAM_BOT_TOKEN": "telegram.bot_token",
    "TELEGRAM_CHAT_ID": "telegram.chat_id",
    "GEMINI_API_KEY": "summarizer.api_key",
    "GEMINI_API_URL": "summarizer.api_url",
    "LATITUDE": "location.latitude",
    "LONGITUDE": "location.longitude",
}

_FLOAT_KEYS = {"location.latitude", "location.longitude"}


# =============================================================================
# Runtime Configuration
# =============================================================================


class Config:
    """
    Runtime configuration manager for Flyover.

    Loads settings from a YAML file (or defaults), then applies environment
    overrides for secrets and the reference location. Provides
    property-based access to common settings.

    Example:
        >>> config = Config('config.yaml')
        >>> print(f"Watching {config.location_name}")
        >>> print(f"Home: {config.home_latitude}°N, {config.home_longitude}°E")
    """

    def __init__(
        self,
        config_path: Optional[str] = None,
        env_file: Optional[str] = None,
        use_env: bool = True,
    ) -> None:
        """
        Initialize configuration.

        Args:
            config_path: Path to YAML configuration file. If None or missing,
                        uses default configuration.
            env_file: Optional dotenv file loaded before reading overrides.
            use_env: Apply environment variable overrides.
        """
        self.config_path = config_path
        self._config: Dict[str, Any] = self._load_config()

        if use_env:
            if env_file is not None:
                load_dotenv(env_file)
            self._apply_env_overrides(os.environ)

    def _load_config(self) -> Dict[str, Any]:
        """
        Load configuration from YAML file or return defaults.

        Returns:
            Configuration dictionary
        """
        if self.config_path is None or not os.path.exists(self.config_path):
            return self._get_default_config()

        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                config = yaml.safe_load(f)
                if self._validate_config(config):
                    return self._merge_defaults(config)
                else:
                    logger.warning("Invalid config structure, using defaults")
                    return self._get_default_config()
        except (OSError, yaml.YAMLError) as e:
            logger.warning("Could not load config file: %s", e)
            return self._get_default_config()

    def _validate_config(self, config: Dict[str, Any]) -> bool:
        """
        Validate configuration structure and required fields.

        The location section may omit coordinates (they can come from the
        environment), but any value present must be numeric and in range.

        Args:
            config: Configuration dictionary to validate

        Returns:
            True if valid, False otherwise
        """
        try:
            assert isinstance(config, dict)

            location = config.get("location") or {}
            assert isinstance(location, dict)
            for key, bound in (("latitude", 90), ("longitude", 180)):
                value = location.get(key)
                if value is not None:
                    assert isinstance(value, (float, int))
                    assert -bound <= value <= bound

            tracking = config.get("tracking") or {}
            assert isinstance(tracking, dict)
            if "radius_meters" in tracking:
                assert isinstance(tracking["radius_meters"], (float, int))
                assert tracking["radius_meters"] > 0
            if "interval_seconds" in tracking:
                assert isinstance(tracking["interval_seconds"], (float, int))
                assert tracking["interval_seconds"] > 0

            return True
        except (AssertionError, KeyError, TypeError):
            return False

    def _get_default_config(self) -> Dict[str, Any]:
        """
        Get default configuration.

        Returns:
            Default configuration dictionary
        """
        return {
            "location": {
                "latitude": None,
                "longitude": None,
                "name": "Home",
            },
            "tracking": {
                "radius_meters": Settings.MAX_RADIUS_METERS,
                "interval_seconds": Settings.CHECK_INTERVAL_SECONDS,
                "seen_max_size": Settings.SEEN_MAX_SIZE,
                "forget_after_seconds": Settings.SEEN_FORGET_AFTER_SECONDS,
            },
            "api": {
                "timeout_seconds": Settings.API_TIMEOUT_SECONDS,
            },
            "telegram": {
                "bot_token": None,
                "chat_id": None,
                "parse_mode": "Markdown",
            },
            "summarizer": {
                "api_key": None,
                "api_url": None,
                "instruction": None,
            },
            "narration": {
                "enabled": True,
                "delay_seconds": Settings.NARRATION_DELAY_SECONDS,
                "engine": Settings.SPEECH_ENGINE,
                "voice": Settings.SPEECH_VOICE,
                "rate": Settings.SPEECH_RATE,
            },
            "logging": {
                "level": "INFO",
                "format": Settings.LOG_FORMAT,
            },
        }

    def _merge_defaults(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """Fill sections missing from a user config with default values."""
        merged = self._get_default_config()
        for section, values in config.items():
            if isinstance(values, dict) and isinstance(merged.get(section), dict):
                merged[section].update(values)
            else:
                merged[section] = values
        return merged

    def _apply_env_overrides(self, environ) -> None:
        """Copy known environment variables over the loaded values."""
        for env_name, key in ENV_OVERRIDES.items():
            raw = environ.get(env_name)
            if raw is None or raw == "":
                continue
            if key in _FLOAT_KEYS:
                try:
                    self.set(key, float(raw))
                except ValueError:
                    logger.warning("Ignoring non-numeric %s=%r", env_name, raw)
            else:
                self.set(key, raw)

    def validate_location(self) -> None:
        """
        Ensure a usable reference location is configured.

        Raises:
            ConfigError: If latitude/longitude are missing or out of range
        """
        lat = self.get("location.latitude")
        lon = self.get("location.longitude")
        if lat is None or lon is None:
            raise ConfigError(
                "Reference location missing: set LATITUDE and LONGITUDE "
                "or location.latitude / location.longitude in the config file"
            )
        if not (-90 <= float(lat) <= 90 and -180 <= float(lon) <= 180):
            raise ConfigError(f"Reference location out of range: {lat}, {lon}")

    # --- Property Accessors ---

    @property
    def home_latitude(self) -> float:
        """Get reference latitude in degrees."""
        return float(self._config["location"]["latitude"])

    @property
    def home_longitude(self) -> float:
        """Get reference longitude in degrees."""
        return float(self._config["location"]["longitude"])

    @property
    def location_name(self) -> str:
        """Get descriptive location name."""
        return self._config["location"].get("name") or "Home"

    @property
    def radius_meters(self) -> float:
        """Get alert radius in meters."""
        return float(self._config["tracking"]["radius_meters"])

    @property
    def radius_km(self) -> float:
        """Get alert radius in kilometers."""
        return self.radius_meters / Constants.METERS_PER_KM

    @property
    def check_interval(self) -> float:
        """Get delay between detection cycles in seconds."""
        return float(self._config["tracking"]["interval_seconds"])

    @property
    def seen_max_size(self) -> int:
        return int(self.get("tracking.seen_max_size", Settings.SEEN_MAX_SIZE))

    @property
    def forget_after_seconds(self) -> Optional[float]:
        value = self.get("tracking.forget_after_seconds")
        return float(value) if value is not None else None

    @property
    def api_timeout(self) -> float:
        return float(self.get("api.timeout_seconds", Settings.API_TIMEOUT_SECONDS))

    @property
    def telegram_bot_token(self) -> Optional[str]:
        return self.get("telegram.bot_token")

    @property
    def telegram_chat_id(self) -> Optional[str]:
        value = self.get("telegram.chat_id")
        return str(value) if value is not None else None

    @property
    def summarizer_api_key(self) -> Optional[str]:
        return self.get("summarizer.api_key")

    @property
    def summarizer_api_url(self) -> Optional[str]:
        return self.get("summarizer.api_url")

    @property
    def narration_enabled(self) -> bool:
        """Narration runs only when enabled and a summarizer is configured."""
        return bool(self.get("narration.enabled", False)) and bool(
            self.summarizer_api_url and self.summarizer_api_key
        )

    # --- Generic Accessors ---

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value using dot notation.

        Args:
            key: Dot-separated key path (e.g., 'location.latitude')
            default: Default value if key not found

        Returns:
            Configuration value or default

        Example:
            >>> config.get('tracking.radius_meters', 17000)
            17000
        """
        keys = key.split(".")
        value = self._config

        for k in keys:
            if isinstance(value, dict):
                value = value.get(k)
                if value is None:
                    return default
            else:
                return default

        return value

    def set(self, key: str, value: Any) -> None:
        """
        Set configuration value using dot notation.

        Args:
            key: Dot-separated key path (e.g., 'location.latitude')
            value: Value to set

        Example:
            >>> config.set('tracking.radius_meters', 20000)
        """
        keys = key.split(".")
        config = self._config

        # Navigate to parent of target key
        for k in keys[:-1]:
            if not isinstance(config.get(k), dict):
                config[k] = {}
            config = config[k]

        config[keys[-1]] = value


def setup_logging(config: Config, level: Optional[str] = None) -> None:
    """
    Configure root logging from the ``logging`` config section.

    Args:
        config: Loaded configuration
        level: Optional level name overriding the configured one
    """
    level_name = (level or config.get("logging.level", "INFO")).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format=config.get("logging.format", Settings.LOG_FORMAT),
    )
