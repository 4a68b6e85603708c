"""Flyover exceptions."""


class FlyoverError(Exception):
    """Base exception for all Flyover errors."""


class ConfigError(FlyoverError):
    """Raised when the runtime configuration is unusable."""


class FlightSourceError(FlyoverError):
    """Raised when the flight feed cannot be fetched or parsed."""


class NotificationError(FlyoverError):
    """Raised when a message could not be delivered to Telegram."""

    def __init__(self, message: str, status_code=None):
        self.status_code = status_code
        super().__init__(message)


class SummarizerError(FlyoverError):
    """Raised when the text summarizer returns no usable text."""


class SpeechError(FlyoverError):
    """Raised when the speech synthesizer fails to speak."""
