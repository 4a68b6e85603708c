"""
Flyover Alerts Component

Delivers detections to people: a Telegram message per cycle, and an
optional spoken summary per aircraft.

Main Classes:
    - TelegramNotifier: Bot API message delivery
    - GeminiSummarizer: Generative text description of a detection
    - SpeechSynthesizer: Command-line text-to-speech
    - Narrator: Background worker chaining summary and speech
"""

from .formatter import format_detection, format_message, split_message
from .telegram import TelegramNotifier
from .summarizer import GeminiSummarizer
from .speech import SpeechSynthesizer
from .narrator import Narrator

__all__ = [
    "format_detection",
    "format_message",
    "split_message",
    "TelegramNotifier",
    "GeminiSummarizer",
    "SpeechSynthesizer",
    "Narrator",
]
