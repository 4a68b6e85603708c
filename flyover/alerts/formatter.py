"""
Flyover Message Formatting
Renders detections as Telegram Markdown text.
"""

from typing import Iterable, List, Sequence

from ..tracking.models import Detection

TELEGRAM_MAX_MESSAGE_LENGTH = 4096
BLOCK_SEPARATOR = "\n\n"


def _or_unknown(value) -> str:
    # Zero altitude/speed is reported as unknown, as is a missing value
    if not value:
        return "?"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def format_detection(detection: Detection) -> str:
    """
    Format one detection as a two-line block.

    Example:
        ✈️ *TK123* — IST (Istanbul) → JFK (New York)
        Distance: 4 km | Alt: 3500 ft | Speed: 210 knots | Heading: North
    """
    return (
        f"✈️ *{detection.callsign}* — {detection.from_iata} ({detection.from_country})"
        f" → {detection.to_iata} ({detection.to_country})\n"
        f"Distance: {detection.distance} km | Alt: {_or_unknown(detection.altitude)} ft"
        f" | Speed: {_or_unknown(detection.speed)} knots | Heading: {detection.direction}"
    )


def format_message(detections: Iterable[Detection]) -> str:
    """Join detection blocks separated by a blank line."""
    return BLOCK_SEPARATOR.join(format_detection(d) for d in detections)


def split_message(
    detections: Sequence[Detection], max_length: int = TELEGRAM_MAX_MESSAGE_LENGTH
) -> List[str]:
    """
    Format detections into one or more messages within a length limit.

    Blocks are never split; a single block longer than the limit is sent
    on its own.
    """
    messages = []
    current = ""

    for detection in detections:
        block = format_detection(detection)
        candidate = f"{current}{BLOCK_SEPARATOR}{block}" if current else block
        if current and len(candidate) > max_length:
            messages.append(current)
            current = block
        else:
            current = candidate

    if current:
        messages.append(current)
    return messages
